"""
Notifications published by the SessionCoordinator.
Frozen since they cross into listener code the coordinator does not control.
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field

from models.wallet import Balance


@dataclass(frozen=True, slots=True)
class BalanceUpdated:
    balance: Balance
    emitted_at_ns: int = field(default_factory=time.monotonic_ns)


@dataclass(frozen=True, slots=True)
class RoundActiveChanged:
    active: bool
    emitted_at_ns: int = field(default_factory=time.monotonic_ns)
