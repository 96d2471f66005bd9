"""
Wallet data models.

All amounts are integers in RGS minor units (1 major unit = 1_000_000).
Everything here is immutable: the client only ever replaces a cached value
with a freshly parsed one from the server, never edits it in place.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Literal, get_args

Currency = Literal[
    "USD", "CAD", "JPY", "EUR", "RUB", "CNY", "PHP", "INR", "IDR", "KRW", "BRL",
    "MXN", "DKK", "PLN", "VND", "TRY", "CLP", "ARS", "PEN",
    "XGC",  # Stake US Gold Coin
    "XSC",  # Stake US Stake Cash
]

CURRENCIES: frozenset[str] = frozenset(get_args(Currency))


@dataclass(frozen=True, slots=True)
class Balance:
    amount: int            # Minor units
    currency: Currency


@dataclass(frozen=True, slots=True)
class BetPolicy:
    """Bet limits declared by the RGS at authenticate. Fixed for the session."""
    min_bet: int
    max_bet: int
    step_bet: int
    default_bet_level: int
    bet_levels: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class JurisdictionFlags:
    social_casino: bool
    disabled_fullscreen: bool
    disabled_turbo: bool
    disabled_super_turbo: bool
    disabled_autoplay: bool
    disabled_slamstop: bool
    disabled_spacebar: bool
    disabled_buy_feature: bool
    display_net_position: bool
    display_rtp: bool
    display_session_timer: bool
    minimum_round_duration: float  # Seconds


@dataclass(frozen=True, slots=True)
class Round:
    """
    Server-defined round. The client only reads `active`;
    `state` is the opaque game outcome payload passed through untouched.
    """
    bet_id: int
    active: bool
    mode: str
    amount: int | None = None
    payout: int | None = None
    payout_multiplier: float | None = None
    event: str | None = None
    state: Any = None


@dataclass(frozen=True, slots=True)
class AuthenticateResult:
    balance: Balance
    config: BetPolicy
    jurisdiction_flags: JurisdictionFlags
    round: Round | None


@dataclass(frozen=True, slots=True)
class PlayResult:
    balance: Balance
    round: Round
