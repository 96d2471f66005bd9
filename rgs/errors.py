"""
Wallet client error taxonomy.

Local errors (NotAuthenticated, RoundAlreadyActive, InvalidBetAmount) are
raised before any network call is made. RemoteRejected carries whatever the
RGS sent back so callers can inspect it; nothing is retried automatically.
"""

from __future__ import annotations
from typing import Any


class WalletError(Exception):
    """Base class for every error raised by the RGS session client."""


class NotAuthenticated(WalletError):
    def __init__(self) -> None:
        super().__init__("Client is not authenticated, please call authenticate()")


class RoundAlreadyActive(WalletError):
    def __init__(self) -> None:
        super().__init__(
            "A round is already active, please call end_round() before starting a new round"
        )


class InvalidBetAmount(WalletError):
    """
    Bet amount failed a local policy check.

    constraint is one of "type", "step", "range" or "level".
    """

    def __init__(self, amount: int, constraint: str, message: str) -> None:
        super().__init__(message)
        self.amount = amount
        self.constraint = constraint


class RemoteRejected(WalletError):
    """The RGS answered with a non-2xx status. payload is the parsed JSON body, or raw text."""

    def __init__(self, path: str, status: int, payload: Any) -> None:
        super().__init__(f"RGS rejected {path} with status {status}: {payload!r}")
        self.path = path
        self.status = status
        self.payload = payload


class MalformedResponse(WalletError):
    """A 2xx response whose body could not be parsed into the expected shape."""

    def __init__(self, path: str, detail: str, payload: Any = None) -> None:
        super().__init__(f"Malformed RGS response from {path}: {detail}")
        self.path = path
        self.payload = payload


class UnsupportedFormFactor(WalletError, ValueError):
    def __init__(self, device: str) -> None:
        super().__init__(f"Unsupported device type: {device}")
        self.device = device


class MissingIdentity(WalletError, ValueError):
    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is not set")
        self.field = field
