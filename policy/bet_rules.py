"""
Local bet-amount validation.

Checks run in a fixed order so a bad amount always reports the same reason:
  1. amount is an integer number of minor units
  2. amount is a whole multiple of stepBet
  3. minBet <= amount <= maxBet
  4. amount is one of betLevels (only when level enforcement is on)

A failed check costs nothing: the amount is rejected before any request is sent.
The policy itself is trusted as sent by the RGS; only the amount is checked.
"""

from __future__ import annotations

from models.wallet import BetPolicy
from rgs.errors import InvalidBetAmount


def is_step_multiple(amount: int, policy: BetPolicy) -> bool:
    return amount % policy.step_bet == 0


def in_range(amount: int, policy: BetPolicy) -> bool:
    return policy.min_bet <= amount <= policy.max_bet


def is_bet_level(amount: int, policy: BetPolicy) -> bool:
    return amount in policy.bet_levels


def validate_bet_amount(amount: int, policy: BetPolicy, enforce_bet_levels: bool = True) -> None:
    """Raise InvalidBetAmount naming the first constraint the amount violates."""
    # bool is an int subclass
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidBetAmount(
            amount,
            "type",
            f"Bet amount must be an integer number of minor units, got {type(amount).__name__}",
        )
    if not is_step_multiple(amount, policy):
        raise InvalidBetAmount(
            amount, "step", f"Bet amount must be a multiple of {policy.step_bet}"
        )
    if not in_range(amount, policy):
        raise InvalidBetAmount(
            amount,
            "range",
            f"Bet amount must be between min bet ({policy.min_bet}) "
            f"and max bet ({policy.max_bet})",
        )
    if enforce_bet_levels and not is_bet_level(amount, policy):
        levels = ", ".join(str(level) for level in policy.bet_levels)
        raise InvalidBetAmount(
            amount,
            "level",
            f"Bet amount must be one of the following levels: {levels}. "
            "Bet level enforcement can be disabled with enforce_bet_levels=False.",
        )


def nearest_bet_level(amount: int, policy: BetPolicy) -> int:
    """
    Closest permitted level to amount (ties go to the lower level).
    Falls back to default_bet_level when the policy lists no levels.
    """
    if not policy.bet_levels:
        return policy.default_bet_level
    return min(policy.bet_levels, key=lambda level: (abs(level - amount), level))
