"""
Translates RGS JSON bodies into wallet models.

Every parser either returns a fully built object or raises MalformedResponse;
the coordinator parses the whole response before touching any cached state.
"""

from __future__ import annotations
from typing import Any

from models.wallet import (
    CURRENCIES,
    AuthenticateResult,
    Balance,
    BetPolicy,
    JurisdictionFlags,
    PlayResult,
    Round,
)
from rgs.errors import MalformedResponse

# wire name -> JurisdictionFlags field
_JURISDICTION_FLAGS = {
    "socialCasino": "social_casino",
    "disabledFullscreen": "disabled_fullscreen",
    "disabledTurbo": "disabled_turbo",
    "disabledSuperTurbo": "disabled_super_turbo",
    "disabledAutoplay": "disabled_autoplay",
    "disabledSlamstop": "disabled_slamstop",
    "disabledSpacebar": "disabled_spacebar",
    "disabledBuyFeature": "disabled_buy_feature",
    "displayNetPosition": "display_net_position",
    "displayRTP": "display_rtp",
    "displaySessionTimer": "display_session_timer",
}


def _section(raw: Any, key: str, path: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise MalformedResponse(path, "expected a JSON object", raw)
    value = raw.get(key)
    if not isinstance(value, dict):
        raise MalformedResponse(path, f"'{key}' is missing or not an object", raw)
    return value


def _as_int(value: Any, label: str, path: str, raw: Any) -> int:
    # bool is an int subclass; a flag is never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(path, f"'{label}' is not a number", raw)
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedResponse(path, f"'{label}' is not a whole number of minor units", raw)
        value = int(value)
    return value


def _int(raw: dict[str, Any], key: str, path: str) -> int:
    return _as_int(raw.get(key), key, path, raw)


def _optional_int(raw: dict[str, Any], key: str, path: str) -> int | None:
    if raw.get(key) is None:
        return None
    return _int(raw, key, path)


def parse_balance(raw: Any, path: str = "balance") -> Balance:
    if not isinstance(raw, dict):
        raise MalformedResponse(path, "balance is not an object", raw)
    currency = raw.get("currency")
    if currency not in CURRENCIES:
        raise MalformedResponse(path, f"unknown currency {currency!r}", raw)
    return Balance(amount=_int(raw, "amount", path), currency=currency)


def parse_bet_policy(config: dict[str, Any], path: str) -> BetPolicy:
    levels = config.get("betLevels")
    if not isinstance(levels, list):
        raise MalformedResponse(path, "'betLevels' is not a list", config)
    step = _int(config, "stepBet", path)
    if step <= 0:
        raise MalformedResponse(path, f"'stepBet' must be positive, got {step}", config)
    return BetPolicy(
        min_bet=_int(config, "minBet", path),
        max_bet=_int(config, "maxBet", path),
        step_bet=step,
        default_bet_level=_int(config, "defaultBetLevel", path),
        bet_levels=tuple(_as_int(level, "betLevels", path, config) for level in levels),
    )


def _number(raw: dict[str, Any], key: str, path: str, default: float | None = None) -> float | None:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(path, f"'{key}' is not a number", raw)
    return float(value)


def _flag(raw: dict[str, Any], key: str, path: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise MalformedResponse(path, f"'{key}' is not a boolean", raw)
    return value


def parse_jurisdiction(raw: Any, path: str) -> JurisdictionFlags:
    """Absent flags read as False; absent minimum round duration as 0."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise MalformedResponse(path, "'jurisdiction' is not an object", raw)
    flags = {field: _flag(raw, wire, path) for wire, field in _JURISDICTION_FLAGS.items()}
    duration = _number(raw, "minimumRoundDuration", path, default=0.0)
    return JurisdictionFlags(minimum_round_duration=duration, **flags)


def parse_round(raw: Any, path: str) -> Round | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise MalformedResponse(path, "'round' is not an object", raw)
    return Round(
        bet_id=_int(raw, "betID", path),
        active=_flag(raw, "active", path),
        mode=str(raw.get("mode", "")),
        amount=_optional_int(raw, "amount", path),
        payout=_optional_int(raw, "payout", path),
        payout_multiplier=_number(raw, "payoutMultiplier", path),
        event=raw.get("event"),
        state=raw.get("state"),
    )


def parse_authenticate(data: Any, path: str) -> AuthenticateResult:
    config = _section(data, "config", path)
    return AuthenticateResult(
        balance=parse_balance(data.get("balance"), path),
        config=parse_bet_policy(config, path),
        jurisdiction_flags=parse_jurisdiction(config.get("jurisdiction"), path),
        round=parse_round(data.get("round"), path),
    )


def parse_balance_response(data: Any, path: str) -> Balance:
    if not isinstance(data, dict):
        raise MalformedResponse(path, "expected a JSON object", data)
    return parse_balance(data.get("balance"), path)


def parse_play(data: Any, path: str) -> PlayResult:
    balance = parse_balance_response(data, path)
    rnd = parse_round(data.get("round"), path)
    if rnd is None:
        raise MalformedResponse(path, "'round' is missing", data)
    return PlayResult(balance=balance, round=rnd)


def parse_event(data: Any, path: str) -> str:
    if not isinstance(data, dict) or not isinstance(data.get("event"), str):
        raise MalformedResponse(path, "'event' is missing or not a string", data)
    return data["event"]
