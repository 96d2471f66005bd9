"""
Environment-based configuration.
Identity comes from the operator's launch context; nothing is hardcoded.

Either set RGS_LAUNCH_URL to the full game launch URL, e.g.
    https://game.example/?sessionID=abc&lang=en&device=mobile&rgs_url=rgs.stake-engine.com
or set RGS_URL / RGS_SESSION_ID / RGS_LANG / RGS_DEVICE individually.
Individual variables override values taken from the launch URL.

Usage:
    from config.settings import load_settings
    settings = load_settings()
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse


def _optional(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _flag(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # --- Launch identity ---
    rgs_url: str                          # RGS host, e.g. rgs.stake-engine.com (scheme forced to https)
    session_id: str                       # Opaque session token issued by the operator
    lang: str                             # ISO 639-1 code chosen by the operator
    device: str                           # "desktop" or "mobile"

    # --- Client behaviour ---
    enforce_bet_levels: bool              # Reject amounts that are not a declared bet level
    balance_refresh_interval_s: float     # Idle balance polling period
    request_timeout_s: float              # Total timeout per RGS request

    # --- Logging ---
    log_level: str


def parse_launch_url(url: str) -> dict[str, str]:
    """
    Extract identity parameters from a game launch URL.
    Keys returned: rgs_url, session_id, lang, device (only those present).
    """
    params = parse_qs(urlparse(url).query)
    wire_names = {
        "rgs_url": "rgs_url",
        "sessionID": "session_id",
        "lang": "lang",
        "device": "device",
    }
    found: dict[str, str] = {}
    for wire, key in wire_names.items():
        values = params.get(wire)
        if values and values[0]:
            found[key] = values[0]
    return found


def load_settings() -> Settings:
    launch = parse_launch_url(_optional("RGS_LAUNCH_URL"))
    return Settings(
        rgs_url=_optional("RGS_URL") or launch.get("rgs_url", ""),
        session_id=_optional("RGS_SESSION_ID") or launch.get("session_id", ""),
        lang=_optional("RGS_LANG") or launch.get("lang", "en"),
        device=_optional("RGS_DEVICE") or launch.get("device", "desktop"),
        enforce_bet_levels=_flag("RGS_ENFORCE_BET_LEVELS", True),
        balance_refresh_interval_s=float(_optional("BALANCE_REFRESH_INTERVAL_S", "60")),
        request_timeout_s=float(_optional("REQUEST_TIMEOUT_S", "10")),
        log_level=_optional("LOG_LEVEL", "INFO"),
    )
