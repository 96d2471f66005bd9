"""
Session identity and round state.

Session is created once from launch parameters and never mutated.
RoundPhase is owned by the SessionCoordinator and is the only round state
the client keeps.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Literal, get_args

from rgs.errors import MissingIdentity, UnsupportedFormFactor

log = logging.getLogger(__name__)

Device = Literal["desktop", "mobile"]

# ISO 639-1 codes the RGS localizes. Passed by the operator, not the browser.
Language = Literal[
    "ar", "de", "en", "es", "fi", "fr", "hi", "id",
    "ja", "ko", "pl", "pt", "ru", "tr", "vi", "zh",
]

DEVICES: frozenset[str] = frozenset(get_args(Device))
LANGUAGES: frozenset[str] = frozenset(get_args(Language))


@dataclass(frozen=True, slots=True)
class Session:
    session_id: str
    lang: str = "en"
    device: Device = "desktop"

    @staticmethod
    def create(session_id: str | None, lang: str | None = None, device: str | None = None) -> "Session":
        """Validate launch parameters. Fails before any client state exists."""
        lang = lang or "en"
        device = device or "desktop"
        if device not in DEVICES:
            raise UnsupportedFormFactor(device)
        if not session_id:
            raise MissingIdentity("sessionID")
        if lang not in LANGUAGES:
            log.warning("Language %r is not in the supported list; sending it anyway", lang)
        return Session(session_id=session_id, lang=lang, device=device)  # type: ignore[arg-type]


class RoundPhase(Enum):
    """
    IDLE     no round open
    PENDING  place_bet sent, response not yet received
    OPEN     the RGS reported the round as active
    """
    IDLE = auto()
    PENDING = auto()
    OPEN = auto()

    @property
    def is_active(self) -> bool:
        return self is not RoundPhase.IDLE
