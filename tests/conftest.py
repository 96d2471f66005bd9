from __future__ import annotations
import json
from collections import defaultdict, deque
from urllib.parse import urlparse

import pytest

from models.session import Session
from rgs.rest_client import RGSRestClient
from session.coordinator import SessionCoordinator

SESSION_ID = "sess-1"

JURISDICTION = {
    "socialCasino": False,
    "disabledFullscreen": False,
    "disabledTurbo": True,
    "disabledSuperTurbo": True,
    "disabledAutoplay": False,
    "disabledSlamstop": False,
    "disabledSpacebar": False,
    "disabledBuyFeature": True,
    "displayNetPosition": True,
    "displayRTP": True,
    "displaySessionTimer": False,
    "minimumRoundDuration": 2.5,
}


def auth_body(round=None, **config):
    cfg = {
        "minBet": 100_000,
        "maxBet": 1_000_000,
        "stepBet": 100_000,
        "defaultBetLevel": 200_000,
        "betLevels": [100_000, 200_000, 500_000],
        "jurisdiction": dict(JURISDICTION),
    }
    cfg.update(config)
    return {
        "balance": {"amount": 100_000_000, "currency": "USD"},
        "config": cfg,
        "round": round,
    }


def round_body(active, amount=500_000, bet_id=1, mode="base"):
    return {
        "betID": bet_id,
        "amount": amount,
        "payout": 0 if active else 1_000_000,
        "payoutMultiplier": 0.0 if active else 2.0,
        "active": active,
        "mode": mode,
        "event": None,
        "state": [{"type": "reveal", "board": [[1, 2], [3, 4]]}],
    }


def play_body(active, amount=500_000, balance=99_500_000):
    return {
        "balance": {"amount": balance, "currency": "USD"},
        "round": round_body(active, amount),
    }


def balance_body(amount):
    return {"balance": {"amount": amount, "currency": "USD"}}


class FakeResponse:
    def __init__(self, status: int, body) -> None:
        self.status = status
        self._text = body if isinstance(body, str) else json.dumps(body)

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc) -> bool:
        return False


class FakeRGS:
    """
    Stands in for aiohttp.ClientSession. Records every POST and replays
    scripted (status, body) pairs per path; an exception instance is raised instead.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.urls: list[str] = []
        self.closed = False
        self._scripts: dict[str, deque] = defaultdict(deque)
        self._sticky: dict[str, tuple] = {}

    def reply(self, path: str, body, status: int = 200) -> "FakeRGS":
        self._scripts[path].append((status, body))
        return self

    def always(self, path: str, body, status: int = 200) -> "FakeRGS":
        self._sticky[path] = (status, body)
        return self

    def paths(self) -> list[str]:
        return [path for path, _ in self.calls]

    def post(self, url: str, json=None) -> FakeResponse:
        path = urlparse(url).path
        self.urls.append(url)
        self.calls.append((path, json))
        if self._scripts[path]:
            status, body = self._scripts[path].popleft()
        elif path in self._sticky:
            status, body = self._sticky[path]
        else:
            raise AssertionError(f"unexpected POST {path}")
        if isinstance(body, BaseException):
            raise body
        return FakeResponse(status, body)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def rgs() -> FakeRGS:
    return FakeRGS()


@pytest.fixture
def make_coordinator(rgs):
    def _make(**kwargs) -> SessionCoordinator:
        session = Session.create(SESSION_ID, "en", "desktop")
        client = RGSRestClient("rgs.example.test", session=rgs)
        return SessionCoordinator(session, client, **kwargs)
    return _make


@pytest.fixture
def recorder():
    """Collects coordinator notifications in arrival order."""
    class Recorder:
        def __init__(self) -> None:
            self.balances: list[int] = []
            self.rounds: list[bool] = []

        def attach(self, coordinator: SessionCoordinator) -> "Recorder":
            coordinator.bus.on_balance(lambda e: self.balances.append(e.balance.amount))
            coordinator.bus.on_round_active(lambda e: self.rounds.append(e.active))
            return self

    return Recorder()
