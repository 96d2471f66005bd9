"""
Per-coordinator notification bus.

Two channels, each delivered two ways:
  - listeners: called synchronously inside publish_*, so a notification is
    always seen before the coordinator call that triggered it returns
  - queues: bounded asyncio.Queue for consumers that prefer to await events

Queue sizing rationale:
  balance_updates: 50, only the latest balance matters
  round_activity:  50, one change per bet or end-round
A full queue drops its oldest event; nobody is required to drain them.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Callable

from models.events import BalanceUpdated, RoundActiveChanged
from models.wallet import Balance

log = logging.getLogger(__name__)

BalanceListener = Callable[[BalanceUpdated], None]
RoundActiveListener = Callable[[RoundActiveChanged], None]


def _offer(queue: asyncio.Queue, event: object, name: str) -> None:
    """Non-blocking put. When full, the oldest event is dropped to make room."""
    try:
        queue.put_nowait(event)
    except asyncio.QueueFull:
        dropped = queue.get_nowait()
        log.debug("%s queue full, dropping oldest %r", name, dropped)
        queue.put_nowait(event)


class EventBus:
    __slots__ = (
        "balance_updates",
        "round_activity",
        "_balance_listeners",
        "_round_listeners",
    )

    def __init__(self, maxsize: int = 50) -> None:
        self.balance_updates: asyncio.Queue[BalanceUpdated] = asyncio.Queue(maxsize=maxsize)
        self.round_activity: asyncio.Queue[RoundActiveChanged] = asyncio.Queue(maxsize=maxsize)
        self._balance_listeners: list[BalanceListener] = []
        self._round_listeners: list[RoundActiveListener] = []

    def on_balance(self, listener: BalanceListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unregisters it."""
        self._balance_listeners.append(listener)
        return lambda: self._discard(self._balance_listeners, listener)

    def on_round_active(self, listener: RoundActiveListener) -> Callable[[], None]:
        self._round_listeners.append(listener)
        return lambda: self._discard(self._round_listeners, listener)

    @staticmethod
    def _discard(listeners: list, listener: Callable) -> None:
        try:
            listeners.remove(listener)
        except ValueError:
            pass

    def publish_balance(self, balance: Balance) -> BalanceUpdated:
        event = BalanceUpdated(balance=balance)
        for listener in list(self._balance_listeners):
            try:
                listener(event)
            except Exception:
                log.exception("Balance listener %r failed", listener)
        _offer(self.balance_updates, event, "balance_updates")
        return event

    def publish_round_active(self, active: bool) -> RoundActiveChanged:
        event = RoundActiveChanged(active=active)
        for listener in list(self._round_listeners):
            try:
                listener(event)
            except Exception:
                log.exception("Round activity listener %r failed", listener)
        _offer(self.round_activity, event, "round_activity")
        return event
