"""
RGS session client: main entrypoint

Boots the asyncio event loop, authenticates the launch session, and keeps the
cached balance fresh until SIGINT/SIGTERM is received.

Startup sequence:
  1. Load settings from environment (.env supported)
  2. Build the SessionCoordinator (fails fast on bad launch identity)
  3. Authenticate and log policy / jurisdiction / balance
  4. Start the balance refresher and wait for shutdown signal

Shutdown sequence:
  1. Stop the refresher
  2. Close the HTTP session
"""

from __future__ import annotations
import asyncio
import logging
import signal

from dotenv import load_dotenv

load_dotenv()

from bus.event_bus import EventBus
from config.settings import load_settings
from models.events import BalanceUpdated, RoundActiveChanged
from session.coordinator import SessionCoordinator
from utils.currency import display_amount
from utils.logger import setup_logging

log = logging.getLogger(__name__)


def _log_balance(event: BalanceUpdated) -> None:
    log.info("Balance: %s", display_amount(event.balance))


def _log_round(event: RoundActiveChanged) -> None:
    log.info("Round active: %s", event.active)


async def run() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    log.info("RGS session client starting (rgs=%s device=%s lang=%s)",
             settings.rgs_url, settings.device, settings.lang)

    bus = EventBus()
    bus.on_balance(_log_balance)
    bus.on_round_active(_log_round)

    coordinator = SessionCoordinator.from_settings(settings, bus=bus)
    await coordinator.startup()
    try:
        auth = await coordinator.authenticate()
        flags = auth.jurisdiction_flags
        log.info(
            "Bet policy min=%d max=%d step=%d default=%d; social_casino=%s min_round_s=%.1f",
            auth.config.min_bet, auth.config.max_bet, auth.config.step_bet,
            auth.config.default_bet_level, flags.social_casino, flags.minimum_round_duration,
        )
        if auth.round is not None and auth.round.active:
            log.warning("Session resumed with open round bet_id=%s mode=%s",
                        auth.round.bet_id, auth.round.mode)

        coordinator.start_balance_refresh()

        shutdown_event = asyncio.Event()

        def _handle_signal(sig: signal.Signals) -> None:
            log.info("Received %s, initiating graceful shutdown", sig.name)
            shutdown_event.set()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _handle_signal, sig)

        log.info("Session live. Refreshing balance every %.0fs.", settings.balance_refresh_interval_s)
        await shutdown_event.wait()
    finally:
        log.info("Shutting down...")
        await coordinator.dispose()
        log.info("RGS session client stopped cleanly.")


def main() -> None:
    try:
        import uvloop  # type: ignore
        uvloop.run(run())
    except ImportError:
        asyncio.run(run())


if __name__ == "__main__":
    main()
