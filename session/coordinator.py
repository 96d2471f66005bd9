"""
Session coordinator: wallet session and round state machine.

Owns the session identity, the bet policy and jurisdiction flags from
authenticate, the cached balance, and the round phase. Each public operation
makes exactly one RGS call and then updates local state from the response.

Round phase transitions:
  IDLE    -> PENDING  place_bet passed local checks (set before the request)
  PENDING -> OPEN     play response reports the round active
  PENDING -> IDLE     play response reports the round finished, or the call failed
  OPEN    -> IDLE     end_round succeeded
  IDLE    -> OPEN     authenticate resumed an active round
  OPEN    -> IDLE     authenticate reported no active round

The balance is a cache of server truth: it is only ever replaced by a value
the RGS returned, never computed locally.
"""

from __future__ import annotations
import logging
import time

from bus.event_bus import EventBus
from config.settings import Settings
from models.session import RoundPhase, Session
from models.wallet import AuthenticateResult, Balance, BetPolicy, JurisdictionFlags, PlayResult
from policy.bet_rules import validate_bet_amount
from rgs import normalizer
from rgs.errors import NotAuthenticated, RoundAlreadyActive
from rgs.rest_client import (
    AUTHENTICATE_PATH,
    BALANCE_PATH,
    END_ROUND_PATH,
    EVENT_PATH,
    PLAY_PATH,
    RGSRestClient,
)
from session.refresher import DEFAULT_REFRESH_INTERVAL_S, BalanceRefresher

log = logging.getLogger(__name__)


class SessionCoordinator:
    """
    Single-session wallet client.

    Not meant for concurrent callers: issue one operation, await it, then the next.
    The place_bet guard is checked and set with no await in between, so two
    overlapping place_bet calls on one event loop cannot both open a round.
    """

    def __init__(
        self,
        session: Session,
        rest_client: RGSRestClient,
        enforce_bet_levels: bool = True,
        balance_refresh_interval_s: float = DEFAULT_REFRESH_INTERVAL_S,
        bus: EventBus | None = None,
    ) -> None:
        self._session = session
        self._rest = rest_client
        self._enforce_bet_levels = enforce_bet_levels
        self._bus = bus if bus is not None else EventBus()
        self._refresher = BalanceRefresher(self.refresh_balance, interval_s=balance_refresh_interval_s)

        self._balance: Balance | None = None
        self._policy: BetPolicy | None = None
        self._jurisdiction: JurisdictionFlags | None = None
        self._phase = RoundPhase.IDLE

    @classmethod
    def from_settings(cls, settings: Settings, bus: EventBus | None = None) -> "SessionCoordinator":
        session = Session.create(settings.session_id, settings.lang, settings.device)
        rest_client = RGSRestClient(settings.rgs_url, request_timeout_s=settings.request_timeout_s)
        return cls(
            session=session,
            rest_client=rest_client,
            enforce_bet_levels=settings.enforce_bet_levels,
            balance_refresh_interval_s=settings.balance_refresh_interval_s,
            bus=bus,
        )

    async def startup(self) -> None:
        """Open the HTTP session. Must be awaited before the first wallet call."""
        await self._rest.startup()

    async def __aenter__(self) -> "SessionCoordinator":
        await self.startup()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.dispose()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def balance(self) -> Balance | None:
        return self._balance

    @property
    def bet_policy(self) -> BetPolicy | None:
        return self._policy

    @property
    def jurisdiction_flags(self) -> JurisdictionFlags | None:
        return self._jurisdiction

    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def round_active(self) -> bool:
        return self._phase.is_active

    @property
    def authenticated(self) -> bool:
        return self._policy is not None

    @property
    def enforce_bet_levels(self) -> bool:
        return self._enforce_bet_levels

    @property
    def refreshing(self) -> bool:
        return self._refresher.running

    def _require_auth(self) -> BetPolicy:
        if self._policy is None:
            raise NotAuthenticated()
        return self._policy

    def _set_balance(self, balance: Balance) -> None:
        self._balance = balance
        self._bus.publish_balance(balance)

    def _set_phase(self, phase: RoundPhase) -> None:
        was_active = self._phase.is_active
        self._phase = phase
        if phase.is_active != was_active:
            self._bus.publish_round_active(phase.is_active)

    # ------------------------------------------------------------------
    # Wallet operations
    # ------------------------------------------------------------------

    async def authenticate(self) -> AuthenticateResult:
        """
        Authorise the session for play. Loads bet policy, jurisdiction flags
        and balance; resumes the round phase if the RGS reports an open round.
        """
        data = await self._rest.authenticate(self._session.session_id, self._session.lang)
        result = normalizer.parse_authenticate(data, AUTHENTICATE_PATH)

        self._policy = result.config
        self._jurisdiction = result.jurisdiction_flags
        self._set_balance(result.balance)
        if result.round is not None and result.round.active:
            self._set_phase(RoundPhase.OPEN)
        elif self._phase is RoundPhase.OPEN:
            # the RGS no longer reports the round, e.g. it was closed from another client
            self._set_phase(RoundPhase.IDLE)

        log.info(
            "Authenticated session=%s balance=%d %s levels=%s resumed_round=%s",
            self._session.session_id, result.balance.amount, result.balance.currency,
            list(result.config.bet_levels), self.round_active,
        )
        return result

    async def refresh_balance(self) -> Balance:
        """Fetch the current balance. Other calls already return it; this is for idle players."""
        self._require_auth()
        data = await self._rest.balance(self._session.session_id)
        balance = normalizer.parse_balance_response(data, BALANCE_PATH)
        self._set_balance(balance)
        return balance

    async def place_bet(self, amount: int, mode: str) -> PlayResult:
        """
        Validate the amount locally, then open a round on the RGS.
        The round is marked active before the request goes out and rolled
        back if the request fails.
        """
        policy = self._require_auth()
        if self.round_active:
            raise RoundAlreadyActive()
        validate_bet_amount(amount, policy, self._enforce_bet_levels)

        self._set_phase(RoundPhase.PENDING)
        sent_at = time.monotonic_ns()
        try:
            data = await self._rest.play(self._session.session_id, mode, amount)
            result = normalizer.parse_play(data, PLAY_PATH)
        except BaseException:
            self._set_phase(RoundPhase.IDLE)
            raise
        latency_ms = (time.monotonic_ns() - sent_at) / 1_000_000

        self._set_balance(result.balance)
        self._set_phase(RoundPhase.OPEN if result.round.active else RoundPhase.IDLE)
        self._refresher.restart()

        log.info(
            "Bet placed bet_id=%s mode=%s amount=%d active=%s payout=%s latency_ms=%.2f",
            result.round.bet_id, mode, amount, result.round.active,
            result.round.payout, latency_ms,
        )
        return result

    async def end_round(self) -> Balance:
        """
        Close the current round. No local check that a round is open:
        the RGS decides whether there is anything to close.
        """
        self._require_auth()
        data = await self._rest.end_round(self._session.session_id)
        balance = normalizer.parse_balance_response(data, END_ROUND_PATH)

        self._set_balance(balance)
        # Always announce the close, even when no round was open
        self._phase = RoundPhase.IDLE
        self._bus.publish_round_active(False)
        self._refresher.restart()

        log.info("Round ended session=%s balance=%d %s",
                 self._session.session_id, balance.amount, balance.currency)
        return balance

    async def send_event(self, value: str) -> str:
        """Send mid-round telemetry. Returns the value the RGS echoed back."""
        self._require_auth()
        data = await self._rest.event(self._session.session_id, value)
        return normalizer.parse_event(data, EVENT_PATH)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_balance_refresh(self) -> None:
        self._refresher.restart()

    def stop_balance_refresh(self) -> None:
        self._refresher.stop()

    async def dispose(self) -> None:
        """Stop refreshing for good and release the HTTP session."""
        self._refresher.stop()
        await self._rest.shutdown()
