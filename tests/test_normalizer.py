import pytest

from rgs import normalizer
from rgs.errors import MalformedResponse
from tests.conftest import auth_body, play_body, round_body


def test_parse_authenticate_maps_every_jurisdiction_flag():
    result = normalizer.parse_authenticate(auth_body(), "/wallet/authenticate")
    flags = result.jurisdiction_flags

    assert flags.social_casino is False
    assert flags.disabled_fullscreen is False
    assert flags.disabled_turbo is True
    assert flags.disabled_super_turbo is True
    assert flags.disabled_autoplay is False
    assert flags.disabled_slamstop is False
    assert flags.disabled_spacebar is False
    assert flags.disabled_buy_feature is True
    assert flags.display_net_position is True
    assert flags.display_rtp is True
    assert flags.display_session_timer is False
    assert flags.minimum_round_duration == 2.5


def test_missing_jurisdiction_defaults_to_permissive():
    body = auth_body()
    del body["config"]["jurisdiction"]

    flags = normalizer.parse_authenticate(body, "/wallet/authenticate").jurisdiction_flags

    assert flags.disabled_autoplay is False
    assert flags.minimum_round_duration == 0


def test_bet_levels_keep_server_order():
    body = auth_body(betLevels=[500_000, 100_000, 200_000])

    policy = normalizer.parse_authenticate(body, "/wallet/authenticate").config

    assert policy.bet_levels == (500_000, 100_000, 200_000)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda b: b.pop("config"),
        lambda b: b["config"].pop("stepBet"),
        lambda b: b["config"].update(stepBet=0),
        lambda b: b["config"].update(betLevels="100000"),
        lambda b: b["balance"].update(currency="GBP"),
        lambda b: b["balance"].update(amount=1.5),
        lambda b: b["balance"].update(amount=True),
    ],
    ids=["no-config", "no-step", "zero-step", "levels-not-list", "unknown-currency",
         "fractional-amount", "bool-amount"],
)
def test_parse_authenticate_rejects_bad_bodies(mutate):
    body = auth_body()
    mutate(body)

    with pytest.raises(MalformedResponse):
        normalizer.parse_authenticate(body, "/wallet/authenticate")


@pytest.mark.parametrize(
    "mutate",
    [
        lambda b: b["config"].update(jurisdiction=["socialCasino"]),
        lambda b: b["config"]["jurisdiction"].update(minimumRoundDuration="2.5"),
        lambda b: b["config"]["jurisdiction"].update(minimumRoundDuration=True),
        lambda b: b["config"]["jurisdiction"].update(disabledTurbo="false"),
        lambda b: b.update(round=dict(round_body(active=True), active="false")),
        lambda b: b.update(round=dict(round_body(active=True), active=1)),
        lambda b: b.update(round=dict(round_body(active=False), payoutMultiplier="n/a")),
        lambda b: b.update(round=dict(round_body(active=False), payoutMultiplier=False)),
    ],
    ids=["jurisdiction-not-object", "duration-string", "duration-bool", "flag-string",
         "active-string", "active-int", "multiplier-string", "multiplier-bool"],
)
def test_parse_authenticate_rejects_mistyped_fields(mutate):
    body = auth_body()
    mutate(body)

    with pytest.raises(MalformedResponse):
        normalizer.parse_authenticate(body, "/wallet/authenticate")


def test_null_jurisdiction_and_duration_read_as_defaults():
    body = auth_body()
    body["config"]["jurisdiction"]["minimumRoundDuration"] = None

    flags = normalizer.parse_authenticate(body, "/wallet/authenticate").jurisdiction_flags

    assert flags.minimum_round_duration == 0.0

    body["config"]["jurisdiction"] = None
    flags = normalizer.parse_authenticate(body, "/wallet/authenticate").jurisdiction_flags

    assert flags.social_casino is False
    assert flags.minimum_round_duration == 0.0


def test_parse_round_missing_active_is_inactive():
    rnd = normalizer.parse_round({"betID": 3}, "/wallet/authenticate")

    assert rnd.active is False


def test_integral_float_amount_is_accepted():
    balance = normalizer.parse_balance({"amount": 2_000_000.0, "currency": "EUR"})

    assert balance.amount == 2_000_000
    assert isinstance(balance.amount, int)


def test_parse_round_optional_fields():
    raw = {"betID": 9, "active": True, "mode": "bonus", "state": {"opaque": True}}

    rnd = normalizer.parse_round(raw, "/wallet/play")

    assert rnd.bet_id == 9
    assert rnd.amount is None
    assert rnd.payout is None
    assert rnd.payout_multiplier is None
    assert rnd.event is None
    assert rnd.state == {"opaque": True}


def test_parse_round_none_is_none():
    assert normalizer.parse_round(None, "/wallet/authenticate") is None


def test_parse_play_requires_round():
    body = play_body(active=True)
    body["round"] = None

    with pytest.raises(MalformedResponse):
        normalizer.parse_play(body, "/wallet/play")


def test_parse_play():
    result = normalizer.parse_play(play_body(active=False), "/wallet/play")

    assert result.balance.amount == 99_500_000
    assert result.round == normalizer.parse_round(round_body(active=False), "/wallet/play")


@pytest.mark.parametrize("body", [{}, {"event": 3}, ["3"]])
def test_parse_event_requires_string(body):
    with pytest.raises(MalformedResponse):
        normalizer.parse_event(body, "/bet/event")
