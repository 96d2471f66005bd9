"""
Smoke run: authenticate, place a single bet, and close the round, to verify
the launch identity and the full wallet pipeline are wired correctly.

Usage:
    python play_once.py [amount] [mode]

amount is in major units (e.g. 1.00) and is snapped to the nearest declared
bet level. Without it the operator's default bet level is used. mode defaults
to default_mode from config/client.yaml.
"""

from __future__ import annotations
import asyncio
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

load_dotenv()

from config.settings import load_settings
from models.wallet import Balance
from policy.bet_rules import nearest_bet_level
from rgs.errors import WalletError
from session.coordinator import SessionCoordinator
from utils.currency import display_amount, to_api_amount
from utils.logger import setup_logging

CLIENT_CONFIG_PATH = Path(__file__).parent / "config" / "client.yaml"


def _load_client_config() -> dict:
    with open(CLIENT_CONFIG_PATH) as f:
        return yaml.safe_load(f)


async def main(argv: list[str]) -> int:
    settings = load_settings()
    setup_logging(settings.log_level)
    client_cfg = _load_client_config()

    mode = argv[1] if len(argv) > 1 else client_cfg["default_mode"]
    if mode not in client_cfg["modes"]:
        print(f"Unknown mode {mode!r}; configured modes: {', '.join(client_cfg['modes'])}")
        return 2

    async with SessionCoordinator.from_settings(settings) as coordinator:
        auth = await coordinator.authenticate()
        print(f"Session : {coordinator.session.session_id}")
        print(f"Balance : {display_amount(auth.balance)}")

        if coordinator.round_active:
            print("A round is still open from a previous launch; closing it first.")
            await coordinator.end_round()

        policy = auth.config
        if argv and argv[0]:
            amount = nearest_bet_level(to_api_amount(float(argv[0])), policy)
        else:
            amount = policy.default_bet_level

        stake = display_amount(Balance(amount, auth.balance.currency))
        confirm = input(f"Place a {stake} bet in mode {mode!r}? [y/N] ").strip().lower()
        if confirm != "y":
            print("Aborted.")
            return 0

        try:
            play = await coordinator.place_bet(amount, mode)
            print(f"\nBet placed: bet_id={play.round.bet_id} "
                  f"payout_multiplier={play.round.payout_multiplier} active={play.round.active}")
            print(f"Balance : {display_amount(play.balance)}")
            if play.round.active:
                balance = await coordinator.end_round()
                print(f"Round closed. Balance : {display_amount(balance)}")
        except WalletError as exc:
            print(f"\nBet FAILED: {exc}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
