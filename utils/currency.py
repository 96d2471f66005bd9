"""
Currency helpers for presenting RGS amounts.

The RGS represents money as integers scaled by API_MULTIPLIER
(1_000_000 = 1.00 of the major unit) so amounts never pass through floats
on the wire. These helpers convert for display only.
"""

from __future__ import annotations
from dataclasses import dataclass

from models.wallet import Balance
from rgs.normalizer import parse_balance  # noqa: F401  re-exported for presentation code

API_MULTIPLIER = 1_000_000


@dataclass(frozen=True, slots=True)
class CurrencyMeta:
    symbol: str
    decimals: int
    symbol_after: bool = False


CURRENCY_META: dict[str, CurrencyMeta] = {
    "USD": CurrencyMeta("$", 2),
    "CAD": CurrencyMeta("CA$", 2),
    "JPY": CurrencyMeta("¥", 0),
    "EUR": CurrencyMeta("€", 2),
    "RUB": CurrencyMeta("₽", 2),
    "CNY": CurrencyMeta("CN¥", 2),
    "PHP": CurrencyMeta("₱", 2),
    "INR": CurrencyMeta("₹", 2),
    "IDR": CurrencyMeta("Rp", 0),
    "KRW": CurrencyMeta("₩", 0),
    "BRL": CurrencyMeta("R$", 2),
    "MXN": CurrencyMeta("MX$", 2),
    "DKK": CurrencyMeta("KR", 2, symbol_after=True),
    "PLN": CurrencyMeta("zł", 2, symbol_after=True),
    "VND": CurrencyMeta("₫", 0, symbol_after=True),
    "TRY": CurrencyMeta("₺", 2),
    "CLP": CurrencyMeta("CLP", 0, symbol_after=True),
    "ARS": CurrencyMeta("ARS", 2, symbol_after=True),
    "PEN": CurrencyMeta("S/", 2, symbol_after=True),
    "XGC": CurrencyMeta("GC", 0, symbol_after=True),
    "XSC": CurrencyMeta("SC", 2, symbol_after=True),
}


def parse_amount(value: int) -> float:
    """1_000_000 -> 1.0"""
    return value / API_MULTIPLIER


def to_api_amount(value: float) -> int:
    """1.0 -> 1_000_000. Rounds to the nearest minor unit."""
    return round(value * API_MULTIPLIER)


def display_amount(
    balance: Balance,
    remove_symbol: bool = False,
    decimals: int | None = None,
    trim_decimal_for_integers: bool = False,
) -> str:
    """
    Format a balance with its currency symbol.

    display_amount(Balance(1_500_000, "USD"))  -> "$1.50"
    display_amount(Balance(2_000_000, "PLN"))  -> "2.00 zł"
    display_amount(Balance(2_000_000, "USD"), trim_decimal_for_integers=True) -> "$2"
    """
    meta = CURRENCY_META.get(balance.currency, CurrencyMeta(balance.currency, 2, symbol_after=True))
    amount = parse_amount(balance.amount)

    places = meta.decimals if decimals is None else decimals
    if trim_decimal_for_integers and amount.is_integer():
        places = 0

    formatted = f"{amount:,.{places}f}"
    if remove_symbol:
        return formatted
    if meta.symbol_after:
        return f"{formatted} {meta.symbol}"
    return f"{meta.symbol}{formatted}"
