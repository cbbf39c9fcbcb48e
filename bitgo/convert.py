"""
BitGo SDK - Convert Module

Conversion between bitcoins and satoshis (the minor unit used on the wire).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

SATOSHIS_PER_BITCOIN = 100_000_000

_SATOSHI = Decimal('0.00000001')

Amount = Union[int, float, str, Decimal]


def to_satoshis(bitcoins: Amount) -> int:
    """
    Convert an amount of bitcoins to satoshis.

    Args:
        bitcoins: Amount in bitcoins, e.g. 0.0001 or "0.0001"

    Returns:
        Amount in satoshis, rounded half-up to a whole satoshi
    """
    amount = Decimal(str(bitcoins)) * SATOSHIS_PER_BITCOIN
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_bitcoins(satoshis: int) -> Decimal:
    """Convert satoshis to bitcoins with 8 decimal places."""
    return (Decimal(satoshis) / SATOSHIS_PER_BITCOIN).quantize(_SATOSHI)
