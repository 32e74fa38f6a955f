"""What a wallet send targets: an amount, an inscription or a satpoint."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .inscription_id import InscriptionId
from .sat_point import SatPoint

_U64_MAX = 2**64 - 1
_NUMBER = re.compile(r"[0-9]*\.?[0-9]*")

_DENOMINATIONS = {
    "BTC": 8,
    "btc": 8,
    "cBTC": 6,
    "mBTC": 5,
    "uBTC": 2,
    "nBTC": -1,
    "pBTC": -4,
    "bits": 2,
    "bit": 2,
    "satoshi": 0,
    "sat": 0,
    "msat": -3,
}


@dataclass(frozen=True, order=True)
class Amount:
    """A bitcoin amount in sats."""

    sats: int

    def __str__(self) -> str:
        return f"{self.sats} sat"

    @classmethod
    def parse(cls, s: str) -> "Amount":
        """Parse ``<number> <denomination>``, e.g. ``1.5 BTC`` or ``10 sat``."""
        parts = s.split()
        if len(parts) != 2:
            raise ValueError(f"invalid amount: {s!r}")
        number, denomination = parts
        if denomination not in _DENOMINATIONS:
            raise ValueError(f"unknown denomination: {denomination}")
        if not _NUMBER.fullmatch(number) or not any(c.isdigit() for c in number):
            raise ValueError(f"invalid number: {number}")
        try:
            value = Decimal(number).scaleb(_DENOMINATIONS[denomination])
        except InvalidOperation as err:
            raise ValueError(f"invalid number: {number}") from err
        if value != value.to_integral_value():
            raise ValueError("amount has a too precise value")
        sats = int(value)
        if sats > _U64_MAX:
            raise ValueError("amount is too big")
        return cls(sats)


def parse_outgoing(s: str) -> Amount | InscriptionId | SatPoint:
    """Classify and parse an outgoing target."""
    if ":" in s:
        return SatPoint.parse(s)
    if len(s) >= 66:
        return InscriptionId.parse(s)
    if " " in s:
        return Amount.parse(s)
    for i, c in enumerate(s):
        if c.isalpha():
            return Amount.parse(f"{s[:i]} {s[i:]}")
    return Amount.parse(s)