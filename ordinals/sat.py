"""Satoshi ordinal numbers and their notations."""

from __future__ import annotations

import bisect
import decimal as _decimal
import math
import re
from dataclasses import dataclass

from .rarity import Rarity

COIN_VALUE = 100_000_000
DIFFCHANGE_INTERVAL = 2016
SUBSIDY_HALVING_INTERVAL = 210_000
CYCLE_EPOCHS = 6

_HALVING_INCREMENT = SUBSIDY_HALVING_INTERVAL % DIFFCHANGE_INTERVAL
_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")
_EPOCH_COUNT = 34


def _parse_u64(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    value = int(text)
    if value > _U64_MAX:
        raise ValueError(f"number too large to fit in target type: {text!r}")
    return value


def epoch_subsidy(epoch: int) -> int:
    """Block subsidy in sats paid during the given epoch."""
    return (50 * COIN_VALUE) >> epoch if epoch < 64 else 0


def _compute_starting_sats() -> tuple[int, ...]:
    sats = []
    total = 0
    for epoch in range(_EPOCH_COUNT):
        sats.append(total)
        total += epoch_subsidy(epoch) * SUBSIDY_HALVING_INTERVAL
    return tuple(sats)


_STARTING_SATS = _compute_starting_sats()


def _epoch_of(n: int) -> int:
    return bisect.bisect_right(_STARTING_SATS, n) - 1


def epoch_starting_sat(epoch: int) -> "Sat":
    """First sat mined in the given epoch."""
    if epoch < len(_STARTING_SATS):
        return Sat(_STARTING_SATS[epoch])
    return Sat(_STARTING_SATS[-1])


def height_subsidy(height: int) -> int:
    """Block subsidy in sats at the given height."""
    return epoch_subsidy(height // SUBSIDY_HALVING_INTERVAL)


def height_starting_sat(height: int) -> "Sat":
    """First sat mined in the block at the given height."""
    epoch = height // SUBSIDY_HALVING_INTERVAL
    offset = height % SUBSIDY_HALVING_INTERVAL
    return epoch_starting_sat(epoch) + offset * epoch_subsidy(epoch)


def starting_sats() -> list["Sat"]:
    """The first sat of every reward epoch, ending with the total supply."""
    return [Sat(n) for n in _STARTING_SATS]


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(_decimal.Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _round_half_away(value: float) -> float:
    floor = math.floor(value)
    fraction = value - floor
    return float(floor + 1) if fraction >= 0.5 else float(floor)


@dataclass(frozen=True)
class Degree:
    """Degree notation: cycle, block in epoch, block in period, sat in block."""

    hour: int
    minute: int
    second: int
    third: int

    def __str__(self) -> str:
        return f"{self.hour}°{self.minute}′{self.second}″{self.third}‴"


@dataclass(frozen=True)
class Decimal:
    """Decimal notation: block height and offset of the sat in that block."""

    height: int
    offset: int

    def __str__(self) -> str:
        return f"{self.height}.{self.offset}"


class Sat(int):
    """An ordinal number identifying a single satoshi."""

    SUPPLY = 2099999997690000
    LAST: "Sat"

    def __new__(cls, n: int = 0) -> "Sat":
        value = int.__new__(cls, n)
        if value < 0:
            raise ValueError(f"sat must not be negative: {n}")
        return value

    def __repr__(self) -> str:
        return f"Sat({int(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)

    def __add__(self, other):
        if not isinstance(other, int):
            return NotImplemented
        return Sat(int(self) + int(other))

    @property
    def n(self) -> int:
        return int(self)

    @classmethod
    def parse(cls, s: str) -> "Sat":
        """Parse a sat from integer, name, degree, percentile or decimal notation."""
        if any("a" <= c <= "z" for c in s):
            return cls._from_name(s)
        if "°" in s:
            return cls._from_degree(s)
        if "%" in s:
            return cls._from_percentile(s)
        if "." in s:
            return cls._from_decimal(s)
        sat = cls(_parse_u64(s))
        if sat > cls.LAST:
            raise ValueError("invalid sat")
        return sat

    @classmethod
    def _from_name(cls, s: str) -> "Sat":
        x = 0
        for c in s:
            if not "a" <= c <= "z":
                raise ValueError(f"invalid character in sat name: {c}")
            x = x * 26 + ord(c) - ord("a") + 1
        if x > cls.SUPPLY:
            raise ValueError("sat name out of range")
        return cls(cls.SUPPLY - x)

    @classmethod
    def _from_degree(cls, degree: str) -> "Sat":
        cycle_text, sep, rest = degree.partition("°")
        if not sep:
            raise ValueError("missing degree symbol")
        cycle_number = _parse_u64(cycle_text)

        epoch_text, sep, rest = rest.partition("′")
        if not sep:
            raise ValueError("missing minute symbol")
        epoch_offset = _parse_u64(epoch_text)
        if epoch_offset >= SUBSIDY_HALVING_INTERVAL:
            raise ValueError("invalid epoch offset")

        period_text, sep, rest = rest.partition("″")
        if not sep:
            raise ValueError("missing second symbol")
        period_offset = _parse_u64(period_text)
        if period_offset >= DIFFCHANGE_INTERVAL:
            raise ValueError("invalid period offset")

        cycle_start_epoch = cycle_number * CYCLE_EPOCHS

        # For valid degrees the relationship between epoch offset and period
        # offset increments by 336 every halving.
        relationship = period_offset + SUBSIDY_HALVING_INTERVAL * CYCLE_EPOCHS - epoch_offset
        if relationship % _HALVING_INCREMENT != 0:
            raise ValueError(
                "relationship between epoch offset and period offset must be multiple of 336"
            )

        epochs_since_cycle_start = relationship % DIFFCHANGE_INTERVAL // _HALVING_INCREMENT
        epoch = cycle_start_epoch + epochs_since_cycle_start
        height = epoch * SUBSIDY_HALVING_INTERVAL + epoch_offset

        block_text, sep, remainder = rest.partition("‴")
        if sep:
            block_offset = _parse_u64(block_text)
            rest = remainder
        else:
            block_offset = 0

        if rest:
            raise ValueError("trailing characters")

        if block_offset >= height_subsidy(height):
            raise ValueError("invalid block offset")

        return height_starting_sat(height) + block_offset

    @classmethod
    def _from_decimal(cls, text: str) -> "Sat":
        height_text, sep, offset_text = text.partition(".")
        if not sep:
            raise ValueError("missing period")
        height = _parse_u64(height_text)
        offset = _parse_u64(offset_text)
        if offset >= height_subsidy(height):
            raise ValueError("invalid block offset")
        return height_starting_sat(height) + offset

    @classmethod
    def _from_percentile(cls, text: str) -> "Sat":
        if not text.endswith("%"):
            raise ValueError(f"invalid percentile: {text}")
        number = text[:-1]
        if not number.isascii() or "_" in number or number != number.strip():
            raise ValueError(f"invalid percentile: {text}")
        try:
            percentile = float(number)
        except ValueError:
            raise ValueError(f"invalid percentile: {text}") from None

        if percentile < 0.0:
            raise ValueError(f"invalid percentile: {_format_float(percentile)}")

        last = float(int(cls.LAST))
        n = percentile / 100.0 * last
        if math.isnan(n):
            return cls(0)
        n = n if math.isinf(n) else _round_half_away(n)
        if n > last:
            raise ValueError(f"invalid percentile: {_format_float(percentile)}")
        return cls(int(n))

    def degree(self) -> Degree:
        height = self.height()
        return Degree(
            hour=height // (CYCLE_EPOCHS * SUBSIDY_HALVING_INTERVAL),
            minute=height % SUBSIDY_HALVING_INTERVAL,
            second=height % DIFFCHANGE_INTERVAL,
            third=self.third(),
        )

    def height(self) -> int:
        epoch = self.epoch()
        return epoch * SUBSIDY_HALVING_INTERVAL + self.epoch_position() // epoch_subsidy(epoch)

    def cycle(self) -> int:
        return self.epoch() // CYCLE_EPOCHS

    def percentile(self) -> str:
        return f"{_format_float(int(self) / int(Sat.LAST) * 100.0)}%"

    def epoch(self) -> int:
        return _epoch_of(int(self))

    def period(self) -> int:
        return self.height() // DIFFCHANGE_INTERVAL

    def third(self) -> int:
        return self.epoch_position() % epoch_subsidy(self.epoch())

    def epoch_position(self) -> int:
        return int(self) - _STARTING_SATS[self.epoch()]

    def decimal(self) -> Decimal:
        return Decimal(height=self.height(), offset=self.third())

    def rarity(self) -> Rarity:
        return Rarity.from_degree(self.degree())

    def is_common(self) -> bool:
        """Cheap check equivalent to ``rarity() == Rarity.COMMON``."""
        epoch = self.epoch()
        return (int(self) - _STARTING_SATS[epoch]) % epoch_subsidy(epoch) != 0

    def name(self) -> str:
        x = self.SUPPLY - int(self)
        letters = []
        while x > 0:
            letters.append("abcdefghijklmnopqrstuvwxyz"[(x - 1) % 26])
            x = (x - 1) // 26
        return "".join(reversed(letters))


Sat.LAST = Sat(Sat.SUPPLY - 1)