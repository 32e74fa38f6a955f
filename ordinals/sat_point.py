"""Outpoints and satpoints: locations of sats within transaction outputs."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass

from .inscription_id import format_txid, parse_txid

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_unsigned(text: str, maximum: int) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    value = int(text)
    if value > maximum:
        raise ValueError(f"number too large to fit in target type: {text!r}")
    return value


@dataclass(frozen=True, order=True)
class OutPoint:
    """A transaction output, given by txid (internal byte order) and vout."""

    txid: bytes
    vout: int

    def __str__(self) -> str:
        return f"{format_txid(self.txid)}:{self.vout}"

    @classmethod
    def null(cls) -> "OutPoint":
        return cls(bytes(32), _U32_MAX)

    @classmethod
    def parse(cls, s: str) -> "OutPoint":
        if len(s) > 75:
            raise ValueError("outpoint string too long")
        txid_text, sep, vout_text = s.partition(":")
        if not sep or not vout_text:
            raise ValueError(f"invalid outpoint: {s}")
        txid = parse_txid(txid_text)
        if len(vout_text) > 1 and vout_text.startswith("0"):
            raise ValueError("vout cannot have leading zeros")
        if not vout_text.isdigit() or not vout_text.isascii():
            raise ValueError(f"invalid vout: {vout_text}")
        return cls(txid, _parse_unsigned(vout_text, _U32_MAX))


@dataclass(frozen=True, order=True)
class SatPoint:
    """A sat's position: an outpoint and an offset into that output."""

    outpoint: OutPoint
    offset: int

    _STRUCT = struct.Struct("<32sIQ")

    def __str__(self) -> str:
        return f"{self.outpoint}:{self.offset}"

    @classmethod
    def parse(cls, s: str) -> "SatPoint":
        outpoint, sep, offset = s.rpartition(":")
        if not sep:
            raise ValueError(f"invalid satpoint: {s}")
        return cls(OutPoint.parse(outpoint), _parse_unsigned(offset, _U64_MAX))

    def encode(self) -> bytes:
        """Consensus encoding: txid, vout (u32 LE), offset (u64 LE)."""
        return self._STRUCT.pack(self.outpoint.txid, self.outpoint.vout, self.offset)

    @classmethod
    def decode(cls, data: bytes) -> "SatPoint":
        if len(data) != cls._STRUCT.size:
            raise ValueError(
                f"satpoint encoding must be {cls._STRUCT.size} bytes, got {len(data)}"
            )
        txid, vout, offset = cls._STRUCT.unpack(data)
        return cls(OutPoint(txid, vout), offset)