"""Inscription identifiers: a transaction id and an inscription index."""

from __future__ import annotations

import re
from dataclasses import dataclass

_TXID_LEN = 64
_MIN_LEN = _TXID_LEN + 2
_U32_MAX = 2**32 - 1
_HEX = re.compile(r"[0-9A-Fa-f]{64}")
_UNSIGNED = re.compile(r"\+?[0-9]+")


class InscriptionIdError(ValueError):
    """Raised when an inscription id cannot be parsed.

    ``kind`` is one of ``character``, ``length``, ``separator``, ``txid``
    or ``index``; ``value`` holds the offending character, length or text.
    """

    def __init__(self, kind: str, value, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.value = value


def parse_txid(s: str) -> bytes:
    """Parse a txid from its hex display form into internal byte order."""
    if len(s) != _TXID_LEN:
        raise ValueError(f"bad hex string length {len(s)} (expected {_TXID_LEN})")
    if not _HEX.fullmatch(s):
        bad = next(c for c in s if c not in "0123456789abcdefABCDEF")
        raise ValueError(f"invalid hex character {bad!r}")
    return bytes.fromhex(s)[::-1]


def format_txid(txid: bytes) -> str:
    """Format a txid held in internal byte order as display hex."""
    return txid[::-1].hex()


def _parse_u32(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    value = int(text)
    if value > _U32_MAX:
        raise ValueError(f"number too large to fit in target type: {text!r}")
    return value


@dataclass(frozen=True, order=True)
class InscriptionId:
    """Identifies an inscription by its reveal txid and index."""

    txid: bytes
    index: int = 0

    def __str__(self) -> str:
        return f"{format_txid(self.txid)}i{self.index}"

    @classmethod
    def from_txid(cls, txid: bytes) -> "InscriptionId":
        return cls(txid=txid, index=0)

    @classmethod
    def parse(cls, s: str) -> "InscriptionId":
        for char in s:
            if not char.isascii():
                raise InscriptionIdError("character", char, f"invalid character: '{char}'")
        if len(s) < _MIN_LEN:
            raise InscriptionIdError("length", len(s), f"invalid length: {len(s)}")
        separator = s[_TXID_LEN]
        if separator != "i":
            raise InscriptionIdError(
                "separator", separator, f"invalid seprator: `{separator}`"
            )
        try:
            txid = parse_txid(s[:_TXID_LEN])
        except ValueError as err:
            raise InscriptionIdError("txid", s[:_TXID_LEN], f"invalid txid: {err}") from err
        try:
            index = _parse_u32(s[_TXID_LEN + 1 :])
        except ValueError as err:
            raise InscriptionIdError(
                "index", s[_TXID_LEN + 1 :], f"invalid index: {err}"
            ) from err
        return cls(txid=txid, index=index)