"""Objects a user may name on the command line: sats, ids, hashes and more."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .inscription_id import InscriptionId
from .representation import Representation
from .sat import Sat
from .sat_point import OutPoint, SatPoint

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_BECH32_CONST = 1
_BECH32M_CONST = 0x2BC830A3
_HRPS = {"bc", "tb", "bcrt"}
_HEX64 = re.compile(r"[0-9A-Fa-f]{64}")
_U128_MAX = 2**128 - 1


def _polymod(values) -> int:
    generators = [0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i, gen in enumerate(generators):
            if (top >> i) & 1:
                chk ^= gen
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _convert_bits(data, from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = bits = 0
    out = []
    maxv = (1 << to_bits) - 1
    for value in data:
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or (acc << (to_bits - bits)) & maxv:
        raise ValueError("invalid padding in address")
    return out


@dataclass(frozen=True)
class Address:
    """A segwit address: human-readable part, witness version and program."""

    hrp: str
    version: int
    program: bytes

    @classmethod
    def parse(cls, s: str) -> "Address":
        if s.lower() != s and s.upper() != s:
            raise ValueError("address has mixed case")
        text = s.lower()
        if len(text) > 90:
            raise ValueError("address too long")
        hrp, sep, data_text = text.rpartition("1")
        if not sep or hrp not in _HRPS:
            raise ValueError(f"unknown address prefix: {hrp}")
        if len(data_text) < 7 or any(c not in _CHARSET for c in data_text):
            raise ValueError("invalid address data")
        data = [_CHARSET.index(c) for c in data_text]
        checksum = _polymod(_hrp_expand(hrp) + data)
        if checksum not in (_BECH32_CONST, _BECH32M_CONST):
            raise ValueError("invalid address checksum")
        version = data[0]
        if version > 16:
            raise ValueError("invalid witness version")
        program = bytes(_convert_bits(data[1:-6], 5, 8, False))
        if not 2 <= len(program) <= 40:
            raise ValueError("invalid witness program length")
        if version == 0:
            if len(program) not in (20, 32):
                raise ValueError("invalid segwit v0 program length")
            if checksum != _BECH32_CONST:
                raise ValueError("segwit v0 must use bech32")
        elif checksum != _BECH32M_CONST:
            raise ValueError("segwit v1+ must use bech32m")
        return cls(hrp, version, program)

    def __str__(self) -> str:
        data = [self.version] + _convert_bits(self.program, 8, 5, True)
        const = _BECH32_CONST if self.version == 0 else _BECH32M_CONST
        polymod = _polymod(_hrp_expand(self.hrp) + data + [0] * 6) ^ const
        checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
        return self.hrp + "1" + "".join(_CHARSET[d] for d in data + checksum)


ObjectValue = Union[Address, bytes, InscriptionId, int, OutPoint, Sat, SatPoint]


@dataclass(frozen=True)
class Object:
    """A parsed object; ``kind`` names which variant ``value`` holds."""

    kind: str
    value: ObjectValue

    @classmethod
    def parse(cls, s: str) -> "Object":
        representation = Representation.parse(s)
        if representation is Representation.ADDRESS:
            return cls("address", Address.parse(s))
        if representation in (
            Representation.DECIMAL,
            Representation.DEGREE,
            Representation.PERCENTILE,
            Representation.NAME,
        ):
            return cls("sat", Sat.parse(s))
        if representation is Representation.HASH:
            if not _HEX64.fullmatch(s):
                raise ValueError(f"invalid hash: {s}")
            return cls("hash", bytes.fromhex(s))
        if representation is Representation.INSCRIPTION_ID:
            return cls("inscription_id", InscriptionId.parse(s))
        if representation is Representation.INTEGER:
            if not s:
                raise ValueError("cannot parse integer from empty string")
            value = int(s)
            if value > _U128_MAX:
                raise ValueError("number too large to fit in target type")
            return cls("integer", value)
        if representation is Representation.OUT_POINT:
            return cls("outpoint", OutPoint.parse(s))
        return cls("satpoint", SatPoint.parse(s))

    def __str__(self) -> str:
        if self.kind == "hash":
            return self.value.hex()
        return str(self.value)