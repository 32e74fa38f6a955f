"""Recognise which notation a user-supplied object string is written in."""

from __future__ import annotations

import enum
import re


class Representation(enum.Enum):
    """Notations an object string may use, tried in declaration order."""

    ADDRESS = r"^(bc|BC|tb|TB|bcrt|BCRT)1.*$"
    DECIMAL = r"^.*\..*$"
    DEGREE = r"^.*°.*′.*″(.*‴)?$"
    HASH = r"^[0-9A-Fa-f]{64}$"
    INSCRIPTION_ID = r"^[0-9A-Fa-f]{64}i\d+$"
    INTEGER = r"^[0-9]*$"
    NAME = r"^[a-z]{1,11}$"
    OUT_POINT = r"^[0-9A-Fa-f]{64}:\d+$"
    PERCENTILE = r"^.*%$"
    SAT_POINT = r"^[0-9A-Fa-f]{64}:\d+:\d+$"

    @property
    def pattern(self) -> str:
        return self.value

    @classmethod
    def parse(cls, s: str) -> "Representation":
        for representation, regex in _COMPILED:
            if regex.fullmatch(s):
                return representation
        raise ValueError("unrecognized object")


_COMPILED = [(r, re.compile(r.value)) for r in Representation]