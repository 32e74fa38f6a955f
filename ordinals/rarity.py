"""Rarity classes of satoshis, derived from their degree notation."""

from __future__ import annotations

import enum


class Rarity(enum.IntEnum):
    """How rare a satoshi is, ordered from most to least common."""

    COMMON = 0
    UNCOMMON = 1
    RARE = 2
    EPIC = 3
    LEGENDARY = 4
    MYTHIC = 5

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    @classmethod
    def from_degree(cls, degree) -> "Rarity":
        """Classify a degree (anything with hour, minute, second and third)."""
        hour, minute, second, third = degree.hour, degree.minute, degree.second, degree.third
        if hour == 0 and minute == 0 and second == 0 and third == 0:
            return cls.MYTHIC
        if minute == 0 and second == 0 and third == 0:
            return cls.LEGENDARY
        if minute == 0 and third == 0:
            return cls.EPIC
        if second == 0 and third == 0:
            return cls.RARE
        if third == 0:
            return cls.UNCOMMON
        return cls.COMMON

    @classmethod
    def parse(cls, s: str) -> "Rarity":
        """Parse a lower-case rarity name."""
        for member in cls:
            if str(member) == s:
                return member
        raise ValueError(f"invalid rarity: {s}")