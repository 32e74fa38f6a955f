"""Ordinal theory for satoshis: sat notation and rarity, inscription ids, satpoints and inscription envelopes."""

__version__ = "0.1.0"