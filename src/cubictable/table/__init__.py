"""Adaptive sampling and interpolation of tabulated functions."""

from cubictable.table.cubic_table import CubicLookupTable

__all__ = ["CubicLookupTable"]
