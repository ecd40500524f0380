"""Provides adaptively sampled lookup tables with cubic interpolation."""

from importlib.metadata import PackageNotFoundError, version

from cubictable.config import TableConfig
from cubictable.exceptions import InternalConsistencyError
from cubictable.table.cubic_table import CubicLookupTable
from cubictable.trig_table import CubicTrigTable

try:
    __version__ = version("cubictable")
except PackageNotFoundError:
    pass

__all__ = [
    "CubicLookupTable",
    "CubicTrigTable",
    "InternalConsistencyError",
    "TableConfig",
]
