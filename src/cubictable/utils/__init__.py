"""Utility functions for the cubictable package."""

from .validate import (
    validate_callable,
    validate_float_dtype,
    validate_sampling_parameters,
    validate_table_parameters,
)

__all__ = [
    "validate_callable",
    "validate_float_dtype",
    "validate_sampling_parameters",
    "validate_table_parameters",
]
