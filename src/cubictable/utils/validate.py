"""Validation utilities for lookup-table construction."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

__all__ = [
    "validate_callable",
    "validate_float_dtype",
    "validate_sampling_parameters",
    "validate_table_parameters",
]


def validate_float_dtype(dtype: DTypeLike) -> np.dtype:
    """Converts ``dtype`` to a NumPy dtype and checks that it is a real floating type.

    Args:
        dtype: Anything accepted by ``np.dtype``, e.g. ``np.float32``,
            ``"float64"`` or ``np.longdouble``.

    Returns:
        The resolved ``np.dtype``.

    Raises:
        TypeError: If ``dtype`` is not a real floating-point dtype.
    """
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise TypeError(f"dtype must be a floating-point dtype; got {dtype!r}.") from e
    if not np.issubdtype(resolved, np.floating):
        raise TypeError(f"dtype must be a floating-point dtype; got {resolved}.")
    return resolved


def validate_callable(function: Any, name: str) -> Callable[[Any], Any]:
    """Checks that ``function`` can be called, returning it unchanged."""
    if not callable(function):
        raise TypeError(f"{name} must be callable; got {type(function).__name__}.")
    return function


def validate_sampling_parameters(dx_min: Any, dx_max: Any, df: Any) -> None:
    """Validates the step bounds and the target precision of a table.

    Requirements:
      - all three values are finite;
      - ``0 < dx_min < dx_max``;
      - ``df > 0``.

    Comparisons are written so that NaN inputs fail them.

    Args:
        dx_min: Smallest allowed spacing between consecutive samples.
        dx_max: Largest allowed spacing between consecutive samples.
        df: Target precision for the tabulated function values.

    Raises:
        ValueError: If any requirement is violated.
    """
    for label, value in (("dx_min", dx_min), ("dx_max", dx_max), ("df", df)):
        if not np.isfinite(value):
            raise ValueError(f"{label} must be finite; got {value!r}.")
    if not dx_min > 0:
        raise ValueError(f"dx_min must be > 0; got {dx_min!r}.")
    if not dx_max > dx_min:
        raise ValueError(
            f"dx_max must be > dx_min; got dx_min={dx_min!r}, dx_max={dx_max!r}."
        )
    if not df > 0:
        raise ValueError(f"df must be > 0; got {df!r}.")


def validate_table_parameters(
    a: Any,
    b: Any,
    dx_min: Any,
    dx_max: Any,
    df: Any,
) -> None:
    """Validates the interval and the sampling parameters of a table.

    Args:
        a: Lower end of the tabulated interval.
        b: Upper end of the tabulated interval.
        dx_min: Smallest allowed spacing between consecutive samples.
        dx_max: Largest allowed spacing between consecutive samples.
        df: Target precision for the tabulated function values.

    Raises:
        ValueError: If ``a`` or ``b`` is not finite, if ``a >= b``, or if the
            sampling parameters are invalid (see
            :func:`validate_sampling_parameters`).
    """
    if not (np.isfinite(a) and np.isfinite(b)):
        raise ValueError(f"interval ends must be finite; got a={a!r}, b={b!r}.")
    if not a < b:
        raise ValueError(f"interval must satisfy a < b; got a={a!r}, b={b!r}.")
    validate_sampling_parameters(dx_min, dx_max, df)
