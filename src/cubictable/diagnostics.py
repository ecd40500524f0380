"""Accuracy and sampling diagnostics for lookup tables."""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
from numpy.typing import NDArray

from cubictable.table.cubic_table import CubicLookupTable
from cubictable.utils.types import ScalarFunction

__all__ = [
    "uniform_grid",
    "rms_error",
    "max_abs_error",
    "step_summary",
    "format_table_diagnostics",
]


def uniform_grid(
    table: CubicLookupTable,
    n_points: int = 10_000,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> NDArray[np.floating]:
    """Returns ``n_points`` evenly spaced points, by default spanning ``[table.a, table.b]``."""
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2; got {n_points}.")
    lo = table.a if lower is None else lower
    hi = table.b if upper is None else upper
    return np.linspace(lo, hi, n_points, dtype=table.dtype)


def _errors(
    table: CubicLookupTable,
    reference: ScalarFunction,
    *,
    n_points: int,
    lower: Optional[float],
    upper: Optional[float],
    derivative: bool,
) -> NDArray[np.floating]:
    x = uniform_grid(table, n_points, lower, upper)
    approx = table.evaluate_derivative(x) if derivative else table.evaluate(x)
    exact = np.asarray(reference(x), dtype=table.dtype)
    return np.asarray(approx, dtype=table.dtype) - exact


def rms_error(
    table: CubicLookupTable,
    reference: ScalarFunction,
    *,
    n_points: int = 10_000,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
    derivative: bool = False,
) -> float:
    """Root-mean-square difference between the table and ``reference`` on a uniform grid.

    Args:
        table: Table under test.
        reference: Vectorized callable giving the exact ``f(x)`` (or ``f'(x)``
            when ``derivative`` is True) on an array of points.
        n_points: Number of grid points.
        lower: Start of the grid. Defaults to ``table.a``.
        upper: End of the grid. Defaults to ``table.b``.
        derivative: Compare :meth:`CubicLookupTable.evaluate_derivative`
            instead of :meth:`CubicLookupTable.evaluate`.

    Returns:
        The RMS error as a Python float.
    """
    diff = _errors(
        table, reference,
        n_points=n_points, lower=lower, upper=upper, derivative=derivative,
    )
    return float(np.sqrt(np.mean(diff * diff)))


def max_abs_error(
    table: CubicLookupTable,
    reference: ScalarFunction,
    *,
    n_points: int = 10_000,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
    derivative: bool = False,
) -> float:
    """Largest absolute difference between the table and ``reference``; see :func:`rms_error`."""
    diff = _errors(
        table, reference,
        n_points=n_points, lower=lower, upper=upper, derivative=derivative,
    )
    return float(np.max(np.abs(diff)))


def step_summary(table: CubicLookupTable) -> Dict[str, Any]:
    """Summarizes the spacing between consecutive samples.

    Returns:
        Dictionary with ``n_samples``, ``step_min``, ``step_max`` and
        ``step_mean``. The last step may be shorter than ``dx_min`` because
        the final sample is clamped to ``b``.
    """
    steps = np.diff(np.asarray(table.x, dtype=float))
    return {
        "n_samples": table.size,
        "step_min": float(np.min(steps)),
        "step_max": float(np.max(steps)),
        "step_mean": float(np.mean(steps)),
    }


def format_table_diagnostics(
    table: CubicLookupTable,
    reference: Optional[ScalarFunction] = None,
    *,
    n_points: int = 10_000,
    decimals: int = 4,
) -> str:
    """Format table diagnostics into a human-readable string.

    Args:
      table: Table to describe.
      reference: Optional vectorized exact ``f``; when given, the RMS and
        maximum errors on ``[a, b]`` are included.
      n_points: Grid size for the error estimates.
      decimals: Number of significant digits for floating-point numbers.

    Returns:
      A formatted string summarizing the table.
    """
    steps = step_summary(table)
    lines = [
        "=== Lookup Table Diagnostics ===",
        f"interval: [{float(table.a):.{decimals}g}, {float(table.b):.{decimals}g}]",
        f"dtype: {table.dtype.name}",
        f"dx_min={float(table.dx_min):.{decimals}g}, "
        f"dx_max={float(table.dx_max):.{decimals}g}, "
        f"df={float(table.df):.{decimals}g}",
        f"samples: {steps['n_samples']}",
        f"step_min={steps['step_min']:.{decimals}g}, "
        f"step_max={steps['step_max']:.{decimals}g}, "
        f"step_mean={steps['step_mean']:.{decimals}g}",
    ]
    if reference is not None:
        rms = rms_error(table, reference, n_points=n_points)
        worst = max_abs_error(table, reference, n_points=n_points)
        lines.append(
            f"rms_error={rms:.{decimals}g}, max_abs_error={worst:.{decimals}g} "
            f"({n_points} points)"
        )
    return "\n".join(lines)
