"""Adaptive sampling of a function and its derivative on a closed interval.

The builder walks from ``a`` to ``b`` and places each new sample one step
after the previous one. The step is chosen from the derivative at the last
sample, ``dx = df / |f'(x)|``, and clamped to ``[dx_min, dx_max]``: samples
are dense where ``f`` changes quickly and sparse where it is flat, so the
first-order change ``|f'(x)| * dx`` stays close to ``df`` across the domain.
The final step is clamped to ``b``, so it may be shorter than ``dx_min``.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray

from cubictable.exceptions import InternalConsistencyError
from cubictable.logger import cubictable_logger
from cubictable.utils.types import ScalarFunction
from cubictable.utils.validate import (
    validate_callable,
    validate_float_dtype,
    validate_table_parameters,
)

__all__ = ["next_step", "build_samples", "check_strictly_increasing"]


def next_step(fprime_value: Any, dx_min: Any, dx_max: Any, df: Any) -> Any:
    """Returns the spacing to the next sample given the derivative at the current one.

    Args:
        fprime_value: Derivative ``f'(x)`` at the current sample.
        dx_min: Lower clamp for the step.
        dx_max: Upper clamp for the step, also used where ``f'(x) == 0``.
        df: Target precision.

    Returns:
        ``df / |f'(x)|`` clamped to ``[dx_min, dx_max]``, in the type of the inputs.
    """
    slope = abs(fprime_value)
    dx = dx_max if slope == 0 else df / slope
    # a NaN slope falls through both comparisons and ends up at dx_min
    return min(max(dx_min, dx), dx_max)


def build_samples(
    a: float,
    b: float,
    dx_min: float,
    dx_max: float,
    df: float,
    function: ScalarFunction,
    derivative: ScalarFunction,
    *,
    dtype: DTypeLike = np.float64,
) -> NDArray[np.floating]:
    """Samples ``function`` and ``derivative`` adaptively on ``[a, b]``.

    All parameters are converted to ``dtype`` before they are validated, so a
    value that underflows to zero in a narrow dtype is rejected like an
    explicit zero.

    Args:
        a: Lower end of the interval.
        b: Upper end of the interval, ``a < b``.
        dx_min: Smallest step, ``0 < dx_min < dx_max``.
        dx_max: Largest step.
        df: Target precision, ``df > 0``.
        function: Callable returning ``f(x)`` for a scalar ``x``.
        derivative: Callable returning ``f'(x)`` for a scalar ``x``.
        dtype: Floating dtype of the samples and of the stepping arithmetic.

    Returns:
        Read-only array of shape ``(N, 3)`` whose rows are ``(x, f(x), f'(x))``
        in strictly increasing ``x``, with ``N >= 2``, first row at ``a`` and
        last row at ``b``.

    Raises:
        ValueError: If the parameters are invalid, or if ``dx_min`` is too
            small to advance ``x`` at the resolution of ``dtype``.
        TypeError: If ``function`` or ``derivative`` is not callable, or if
            ``dtype`` is not a floating dtype.
    """
    validate_callable(function, "function")
    validate_callable(derivative, "derivative")
    dtype = validate_float_dtype(dtype)
    cast = dtype.type

    a, b = cast(a), cast(b)
    dx_min, dx_max, df = cast(dx_min), cast(dx_max), cast(df)
    validate_table_parameters(a, b, dx_min, dx_max, df)

    rows: list[tuple[Any, Any, Any]] = []
    non_finite = 0

    x = a
    dx = cast(0)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        while x < b:
            x_next = min(x + dx, b)
            if rows and not x_next > x:
                raise ValueError(
                    f"dx_min={dx_min!r} is below the {dtype.name} resolution at "
                    f"x={x!r}; the table cannot advance towards b={b!r}."
                )
            x = x_next

            fx = cast(function(x))
            fpx = cast(derivative(x))
            if not (np.isfinite(fx) and np.isfinite(fpx)):
                non_finite += 1
            rows.append((x, fx, fpx))

            dx = next_step(fpx, dx_min, dx_max, df)

    if non_finite:
        cubictable_logger.warning(
            "%d of %d samples on [%s, %s] have non-finite f(x) or f'(x); "
            "interpolated values near them are meaningless.",
            non_finite, len(rows), a, b,
        )

    samples = np.array(rows, dtype=dtype)
    samples.setflags(write=False)

    cubictable_logger.info(
        "Sampled [%s, %s] with %d points (dx_min=%s, dx_max=%s, df=%s, dtype=%s).",
        a, b, samples.shape[0], dx_min, dx_max, df, dtype.name,
    )
    return samples


def check_strictly_increasing(x: NDArray[np.floating]) -> None:
    """Raises InternalConsistencyError unless ``x`` holds at least two strictly increasing values."""
    if x.ndim != 1 or x.shape[0] < 2:
        raise InternalConsistencyError(
            f"a table needs at least two samples in a 1D sequence; got shape {x.shape}."
        )
    steps = np.diff(x)
    if not np.all(steps > 0):
        k = int(np.argmin(steps > 0))
        raise InternalConsistencyError(
            f"samples are not strictly increasing: x[{k}]={x[k]!r}, x[{k + 1}]={x[k + 1]!r}."
        )
