"""Bracket search and interpolation kernels for sampled functions.

All functions are vectorized: ``x`` may be a scalar or an array of query
points, and the returned arrays have the shape of ``x``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from cubictable.exceptions import InternalConsistencyError

__all__ = ["resolve_bracket", "hermite_cubic", "linear_derivative"]


def resolve_bracket(
    x_samples: NDArray[np.floating],
    x: NDArray[np.floating],
) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """Finds the indices ``(k, k + 1)`` of the samples used to interpolate at ``x``.

    Policy:
      - ``x < x_samples[0]``: the first two samples (extrapolation).
      - ``x > x_samples[-1]``: the last two samples (extrapolation).
      - otherwise binary search, so that ``x_samples[k] <= x < x_samples[k + 1]``,
        except at the last sample where ``k = N - 2``.

    Args:
        x_samples: Strictly increasing sample positions, at least two of them.
        x: Query points.

    Returns:
        Arrays ``(lo, hi)`` of indices with ``hi == lo + 1`` and the shape of ``x``.

    Raises:
        InternalConsistencyError: If fewer than two samples are given or if any
            selected bracket has ``x_samples[hi] <= x_samples[lo]``.
    """
    n = x_samples.shape[0]
    if n < 2:
        raise InternalConsistencyError(f"a bracket needs at least two samples; got {n}.")

    lo = np.clip(np.searchsorted(x_samples, x, side="right") - 1, 0, n - 2)
    hi = lo + 1

    width = x_samples[hi] - x_samples[lo]
    if not np.all(width > 0):
        bad = np.flatnonzero(np.ravel(~(width > 0)))[0]
        k = int(np.ravel(lo)[bad])
        raise InternalConsistencyError(
            f"x_(k+1) <= x_(k) for k={k}: x_k={x_samples[k]!r}, "
            f"x_(k+1)={x_samples[k + 1]!r}, query x={np.ravel(x)[bad]!r}."
        )
    return lo, hi


def hermite_cubic(
    x: NDArray[np.floating],
    xk: NDArray[np.floating],
    xkp1: NDArray[np.floating],
    fk: NDArray[np.floating],
    fkp1: NDArray[np.floating],
    fpk: NDArray[np.floating],
    fpkp1: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Evaluates the cubic matching ``f`` and ``f'`` at both ends of ``[xk, xkp1]``.

    With ``h = xkp1 - xk``, ``df = fkp1 - fk`` and ``s = fpk + fpkp1`` the
    cubic is written in nested form around ``xk``::

        b = (3 df - (s + fpk) h) / h**2
        c = (s h - 2 df) / h**3
        f(x) ≈ fk + (fpk + (b + c (x - xk)) (x - xk)) (x - xk)
    """
    h = xkp1 - xk
    h2 = h * h
    delta_f = fkp1 - fk
    slope_sum = fpkp1 + fpk

    b = (3 * delta_f - (slope_sum + fpk) * h) / h2
    c = (slope_sum * h - 2 * delta_f) / (h2 * h)

    t = x - xk
    return fk + (fpk + (b + c * t) * t) * t


def linear_derivative(
    x: NDArray[np.floating],
    xk: NDArray[np.floating],
    xkp1: NDArray[np.floating],
    fpk: NDArray[np.floating],
    fpkp1: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Linearly interpolates ``f'`` on ``[xk, xkp1]``.

    A cubic would need second derivatives, which the table does not store.
    """
    return fpk + (fpkp1 - fpk) * (x - xk) / (xkp1 - xk)
