"""Adaptively sampled lookup table with cubic interpolation.

Provides :class:`CubicLookupTable`, which samples a scalar function ``f`` and
its derivative ``f'`` once on a closed interval ``[a, b]`` and then answers
queries for ``f(x)`` by cubic Hermite interpolation and for ``f'(x)`` by
linear interpolation between the two stored samples that bracket ``x``.

Two common entry points are:

* Direct construction with ``(a, b, dx_min, dx_max, df, function, derivative)``.
* :meth:`CubicLookupTable.from_config` with a :class:`~cubictable.config.TableConfig`
  holding the sampling parameters.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from cubictable.config import TableConfig
from cubictable.logger import cubictable_logger
from cubictable.table.builder import build_samples, check_strictly_increasing
from cubictable.table.interpolation import (
    hermite_cubic,
    linear_derivative,
    resolve_bracket,
)
from cubictable.utils.types import ScalarFunction

__all__ = ["CubicLookupTable"]


class CubicLookupTable:
    """Lookup table for ``f(x)`` and ``f'(x)`` on ``[a, b]``.

    The spacing between consecutive samples is ``df / |f'(x)|`` clamped to
    ``[dx_min, dx_max]``, so the root-mean-square error of the interpolated
    ``f`` over ``[a, b]`` stays around ``df`` or below. Queries at a stored
    sample return the stored values exactly. Queries outside ``[a, b]`` are
    extrapolated from the first or last pair of samples and carry no accuracy
    guarantee.

    The table is built once in ``__init__`` and never changes afterwards; the
    sample array is read-only, so a single instance can be queried from many
    threads without locking. ``function`` and ``derivative`` are only called
    during construction and are not kept.

    Attributes:
        a: Lower end of the tabulated interval.
        b: Upper end of the tabulated interval.
        dx_min: Smallest spacing between consecutive samples.
        dx_max: Largest spacing between consecutive samples.
        df: Target precision of the tabulated ``f(x)`` values.
        dtype: NumPy floating dtype of samples and query results.

    Example:
        >>> import numpy as np
        >>> from cubictable import CubicLookupTable
        >>>
        >>> table = CubicLookupTable(
        ...     0.0, np.pi / 2, 1e-5, 1e-3, 1e-6, np.sin, np.cos,
        ... )
        >>> bool(abs(table.evaluate(0.3) - np.sin(0.3)) < 1e-9)
        True
        >>> float(table.evaluate(0.0))
        0.0
        >>> table.evaluate_derivative(np.array([0.0, np.pi / 2])).shape
        (2,)
    """

    def __init__(
        self,
        a: float,
        b: float,
        dx_min: float,
        dx_max: float,
        df: float,
        function: ScalarFunction,
        derivative: ScalarFunction,
        *,
        dtype: DTypeLike = np.float64,
    ) -> None:
        """Samples ``function`` and ``derivative`` on ``[a, b]``.

        Args:
            a: Lower end of the interval, ``a < b``.
            b: Upper end of the interval.
            dx_min: Smallest acceptable step, ``0 < dx_min < dx_max``.
            dx_max: Largest acceptable step.
            df: Desired precision for ``f(x)``, ``df > 0``.
            function: Callable computing ``f(x)`` for a scalar ``x``.
            derivative: Callable computing ``f'(x)`` for a scalar ``x``.
            dtype: Floating dtype used for storage and arithmetic. Default is
                ``np.float64``.

        Raises:
            ValueError: If ``a >= b``, ``dx_min <= 0``, ``dx_max <= dx_min``,
                ``df <= 0``, any of them is not finite, or ``dx_min`` is below
                the resolution of ``dtype`` inside ``[a, b]``.
            TypeError: If ``function`` or ``derivative`` is not callable or
                ``dtype`` is not a floating dtype.
        """
        samples = build_samples(
            a, b, dx_min, dx_max, df, function, derivative, dtype=dtype
        )
        self._dtype = samples.dtype
        cast = self._dtype.type

        # one contiguous row per column so that searchsorted needs no copy
        columns = np.ascontiguousarray(samples.T)
        columns.setflags(write=False)
        check_strictly_increasing(columns[0])
        self._columns = columns

        self._a = cast(a)
        self._b = cast(b)
        self._dx_min = cast(dx_min)
        self._dx_max = cast(dx_max)
        self._df = cast(df)

    @classmethod
    def from_config(
        cls,
        a: float,
        b: float,
        function: ScalarFunction,
        derivative: ScalarFunction,
        config: TableConfig | None = None,
    ) -> CubicLookupTable:
        """Builds a table with the sampling parameters held by ``config``.

        Args:
            a: Lower end of the interval.
            b: Upper end of the interval.
            function: Callable computing ``f(x)``.
            derivative: Callable computing ``f'(x)``.
            config: Sampling parameters. If ``None``, ``TableConfig()`` defaults are used.

        Returns:
            A new :class:`CubicLookupTable`.
        """
        config = TableConfig() if config is None else config
        return cls(
            a,
            b,
            config.dx_min,
            config.dx_max,
            config.df,
            function,
            derivative,
            dtype=config.dtype,
        )

    @property
    def a(self) -> np.floating:
        return self._a

    @property
    def b(self) -> np.floating:
        return self._b

    @property
    def dx_min(self) -> np.floating:
        return self._dx_min

    @property
    def dx_max(self) -> np.floating:
        return self._dx_max

    @property
    def df(self) -> np.floating:
        return self._df

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def size(self) -> int:
        """Number of ``(x, f(x), f'(x))`` samples stored in the table."""
        return int(self._columns.shape[1])

    @property
    def samples(self) -> NDArray[np.floating]:
        """Read-only ``(size, 3)`` view of the samples, one ``(x, f, f')`` row each."""
        return self._columns.T

    @property
    def x(self) -> NDArray[np.floating]:
        """Read-only, strictly increasing sample positions."""
        return self._columns[0]

    @property
    def f_values(self) -> NDArray[np.floating]:
        """Read-only stored ``f(x)`` values."""
        return self._columns[1]

    @property
    def fprime_values(self) -> NDArray[np.floating]:
        """Read-only stored ``f'(x)`` values."""
        return self._columns[2]

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(a={self._a!r}, b={self._b!r}, "
            f"dx_min={self._dx_min!r}, dx_max={self._dx_max!r}, df={self._df!r}, "
            f"dtype={self._dtype.name!r}, size={self.size})"
        )

    def __call__(self, x: ArrayLike) -> Any:
        """Alias of :meth:`evaluate`."""
        return self.evaluate(x)

    def evaluate(self, x: ArrayLike) -> Any:
        """Returns ``f(x)`` from the table.

        Stored samples are returned exactly. Between samples the value is the
        cubic Hermite interpolant of the bracketing pair. Outside ``[a, b]``
        the first or last cubic is extrapolated without any error being
        raised; such values may be wildly inaccurate.

        Args:
            x: Scalar or array of query points.

        Returns:
            A scalar of the table dtype for scalar ``x``, otherwise an array
            with the shape of ``x``.

        Raises:
            InternalConsistencyError: If a bracket with non-positive width is met.
        """
        x_arr, lo, hi = self._locate(x)
        xs, fs, fps = self._columns

        out = hermite_cubic(x_arr, xs[lo], xs[hi], fs[lo], fs[hi], fps[lo], fps[hi])
        out = np.where(x_arr == xs[lo], fs[lo], out)
        out = np.where(x_arr == xs[hi], fs[hi], out)
        return self._as_output(out, x_arr)

    def evaluate_derivative(self, x: ArrayLike) -> Any:
        """Returns ``f'(x)`` from the table.

        Stored samples are returned exactly. Between samples the derivative
        is interpolated linearly, since a cubic would need second
        derivatives. Outside ``[a, b]`` the first or last segment is
        extrapolated.

        Args:
            x: Scalar or array of query points.

        Returns:
            A scalar of the table dtype for scalar ``x``, otherwise an array
            with the shape of ``x``.

        Raises:
            InternalConsistencyError: If a bracket with non-positive width is met.
        """
        x_arr, lo, hi = self._locate(x)
        xs, _, fps = self._columns

        out = linear_derivative(x_arr, xs[lo], xs[hi], fps[lo], fps[hi])
        out = np.where(x_arr == xs[lo], fps[lo], out)
        out = np.where(x_arr == xs[hi], fps[hi], out)
        return self._as_output(out, x_arr)

    def _locate(
        self, x: ArrayLike
    ) -> tuple[NDArray[np.floating], NDArray[np.intp], NDArray[np.intp]]:
        x_arr = np.asarray(x, dtype=self._dtype)
        outside = (x_arr < self._a) | (x_arr > self._b)
        if np.any(outside):
            cubictable_logger.debug(
                "%d query point(s) outside [%s, %s]; extrapolating from the boundary bracket.",
                int(np.count_nonzero(outside)), self._a, self._b,
            )
        lo, hi = resolve_bracket(self._columns[0], x_arr)
        return x_arr, lo, hi

    def _as_output(self, out: NDArray[np.floating], x_arr: NDArray[np.floating]) -> Any:
        out = np.asarray(out, dtype=self._dtype)
        if x_arr.ndim == 0:
            return out[()]
        return out
