"""Configuration for adaptive table sampling.

This config controls how densely :class:`~cubictable.table.CubicLookupTable`
samples a function and in which floating-point type the samples are stored.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import DTypeLike

from cubictable.utils.validate import (
    validate_float_dtype,
    validate_sampling_parameters,
)

__all__ = ["TableConfig"]


class TableConfig:
    """Sampling parameters shared by lookup tables.

    The defaults reproduce the settings used for the trigonometric table:
    a step between ``1e-5`` and ``1e-3`` and a target precision of ``1e-6``.
    """

    def __init__(
        self,
        dx_min: float = 1e-5,
        dx_max: float = 1e-3,
        df: float = 1e-6,
        dtype: DTypeLike = np.float64,
    ):
        """Initialize configuration.

        Args:
            dx_min:
                Smallest acceptable spacing between consecutive samples.
                Caps the table size where the derivative is large.
                Must satisfy ``0 < dx_min < dx_max``.

            dx_max:
                Largest acceptable spacing between consecutive samples.
                Bounds the interpolation error where the derivative is
                close to zero.

            df:
                Desired precision of the tabulated ``f(x)`` values. The
                builder picks a step ``dx ≈ df / |f'(x)|`` so that the
                first-order change of ``f`` over a step stays near ``df``.
                Must be positive.

            dtype:
                NumPy floating dtype used to store samples and evaluate
                queries.

        Raises:
            ValueError: If the sampling parameters are invalid.
            TypeError: If ``dtype`` is not a floating-point dtype.
        """
        self.dtype = validate_float_dtype(dtype)
        cast = self.dtype.type

        self.dx_min = cast(dx_min)
        self.dx_max = cast(dx_max)
        self.df = cast(df)

        validate_sampling_parameters(self.dx_min, self.dx_max, self.df)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(dx_min={self.dx_min!r}, dx_max={self.dx_max!r}, "
            f"df={self.df!r}, dtype={self.dtype.name!r})"
        )
