"""Tests for cubictable.utils.validate."""

import numpy as np
import pytest

from cubictable.utils.validate import (
    validate_callable,
    validate_float_dtype,
    validate_sampling_parameters,
    validate_table_parameters,
)


def test_validate_table_parameters_accepts_valid_input():
    """Tests that a well-formed parameter set passes silently."""
    validate_table_parameters(0.0, 1.0, 1e-5, 1e-3, 1e-6)
    validate_table_parameters(-3.0, -2.0, 0.1, 0.2, 1.0)


@pytest.mark.parametrize(
    "a, b, dx_min, dx_max, df, match",
    [
        (1.0, 1.0, 1e-5, 1e-3, 1e-6, "a < b"),
        (2.0, 1.0, 1e-5, 1e-3, 1e-6, "a < b"),
        (0.0, 1.0, 0.0, 1e-3, 1e-6, "dx_min"),
        (0.0, 1.0, -1e-5, 1e-3, 1e-6, "dx_min"),
        (0.0, 1.0, 1e-3, 1e-3, 1e-6, "dx_max"),
        (0.0, 1.0, 1e-3, 1e-5, 1e-6, "dx_max"),
        (0.0, 1.0, 1e-5, 1e-3, 0.0, "df"),
        (0.0, 1.0, 1e-5, 1e-3, -1e-6, "df"),
    ],
)
def test_validate_table_parameters_rejects_invalid_input(a, b, dx_min, dx_max, df, match):
    """Tests that each violated constraint raises ValueError naming the parameter."""
    with pytest.raises(ValueError, match=match):
        validate_table_parameters(a, b, dx_min, dx_max, df)


@pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
def test_validate_table_parameters_rejects_non_finite_interval(bad):
    """Tests that non-finite interval ends are rejected."""
    with pytest.raises(ValueError, match="finite"):
        validate_table_parameters(0.0, bad, 1e-5, 1e-3, 1e-6)
    with pytest.raises(ValueError, match="finite"):
        validate_table_parameters(bad, 1.0, 1e-5, 1e-3, 1e-6)


def test_validate_sampling_parameters_rejects_nan():
    """Tests that NaN sampling parameters are rejected."""
    with pytest.raises(ValueError, match="finite"):
        validate_sampling_parameters(np.nan, 1e-3, 1e-6)
    with pytest.raises(ValueError, match="finite"):
        validate_sampling_parameters(1e-5, 1e-3, np.nan)


@pytest.mark.parametrize("dtype", [np.float32, np.float64, "float64", np.longdouble])
def test_validate_float_dtype_accepts_floats(dtype):
    """Tests that floating dtypes are resolved to np.dtype objects."""
    out = validate_float_dtype(dtype)
    assert isinstance(out, np.dtype)
    assert np.issubdtype(out, np.floating)


@pytest.mark.parametrize("dtype", [np.int64, np.complex128, bool, "not-a-dtype"])
def test_validate_float_dtype_rejects_non_floats(dtype):
    """Tests that non-floating dtypes raise TypeError."""
    with pytest.raises(TypeError, match="floating"):
        validate_float_dtype(dtype)


def test_validate_callable():
    """Tests that callables pass through and other objects raise TypeError."""
    assert validate_callable(np.sin, "function") is np.sin
    with pytest.raises(TypeError, match="derivative must be callable"):
        validate_callable(1.0, "derivative")
