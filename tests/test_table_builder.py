"""Unit tests for cubictable.table.builder."""

import logging

import numpy as np
import pytest

from cubictable.exceptions import InternalConsistencyError
from cubictable.table.builder import (
    build_samples,
    check_strictly_increasing,
    next_step,
)


def test_next_step_inverse_to_slope():
    """Tests that the step is df / |f'| inside the clamp range."""
    assert next_step(2.0, 1e-3, 1.0, 0.1) == pytest.approx(0.05)
    assert next_step(-2.0, 1e-3, 1.0, 0.1) == pytest.approx(0.05)


def test_next_step_clamps():
    """Tests that the step is clamped to [dx_min, dx_max]."""
    assert next_step(1e6, 1e-3, 1.0, 0.1) == 1e-3
    assert next_step(1e-6, 1e-3, 1.0, 0.1) == 1.0


def test_next_step_zero_slope_uses_dx_max():
    """Tests that a flat function gets the largest step."""
    assert next_step(0.0, 1e-3, 1.0, 0.1) == 1.0


def test_next_step_nan_slope_uses_dx_min():
    """Tests that a NaN derivative falls back to the smallest step."""
    assert next_step(float("nan"), 1e-3, 1.0, 0.1) == 1e-3


def test_build_samples_layout_and_endpoints():
    """Tests shape, ordering and endpoints of the sample array."""
    samples = build_samples(0.0, 1.0, 1e-3, 1e-1, 1e-2, np.exp, np.exp)

    assert samples.ndim == 2 and samples.shape[1] == 3
    assert samples.shape[0] >= 2
    x = samples[:, 0]
    assert x[0] == 0.0
    assert x[-1] == 1.0
    assert np.all(np.diff(x) > 0)
    np.testing.assert_allclose(samples[:, 1], np.exp(x))
    np.testing.assert_allclose(samples[:, 2], np.exp(x))


def test_build_samples_is_read_only():
    """Tests that the returned array cannot be written."""
    samples = build_samples(0.0, 1.0, 1e-2, 1e-1, 1e-2, np.sin, np.cos)
    assert not samples.flags.writeable
    with pytest.raises(ValueError):
        samples[0, 0] = 42.0


def test_build_samples_linear_function_uses_constant_step():
    """Tests that f(x) = 3x is sampled every df/3 until the last clamped step."""
    samples = build_samples(
        0.0, 1.0, 1e-3, 0.5, 0.3,
        lambda x: 3.0 * x, lambda x: 3.0,
    )
    steps = np.diff(samples[:, 0])
    np.testing.assert_allclose(steps[:-1], 0.1)
    assert 0 < steps[-1] <= 0.1 + 1e-12


def test_build_samples_constant_function_uses_dx_max():
    """Tests that a flat function is sampled every dx_max."""
    samples = build_samples(
        0.0, 1.0, 1e-3, 0.25, 1e-6,
        lambda x: 7.0, lambda x: 0.0,
    )
    np.testing.assert_allclose(samples[:, 0], [0.0, 0.25, 0.5, 0.75, 1.0])
    np.testing.assert_array_equal(samples[:, 1], 7.0)


def test_build_samples_final_step_may_be_shorter_than_dx_min():
    """Tests that the last sample is clamped to b even when that step is below dx_min."""
    samples = build_samples(
        0.0, 1.05, 0.5, 0.9, 1.0,
        lambda x: 2.0 * x, lambda x: 2.0,
    )
    np.testing.assert_allclose(samples[:, 0], [0.0, 0.5, 1.0, 1.05])
    assert samples[-1, 0] - samples[-2, 0] < 0.5


def test_build_samples_dense_where_slope_is_large():
    """Tests that spacing shrinks where |f'| is large and grows where it vanishes."""
    samples = build_samples(0.0, np.pi / 2, 1e-5, 1e-2, 1e-4, np.sin, np.cos)
    x = samples[:, 0]
    steps = np.diff(x)

    near_zero = steps[x[:-1] < 0.1]
    near_top = steps[(x[:-1] > 1.5) & (x[:-1] < x[-2])]
    assert near_zero.size > 0 and near_top.size > 0
    assert near_zero.max() < near_top.min()
    np.testing.assert_allclose(near_zero, 1e-4 / np.cos(x[:-1][x[:-1] < 0.1]), rtol=1e-6)


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_build_samples_respects_dtype(dtype):
    """Tests that samples are stored in the requested dtype."""
    samples = build_samples(0.0, 1.0, 1e-3, 1e-1, 1e-3, np.sin, np.cos, dtype=dtype)
    assert samples.dtype == np.dtype(dtype)
    assert samples[-1, 0] == dtype(1.0)


@pytest.mark.parametrize(
    "a, b, dx_min, dx_max, df",
    [
        (0.0, 0.0, 1e-3, 1e-1, 1e-3),
        (1.0, 0.0, 1e-3, 1e-1, 1e-3),
        (0.0, 1.0, 0.0, 1e-1, 1e-3),
        (0.0, 1.0, 1e-1, 1e-1, 1e-3),
        (0.0, 1.0, 1e-3, 1e-1, 0.0),
    ],
)
def test_build_samples_invalid_parameters_never_call_function(a, b, dx_min, dx_max, df):
    """Tests that validation happens before any sample is taken."""
    calls = []

    def f(x):
        calls.append(x)
        return 0.0

    with pytest.raises(ValueError):
        build_samples(a, b, dx_min, dx_max, df, f, f)
    assert calls == []


def test_build_samples_non_callable_raises_type_error():
    """Tests that non-callable function arguments are rejected."""
    with pytest.raises(TypeError, match="function"):
        build_samples(0.0, 1.0, 1e-3, 1e-1, 1e-3, 1.0, np.cos)
    with pytest.raises(TypeError, match="derivative"):
        build_samples(0.0, 1.0, 1e-3, 1e-1, 1e-3, np.sin, None)


def test_build_samples_resolution_guard():
    """Tests that a dx_min below float32 resolution raises instead of looping forever."""
    with pytest.raises(ValueError, match="resolution"):
        build_samples(
            1000.0, 1001.0, 1e-6, 1e-5, 1e-9,
            lambda x: x, lambda x: 1.0,
            dtype=np.float32,
        )


def test_build_samples_logs_info(caplog):
    """Tests that a finished build is logged at INFO level."""
    with caplog.at_level(logging.INFO, logger="cubictable"):
        samples = build_samples(0.0, 1.0, 1e-2, 1e-1, 1e-2, np.sin, np.cos)
    assert any(
        r.levelno == logging.INFO and f"{samples.shape[0]} points" in r.getMessage()
        for r in caplog.records
    )


def test_build_samples_warns_on_non_finite_values(caplog):
    """Tests that non-finite function values are reported once as a warning."""
    def f(x):
        return np.nan if x > 0.5 else x

    with caplog.at_level(logging.WARNING, logger="cubictable"):
        samples = build_samples(0.0, 1.0, 1e-2, 1e-1, 1e-2, f, lambda x: 1.0)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "non-finite" in warnings[0].getMessage()
    assert np.isnan(samples[-1, 1])


def test_check_strictly_increasing():
    """Tests that only strictly increasing sequences of length >= 2 pass."""
    check_strictly_increasing(np.array([0.0, 0.5, 1.0]))
    with pytest.raises(InternalConsistencyError, match="strictly increasing"):
        check_strictly_increasing(np.array([0.0, 0.5, 0.5, 1.0]))
    with pytest.raises(InternalConsistencyError, match="strictly increasing"):
        check_strictly_increasing(np.array([0.0, 1.0, 0.5]))
    with pytest.raises(InternalConsistencyError, match="at least two"):
        check_strictly_increasing(np.array([0.0]))
