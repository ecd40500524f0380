"""Pytest configuration file with shared lookup tables and a thread-spawning check."""

from concurrent.futures import ThreadPoolExecutor, TimeoutError

import numpy as np
import pytest

from cubictable import CubicLookupTable, CubicTrigTable

__all__ = ["extra_threads_ok", "sin_table", "trig_table"]


@pytest.fixture(scope="session")
def threads_ok():
    """Return a callable that checks thread-spawning capability.

    The returned function has signature `check(n=2, timeout=1.0) -> bool` and
    returns True if at least `n` threads can be started and joined within `timeout`.
    """
    def _can_spawn(n: int = 2, timeout: float = 1.0) -> bool:
        try:
            with ThreadPoolExecutor(max_workers=n) as ex:
                futs = [ex.submit(lambda: None) for _ in range(n)]
                for f in futs:
                    f.result(timeout=timeout)
            return True
        except (RuntimeError, MemoryError, OSError, TimeoutError):
            return False
    return _can_spawn


@pytest.fixture(scope="session")
def extra_threads_ok(threads_ok):
    """Convenience: True iff we can start >= 2 threads (common case)."""
    return threads_ok(2)


@pytest.fixture(scope="session")
def sin_table():
    """sin/cos table on [0, π/2] with dx_min=1e-5, dx_max=1e-3, df=1e-6."""
    return CubicLookupTable(0.0, np.pi / 2, 1e-5, 1e-3, 1e-6, np.sin, np.cos)


@pytest.fixture(scope="session")
def trig_table():
    """Default float64 trig table."""
    return CubicTrigTable()
