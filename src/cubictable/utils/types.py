"""Shared typing aliases for cubictable."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeAlias

ScalarFunction: TypeAlias = Callable[[Any], Any]
