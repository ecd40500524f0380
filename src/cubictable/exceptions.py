"""Exceptions raised by cubictable.

Bad construction parameters are reported with the built-in ``ValueError``
and ``TypeError``. The classes below cover faults that can only come from
a broken table, never from user input.
"""

from __future__ import annotations

__all__ = ["InternalConsistencyError"]


class InternalConsistencyError(RuntimeError):
    """Raised when the stored samples violate the ordering the builder guarantees.

    Examples are a bracket whose right end is not strictly greater than its
    left end, or a sample sequence that is not strictly increasing. Numeric
    results computed from such a table would be silently wrong, so this error
    is never caught inside the package.
    """
