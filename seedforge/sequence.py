"""
Sequence counter shared by a factory lineage.
"""

import itertools


class SequenceCounter:
    """
    Strictly increasing integers starting at 1.

    Owned by the root factory of a lineage; descendants hold a reference to
    the root's counter. Numbers are never reset or reused.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._current = 0

    def next(self) -> int:
        # next() on itertools.count is atomic, so concurrent resolutions never
        # observe the same number
        value = next(self._counter)
        self._current = value
        return value

    @property
    def current(self) -> int:
        """Last number issued, 0 before the first call."""
        return self._current

    def __repr__(self) -> str:
        return f"SequenceCounter(current={self._current})"
