"""
Cursor bundles for adaptors that walk several ranges at once.

``IteratorTracker`` holds bare cursors. ``RangeTracker`` also holds the
ranges the cursors came from, so it can tell on its own whether a cursor
reached its range's end. Advancing slot ``n`` never touches another slot.
"""

from typing import Any, List, Optional, Tuple

from lazyviews.capabilities import begin, end
from lazyviews.cursors import Cursor


class IteratorTracker:
    """A fixed-size bundle of cursors."""

    __slots__ = ("_cursors",)

    def __init__(self, *cursors: Cursor):
        self._cursors: List[Cursor] = list(cursors)

    @classmethod
    def begin_from_ranges(cls, *ranges) -> "IteratorTracker":
        return cls(*(begin(r) for r in ranges))

    @classmethod
    def end_from_ranges(cls, *ranges) -> "IteratorTracker":
        return cls(*(end(r) for r in ranges))

    def __len__(self) -> int:
        return len(self._cursors)

    def __iter__(self):
        return iter(self._cursors)

    def get(self, n: int) -> Cursor:
        return self._cursors[n]

    def set_to(self, n: int, cursor: Cursor) -> None:
        self._cursors[n] = cursor

    def next(self, n: int) -> Cursor:
        return self._cursors[n].advance()

    def next_all(self) -> None:
        for cursor in self._cursors:
            cursor.advance()


class RangeTracker:
    """
    Cursors plus the ranges they walk.

    The end of each range is derived the first time it is asked for and
    reused afterwards, since building an end cursor can cost a walk over
    the range (a slice, for instance).
    """

    __slots__ = ("_ranges", "_current", "_ends")

    def __init__(self, *ranges: Any, at_end: bool = False):
        self._ranges: Tuple[Any, ...] = ranges
        self._ends: List[Optional[Cursor]] = [None] * len(ranges)
        if at_end:
            self._current: List[Cursor] = [end(r) for r in ranges]
        else:
            self._current = [begin(r) for r in ranges]

    def __len__(self) -> int:
        return len(self._ranges)

    def range(self, n: int) -> Any:
        return self._ranges[n]

    def end_of(self, n: int) -> Cursor:
        if self._ends[n] is None:
            self._ends[n] = end(self._ranges[n])
        return self._ends[n]

    def get(self, n: int) -> Tuple[Cursor, Cursor]:
        """Current cursor and end cursor of slot ``n``."""
        return self._current[n], self.end_of(n)

    def set_to(self, n: int, cursor: Cursor) -> None:
        self._current[n] = cursor

    def set_to_end(self, n: int) -> None:
        self._current[n] = end(self._ranges[n])

    def next(self, n: int) -> Cursor:
        return self._current[n].advance()

    def next_all(self) -> None:
        for cursor in self._current:
            cursor.advance()

    def has_next(self, n: int) -> bool:
        return self._current[n] != self.end_of(n)
