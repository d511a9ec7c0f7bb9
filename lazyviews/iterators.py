"""
Iterator adaptors.

One cursor class per transformation. Each wraps the cursor(s) of the
underlying range(s) and redefines get/advance/equality; nothing is computed
before a view hands out a cursor, and every step reads through the chain of
nested cursors down to the source collection.
"""

from typing import Any, Callable

from lazyviews.capabilities import advance_bounded, begin, end
from lazyviews.cursors import Cursor
from lazyviews.errors import PreconditionViolation
from lazyviews.tracker import IteratorTracker, RangeTracker


def make_tuple(*elements) -> tuple:
    """Default zipper: one tuple per step."""
    return elements


class TransformingCursor(Cursor):
    """Applies a function on every dereference; results are not cached."""

    __slots__ = ("_cursor", "_function")

    def __init__(self, cursor: Cursor, function: Callable[[Any], Any]):
        self._cursor = cursor
        self._function = function

    def get(self):
        return self._function(self._cursor.get())

    def advance(self) -> "TransformingCursor":
        self._cursor.advance()
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransformingCursor):
            return NotImplemented
        return self._cursor == other._cursor


class FilteringCursor(Cursor):
    """Stops only on elements the predicate accepts."""

    __slots__ = ("_cursor", "_predicate", "_end")

    def __init__(self, cursor: Cursor, predicate: Callable[[Any], bool], last: Cursor):
        self._cursor = cursor
        self._predicate = predicate
        self._end = last
        if self._cursor != self._end and not self._predicate(self._cursor.get()):
            self.advance()

    def get(self):
        return self._cursor.get()

    def advance(self) -> "FilteringCursor":
        self._cursor.advance()
        while self._cursor != self._end:
            if self._predicate(self._cursor.get()):
                break
            self._cursor.advance()
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, FilteringCursor):
            return NotImplemented
        return self._cursor == other._cursor


class ConcatenatingCursor(Cursor):
    """Walks its ranges one after another, in the order given."""

    __slots__ = ("_tracker",)

    def __init__(self, *ranges, at_end: bool = False):
        self._tracker = RangeTracker(*ranges, at_end=at_end)

    def _active(self):
        for n in range(len(self._tracker)):
            if self._tracker.has_next(n):
                return n
        return None

    def get(self):
        n = self._active()
        if n is None:
            raise PreconditionViolation("cannot dereference an end cursor")
        cursor, _ = self._tracker.get(n)
        return cursor.get()

    def advance(self) -> "ConcatenatingCursor":
        n = self._active()
        if n is not None:
            self._tracker.next(n)
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConcatenatingCursor):
            return NotImplemented
        for n in range(len(self._tracker)):
            lhs_open, rhs_open = self._tracker.has_next(n), other._tracker.has_next(n)
            if lhs_open != rhs_open:
                return False
            if lhs_open:
                return self._tracker.get(n)[0] == other._tracker.get(n)[0]
        return True


class ZippingCursor(Cursor):
    """
    Steps all ranges in lockstep and combines their elements.

    Two zip cursors differ only while every slot differs, so comparing
    against the end cursor stops the traversal at the shortest range.
    """

    __slots__ = ("_zipper", "_tracker")

    def __init__(self, zipper: Callable[..., Any], *ranges, at_end: bool = False):
        self._zipper = zipper
        if at_end:
            self._tracker = IteratorTracker.end_from_ranges(*ranges)
        else:
            self._tracker = IteratorTracker.begin_from_ranges(*ranges)

    def get(self):
        return self._zipper(*(cursor.get() for cursor in self._tracker))

    def advance(self) -> "ZippingCursor":
        self._tracker.next_all()
        return self

    def __ne__(self, other) -> bool:
        if not isinstance(other, ZippingCursor):
            return NotImplemented
        return all(lhs != rhs for lhs, rhs in zip(self._tracker, other._tracker))

    def __eq__(self, other) -> bool:
        result = self.__ne__(other)
        if result is NotImplemented:
            return result
        return not result


class FlatteningCursor(Cursor):
    """Walks every inner range of an outer range, skipping empty ones."""

    __slots__ = ("_tracker", "_inner_range", "_inner", "_inner_end")

    def __init__(self, outer, at_end: bool = False):
        self._tracker = RangeTracker(outer, at_end=at_end)
        self._inner_range = None
        self._inner = None
        self._inner_end = None
        if not at_end and self._tracker.has_next(0):
            self._enter(self._tracker.get(0)[0].get())
            self._skip_exhausted()

    def _enter(self, inner_range):
        self._inner_range = inner_range
        self._inner = begin(inner_range)
        self._inner_end = end(inner_range)

    def _skip_exhausted(self):
        outer, outer_end = self._tracker.get(0)
        while outer != outer_end and self._inner == self._inner_end:
            outer.advance()
            if outer != outer_end:
                self._enter(outer.get())

    def get(self):
        if not self._tracker.has_next(0):
            raise PreconditionViolation("cannot dereference an end cursor")
        return self._inner.get()

    def advance(self) -> "FlatteningCursor":
        if self._tracker.has_next(0):
            self._inner.advance()
            self._skip_exhausted()
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, FlatteningCursor):
            return NotImplemented
        lhs_outer, lhs_end = self._tracker.get(0)
        rhs_outer, rhs_end = other._tracker.get(0)
        if lhs_outer != rhs_outer:
            return False
        if lhs_outer != lhs_end and rhs_outer != rhs_end and self._inner != other._inner:
            return False
        return True


class TakingCursor(Cursor):
    """
    Counts down from the number of elements still allowed.

    The last counted step spends the count without moving the underlying
    cursor, so nothing past the final element is read.
    """

    __slots__ = ("_tracker", "_remaining")

    def __init__(self, range_, remaining: int, at_end: bool = False):
        self._tracker = RangeTracker(range_, at_end=at_end)
        self._remaining = 0 if at_end else remaining

    @property
    def remaining(self) -> int:
        return self._remaining

    def skip(self, steps: int) -> "TakingCursor":
        """Step the underlying cursor up to ``steps`` times without spending the count."""
        cursor, last = self._tracker.get(0)
        advance_bounded(cursor, steps, last)
        return self

    @property
    def at_end(self) -> bool:
        return self._remaining <= 0 or not self._tracker.has_next(0)

    def get(self):
        if self.at_end:
            raise PreconditionViolation("cannot dereference an end cursor")
        return self._tracker.get(0)[0].get()

    def advance(self) -> "TakingCursor":
        if not self.at_end:
            self._remaining -= 1
            if self._remaining > 0:
                self._tracker.next(0)
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, TakingCursor):
            return NotImplemented
        lhs_done, rhs_done = self.at_end, other.at_end
        if lhs_done or rhs_done:
            return lhs_done and rhs_done
        return self._tracker.get(0)[0] == other._tracker.get(0)[0]


class TakingWhileCursor(Cursor):
    """Jumps to the end at the first element the predicate rejects."""

    __slots__ = ("_tracker", "_predicate")

    def __init__(self, range_, predicate: Callable[[Any], bool], at_end: bool = False):
        self._tracker = RangeTracker(range_, at_end=at_end)
        self._predicate = predicate
        if not at_end:
            self._check_current()

    def _check_current(self):
        cursor, last = self._tracker.get(0)
        if cursor != last and not self._predicate(cursor.get()):
            self._tracker.set_to_end(0)

    @property
    def at_end(self) -> bool:
        return not self._tracker.has_next(0)

    def get(self):
        if self.at_end:
            raise PreconditionViolation("cannot dereference an end cursor")
        return self._tracker.get(0)[0].get()

    def advance(self) -> "TakingWhileCursor":
        if not self.at_end:
            self._tracker.next(0)
            self._check_current()
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, TakingWhileCursor):
            return NotImplemented
        lhs_done, rhs_done = self.at_end, other.at_end
        if lhs_done or rhs_done:
            return lhs_done and rhs_done
        return self._tracker.get(0)[0] == other._tracker.get(0)[0]
