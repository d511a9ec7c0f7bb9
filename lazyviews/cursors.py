"""
Cursor protocol and leaf cursors.

A cursor is the mutable, per-traversal position produced by a view: it can
be dereferenced with ``get()``, stepped with ``advance()`` and compared with
another cursor of the same traversal kind. End cursors are only ever
compared.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Optional

from lazyviews.errors import PreconditionViolation, StaleIteratorError


class Cursor(ABC):
    """Position inside a range."""

    __slots__ = ()

    @abstractmethod
    def get(self) -> Any:
        """Dereference the current position."""

    @abstractmethod
    def advance(self) -> "Cursor":
        """Step to the next position and return self."""

    @abstractmethod
    def __eq__(self, other) -> bool:
        ...

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None


class SequenceCursor(Cursor):
    """
    Cursor over any Python iterable.

    Holds one element of lookahead so it knows whether it reached the end
    without a separate end position. Two cursors are equal when both are
    exhausted or both sit at the same index.
    """

    __slots__ = ("_iterator", "_current", "_index", "_exhausted")

    def __init__(self, iterator: Optional[Iterator] = None, index: int = 0):
        self._iterator = iterator
        self._current = None
        self._index = index
        self._exhausted = iterator is None
        if iterator is not None:
            self._fetch()

    @classmethod
    def begin(cls, sequence: Iterable) -> "SequenceCursor":
        return cls(iter(sequence))

    @classmethod
    def end(cls, sequence: Iterable = None) -> "SequenceCursor":
        return cls(None)

    @property
    def index(self) -> int:
        return self._index

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _fetch(self):
        try:
            self._current = next(self._iterator)
        except StopIteration:
            self._current = None
            self._iterator = None
            self._exhausted = True

    def get(self):
        if self._exhausted:
            raise PreconditionViolation("cannot dereference an end cursor")
        return self._current

    def advance(self) -> "SequenceCursor":
        if not self._exhausted:
            self._index += 1
            self._fetch()
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, SequenceCursor):
            return NotImplemented
        if self._exhausted or other._exhausted:
            return self._exhausted and other._exhausted
        return self._index == other._index

    def __repr__(self) -> str:
        if self._exhausted:
            return "SequenceCursor(<end>)"
        return f"SequenceCursor(index={self._index}, current={self._current!r})"


class CountingCursor(Cursor):
    """Unbounded arithmetic progression; its end is never reached."""

    __slots__ = ("_value", "_step", "_is_end")

    def __init__(self, start=0, step=1, is_end: bool = False):
        self._value = start
        self._step = step
        self._is_end = is_end

    def get(self):
        if self._is_end:
            raise PreconditionViolation("cannot dereference an end cursor")
        return self._value

    def advance(self) -> "CountingCursor":
        if not self._is_end:
            self._value += self._step
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, CountingCursor):
            return NotImplemented
        if self._is_end or other._is_end:
            return self._is_end and other._is_end
        return self._value == other._value

    def __repr__(self) -> str:
        if self._is_end:
            return "CountingCursor(<end>)"
        return f"CountingCursor(value={self._value!r}, step={self._step!r})"


class GuardedCursor(Cursor):
    """
    Wraps a cursor over a shared sequence and checks the handle's
    generation on every operation.
    """

    __slots__ = ("_cursor", "_handle", "_generation")

    def __init__(self, cursor: Cursor, handle, generation: int):
        self._cursor = cursor
        self._handle = handle
        self._generation = generation

    def _check(self):
        if self._handle.generation != self._generation:
            raise StaleIteratorError(
                f"shared sequence was reset (generation {self._generation} -> "
                f"{self._handle.generation}) while a cursor was alive"
            )

    def get(self):
        self._check()
        return self._cursor.get()

    def advance(self) -> "GuardedCursor":
        self._check()
        self._cursor.advance()
        return self

    def __eq__(self, other) -> bool:
        self._check()
        if isinstance(other, GuardedCursor):
            other._check()
            other = other._cursor
        return self._cursor == other

    def __repr__(self) -> str:
        return f"GuardedCursor({self._cursor!r}, generation={self._generation})"
