"""
View types.

A view is a cold, immutable description of a transformation: the keeper(s)
of its source range(s) plus the parameters of the transformation. It does
nothing until ``begin()``/``end()`` are called, and every call builds fresh
cursors, so one view can be traversed any number of times (as long as its
sources can).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Tuple

from lazyviews.capabilities import begin, end, known_size
from lazyviews.cursors import CountingCursor, Cursor
from lazyviews.errors import PreconditionViolation
from lazyviews.iterators import (
    ConcatenatingCursor,
    FilteringCursor,
    FlatteningCursor,
    TakingCursor,
    TakingWhileCursor,
    TransformingCursor,
    ZippingCursor,
)
from lazyviews.keeper import Keeper, Ownership, ownership_category


class View(ABC):
    """Base class of all views."""

    @abstractmethod
    def begin(self) -> Cursor:
        """Cursor at the first element."""

    @abstractmethod
    def end(self) -> Cursor:
        """Cursor past the last element; compare against it, never read it."""

    def __iter__(self) -> Iterator[Any]:
        cursor, last = self.begin(), self.end()
        while cursor != last:
            yield cursor.get()
            cursor.advance()


@dataclass(frozen=True, eq=False)
class TransformView(View):
    """Elements of ``source`` passed through ``function``."""
    source: Keeper
    function: Callable[[Any], Any]

    def begin(self) -> TransformingCursor:
        return TransformingCursor(self.source.begin(), self.function)

    def end(self) -> TransformingCursor:
        return TransformingCursor(self.source.end(), self.function)


@dataclass(frozen=True, eq=False)
class FilterView(View):
    """Elements of ``source`` accepted by ``predicate``."""
    source: Keeper
    predicate: Callable[[Any], bool]

    def begin(self) -> FilteringCursor:
        return FilteringCursor(self.source.begin(), self.predicate, self.source.end())

    def end(self) -> FilteringCursor:
        return FilteringCursor(self.source.end(), self.predicate, self.source.end())


@dataclass(frozen=True, eq=False)
class ConcatenatedView(View):
    """All elements of each source, one source after the other."""
    sources: Tuple[Keeper, ...]

    def begin(self) -> ConcatenatingCursor:
        return ConcatenatingCursor(*self.sources)

    def end(self) -> ConcatenatingCursor:
        return ConcatenatingCursor(*self.sources, at_end=True)


@dataclass(frozen=True, eq=False)
class ZipView(View):
    """``zipper`` applied to the sources' elements in lockstep, up to the shortest source."""
    zipper: Callable[..., Any]
    sources: Tuple[Keeper, ...]

    def begin(self) -> ZippingCursor:
        return ZippingCursor(self.zipper, *self.sources)

    def end(self) -> ZippingCursor:
        return ZippingCursor(self.zipper, *self.sources, at_end=True)


@dataclass(frozen=True, eq=False)
class FlattenedView(View):
    """Elements of the inner ranges of ``source``, outer order first."""
    source: Keeper

    def begin(self) -> FlatteningCursor:
        return FlatteningCursor(self.source)

    def end(self) -> FlatteningCursor:
        return FlatteningCursor(self.source, at_end=True)


@dataclass(frozen=True, eq=False)
class SlicedView(View):
    """
    Positions ``[start, until)`` of ``source``.

    Both bounds are clamped to the length of the source, so a slice past the
    end is empty rather than an error. A reversed or negative interval is
    rejected at construction. Begin skips ``start`` elements and then counts
    down ``until - start``, so the source is walked once per traversal.
    """
    source: Keeper
    start: int
    until: int

    def __post_init__(self):
        if self.start < 0 or self.until < 0:
            raise PreconditionViolation(
                f"slice bounds must not be negative, got [{self.start}, {self.until})"
            )
        if self.start > self.until:
            raise PreconditionViolation(
                f"slice start {self.start} is past its end {self.until}"
            )

    def begin(self) -> TakingCursor:
        return TakingCursor(self.source, self.until - self.start).skip(self.start)

    def end(self) -> TakingCursor:
        return TakingCursor(self.source, 0, at_end=True)


@dataclass(frozen=True, eq=False)
class TakeView(View):
    """At most the first ``count`` elements of ``source``."""
    source: Keeper
    count: int

    def __post_init__(self):
        if self.count < 0:
            raise PreconditionViolation(f"take count must not be negative, got {self.count}")

    def begin(self) -> TakingCursor:
        remaining = self.count
        length = known_size(self.source.get())
        if length is not None:
            remaining = min(remaining, length)
        return TakingCursor(self.source, remaining)

    def end(self) -> TakingCursor:
        return TakingCursor(self.source, 0, at_end=True)


@dataclass(frozen=True, eq=False)
class TakeWhileView(View):
    """Leading elements of ``source`` for which ``predicate`` holds."""
    source: Keeper
    predicate: Callable[[Any], bool]

    def begin(self) -> TakingWhileCursor:
        return TakingWhileCursor(self.source, self.predicate)

    def end(self) -> TakingWhileCursor:
        return TakingWhileCursor(self.source, self.predicate, at_end=True)


@dataclass(frozen=True, eq=False)
class CountingView(View):
    """``start``, ``start + step``, ... without end."""
    start: Any = 0
    step: Any = 1

    def begin(self) -> CountingCursor:
        return CountingCursor(self.start, self.step)

    def end(self) -> CountingCursor:
        return CountingCursor(is_end=True)


@begin.register(View)
def _view_begin(view) -> Cursor:
    return view.begin()


@end.register(View)
def _view_end(view) -> Cursor:
    return view.end()


@ownership_category.register(View)
def _view_category(argument) -> Ownership:
    return Ownership.OWNING
