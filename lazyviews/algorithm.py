"""
Algorithm entry points.

These functions are the way to build views. Each one classifies how its
range argument(s) were passed (see ``lazyviews.keeper``), keeps them
accordingly and wires the keeper(s) into a view:

    >>> numbers = [1, 2, 3, 4]
    >>> list(transform(filter(numbers, lambda i: i % 2 == 0), str))
    ['2', '4']

``numbers`` is borrowed by the filter view; the filter view, built inline,
is owned by the transform view.
"""

import logging
from operator import itemgetter
from typing import Any, Callable

from lazyviews.capabilities import find_element
from lazyviews.iterators import make_tuple
from lazyviews.keeper import keep
from lazyviews.terminal import Maybe, traverse
from lazyviews.views import (
    ConcatenatedView,
    CountingView,
    FilterView,
    FlattenedView,
    SlicedView,
    TakeView,
    TakeWhileView,
    TransformView,
    ZipView,
)

logger = logging.getLogger(__name__)

pick_first = itemgetter(0)
pick_second = itemgetter(1)


def transform(range_, function: Callable[[Any], Any]) -> TransformView:
    """Lazily apply ``function`` to every element of ``range_``."""
    view = TransformView(keep(range_), function)
    logger.debug(f"Constructed transform view over {view.source.category.value} range")
    return view


def filter(range_, predicate: Callable[[Any], bool]) -> FilterView:
    """Lazily keep the elements of ``range_`` that satisfy ``predicate``."""
    view = FilterView(keep(range_), predicate)
    logger.debug(f"Constructed filter view over {view.source.category.value} range")
    return view


def concatenate(first, second, *rest) -> ConcatenatedView:
    """All elements of ``first``, then of ``second``, then of each of ``rest``."""
    keepers = tuple(keep(r) for r in (first, second) + rest)
    logger.debug(f"Constructed concatenation of {len(keepers)} ranges")
    return ConcatenatedView(keepers)


def zip(first, second, *rest, zipper: Callable[..., Any] = make_tuple) -> ZipView:
    """
    Combine the ranges element by element with ``zipper``.

    Stops with the shortest range. The default zipper yields tuples.
    """
    keepers = tuple(keep(r) for r in (first, second) + rest)
    logger.debug(f"Constructed zip of {len(keepers)} ranges")
    return ZipView(zipper, keepers)


def slice(range_, start: int, until: int) -> SlicedView:
    """Positions ``[start, until)`` of ``range_``, clamped to its length."""
    view = SlicedView(keep(range_), start, until)
    logger.debug(f"Constructed slice [{start}, {until}) over {view.source.category.value} range")
    return view


def take(range_, n: int) -> TakeView:
    """At most the first ``n`` elements of ``range_``."""
    view = TakeView(keep(range_), n)
    logger.debug(f"Constructed take({n}) over {view.source.category.value} range")
    return view


def take_while(range_, predicate: Callable[[Any], bool]) -> TakeWhileView:
    """Leading elements of ``range_`` up to the first one failing ``predicate``."""
    view = TakeWhileView(keep(range_), predicate)
    logger.debug(f"Constructed take_while over {view.source.category.value} range")
    return view


def flatten(range_) -> FlattenedView:
    """Elements of every inner range of ``range_``, in order."""
    view = FlattenedView(keep(range_))
    logger.debug(f"Constructed flatten over {view.source.category.value} range")
    return view


def iterate(start=0, step=1) -> CountingView:
    """Endless counting from ``start`` by ``step``."""
    return CountingView(start, step)


def enumerate(range_, start: int = 0) -> ZipView:
    """``(index, element)`` pairs, indices counting from ``start``."""
    return zip(iterate(start), range_)


def for_each(range_, action: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Call ``action`` on every element, in order; returns ``action``."""
    for element in traverse(range_):
        action(element)
    return action


def find(range_, needle) -> Maybe:
    """
    First element equal to ``needle``.

    Uses the range's own lookup where one exists (mappings give back the
    ``(key, value)`` item), otherwise scans. Evaluated immediately.
    """
    found, element = find_element(keep(range_).get(), needle)
    if found:
        return Maybe.of(element)
    return Maybe.empty()


__all__ = [
    "concatenate", "enumerate", "filter", "find", "flatten", "for_each",
    "iterate", "pick_first", "pick_second", "slice", "take", "take_while",
    "transform", "zip",
]
