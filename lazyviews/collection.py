from functools import reduce as builtin_reduce
from typing import Any, Iterator, List, Tuple

from lazyviews import algorithm, terminal
from lazyviews.capabilities import begin, end
from lazyviews.cursors import Cursor
from lazyviews.errors import PreconditionViolation
from lazyviews.iterators import make_tuple
from lazyviews.keeper import Keeper, Ownership, keep, make_keeper
from lazyviews.terminal import Maybe
from lazyviews.views import (
    ConcatenatedView,
    CountingView,
    FilterView,
    FlattenedView,
    SlicedView,
    TakeView,
    TakeWhileView,
    TransformView,
    View,
    ZipView,
)

_NO_INITIAL = object()


class LazyCollection:
    """
    A chainable, lazy collection. Every chained call wraps one more view
    around the previous one; elements are computed only when you iterate or
    call a reducing operation.

    The source is kept the way the entry points keep it: a plain collection
    is borrowed, ``owned(...)`` and generators are owned, ``share(...)`` is
    shared.
    """

    def __init__(self, source):
        if isinstance(source, LazyCollection):
            self._keeper = source._keeper
        else:
            self._keeper = keep(source)

    @classmethod
    def _from_view(cls, view: View) -> "LazyCollection":
        collection = cls.__new__(cls)
        collection._keeper = make_keeper(Ownership.OWNING, view)
        return collection

    @property
    def ownership(self) -> Ownership:
        return self._keeper.category

    # --------- chainable operators (lazy) ----------
    def map(self, fn):
        return self._from_view(TransformView(self._keeper, fn))

    def filter(self, pred):
        return self._from_view(FilterView(self._keeper, pred))

    def slice(self, start, until):
        return self._from_view(SlicedView(self._keeper, int(start), int(until)))

    def take(self, n):
        return self._from_view(TakeView(self._keeper, int(n)))

    def take_while(self, pred):
        return self._from_view(TakeWhileView(self._keeper, pred))

    def concatenate(self, *others):
        keepers = (self._keeper,) + tuple(_keeper_for(o) for o in others)
        return self._from_view(ConcatenatedView(keepers))

    def zip(self, *others, zipper=make_tuple):
        keepers = (self._keeper,) + tuple(_keeper_for(o) for o in others)
        return self._from_view(ZipView(zipper, keepers))

    def flatten(self):
        return self._from_view(FlattenedView(self._keeper))

    def enumerate(self, start=0):
        counter = make_keeper(Ownership.OWNING, CountingView(start))
        return self._from_view(ZipView(make_tuple, (counter, self._keeper)))

    def page(self, page_number, page_size):
        """Get a specific page of results (1-indexed)"""
        if page_number < 1:
            raise PreconditionViolation("Page number must be >= 1")
        if page_size < 1:
            raise PreconditionViolation("Page size must be >= 1")
        offset = (page_number - 1) * page_size
        return self.slice(offset, offset + page_size)

    def paginate(self, page_size):
        """Return an iterator of pages, each containing up to page_size elements"""
        page_num = 1
        while True:
            page_data = self.page(page_num, page_size).to_list()
            if not page_data:
                break
            yield page_data
            page_num += 1

    def partition(self, pred) -> Tuple["LazyCollection", "LazyCollection"]:
        matching = FilterView(self._keeper, pred)
        rest = FilterView(self._keeper, lambda x: not pred(x))
        return self._from_view(matching), self._from_view(rest)

    # --------- forcing evaluation ----------
    def to_list(self) -> List[Any]:
        return list(self)

    def to(self, container):
        """Materialize into ``container`` (list, tuple, set, dict, ...)"""
        return container(self)

    def join(self, separator=""):
        return separator.join(str(x) for x in self)

    # --------- reducing operations (force evaluation) ----------
    def for_each(self, fn):
        for item in self:
            fn(item)
        return fn

    def reduce(self, fn, initial=_NO_INITIAL):
        """Apply a function of two arguments cumulatively to items, from left to right"""
        items = list(self)
        if initial is not _NO_INITIAL:
            return builtin_reduce(fn, items, initial)
        else:
            return builtin_reduce(fn, items)

    def accumulate(self, initial, op=None):
        """Left fold onto ``initial`` (addition unless ``op`` is given)"""
        if op is None:
            return terminal.accumulate(self, initial)
        return terminal.accumulate(self, initial, op)

    def all(self, pred):
        return all(pred(x) for x in self)

    def any(self, pred):
        return any(pred(x) for x in self)

    def none(self, pred):
        return not self.any(pred)

    def find(self, needle) -> Maybe:
        """First element equal to ``needle``"""
        return algorithm.find(self._keeper.get(), needle)

    def find_if(self, pred) -> Maybe:
        return terminal.find_if(self, pred)

    def contains(self, needle) -> bool:
        return self.find(needle).has_value

    def size(self) -> int:
        return terminal.size(self._keeper.get())

    def count(self) -> int:
        """Return the count of elements"""
        return self.size()

    def empty(self) -> bool:
        """True if there are no elements; a generator source loses its first element to the check"""
        return terminal.empty(self._keeper.get())

    def first(self, default=None):
        """Return the first element, or default if empty"""
        for item in self:
            return item
        return default

    # --------- iterator protocol ----------
    def __iter__(self) -> Iterator[Any]:
        cursor, last = self._keeper.begin(), self._keeper.end()
        while cursor != last:
            yield cursor.get()
            cursor.advance()

    def __repr__(self) -> str:
        return f"LazyCollection({self._keeper!r})"


def _keeper_for(other) -> Keeper:
    if isinstance(other, LazyCollection):
        return other._keeper
    return keep(other)


@begin.register(LazyCollection)
def _collection_begin(collection) -> Cursor:
    return collection._keeper.begin()


@end.register(LazyCollection)
def _collection_end(collection) -> Cursor:
    return collection._keeper.end()
