"""
Terminal consumers.

Everything here except ``partition`` runs immediately: the result is
computed before the call returns and never changes when the source is
modified afterwards. Ranges are accepted in any form an entry point
accepts (plain collection, view, ``owned(...)``, ``share(...)``).
"""

import operator
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from lazyviews import capabilities
from lazyviews.errors import PreconditionViolation
from lazyviews.keeper import keep
from lazyviews.views import FilterView

T = TypeVar("T")

_EMPTY = object()


class Maybe(Generic[T]):
    """A value that may be absent; the result of lookups."""

    __slots__ = ("_value",)

    def __init__(self, value=_EMPTY):
        self._value = value

    @classmethod
    def of(cls, value: T) -> "Maybe[T]":
        return cls(value)

    @classmethod
    def empty(cls) -> "Maybe[T]":
        return cls()

    @property
    def has_value(self) -> bool:
        return self._value is not _EMPTY

    @property
    def value(self) -> T:
        if self._value is _EMPTY:
            raise PreconditionViolation("no value present")
        return self._value

    def value_or(self, default: T) -> T:
        return self._value if self.has_value else default

    def __bool__(self) -> bool:
        return self.has_value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash(self._value) if self.has_value else hash(_EMPTY)

    def __repr__(self) -> str:
        return f"Maybe({self._value!r})" if self.has_value else "Maybe.empty()"


def traverse(range_) -> Iterator[Any]:
    """Yield the elements of ``range_`` by walking its cursors."""
    keeper = keep(range_)
    cursor, last = keeper.begin(), keeper.end()
    while cursor != last:
        yield cursor.get()
        cursor.advance()


def collect(range_, container: Callable[[Iterable], Any] = list):
    """Materialize ``range_`` into ``container`` (any callable taking an iterable)."""
    return container(traverse(range_))


def join(range_, separator: str = "") -> str:
    """String forms of the elements, joined by ``separator``."""
    return separator.join(str(element) for element in traverse(range_))


def any_of(range_, predicate: Callable[[Any], bool]) -> bool:
    return any(predicate(element) for element in traverse(range_))


def all_of(range_, predicate: Callable[[Any], bool]) -> bool:
    return all(predicate(element) for element in traverse(range_))


def none_of(range_, predicate: Callable[[Any], bool]) -> bool:
    return not any_of(range_, predicate)


def find_if(range_, predicate: Callable[[Any], bool]) -> Maybe:
    """First element satisfying ``predicate``."""
    for element in traverse(range_):
        if predicate(element):
            return Maybe.of(element)
    return Maybe.empty()


def contains(range_, needle) -> bool:
    """True if ``needle`` is found, using the range's own lookup where it has one."""
    found, _ = capabilities.find_element(keep(range_).get(), needle)
    return found


def accumulate(range_, initial, op: Callable[[Any, Any], Any] = operator.add):
    """Left fold of the elements onto ``initial``."""
    result = initial
    for element in traverse(range_):
        result = op(result, element)
    return result


def partition(range_, predicate: Callable[[Any], bool]) -> Tuple[FilterView, FilterView]:
    """
    Split into the elements satisfying ``predicate`` and the rest.

    Both halves are lazy views sharing one keeper of ``range_``.
    """
    keeper = keep(range_)
    matching = FilterView(keeper, predicate)
    rest = FilterView(keeper, lambda element: not predicate(element))
    return matching, rest


def size(range_) -> int:
    """Number of elements, by the cheapest capability the range offers."""
    return capabilities.size(keep(range_).get())


def empty(range_) -> bool:
    """True if the range has no elements. Consumes the first element of a one-shot iterator."""
    return capabilities.empty(keep(range_).get())


def first(range_, default: Optional[Any] = None):
    """First element, or ``default`` for an empty range."""
    for element in traverse(range_):
        return element
    return default
