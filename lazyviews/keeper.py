"""
Ownership keeper.

A keeper stores the sequence a view works on in one of three ways, picked
once from how the sequence was handed to an entry point:

* ``OWNING``: the view takes the value over (an ``owned(...)`` wrapper, a
  one-shot iterator, or another view built inline).
* ``BORROWING``: the view references the caller's collection and sees its
  in-place changes. Keeping it alive and unchanged during a traversal is
  the caller's job; nothing checks it.
* ``SHARING``: the view holds a ``Shared`` handle and counts as one of its
  users until the keeper is collected.
"""

import logging
import weakref
from collections.abc import Iterable, Iterator
from enum import Enum
from functools import singledispatch
from typing import Any, Generic, TypeVar

from lazyviews.capabilities import begin, end
from lazyviews.config import get_settings
from lazyviews.cursors import Cursor, GuardedCursor
from lazyviews.errors import PreconditionViolation

logger = logging.getLogger(__name__)

S = TypeVar("S")

_MOVED = object()


class Ownership(str, Enum):
    """How a keeper holds its sequence"""
    OWNING = "owning"
    BORROWING = "borrowing"
    SHARING = "sharing"


class Owned(Generic[S]):
    """Marks a sequence as handed over to the view that receives it."""

    __slots__ = ("_value",)

    def __init__(self, value: S):
        self._value = value

    @property
    def moved(self) -> bool:
        return self._value is _MOVED

    def take(self) -> S:
        """Hand the value over, leaving this wrapper moved-from."""
        if self._value is _MOVED:
            raise PreconditionViolation("owned value was already moved into a view")
        value, self._value = self._value, _MOVED
        return value

    def __repr__(self) -> str:
        if self.moved:
            return "Owned(<moved>)"
        return f"Owned({self._value!r})"


class Shared(Generic[S]):
    """
    Reference-counted box around a sequence.

    ``use_count`` starts at 1 for the handle's creator; every sharing keeper
    adds one while it lives. ``reset`` rebinds the boxed sequence and bumps
    ``generation`` so cursors created before the reset can notice.
    """

    __slots__ = ("_value", "_use_count", "_generation")

    def __init__(self, value: S):
        self._value = value
        self._use_count = 1
        self._generation = 0

    def get(self) -> S:
        return self._value

    def reset(self, value: S) -> None:
        self._value = value
        self._generation += 1

    @property
    def use_count(self) -> int:
        return self._use_count

    @property
    def generation(self) -> int:
        return self._generation

    def acquire(self) -> "Shared[S]":
        self._use_count += 1
        return self

    def release(self) -> None:
        if self._use_count > 0:
            self._use_count -= 1

    def __repr__(self) -> str:
        return f"Shared({self._value!r}, use_count={self._use_count})"


def owned(value: S) -> Owned[S]:
    """Wrap ``value`` so the receiving view owns it."""
    return Owned(value)


def share(value: S) -> Shared[S]:
    """Wrap ``value`` in a new reference-counted handle."""
    return Shared(value)


# --------- classification ----------

@singledispatch
def ownership_category(argument: Any) -> Ownership:
    """Ownership a view takes for ``argument``, decided by its type."""
    if not isinstance(argument, Iterable):
        raise TypeError(f"expected an iterable, got {type(argument).__name__}")
    return Ownership.BORROWING


@ownership_category.register(Owned)
def _owned_category(argument) -> Ownership:
    return Ownership.OWNING


@ownership_category.register(Iterator)
def _iterator_category(argument) -> Ownership:
    return Ownership.OWNING


@ownership_category.register(Shared)
def _shared_category(argument) -> Ownership:
    return Ownership.SHARING


# --------- keeper ----------

class Keeper(Generic[S]):
    """Holds one sequence as owned, borrowed or shared."""

    __slots__ = ("_category", "_value", "_finalizer", "__weakref__")

    def __init__(self, category: Ownership, value):
        self._category = Ownership(category)
        self._finalizer = None
        if self._category is Ownership.OWNING:
            self._value = value.take() if isinstance(value, Owned) else value
        elif self._category is Ownership.SHARING:
            if not isinstance(value, Shared):
                raise TypeError(f"sharing keeper needs a Shared handle, got {type(value).__name__}")
            self._value = value.acquire()
            self._finalizer = weakref.finalize(self, value.release)
        else:
            self._value = value

    @property
    def category(self) -> Ownership:
        return self._category

    def get(self) -> S:
        """The kept sequence."""
        if self._category is Ownership.SHARING:
            return self._value.get()
        return self._value

    def _guard(self, cursor: Cursor) -> Cursor:
        if self._category is Ownership.SHARING and get_settings().check_stale_cursors:
            return GuardedCursor(cursor, self._value, self._value.generation)
        return cursor

    def begin(self) -> Cursor:
        return self._guard(begin(self.get()))

    def end(self) -> Cursor:
        return self._guard(end(self.get()))

    def __repr__(self) -> str:
        return f"Keeper({self._category.value}, {self.get()!r})"


def make_keeper(category: Ownership, sequence) -> Keeper:
    """Build a keeper holding ``sequence`` as ``category`` prescribes."""
    return Keeper(category, sequence)


def keep(argument) -> Keeper:
    """Classify ``argument`` and keep it accordingly."""
    category = ownership_category(argument)
    logger.debug(f"Keeping {type(argument).__name__} as {category.value}")
    return make_keeper(category, argument)


@begin.register(Keeper)
def _keeper_begin(keeper) -> Cursor:
    return keeper.begin()


@end.register(Keeper)
def _keeper_end(keeper) -> Cursor:
    return keeper.end()
