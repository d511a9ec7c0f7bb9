"""
Capability dispatch over sequence types.

Positions and lookups are ``functools.singledispatch`` functions: the most
specific registered class in the argument's MRO wins and the base
implementation is the generic fallback. Views and keepers register their own
``begin``/``end`` where they are defined. Size and emptiness walk a fixed
priority order of capabilities instead, since one type may offer several.
"""

from abc import ABC
from collections.abc import Mapping, Set, Sized
from functools import singledispatch
from typing import Any, Iterable, Tuple

from lazyviews.cursors import Cursor, SequenceCursor


def _defines(cls, name: str) -> bool:
    return callable(getattr(cls, name, None))


class SupportsEmpty(ABC):
    """Any class with an ``empty()`` method."""

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is SupportsEmpty:
            return True if _defines(subclass, "empty") else NotImplemented
        return NotImplemented


class SupportsSize(ABC):
    """Any class with a ``size()`` method."""

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is SupportsSize:
            return True if _defines(subclass, "size") else NotImplemented
        return NotImplemented


# --------- positions ----------

@singledispatch
def begin(sequence: Iterable) -> Cursor:
    """Cursor at the first position of ``sequence``."""
    return SequenceCursor.begin(sequence)


@singledispatch
def end(sequence: Iterable) -> Cursor:
    """Cursor one past the last position of ``sequence``."""
    return SequenceCursor.end(sequence)


def advance_bounded(cursor: Cursor, steps: int, last: Cursor) -> Cursor:
    """Advance ``cursor`` by ``steps`` positions, stopping early at ``last``."""
    for _ in range(steps):
        if cursor == last:
            break
        cursor.advance()
    return cursor


# --------- size / emptiness ----------

def _count(sequence) -> int:
    cursor, last = begin(sequence), end(sequence)
    count = 0
    while cursor != last:
        count += 1
        cursor.advance()
    return count


def size(sequence: Iterable) -> int:
    """
    Number of elements in ``sequence``.

    Tried in order: a ``size()`` method, ``len()``, counting with a cursor.
    """
    if isinstance(sequence, SupportsSize):
        return sequence.size()
    if isinstance(sequence, Sized):
        return len(sequence)
    return _count(sequence)


def empty(sequence: Iterable) -> bool:
    """
    True if ``sequence`` has no elements.

    Tried in order: an ``empty()`` method, a ``size()`` method, ``len()``,
    comparing begin and end cursors. The last one reads the first element,
    so on a one-shot iterator that element is consumed and a later traversal
    starts at the second one.
    """
    if isinstance(sequence, SupportsEmpty):
        return bool(sequence.empty())
    if isinstance(sequence, SupportsSize):
        return sequence.size() == 0
    if isinstance(sequence, Sized):
        return len(sequence) == 0
    return not (begin(sequence) != end(sequence))


def known_size(sequence: Any):
    """Length when it is available without iterating, otherwise None."""
    if isinstance(sequence, Sized):
        return len(sequence)
    return None


# --------- lookup ----------

@singledispatch
def find_element(sequence: Iterable, needle) -> Tuple[bool, Any]:
    """
    Look up ``needle`` in ``sequence``.

    Returns a ``(found, element)`` pair. The generic implementation scans
    linearly and compares with ``element == needle``; associative
    collections use their own lookup.
    """
    cursor, last = begin(sequence), end(sequence)
    while cursor != last:
        element = cursor.get()
        if element == needle:
            return True, element
        cursor.advance()
    return False, None


@find_element.register(Mapping)
def _find_in_mapping(sequence, needle):
    if needle in sequence:
        return True, (needle, sequence[needle])
    return False, None


@find_element.register(Set)
def _find_in_set(sequence, needle):
    if needle in sequence:
        return True, needle
    return False, None
