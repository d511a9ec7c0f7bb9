"""
Lazy, composable views over existing collections.

Views defer mapping, filtering, concatenation, zipping, flattening and
bounded slicing until iteration, and keep their source collection owned,
borrowed or shared depending on how it was passed in.
"""

from lazyviews.algorithm import (
    concatenate,
    enumerate,
    filter,
    find,
    flatten,
    for_each,
    iterate,
    pick_first,
    pick_second,
    slice,
    take,
    take_while,
    transform,
    zip,
)
from lazyviews.collection import LazyCollection
from lazyviews.config import configure, get_settings, reset_settings
from lazyviews.errors import PreconditionViolation, StaleIteratorError, ViewError
from lazyviews.keeper import Keeper, Owned, Ownership, Shared, keep, make_keeper, owned, ownership_category, share
from lazyviews.models import ViewSettings
from lazyviews.terminal import (
    Maybe,
    accumulate,
    all_of,
    any_of,
    collect,
    contains,
    empty,
    find_if,
    first,
    join,
    none_of,
    partition,
    size,
)
from lazyviews.views import View

__version__ = "0.1.0"
