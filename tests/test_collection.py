import operator

import pytest

from lazyviews import LazyCollection, Ownership, PreconditionViolation, owned, share


class TestComposability:
    """Test operation composability and method chaining"""

    def test_method_chaining(self):
        """Methods can be chained together"""
        result = (
            LazyCollection(range(20))
            .map(lambda x: x * 2)
            .filter(lambda x: x > 10)
            .slice(3, 8)
            .to_list()
        )

        expected = [18, 20, 22, 24, 26]
        assert result == expected, f"Expected {expected}, got {result}"

    def test_multiple_maps(self):
        """Map operations compose in order"""
        result = (
            LazyCollection([1, 2, 3, 4, 5])
            .map(lambda x: x * 2)
            .map(lambda x: x + 1)
            .map(lambda x: x * 3)
            .to_list()
        )

        expected = [9, 15, 21, 27, 33]  # ((x*2)+1)*3
        assert result == expected, f"Expected {expected}, got {result}"

    def test_multiple_filters(self):
        """Filter operations compose as a conjunction"""
        result = (
            LazyCollection(range(20))
            .filter(lambda x: x % 2 == 0)
            .filter(lambda x: x % 3 == 0)
            .filter(lambda x: x > 5)
            .to_list()
        )

        expected = [6, 12, 18]
        assert result == expected, f"Expected {expected}, got {result}"

    def test_nested_slices(self):
        """Slices of slices count positions of the inner slice"""
        result = LazyCollection(range(20)).slice(5, 15).slice(2, 7).to_list()

        expected = [7, 8, 9, 10, 11]
        assert result == expected, f"Expected {expected}, got {result}"

    def test_concatenate_zip_flatten(self):
        """The multi-range operators are chainable too"""
        joined = LazyCollection([1, 2]).concatenate([3], LazyCollection([4])).to_list()
        assert joined == [1, 2, 3, 4], f"Unexpected concatenation: {joined}"

        zipped = LazyCollection("abc").zip(range(2)).to_list()
        assert zipped == [("a", 0), ("b", 1)], f"Unexpected zip: {zipped}"

        summed = LazyCollection([1, 2, 3]).zip([10, 20, 30], zipper=operator.add).to_list()
        assert summed == [11, 22, 33], f"Unexpected zip: {summed}"

        flat = LazyCollection([[1], [], [2, 3]]).flatten().map(str).join()
        assert flat == "123", f"Unexpected flatten: {flat}"

    def test_enumerate(self):
        """enumerate pairs positions with elements"""
        result = LazyCollection(["x", "y"]).enumerate(start=1).to_list()
        assert result == [(1, "x"), (2, "y")], f"Unexpected result: {result}"

    def test_operation_order_matters(self):
        """The order of operations affects the result"""
        result1 = LazyCollection(range(10)).filter(lambda x: x > 5).map(lambda x: x * 2).to_list()
        result2 = LazyCollection(range(10)).map(lambda x: x * 2).filter(lambda x: x > 5).to_list()

        assert result1 == [12, 14, 16, 18], f"Result1 unexpected: {result1}"
        assert result2 == [6, 8, 10, 12, 14, 16, 18], f"Result2 unexpected: {result2}"


class TestOwnership:
    """Test how a collection keeps its source"""

    def test_source_ownership(self):
        """The source is kept the way the entry points keep it"""
        assert LazyCollection([1]).ownership is Ownership.BORROWING
        assert LazyCollection(owned([1])).ownership is Ownership.OWNING
        assert LazyCollection(share([1])).ownership is Ownership.SHARING
        assert LazyCollection(iter([1])).ownership is Ownership.OWNING

    def test_chained_collections_own_their_views(self):
        """Every chained call owns the view it builds"""
        assert LazyCollection([1]).map(str).ownership is Ownership.OWNING

    def test_wrapping_a_collection_reuses_its_source(self):
        """LazyCollection(LazyCollection(x)) reads the same source"""
        data = [1, 2]
        outer = LazyCollection(LazyCollection(data))
        data.append(3)
        assert outer.to_list() == [1, 2, 3]


class TestConstraints:
    """Test system constraints and edge cases"""

    def test_negative_take_constraint(self):
        """Negative take is rejected when chained"""
        with pytest.raises(PreconditionViolation):
            LazyCollection(range(5)).take(-1)

    def test_reversed_slice_constraint(self):
        """A reversed slice is rejected when chained"""
        with pytest.raises(PreconditionViolation):
            LazyCollection(range(5)).slice(3, 1)

    def test_large_take_constraint(self):
        """Take larger than the collection returns everything"""
        result = LazyCollection(range(5)).take(10).to_list()
        assert result == [0, 1, 2, 3, 4], f"Take larger than collection should return all items, got {result}"

        result = LazyCollection(range(5)).slice(2, 12).to_list()
        assert result == [2, 3, 4], f"Slice past the end should return the remainder, got {result}"

    def test_empty_collection_constraint(self):
        """Operations on empty collections give empty results"""
        empty_lazy = LazyCollection([])

        assert empty_lazy.to_list() == [], "Empty collection should return empty list"
        assert empty_lazy.count() == 0, "Empty collection count should be 0"
        assert empty_lazy.accumulate(0) == 0, "Empty collection sum should be 0"
        assert empty_lazy.empty()
        assert empty_lazy.map(lambda x: x * 2).to_list() == []
        assert empty_lazy.slice(5, 8).take(3).to_list() == []

    def test_none_values_constraint(self):
        """None values are ordinary elements"""
        data_with_none = [1, None, 3, None, 5]

        assert LazyCollection(data_with_none).to_list() == data_with_none
        result = LazyCollection(data_with_none).filter(lambda x: x is not None).to_list()
        assert result == [1, 3, 5], f"Should filter out None values, got {result}"
        assert LazyCollection(data_with_none).count() == 5

    def test_function_exception_constraint(self):
        """Exceptions from user functions propagate during evaluation"""
        def failing_function(x):
            if x == 3:
                raise ValueError("Test exception")
            return x * 2

        lazy_col = LazyCollection(range(5)).map(failing_function)

        with pytest.raises(ValueError, match="Test exception"):
            lazy_col.to_list()

    def test_iterator_exhaustion_constraint(self):
        """A generator source can be consumed only once"""
        def limited_generator():
            yield 1
            yield 2
            yield 3

        lazy_col = LazyCollection(limited_generator())

        result1 = lazy_col.to_list()
        assert result1 == [1, 2, 3], f"First consumption failed: {result1}"

        result2 = lazy_col.to_list()
        assert result2 == [], f"Second consumption should be empty due to generator exhaustion: {result2}"

    def test_infinite_sequence_constraint(self):
        """Infinite generators work with take and filter"""
        def infinite_counter():
            i = 0
            while True:
                yield i
                i += 1

        result = LazyCollection(infinite_counter()).take(5).to_list()
        assert result == [0, 1, 2, 3, 4], f"Infinite sequence with take failed: {result}"

        result = (
            LazyCollection(infinite_counter())
            .filter(lambda x: x % 2 == 0)
            .take(5)
            .to_list()
        )
        assert result == [0, 2, 4, 6, 8], f"Infinite sequence with filter failed: {result}"

        result = LazyCollection(infinite_counter()).take_while(lambda x: x < 3).to_list()
        assert result == [0, 1, 2], f"Infinite sequence with take_while failed: {result}"


class TestReductions:
    """Test reducing operations"""

    def test_accumulate_and_reduce(self):
        """Folds over the elements"""
        collection = LazyCollection(range(1, 6))
        assert collection.accumulate(0) == 15
        assert collection.accumulate(1, operator.mul) == 120
        assert collection.reduce(lambda a, b: a + b) == 15
        assert collection.reduce(lambda a, b: a + b, 10) == 25

    def test_count_with_transformations(self):
        """count counts the elements of the chained view"""
        count = LazyCollection(range(100)).filter(lambda x: x % 7 == 0).count()
        assert count == 15, f"Expected 15, got {count}"
        assert LazyCollection(range(100)).size() == 100

    def test_predicates(self):
        """all/any/none over the elements"""
        collection = LazyCollection([2, 4, 6])
        assert collection.all(lambda x: x % 2 == 0)
        assert collection.any(lambda x: x > 5)
        assert collection.none(lambda x: x > 6)

    def test_lookups(self):
        """find, find_if, contains and first"""
        collection = LazyCollection(range(10)).map(lambda x: x * x)
        assert collection.find(49).value == 49
        assert not collection.find(50)
        assert collection.find_if(lambda x: x > 10).value == 16
        assert collection.contains(81)
        assert collection.first() == 0
        assert LazyCollection([]).first("nothing") == "nothing"

    def test_find_in_mapping(self):
        """find on a mapping source uses key lookup"""
        assert LazyCollection({"a": 1}).find("a").value == ("a", 1)

    def test_materialize(self):
        """to, join and for_each force evaluation"""
        collection = LazyCollection([3, 1, 3])
        assert collection.to(set) == {1, 3}
        assert collection.to(tuple) == (3, 1, 3)
        assert collection.join("-") == "3-1-3"

        seen = []
        collection.for_each(seen.append)
        assert seen == [3, 1, 3]

    def test_partition(self):
        """partition splits into two lazy collections"""
        evens, odds = LazyCollection(range(7)).partition(lambda x: x % 2 == 0)
        assert evens.to_list() == [0, 2, 4, 6]
        assert odds.to_list() == [1, 3, 5]

    def test_reduce_with_none_as_initial(self):
        """None is a valid explicit initial value"""
        result = LazyCollection([1, 2]).reduce(lambda acc, x: (acc, x), None)
        assert result == ((None, 1), 2), f"Unexpected fold: {result}"

        with pytest.raises(TypeError):
            LazyCollection([]).reduce(lambda acc, x: acc + x)

    def test_empty_check_consumes_first_generator_element(self):
        """empty() on a generator source reads its first element"""
        def limited_generator():
            yield 0
            yield 1
            yield 2

        collection = LazyCollection(limited_generator())
        assert not collection.empty()
        assert collection.to_list() == [1, 2], "The element read by empty() is not replayed"

    def test_multiple_reductions_on_same_collection(self):
        """A collection over a re-iterable source can be reduced repeatedly"""
        collection = LazyCollection([1, 2, 3, 4, 5]).map(lambda x: x * 2)

        assert collection.accumulate(0) == 30
        assert collection.count() == 5
        assert collection.to_list() == [2, 4, 6, 8, 10]


class TestPagination:
    """Test pagination built on slicing"""

    def test_basic_pages(self):
        """page() is 1-indexed"""
        collection = LazyCollection(range(25))
        assert collection.page(1, 10).to_list() == list(range(10))
        assert collection.page(3, 10).to_list() == [20, 21, 22, 23, 24]
        assert collection.page(4, 10).to_list() == []

    def test_pagination_with_filtering(self):
        """Pages are taken from the filtered elements"""
        evens = LazyCollection(range(50)).filter(lambda x: x % 2 == 0)
        assert evens.page(2, 5).to_list() == [10, 12, 14, 16, 18]

    def test_page_of_filter_reads_only_the_page(self, call_log):
        """A page stops the filter at its last element"""
        calls, track = call_log
        page = LazyCollection(range(10_000)).filter(track(lambda i: i < 3)).page(1, 3).to_list()

        assert page == [0, 1, 2]
        assert calls == [0, 1, 2], f"Predicate evaluated {len(calls)} times"

    def test_invalid_page_arguments(self):
        """Page numbers and sizes start at 1"""
        with pytest.raises(PreconditionViolation):
            LazyCollection(range(5)).page(0, 10)
        with pytest.raises(PreconditionViolation):
            LazyCollection(range(5)).page(1, 0)

    def test_paginate(self):
        """paginate yields every page until the data runs out"""
        pages = list(LazyCollection(range(23)).paginate(10))
        assert len(pages) == 3, f"Expected 3 pages, got {len(pages)}"
        assert pages[-1] == [20, 21, 22]
        assert [x for page in pages for x in page] == list(range(23))

    def test_paginate_exact_boundaries(self):
        """An exact multiple of the page size produces no empty trailing page"""
        pages = list(LazyCollection(range(20)).paginate(5))
        assert [len(page) for page in pages] == [5, 5, 5, 5]
