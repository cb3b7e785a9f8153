"""
Tests for reduce/aggregate operations and summary statistics.
"""

from decimal import Decimal
from operator import attrgetter

import pytest

from shopquery.core.domain import Snapshot
from shopquery.core.engine import (
    EmptyAggregationError,
    SummaryStatistics,
    average,
    maximum,
    minimum,
    reduce_values,
    summarize,
    total,
)
from shopquery.core.errors import QueryEngineError

price = attrgetter("price")


class TestReduce:
    """Tests for seeded folds."""

    def test_total(self, snapshot: Snapshot) -> None:
        assert total(snapshot.products, price) == Decimal("775.50")

    def test_total_of_empty_is_seed(self) -> None:
        assert total([], price) == 0
        assert total([], price, seed=Decimal("0.00")) == Decimal("0.00")

    def test_reduce_values_with_custom_combiner(self, snapshot: Snapshot) -> None:
        most = reduce_values(snapshot.customers, attrgetter("tier"), max, 0)

        assert most == 3

    def test_reduce_empty_returns_seed(self) -> None:
        assert reduce_values([], price, lambda a, b: a + b, Decimal(7)) == Decimal(7)


class TestAverage:
    """Tests for average, minimum and maximum."""

    def test_average(self, snapshot: Snapshot) -> None:
        toys = [snapshot.product(3), snapshot.product(6)]

        assert average(toys, price) == Decimal("35.25")

    def test_average_of_empty_raises(self) -> None:
        """An empty average is an error, never zero or NaN."""
        with pytest.raises(EmptyAggregationError) as exc_info:
            average([], price)

        assert exc_info.value.aggregate == "average"
        assert isinstance(exc_info.value, QueryEngineError)

    def test_minimum_and_maximum(self, snapshot: Snapshot) -> None:
        assert minimum(snapshot.products, price) == Decimal("15.00")
        assert maximum(snapshot.products, price) == Decimal("300.00")

    def test_minimum_of_empty_raises(self) -> None:
        with pytest.raises(EmptyAggregationError):
            minimum([], price)
        with pytest.raises(EmptyAggregationError):
            maximum([], price)


class TestSummaryStatistics:
    """Tests for single-pass statistics."""

    def test_books_summary(self, snapshot: Snapshot) -> None:
        books = [snapshot.product(1), snapshot.product(2), snapshot.product(5)]

        stats = summarize(books, price)

        assert stats.count == 3
        assert stats.sum == Decimal("350.00")
        assert stats.min == Decimal("80.00")
        assert stats.max == Decimal("150.00")
        assert stats.average == Decimal("350.00") / 3

    def test_single_traversal(self) -> None:
        """Values are extracted exactly once each, from a one-shot iterator."""
        extracted = []

        def extract(value: int) -> int:
            extracted.append(value)
            return value

        stats = summarize(iter([3, 1, 2]), extract)

        assert extracted == [3, 1, 2]
        assert (stats.count, stats.sum, stats.min, stats.max) == (3, 6, 1, 3)

    def test_empty_summary(self) -> None:
        stats = summarize([], price)

        assert stats.count == 0
        assert stats.sum == 0
        assert stats.is_empty
        with pytest.raises(EmptyAggregationError):
            stats.average
        with pytest.raises(EmptyAggregationError):
            stats.min
        with pytest.raises(EmptyAggregationError):
            stats.max

    def test_increasing_and_decreasing_inputs(self) -> None:
        assert summarize([1, 2, 3], lambda v: v).max == 3
        assert summarize([3, 2, 1], lambda v: v).min == 1

    def test_combine(self) -> None:
        left = summarize([1, 5], lambda v: v)
        right = summarize([3, 9, -2], lambda v: v)

        combined = left.combine(right)

        assert combined == summarize([1, 5, 3, 9, -2], lambda v: v)
        assert left.combine(SummaryStatistics()) is left
        assert SummaryStatistics().combine(right) is right

    def test_accept(self) -> None:
        stats = SummaryStatistics().accept(4).accept(2)

        assert stats == summarize([4, 2], lambda v: v)

    def test_to_dict(self) -> None:
        assert summarize([2, 4], lambda v: v).to_dict() == {
            "count": 2,
            "sum": 6,
            "min": 2,
            "max": 4,
            "average": 3,
        }
        assert SummaryStatistics().to_dict()["average"] is None
