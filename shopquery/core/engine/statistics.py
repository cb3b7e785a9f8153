"""Single-pass summary statistics."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar

from shopquery.core.engine.aggregates import EmptyAggregationError

T = TypeVar("T")

Number = Decimal | int | float


@dataclass(frozen=True)
class SummaryStatistics:
    """
    Count, sum, min, max and average of a numeric sequence.

    ``min``, ``max`` and ``average`` are undefined for an empty summary and
    raise EmptyAggregationError when read.
    """

    count: int = 0
    sum: Number = 0
    _min: Number | None = None
    _max: Number | None = None

    @property
    def min(self) -> Number:
        if self.count == 0:
            raise EmptyAggregationError("min")
        return self._min

    @property
    def max(self) -> Number:
        if self.count == 0:
            raise EmptyAggregationError("max")
        return self._max

    @property
    def average(self) -> Number:
        if self.count == 0:
            raise EmptyAggregationError("average")
        return self.sum / self.count

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def accept(self, value: Number) -> "SummaryStatistics":
        """Return a summary that also includes ``value``."""
        if self.count == 0:
            return SummaryStatistics(1, value, value, value)
        return SummaryStatistics(
            count=self.count + 1,
            sum=self.sum + value,
            _min=value if value < self._min else self._min,
            _max=value if value > self._max else self._max,
        )

    def combine(self, other: "SummaryStatistics") -> "SummaryStatistics":
        """Merge two summaries as if their inputs had been concatenated."""
        if other.count == 0:
            return self
        if self.count == 0:
            return other
        return SummaryStatistics(
            count=self.count + other.count,
            sum=self.sum + other.sum,
            _min=min(self._min, other._min),
            _max=max(self._max, other._max),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict; undefined values become None."""
        return {
            "count": self.count,
            "sum": self.sum,
            "min": self._min,
            "max": self._max,
            "average": None if self.count == 0 else self.average,
        }

    def __repr__(self) -> str:
        if self.count == 0:
            return "SummaryStatistics(count=0, sum=0)"
        return (
            f"SummaryStatistics(count={self.count}, sum={self.sum}, "
            f"min={self._min}, max={self._max}, average={self.average})"
        )


def summarize(items: Iterable[T], extract: Callable[[T], Number]) -> SummaryStatistics:
    """Compute count, sum, min and max of extracted values in one traversal."""
    count = 0
    running = 0
    low = high = None
    for item in items:
        value = extract(item)
        if count == 0:
            low = high = value
        elif value < low:
            low = value
        elif value > high:
            high = value
        running += value
        count += 1
    return SummaryStatistics(count=count, sum=running, _min=low, _max=high)
