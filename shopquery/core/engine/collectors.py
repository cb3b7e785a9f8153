"""
Downstream collectors for group_by.

A Collector is a value wrapping a pure function from the members of one
group (in input order) to the aggregated value stored under the group key.
New strategies are built by composing these factories, not by subclassing.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from shopquery.core.engine.aggregates import average, reduce_values, total
from shopquery.core.engine.statistics import SummaryStatistics, summarize

T = TypeVar("T")
V = TypeVar("V")


@dataclass(frozen=True)
class Collector(Generic[T, V]):
    """Named aggregation strategy over a group's members."""

    name: str
    collect: Callable[[Sequence[T]], V]

    def __call__(self, members: Sequence[T]) -> V:
        return self.collect(members)


def to_list() -> Collector[T, list[T]]:
    """Keep the group members as a list."""
    return Collector("to_list", list)


def mapping(
    fn: Callable[[T], Any], downstream: Collector | None = None
) -> Collector[T, Any]:
    """Map each member with ``fn`` before handing the group to ``downstream``."""
    downstream = downstream or to_list()
    return Collector(
        f"mapping({downstream.name})",
        lambda members: downstream([fn(member) for member in members]),
    )


def counting() -> Collector[T, int]:
    return Collector("counting", len)


def max_by(key: Callable[[T], Any]) -> Collector[T, T | None]:
    """Member with the largest key; the first one seen wins a tie."""

    def collect(members: Sequence[T]) -> T | None:
        best = None
        for member in members:
            if best is None or key(member) > key(best):
                best = member
        return best

    return Collector("max_by", collect)


def min_by(key: Callable[[T], Any]) -> Collector[T, T | None]:
    """Member with the smallest key; the first one seen wins a tie."""

    def collect(members: Sequence[T]) -> T | None:
        best = None
        for member in members:
            if best is None or key(member) < key(best):
                best = member
        return best

    return Collector("min_by", collect)


def reducing(
    extract: Callable[[T], Any], combiner: Callable[[Any, Any], Any], seed: Any
) -> Collector[T, Any]:
    return Collector(
        "reducing",
        lambda members: reduce_values(members, extract, combiner, seed),
    )


def summing(extract: Callable[[T], Any]) -> Collector[T, Any]:
    return Collector("summing", lambda members: total(members, extract))


def averaging(extract: Callable[[T], Any]) -> Collector[T, Any]:
    return Collector("averaging", lambda members: average(members, extract))


def summarizing(extract: Callable[[T], Any]) -> Collector[T, SummaryStatistics]:
    return Collector("summarizing", lambda members: summarize(members, extract))


def collecting_and_then(
    downstream: Collector[T, V], finisher: Callable[[V], Any]
) -> Collector[T, Any]:
    """Apply ``finisher`` to the result of ``downstream``."""
    return Collector(
        f"{downstream.name}+finisher",
        lambda members: finisher(downstream(members)),
    )
