"""Query Engine: filter, flatten, transform, sort, group, reduce, summarize."""

from .aggregates import (
    EmptyAggregationError,
    average,
    maximum,
    minimum,
    reduce_values,
    total,
)
from .collectors import (
    Collector,
    averaging,
    collecting_and_then,
    counting,
    mapping,
    max_by,
    min_by,
    reducing,
    summarizing,
    summing,
    to_list,
)
from .operations import (
    DuplicateKeyError,
    discount,
    filter_by,
    flatten,
    group_by,
    index_by,
    order_by,
    sort_limit,
    transform,
)
from .statistics import SummaryStatistics, summarize

__all__ = [
    "Collector",
    "DuplicateKeyError",
    "EmptyAggregationError",
    "SummaryStatistics",
    "average",
    "averaging",
    "collecting_and_then",
    "counting",
    "discount",
    "filter_by",
    "flatten",
    "group_by",
    "index_by",
    "mapping",
    "max_by",
    "maximum",
    "min_by",
    "minimum",
    "order_by",
    "reduce_values",
    "reducing",
    "sort_limit",
    "summarize",
    "summarizing",
    "summing",
    "to_list",
    "total",
    "transform",
]
