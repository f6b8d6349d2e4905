from ._basic import (
    CountCollector,
    DictCollector,
    FirstCollector,
    GroupByCollector,
    JoinCollector,
    LastCollector,
    ListCollector,
    MaxCollector,
    MinCollector,
    MinMaxCollector,
    SetCollector,
    TallyCollector,
)
from ._collector import AsyncCollector, Collector, EventualCollector
from ._flatten import FlattenCollector
from ._fluent import (
    AndThenCollector,
    FilteringCollector,
    FluentCollector,
    MappingCollector,
)
from ._forking import ForkingCollector
from ._reducing import FoldCollector, ReduceCollector
from ._teeing import TeeingCollector

__all__ = [
    "AndThenCollector",
    "AsyncCollector",
    "Collector",
    "CountCollector",
    "DictCollector",
    "EventualCollector",
    "FilteringCollector",
    "FirstCollector",
    "FlattenCollector",
    "FluentCollector",
    "FoldCollector",
    "ForkingCollector",
    "GroupByCollector",
    "JoinCollector",
    "LastCollector",
    "ListCollector",
    "MappingCollector",
    "MaxCollector",
    "MinCollector",
    "MinMaxCollector",
    "ReduceCollector",
    "SetCollector",
    "TallyCollector",
    "TeeingCollector",
]
