import logging

from ._aiter import AsyncIter, async_iter, empty, loop, range_, repeat, singleton
from ._awaitables import AwaitableIter, awaitable_iter
from ._collectors import (
    AndThenCollector,
    AsyncCollector,
    Collector,
    CountCollector,
    DictCollector,
    EventualCollector,
    FilteringCollector,
    FirstCollector,
    FlattenCollector,
    FluentCollector,
    FoldCollector,
    ForkingCollector,
    GroupByCollector,
    JoinCollector,
    LastCollector,
    ListCollector,
    MappingCollector,
    MaxCollector,
    MinCollector,
    MinMaxCollector,
    ReduceCollector,
    SetCollector,
    TallyCollector,
    TeeingCollector,
)
from ._core import (
    AiochainError,
    Config,
    InvalidIterableError,
    InvalidSizeError,
    LazyMapperError,
    get_config,
    set_config,
)
from ._functors import AsyncFunctor
from ._lazy import AsyncLazy, async_lazy
from ._results import (
    NONE,
    Either,
    Err,
    Left,
    NoneOption,
    Ok,
    Option,
    OptionUnwrapError,
    Result,
    ResultUnwrapError,
    Right,
    Some,
)
from ._types import Enumerated, MinMax, Seeded

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NONE",
    "AiochainError",
    "AndThenCollector",
    "AsyncCollector",
    "AsyncFunctor",
    "AsyncIter",
    "AsyncLazy",
    "AwaitableIter",
    "Collector",
    "Config",
    "CountCollector",
    "DictCollector",
    "Either",
    "Enumerated",
    "Err",
    "EventualCollector",
    "FilteringCollector",
    "FirstCollector",
    "FlattenCollector",
    "FluentCollector",
    "FoldCollector",
    "ForkingCollector",
    "GroupByCollector",
    "InvalidIterableError",
    "InvalidSizeError",
    "JoinCollector",
    "LastCollector",
    "LazyMapperError",
    "Left",
    "ListCollector",
    "MappingCollector",
    "MaxCollector",
    "MinCollector",
    "MinMax",
    "MinMaxCollector",
    "NoneOption",
    "Ok",
    "Option",
    "OptionUnwrapError",
    "ReduceCollector",
    "Result",
    "ResultUnwrapError",
    "Right",
    "Seeded",
    "SetCollector",
    "Some",
    "TallyCollector",
    "TeeingCollector",
    "async_iter",
    "async_lazy",
    "awaitable_iter",
    "empty",
    "get_config",
    "loop",
    "range_",
    "repeat",
    "set_config",
    "singleton",
]
