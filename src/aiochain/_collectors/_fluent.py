from __future__ import annotations

from collections.abc import Callable

from .._functions import resolve
from .._types import EventualMapper, EventualPredicate
from ._collector import EventualCollector


class MappingCollector[A, B, R]:
    """Maps each element with **mapper** before forwarding it to **collector**."""

    __slots__ = ("_collector", "_mapper")

    def __init__(self, mapper: EventualMapper[A, B], collector: EventualCollector[B, R]) -> None:
        self._mapper = mapper
        self._collector = collector

    async def collect(self, item: A) -> None:
        await resolve(self._collector.collect(await resolve(self._mapper(item))))

    @property
    def result(self) -> R:
        return self._collector.result


class FilteringCollector[A, R]:
    """Forwards to **collector** only the elements satisfying **predicate**."""

    __slots__ = ("_collector", "_predicate")

    def __init__(self, predicate: EventualPredicate[A], collector: EventualCollector[A, R]) -> None:
        self._predicate = predicate
        self._collector = collector

    async def collect(self, item: A) -> None:
        if await resolve(self._predicate(item)):
            await resolve(self._collector.collect(item))

    @property
    def result(self) -> R:
        return self._collector.result


class AndThenCollector[A, B, R]:
    """Applies **mapper** to the final result of **collector**.

    Elements are forwarded unchanged, **mapper** runs each time `result` is read.
    """

    __slots__ = ("_collector", "_mapper")

    def __init__(self, collector: EventualCollector[A, B], mapper: Callable[[B], R]) -> None:
        self._collector = collector
        self._mapper = mapper

    async def collect(self, item: A) -> None:
        await resolve(self._collector.collect(item))

    @property
    def result(self) -> R:
        return self._mapper(self._collector.result)


class FluentCollector[A, R]:
    """Chainable decoration of a collector.

    `map` adapts the input, `filter` drops input, `and_then` adapts the output.
    Every method returns a new `FluentCollector` sharing the same underlying collector.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> collector = (
    ...     ac.FluentCollector.from_(ac.ListCollector[int]())
    ...     .filter(lambda x: x > 1)
    ...     .map(len)
    ...     .and_then(sum)
    ... )
    >>> asyncio.run(ac.AsyncIter.from_(["a", "bb", "ccc"]).collect_to(collector))
    5

    ```
    """

    __slots__ = ("_collector",)

    def __init__(self, collector: EventualCollector[A, R]) -> None:
        self._collector = collector

    @staticmethod
    def from_[T, U](collector: EventualCollector[T, U]) -> FluentCollector[T, U]:
        if isinstance(collector, FluentCollector):
            return collector
        return FluentCollector(collector)

    async def collect(self, item: A) -> None:
        await resolve(self._collector.collect(item))

    @property
    def result(self) -> R:
        return self._collector.result

    def map[C](self, mapper: EventualMapper[C, A]) -> FluentCollector[C, R]:
        return FluentCollector(MappingCollector(mapper, self._collector))

    def filter(self, predicate: EventualPredicate[A]) -> FluentCollector[A, R]:
        return FluentCollector(FilteringCollector(predicate, self._collector))

    def and_then[C](self, mapper: Callable[[R], C]) -> FluentCollector[A, C]:
        return FluentCollector(AndThenCollector(self._collector, mapper))
