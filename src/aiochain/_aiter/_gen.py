"""Lazy primitives over `AsyncIterator`.

Every function here takes ownership of the iterator(s) it receives and pulls them only on downstream demand.
Generators never pull ahead: one downstream pull causes at most the upstream pulls needed to produce one element.

Side functions (mappers, predicates, reducers, consumers) may be synchronous or return an awaitable.
Their failures propagate to the consumer at the pull that triggered them.
"""

from __future__ import annotations

import builtins
from collections.abc import AsyncIterator, Awaitable, Iterator
from typing import TYPE_CHECKING, Any, cast

from .._core import InvalidSizeError
from .._functions import identity, resolve
from .._types import (
    EventualConsumer,
    EventualIterable,
    EventualMapper,
    EventualPredicate,
    EventualReducer,
    Enumerated,
    Eventually,
)
from ._coerce import EventualIterator, to_eventual_iterator

if TYPE_CHECKING:
    from .._collectors import EventualCollector

DONE: Any = object()


async def empty() -> AsyncIterator[Any]:
    return
    yield  # pragma: no cover


async def singleton[T](value: T | None) -> AsyncIterator[T]:
    if value is not None:
        yield value


async def map[T, R](it: AsyncIterator[T], mapper: EventualMapper[T, R]) -> AsyncIterator[R]:
    async for item in it:
        yield await resolve(mapper(item))


async def flat_map[T, R](
    it: AsyncIterator[T],
    mapper: EventualMapper[T, EventualIterable[R] | EventualIterator[R]],
) -> AsyncIterator[R]:
    async for item in it:
        match to_eventual_iterator(await resolve(mapper(item))):
            case AsyncIterator() as inner:
                async for value in inner:
                    yield value
            case inner:
                for value in cast(Iterator[R], inner):
                    yield value


async def filter[T](it: AsyncIterator[T], predicate: EventualPredicate[T]) -> AsyncIterator[T]:
    async for item in it:
        if await resolve(predicate(item)):
            yield item


def remove_none[T](it: AsyncIterator[T | None]) -> AsyncIterator[T]:
    return filter(it, lambda x: x is not None)  # type: ignore[return-value]


async def filter_map[T, R](
    it: AsyncIterator[T], mapper: EventualMapper[T, R | None]
) -> AsyncIterator[R]:
    async for item in it:
        value = await resolve(mapper(item))
        if value is not None:
            yield value


async def tap[T](it: AsyncIterator[T], consumer: EventualConsumer[T]) -> AsyncIterator[T]:
    async for item in it:
        await resolve(consumer(item))
        yield item


async def take[T](it: AsyncIterator[T], n: int) -> AsyncIterator[T]:
    if n <= 0:
        return
    count = 0
    async for item in it:
        yield item
        count += 1
        if count >= n:
            return


async def skip[T](it: AsyncIterator[T], n: int) -> AsyncIterator[T]:
    for _ in builtins.range(n):
        if await anext(it, DONE) is DONE:
            return
    async for item in it:
        yield item


async def take_while[T](it: AsyncIterator[T], predicate: EventualPredicate[T]) -> AsyncIterator[T]:
    async for item in it:
        if not await resolve(predicate(item)):
            return
        yield item


async def skip_while[T](it: AsyncIterator[T], predicate: EventualPredicate[T]) -> AsyncIterator[T]:
    skipping = True
    async for item in it:
        if skipping:
            skipping = bool(await resolve(predicate(item)))
            if skipping:
                continue
        yield item


async def zip[T, U](it1: AsyncIterator[T], it2: AsyncIterator[U]) -> AsyncIterator[tuple[T, U]]:
    while True:
        left = await anext(it1, DONE)
        right = await anext(it2, DONE)
        if left is DONE or right is DONE:
            return
        yield left, right


async def enumerate[T](it: AsyncIterator[T], start: int = 0) -> AsyncIterator[Enumerated[T]]:
    idx = start
    async for item in it:
        yield Enumerated(idx, item)
        idx += 1


async def scan[T, R](
    it: AsyncIterator[T],
    reducer: EventualReducer[T, R],
    initial: R,
    *,
    emit_initial: bool = False,
) -> AsyncIterator[R]:
    acc = initial
    if emit_initial:
        yield acc
    async for item in it:
        acc = await resolve(reducer(acc, item))
        yield acc


async def concat[T](*iterators: AsyncIterator[T]) -> AsyncIterator[T]:
    for inner in iterators:
        async for item in inner:
            yield item


def append[T](it: AsyncIterator[T], other: AsyncIterator[T]) -> AsyncIterator[T]:
    return concat(it, other)


def prepend[T](it: AsyncIterator[T], other: AsyncIterator[T]) -> AsyncIterator[T]:
    return concat(other, it)


def partition[T](it: AsyncIterator[T], size: int) -> AsyncIterator[list[T]]:
    """Group consecutive elements into lists of **size** elements.

    The last batch holds the remaining elements and is never empty.
    A size of 0 behaves like a size of 1.

    Raises:
        InvalidSizeError: Immediately, if **size** is not a non-negative integer.
    """
    return _partition(it, check_size(size))


def check_size(size: int) -> int:
    """Validate a batch size, returning the effective size."""
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        msg = f"Invalid size integer number: {size!r}"
        raise InvalidSizeError(msg)
    return max(size, 1)


async def _partition[T](it: AsyncIterator[T], size: int) -> AsyncIterator[list[T]]:
    values: list[T] = []
    async for item in it:
        values.append(item)
        if len(values) >= size:
            yield values
            values = []
    if values:
        yield values


async def distinct[T, K](
    it: AsyncIterator[T], key: EventualMapper[T, K] | None = None
) -> AsyncIterator[T]:
    to_key = cast(EventualMapper[T, K], identity if key is None else key)
    seen: set[K] = set()
    async for item in it:
        k = await resolve(to_key(item))
        if k not in seen:
            seen.add(k)
            yield item


# terminal operations


async def first[T](it: AsyncIterator[T]) -> T | None:
    return await anext(it, None)


async def last[T](it: AsyncIterator[T]) -> T | None:
    value = None
    async for item in it:
        value = item
    return value


async def for_each[T](it: AsyncIterator[T], consumer: EventualConsumer[T]) -> None:
    async for item in it:
        await resolve(consumer(item))


async def all[T](it: AsyncIterator[T], predicate: EventualPredicate[T]) -> bool:
    async for item in it:
        if not await resolve(predicate(item)):
            return False
    return True


async def some[T](it: AsyncIterator[T], predicate: EventualPredicate[T]) -> bool:
    async for item in it:
        if await resolve(predicate(item)):
            return True
    return False


def contains[T](it: AsyncIterator[T], predicate: EventualPredicate[T]) -> Awaitable[bool]:
    return some(it, predicate)


async def includes[T](it: AsyncIterator[T], target: Eventually[T]) -> bool:
    expected = await resolve(target)
    async for item in it:
        if item == expected:
            return True
    return False


async def fold[T, R](it: AsyncIterator[T], reducer: EventualReducer[T, R], initial: R) -> R:
    acc = initial
    async for item in it:
        acc = await resolve(reducer(acc, item))
    return acc


async def reduce[T](
    it: AsyncIterator[T], reducer: EventualReducer[T, T], initial: T | None = None
) -> T | None:
    if initial is None:
        seed = await anext(it, DONE)
        if seed is DONE:
            return None
        initial = cast(T, seed)
    return await fold(it, reducer, initial)


async def collect_to[T, R](
    it: AsyncIterator[T], collector: EventualCollector[T, Eventually[R]]
) -> R:
    """Drain **it** into a `Collector` or `AsyncCollector`, then return its result."""
    async for item in it:
        await resolve(collector.collect(item))
    return await resolve(collector.result)
