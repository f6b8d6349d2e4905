from __future__ import annotations

import builtins
import logging
from collections.abc import AsyncIterator, Awaitable, Coroutine, Iterable, Iterator
from typing import Any, override

import anyio
import cytoolz as cz
import more_itertools as mit

from ._aiter import AsyncIter
from ._aiter._gen import check_size
from ._core import CommonBase
from ._functions import resolve
from ._results import Err, Ok, Result
from ._types import (
    Enumerated,
    EventualConsumer,
    EventualMapper,
    EventualPredicate,
    EventualReducer,
    Eventually,
)

logger = logging.getLogger(__name__)


def _close_pending(awaitables: Iterable[Awaitable[Any]]) -> None:
    for aw in awaitables:
        if isinstance(aw, Coroutine):
            aw.close()


async def _then[T, R](aw: Awaitable[T], mapper: EventualMapper[T, R]) -> R:
    return await resolve(mapper(await aw))


async def _tapped[T](aw: Awaitable[T], consumer: EventualConsumer[T]) -> T:
    value = await aw
    await resolve(consumer(value))
    return value


async def _indexed[T](idx: int, aw: Awaitable[T]) -> Enumerated[T]:
    return Enumerated(idx, await aw)


async def gather[T](awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Await all **awaitables** concurrently, preserving their order.

    The first failure cancels the remaining awaitables and is raised as is.
    """
    pending = list(awaitables)
    results: list[Any] = [None] * len(pending)
    failure: list[Exception] = []

    async with anyio.create_task_group() as tg:

        async def run_one(i: int, aw: Awaitable[T]) -> None:
            try:
                results[i] = await aw
            except Exception as e:  # noqa: BLE001
                if not failure:
                    failure.append(e)
                    tg.cancel_scope.cancel()

        for i, aw in builtins.enumerate(pending):
            tg.start_soon(run_one, i, aw)

    _close_pending(pending)
    if failure:
        raise failure[0]
    return results


async def _zipped[T, U](a: Awaitable[T], b: Awaitable[U]) -> tuple[T, U]:
    first, second = await gather((a, b))
    return first, second


async def _await_each[T](it: Iterator[Awaitable[T]]) -> AsyncIterator[T]:
    for aw in it:
        yield await aw


class AwaitableIter[T](CommonBase[Iterator[Awaitable[T]]], Iterator[Awaitable[T]]):
    """A fluent wrapper around a synchronous iterator of awaitables.

    Lazy transformations (`map`, `tap`, `zip`, `take`, ...) never await anything: they only wrap the awaitables.

    The concurrent terminal methods (`collect`, `all_settled`, `race`, `any_`) run all awaitables at once in an anyio task group.

    Every other method awaits the elements one at a time, in order, through `to_async()`.

    Args:
        data (Iterator[Awaitable[T]]): The iterator of awaitables to wrap.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> async def fetch(x: int) -> int:
    ...     await asyncio.sleep(0.01 * (3 - x))
    ...     return x
    >>>
    >>> asyncio.run(ac.AwaitableIter.from_(fetch(i) for i in range(3)).map(str).collect())
    ['0', '1', '2']

    ```
    """

    __slots__ = ()

    def __init__(self, data: Iterator[Awaitable[T]]) -> None:
        self._inner = data

    def __iter__(self) -> AwaitableIter[T]:
        return self

    def __next__(self) -> Awaitable[T]:
        return next(self._inner)

    @override
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._inner!r})"

    @staticmethod
    def from_[U](data: Awaitable[U] | Iterable[Awaitable[U]]) -> AwaitableIter[U]:
        """Create an `AwaitableIter` from an iterable of awaitables, or from a single awaitable.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def one() -> int:
        ...     return 1
        >>> asyncio.run(ac.AwaitableIter.from_(one()).collect())
        [1]

        ```
        """
        match data:
            case Awaitable():
                return AwaitableIter(iter((data,)))
            case _:
                return AwaitableIter(iter(data))

    # lazy transformations

    def map[R](self, mapper: EventualMapper[T, R]) -> AwaitableIter[R]:
        """Chain **mapper** after each awaitable."""
        return AwaitableIter(_then(aw, mapper) for aw in self._inner)

    def tap(self, consumer: EventualConsumer[T]) -> AwaitableIter[T]:
        """Call **consumer** on each value once it is available, forwarding it unchanged."""
        return AwaitableIter(_tapped(aw, consumer) for aw in self._inner)

    def zip[U](self, other: Iterable[Awaitable[U]]) -> AwaitableIter[tuple[T, U]]:
        """Pair the awaitables of `self` and **other**, stopping at the shortest.

        Each pair is awaited concurrently.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def value[T](x: T) -> T:
        ...     return x
        >>> asyncio.run(
        ...     ac.AwaitableIter.from_(value(i) for i in range(3))
        ...     .zip(value(c) for c in "ab")
        ...     .collect()
        ... )
        [(0, 'a'), (1, 'b')]

        ```
        """
        return AwaitableIter(
            _zipped(a, b) for a, b in builtins.zip(self._inner, other, strict=False)
        )

    def enumerate(self, start: int = 0) -> AwaitableIter[Enumerated[T]]:
        return AwaitableIter(
            _indexed(i, aw) for i, aw in builtins.enumerate(self._inner, start)
        )

    def take(self, n: int) -> AwaitableIter[T]:
        """Keep at most **n** awaitables. The rest are never created."""
        return AwaitableIter(iter(cz.itertoolz.take(n, self._inner)))

    def skip(self, n: int) -> AwaitableIter[T]:
        """Drop the first **n** awaitables without awaiting them.

        Dropped coroutines are closed.
        """

        def _gen() -> Iterator[Awaitable[T]]:
            _close_pending(cz.itertoolz.take(n, self._inner))
            yield from self._inner

        return AwaitableIter(_gen())

    def append(self, other: Iterable[Awaitable[T]]) -> AwaitableIter[T]:
        return AwaitableIter(iter(cz.itertoolz.concatv(self._inner, other)))

    def prepend(self, other: Iterable[Awaitable[T]]) -> AwaitableIter[T]:
        return AwaitableIter(iter(cz.itertoolz.concatv(other, self._inner)))

    def concat(self, *others: Iterable[Awaitable[T]]) -> AwaitableIter[T]:
        return AwaitableIter(iter(cz.itertoolz.concatv(self._inner, *others)))

    def partition(self, size: int) -> AwaitableIter[list[T]]:
        """Group consecutive awaitables into batches of **size**, each batch awaited concurrently.

        Raises:
            InvalidSizeError: Immediately, if **size** is not a non-negative integer.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def value(x: int) -> int:
        ...     return x
        >>> asyncio.run(ac.AwaitableIter.from_(value(i) for i in range(5)).partition(2).collect())
        [[0, 1], [2, 3], [4]]

        ```
        """
        return AwaitableIter(
            gather(batch) for batch in mit.chunked(self._inner, check_size(size))
        )

    # sequential operations

    def to_async(self) -> AsyncIter[T]:
        """Await the elements one at a time, in order, as an `AsyncIter`."""
        return AsyncIter(_await_each(self._inner))

    def filter(self, predicate: EventualPredicate[T]) -> AsyncIter[T]:
        return self.to_async().filter(predicate)

    def remove_none[U](self: AwaitableIter[U | None]) -> AsyncIter[U]:
        return self.to_async().remove_none()

    def filter_map[R](self, mapper: EventualMapper[T, R | None]) -> AsyncIter[R]:
        return self.to_async().filter_map(mapper)

    def take_while(self, predicate: EventualPredicate[T]) -> AsyncIter[T]:
        return self.to_async().take_while(predicate)

    def skip_while(self, predicate: EventualPredicate[T]) -> AsyncIter[T]:
        return self.to_async().skip_while(predicate)

    def scan[R](
        self, reducer: EventualReducer[T, R], initial: R, *, emit_initial: bool = False
    ) -> AsyncIter[R]:
        return self.to_async().scan(reducer, initial, emit_initial=emit_initial)

    def distinct[K](self, key: EventualMapper[T, K] | None = None) -> AsyncIter[T]:
        return self.to_async().distinct(key)

    async def first(self) -> T | None:
        """Await the first awaitable only, or return `None` if there is none."""
        return await self.to_async().first()

    async def last(self) -> T | None:
        return await self.to_async().last()

    async def fold[R](self, reducer: EventualReducer[T, R], initial: R) -> R:
        return await self.to_async().fold(reducer, initial)

    async def reduce(self, reducer: EventualReducer[T, T], initial: T | None = None) -> T | None:
        return await self.to_async().reduce(reducer, initial)

    async def for_each(self, consumer: EventualConsumer[T]) -> None:
        await self.to_async().for_each(consumer)

    async def all(self, predicate: EventualPredicate[T]) -> bool:
        return await self.to_async().all(predicate)

    async def some(self, predicate: EventualPredicate[T]) -> bool:
        return await self.to_async().some(predicate)

    async def contains(self, predicate: EventualPredicate[T]) -> bool:
        return await self.to_async().contains(predicate)

    async def includes(self, target: Eventually[T]) -> bool:
        return await self.to_async().includes(target)

    async def count(self) -> int:
        return await self.to_async().count()

    async def join(self, separator: str = ",", prefix: str = "", suffix: str = "") -> str:
        return await self.to_async().join(separator, prefix, suffix)

    async def group_by[K](self, key: EventualMapper[T, K]) -> dict[K, list[T]]:
        return await self.to_async().group_by(key)

    async def tally(self) -> dict[T, int]:
        return await self.to_async().tally()

    # concurrent operations

    async def collect(self) -> list[T]:
        """Await all elements concurrently, preserving source order.

        The first failure cancels the other awaitables and is raised.
        """
        return await gather(self._inner)

    async def all_settled(self) -> list[Result[T, Exception]]:
        """Await all elements concurrently and capture every outcome, in source order.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def check(x: int) -> int:
        ...     if x < 0:
        ...         raise ValueError(x)
        ...     return x
        >>> asyncio.run(ac.AwaitableIter.from_(check(x) for x in (1, -1)).all_settled())
        [Ok(value=1), Err(error=ValueError(-1))]

        ```
        """
        pending = list(self._inner)
        outcomes: list[Any] = [None] * len(pending)

        async with anyio.create_task_group() as tg:

            async def run_one(i: int, aw: Awaitable[T]) -> None:
                try:
                    outcomes[i] = Ok(await aw)
                except Exception as e:  # noqa: BLE001
                    outcomes[i] = Err(e)

            for i, aw in builtins.enumerate(pending):
                tg.start_soon(run_one, i, aw)

        return outcomes

    async def race(self) -> T | None:
        """Settle with the first awaitable to settle, value or exception.

        The other awaitables are cancelled.

        Returns:
            T | None: The first value, or `None` if there are no awaitables.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def after(delay: float, x: str) -> str:
        ...     await asyncio.sleep(delay)
        ...     return x
        >>> asyncio.run(ac.AwaitableIter.from_([after(0.2, "slow"), after(0.01, "fast")]).race())
        'fast'

        ```
        """
        pending = list(self._inner)
        if not pending:
            return None
        settled: list[Result[T, Exception]] = []

        async with anyio.create_task_group() as tg:

            async def run_one(aw: Awaitable[T]) -> None:
                try:
                    outcome: Result[T, Exception] = Ok(await aw)
                except Exception as e:  # noqa: BLE001
                    outcome = Err(e)
                if not settled:
                    settled.append(outcome)
                    tg.cancel_scope.cancel()

            for aw in pending:
                tg.start_soon(run_one, aw)

        _close_pending(pending)
        logger.debug("race among %d awaitables settled with %r", len(pending), settled[0])
        return settled[0].get_or_raise()

    async def any_(self) -> T | None:
        """Return the first value to succeed, cancelling the other awaitables.

        Returns:
            T | None: The first successful value, or `None` if there are no awaitables.

        Raises:
            ExceptionGroup: If every awaitable failed, holding the failures in source order.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def fail() -> int:
        ...     raise ValueError("boom")
        >>> async def after(delay: float, x: int) -> int:
        ...     await asyncio.sleep(delay)
        ...     return x
        >>> asyncio.run(ac.AwaitableIter.from_([fail(), after(0.01, 2), after(0.2, 3)]).any_())
        2

        ```
        """
        pending = list(self._inner)
        if not pending:
            return None
        failures: list[Any] = [None] * len(pending)
        won: list[T] = []

        async with anyio.create_task_group() as tg:

            async def run_one(i: int, aw: Awaitable[T]) -> None:
                try:
                    value = await aw
                except Exception as e:  # noqa: BLE001
                    failures[i] = e
                    return
                if not won:
                    won.append(value)
                    tg.cancel_scope.cancel()

            for i, aw in builtins.enumerate(pending):
                tg.start_soon(run_one, i, aw)

        _close_pending(pending)
        if won:
            logger.debug("any among %d awaitables succeeded", len(pending))
            return won[0]
        logger.debug("any among %d awaitables: all failed", len(pending))
        msg = "All awaitables failed"
        raise ExceptionGroup(msg, failures)


def awaitable_iter[T](data: Awaitable[T] | Iterable[Awaitable[T]]) -> AwaitableIter[T]:
    """Shortcut for `AwaitableIter.from_`."""
    return AwaitableIter.from_(data)
