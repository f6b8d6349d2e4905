from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .._aiter import AsyncIter


class FlattenCollector[T]:
    """Collects iterables, sync or async, into one `AsyncIter` over their concatenation.

    The collected iterables are not pulled until the result is consumed.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> collector = ac.FlattenCollector[int]()
    >>> collector.collect([1, 2])
    >>> collector.collect((3, 4))
    >>> asyncio.run(collector.result.collect())
    [1, 2, 3, 4]

    ```
    """

    __slots__ = ("_sources",)

    def __init__(self) -> None:
        self._sources: list[AsyncIterator[T]] = []

    def collect(
        self, item: Iterable[T] | AsyncIterable[T] | Iterator[T] | AsyncIterator[T]
    ) -> None:
        from .._aiter import as_async_iterator

        self._sources.append(as_async_iterator(item))

    @property
    def result(self) -> AsyncIter[T]:
        from .._aiter import AsyncIter, _gen

        return AsyncIter(_gen.concat(*self._sources))
