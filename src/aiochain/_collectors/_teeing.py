from __future__ import annotations

from collections.abc import Callable

from ._collector import EventualCollector
from ._forking import fan_out


class TeeingCollector[T, R1, R2, R]:
    """Feeds every element to two collectors and combines their results.

    Both branches run concurrently for each element, with the same failure policy as `ForkingCollector`.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> mean = ac.TeeingCollector(
    ...     ac.FoldCollector(lambda acc, x: acc + x, 0),
    ...     ac.CountCollector(),
    ...     lambda total, count: total / count,
    ... )
    >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3, 6]).collect_to(mean))
    3.0

    ```
    """

    __slots__ = ("_c1", "_c2", "_combiner")

    def __init__(
        self,
        c1: EventualCollector[T, R1],
        c2: EventualCollector[T, R2],
        combiner: Callable[[R1, R2], R],
    ) -> None:
        self._c1 = c1
        self._c2 = c2
        self._combiner = combiner

    async def collect(self, item: T) -> None:
        await fan_out((self._c1, self._c2), item)

    @property
    def result(self) -> R:
        return self._combiner(self._c1.result, self._c2.result)
