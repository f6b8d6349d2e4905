from __future__ import annotations

from .._functions import resolve
from .._types import EventualReducer


class FoldCollector[A, B]:
    """Folds elements into an accumulator, starting from **initial**.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> collector = ac.FoldCollector(lambda acc, x: acc + x, 10)
    >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3, 4]).collect_to(collector))
    20

    ```
    """

    __slots__ = ("_acc", "_reducer")

    def __init__(self, reducer: EventualReducer[A, B], initial: B) -> None:
        self._reducer = reducer
        self._acc = initial

    async def collect(self, item: A) -> None:
        self._acc = await resolve(self._reducer(self._acc, item))

    @property
    def result(self) -> B:
        return self._acc


class ReduceCollector[A]:
    """Reduces elements pairwise.

    Without **initial**, the first element seeds the accumulator and is not passed to the reducer.
    The result is `None` when nothing was collected and no initial value was given.
    """

    __slots__ = ("_acc", "_first", "_reducer")

    def __init__(self, reducer: EventualReducer[A, A], initial: A | None = None) -> None:
        self._reducer = reducer
        self._acc = initial
        self._first = True

    async def collect(self, item: A) -> None:
        if self._first:
            self._first = False
            if self._acc is None:
                self._acc = item
                return
        self._acc = await resolve(self._reducer(self._acc, item))  # type: ignore[arg-type]

    @property
    def result(self) -> A | None:
        return self._acc
