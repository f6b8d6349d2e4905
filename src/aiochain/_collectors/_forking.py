from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import anyio

from .._functions import resolve
from ._collector import EventualCollector

logger = logging.getLogger(__name__)


async def fan_out[T](collectors: Sequence[EventualCollector[T, Any]], item: T) -> None:
    """Offer **item** to every collector concurrently.

    Every branch runs to completion, then the first failure in branch order is raised.
    """
    failures: list[Exception | None] = [None] * len(collectors)

    async with anyio.create_task_group() as tg:

        async def run_one(i: int, collector: EventualCollector[T, Any]) -> None:
            try:
                await resolve(collector.collect(item))
            except Exception as e:  # noqa: BLE001
                failures[i] = e

        for i, collector in enumerate(collectors):
            tg.start_soon(run_one, i, collector)

    errors = [(i, e) for i, e in enumerate(failures) if e is not None]
    if not errors:
        return
    for i, e in errors[1:]:
        logger.debug("collector branch %d also failed: %r", i, e)
    raise errors[0][1]


class ForkingCollector[T, R]:
    """Feeds every element to several collectors.

    For each element all branches run concurrently, and the next element is only accepted once they all settled.
    The result is the list of the branch results, in branch order.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> collector = ac.ForkingCollector(ac.CountCollector(), ac.MaxCollector())
    >>> asyncio.run(ac.AsyncIter.from_([3, 9, 4]).collect_to(collector))
    [3, 9]

    ```
    """

    __slots__ = ("_collectors",)

    def __init__(self, *collectors: EventualCollector[T, R]) -> None:
        self._collectors = collectors

    async def collect(self, item: T) -> None:
        await fan_out(self._collectors, item)

    @property
    def result(self) -> list[R]:
        return [c.result for c in self._collectors]
