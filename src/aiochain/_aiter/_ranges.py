from __future__ import annotations

import itertools
from collections.abc import AsyncIterator, Iterator

from .._types import EventualMapper
from . import _gen
from ._coerce import to_async


def _range(start: int, end: int | None, step: int | None) -> Iterator[int]:
    if end is None:
        return itertools.count(start, 1 if step is None else step)
    if step is None:
        step = 1 if end >= start else -1
    return iter(range(start, end, step))


def range_(start: int = 0, end: int | None = None, step: int | None = None) -> AsyncIterator[int]:
    """Async iterator from **start** (inclusive) to **end** (exclusive) by increments of **step**.

    Args:
        start (int): The start of the range. Defaults to 0.
        end (int | None): The end of the range. `None` means infinite.
        step (int | None): The increment. Defaults to 1 if **end** >= **start**, -1 otherwise.

    Returns:
        AsyncIterator[int]: The values of the range.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> asyncio.run(ac.AsyncIter(ac.range_(1, 10, 2)).collect())
    [1, 3, 5, 7, 9]
    >>> asyncio.run(ac.AsyncIter(ac.range_(3, 0)).collect())
    [3, 2, 1]

    ```
    """
    return to_async(_range(start, end, step))


def loop[T](
    f: EventualMapper[int, T],
    start: int = 0,
    end: int | None = None,
    step: int | None = None,
) -> AsyncIterator[T]:
    """Apply **f** to every value of `range_(start, end, step)`.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> asyncio.run(ac.AsyncIter(ac.loop(lambda x: 2 * x, 1, 8, 2)).collect())
    [2, 6, 10, 14]

    ```
    """
    return _gen.map(range_(start, end, step), f)


def repeat[T](f: EventualMapper[int, T], count: int | None = None) -> AsyncIterator[T]:
    """Yield `f(0), f(1), ..., f(count - 1)`, forever if **count** is `None`."""
    return _gen.map(range_(0, count, 1), f)
