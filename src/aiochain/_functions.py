from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import cast

from ._results import Err, Ok, Result
from ._types import EventualMapper, Eventually, EventualProvider


async def resolve[T](value: Eventually[T]) -> T:
    """Await **value** if it is awaitable, return it unchanged otherwise.

    Example:
    ```python
    >>> import asyncio
    >>> from aiochain._functions import resolve
    >>> async def two() -> int:
    ...     return 2
    >>> asyncio.run(resolve(1)), asyncio.run(resolve(two()))
    (1, 2)

    ```
    """
    if inspect.isawaitable(value):
        return await cast(Awaitable[T], value)
    return cast(T, value)


def identity[T](value: T) -> T:
    return value


def compose[T, R, V](
    f: EventualMapper[T, R], g: EventualMapper[R, V]
) -> EventualMapper[T, V]:
    """Compose two eventual functions, **f** first.

    The composed function stays synchronous as long as **f** is.

    Example:
    ```python
    >>> import asyncio
    >>> from aiochain._functions import compose
    >>> async def inc(x: int) -> int:
    ...     return x + 1
    >>> compose(lambda x: x * 2, str)(4)
    '8'
    >>> asyncio.run(compose(inc, lambda x: x * 2)(4))
    10

    ```
    """

    def _composed(t: T) -> Eventually[V]:
        r = f(t)
        if inspect.isawaitable(r):

            async def _then() -> V:
                return await resolve(g(await r))

            return _then()
        return g(cast(R, r))

    return _composed


async def capture[T](provider: EventualProvider[T]) -> Result[T, Exception]:
    """Run **provider** and capture its outcome.

    A provider returning a `Result` is taken as an already captured outcome.
    Only `Exception` subclasses are captured, cancellation and interpreter exits propagate.
    """
    try:
        value = await resolve(provider())
    except Exception as e:  # noqa: BLE001
        return Err(e)
    if isinstance(value, Result):
        return cast(Result[T, Exception], value)
    return Ok(value)
