from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, override

import anyio

from ._core import LazyMapperError, Pipeable, get_config
from ._functions import capture, resolve
from ._results import Either, Option, Result
from ._types import EventualMapper, EventualProvider

logger = logging.getLogger(__name__)


class _State(Enum):
    INITIAL = auto()
    WAITING = auto()
    READY = auto()


class AsyncLazy[T](Pipeable):
    """A value computed at most once, on first request.

    The provider is only called when the value is first requested, and its outcome (value or exception) is kept for every later request.

    Requests made while the computation is running wait for it instead of starting another one.

    If the requester running the computation is cancelled, the computation is abandoned and the next waiting or future requester starts it again.
    Only `Exception` subclasses raised by the provider are kept as outcome.

    The provider may return a plain value, an awaitable, or a `Result`, which is kept as the outcome as is.

    Args:
        provider (EventualProvider[T | Result[T, Exception]]): Zero-argument function producing the value.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> calls = []
    >>> async def load() -> int:
    ...     calls.append(1)
    ...     await asyncio.sleep(0.01)
    ...     return 42
    >>>
    >>> lazy = ac.AsyncLazy.create(load)
    >>> async def main() -> list[int]:
    ...     return await asyncio.gather(*(lazy.value() for _ in range(5)))
    >>> asyncio.run(main())
    [42, 42, 42, 42, 42]
    >>> len(calls)
    1
    >>> lazy
    AsyncLazy(42)

    ```
    """

    __slots__ = ("_event", "_outcome", "_provider", "_state")

    def __init__(self, provider: EventualProvider[T | Result[T, Exception]]) -> None:
        self._provider = provider
        self._state = _State.INITIAL
        self._outcome: Result[T, Exception] | None = None
        self._event: anyio.Event | None = None

    @override
    def __repr__(self) -> str:
        match self._outcome:
            case None:
                body = "<not evaluated>"
            case outcome if outcome.is_ok():
                body = get_config().iter_repr([outcome.unwrap()])
            case outcome:
                body = f"<failed: {outcome.unwrap_err()!r}>"
        return f"{self.__class__.__name__}({body})"

    @staticmethod
    def create[U](provider: EventualProvider[U | Result[U, Exception]]) -> AsyncLazy[U]:
        return AsyncLazy(provider)

    def evaluated(self) -> bool:
        """Check if the outcome is available without requesting it.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> lazy = ac.AsyncLazy.create(lambda: 1)
        >>> lazy.evaluated()
        False
        >>> asyncio.run(lazy.value())
        1
        >>> lazy.evaluated()
        True

        ```
        """
        return self._state is _State.READY

    async def _compute(self) -> Result[T, Exception]:
        self._state = _State.WAITING
        event = self._event = anyio.Event()
        logger.debug("computing deferred value from %r", self._provider)
        try:
            self._outcome = await capture(self._provider)
            self._state = _State.READY
        except BaseException:
            self._state = _State.INITIAL
            logger.debug("deferred computation from %r was abandoned", self._provider)
            raise
        finally:
            event.set()
        logger.debug("deferred value settled: %r", self._outcome)
        return self._outcome

    async def to_try(self) -> Result[T, Exception]:
        """Request the outcome as a `Result`.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> def boom() -> int:
        ...     raise ValueError("boom")
        >>> asyncio.run(ac.AsyncLazy.create(boom).to_try())
        Err(error=ValueError('boom'))

        ```
        """
        while True:
            match self._state:
                case _State.READY:
                    assert self._outcome is not None
                    return self._outcome
                case _State.WAITING:
                    assert self._event is not None
                    await self._event.wait()
                case _State.INITIAL:
                    return await self._compute()

    async def value(self) -> T:
        """Request the value, raising the memoized exception if the computation failed."""
        return (await self.to_try()).get_or_raise()

    async def to_either(self) -> Either[Exception, T]:
        """Request the outcome as `Right(value)` or `Left(exception)`.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncLazy.create(lambda: "ok").to_either())
        Right(value='ok')

        ```
        """
        return (await self.to_try()).to_either()

    async def to_option(self) -> Option[T]:
        """Request the outcome as `Some(value)`, or `NONE` if the computation failed."""
        return (await self.to_try()).ok()

    def map[R](self, mapper: EventualMapper[T, R]) -> AsyncLazy[R]:
        """Derive a new deferred value by applying **mapper** to this one.

        Neither value is computed before the derived one is requested.
        A failure of this value becomes the outcome of the derived one.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncLazy.create(lambda: 20).map(lambda x: x + 1).value())
        21

        ```
        """

        async def _mapped() -> R:
            return await resolve(mapper(await self.value()))

        return AsyncLazy(_mapped)

    def flat_map[R](self, mapper: EventualMapper[T, AsyncLazy[R]]) -> AsyncLazy[R]:
        """Derive a new deferred value from the `AsyncLazy` returned by **mapper**.

        If **mapper** returns anything else, the derived value fails with `LazyMapperError`.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> lazy = ac.AsyncLazy.create(lambda: 2)
        >>> asyncio.run(lazy.flat_map(lambda x: ac.AsyncLazy.create(lambda: x * 10)).value())
        20
        >>> asyncio.run(lazy.flat_map(lambda x: x * 10).to_try())
        Err(error=LazyMapperError('Mapper must return an AsyncLazy, got int'))

        ```
        """

        async def _flat() -> Result[R, Exception]:
            derived: Any = await resolve(mapper(await self.value()))
            if not isinstance(derived, AsyncLazy):
                msg = f"Mapper must return an AsyncLazy, got {type(derived).__name__}"
                raise LazyMapperError(msg)
            return await derived.to_try()

        return AsyncLazy(_flat)


def async_lazy[T](provider: EventualProvider[T | Result[T, Exception]]) -> AsyncLazy[T]:
    """Shortcut for `AsyncLazy.create`."""
    return AsyncLazy.create(provider)
