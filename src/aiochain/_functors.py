from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import Any

from ._functions import compose, identity
from ._types import EventualMapper, Eventually

type EventualFunctorLike[T, R] = AsyncFunctor[T, R] | EventualMapper[T, R]


class AsyncFunctor[T, R](ABC):
    """A composable eventual function object.

    Instances are callable, so they can be passed anywhere an eventual mapper is expected.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> async def inc(x: int) -> int:
    ...     return x + 1
    >>> double_then_inc = ac.AsyncFunctor.from_(lambda x: x * 2).and_then(inc)
    >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3]).map(double_then_inc).collect())
    [3, 5, 7]

    ```
    """

    __slots__ = ()

    @abstractmethod
    def eval(self, t: T) -> Eventually[R]: ...

    def __call__(self, t: T) -> Eventually[R]:
        return self.eval(t)

    @property
    def f(self) -> EventualMapper[T, R]:
        return self.eval

    def and_then[V](self, after: EventualFunctorLike[R, V]) -> AsyncFunctor[T, V]:
        """Return a functor applying `self` first, then **after**."""
        return AsyncFunctor.from_(compose(self.f, AsyncFunctor.get_function(after)))

    def compose[V](self, before: EventualFunctorLike[V, T]) -> AsyncFunctor[V, R]:
        """Return a functor applying **before** first, then `self`."""
        return AsyncFunctor.from_(compose(AsyncFunctor.get_function(before), self.f))

    @staticmethod
    def identity() -> AsyncFunctor[Any, Any]:
        return _identity_functor()

    @staticmethod
    def from_[U, V](f: EventualMapper[U, V]) -> AsyncFunctor[U, V]:
        return _FunctionalFunctor(f)

    @staticmethod
    def get_function[U, V](mapper: EventualFunctorLike[U, V]) -> EventualMapper[U, V]:
        if isinstance(mapper, AsyncFunctor):
            return mapper.f
        return mapper


class _FunctionalFunctor[T, R](AsyncFunctor[T, R]):
    __slots__ = ("_f",)

    def __init__(self, f: EventualMapper[T, R]) -> None:
        self._f = f

    def eval(self, t: T) -> Eventually[R]:
        return self._f(t)

    @property
    def f(self) -> EventualMapper[T, R]:
        return self._f


@functools.cache
def _identity_functor() -> AsyncFunctor[Any, Any]:
    return _FunctionalFunctor(identity)
