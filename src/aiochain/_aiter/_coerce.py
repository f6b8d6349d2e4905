from __future__ import annotations

import itertools
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import Any, cast

import cytoolz as cz

from .._core import InvalidIterableError
from .._functions import resolve
from .._types import EventualIterable, EventualMapper, IntoAsyncIter, Seeded

type EventualIterator[T] = Iterator[T] | AsyncIterator[T]


async def to_async[T](data: Iterable[T]) -> AsyncIterator[T]:
    """Pull a synchronous iterable one element per downstream pull."""
    for item in data:
        yield item


async def _from_seed[T](seed: EventualMapper[int, T], n: int | None) -> AsyncIterator[T]:
    indices = itertools.count() if n is None else range(n)
    for i in indices:
        yield await resolve(seed(i))


def _coerce_maybe[T](data: Any) -> AsyncIterator[T] | None:
    match data:
        case str():
            return to_async(cast(Iterable[T], data))
        case Seeded(length=length, seed=seed):
            if callable(seed) and not _is_iterator_like(seed):
                return _from_seed(cast(EventualMapper[int, T], seed), length)
            from ._gen import take

            inner = _coerce_maybe(seed)
            return None if inner is None else take(inner, length)
        case AsyncIterator():
            return cast(AsyncIterator[T], data)
        case AsyncIterable():
            return aiter(cast(AsyncIterable[T], data))
        case _ if cz.itertoolz.isiterable(data):
            return to_async(cast(Iterable[T], data))
        case _ if callable(data):
            return _from_seed(cast(EventualMapper[int, T], data), None)
        case _:
            return None


def _is_iterator_like(data: object) -> bool:
    return isinstance(data, AsyncIterable) or cz.itertoolz.isiterable(data)


def to_async_iterator[T](data: IntoAsyncIter[T]) -> AsyncIterator[T]:
    """Normalize any accepted source into an `AsyncIterator`.

    Accepted shapes, checked in this order:

    - `str`: iterated character by character.
    - `Seeded(length, seed)`: at most **length** elements produced by **seed**.
    - `AsyncIterator`: returned as is.
    - `AsyncIterable`: its `__aiter__` is called.
    - any `Iterable`: pulled lazily, one element per downstream pull.
    - any callable: called with 0, 1, 2, ... forever (index to element).

    Args:
        data (IntoAsyncIter[T]): The source to coerce.

    Returns:
        AsyncIterator[T]: An async iterator over the source.

    Raises:
        InvalidIterableError: If **data** is none of the accepted shapes.
    """
    it = _coerce_maybe(data)
    if it is None:
        msg = f"Invalid non-iterable object: {data!r}"
        raise InvalidIterableError(msg)
    return it


def to_eventual_iterator[T](
    data: EventualIterable[T] | EventualIterator[T],
) -> EventualIterator[T]:
    """Get a sync or async iterator over **data**, without converting between the two.

    Raises:
        InvalidIterableError: If **data** is neither iterable nor async iterable.
    """
    match data:
        case AsyncIterator() | Iterator():
            return data
        case AsyncIterable():
            return aiter(data)
        case _ if cz.itertoolz.isiterable(data):
            return iter(cast(Iterable[T], data))
        case _:
            msg = f"Invalid non-iterable object: {data!r}"
            raise InvalidIterableError(msg)


def as_async_iterator[T](data: EventualIterable[T] | EventualIterator[T]) -> AsyncIterator[T]:
    match to_eventual_iterator(data):
        case AsyncIterator() as it:
            return it
        case it:
            return to_async(it)

