from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable
from typing import Any, NamedTuple, Protocol

# eventual function types

type Eventually[T] = T | Awaitable[T]
"""A value of type `T`, or an awaitable producing it."""
type EventualMapper[T, R] = Callable[[T], Eventually[R]]
"""A function mapping `T` to `R`, possibly by suspending."""
type EventualPredicate[T] = Callable[[T], Eventually[bool]]
"""A predicate that can be synchronous or asynchronous."""
type EventualReducer[T, R] = Callable[[R, T], Eventually[R]]
"""A reducer taking the accumulator first and the current element second."""
type EventualConsumer[T] = Callable[[T], Eventually[object]]
"""A function called for its side effects only."""
type EventualProvider[T] = Callable[[], Eventually[T]]
"""A zero-argument function providing a value, possibly by suspending."""
type EventualIterable[T] = Iterable[T] | AsyncIterable[T]
type CollisionHandler[K, V] = Callable[[K, V, V], V]
"""Called with `(key, old_value, new_value)`, returns the value to keep."""


class Seeded[T](NamedTuple):
    """A finite source of `length` elements produced by `seed`.

    `seed` is either a function of the index, or any other source accepted by `AsyncIter.from_`.
    """

    length: int
    """The maximum number of elements produced."""
    seed: EventualMapper[int, T] | EventualIterable[T] | AsyncIterator[T]
    """The element producer."""


type IntoAsyncIter[T] = (
    AsyncIterator[T]
    | AsyncIterable[T]
    | Iterable[T]
    | Seeded[T]
    | EventualMapper[int, T]
)
"""Any source `AsyncIter.from_` can coerce."""


# iteration result types


class Enumerated[T](NamedTuple):
    """Represents an item with its associated index in an enumeration.

    See `AsyncIter.enumerate()` for details.
    """

    idx: int
    """The index of the item in the enumeration."""
    value: T
    """The value of the item."""

    def __repr__(self) -> str:
        return f"({self.idx}, {self.value.__repr__()})"


class MinMax[T](NamedTuple):
    """Smallest and largest elements of a sequence.

    See `AsyncIter.minmax()` for details.
    """

    min: T
    max: T


# typeshed protocols


class SupportsDunderLT[T](Protocol):
    def __lt__(self, other: T, /) -> bool: ...


class SupportsDunderGT[T](Protocol):
    def __gt__(self, other: T, /) -> bool: ...


type SupportsRichComparison = SupportsDunderLT[Any] | SupportsDunderGT[Any]
