from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any, Concatenate, override

from .._collectors import (
    CountCollector,
    DictCollector,
    EventualCollector,
    GroupByCollector,
    JoinCollector,
    LastCollector,
    ListCollector,
    MaxCollector,
    MinCollector,
    MinMaxCollector,
    SetCollector,
    TallyCollector,
)
from .._core import CommonBase
from .._functions import resolve
from .._results import NONE, Option, Some
from .._types import (
    CollisionHandler,
    Enumerated,
    EventualConsumer,
    EventualIterable,
    EventualMapper,
    EventualPredicate,
    EventualReducer,
    Eventually,
    IntoAsyncIter,
    MinMax,
    SupportsRichComparison,
)
from . import _gen, _ranges
from ._coerce import EventualIterator, as_async_iterator, to_async_iterator

type _Other[T] = EventualIterable[T] | EventualIterator[T]


class AsyncIter[T](CommonBase[AsyncIterator[T]], AsyncIterator[T]):
    """A fluent wrapper around an `AsyncIterator`.

    - Every pull from the wrapped iterator may suspend, and so may every mapper, predicate or reducer given to the methods.
    - Transformations are lazy: nothing is pulled until a terminal method (`collect`, `fold`, `count`, ...) or an `async for` asks for elements.
    - Each transformation returns a new `AsyncIter` owning the previous iterator, the receiver itself is never mutated.

    `AsyncIter` instances are single-use: once consumed, they cannot be reused or reset.
    Avoid intermediate references and prefer method chaining.

    - To wrap an existing `AsyncIterator`, pass it to the standard constructor.
    - To build from any other source (lists, strings, async iterables, index functions), use `AsyncIter.from_`.

    Args:
        data (AsyncIterator[T]): The async iterator to wrap.

    Example:
    ```python
    >>> import asyncio
    >>> import aiochain as ac
    >>> async def double(x: int) -> int:
    ...     await asyncio.sleep(0)
    ...     return x * 2
    >>>
    >>> asyncio.run(
    ...     ac.AsyncIter.from_(range(10))
    ...     .filter(lambda x: x % 3 == 0)
    ...     .map(double)
    ...     .collect()
    ... )
    [0, 6, 12, 18]

    ```
    """

    __slots__ = ()

    def __init__(self, data: AsyncIterator[T]) -> None:
        self._inner = data

    def __aiter__(self) -> AsyncIter[T]:
        return self

    async def __anext__(self) -> T:
        return await anext(self._inner)

    @override
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._inner!r})"

    def _lazy[**P, U](
        self,
        factory: Callable[Concatenate[AsyncIterator[T], P], AsyncIterator[U]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> AsyncIter[U]:
        return AsyncIter(factory(self._inner, *args, **kwargs))

    # constructors

    @staticmethod
    def empty() -> AsyncIter[Any]:
        """Create an `AsyncIter` yielding nothing.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.empty().collect())
        []

        ```
        """
        return AsyncIter(_gen.empty())

    @staticmethod
    def singleton[U](value: U | None) -> AsyncIter[U]:
        """Create an `AsyncIter` yielding **value** once, or nothing if it is `None`.

        Useful to get a fluent interface over a single value.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.singleton("foobar").map(len).first())
        6
        >>> asyncio.run(ac.AsyncIter.singleton(None).collect())
        []

        ```
        """
        return AsyncIter(_gen.singleton(value))

    @staticmethod
    def from_[U](data: IntoAsyncIter[U]) -> AsyncIter[U]:
        """Create an `AsyncIter` from any supported source.

        Supported sources are, in order of precedence:

        - a `str`, iterated character by character,
        - a `Seeded(length, seed)`, producing at most **length** elements from **seed**,
        - an `AsyncIterator`, wrapped as is,
        - an `AsyncIterable`,
        - any `Iterable`, pulled lazily,
        - any callable, called with 0, 1, 2, ... (infinite).

        Args:
            data (IntoAsyncIter[U]): The source.

        Returns:
            AsyncIter[U]: A new `AsyncIter` over the source.

        Raises:
            InvalidIterableError: Immediately, if **data** is not a supported source.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_("abc").collect())
        ['a', 'b', 'c']
        >>> asyncio.run(ac.AsyncIter.from_(lambda i: i * i).take(4).collect())
        [0, 1, 4, 9]
        >>> asyncio.run(ac.AsyncIter.from_(ac.Seeded(3, lambda i: -i)).collect())
        [0, -1, -2]
        >>> ac.AsyncIter.from_(42)
        Traceback (most recent call last):
            ...
        aiochain._core._errors.InvalidIterableError: Invalid non-iterable object: 42

        ```
        """
        return AsyncIter(to_async_iterator(data))

    @staticmethod
    def from_range(
        start: int = 0, end: int | None = None, step: int | None = None
    ) -> AsyncIter[int]:
        """Create an `AsyncIter` over `range_(start, end, step)`.

        **Warning** ⚠️
            With `end=None` this creates an infinite iterator.
            Be sure to use `AsyncIter.take()` or `AsyncIter.take_while()` to limit the number of items taken.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_range(10).take(3).collect())
        [10, 11, 12]

        ```
        """
        return AsyncIter(_ranges.range_(start, end, step))

    # single element access

    async def next(self) -> Option[T]:
        """Pull the next element.

        Returns:
            Option[T]: `Some(element)`, or `NONE` if the iterator is exhausted.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def main() -> None:
        ...     it = ac.AsyncIter.from_([1, 2])
        ...     print(await it.next(), await it.next(), await it.next())
        >>> asyncio.run(main())
        Some(value=1) Some(value=2) NONE

        ```
        """
        value = await anext(self._inner, _gen.DONE)
        return NONE if value is _gen.DONE else Some(value)

    async def first(self) -> T | None:
        """Return the first element, or `None` if empty.

        Only one element is pulled.
        """
        return await _gen.first(self._inner)

    async def last(self) -> T | None:
        """Return the last element, or `None` if empty. Drains the iterator."""
        return await self.collect_to(LastCollector[T]())

    # collecting

    async def collect_to[R](self, collector: EventualCollector[T, Eventually[R]]) -> R:
        """Drain the iterator into a `Collector` or `AsyncCollector`.

        Each element is offered to the collector in order, and async collectors are awaited before the next pull.

        Args:
            collector (EventualCollector[T, Eventually[R]]): The collector.

        Returns:
            R: The result of the collector.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 2]).collect_to(ac.TallyCollector()))
        {1: 1, 2: 2}

        ```
        """
        return await _gen.collect_to(self._inner, collector)

    async def collect(self) -> list[T]:
        """Collect all elements into a `list`."""
        return await self.collect_to(ListCollector[T]())

    async def collect_to_set(self) -> set[T]:
        """Collect all elements into a `set`.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> sorted(asyncio.run(ac.AsyncIter.from_([1, 2, 3, 1, 2, 3]).collect_to_set()))
        [1, 2, 3]

        ```
        """
        return await self.collect_to(SetCollector[T]())

    async def collect_to_dict[K](
        self,
        key: EventualMapper[T, K],
        on_collision: CollisionHandler[K, T] | None = None,
    ) -> dict[K, T]:
        """Collect elements into a `dict` keyed by **key**.

        Args:
            key (EventualMapper[T, K]): Maps each element to its key.
            on_collision (CollisionHandler[K, T] | None): Called with `(key, old, new)` on duplicate keys, returns the value to keep.
                By default the first element is kept.

        Returns:
            dict[K, T]: The elements by key.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_(["foo", "bar", "foobar"]).collect_to_dict(len))
        {3: 'foo', 6: 'foobar'}
        >>> asyncio.run(
        ...     ac.AsyncIter.from_(["foo", "bar", "foobar"]).collect_to_dict(
        ...         len, lambda k, old, new: new
        ...     )
        ... )
        {3: 'bar', 6: 'foobar'}

        ```
        """

        async def _pair(item: T) -> tuple[K, T]:
            return await resolve(key(item)), item

        return await self.map(_pair).collect_to(DictCollector[K, T](on_collision))

    async def collect_to_dict2[K, V](
        self,
        pair: EventualMapper[T, tuple[K, V]],
        on_collision: CollisionHandler[K, V] | None = None,
    ) -> dict[K, V]:
        """Collect `(key, value)` pairs produced by **pair** into a `dict`.

        See `collect_to_dict` for the collision policy.
        """
        return await self.map(pair).collect_to(DictCollector[K, V](on_collision))

    # transformations

    def map[R](self, mapper: EventualMapper[T, R]) -> AsyncIter[R]:
        """Map each element through **mapper**.

        One upstream element is pulled per downstream pull.

        Args:
            mapper (EventualMapper[T, R]): Function to apply to each element.

        Returns:
            AsyncIter[R]: An iterator of transformed elements.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2]).map(lambda x: x + 1).collect())
        [2, 3]

        ```
        """
        return self._lazy(_gen.map, mapper)

    def filter(self, predicate: EventualPredicate[T]) -> AsyncIter[T]:
        """Keep only the elements satisfying **predicate**.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def is_even(x: int) -> bool:
        ...     return x % 2 == 0
        >>> asyncio.run(ac.AsyncIter.from_(range(7)).filter(is_even).collect())
        [0, 2, 4, 6]

        ```
        """
        return self._lazy(_gen.filter, predicate)

    def remove_none[U](self: AsyncIter[U | None]) -> AsyncIter[U]:
        """Drop `None` elements."""
        return AsyncIter(_gen.remove_none(self._inner))

    def filter_map[R](self, mapper: EventualMapper[T, R | None]) -> AsyncIter[R]:
        """Map each element, dropping the `None` results.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> def parse(s: str) -> int | None:
        ...     return int(s) if s.isdigit() else None
        >>> asyncio.run(ac.AsyncIter.from_(["1", "x", "3"]).filter_map(parse).collect())
        [1, 3]

        ```
        """
        return self._lazy(_gen.filter_map, mapper)

    def flat_map[R](self, mapper: EventualMapper[T, _Other[R]]) -> AsyncIter[R]:
        """Map each element to an iterable, sync or async, and flatten the result by one level.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2]).flat_map(lambda x: [x] * x).collect())
        [1, 2, 2]

        ```
        """
        return self._lazy(_gen.flat_map, mapper)

    def transform[R](self, func: Callable[[AsyncIterator[T]], AsyncIterator[R]]) -> AsyncIter[R]:
        """Wrap the result of **func** applied to the underlying async iterator.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def pairs(it):
        ...     async for x in it:
        ...         yield x, x
        >>> asyncio.run(ac.AsyncIter.from_([1, 2]).transform(pairs).collect())
        [(1, 1), (2, 2)]

        ```
        """
        return AsyncIter(func(self._inner))

    async def apply[R](self, func: Callable[[AsyncIterator[T]], Eventually[R]]) -> R:
        """Pass the underlying async iterator to **func** and return its (awaited) result."""
        return await resolve(func(self._inner))

    def take(self, n: int) -> AsyncIter[T]:
        """Yield at most **n** elements.

        Upstream is not pulled once **n** elements were yielded, and not at all if **n** is 0.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_range().take(3).collect())
        [0, 1, 2]

        ```
        """
        return self._lazy(_gen.take, n)

    def skip(self, n: int) -> AsyncIter[T]:
        """Discard the first **n** elements, then yield the rest.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3, 4]).skip(3).collect())
        [4]

        ```
        """
        return self._lazy(_gen.skip, n)

    def take_while(self, predicate: EventualPredicate[T]) -> AsyncIter[T]:
        """Yield elements until **predicate** first fails.

        The failing element is not yielded and upstream is not pulled afterwards.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 10, 3]).take_while(lambda x: x < 5).collect())
        [1, 2]

        ```
        """
        return self._lazy(_gen.take_while, predicate)

    def skip_while(self, predicate: EventualPredicate[T]) -> AsyncIter[T]:
        """Skip elements until **predicate** first fails, then yield everything.

        The failing element is yielded, and **predicate** is not called on later elements.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 10, 2, 11]).skip_while(lambda x: x != 10).collect())
        [10, 2, 11]

        ```
        """
        return self._lazy(_gen.skip_while, predicate)

    def zip[U](self, other: _Other[U]) -> AsyncIter[tuple[T, U]]:
        """Pair elements of `self` and **other**, stopping at the shortest.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3]).zip("ab").collect())
        [(1, 'a'), (2, 'b')]

        ```
        """
        return AsyncIter(_gen.zip(self._inner, as_async_iterator(other)))

    def enumerate(self, start: int = 0) -> AsyncIter[Enumerated[T]]:
        """Pair each element with an increasing index starting at **start**.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_("ab").enumerate(1).collect())
        [(1, 'a'), (2, 'b')]

        ```
        """
        return self._lazy(_gen.enumerate, start)

    def tap(self, consumer: EventualConsumer[T]) -> AsyncIter[T]:
        """Call **consumer** on each element as it passes, forwarding it unchanged.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2]).tap(print).map(lambda x: x * 10).collect())
        1
        2
        [10, 20]

        ```
        """
        return self._lazy(_gen.tap, consumer)

    def append(self, other: _Other[T]) -> AsyncIter[T]:
        """Yield the elements of `self`, then those of **other**."""
        return AsyncIter(_gen.append(self._inner, as_async_iterator(other)))

    def prepend(self, other: _Other[T]) -> AsyncIter[T]:
        """Yield the elements of **other**, then those of `self`.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([3, 4]).prepend([1, 2]).append([5]).collect())
        [1, 2, 3, 4, 5]

        ```
        """
        return AsyncIter(_gen.prepend(self._inner, as_async_iterator(other)))

    def concat(self, *others: _Other[T]) -> AsyncIter[T]:
        """Yield the elements of `self`, then those of each of **others**, in argument order."""
        return AsyncIter(_gen.concat(self._inner, *(as_async_iterator(o) for o in others)))

    def scan[R](
        self, reducer: EventualReducer[T, R], initial: R, *, emit_initial: bool = False
    ) -> AsyncIter[R]:
        """Yield the accumulator after each reduction step.

        Args:
            reducer (EventualReducer[T, R]): Called with `(accumulator, element)`.
            initial (R): The initial accumulator.
            emit_initial (bool): Also yield **initial** before the first step.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> add = lambda acc, x: acc + x
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3, 4]).scan(add, 0).collect())
        [1, 3, 6, 10]
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3, 4]).scan(add, 0, emit_initial=True).collect())
        [0, 1, 3, 6, 10]

        ```
        """
        return AsyncIter(_gen.scan(self._inner, reducer, initial, emit_initial=emit_initial))

    def partition(self, size: int) -> AsyncIter[list[T]]:
        """Group consecutive elements into lists of **size** elements.

        The last list may be shorter, and is never empty.

        Raises:
            InvalidSizeError: Immediately, if **size** is not a non-negative integer.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([2, 5, 4, 3, 1]).partition(2).collect())
        [[2, 5], [4, 3], [1]]

        ```
        """
        return self._lazy(_gen.partition, size)

    def distinct[K](self, key: EventualMapper[T, K] | None = None) -> AsyncIter[T]:
        """Yield each element whose key was not seen before.

        Keys default to the elements themselves and must be hashable.
        Every key seen is kept in memory until the iterator is discarded.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 1, 2, 3, 2, 3, 4, 1, 4]).distinct().collect())
        [1, 2, 3, 4]
        >>> asyncio.run(ac.AsyncIter.from_(["a", "bb", "c"]).distinct(len).collect())
        ['a', 'bb']

        ```
        """
        return self._lazy(_gen.distinct, key)

    # reductions

    async def fold[R](self, reducer: EventualReducer[T, R], initial: R) -> R:
        """Reduce all elements into an accumulator starting from **initial**.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3, 4]).fold(lambda acc, x: acc + x, 10))
        20

        ```
        """
        return await _gen.fold(self._inner, reducer, initial)

    async def reduce(self, reducer: EventualReducer[T, T], initial: T | None = None) -> T | None:
        """Reduce all elements pairwise.

        Without **initial**, the first element seeds the accumulator.

        Returns:
            T | None: The accumulator, or `None` if empty without an initial value.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> add = lambda acc, x: acc + x
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3, 4]).reduce(add))
        10
        >>> print(asyncio.run(ac.AsyncIter.empty().reduce(add)))
        None

        ```
        """
        return await _gen.reduce(self._inner, reducer, initial)

    async def for_each(self, consumer: EventualConsumer[T]) -> None:
        """Call **consumer** on every element."""
        await _gen.for_each(self._inner, consumer)

    async def contains(self, predicate: EventualPredicate[T]) -> bool:
        """Check if any element satisfies **predicate**, stopping at the first match."""
        return await _gen.contains(self._inner, predicate)

    async def includes(self, target: Eventually[T]) -> bool:
        """Check if any element equals **target**, stopping at the first match.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3]).includes(2))
        True

        ```
        """
        return await _gen.includes(self._inner, target)

    async def all(self, predicate: EventualPredicate[T]) -> bool:
        """Check that every element satisfies **predicate**, stopping at the first failure."""
        return await _gen.all(self._inner, predicate)

    async def some(self, predicate: EventualPredicate[T]) -> bool:
        """Check that at least one element satisfies **predicate**, stopping at the first match."""
        return await _gen.some(self._inner, predicate)

    async def count(self) -> int:
        """Count the elements. Drains the iterator."""
        return await self.collect_to(CountCollector())

    async def min(self, key: Callable[[T], SupportsRichComparison] | None = None) -> T | None:
        """Return the smallest element (the first one on ties), or `None` if empty.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([3, 1, 2]).min())
        1
        >>> asyncio.run(ac.AsyncIter.from_(["aa", "b", "cc"]).max(len))
        'aa'

        ```
        """
        return await self.collect_to(MinCollector[T](key))

    async def max(self, key: Callable[[T], SupportsRichComparison] | None = None) -> T | None:
        """Return the largest element (the first one on ties), or `None` if empty."""
        return await self.collect_to(MaxCollector[T](key))

    async def minmax(
        self, key: Callable[[T], SupportsRichComparison] | None = None
    ) -> MinMax[T] | None:
        """Return both the smallest and largest elements in one pass, or `None` if empty.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([3, 1, 2]).minmax())
        MinMax(min=1, max=3)

        ```
        """
        return await self.collect_to(MinMaxCollector[T](key))

    async def join(self, separator: str = ",", prefix: str = "", suffix: str = "") -> str:
        """Join the `str()` of the elements.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3]).join(", ", "[", "]"))
        '[1, 2, 3]'

        ```
        """
        return await self.collect_to(JoinCollector(separator, prefix, suffix))

    async def group_by[K](self, key: EventualMapper[T, K]) -> dict[K, list[T]]:
        """Group elements by **key**. Drains the iterator.

        Groups keep first-seen order, and elements keep source order within a group.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> parity = lambda x: "even" if x % 2 == 0 else "odd"
        >>> asyncio.run(ac.AsyncIter.from_([2, 5, 4, 3, 1]).group_by(parity))
        {'even': [2, 4], 'odd': [5, 3, 1]}

        ```
        """

        async def _pair(item: T) -> tuple[K, T]:
            return await resolve(key(item)), item

        return await self.map(_pair).collect_to(GroupByCollector[K, T]())

    async def group_by2[K, V](self, pair: EventualMapper[T, tuple[K, V]]) -> dict[K, list[V]]:
        """Group the values of the `(key, value)` pairs produced by **pair**."""
        return await self.map(pair).collect_to(GroupByCollector[K, V]())

    async def tally(self) -> dict[T, int]:
        """Count occurrences of each element, in first-seen order.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> asyncio.run(ac.AsyncIter.from_("abca").tally())
        {'a': 2, 'b': 1, 'c': 1}

        ```
        """
        return await self.collect_to(TallyCollector[T]())


def async_iter[T](data: IntoAsyncIter[T]) -> AsyncIter[T]:
    """Shortcut for `AsyncIter.from_`."""
    return AsyncIter.from_(data)


def empty() -> AsyncIter[Any]:
    """Shortcut for `AsyncIter.empty`."""
    return AsyncIter.empty()


def singleton[T](value: T | None) -> AsyncIter[T]:
    """Shortcut for `AsyncIter.singleton`."""
    return AsyncIter.singleton(value)

