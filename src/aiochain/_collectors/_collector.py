from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Collector[A, B](Protocol):
    """Synchronously collects elements of type `A` and aggregates them into a `B`.

    Collectors are stateful and single-use.
    """

    def collect(self, item: A, /) -> None:
        """Collect one element."""
        ...

    @property
    def result(self) -> B:
        """The aggregate of every element collected so far."""
        ...


@runtime_checkable
class AsyncCollector[A, B](Protocol):
    """Asynchronously collects elements of type `A` and aggregates them into a `B`.

    `collect` is awaited before the next element is offered.
    """

    async def collect(self, item: A, /) -> None:
        """Collect one element."""
        ...

    @property
    def result(self) -> B:
        """The aggregate of every element collected so far."""
        ...


type EventualCollector[A, B] = Collector[A, B] | AsyncCollector[A, B]
"""A `Collector` or an `AsyncCollector`."""
