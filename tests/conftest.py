"""Shared helpers for aiochain tests."""

import asyncio
from collections.abc import AsyncIterator, Iterable

import pytest


class PullRecorder[T]:
    """An async iterator recording how many times it was pulled."""

    def __init__(self, values: Iterable[T], *, delay: float = 0) -> None:
        self._values = iter(values)
        self._delay = delay
        self.pulls = 0
        self.exhausted = False

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        self.pulls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        try:
            return next(self._values)
        except StopIteration:
            self.exhausted = True
            raise StopAsyncIteration from None


@pytest.fixture
def recorder() -> type[PullRecorder[int]]:
    """Factory of pull-recording sources."""
    return PullRecorder
