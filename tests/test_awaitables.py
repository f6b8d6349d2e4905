"""Tests for AwaitableIter."""

import asyncio
from collections.abc import Awaitable, Iterator

import pytest

import aiochain as ac


async def after[T](delay: float, value: T) -> T:
    await asyncio.sleep(delay)
    return value


async def fail_after(delay: float, error: Exception) -> int:
    await asyncio.sleep(delay)
    raise error


class _Counted:
    """Generator of awaitables counting how many were created."""

    def __init__(self, values: list[int]) -> None:
        self.values = values
        self.created = 0

    def __iter__(self) -> Iterator[Awaitable[int]]:
        for v in self.values:
            self.created += 1
            yield after(0, v)


class TestLazyOperations:
    @pytest.mark.asyncio
    async def test_transformations_create_nothing(self) -> None:
        source = _Counted([1, 2, 3])
        ac.AwaitableIter.from_(source).map(str).tap(print).enumerate().skip(1)
        assert source.created == 0

    @pytest.mark.asyncio
    async def test_take_creates_only_needed_awaitables(self) -> None:
        source = _Counted([1, 2, 3])
        assert await ac.AwaitableIter.from_(source).take(2).collect() == [1, 2]
        assert source.created == 2

    @pytest.mark.asyncio
    async def test_map_tap_enumerate(self) -> None:
        seen: list[int] = []

        async def double(x: int) -> int:
            return x * 2

        result = await (
            ac.AwaitableIter.from_(after(0.01 * (3 - i), i) for i in range(3))
            .tap(seen.append)
            .map(double)
            .enumerate(1)
            .collect()
        )
        assert result == [(1, 0), (2, 2), (3, 4)]
        assert sorted(seen) == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_skip(self) -> None:
        result = await ac.AwaitableIter.from_(after(0, i) for i in range(4)).skip(2).collect()
        assert result == [2, 3]

    @pytest.mark.asyncio
    async def test_zip(self) -> None:
        result = await (
            ac.AwaitableIter.from_([after(0, 1), after(0, 2)])
            .zip([after(0, "a")])
            .collect()
        )
        assert result == [(1, "a")]

    @pytest.mark.asyncio
    async def test_concat_append_prepend(self) -> None:
        result = await (
            ac.AwaitableIter.from_([after(0, 2)])
            .append([after(0, 3)])
            .prepend([after(0, 1)])
            .concat([after(0, 4)], [after(0, 5)])
            .collect()
        )
        assert result == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_partition(self) -> None:
        result = await ac.AwaitableIter.from_(after(0, i) for i in range(5)).partition(2).collect()
        assert result == [[0, 1], [2, 3], [4]]

    def test_partition_invalid_size(self) -> None:
        with pytest.raises(ac.InvalidSizeError):
            ac.AwaitableIter.from_([]).partition(-1)


class TestSequentialOperations:
    @pytest.mark.asyncio
    async def test_to_async_preserves_order(self) -> None:
        it = ac.AwaitableIter.from_(after(0.01 * (3 - i), i) for i in range(3)).to_async()
        assert isinstance(it, ac.AsyncIter)
        assert await it.collect() == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_delegated_operations(self) -> None:
        def source():
            return ac.AwaitableIter.from_(after(0, x) for x in [1, 2, 2, 3, None])

        assert await source().remove_none().filter(lambda x: x > 1).distinct().collect() == [2, 3]
        assert await source().take_while(lambda x: x is not None and x < 3).collect() == [1, 2, 2]
        assert await source().skip_while(lambda x: x is not None and x < 3).collect() == [3, None]
        assert await source().filter_map(lambda x: x).count() == 4
        assert await source().first() == 1
        assert await source().last() is None
        assert await source().includes(3) is True
        assert await source().count() == 5

    @pytest.mark.asyncio
    async def test_delegated_reductions(self) -> None:
        def source():
            return ac.AwaitableIter.from_(after(0, x) for x in [1, 2, 3])

        add = lambda acc, x: acc + x  # noqa: E731
        assert await source().fold(add, 10) == 16
        assert await source().reduce(add) == 6
        assert await source().scan(add, 0).collect() == [1, 3, 6]
        assert await source().all(lambda x: x > 0) is True
        assert await source().some(lambda x: x > 2) is True
        assert await source().contains(lambda x: x > 5) is False
        assert await source().join("-") == "1-2-3"
        assert await source().tally() == {1: 1, 2: 1, 3: 1}
        assert await source().group_by(lambda x: x % 2) == {1: [1, 3], 0: [2]}
        seen: list[int] = []
        await source().for_each(seen.append)
        assert seen == [1, 2, 3]


class TestConcurrentOperations:
    @pytest.mark.asyncio
    async def test_collect_runs_concurrently(self) -> None:
        """Ten 50ms awaitables complete in well under 500ms."""
        loop = asyncio.get_running_loop()
        start = loop.time()
        result = await ac.AwaitableIter.from_(after(0.05, i) for i in range(10)).collect()
        assert result == list(range(10))
        assert loop.time() - start < 0.4

    @pytest.mark.asyncio
    async def test_collect_raises_first_failure_and_cancels(self) -> None:
        finished: list[int] = []

        async def slow() -> int:
            await asyncio.sleep(1)
            finished.append(1)
            return 1

        with pytest.raises(ValueError, match="fast"):
            await ac.AwaitableIter.from_([slow(), fail_after(0.01, ValueError("fast"))]).collect()
        assert finished == []

    @pytest.mark.asyncio
    async def test_all_settled(self) -> None:
        error = ValueError("x")
        result = await ac.AwaitableIter.from_(
            [after(0.02, 1), fail_after(0, error), after(0, 3)]
        ).all_settled()
        assert result == [ac.Ok(1), ac.Err(error), ac.Ok(3)]

    @pytest.mark.asyncio
    async def test_race(self) -> None:
        assert await ac.AwaitableIter.from_([after(0.5, "slow"), after(0, "fast")]).race() == "fast"
        assert await ac.AwaitableIter.from_([]).race() is None

    @pytest.mark.asyncio
    async def test_race_settles_with_first_failure(self) -> None:
        with pytest.raises(KeyError):
            await ac.AwaitableIter.from_([after(0.5, 1), fail_after(0, KeyError("k"))]).race()

    @pytest.mark.asyncio
    async def test_any(self) -> None:
        """The first success wins, failures are ignored."""
        result = await ac.AwaitableIter.from_(
            [fail_after(0, ValueError("a")), after(0.02, 2), after(0.5, 3)]
        ).any_()
        assert result == 2
        assert await ac.AwaitableIter.from_([]).any_() is None

    @pytest.mark.asyncio
    async def test_any_all_failed(self) -> None:
        errors = [ValueError("a"), KeyError("b")]
        with pytest.raises(ExceptionGroup) as info:
            await ac.AwaitableIter.from_(fail_after(0, e) for e in errors).any_()
        assert list(info.value.exceptions) == errors

    @pytest.mark.asyncio
    async def test_from_single_awaitable(self) -> None:
        assert await ac.awaitable_iter(after(0, 1)).collect() == [1]

    @pytest.mark.asyncio
    async def test_from_single_future(self) -> None:
        """A future is wrapped as one awaitable, not iterated."""
        fut = asyncio.get_running_loop().create_future()
        fut.set_result(7)
        assert await ac.AwaitableIter.from_(fut).collect() == [7]

    @pytest.mark.asyncio
    async def test_from_pending_task(self) -> None:
        task = asyncio.create_task(after(0.01, "late"))
        assert await ac.AwaitableIter.from_(task).collect() == ["late"]
