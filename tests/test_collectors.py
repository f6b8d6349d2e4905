"""Tests for collectors and collector combinators."""

import asyncio

import anyio
import pytest

import aiochain as ac


class _Failing:
    """Collector failing on a given element, recording the others."""

    def __init__(self, bad: int, error: Exception) -> None:
        self.bad = bad
        self.error = error
        self.seen: list[int] = []

    async def collect(self, item: int) -> None:
        await asyncio.sleep(0)
        if item == self.bad:
            raise self.error
        self.seen.append(item)

    @property
    def result(self) -> list[int]:
        return self.seen


class _Slow:
    def __init__(self) -> None:
        self.seen: list[int] = []

    async def collect(self, item: int) -> None:
        await asyncio.sleep(0.01)
        self.seen.append(item)

    @property
    def result(self) -> list[int]:
        return self.seen


class TestBasicCollectors:
    def test_protocols(self) -> None:
        """Built-in collectors satisfy the collector protocols."""
        assert isinstance(ac.ListCollector(), ac.Collector)
        assert isinstance(ac.FoldCollector(lambda a, b: a + b, 0), ac.AsyncCollector)

    def test_list_collector_repr(self) -> None:
        c = ac.ListCollector[int]()
        for x in range(3):
            c.collect(x)
        assert repr(c) == "ListCollector(0, 1, 2)"

    def test_dict_collector(self) -> None:
        c = ac.DictCollector[str, int]()
        c.collect(("a", 1))
        c.collect(("a", 2))
        assert c.result == {"a": 1}
        c = ac.DictCollector[str, int](lambda _k, old, new: old + new)
        c.collect(("a", 1))
        c.collect(("a", 2))
        assert c.result == {"a": 3}

    def test_first_and_last(self) -> None:
        first, last = ac.FirstCollector[int](), ac.LastCollector[int]()
        assert first.result is None
        for x in (1, 2, 3):
            first.collect(x)
            last.collect(x)
        assert (first.result, last.result) == (1, 3)

    def test_extremums_keep_first_on_ties(self) -> None:
        lo, hi = ac.MinCollector[str](len), ac.MaxCollector[str](len)
        for word in ("aa", "b", "cc", "d"):
            lo.collect(word)
            hi.collect(word)
        assert (lo.result, hi.result) == ("b", "aa")

    def test_minmax_empty(self) -> None:
        assert ac.MinMaxCollector[int]().result is None

    def test_extremum_seen(self) -> None:
        """A collected None is still a seen element."""
        lo = ac.MinCollector[int | None](lambda x: 0)
        assert not lo.seen
        lo.collect(None)
        assert lo.seen
        assert lo.result is None
        minmax = ac.MinMaxCollector[int]()
        minmax.collect(4)
        assert minmax.result == (4, 4)

    def test_count_tally_join(self) -> None:
        count, tally, join = ac.CountCollector(), ac.TallyCollector[str](), ac.JoinCollector("|")
        for c in "abb":
            count.collect(c)
            tally.collect(c)
            join.collect(c)
        assert count.result == 3
        assert tally.result == {"a": 1, "b": 2}
        assert join.result == "a|b|b"


class TestGroupingThroughCollectors:
    @pytest.mark.asyncio
    async def test_group_by_async_key(self) -> None:
        async def parity(x: int) -> str:
            await asyncio.sleep(0)
            return "even" if x % 2 == 0 else "odd"

        result = await ac.AsyncIter.from_([1, 2, 3, 4]).group_by(parity)
        assert result == {"odd": [1, 3], "even": [2, 4]}
        assert list(result) == ["odd", "even"]

    @pytest.mark.asyncio
    async def test_tally_matches_collector(self) -> None:
        expected = await ac.AsyncIter.from_("abba").collect_to(ac.TallyCollector[str]())
        assert await ac.AsyncIter.from_("abba").tally() == expected == {"a": 2, "b": 2}


class TestReducingCollectors:
    @pytest.mark.asyncio
    async def test_fold_collector(self) -> None:
        collector = ac.FoldCollector(lambda acc, x: acc + x, 10)
        assert await ac.AsyncIter.from_([1, 2, 3, 4]).collect_to(collector) == 20

    @pytest.mark.asyncio
    async def test_reduce_collector(self) -> None:
        """The first element seeds the accumulator without an initial value."""
        calls: list[tuple[int, int]] = []

        def add(acc: int, x: int) -> int:
            calls.append((acc, x))
            return acc + x

        assert await ac.AsyncIter.from_([1, 2, 3]).collect_to(ac.ReduceCollector(add)) == 6
        assert calls == [(1, 2), (3, 3)]
        assert await ac.AsyncIter.empty().collect_to(ac.ReduceCollector(add)) is None
        assert await ac.AsyncIter.from_([1]).collect_to(ac.ReduceCollector(add, 10)) == 11


class TestFluentCollectors:
    @pytest.mark.asyncio
    async def test_mapping_with_async_mapper(self) -> None:
        async def square(x: int) -> int:
            await asyncio.sleep(0)
            return x * x

        collector = ac.MappingCollector(square, ac.ListCollector[int]())
        assert await ac.AsyncIter.from_([1, 2, 3]).collect_to(collector) == [1, 4, 9]

    @pytest.mark.asyncio
    async def test_filtering(self) -> None:
        collector = ac.FilteringCollector(lambda x: x > 1, ac.CountCollector())
        assert await ac.AsyncIter.from_([1, 2, 3]).collect_to(collector) == 2

    @pytest.mark.asyncio
    async def test_and_then(self) -> None:
        collector = ac.AndThenCollector(ac.ListCollector[int](), sorted)
        assert await ac.AsyncIter.from_([3, 1, 2]).collect_to(collector) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_fluent_chain(self) -> None:
        """map adapts input, filter drops input, and_then adapts output."""
        collector = (
            ac.FluentCollector.from_(ac.ListCollector[int]())
            .filter(lambda x: x % 2 == 0)
            .map(lambda s: int(s))
            .and_then(lambda values: values[::-1])
        )
        assert await ac.AsyncIter.from_(["1", "2", "3", "4"]).collect_to(collector) == [4, 2]

    def test_fluent_from_is_idempotent(self) -> None:
        fluent = ac.FluentCollector.from_(ac.CountCollector())
        assert ac.FluentCollector.from_(fluent) is fluent

    @pytest.mark.asyncio
    async def test_flatten(self) -> None:
        async def tail():
            yield 4

        collector = ac.FlattenCollector[int]()
        result = await ac.AsyncIter.from_([[1, 2], (3,), tail()]).collect_to(collector)
        assert await result.collect() == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_flatten_many_sources(self) -> None:
        """Thousands of collected iterables flatten without deep nesting."""
        collector = ac.FlattenCollector[int]()
        for i in range(5000):
            collector.collect([i])
        assert await collector.result.count() == 5000

    def test_flatten_rejects_non_iterable(self) -> None:
        with pytest.raises(ac.InvalidIterableError):
            ac.FlattenCollector[int]().collect(42)  # type: ignore[arg-type]


class TestForkingCollectors:
    @pytest.mark.asyncio
    async def test_fork(self) -> None:
        collector = ac.ForkingCollector(ac.CountCollector(), ac.MaxCollector(), ac.MinCollector())
        assert await ac.AsyncIter.from_([3, 9, 4]).collect_to(collector) == [3, 9, 3]

    @pytest.mark.asyncio
    async def test_tee_mean(self) -> None:
        mean = ac.TeeingCollector(
            ac.FoldCollector(lambda acc, x: acc + x, 0),
            ac.CountCollector(),
            lambda total, count: total / count,
        )
        assert await ac.AsyncIter.from_([1, 2, 3, 6]).collect_to(mean) == 3.0

    @pytest.mark.asyncio
    async def test_branches_run_concurrently(self) -> None:
        """A branch can wait on a sibling branch for the same element."""
        event = anyio.Event()

        class Waiter:
            result = None

            async def collect(self, item: int) -> None:
                await event.wait()

        class Setter:
            result = None

            def collect(self, item: int) -> None:
                event.set()

        collector = ac.ForkingCollector(Waiter(), Setter())
        await asyncio.wait_for(ac.AsyncIter.from_([1]).collect_to(collector), timeout=1)

    @pytest.mark.asyncio
    async def test_failure_waits_for_siblings_then_raises_first(self) -> None:
        """Every branch settles, then the first failure in branch order is raised."""
        first = _Failing(2, ValueError("first"))
        slow = _Slow()
        second = _Failing(2, KeyError("second"))
        collector = ac.ForkingCollector(first, slow, second)
        with pytest.raises(ValueError, match="first"):
            await ac.AsyncIter.from_([1, 2, 3]).collect_to(collector)
        assert slow.seen == [1, 2]
        assert first.seen == [1]

    @pytest.mark.asyncio
    async def test_tee_failure(self) -> None:
        failing = _Failing(1, RuntimeError("tee"))
        slow = _Slow()
        collector = ac.TeeingCollector(slow, failing, lambda a, b: (a, b))
        with pytest.raises(RuntimeError, match="tee"):
            await ac.AsyncIter.from_([1]).collect_to(collector)
        assert slow.seen == [1]


class TestConfig:
    @pytest.fixture
    def small_repr(self):
        previous = ac.get_config()
        yield ac.set_config(repr_max_items=2)
        ac.set_config(
            repr_max_items=previous.repr_max_items,
            repr_depth=previous.repr_depth,
            repr_width=previous.repr_width,
        )

    def test_repr_truncation(self, small_repr) -> None:
        assert small_repr.repr_max_items == 2
        c = ac.ListCollector[int]()
        for x in range(5):
            c.collect(x)
        assert repr(c) == "ListCollector(0, 1, ...)"
        tally = ac.TallyCollector[str]()
        for s in "abc":
            tally.collect(s)
        assert repr(tally) == "TallyCollector({'a': 1, 'b': 1}...)"

    def test_unknown_field(self) -> None:
        with pytest.raises(TypeError):
            ac.set_config(unknown=1)
