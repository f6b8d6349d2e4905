"""Tests for AsyncLazy deferred values."""

import asyncio

import pytest

import aiochain as ac


@pytest.mark.asyncio
async def test_provider_called_once_under_concurrent_requests() -> None:
    """Ten concurrent requests share a single computation."""
    calls: list[int] = []

    async def provider() -> object:
        calls.append(1)
        await asyncio.sleep(0.01)
        return object()

    lazy = ac.AsyncLazy.create(provider)
    results = await asyncio.gather(*(lazy.value() for _ in range(10)))
    assert len(calls) == 1
    assert all(r is results[0] for r in results)
    assert lazy.evaluated()


@pytest.mark.asyncio
async def test_not_computed_before_request() -> None:
    calls: list[int] = []
    lazy = ac.async_lazy(lambda: calls.append(1))
    assert not lazy.evaluated()
    assert calls == []
    assert repr(lazy) == "AsyncLazy(<not evaluated>)"


@pytest.mark.asyncio
async def test_failure_is_memoized() -> None:
    """The same exception is raised for every request, the provider runs once."""
    calls: list[int] = []

    def provider() -> int:
        calls.append(1)
        msg = "nope"
        raise ValueError(msg)

    lazy = ac.AsyncLazy.create(provider)
    with pytest.raises(ValueError, match="nope") as first:
        await lazy.value()
    with pytest.raises(ValueError, match="nope") as second:
        await lazy.value()
    assert first.value is second.value
    assert len(calls) == 1
    assert repr(lazy) == "AsyncLazy(<failed: ValueError('nope')>)"


@pytest.mark.asyncio
async def test_outcome_conversions() -> None:
    ok = ac.AsyncLazy.create(lambda: 42)
    assert await ok.to_try() == ac.Ok(42)
    assert await ok.to_either() == ac.Right(42)
    assert await ok.to_option() == ac.Some(42)
    assert repr(ok) == "AsyncLazy(42)"

    error = KeyError("k")

    def fail() -> int:
        raise error

    failed = ac.AsyncLazy.create(fail)
    assert await failed.to_try() == ac.Err(error)
    assert await failed.to_either() == ac.Left(error)
    assert await failed.to_option() == ac.NONE


@pytest.mark.asyncio
async def test_provider_returning_result() -> None:
    """A Result returned by the provider is kept as the outcome."""
    lazy = ac.AsyncLazy.create(lambda: ac.Err(RuntimeError("captured")))
    with pytest.raises(RuntimeError, match="captured"):
        await lazy.value()
    assert await ac.AsyncLazy.create(lambda: ac.Ok("v")).value() == "v"


@pytest.mark.asyncio
async def test_cancelled_computation_restarts() -> None:
    """Cancelling the computing requester lets the next request compute again."""
    calls: list[int] = []
    started = asyncio.Event()

    async def provider() -> str:
        calls.append(1)
        if len(calls) == 1:
            started.set()
            await asyncio.Event().wait()
        return "done"

    lazy = ac.AsyncLazy.create(provider)
    task = asyncio.create_task(lazy.value())
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert not lazy.evaluated()
    assert await lazy.value() == "done"
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_waiter_takes_over_cancelled_computation() -> None:
    calls: list[int] = []
    started = asyncio.Event()

    async def provider() -> str:
        calls.append(1)
        if len(calls) == 1:
            started.set()
            await asyncio.Event().wait()
        return "done"

    lazy = ac.AsyncLazy.create(provider)
    computing = asyncio.create_task(lazy.value())
    await started.wait()
    waiting = asyncio.create_task(lazy.value())
    await asyncio.sleep(0)
    computing.cancel()
    assert await asyncio.wait_for(waiting, timeout=1) == "done"
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_map_is_lazy() -> None:
    calls: list[int] = []

    def provider() -> int:
        calls.append(1)
        return 20

    source = ac.AsyncLazy.create(provider)
    derived = source.map(lambda x: x + 1)
    assert calls == []
    assert await derived.value() == 21
    assert await source.value() == 20
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_map_propagates_failure() -> None:
    def fail() -> int:
        msg = "source"
        raise ValueError(msg)

    derived = ac.AsyncLazy.create(fail).map(lambda x: x + 1)
    assert (await derived.to_try()).is_err()


@pytest.mark.asyncio
async def test_flat_map() -> None:
    async def later(x: int) -> ac.AsyncLazy[int]:
        return ac.AsyncLazy.create(lambda: x * 10)

    assert await ac.AsyncLazy.create(lambda: 2).flat_map(later).value() == 20


@pytest.mark.asyncio
async def test_flat_map_requires_lazy() -> None:
    """A mapper not returning an AsyncLazy fails the derived value."""
    derived = ac.AsyncLazy.create(lambda: 2).flat_map(lambda x: x)  # type: ignore[arg-type]
    with pytest.raises(ac.LazyMapperError):
        await derived.value()
    assert isinstance((await derived.to_try()).unwrap_err(), TypeError)
