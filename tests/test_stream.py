"""Tests for EffectStream and its cursors."""

import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from effectcenter.handlers.stream import EffectStream, StreamClosedError


# For any sequence of appended items, every cursor reads them back in order
@settings(max_examples=50)
@given(items=st.lists(st.integers(), max_size=20))
async def test_cursor_reads_in_arrival_order(items: list[int]):
    stream: EffectStream[int] = EffectStream()
    for item in items:
        stream.append(item)

    assert await stream.cursor().take(len(items)) == items
    assert stream.items == tuple(items)
    assert len(stream) == len(items)


async def test_independent_cursors_do_not_consume_each_other():
    stream: EffectStream[str] = EffectStream()
    stream.append("a")
    stream.append("b")

    first, second = stream.cursor(), stream.cursor()
    assert await first.next() == "a"
    assert await second.next() == "a"
    assert await first.next() == "b"
    assert second.position == 1


@pytest.mark.timeout(5)
async def test_next_waits_for_append():
    stream: EffectStream[str] = EffectStream()
    waiter = asyncio.create_task(stream.next())
    await asyncio.sleep(0)
    assert not waiter.done()

    stream.append("late")
    assert await waiter == "late"


@pytest.mark.timeout(5)
async def test_next_times_out():
    stream: EffectStream[str] = EffectStream()
    with pytest.raises(TimeoutError):
        await stream.next(timeout=0.01)


@pytest.mark.timeout(5)
async def test_pull_returns_none_on_timeout():
    stream: EffectStream[str] = EffectStream()
    assert await stream.pull(timeout=0.01) is None
    stream.append("ready")
    assert await stream.pull(timeout=0.01) == "ready"


@pytest.mark.timeout(5)
async def test_close_wakes_waiting_consumer():
    stream: EffectStream[str] = EffectStream("requests")
    waiter = asyncio.create_task(stream.next())
    await asyncio.sleep(0)

    stream.close()

    with pytest.raises(StreamClosedError, match="requests"):
        await waiter


async def test_append_after_close_fails():
    stream: EffectStream[str] = EffectStream("sends")
    stream.close()
    stream.close()
    with pytest.raises(StreamClosedError, match="closed sends stream"):
        stream.append("late")


async def test_async_iteration_stops_at_close():
    stream: EffectStream[int] = EffectStream()
    for i in range(3):
        stream.append(i)
    stream.close()

    assert [item async for item in stream] == [0, 1, 2]
    # A second iteration starts from the beginning again
    assert [item async for item in stream] == [0, 1, 2]


def test_has_next_is_non_blocking():
    stream: EffectStream[int] = EffectStream()
    assert not stream.has_next()
    stream.append(1)
    assert stream.has_next()
