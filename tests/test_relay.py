"""
Tests for the single-slot tap relay.
"""
import asyncio

import pytest

from beckers.game.board import Position
from beckers.relay import TapRelay


@pytest.mark.asyncio
async def test_publish_resolves_pending_waiter():
    relay = TapRelay()
    waiter = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)

    assert relay.has_waiter
    assert relay.publish(Position(2, 3)) is True
    assert await waiter == Position(2, 3)
    assert not relay.has_waiter


@pytest.mark.asyncio
async def test_tap_without_waiter_is_dropped():
    """Taps made before next_tap() are lost; there is no buffer."""
    relay = TapRelay()

    assert relay.publish(Position(1, 1)) is False

    waiter = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)
    relay.publish(Position(4, 4))

    assert await waiter == Position(4, 4)


@pytest.mark.asyncio
async def test_second_concurrent_waiter_rejected():
    relay = TapRelay()
    first = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)

    with pytest.raises(RuntimeError):
        await relay.next_tap()

    relay.publish(Position(0, 1))
    assert await first == Position(0, 1)


@pytest.mark.asyncio
async def test_each_publish_satisfies_one_wait():
    relay = TapRelay()
    first = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)
    relay.publish(Position(1, 2))
    relay.publish(Position(3, 4))

    assert await first == Position(1, 2)
    assert not relay.has_waiter


@pytest.mark.asyncio
async def test_cancelled_waiter_frees_slot():
    relay = TapRelay()
    waiter = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)

    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert not relay.has_waiter
    assert relay.publish(Position(0, 0)) is False

    again = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)
    relay.publish(Position(5, 5))
    assert await again == Position(5, 5)


@pytest.mark.asyncio
async def test_publish_from_another_thread():
    relay = TapRelay()
    waiter = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)

    await asyncio.to_thread(relay.publish_threadsafe, Position(6, 2))

    assert await asyncio.wait_for(waiter, timeout=1) == Position(6, 2)


@pytest.mark.asyncio
async def test_publish_threadsafe_on_loop_thread():
    relay = TapRelay()
    waiter = asyncio.create_task(relay.next_tap())
    await asyncio.sleep(0)

    relay.publish_threadsafe(Position(7, 1))

    assert await waiter == Position(7, 1)


def test_publish_threadsafe_before_any_wait_is_dropped():
    relay = TapRelay()
    relay.publish_threadsafe(Position(0, 0))
    assert not relay.has_waiter
