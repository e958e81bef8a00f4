import asyncio

from asgiref.sync import async_to_sync

from student_hub.realtime.bus import ADMIN_TOPIC
from student_hub.realtime.bus import ChangeBus
from student_hub.realtime.bus import student_topic


def test_publish_wakes_only_matching_subscribers():
    change_bus = ChangeBus()

    async def scenario():
        admin = change_bus.subscribe([ADMIN_TOPIC])
        owner = change_bus.subscribe([student_topic("S1")])
        stranger = change_bus.subscribe([student_topic("S2")])
        delivered = change_bus.publish(student_topic("S1"), ADMIN_TOPIC)
        return (
            delivered,
            await admin.wait(0.5),
            await owner.wait(0.5),
            await stranger.wait(0.01),
        )

    assert async_to_sync(scenario)() == (2, True, True, False)


def test_publish_from_worker_thread():
    change_bus = ChangeBus()

    async def scenario():
        subscription = change_bus.subscribe([ADMIN_TOPIC])
        await asyncio.to_thread(change_bus.publish, ADMIN_TOPIC)
        return await subscription.wait(1.0)

    assert async_to_sync(scenario)() is True


def test_wait_times_out_without_publish():
    change_bus = ChangeBus()

    async def scenario():
        subscription = change_bus.subscribe([ADMIN_TOPIC])
        return await subscription.wait(0.01)

    assert async_to_sync(scenario)() is False


def test_unsubscribe_drops_topic():
    change_bus = ChangeBus()

    async def scenario():
        subscription = change_bus.subscribe([ADMIN_TOPIC, student_topic("S1")])
        counted = change_bus.subscriber_count(ADMIN_TOPIC)
        change_bus.unsubscribe(subscription)
        return counted

    assert async_to_sync(scenario)() == 1
    assert change_bus.subscriber_count(ADMIN_TOPIC) == 0
    assert change_bus.publish(ADMIN_TOPIC) == 0


def test_publish_skips_closed_loops():
    change_bus = ChangeBus()

    async def scenario():
        change_bus.subscribe([ADMIN_TOPIC])

    async_to_sync(scenario)()

    assert change_bus.publish(ADMIN_TOPIC) == 0
