import asyncio
import json

import pytest
from asgiref.sync import async_to_sync

from student_hub.achievements.variants import SubmissionVariant
from student_hub.realtime.bus import ADMIN_TOPIC
from student_hub.realtime.bus import ChangeBus
from student_hub.realtime.notifier import SnapshotScope
from student_hub.realtime.notifier import build_snapshot
from student_hub.realtime.sessions import SubscriberSession
from student_hub.realtime.sse import HEARTBEAT
from student_hub.users.tests.factories import make_submission


class FakeSnapshots:
    def __init__(self, fail_on=()):
        self.calls = 0
        self.fail_on = set(fail_on)

    async def __call__(self, scope, base_url):
        self.calls += 1
        if self.calls in self.fail_on:
            msg = "database unavailable"
            raise RuntimeError(msg)
        return {"totalCount": self.calls, "documents": []}


def _drain(queue: asyncio.Queue) -> list[str]:
    chunks = []
    while not queue.empty():
        chunks.append(queue.get_nowait())
    return chunks


def _events(chunks: list[str]) -> list[tuple[str, dict]]:
    out = []
    for chunk in chunks:
        if chunk == HEARTBEAT:
            continue
        head, data = chunk.strip().split("\n")
        out.append((head.removeprefix("event: "), json.loads(data.removeprefix("data: "))))
    return out


def _session(  # noqa: PLR0913
    snapshot, change_bus=None, poll=10.0, heartbeat=10.0, scope=None, max_queued=64
):
    return SubscriberSession(
        scope or SnapshotScope.admin(),
        base_url="http://testserver",
        poll_interval=poll,
        heartbeat_interval=heartbeat,
        snapshot=snapshot,
        change_bus=change_bus or ChangeBus(),
        max_queued=max_queued,
    )


def test_open_pushes_initial_snapshot():
    fake = FakeSnapshots()

    async def scenario():
        async with _session(fake) as session:
            return _drain(session.queue)

    chunks = async_to_sync(scenario)()

    assert _events(chunks) == [
        ("pending-documents", {"totalCount": 1, "documents": []}),
    ]


def test_poll_repeats_snapshots():
    fake = FakeSnapshots()

    async def scenario():
        async with _session(fake, poll=0.01) as session:
            await asyncio.sleep(0.1)
            return session.ticks

    assert async_to_sync(scenario)() >= 3


def test_heartbeat_is_independent_of_snapshots():
    fake = FakeSnapshots()

    async def scenario():
        async with _session(fake, heartbeat=0.01) as session:
            await asyncio.sleep(0.05)
            return _drain(session.queue)

    chunks = async_to_sync(scenario)()

    assert chunks[0].startswith("event: pending-documents\n")
    assert HEARTBEAT in chunks[1:]
    assert fake.calls == 1


def test_stalled_consumer_keeps_only_latest_chunks():
    fake = FakeSnapshots()

    async def scenario():
        async with _session(fake, max_queued=2) as session:
            await session.tick()
            await session.tick()
            return _drain(session.queue)

    events = _events(async_to_sync(scenario)())

    assert [data["totalCount"] for _, data in events] == [2, 3]


def test_failed_tick_emits_error_and_keeps_polling():
    fake = FakeSnapshots(fail_on={2})

    async def scenario():
        async with _session(fake, poll=0.01) as session:
            while fake.calls < 4:  # noqa: PLR2004
                await asyncio.sleep(0.01)
            return session.is_open, _drain(session.queue)

    is_open, chunks = async_to_sync(scenario)()
    events = _events(chunks)

    assert is_open
    assert events[1] == ("error", {"error": "Failed to fetch pending documents"})
    assert events[2][0] == "pending-documents"


def test_student_scope_failure_message():
    scope = SnapshotScope.student("S1", SubmissionVariant.PLACEMENT)

    assert scope.event == "placements-update"
    assert scope.failure_message == "Failed to fetch placements documents"
    assert SnapshotScope.academics("S1").event == "academics-update"


def test_publish_triggers_an_early_tick():
    fake = FakeSnapshots()
    change_bus = ChangeBus()

    async def scenario():
        async with _session(fake, change_bus=change_bus) as session:
            change_bus.publish(ADMIN_TOPIC)
            await asyncio.sleep(0.05)
            return session.ticks

    assert async_to_sync(scenario)() == 2  # noqa: PLR2004


def test_close_stops_all_timers():
    fake = FakeSnapshots()
    change_bus = ChangeBus()

    async def scenario():
        session = _session(fake, change_bus=change_bus, poll=0.01, heartbeat=0.01)
        await session.open()
        await asyncio.sleep(0.03)
        await session.close()
        calls = fake.calls
        queued = session.queue.qsize()
        await asyncio.sleep(0.05)
        return session, calls, queued

    session, calls, queued = async_to_sync(scenario)()

    assert not session.is_open
    assert fake.calls == calls
    assert session.queue.qsize() == queued
    assert change_bus.subscriber_count(ADMIN_TOPIC) == 0


def test_session_cannot_be_reopened():
    fake = FakeSnapshots()

    async def scenario():
        session = _session(fake)
        await session.open()
        await session.close()
        with pytest.raises(RuntimeError):
            await session.open()

    async_to_sync(scenario)()


def test_stream_closes_session_when_consumer_leaves():
    fake = FakeSnapshots()
    change_bus = ChangeBus()

    async def scenario():
        session = _session(fake, change_bus=change_bus)
        chunks = session.stream()
        first = await chunks.__anext__()
        await chunks.aclose()
        return session, first

    session, first = async_to_sync(scenario)()

    assert first.startswith("event: pending-documents\n")
    assert not session.is_open
    assert change_bus.subscriber_count(ADMIN_TOPIC) == 0


@pytest.mark.django_db(transaction=True)
def test_snapshots_are_recomputed_from_the_database(student):
    scope = SnapshotScope.student(student.sid, SubmissionVariant.SKILL)
    first = async_to_sync(build_snapshot)(scope, "http://testserver")
    again = async_to_sync(build_snapshot)(scope, "http://testserver")
    make_submission(SubmissionVariant.SKILL, student, document="1-a.pdf")
    after = async_to_sync(build_snapshot)(scope, "http://testserver")

    assert first == again
    assert first["totalCount"] == 0
    assert after["totalCount"] == 1
    assert after["documents"][0]["url"] == "http://testserver/uploads/1-a.pdf"
