from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from relay_service.domain.value_objects.enums import Participant
from relay_service.infrastructure.memory.store import InMemoryConversationStore
from tests.conftest import FakeClock

A, B = Participant.A, Participant.B


def test_append_assigns_recipient_and_unread(store):
    msg = store.append(A, "hi", "local-1")

    assert msg.sender is A
    assert msg.recipient is B
    assert msg.read is False
    assert msg.delivered is False
    assert msg.local_id == "local-1"
    assert store.is_read(msg.id) is False


def test_timestamps_strictly_increase_within_same_millisecond(store):
    first = store.append(A, "one")
    second = store.append(B, "two")
    third = store.append(A, "three")

    assert first.timestamp < second.timestamp < third.timestamp
    assert len({first.id, second.id, third.id}) == 3


def test_list_for_is_ordered_and_visible_to_both(store, clock):
    first = store.append(A, "one")
    clock.advance(10)
    second = store.append(B, "two")

    assert [m.id for m in store.list_for(A)] == [first.id, second.id]
    assert [m.id for m in store.list_for(B)] == [first.id, second.id]


def test_returned_messages_are_snapshots(store):
    msg = store.append(A, "hi")
    msg.read = True
    msg.text = "changed"

    stored = store.list_for(A)[0]
    assert stored.read is False
    assert stored.text == "hi"


def test_poll_since_filters_by_cursor(store, clock):
    first = store.append(A, "one")
    clock.advance(100)
    second = store.append(A, "two")

    assert [m.id for m in store.poll_since(B, 0)] == [first.id, second.id]
    assert [m.id for m in store.poll_since(B, first.timestamp)] == [second.id]
    assert store.poll_since(B, second.timestamp) == []


def test_poll_marks_only_recipient_side_delivered(store):
    msg = store.append(A, "hi")

    store.poll_since(A, 0)
    assert store._by_id[msg.id].delivered is False

    store.poll_since(B, 0)
    assert store._by_id[msg.id].delivered is True


def test_poll_is_idempotent(store):
    store.append(A, "one")
    store.append(B, "two")

    assert store.poll_since(B, 0) == store.poll_since(B, 0)


def test_mark_read_counts_only_new_incoming(store):
    incoming = store.append(A, "to b")
    outgoing = store.append(B, "to a")

    assert store.mark_read(B, [incoming.id, outgoing.id, "msg_missing"]) == 1
    assert store.mark_read(B, [incoming.id]) == 0
    assert store.is_read(incoming.id) is True
    assert store.is_read(outgoing.id) is False


def test_mark_read_keeps_message_and_index_in_sync(store):
    msg = store.append(A, "hi")
    store.mark_read(B, [msg.id])

    assert store._by_id[msg.id].read is True
    assert store._receipts[msg.id] is True
    assert store.list_for(A)[0].read is True


def test_mark_read_duplicate_ids_in_one_batch_count_once(store):
    msg = store.append(A, "hi")
    assert store.mark_read(B, [msg.id, msg.id]) == 1


def test_purge_removes_history_and_receipts(store):
    msg = store.append(A, "hi")
    store.mark_read(B, [msg.id])

    assert store.purge(A) == 1
    assert store.list_for(A) == []
    assert store.list_for(B) == []
    assert store.is_read(msg.id) is False
    assert store._receipts == {}


def test_ids_not_reused_after_purge(store):
    before = store.append(A, "hi")
    store.purge(B)
    after = store.append(A, "hi")

    assert after.id != before.id
    assert after.timestamp > before.timestamp


def test_purge_on_empty_store(store):
    assert store.purge(A) == 0


def test_typing_expires_lazily(store, clock):
    store.set_typing(A, True)
    clock.advance(3000)
    assert store.get_typing(A) is True

    clock.advance(1)
    assert store.get_typing(A) is False


def test_typing_renewal_extends_window(store, clock):
    store.set_typing(A, True)
    clock.advance(2500)
    store.set_typing(A, True)
    clock.advance(2500)

    assert store.get_typing(A) is True
    assert store.get_typing(B) is False


def test_typing_explicit_clear(store):
    store.set_typing(B, True)
    store.set_typing(B, False)
    assert store.get_typing(B) is False


def test_typing_never_appears_in_messages(store):
    store.set_typing(A, True)
    assert store.list_for(A) == []
    assert store.count() == 0


def test_custom_typing_timeout():
    clock = FakeClock()
    store = InMemoryConversationStore(clock=clock, typing_timeout_ms=500)
    store.set_typing(A, True)
    clock.advance(501)
    assert store.get_typing(A) is False


def test_clear_resets_state(store):
    store.append(A, "hi")
    store.set_typing(A, True)
    store.clear()

    assert store.count() == 0
    assert store.get_typing(A) is False


def test_concurrent_appends_get_unique_ids(store):
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda i: store.append(A, f"m{i}"), range(200)))

    assert len({m.id for m in results}) == 200
    assert len({m.timestamp for m in results}) == 200
    listed = store.list_for(A)
    assert [m.timestamp for m in listed] == sorted(m.timestamp for m in listed)


def test_concurrent_mark_read_counts_once(store):
    msg = store.append(A, "hi")

    with ThreadPoolExecutor(max_workers=8) as pool:
        counts = list(pool.map(lambda _: store.mark_read(B, [msg.id]), range(50)))

    assert sum(counts) == 1
