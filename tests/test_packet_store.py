import pytest

from ecsspus.definitions import ECSS_MAX_PACKET_STORE_SIZE
from ecsspus.packet_store import (
    OpenRetrievalStatus,
    PacketStore,
    PacketStoreType,
)


def _store(timestamps):
    store = PacketStore()
    for t in timestamps:
        store.add_packet(t, f"tm{t}")
    return store


def test_defaults():
    store = PacketStore()
    assert store.packet_store_type is PacketStoreType.CIRCULAR
    assert store.open_retrieval_status is OpenRetrievalStatus.SUSPENDED
    assert store.storage_status is False
    assert len(store) == 0


def test_default_enum_codes_fixed_by_format():
    store = PacketStore()
    assert int(store.packet_store_type) == 0
    assert int(store.open_retrieval_status) == 0
    assert PacketStoreType(1) is PacketStoreType.BOUNDED
    assert OpenRetrievalStatus(1) is OpenRetrievalStatus.IN_PROGRESS


def test_add_packet_keeps_order():
    store = _store([3, 7, 9])
    assert [t for t, _ in store] == [3, 7, 9]
    assert list(store)[1] == (7, "tm7")


def test_add_packet_overflow():
    store = _store(range(ECSS_MAX_PACKET_STORE_SIZE))
    assert store.is_full
    with pytest.raises(OverflowError):
        store.add_packet(100, "extra")
    assert len(store) == ECSS_MAX_PACKET_STORE_SIZE


def test_delete_until_inclusive():
    store = _store([1, 2, 3, 4, 5])
    store.delete_until(3)
    assert [t for t, _ in store] == [4, 5]


def test_delete_until_stops_at_first_newer():
    store = _store([1, 5, 2])
    store.delete_until(3)
    assert [t for t, _ in store] == [5, 2]


def test_delete_until_everything():
    store = _store([1, 2])
    store.delete_until(10)
    assert len(store) == 0


def test_packets_between():
    store = _store([1, 2, 3, 4, 5, 6])
    assert [t for t, _ in store.packets_between(2, 4)] == [2, 3, 4]


def test_packets_between_stops_at_first_later():
    store = _store([1, 5, 3])
    assert [t for t, _ in store.packets_between(1, 4)] == [1]


def test_packets_after():
    store = _store([1, 2, 3, 4])
    assert store.packets_after(3) == [(3, "tm3"), (4, "tm4")]


def test_packets_before():
    store = _store([1, 2, 3, 4])
    assert store.packets_before(2) == [(1, "tm1"), (2, "tm2")]


def test_selection_does_not_change_store():
    store = _store([1, 2, 3])
    store.packets_between(1, 2)
    store.packets_after(2)
    store.packets_before(2)
    assert len(store) == 3


def test_content_summary_times():
    store = _store([10, 20, 30])
    store.open_retrieval_start_time_tag = 20
    summary = store.content_summary()
    assert summary.oldest_packet_time == 10
    assert summary.newest_packet_time == 30
    assert summary.open_retrieval_start_time_tag == 20
    assert summary.open_retrieval_filled_percentage < summary.filled_percentage


def test_content_summary_full_store():
    store = _store(range(ECSS_MAX_PACKET_STORE_SIZE))
    summary = store.content_summary()
    assert summary.filled_percentage == 100
    assert summary.open_retrieval_filled_percentage == 100


def test_content_summary_tag_after_all_packets():
    store = _store([1, 2])
    store.open_retrieval_start_time_tag = 50
    assert store.content_summary().open_retrieval_filled_percentage == 0


def test_content_summary_empty_raises():
    with pytest.raises(ValueError):
        PacketStore().content_summary()