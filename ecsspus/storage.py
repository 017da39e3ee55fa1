"""The storage-and-retrieval service: management of telemetry packet stores."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from ecsspus.definitions import (
    ECSS_MAX_PACKET_STORE_SIZE_IN_BYTES,
    ECSS_MAX_PACKET_STORES,
    ECSS_PACKET_STORE_ID_SIZE,
    VIRTUAL_CHANNEL_LIMITS,
    PacketStoreSize,
    VirtualChannel,
)
from ecsspus.packet_store import (
    ContentSummary,
    OpenRetrievalStatus,
    PacketStore,
    PacketStoreType,
)
from ecsspus.reporting import (
    ErrorLog,
    ExecutionStartErrorType,
    InternalErrorType,
    assert_internal,
)

_Err = ExecutionStartErrorType


class TimeWindowType(IntEnum):
    """How the time window of a packet copy request is bounded."""

    FROM_TAG_TO_TAG = 0
    AFTER_TIME_TAG = 1
    BEFORE_TIME_TAG = 2


@dataclass(frozen=True)
class PacketStoreDefinition:
    """Everything needed to create one packet store."""

    store_id: str
    size_in_bytes: PacketStoreSize
    packet_store_type: PacketStoreType = PacketStoreType.CIRCULAR
    virtual_channel: VirtualChannel = 1


@dataclass(frozen=True)
class StatusEntry:
    """One packet store's entry in a status report."""

    store_id: str
    storage_status: bool
    open_retrieval_status: OpenRetrievalStatus
    by_time_range_retrieval_status: bool


@dataclass(frozen=True)
class ConfigurationEntry:
    """One packet store's entry in a configuration report."""

    store_id: str
    size_in_bytes: PacketStoreSize
    packet_store_type: PacketStoreType
    virtual_channel: VirtualChannel


def _check_store_id(store_id: str) -> str:
    if not isinstance(store_id, str):
        raise TypeError(f"packet store id must be a string, not {type(store_id).__name__}")
    if len(store_id) > ECSS_PACKET_STORE_ID_SIZE:
        raise ValueError(
            f"packet store id longer than {ECSS_PACKET_STORE_ID_SIZE} characters: {store_id!r}"
        )
    return store_id


class StorageAndRetrievalService:
    """Keeps the packet stores and carries out requests on them.

    Requests that name several packet stores act on every valid one and record an
    error in ``errors`` for each one that cannot be handled. An empty or missing
    list of ids means every packet store. Stores are visited in order of their id.
    """

    SERVICE_TYPE = 15

    def __init__(self) -> None:
        self._stores: dict[str, PacketStore] = {}
        self.errors = ErrorLog()

    # Direct access -----------------------------------------------------

    def add_packet_store(self, store_id: str, store: PacketStore) -> None:
        """Add ``store`` under ``store_id``; an existing store with that id is kept."""
        _check_store_id(store_id)
        if store_id in self._stores:
            return
        if len(self._stores) >= ECSS_MAX_PACKET_STORES:
            raise OverflowError(f"at most {ECSS_MAX_PACKET_STORES} packet stores are supported")
        self._stores[store_id] = store

    def add_telemetry(self, store_id: str, timestamp: float, packet: Any = None) -> None:
        """Append a telemetry packet taken at ``timestamp`` to an existing store."""
        self.packet_store(store_id).add_packet(timestamp, packet)

    def reset_packet_stores(self) -> None:
        """Remove every packet store."""
        self._stores.clear()

    def packet_store(self, store_id: str) -> PacketStore:
        """Return the store with ``store_id``; raise InternalError if there is none."""
        store = self._stores.get(store_id)
        assert_internal(store is not None, InternalErrorType.ELEMENT_NOT_IN_ARRAY)
        return store

    def packet_store_exists(self, store_id: str) -> bool:
        return store_id in self._stores

    def number_of_packet_stores(self) -> int:
        return len(self._stores)

    # Helpers -----------------------------------------------------------

    def _sorted_items(self) -> list[tuple[str, PacketStore]]:
        return sorted(self._stores.items())

    def _selected(self, store_ids: Iterable[str] | None) -> list[tuple[str, PacketStore]]:
        """Return the named existing stores, reporting each missing one."""
        ids = list(store_ids or ())
        if not ids:
            return self._sorted_items()
        selected = []
        for store_id in ids:
            store = self._stores.get(store_id)
            if store is None:
                self.errors.report(_Err.NON_EXISTING_PACKET_STORE)
                continue
            selected.append((store_id, store))
        return selected

    def _execute_on(
        self, store_ids: Iterable[str] | None, action: Callable[[PacketStore], None]
    ) -> None:
        for _, store in self._selected(store_ids):
            action(store)

    def _lookup(self, store_id: str) -> PacketStore | None:
        store = self._stores.get(store_id)
        if store is None:
            self.errors.report(_Err.NON_EXISTING_PACKET_STORE)
        return store

    # Requests ----------------------------------------------------------

    def enable_storage(self, store_ids: Iterable[str] | None = None) -> None:
        """Enable the storage of packets in the given stores."""
        self._execute_on(store_ids, lambda store: setattr(store, "storage_status", True))

    def disable_storage(self, store_ids: Iterable[str] | None = None) -> None:
        """Disable the storage of packets in the given stores."""
        self._execute_on(store_ids, lambda store: setattr(store, "storage_status", False))

    def start_by_time_range_retrieval(
        self, requests: Iterable[tuple[str, float, float]]
    ) -> None:
        """Start by-time-range retrieval; each request is ``(store_id, start, end)``."""
        for store_id, start, end in requests:
            store = self._stores.get(store_id)
            if store is None:
                self.errors.report(_Err.NON_EXISTING_PACKET_STORE)
                continue
            if store.open_retrieval_status == OpenRetrievalStatus.IN_PROGRESS:
                self.errors.report(_Err.GET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS)
                continue
            if store.by_time_range_retrieval_status:
                self.errors.report(_Err.BY_TIME_RANGE_RETRIEVAL_ALREADY_ENABLED)
                continue
            if start >= end:
                self.errors.report(_Err.INVALID_TIME_WINDOW)
                continue
            store.by_time_range_retrieval_status = True
            store.retrieval_start_time = start
            store.retrieval_end_time = end

    def delete_packet_store_content(
        self, time_limit: float, store_ids: Iterable[str] | None = None
    ) -> None:
        """Delete the packets stored up to ``time_limit`` from the given stores."""
        for _, store in self._selected(store_ids):
            if store.by_time_range_retrieval_status:
                self.errors.report(_Err.SET_PACKET_STORE_WITH_BY_TIME_RANGE_RETRIEVAL)
                continue
            if store.open_retrieval_status == OpenRetrievalStatus.IN_PROGRESS:
                self.errors.report(_Err.SET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS)
                continue
            store.delete_until(time_limit)

    def content_summary_report(
        self, store_ids: Iterable[str] | None = None
    ) -> list[tuple[str, ContentSummary]]:
        """Return the content summary of each given existing store."""
        return [(store_id, store.content_summary()) for store_id, store in self._selected(store_ids)]

    def change_open_retrieval_start_time(
        self, time_tag: float, store_ids: Iterable[str] | None = None
    ) -> None:
        """Set the open retrieval start time tag of the given stores."""
        for _, store in self._selected(store_ids):
            if store.open_retrieval_status == OpenRetrievalStatus.IN_PROGRESS:
                self.errors.report(_Err.SET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS)
                continue
            store.open_retrieval_start_time_tag = time_tag

    def resume_open_retrieval(self, store_ids: Iterable[str] | None = None) -> None:
        """Put the open retrieval of the given stores in progress."""
        for _, store in self._selected(store_ids):
            if store.by_time_range_retrieval_status:
                self.errors.report(_Err.SET_PACKET_STORE_WITH_BY_TIME_RANGE_RETRIEVAL)
                continue
            store.open_retrieval_status = OpenRetrievalStatus.IN_PROGRESS

    def suspend_open_retrieval(self, store_ids: Iterable[str] | None = None) -> None:
        """Suspend the open retrieval of the given stores."""
        self._execute_on(
            store_ids,
            lambda store: setattr(store, "open_retrieval_status", OpenRetrievalStatus.SUSPENDED),
        )

    def abort_by_time_range_retrieval(self, store_ids: Iterable[str] | None = None) -> None:
        """Stop the by-time-range retrieval of the given stores."""
        self._execute_on(
            store_ids, lambda store: setattr(store, "by_time_range_retrieval_status", False)
        )

    def status_report(self) -> list[StatusEntry]:
        """Return the storage and retrieval status of every store."""
        return [
            StatusEntry(
                store_id,
                store.storage_status,
                store.open_retrieval_status,
                store.by_time_range_retrieval_status,
            )
            for store_id, store in self._sorted_items()
        ]

    def create_packet_stores(self, definitions: Iterable[PacketStoreDefinition]) -> None:
        """Create a packet store for each valid definition."""
        for definition in definitions:
            if len(self._stores) >= ECSS_MAX_PACKET_STORES:
                self.errors.report(_Err.MAX_NUMBER_OF_PACKET_STORES_REACHED)
                return
            store_id = _check_store_id(definition.store_id)
            if store_id in self._stores:
                self.errors.report(_Err.ALREADY_EXISTING_PACKET_STORE)
                continue
            if definition.virtual_channel not in VIRTUAL_CHANNEL_LIMITS:
                self.errors.report(_Err.INVALID_VIRTUAL_CHANNEL)
                continue
            store_type = (
                PacketStoreType.CIRCULAR
                if definition.packet_store_type == PacketStoreType.CIRCULAR
                else PacketStoreType.BOUNDED
            )
            self._stores[store_id] = PacketStore(
                virtual_channel=definition.virtual_channel,
                size_in_bytes=definition.size_in_bytes,
                packet_store_type=store_type,
            )

    def delete_packet_stores(self, store_ids: Iterable[str] | None = None) -> None:
        """Delete the given stores, except those that are storing or being retrieved."""
        to_delete = []
        for store_id, store in self._selected(store_ids):
            if store.storage_status:
                self.errors.report(_Err.DELETION_OF_PACKET_STORE_WITH_STORAGE_STATUS_ENABLED)
                continue
            if store.by_time_range_retrieval_status:
                self.errors.report(_Err.DELETION_OF_PACKET_WITH_BY_TIME_RANGE_RETRIEVAL)
                continue
            if store.open_retrieval_status == OpenRetrievalStatus.IN_PROGRESS:
                self.errors.report(_Err.DELETION_OF_PACKET_WITH_OPEN_RETRIEVAL_IN_PROGRESS)
                continue
            to_delete.append(store_id)
        for store_id in to_delete:
            self._stores.pop(store_id, None)

    def configuration_report(self) -> list[ConfigurationEntry]:
        """Return the configuration of every store."""
        return [
            ConfigurationEntry(
                store_id, store.size_in_bytes, store.packet_store_type, store.virtual_channel
            )
            for store_id, store in self._sorted_items()
        ]

    def copy_packets(
        self,
        window_type: TimeWindowType | int,
        source_id: str,
        target_id: str,
        start: float | None = None,
        end: float | None = None,
    ) -> None:
        """Copy the packets of one store inside a time window into an empty store.

        ``start`` is used by FROM_TAG_TO_TAG and AFTER_TIME_TAG windows, ``end`` by
        FROM_TAG_TO_TAG and BEFORE_TIME_TAG windows.
        """
        try:
            window = TimeWindowType(window_type)
        except ValueError:
            self.errors.report(_Err.INVALID_TIME_WINDOW)
            return
        if window != TimeWindowType.BEFORE_TIME_TAG and start is None:
            raise ValueError(f"{window.name} window needs a start time")
        if window != TimeWindowType.AFTER_TIME_TAG and end is None:
            raise ValueError(f"{window.name} window needs an end time")

        source = self._stores.get(source_id)
        target = self._stores.get(target_id)
        if source is None or target is None:
            self.errors.report(_Err.NON_EXISTING_PACKET_STORE)
            return
        if window == TimeWindowType.FROM_TAG_TO_TAG and start >= end:
            self.errors.report(_Err.INVALID_TIME_WINDOW)
            return
        if len(target):
            self.errors.report(_Err.DESTINATION_PACKET_STORE_NOT_EMPTY)
            return
        if not len(source) or self._window_misses(window, source, start, end):
            self.errors.report(_Err.COPY_OF_PACKETS_FAILED)
            return

        if window == TimeWindowType.FROM_TAG_TO_TAG:
            packets = source.packets_between(start, end)
        elif window == TimeWindowType.AFTER_TIME_TAG:
            packets = source.packets_after(start)
        else:
            packets = source.packets_before(end)
        for timestamp, packet in packets:
            target.add_packet(timestamp, packet)

    @staticmethod
    def _window_misses(
        window: TimeWindowType, source: PacketStore, start: float | None, end: float | None
    ) -> bool:
        oldest = source.stored_packets[0][0]
        newest = source.stored_packets[-1][0]
        if window == TimeWindowType.FROM_TAG_TO_TAG:
            return end < oldest or start > newest
        if window == TimeWindowType.AFTER_TIME_TAG:
            return start > newest
        return end < oldest

    def resize_packet_stores(
        self, sizes: Mapping[str, PacketStoreSize] | Iterable[tuple[str, PacketStoreSize]]
    ) -> None:
        """Change the size in bytes of each given store."""
        pairs = sizes.items() if isinstance(sizes, Mapping) else sizes
        for store_id, size in pairs:
            store = self._lookup(store_id)
            if store is None:
                continue
            if size >= ECSS_MAX_PACKET_STORE_SIZE_IN_BYTES:
                self.errors.report(_Err.UNABLE_TO_HANDLE_PACKET_STORE_SIZE)
                continue
            if store.storage_status:
                self.errors.report(_Err.GET_PACKET_STORE_WITH_STORAGE_STATUS_ENABLED)
                continue
            if store.open_retrieval_status == OpenRetrievalStatus.IN_PROGRESS:
                self.errors.report(_Err.GET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS)
                continue
            if store.by_time_range_retrieval_status:
                self.errors.report(_Err.GET_PACKET_STORE_WITH_BY_TIME_RANGE_RETRIEVAL)
                continue
            store.size_in_bytes = size

    def _change_type(self, store_id: str, store_type: PacketStoreType) -> None:
        store = self._lookup(store_id)
        if store is None:
            return
        if store.storage_status:
            self.errors.report(_Err.GET_PACKET_STORE_WITH_STORAGE_STATUS_ENABLED)
            return
        if store.by_time_range_retrieval_status:
            self.errors.report(_Err.GET_PACKET_STORE_WITH_BY_TIME_RANGE_RETRIEVAL)
            return
        if store.open_retrieval_status == OpenRetrievalStatus.IN_PROGRESS:
            self.errors.report(_Err.GET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS)
            return
        store.packet_store_type = store_type

    def change_type_to_circular(self, store_id: str) -> None:
        """Make the store overwrite its oldest packets when full."""
        self._change_type(store_id, PacketStoreType.CIRCULAR)

    def change_type_to_bounded(self, store_id: str) -> None:
        """Make the store stop storing when full."""
        self._change_type(store_id, PacketStoreType.BOUNDED)

    def change_virtual_channel(self, store_id: str, virtual_channel: VirtualChannel) -> None:
        """Change the virtual channel the store is retrieved on."""
        store = self._lookup(store_id)
        if store is None:
            return
        if virtual_channel not in VIRTUAL_CHANNEL_LIMITS:
            self.errors.report(_Err.INVALID_VIRTUAL_CHANNEL)
            return
        if store.by_time_range_retrieval_status:
            self.errors.report(_Err.GET_PACKET_STORE_WITH_BY_TIME_RANGE_RETRIEVAL)
            return
        if store.open_retrieval_status == OpenRetrievalStatus.IN_PROGRESS:
            self.errors.report(_Err.GET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS)
            return
        store.virtual_channel = virtual_channel