"""Packet stores that keep timestamped telemetry for storage and retrieval."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from ecsspus.definitions import ECSS_MAX_PACKET_STORE_SIZE, PercentageFilled, VirtualChannel


class PacketStoreType(IntEnum):
    """Whether a full store overwrites its oldest packets or stops storing."""

    CIRCULAR = 0
    BOUNDED = 1


class OpenRetrievalStatus(IntEnum):
    """Whether the open retrieval of a packet store is running."""

    SUSPENDED = 0
    IN_PROGRESS = 1


@dataclass(frozen=True)
class ContentSummary:
    """Summary of the content of a packet store."""

    oldest_packet_time: float
    newest_packet_time: float
    open_retrieval_start_time_tag: float
    filled_percentage: PercentageFilled
    open_retrieval_filled_percentage: PercentageFilled


def _percentage(count: int) -> PercentageFilled:
    return int(count * 100 / ECSS_MAX_PACKET_STORE_SIZE)


@dataclass
class PacketStore:
    """A store of telemetry packets, each kept with its timestamp.

    Packets are appended at the back, so the oldest packet is always first.
    """

    virtual_channel: VirtualChannel = 0
    open_retrieval_start_time_tag: float = 0
    retrieval_start_time: float = 0
    retrieval_end_time: float = 0
    size_in_bytes: int = 0
    storage_status: bool = False
    by_time_range_retrieval_status: bool = False
    packet_store_type: PacketStoreType = PacketStoreType.CIRCULAR
    open_retrieval_status: OpenRetrievalStatus = OpenRetrievalStatus.SUSPENDED
    stored_packets: deque[tuple[float, Any]] = field(default_factory=deque)

    def __len__(self) -> int:
        return len(self.stored_packets)

    def __iter__(self) -> Iterator[tuple[float, Any]]:
        return iter(self.stored_packets)

    @property
    def is_full(self) -> bool:
        return len(self.stored_packets) >= ECSS_MAX_PACKET_STORE_SIZE

    def add_packet(self, timestamp: float, packet: Any = None) -> None:
        """Append ``packet`` taken at ``timestamp``; raise OverflowError when full."""
        if self.is_full:
            raise OverflowError(
                f"packet store holds at most {ECSS_MAX_PACKET_STORE_SIZE} packets"
            )
        self.stored_packets.append((timestamp, packet))

    def delete_until(self, time_limit: float) -> None:
        """Remove the leading packets whose timestamp is at most ``time_limit``."""
        packets = self.stored_packets
        while packets and packets[0][0] <= time_limit:
            packets.popleft()

    def packets_between(self, start: float, end: float) -> list[tuple[float, Any]]:
        """Return the packets from ``start`` up to the first one later than ``end``."""
        selected = []
        for timestamp, packet in self.stored_packets:
            if timestamp < start:
                continue
            if timestamp > end:
                break
            selected.append((timestamp, packet))
        return selected

    def packets_after(self, start: float) -> list[tuple[float, Any]]:
        """Return every packet whose timestamp is not earlier than ``start``."""
        return [(t, p) for t, p in self.stored_packets if t >= start]

    def packets_before(self, end: float) -> list[tuple[float, Any]]:
        """Return the packets up to the first one later than ``end``."""
        selected = []
        for timestamp, packet in self.stored_packets:
            if timestamp > end:
                break
            selected.append((timestamp, packet))
        return selected

    def content_summary(self) -> ContentSummary:
        """Summarise the stored packets; raise ValueError if the store is empty."""
        if not self.stored_packets:
            raise ValueError("packet store is empty")
        tag = self.open_retrieval_start_time_tag
        to_transfer = sum(1 for timestamp, _ in self.stored_packets if timestamp >= tag)
        return ContentSummary(
            oldest_packet_time=self.stored_packets[0][0],
            newest_packet_time=self.stored_packets[-1][0],
            open_retrieval_start_time_tag=tag,
            filled_percentage=_percentage(len(self.stored_packets)),
            open_retrieval_filled_percentage=_percentage(to_transfer),
        )