"""Constants, limits and numeric type aliases shared by the services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

# Numeric type aliases used throughout the services.
StepId: TypeAlias = int
ParameterReportStructureId: TypeAlias = int
EventDefinitionId: TypeAlias = int
ParameterId: TypeAlias = int
ParameterSampleCount: TypeAlias = int
SamplingInterval: TypeAlias = int
StartAddress: TypeAlias = int
MemoryId: TypeAlias = int
MemoryManagementChecksum: TypeAlias = int
MemoryDataLength: TypeAlias = int
LargeMessageTransactionId: TypeAlias = int
PartSequenceNum: TypeAlias = int
PacketStoreSize: TypeAlias = int
VirtualChannel: TypeAlias = int
NumOfPacketStores: TypeAlias = int
ApplicationProcessId: TypeAlias = int
ServiceTypeNum: TypeAlias = int
MessageTypeNum: TypeAlias = int
SourceId: TypeAlias = int
SequenceCount: TypeAlias = int
PercentageFilled: TypeAlias = int
CollectionInterval: TypeAlias = int
ErrorCode: TypeAlias = int
PMONRepetitionNumber: TypeAlias = int
PMONLimit: TypeAlias = float
PMONExpectedValue: TypeAlias = int
PMONBitMask: TypeAlias = int
NumberOfConsecutiveDeltaChecks: TypeAlias = int
DeltaThreshold: TypeAlias = float

# Service types (ST numbers) that are enabled on this platform.
ENABLED_SERVICES: frozenset[int] = frozenset(
    {1, 3, 4, 5, 6, 8, 9, 11, 12, 13, 14, 15, 17, 19, 20, 23, 128}
)

ECSS_MAX_MESSAGE_SIZE = 1024
CCSDS_PRIMARY_HEADER_SIZE = 6
ECSS_SECONDARY_TM_HEADER_SIZE = 11
ECSS_SECONDARY_TC_HEADER_SIZE = 5
CCSDS_MAX_MESSAGE_SIZE = (
    ECSS_MAX_MESSAGE_SIZE + CCSDS_PRIMARY_HEADER_SIZE + ECSS_SECONDARY_TM_HEADER_SIZE + 2
)
ECSS_MAX_STRING_SIZE = 256
ECSS_MAX_FIXED_OCTET_STRING_SIZE = 256
ECSS_TOTAL_MESSAGE_TYPES = 10 * 20
CCSDS_PACKET_VERSION = 0
ECSS_PUS_VERSION = 2
ECSS_SEQUENCE_FLAGS = 0x3
ECSS_MAX_REQUEST_COUNT = 20
ECSS_TC_REQUEST_STRING_SIZE = 64
ECSS_MAX_NUMBER_OF_TIME_SCHED_ACTIVITIES = 10
ECSS_TIME_MARGIN_FOR_ACTIVATION = 60  # seconds
ECSS_EVENT_DATA_AUXILIARY_MAX_SIZE = 64
ECSS_EVENT_ACTION_STRUCT_MAP_SIZE = 100
ECSS_MAX_DELTA_OF_RELEASE_TIME = 60
ECSS_MAX_SIMPLY_COMMUTATED_PARAMETERS = 30
ECSS_FUNCTION_MAP_SIZE = 5
ECSS_FUNCTION_NAME_LENGTH = 32
ECSS_FUNCTION_MAX_ARG_LENGTH = 32
LOGGER_MAX_MESSAGE_SIZE = 512
ECSS_PARAMETER_COUNT = 500
ECSS_CRC_INCLUDED = True
ECSS_MAX_STATISTIC_PARAMETERS = 4
SUPPORTS_STANDARD_DEVIATION = True
ECSS_MAX_PACKET_STORE_SIZE_IN_BYTES = 1000
ECSS_MAX_PACKET_STORE_SIZE = 10
ECSS_MAX_PACKET_STORES = 4
ECSS_PACKET_STORE_ID_SIZE = 15
ECSS_MAX_HOUSEKEEPING_STRUCTURES = 10
ECSS_MAX_CONTROLLED_APPLICATION_PROCESSES = 5
ECSS_MAX_REPORT_TYPE_DEFINITIONS = 20
ECSS_MAX_SERVICE_TYPE_DEFINITIONS = 10
ECSS_MAX_APPLICATIONS_SERVICES_COMBINATIONS = (
    ECSS_MAX_CONTROLLED_APPLICATION_PROCESSES * ECSS_MAX_SERVICE_TYPE_DEFINITIONS
)
ECSS_MAX_EVENT_DEFINITION_IDS = 15
ECSS_MAX_MONITORING_DEFINITIONS = 4
ECSS_MONITORING_FREQUENCY = 60  # seconds
APPLICATION_ID = 1


@dataclass(frozen=True)
class ChannelLimits:
    """Inclusive range of valid virtual channel numbers."""

    minimum: int
    maximum: int

    def __contains__(self, channel: object) -> bool:
        return isinstance(channel, int) and self.minimum <= channel <= self.maximum


VIRTUAL_CHANNEL_LIMITS = ChannelLimits(1, 10)