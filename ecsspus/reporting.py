"""Error types, internal assertions and a log of reported errors."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum, auto


class InternalErrorType(Enum):
    """Errors that indicate a fault in the on-board software itself."""

    INVALID_DATE = auto()
    ELEMENT_NOT_IN_ARRAY = auto()
    OTHER_MESSAGE_TYPE = auto()


class ExecutionStartErrorType(Enum):
    """Errors reported when a request cannot start its execution."""

    INSTRUCTION_EXECUTION_START_ERROR = auto()
    SUB_SERVICE_EXECUTION_START_ERROR = auto()
    NON_EXISTING_PACKET_STORE = auto()
    INVALID_TIME_WINDOW = auto()
    DESTINATION_PACKET_STORE_NOT_EMPTY = auto()
    COPY_OF_PACKETS_FAILED = auto()
    GET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS = auto()
    BY_TIME_RANGE_RETRIEVAL_ALREADY_ENABLED = auto()
    SET_PACKET_STORE_WITH_BY_TIME_RANGE_RETRIEVAL = auto()
    SET_PACKET_STORE_WITH_OPEN_RETRIEVAL_IN_PROGRESS = auto()
    MAX_NUMBER_OF_PACKET_STORES_REACHED = auto()
    ALREADY_EXISTING_PACKET_STORE = auto()
    INVALID_VIRTUAL_CHANNEL = auto()
    DELETION_OF_PACKET_STORE_WITH_STORAGE_STATUS_ENABLED = auto()
    DELETION_OF_PACKET_WITH_BY_TIME_RANGE_RETRIEVAL = auto()
    DELETION_OF_PACKET_WITH_OPEN_RETRIEVAL_IN_PROGRESS = auto()
    UNABLE_TO_HANDLE_PACKET_STORE_SIZE = auto()
    GET_PACKET_STORE_WITH_STORAGE_STATUS_ENABLED = auto()
    GET_PACKET_STORE_WITH_BY_TIME_RANGE_RETRIEVAL = auto()


class InternalError(Exception):
    """Raised when an internal consistency check fails."""

    def __init__(self, error: InternalErrorType) -> None:
        super().__init__(f"internal error: {error.name}")
        self.error = error


def assert_internal(condition: bool, error: InternalErrorType) -> None:
    """Raise InternalError carrying ``error`` unless ``condition`` holds."""
    if not condition:
        raise InternalError(error)


class ErrorLog:
    """Ordered record of the errors a service has reported."""

    def __init__(self) -> None:
        self._errors: list[Enum] = []

    def report(self, error: Enum) -> None:
        """Record one occurrence of ``error``."""
        self._errors.append(error)

    def clear(self) -> None:
        """Forget every recorded error."""
        self._errors.clear()

    def count(self, error: Enum) -> int:
        """Return how many times ``error`` has been reported."""
        return self._errors.count(error)

    @property
    def errors(self) -> tuple[Enum, ...]:
        return tuple(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[Enum]:
        return iter(self._errors)