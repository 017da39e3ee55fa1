"""Parameter monitoring definitions: expected-value, limit and delta checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum, IntEnum

from ecsspus.clock import current_time_cuc
from ecsspus.definitions import (
    DeltaThreshold,
    EventDefinitionId,
    NumberOfConsecutiveDeltaChecks,
    ParameterId,
    PMONBitMask,
    PMONExpectedValue,
    PMONLimit,
    PMONRepetitionNumber,
)
from ecsspus.parameters import ParameterBase


class CheckingStatus(IntEnum):
    """Result of the latest check of a monitored parameter."""

    UNCHECKED = 1
    INVALID = 2
    EXPECTED_VALUE = 3
    UNEXPECTED_VALUE = 4
    WITHIN_LIMITS = 5
    BELOW_LOW_LIMIT = 6
    ABOVE_HIGH_LIMIT = 7
    WITHIN_THRESHOLD = 8
    BELOW_LOW_THRESHOLD = 9
    ABOVE_HIGH_THRESHOLD = 10


class CheckType(IntEnum):
    """Kind of check performed by a monitoring definition."""

    LIMIT = 1
    EXPECTED_VALUE = 2
    DELTA = 3


class PMON(ABC):
    """Common state of every parameter monitoring definition.

    ``perform_check`` runs the check even when monitoring is disabled; callers
    decide whether to act on ``monitoring_enabled``.
    """

    def __init__(
        self,
        monitored_parameter_id: ParameterId,
        monitored_parameter: ParameterBase,
        repetition_number: PMONRepetitionNumber,
        check_type: CheckType,
    ) -> None:
        self.monitored_parameter_id = monitored_parameter_id
        self.monitored_parameter = monitored_parameter
        self.repetition_number = repetition_number
        self.repetition_counter: PMONRepetitionNumber = 0
        self.monitoring_enabled = False
        self.checking_status = CheckingStatus.UNCHECKED
        self.check_transition_list: list[CheckingStatus] = []
        self.check_type = check_type

    def _record(self, status: CheckingStatus) -> None:
        if status == self.checking_status:
            self.repetition_counter += 1
        else:
            self.repetition_counter = 1
        self.checking_status = status

    @abstractmethod
    def perform_check(self) -> None:
        """Check the parameter and update the status and repetition counter."""


class PMONExpectedValueCheck(PMON):
    """Checks that the masked parameter value equals an expected value."""

    def __init__(
        self,
        monitored_parameter_id: ParameterId,
        monitored_parameter: ParameterBase,
        repetition_number: PMONRepetitionNumber,
        expected_value: PMONExpectedValue,
        mask: PMONBitMask,
        unexpected_value_event: EventDefinitionId,
    ) -> None:
        super().__init__(
            monitored_parameter_id,
            monitored_parameter,
            repetition_number,
            CheckType.EXPECTED_VALUE,
        )
        self.expected_value = expected_value
        self.mask = mask
        self.unexpected_value_event = unexpected_value_event

    def perform_check(self) -> None:
        masked = self.monitored_parameter.value_as_uint64() & self.mask
        if masked == self.expected_value:
            self._record(CheckingStatus.EXPECTED_VALUE)
        else:
            self._record(CheckingStatus.UNEXPECTED_VALUE)


class PMONLimitCheck(PMON):
    """Checks that the parameter value lies between a low and a high limit."""

    def __init__(
        self,
        monitored_parameter_id: ParameterId,
        monitored_parameter: ParameterBase,
        repetition_number: PMONRepetitionNumber,
        low_limit: PMONLimit,
        below_low_limit_event: EventDefinitionId,
        high_limit: PMONLimit,
        above_high_limit_event: EventDefinitionId,
    ) -> None:
        super().__init__(
            monitored_parameter_id, monitored_parameter, repetition_number, CheckType.LIMIT
        )
        self.low_limit = low_limit
        self.below_low_limit_event = below_low_limit_event
        self.high_limit = high_limit
        self.above_high_limit_event = above_high_limit_event

    def perform_check(self) -> None:
        value = self.monitored_parameter.value_as_float()
        if value < self.low_limit:
            self._record(CheckingStatus.BELOW_LOW_LIMIT)
        elif value > self.high_limit:
            self._record(CheckingStatus.ABOVE_HIGH_LIMIT)
        else:
            self._record(CheckingStatus.WITHIN_LIMITS)


class PMONDeltaCheck(PMON):
    """Checks the rate of change per second of the parameter against thresholds.

    The delta is the signed difference ``current - previous``.
    """

    def __init__(
        self,
        monitored_parameter_id: ParameterId,
        monitored_parameter: ParameterBase,
        repetition_number: PMONRepetitionNumber,
        number_of_consecutive_delta_checks: NumberOfConsecutiveDeltaChecks,
        low_delta_threshold: DeltaThreshold,
        below_low_threshold_event: EventDefinitionId,
        high_delta_threshold: DeltaThreshold,
        above_high_threshold_event: EventDefinitionId,
        clock: Callable[[], float] = current_time_cuc,
    ) -> None:
        super().__init__(
            monitored_parameter_id, monitored_parameter, repetition_number, CheckType.DELTA
        )
        self.number_of_consecutive_delta_checks = number_of_consecutive_delta_checks
        self.low_delta_threshold = low_delta_threshold
        self.below_low_threshold_event = below_low_threshold_event
        self.high_delta_threshold = high_delta_threshold
        self.above_high_threshold_event = above_high_threshold_event
        self._clock = clock
        self._previous_value = 0.0
        self._previous_timestamp: float | None = None

    def update_previous(self, value: float, timestamp: float) -> None:
        """Remember ``value`` as sampled at ``timestamp`` (seconds)."""
        self._previous_value = value
        self._previous_timestamp = timestamp

    def delta_per_second(self, current_value: float) -> float:
        """Return the change per second since the previous sample, or 0.0 if none."""
        if self._previous_timestamp is None:
            return 0.0
        elapsed = self._clock() - self._previous_timestamp
        if elapsed == 0:
            return 0.0
        return (current_value - self._previous_value) / elapsed

    def has_old_value(self) -> bool:
        """Return True once a previous sample has been recorded."""
        return self._previous_timestamp is not None

    def perform_check(self) -> None:
        value = self.monitored_parameter.value_as_float()
        timestamp = self._clock()
        if self.has_old_value():
            delta = self.delta_per_second(value)
            if delta < self.low_delta_threshold:
                status = CheckingStatus.BELOW_LOW_THRESHOLD
            elif delta > self.high_delta_threshold:
                status = CheckingStatus.ABOVE_HIGH_THRESHOLD
            else:
                status = CheckingStatus.WITHIN_THRESHOLD
        else:
            status = CheckingStatus.INVALID
        self.update_previous(value, timestamp)
        self._record(status)