"""The time-based scheduling service: release of requests at given times."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any

from ecsspus.clock import current_time_cuc
from ecsspus.definitions import (
    APPLICATION_ID,
    ECSS_MAX_NUMBER_OF_TIME_SCHED_ACTIVITIES,
    ECSS_TIME_MARGIN_FOR_ACTIVATION,
    ApplicationProcessId,
    SequenceCount,
    SourceId,
)
from ecsspus.reporting import ErrorLog, ExecutionStartErrorType


@dataclass(frozen=True)
class RequestID:
    """Identifies the request that an activity was scheduled by."""

    application_id: ApplicationProcessId = 0
    sequence_count: SequenceCount = 0
    source_id: SourceId = 0


@dataclass(frozen=True)
class ScheduledActivity:
    """A request waiting in the schedule for its release time."""

    request: Any
    request_id: RequestID
    release_time: float = 0.0


@dataclass(frozen=True)
class SummaryEntry:
    """One activity's entry in a schedule summary report."""

    release_time: float
    request_id: RequestID


class TimeBasedSchedulingService:
    """Holds scheduled activities in order of release time and releases them.

    Requests that cannot be carried out record an error in ``errors``. Released
    requests that belong to this application are passed to ``executor``.
    """

    SERVICE_TYPE = 11

    def __init__(
        self,
        executor: Callable[[Any], None] | None = None,
        clock: Callable[[], float] = current_time_cuc,
        on_activities_added: Callable[[], None] | None = None,
    ) -> None:
        self._executor = executor
        self._clock = clock
        self._on_activities_added = on_activities_added
        self._activities: list[ScheduledActivity] = []
        self.execution_enabled = False
        self.errors = ErrorLog()

    @property
    def activities(self) -> tuple[ScheduledActivity, ...]:
        """The scheduled activities, earliest release time first."""
        return tuple(self._activities)

    def __len__(self) -> int:
        return len(self._activities)

    def _sort(self) -> None:
        self._activities.sort(key=lambda activity: activity.release_time)

    def _earliest_allowed(self, now: float) -> float:
        return now + ECSS_TIME_MARGIN_FOR_ACTIVATION

    def _find(self, request_id: RequestID) -> int | None:
        return next(
            (
                index
                for index, activity in enumerate(self._activities)
                if activity.request_id == request_id
            ),
            None,
        )

    def _matched(self, request_ids: Iterable[RequestID]) -> list[ScheduledActivity]:
        matched = []
        for request_id in request_ids:
            index = self._find(request_id)
            if index is None:
                self.errors.report(ExecutionStartErrorType.INSTRUCTION_EXECUTION_START_ERROR)
                continue
            matched.append(self._activities[index])
        matched.sort(key=lambda activity: activity.release_time)
        return matched

    def execute_scheduled_activity(self, current_time: float) -> float:
        """Release the first activity if it is due; return the next release time.

        Returns infinity when the schedule is empty afterwards.
        """
        if self._activities and current_time >= self._activities[0].release_time:
            activity = self._activities.pop(0)
            if activity.request_id.application_id == APPLICATION_ID and self._executor:
                self._executor(activity.request)
        if self._activities:
            return self._activities[0].release_time
        return math.inf

    def enable_schedule_execution(self) -> None:
        """Enable the execution function of the schedule."""
        self.execution_enabled = True

    def disable_schedule_execution(self) -> None:
        """Disable the execution function of the schedule."""
        self.execution_enabled = False

    def reset_schedule(self) -> None:
        """Disable execution and remove every scheduled activity."""
        self.execution_enabled = False
        self._activities.clear()

    def insert_activities(
        self, request_id: RequestID, activities: Iterable[tuple[float, Any]]
    ) -> None:
        """Schedule each ``(release_time, request)`` pair under ``request_id``.

        An activity is rejected when the schedule is full or its release time is
        closer to now than the activation margin.
        """
        for release_time, request in activities:
            now = self._clock()
            full = len(self._activities) >= ECSS_MAX_NUMBER_OF_TIME_SCHED_ACTIVITIES
            if full or release_time < self._earliest_allowed(now):
                self.errors.report(ExecutionStartErrorType.INSTRUCTION_EXECUTION_START_ERROR)
                continue
            self._activities.append(ScheduledActivity(request, request_id, release_time))
        self._sort()
        if self._on_activities_added is not None:
            self._on_activities_added()

    def time_shift_all_activities(self, offset: float) -> None:
        """Shift every activity by ``offset`` seconds, unless that is too early."""
        if not self._activities:
            return
        now = self._clock()
        earliest = min(activity.release_time for activity in self._activities)
        if earliest + offset < self._earliest_allowed(now):
            self.errors.report(ExecutionStartErrorType.SUB_SERVICE_EXECUTION_START_ERROR)
            return
        self._activities = [
            replace(activity, release_time=activity.release_time + offset)
            for activity in self._activities
        ]

    def time_shift_activities_by_id(
        self, offset: float, request_ids: Iterable[RequestID]
    ) -> None:
        """Shift the first activity of each request id by ``offset`` seconds."""
        now = self._clock()
        for request_id in request_ids:
            index = self._find(request_id)
            if index is None:
                self.errors.report(ExecutionStartErrorType.INSTRUCTION_EXECUTION_START_ERROR)
                continue
            activity = self._activities[index]
            shifted = activity.release_time + offset
            if shifted < self._earliest_allowed(now):
                self.errors.report(ExecutionStartErrorType.INSTRUCTION_EXECUTION_START_ERROR)
                continue
            self._activities[index] = replace(activity, release_time=shifted)
        self._sort()

    def delete_activities_by_id(self, request_ids: Iterable[RequestID]) -> None:
        """Remove the first activity of each request id."""
        for request_id in request_ids:
            index = self._find(request_id)
            if index is None:
                self.errors.report(ExecutionStartErrorType.INSTRUCTION_EXECUTION_START_ERROR)
                continue
            del self._activities[index]

    def detail_report_all_activities(self) -> list[tuple[float, Any]]:
        """Return ``(release_time, request)`` for every scheduled activity."""
        return [(activity.release_time, activity.request) for activity in self._activities]

    def detail_report_activities_by_id(
        self, request_ids: Iterable[RequestID]
    ) -> list[tuple[float, Any]]:
        """Return ``(release_time, request)`` for the first activity of each id."""
        return [
            (activity.release_time, activity.request)
            for activity in self._matched(request_ids)
        ]

    def summary_report_activities_by_id(
        self, request_ids: Iterable[RequestID]
    ) -> list[SummaryEntry]:
        """Return a summary entry for the first activity of each id."""
        return [
            SummaryEntry(activity.release_time, activity.request_id)
            for activity in self._matched(request_ids)
        ]