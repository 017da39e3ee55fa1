import math

import pytest

from ecsspus.definitions import (
    APPLICATION_ID,
    ECSS_MAX_NUMBER_OF_TIME_SCHED_ACTIVITIES,
    ECSS_TIME_MARGIN_FOR_ACTIVATION,
)
from ecsspus.reporting import ExecutionStartErrorType
from ecsspus.scheduling import (
    RequestID,
    ScheduledActivity,
    SummaryEntry,
    TimeBasedSchedulingService,
)

NOW = 1000.0
SOON = NOW + ECSS_TIME_MARGIN_FOR_ACTIVATION
INSTR = ExecutionStartErrorType.INSTRUCTION_EXECUTION_START_ERROR

OWN = RequestID(application_id=APPLICATION_ID, sequence_count=1, source_id=2)
OTHER = RequestID(application_id=APPLICATION_ID + 1, sequence_count=3, source_id=4)


@pytest.fixture
def executed():
    return []


@pytest.fixture
def service(executed):
    return TimeBasedSchedulingService(executor=executed.append, clock=lambda: NOW)


def test_insert_keeps_activities_sorted(service):
    service.insert_activities(OWN, [(SOON + 30, "c"), (SOON, "a"), (SOON + 10, "b")])
    assert [a.request for a in service.activities] == ["a", "b", "c"]
    assert [a.release_time for a in service.activities] == [SOON, SOON + 10, SOON + 30]
    assert all(a.request_id == OWN for a in service.activities)
    assert len(service.errors) == 0


def test_insert_rejects_release_within_margin(service):
    service.insert_activities(OWN, [(SOON - 1, "early"), (SOON, "ok")])
    assert [a.request for a in service.activities] == ["ok"]
    assert service.errors.count(INSTR) == 1


def test_insert_rejects_when_schedule_full(service):
    items = [(SOON + i, i) for i in range(ECSS_MAX_NUMBER_OF_TIME_SCHED_ACTIVITIES + 1)]
    service.insert_activities(OWN, items)
    assert len(service) == ECSS_MAX_NUMBER_OF_TIME_SCHED_ACTIVITIES
    assert service.errors.count(INSTR) == 1


def test_insert_notifies_listener():
    calls = []
    svc = TimeBasedSchedulingService(clock=lambda: NOW, on_activities_added=lambda: calls.append(1))
    svc.insert_activities(OWN, [(SOON, "x")])
    assert calls == [1]


def test_execute_releases_due_activity(service, executed):
    service.insert_activities(OWN, [(SOON, "a"), (SOON + 5, "b")])
    assert service.execute_scheduled_activity(SOON - 1) == SOON
    assert executed == []
    assert service.execute_scheduled_activity(SOON) == SOON + 5
    assert executed == ["a"]
    assert service.execute_scheduled_activity(SOON + 5) == math.inf
    assert executed == ["a", "b"]
    assert len(service) == 0


def test_execute_skips_requests_of_other_applications(service, executed):
    service.insert_activities(OTHER, [(SOON, "foreign")])
    assert service.execute_scheduled_activity(SOON) == math.inf
    assert executed == []
    assert len(service) == 0


def test_execute_on_empty_schedule(service):
    assert service.execute_scheduled_activity(NOW) == math.inf


def test_enable_disable_and_reset(service):
    service.enable_schedule_execution()
    assert service.execution_enabled is True
    service.disable_schedule_execution()
    assert service.execution_enabled is False
    service.enable_schedule_execution()
    service.insert_activities(OWN, [(SOON, "a")])
    service.reset_schedule()
    assert service.execution_enabled is False
    assert service.activities == ()


def test_time_shift_all(service):
    service.insert_activities(OWN, [(SOON, "a"), (SOON + 10, "b")])
    service.time_shift_all_activities(20)
    assert [a.release_time for a in service.activities] == [SOON + 20, SOON + 30]


def test_time_shift_all_rejects_too_early(service):
    service.insert_activities(OWN, [(SOON, "a"), (SOON + 10, "b")])
    service.time_shift_all_activities(-1)
    assert [a.release_time for a in service.activities] == [SOON, SOON + 10]
    assert service.errors.count(ExecutionStartErrorType.SUB_SERVICE_EXECUTION_START_ERROR) == 1


def test_time_shift_by_id_resorts(service):
    service.insert_activities(OWN, [(SOON, "own")])
    service.insert_activities(OTHER, [(SOON + 10, "other")])
    service.time_shift_activities_by_id(50, [OWN])
    assert [a.request for a in service.activities] == ["other", "own"]
    assert service.activities[1].release_time == SOON + 50


def test_time_shift_by_id_errors(service):
    service.insert_activities(OWN, [(SOON + 10, "own")])
    missing = RequestID(9, 9, 9)
    service.time_shift_activities_by_id(-20, [OWN, missing])
    assert service.activities[0].release_time == SOON + 10
    assert service.errors.count(INSTR) == 2


def test_delete_by_id(service):
    service.insert_activities(OWN, [(SOON, "own")])
    service.insert_activities(OTHER, [(SOON + 1, "other")])
    service.delete_activities_by_id([OWN, RequestID(7, 7, 7)])
    assert [a.request_id for a in service.activities] == [OTHER]
    assert service.errors.count(INSTR) == 1


def test_detail_report_all(service):
    service.insert_activities(OWN, [(SOON + 3, "b"), (SOON, "a")])
    assert service.detail_report_all_activities() == [(SOON, "a"), (SOON + 3, "b")]


def test_detail_report_by_id_sorted(service):
    service.insert_activities(OTHER, [(SOON + 8, "other")])
    service.insert_activities(OWN, [(SOON + 2, "own")])
    report = service.detail_report_activities_by_id([OTHER, OWN, RequestID(5, 5, 5)])
    assert report == [(SOON + 2, "own"), (SOON + 8, "other")]
    assert service.errors.count(INSTR) == 1


def test_summary_report_by_id(service):
    service.insert_activities(OTHER, [(SOON + 8, "other")])
    service.insert_activities(OWN, [(SOON + 2, "own")])
    report = service.summary_report_activities_by_id([OTHER, OWN])
    assert report == [SummaryEntry(SOON + 2, OWN), SummaryEntry(SOON + 8, OTHER)]


def test_activities_are_immutable(service):
    service.insert_activities(OWN, [(SOON, "a")])
    activity = service.activities[0]
    assert activity == ScheduledActivity("a", OWN, SOON)
    with pytest.raises(AttributeError):
        activity.release_time = 0