import pytest

from ecsspus.parameters import Parameter
from ecsspus.pmon import (
    PMON,
    CheckingStatus,
    CheckType,
    PMONDeltaCheck,
    PMONExpectedValueCheck,
    PMONLimitCheck,
)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def make_delta(parameter, clock, low=-1.0, high=1.0):
    return PMONDeltaCheck(7, parameter, 2, 3, low, 10, high, 11, clock=clock)


def test_pmon_base_is_abstract():
    with pytest.raises(TypeError):
        PMON(1, Parameter(0), 1, CheckType.LIMIT)


def test_new_definition_starts_unchecked_and_disabled():
    check = PMONLimitCheck(1, Parameter(0), 3, 0.0, 1, 10.0, 2)
    assert check.checking_status is CheckingStatus.UNCHECKED
    assert check.repetition_counter == 0
    assert check.monitoring_enabled is False
    assert check.check_type is CheckType.LIMIT


def test_expected_value_check_matches_masked_value():
    parameter = Parameter(0b1011)
    check = PMONExpectedValueCheck(1, parameter, 2, 0b0011, 0b0011, 5)
    check.perform_check()
    assert check.checking_status is CheckingStatus.EXPECTED_VALUE
    assert check.repetition_counter == 1


def test_expected_value_check_detects_unexpected():
    parameter = Parameter(0b1000)
    check = PMONExpectedValueCheck(1, parameter, 2, 0b0011, 0b0011, 5)
    check.perform_check()
    assert check.checking_status is CheckingStatus.UNEXPECTED_VALUE
    assert check.check_type is CheckType.EXPECTED_VALUE


@pytest.mark.parametrize(
    "value, status",
    [
        (-1.0, CheckingStatus.BELOW_LOW_LIMIT),
        (11.0, CheckingStatus.ABOVE_HIGH_LIMIT),
        (5.0, CheckingStatus.WITHIN_LIMITS),
        (0.0, CheckingStatus.WITHIN_LIMITS),
        (10.0, CheckingStatus.WITHIN_LIMITS),
    ],
)
def test_limit_check_statuses(value, status):
    check = PMONLimitCheck(1, Parameter(value), 3, 0.0, 1, 10.0, 2)
    check.perform_check()
    assert check.checking_status is status


def test_repetition_counter_counts_and_resets():
    parameter = Parameter(5.0)
    check = PMONLimitCheck(1, parameter, 3, 0.0, 1, 10.0, 2)
    check.perform_check()
    check.perform_check()
    assert check.repetition_counter == 2
    parameter.value = 20.0
    check.perform_check()
    assert check.checking_status is CheckingStatus.ABOVE_HIGH_LIMIT
    assert check.repetition_counter == 1


def test_delta_first_check_is_invalid():
    clock = FakeClock(100.0)
    check = make_delta(Parameter(1.0), clock)
    assert check.has_old_value() is False
    check.perform_check()
    assert check.checking_status is CheckingStatus.INVALID
    assert check.has_old_value() is True
    assert check.check_type is CheckType.DELTA


def test_delta_without_previous_sample_is_zero():
    check = make_delta(Parameter(1.0), FakeClock())
    assert check.delta_per_second(50.0) == 0.0


def test_delta_per_second_uses_elapsed_time():
    clock = FakeClock(10.0)
    check = make_delta(Parameter(0.0), clock)
    check.update_previous(4.0, 10.0)
    clock.now = 12.0
    assert check.delta_per_second(10.0) == pytest.approx((10.0 - 4.0) / 2.0)


def test_delta_zero_elapsed_time_gives_zero():
    clock = FakeClock(10.0)
    check = make_delta(Parameter(0.0), clock)
    check.update_previous(4.0, 10.0)
    assert check.delta_per_second(100.0) == 0.0


@pytest.mark.parametrize(
    "new_value, status",
    [
        (0.5, CheckingStatus.WITHIN_THRESHOLD),
        (5.0, CheckingStatus.ABOVE_HIGH_THRESHOLD),
        (-5.0, CheckingStatus.BELOW_LOW_THRESHOLD),
    ],
)
def test_delta_threshold_statuses(new_value, status):
    clock = FakeClock(0.0)
    parameter = Parameter(0.0)
    check = make_delta(parameter, clock)
    check.perform_check()
    clock.now = 1.0
    parameter.value = new_value
    check.perform_check()
    assert check.checking_status is status
    assert check.repetition_counter == 1


def test_delta_repeated_status_increments_counter():
    clock = FakeClock(0.0)
    parameter = Parameter(0.0)
    check = make_delta(parameter, clock)
    check.perform_check()
    for step in (1.0, 2.0):
        clock.now = step
        check.perform_check()
    assert check.checking_status is CheckingStatus.WITHIN_THRESHOLD
    assert check.repetition_counter == 2