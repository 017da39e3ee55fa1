import time
from datetime import datetime, timezone

from ecsspus.clock import current_time_cuc, current_time_utc
from ecsspus.utc_timestamp import UTCTimestamp


def _utc_now():
    now = datetime.now(timezone.utc)
    return UTCTimestamp(now.year, now.month, now.day, now.hour, now.minute, now.second)


def test_cuc_time_lies_between_surrounding_readings():
    before = time.time()
    result = current_time_cuc()
    after = time.time()
    assert before <= result <= after


def test_cuc_time_is_monotonic_enough():
    first = current_time_cuc()
    second = current_time_cuc()
    assert second >= first


def test_utc_time_lies_between_surrounding_readings():
    before = _utc_now()
    result = current_time_utc()
    after = _utc_now()
    assert before <= result <= after


def test_utc_time_is_after_epoch():
    assert current_time_utc() > UTCTimestamp()