"""Calendar timestamp in UTC with second resolution."""

from __future__ import annotations

import calendar
from dataclasses import dataclass

from ecsspus.reporting import InternalErrorType, assert_internal

UNIX_EPOCH_YEAR = 1970
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MONTHS_PER_YEAR = 12


@dataclass(order=True)
class UTCTimestamp:
    """A UTC date and time; compares chronologically field by field."""

    year: int = UNIX_EPOCH_YEAR
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        invalid = InternalErrorType.INVALID_DATE
        assert_internal(UNIX_EPOCH_YEAR <= self.year, invalid)
        assert_internal(1 <= self.month <= MONTHS_PER_YEAR, invalid)
        assert_internal(1 <= self.day <= 31, invalid)
        assert_internal(0 <= self.hour < HOURS_PER_DAY, invalid)
        assert_internal(0 <= self.minute < MINUTES_PER_HOUR, invalid)
        # A value of 60 is allowed to account for leap seconds.
        assert_internal(0 <= self.second <= SECONDS_PER_MINUTE, invalid)

    def days_of_month(self) -> int:
        """Return the number of days in this timestamp's month."""
        return calendar.monthrange(self.year, self.month)[1]

    def repair(self) -> None:
        """Carry a single overflow in each field into the next larger one."""
        if self.second > SECONDS_PER_MINUTE:
            self.second -= SECONDS_PER_MINUTE
            self.minute += 1
        if self.minute >= MINUTES_PER_HOUR:
            self.minute -= MINUTES_PER_HOUR
            self.hour += 1
        if self.hour >= HOURS_PER_DAY:
            self.hour -= HOURS_PER_DAY
            self.day += 1
        days = self.days_of_month()
        if self.day > days:
            self.day -= days
            self.month += 1
        if self.month > MONTHS_PER_YEAR:
            self.month -= MONTHS_PER_YEAR
            self.year += 1

    def __str__(self) -> str:
        return (
            f"{self.hour}-{self.minute}-{self.second} -- "
            f"{self.day}/{self.month}/{self.year}"
        )