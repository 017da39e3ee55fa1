"""Access to the current on-board time."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from ecsspus.utc_timestamp import UTCTimestamp


def current_time_utc() -> UTCTimestamp:
    """Return the current UTC time, to the second."""
    now = datetime.now(timezone.utc)
    return UTCTimestamp(now.year, now.month, now.day, now.hour, now.minute, now.second)


def current_time_cuc() -> float:
    """Return the current time as seconds elapsed since the UNIX epoch."""
    return time.time()