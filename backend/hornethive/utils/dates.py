"""
Date Utilities
Timezone-aware clock and calendar month arithmetic for credential expiry.
"""

import calendar
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def add_months(when: datetime, months: int) -> datetime:
    """
    Shift a datetime by whole calendar months.
    The day is clamped to the last day of the target month (Nov 30 + 3 -> Feb 28/29).
    """
    month_index = when.month - 1 + months
    year = when.year + month_index // 12
    month = month_index % 12 + 1
    day = min(when.day, calendar.monthrange(year, month)[1])
    return when.replace(year=year, month=month, day=day)
