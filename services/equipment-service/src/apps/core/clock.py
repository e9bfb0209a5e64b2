"""
Clock abstraction.

Classification always reflects "now" at evaluation time, so services take a
clock instead of reading the system time directly.
"""

from datetime import date, datetime, time

from django.utils import timezone


class Clock:
    """Source of the current date and time."""

    def now(self) -> datetime:
        raise NotImplementedError

    def today(self) -> date:
        return timezone.localtime(self.now()).date()


class SystemClock(Clock):
    """Wall clock in the configured ``TIME_ZONE``."""

    def now(self) -> datetime:
        return timezone.now()


class FixedClock(Clock):
    """Clock pinned to a given date (midday, current time zone) or datetime."""

    def __init__(self, moment):
        if isinstance(moment, datetime):
            self._now = moment if timezone.is_aware(moment) else timezone.make_aware(moment)
        else:
            self._now = timezone.make_aware(datetime.combine(moment, time(12, 0)))

    def now(self) -> datetime:
        return self._now


system_clock = SystemClock()
