"""Calendar helpers anchored to the ledger's reference timezone.

Daily send limits, "today" statistics and monthly totals all depend on where
a day or month starts. Every such boundary is computed here, in one
configured timezone, instead of from the host's local time.
"""

from datetime import date, datetime, time, timedelta, UTC
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta


class LedgerClock:
    """Wall clock that reports dates in a fixed reference timezone."""

    def __init__(self, timezone: str = "Asia/Tokyo"):
        self.timezone = timezone
        self.tz = ZoneInfo(timezone)

    def now(self) -> datetime:
        """Current instant as an aware UTC datetime."""
        return datetime.now(UTC)

    def local(self, moment: datetime) -> datetime:
        """Convert an instant to the reference timezone.

        Naive datetimes are treated as UTC, which is how they are stored.
        """
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        return moment.astimezone(self.tz)

    def today(self) -> date:
        """Calendar date of the current instant in the reference timezone."""
        return self.local(self.now()).date()

    def day_bounds(self, day: Optional[date] = None) -> tuple[datetime, datetime]:
        """Return [start, end) of a calendar day as UTC instants."""
        if day is None:
            day = self.today()
        start = datetime.combine(day, time.min, tzinfo=self.tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self.tz)
        return start.astimezone(UTC), end.astimezone(UTC)

    def month_bounds(self, month: Optional[date] = None) -> tuple[datetime, datetime]:
        """Return [start, end) of the calendar month containing `month` as UTC instants."""
        if month is None:
            month = self.today()
        first = month.replace(day=1)
        start = datetime.combine(first, time.min, tzinfo=self.tz)
        end = datetime.combine(first + relativedelta(months=1), time.min, tzinfo=self.tz)
        return start.astimezone(UTC), end.astimezone(UTC)


class FixedClock(LedgerClock):
    """Clock frozen at a given instant; used by tests and replays."""

    def __init__(self, moment: datetime, timezone: str = "Asia/Tokyo"):
        super().__init__(timezone)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        self.moment = moment.astimezone(UTC)

    def now(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        """Move the clock forward by a timedelta built from kwargs."""
        self.moment = self.moment + timedelta(**kwargs)
