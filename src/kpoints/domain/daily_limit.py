"""Daily send-limit tracking."""

from datetime import date
from typing import Optional

from kpoints.config import LedgerConfig
from kpoints.database.base import Database
from kpoints.utils.clock import LedgerClock


class DailyLimitTracker:
    """Per-user, per-day send counters.

    Counters are keyed by calendar date in the reference timezone. They are
    never reset; once the date changes a counter simply stops matching
    "today" and stays behind as an audit trail.
    """

    def __init__(
        self,
        db: Database,
        config: Optional[LedgerConfig] = None,
        clock: Optional[LedgerClock] = None,
    ):
        """Initialize daily limit tracker.

        Args:
            db: Database instance
            config: Ledger configuration
            clock: Clock used to determine "today"
        """
        self.db = db
        self.config = config or LedgerConfig()
        self.clock = clock or LedgerClock(self.config.timezone)

    def get_send_count(self, user_id: str, on_date: Optional[date] = None) -> int:
        """Number of sends a user made on a day (today by default)."""
        if on_date is None:
            on_date = self.clock.today()
        limit = self.db.get_daily_limit(user_id, on_date)
        return limit.send_count if limit is not None else 0

    def remaining_sends(self, user_id: str, on_date: Optional[date] = None) -> int:
        """Sends still allowed on a day (today by default)."""
        return max(0, self.config.daily_send_limit - self.get_send_count(user_id, on_date))

    def has_capacity(self, user_id: str, on_date: Optional[date] = None) -> bool:
        return self.get_send_count(user_id, on_date) < self.config.daily_send_limit

    def increment(self, user_id: str, on_date: Optional[date] = None) -> int:
        """Record one send, creating the day's counter if needed.

        Returns:
            The new send count for that day
        """
        if on_date is None:
            on_date = self.clock.today()
        return self.db.increment_daily_limit(user_id, on_date)
