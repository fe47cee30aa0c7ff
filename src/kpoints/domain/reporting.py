"""Read-side aggregations over the ledger."""

from datetime import date
from typing import Optional

from kpoints.config import LedgerConfig
from kpoints.database.base import Database
from kpoints.domain.daily_limit import DailyLimitTracker
from kpoints.domain.entities import DepartmentRanking, SystemStats, UserWithStats
from kpoints.domain.errors import NotFoundError, user_not_found
from kpoints.utils.clock import LedgerClock


class ReportingService:
    """Service for rankings, monthly totals and system statistics.

    Nothing here mutates state.
    """

    def __init__(
        self,
        db: Database,
        config: Optional[LedgerConfig] = None,
        clock: Optional[LedgerClock] = None,
    ):
        """Initialize reporting service.

        Args:
            db: Database instance
            config: Ledger configuration
            clock: Clock defining "today" and "this month"
        """
        self.db = db
        self.config = config or LedgerConfig()
        self.clock = clock or LedgerClock(self.config.timezone)
        self.limits = DailyLimitTracker(db, self.config, self.clock)

    def department_rankings(self) -> list[DepartmentRanking]:
        """Departments ordered by total balance of their active members.

        Ties are broken by department name, ascending.
        """
        return self.db.get_department_rankings()

    def monthly_received(self, user_id: str, month: Optional[date] = None) -> int:
        """Points a user received during a calendar month.

        Args:
            user_id: Receiving user ID
            month: Any date inside the month (defaults to the current month)

        Raises:
            NotFoundError: If the user does not exist
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        start, end = self.clock.month_bounds(month)
        return self.db.sum_points_received(user_id, start, end)

    def total_circulation(self) -> int:
        """Sum of all active users' balances."""
        return self.db.get_total_circulation()

    def system_stats(self) -> SystemStats:
        """Active users, today's transactions, active departments and circulation."""
        start, end = self.clock.day_bounds()
        return SystemStats(
            total_users=self.db.count_active_users(),
            today_transactions=self.db.count_transactions(start, end),
            active_departments=self.db.count_active_departments(),
            total_circulation=self.db.get_total_circulation(),
        )

    def users_with_stats(self) -> list[UserWithStats]:
        """Every active user with today's send count and this month's received points."""
        start, end = self.clock.month_bounds()
        today = self.clock.today()
        return [
            UserWithStats(
                user=user,
                daily_sent_count=self.limits.get_send_count(user.id, today),
                monthly_received=self.db.sum_points_received(user.id, start, end),
            )
            for user in self.db.list_users(active_only=True)
        ]
