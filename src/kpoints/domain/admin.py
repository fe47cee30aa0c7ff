"""Administrative bulk operations.

Callers are expected to have checked the admin capability already; these
services do not re-validate the caller's role.
"""

import logging
from typing import Iterable, Optional

from kpoints.config import LedgerConfig
from kpoints.database.base import Database
from kpoints.domain.directory import UserDirectory
from kpoints.domain.entities import DEFAULT_DEPARTMENT, BulkImportResult, UserImportRecord

logger = logging.getLogger(__name__)


class AdminService:
    """Service for bulk user upserts and the quarterly reset."""

    def __init__(self, db: Database, config: Optional[LedgerConfig] = None):
        """Initialize admin service.

        Args:
            db: Database instance
            config: Ledger configuration
        """
        self.db = db
        self.config = config or LedgerConfig()
        self.directory = UserDirectory(db, self.config)

    def bulk_upsert_users(self, records: Iterable[UserImportRecord]) -> BulkImportResult:
        """Create or update users from import records.

        New users are seeded with their requested initial balance (or the
        starting balance when none is given), capped so that circulation
        never exceeds the ceiling. Existing users keep their balance and
        active flag; only name, department and role change. Each record is
        its own unit of work.

        Args:
            records: Import records

        Returns:
            BulkImportResult with imported, updated and skipped counts
        """
        imported = 0
        updated = 0
        skipped = 0

        for record in records:
            if not record.user_id or not record.first_name or not record.last_name:
                skipped += 1
                continue

            if self._upsert(record):
                imported += 1
            else:
                updated += 1

        logger.info("Bulk upsert: %d imported, %d updated, %d skipped", imported, updated, skipped)
        return BulkImportResult(imported=imported, updated=updated, skipped=skipped)

    def _upsert(self, record: UserImportRecord) -> bool:
        """Upsert one record. Returns True if the user was created."""
        department = (record.department or "").strip() or DEFAULT_DEPARTMENT
        with self.db.atomic("user import"):
            self.directory.ensure_department(department)
            existing = self.db.get_user(record.user_id, for_update=True)
            if existing is not None:
                self.db.update_user_profile(
                    record.user_id,
                    first_name=record.first_name,
                    last_name=record.last_name,
                    department=department,
                    role=record.role.value,
                )
                return False

            balance = self.directory.seed_balance(record.initial_balance)
            self.db.create_user(
                user_id=record.user_id,
                first_name=record.first_name,
                last_name=record.last_name,
                department=department,
                role=record.role.value,
                point_balance=balance,
            )
            if record.initial_balance is not None and balance < record.initial_balance:
                logger.warning(
                    "User %s seeded with %d instead of %d points (circulation ceiling %d)",
                    record.user_id,
                    balance,
                    record.initial_balance,
                    self.config.circulation_ceiling,
                )
            return True

    def reset_quarterly_points(self) -> int:
        """Set every active user's balance to the starting balance.

        Inactive users are left untouched. No undo log is kept.

        Returns:
            Number of users reset
        """
        with self.db.atomic("quarterly reset"):
            count = self.db.reset_active_balances(self.config.starting_balance)
        logger.info("Quarterly reset: %d users set to %d points", count, self.config.starting_balance)
        return count
