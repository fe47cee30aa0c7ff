"""CSV export of transaction history and user balances."""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from kpoints.config import LedgerConfig
from kpoints.database.base import Database
from kpoints.domain.reporting import ReportingService
from kpoints.utils.clock import LedgerClock

logger = logging.getLogger(__name__)

TRANSACTION_HEADERS = [
    "sender_id",
    "sender_name",
    "sender_department",
    "receiver_id",
    "receiver_name",
    "receiver_department",
    "points",
    "message",
    "created_at",
]

BALANCE_HEADERS = [
    "user_id",
    "name",
    "department",
    "point_balance",
    "monthly_received",
    "updated_at",
]


def _iso(value: Optional[datetime]) -> str:
    return value.isoformat() if value is not None else ""


class ExportService:
    """Service for writing ledger data to spreadsheet-friendly CSV files."""

    def __init__(
        self,
        db: Database,
        config: Optional[LedgerConfig] = None,
        clock: Optional[LedgerClock] = None,
    ):
        self.db = db
        self.reporting = ReportingService(db, config, clock)

    def export_transaction_history(self, csv_file_path: str, limit: int = 1000) -> int:
        """Write the newest transactions to a CSV file.

        Returns:
            Number of rows written (excluding the header)
        """
        details = self.db.list_transaction_details(limit=limit)
        with open(Path(csv_file_path), "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(TRANSACTION_HEADERS)
            for detail in details:
                txn = detail.transaction
                writer.writerow(
                    [
                        detail.sender.id,
                        detail.sender.display_name,
                        detail.sender.department,
                        detail.receiver.id,
                        detail.receiver.display_name,
                        detail.receiver.department,
                        txn.points,
                        txn.message or "",
                        _iso(txn.created_at),
                    ]
                )
        logger.info("Exported %d transactions to %s", len(details), csv_file_path)
        return len(details)

    def export_user_balances(self, csv_file_path: str) -> int:
        """Write every active user's balance and monthly received points to a CSV file.

        Returns:
            Number of rows written (excluding the header)
        """
        users = self.reporting.users_with_stats()
        with open(Path(csv_file_path), "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(BALANCE_HEADERS)
            for entry in users:
                writer.writerow(
                    [
                        entry.user.id,
                        entry.user.display_name,
                        entry.user.department,
                        entry.user.point_balance,
                        entry.monthly_received,
                        _iso(entry.user.updated_at),
                    ]
                )
        logger.info("Exported %d user balances to %s", len(users), csv_file_path)
        return len(users)
