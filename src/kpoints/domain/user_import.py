"""User import domain service."""

import csv
from pathlib import Path
from typing import Any, Optional

from kpoints.config import LedgerConfig
from kpoints.database.base import Database
from kpoints.domain.admin import AdminService
from kpoints.domain.directory import parse_role
from kpoints.domain.entities import DEFAULT_DEPARTMENT, UserImportRecord
from kpoints.domain.errors import ValidationError
from kpoints.utils.points_parser import parse_points

IMPORT_COLUMNS = ("user_id", "first_name", "last_name", "department", "initial_balance", "role")
REQUIRED_COLUMNS = ("user_id", "first_name", "last_name")


class UserImportService:
    """Service for importing users from a spreadsheet export (CSV)."""

    def __init__(self, db: Database, config: Optional[LedgerConfig] = None):
        """Initialize user import service.

        Args:
            db: Database instance
            config: Ledger configuration
        """
        self.db = db
        self.admin_service = AdminService(db, config)

    def read_records(self, csv_file_path: str) -> dict[str, Any]:
        """Read import records from a CSV file without touching the database.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            Dict with:
            - records: list of UserImportRecord
            - skipped: number of rows missing user ID or names
            - errors: list of error messages for rows that could not be parsed

        Raises:
            ValidationError: If the file has no header or lacks required columns
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        records = []
        skipped = 0
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            # Try to detect delimiter
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)

            csv_columns = reader.fieldnames
            if csv_columns is None:
                raise ValidationError("CSV file has no columns")
            columns = {c.strip().lower() for c in csv_columns if c}
            missing_columns = [c for c in REQUIRED_COLUMNS if c not in columns]
            if missing_columns:
                raise ValidationError(f"CSV file missing required columns: {', '.join(missing_columns)}")

            for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is row 1)
                values = {
                    (key or "").strip().lower(): (value or "").strip()
                    for key, value in row.items()
                    if isinstance(value, str) or value is None
                }

                if not values.get("user_id") or not values.get("first_name") or not values.get("last_name"):
                    skipped += 1
                    continue

                try:
                    initial_balance = None
                    if values.get("initial_balance"):
                        initial_balance = parse_points(values["initial_balance"])
                        if initial_balance < 0:
                            raise ValueError(f"Initial balance must not be negative, got {initial_balance}")
                    record = UserImportRecord(
                        user_id=values["user_id"],
                        first_name=values["first_name"],
                        last_name=values["last_name"],
                        department=values.get("department") or DEFAULT_DEPARTMENT,
                        initial_balance=initial_balance,
                        role=parse_role(values.get("role")),
                    )
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue

                records.append(record)

        return {"records": records, "skipped": skipped, "errors": errors}

    def import_csv(self, csv_file_path: str) -> dict[str, Any]:
        """Import users from a CSV file.

        Args:
            csv_file_path: Path to CSV file with columns
                user_id, first_name, last_name, department, initial_balance, role

        Returns:
            Dict with import statistics:
            - imported: number of users created
            - updated: number of existing users updated
            - skipped: number of incomplete rows skipped
            - errors: list of error messages

        Raises:
            ValidationError: If the file lacks required columns
            FileNotFoundError: If CSV file doesn't exist
        """
        parsed = self.read_records(csv_file_path)
        result = self.admin_service.bulk_upsert_users(parsed["records"])
        return {
            "imported": result.imported,
            "updated": result.updated,
            "skipped": parsed["skipped"] + result.skipped,
            "errors": parsed["errors"],
        }
