"""Domain model entities for kpoints.

These are pure data classes representing business concepts, independent of
database schema. Services hand them out instead of ORM rows so callers never
hold live references into the ledger store.
"""

from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role."""

    USER = "user"
    ADMIN = "admin"


DEFAULT_DEPARTMENT = "unset"


@dataclass(frozen=True)
class User:
    """User directory entry with current point balance."""

    id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    department: str
    role: Role
    point_balance: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @property
    def display_name(self) -> str:
        """Family name first, as the directory lists people."""
        parts = [p for p in (self.last_name, self.first_name) if p]
        return " ".join(parts) if parts else self.id

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class Department:
    """Department domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Immutable point transfer record."""

    id: int
    sender_id: str
    receiver_id: str
    points: int
    message: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class TransactionDetail:
    """Transaction joined with both parties, for history views and exports."""

    transaction: Transaction
    sender: User
    receiver: User


@dataclass(frozen=True)
class DailyLimit:
    """Per-user, per-day send counter."""

    id: int
    user_id: str
    date: date
    send_count: int


@dataclass(frozen=True)
class UserWithStats:
    """User with today's send count and this month's received points."""

    user: User
    daily_sent_count: int
    monthly_received: int


@dataclass(frozen=True)
class DepartmentRanking:
    """Department total used by the rankings board."""

    name: str
    total_points: int
    member_count: int


@dataclass(frozen=True)
class SystemStats:
    """System-wide circulation statistics."""

    total_users: int
    today_transactions: int
    active_departments: int
    total_circulation: int


@dataclass(frozen=True)
class UserImportRecord:
    """One row from the user import source."""

    user_id: str
    first_name: str
    last_name: str
    department: str = DEFAULT_DEPARTMENT
    initial_balance: Optional[int] = None
    role: Role = Role.USER


@dataclass(frozen=True)
class BulkImportResult:
    """Outcome of a bulk user upsert."""

    imported: int
    updated: int
    skipped: int = 0
