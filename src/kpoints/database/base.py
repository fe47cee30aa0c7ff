"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from kpoints.domain.entities import (
    User,
    Department,
    Transaction,
    TransactionDetail,
    DailyLimit,
    DepartmentRanking,
)


class Database(ABC):
    """Abstract database interface for kpoints.

    Every method is its own unit of work unless it runs inside `atomic()`,
    in which case it joins the enclosing unit and nothing is committed until
    the outermost block exits cleanly.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self, operation: str = "unit of work") -> AbstractContextManager[None]:
        """Serialize a block against all other writers and commit it all-or-nothing.

        Any storage error inside the block rolls the whole block back and is
        re-raised as StorageFailureError.
        """
        pass

    # User operations
    @abstractmethod
    def create_user(
        self,
        user_id: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        department: Optional[str] = None,
        role: str = "user",
        point_balance: int = 20,
    ) -> str:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """Get user by ID.

        Args:
            user_id: User ID
            for_update: Lock the row until the enclosing unit of work ends
                (on backends that support row locks)
        """
        pass

    @abstractmethod
    def list_users(self, active_only: bool = True, department: Optional[str] = None) -> list[User]:
        """List users, optionally filtered by department."""
        pass

    @abstractmethod
    def update_user_profile(
        self,
        user_id: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        department: Optional[str] = None,
        role: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        """Update identity fields of a user. Balance is never touched."""
        pass

    @abstractmethod
    def set_user_active(self, user_id: str, is_active: bool) -> None:
        """Activate or deactivate a user."""
        pass

    @abstractmethod
    def adjust_balance(self, user_id: str, delta: int) -> int:
        """Add delta to a user's balance. Returns the new balance."""
        pass

    @abstractmethod
    def reset_active_balances(self, balance: int) -> int:
        """Set every active user's balance. Returns number of users updated."""
        pass

    # Department operations
    @abstractmethod
    def create_department(self, name: str) -> int:
        """Create a department. Returns department ID."""
        pass

    @abstractmethod
    def get_department_by_name(self, name: str) -> Optional[Department]:
        """Get department by name."""
        pass

    @abstractmethod
    def list_departments(self) -> list[Department]:
        """List all departments."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        sender_id: str,
        receiver_id: str,
        points: int,
        message: Optional[str],
        created_at: datetime,
    ) -> int:
        """Append a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transaction_details(
        self, limit: Optional[int] = None, offset: int = 0, user_id: Optional[str] = None
    ) -> list[TransactionDetail]:
        """List transactions newest first, joined with sender and receiver.

        Args:
            limit: Maximum number of rows (None for all)
            offset: Number of rows to skip
            user_id: Only transactions sent or received by this user
        """
        pass

    @abstractmethod
    def count_transactions(self, start: datetime, end: datetime) -> int:
        """Count transactions created in [start, end)."""
        pass

    @abstractmethod
    def sum_points_received(self, user_id: str, start: datetime, end: datetime) -> int:
        """Sum points received by a user in [start, end)."""
        pass

    # Daily limit operations
    @abstractmethod
    def get_daily_limit(self, user_id: str, on_date: date) -> Optional[DailyLimit]:
        """Get the send counter for a user and day."""
        pass

    @abstractmethod
    def increment_daily_limit(self, user_id: str, on_date: date) -> int:
        """Increment the send counter, creating it at 1. Returns the new count."""
        pass

    # Aggregates
    @abstractmethod
    def get_total_circulation(self) -> int:
        """Sum of active users' balances."""
        pass

    @abstractmethod
    def get_department_rankings(self) -> list[DepartmentRanking]:
        """Balance totals and member counts per department among active users.

        Ordered by total descending, then department name ascending.
        """
        pass

    @abstractmethod
    def count_active_users(self) -> int:
        """Count active users."""
        pass

    @abstractmethod
    def count_active_departments(self) -> int:
        """Count distinct departments among active users."""
        pass
