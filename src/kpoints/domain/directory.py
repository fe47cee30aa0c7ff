"""User directory domain service."""

import logging
from typing import Optional

from kpoints.config import LedgerConfig
from kpoints.database.base import Database
from kpoints.domain.entities import DEFAULT_DEPARTMENT, Department, Role, User
from kpoints.domain.errors import NotFoundError, ValidationError, user_not_found

logger = logging.getLogger(__name__)


def parse_role(role: Optional[str | Role]) -> Role:
    """Parse a role name; empty means a regular user.

    Raises:
        ValidationError: If the role is unknown
    """
    if isinstance(role, Role):
        return role
    if role is None or not role.strip():
        return Role.USER
    try:
        return Role(role.strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown role '{role}'. Supported roles: user, admin")


class UserDirectory:
    """Service for identities, departments and balance lookups."""

    def __init__(self, db: Database, config: Optional[LedgerConfig] = None):
        """Initialize user directory.

        Args:
            db: Database instance
            config: Ledger configuration (defaults to reference deployment values)
        """
        self.db = db
        self.config = config or LedgerConfig()

    def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID, active or not."""
        return self.db.get_user(user_id)

    def require_user(self, user_id: str) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def get_balance(self, user_id: str) -> int:
        """Current point balance of a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        return self.require_user(user_id).point_balance

    def list_users(self, department: Optional[str] = None, include_inactive: bool = False) -> list[User]:
        """List users, active only unless include_inactive is set."""
        return self.db.list_users(active_only=not include_inactive, department=department)

    def is_admin(self, user_id: str) -> bool:
        """True if the user exists, is active and holds the admin role."""
        user = self.db.get_user(user_id)
        return user is not None and user.is_active and user.is_admin

    def seed_balance(self, requested: Optional[int] = None) -> int:
        """Starting balance for a new user, capped by the remaining circulation.

        Must run inside the same unit of work as the user insert.
        """
        if requested is None or requested <= 0:
            requested = self.config.starting_balance
        remaining = self.config.circulation_ceiling - self.db.get_total_circulation()
        return max(0, min(requested, remaining))

    def register_user(
        self,
        user_id: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        department: Optional[str] = None,
        role: Optional[str | Role] = None,
    ) -> User:
        """Create a user on first login, or refresh the profile of a known one.

        New users are seeded with the starting balance, capped so circulation
        never exceeds the ceiling. Existing users keep their balance.

        Raises:
            ValidationError: If user_id is empty or role is unknown
        """
        user_id = (user_id or "").strip()
        if not user_id:
            raise ValidationError("User ID must not be empty")
        parsed_role = parse_role(role)
        department = (department or "").strip() or None

        with self.db.atomic("user registration"):
            if department:
                self.ensure_department(department)
            existing = self.db.get_user(user_id, for_update=True)
            if existing is None:
                balance = self.seed_balance()
                self.db.create_user(
                    user_id=user_id,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    department=department or DEFAULT_DEPARTMENT,
                    role=parsed_role.value,
                    point_balance=balance,
                )
                logger.info("Registered user %s with %d points", user_id, balance)
            else:
                self.db.update_user_profile(
                    user_id,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    department=department,
                    role=parsed_role.value if role is not None else None,
                )
            return self.db.get_user(user_id)

    def deactivate_user(self, user_id: str) -> None:
        """Deactivate a user. Users are never deleted.

        Raises:
            NotFoundError: If the user does not exist
        """
        with self.db.atomic("user deactivation"):
            self.require_user(user_id)
            self.db.set_user_active(user_id, False)
        logger.info("Deactivated user %s", user_id)

    def ensure_department(self, name: str) -> Department:
        """Get a department by name, creating it if absent.

        Raises:
            ValidationError: If the name is blank
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Department name must not be empty")
        with self.db.atomic("department creation"):
            department = self.db.get_department_by_name(name)
            if department is None:
                self.db.create_department(name)
                department = self.db.get_department_by_name(name)
            return department

    def list_departments(self) -> list[Department]:
        """List all departments."""
        return self.db.list_departments()
