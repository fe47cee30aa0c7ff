"""Shared pytest fixtures for kpoints tests."""

import tempfile
import os
from datetime import datetime, UTC
import pytest

from kpoints.config import LedgerConfig
from kpoints.database.factories import create_sqlite_database
from kpoints.domain.admin import AdminService
from kpoints.domain.daily_limit import DailyLimitTracker
from kpoints.domain.directory import UserDirectory
from kpoints.domain.ledger import LedgerService
from kpoints.domain.reporting import ReportingService
from kpoints.utils.clock import FixedClock


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def config():
    """Reference deployment configuration."""
    return LedgerConfig()


@pytest.fixture
def clock():
    """Clock frozen at 2024-06-14 12:00 in Tokyo (03:00 UTC)."""
    return FixedClock(datetime(2024, 6, 14, 3, 0, tzinfo=UTC), timezone="Asia/Tokyo")


@pytest.fixture
def directory(temp_db, config):
    """Create a UserDirectory with a temporary database."""
    return UserDirectory(temp_db, config)


@pytest.fixture
def tracker(temp_db, config, clock):
    """Create a DailyLimitTracker with a temporary database."""
    return DailyLimitTracker(temp_db, config, clock)


@pytest.fixture
def ledger(temp_db, config, clock):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db, config, clock)


@pytest.fixture
def reporting(temp_db, config, clock):
    """Create a ReportingService with a temporary database."""
    return ReportingService(temp_db, config, clock)


@pytest.fixture
def admin_service(temp_db, config):
    """Create an AdminService with a temporary database."""
    return AdminService(temp_db, config)


@pytest.fixture
def sample_users(temp_db):
    """Create four active users with 20 points each; 'boss' is an admin."""
    users = [
        ("alice", "Alice", "Sato", "Sales", "user"),
        ("bob", "Bob", "Suzuki", "Sales", "user"),
        ("carol", "Carol", "Tanaka", "Engineering", "user"),
        ("boss", "Ken", "Ito", "Engineering", "admin"),
    ]
    for user_id, first, last, dept, role in users:
        temp_db.create_user(
            user_id=user_id,
            first_name=first,
            last_name=last,
            department=dept,
            role=role,
            point_balance=20,
        )
    return {user_id: temp_db.get_user(user_id) for user_id, *_ in users}


@pytest.fixture
def full_circulation(temp_db):
    """Create 50 active users with 20 points each, so circulation is exactly 1000."""
    departments = ["Sales", "Engineering", "Support", "Finance", "HR"]
    user_ids = []
    for i in range(50):
        user_id = f"u{i:02d}"
        temp_db.create_user(
            user_id=user_id,
            first_name=f"First{i}",
            last_name=f"Last{i}",
            department=departments[i % len(departments)],
            point_balance=20,
        )
        user_ids.append(user_id)
    return user_ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
