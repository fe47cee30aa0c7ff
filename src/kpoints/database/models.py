"""SQLAlchemy models for kpoints database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    CheckConstraint,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from kpoints.domain.entities import DEFAULT_DEPARTMENT

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User directory model holding the point balance."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    department = Column(String, nullable=False, default=DEFAULT_DEPARTMENT)
    role = Column(String, nullable=False, default="user")
    point_balance = Column(Integer, nullable=False, default=20)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("point_balance >= 0", name="ck_users_balance_non_negative"),
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )


class Department(Base):
    """Department model."""

    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class Transaction(Base):
    """Point transfer model. Rows are insert-only."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    sender_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    points = Column(Integer, nullable=False)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("points BETWEEN 1 AND 3", name="ck_transactions_points_range"),
        CheckConstraint("sender_id <> receiver_id", name="ck_transactions_no_self_transfer"),
    )


class DailyLimit(Base):
    """Per-user, per-day send counter model."""

    __tablename__ = "daily_limits"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    date = Column(Date, nullable=False)
    send_count = Column(Integer, nullable=False, default=0)

    # One counter per user and calendar day
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_limit_user_date"),
        CheckConstraint("send_count >= 0", name="ck_daily_limits_count_non_negative"),
    )


# Execution options for a unit of work that will write. On SQLite the
# transaction starts with BEGIN IMMEDIATE, taking the database write lock
# before the first read; other backends ignore the option.
WRITE_TRANSACTION = {"sqlite_begin": "IMMEDIATE"}


def _on_sqlite_connect(dbapi_connection, connection_record) -> None:
    # Stop pysqlite from issuing its own deferred BEGIN; _on_sqlite_begin does it
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_sqlite_begin(conn) -> None:
    mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
    conn.exec_driver_sql(f"BEGIN {mode}")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are thread-local, but the pool may hand a connection to another thread
        connect_args = {"check_same_thread": False, "timeout": 30}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _on_sqlite_connect)
        event.listen(engine, "begin", _on_sqlite_begin)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
