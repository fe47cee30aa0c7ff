"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so services only ever see frozen
domain entities and never hold ORM rows across a unit of work.
"""

from datetime import datetime, UTC
from typing import Optional

from kpoints.domain import entities as domain
from kpoints.database.models import (
    User as ORMUser,
    Department as ORMDepartment,
    Transaction as ORMTransaction,
    DailyLimit as ORMDailyLimit,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands timestamps back naive; they were written as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        department=orm_user.department,
        role=domain.Role(orm_user.role),
        point_balance=orm_user.point_balance,
        is_active=orm_user.is_active,
        created_at=_as_utc(orm_user.created_at),
        updated_at=_as_utc(orm_user.updated_at),
    )


def department_to_domain(orm_department: ORMDepartment) -> domain.Department:
    """Convert SQLAlchemy Department model to domain Department entity."""
    return domain.Department(
        id=orm_department.id,
        name=orm_department.name,
        created_at=_as_utc(orm_department.created_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        sender_id=orm_transaction.sender_id,
        receiver_id=orm_transaction.receiver_id,
        points=orm_transaction.points,
        message=orm_transaction.message,
        created_at=_as_utc(orm_transaction.created_at),
    )


def transaction_detail_to_domain(
    orm_transaction: ORMTransaction, orm_sender: ORMUser, orm_receiver: ORMUser
) -> domain.TransactionDetail:
    """Convert a transaction row and both joined user rows to a TransactionDetail."""
    return domain.TransactionDetail(
        transaction=transaction_to_domain(orm_transaction),
        sender=user_to_domain(orm_sender),
        receiver=user_to_domain(orm_receiver),
    )


def daily_limit_to_domain(orm_limit: ORMDailyLimit) -> domain.DailyLimit:
    """Convert SQLAlchemy DailyLimit model to domain DailyLimit entity."""
    return domain.DailyLimit(
        id=orm_limit.id,
        user_id=orm_limit.user_id,
        date=orm_limit.date,
        send_count=orm_limit.send_count,
    )
