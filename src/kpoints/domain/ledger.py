"""Point ledger domain service."""

import logging
from typing import Optional

from kpoints.config import LedgerConfig
from kpoints.database.base import Database
from kpoints.domain.daily_limit import DailyLimitTracker
from kpoints.domain.entities import Transaction as TransactionEntity, TransactionDetail
from kpoints.domain.errors import (
    DailyLimitExceededError,
    DomainError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidMessageError,
    NotFoundError,
    ReceiverNotFoundError,
    SelfTransferNotAllowedError,
    SenderNotFoundError,
    ValidationError,
    daily_limit_exceeded,
    insufficient_balance,
    invalid_amount,
    message_not_text,
    message_too_long,
    receiver_not_found,
    self_transfer,
    sender_not_found,
    user_not_found,
)
from kpoints.utils.clock import LedgerClock

logger = logging.getLogger(__name__)


class LedgerService:
    """Service that moves points between users.

    A transfer never creates or destroys points: the sender is debited by
    exactly the amount the receiver is credited, so the sum of active
    balances is unchanged by every call, successful or not.
    """

    def __init__(
        self,
        db: Database,
        config: Optional[LedgerConfig] = None,
        clock: Optional[LedgerClock] = None,
    ):
        """Initialize ledger service.

        Args:
            db: Database instance
            config: Ledger configuration (defaults to reference deployment values)
            clock: Clock deciding which day a transfer counts against
        """
        self.db = db
        self.config = config or LedgerConfig()
        self.clock = clock or LedgerClock(self.config.timezone)
        self.limits = DailyLimitTracker(db, self.config, self.clock)

    def transfer(
        self,
        sender_id: str,
        receiver_id: str,
        points: int,
        message: Optional[str] = None,
    ) -> TransactionEntity:
        """Send points from one user to another.

        Checks run in this order and the first failure is raised: amount in
        range, not a self-transfer, sender active, receiver active, daily send
        cap not reached, balance sufficient. All checks and the four mutations
        (debit, credit, transaction record, daily counter) run as one
        serialized unit of work, so either everything is applied or nothing is.

        Args:
            sender_id: Sending user ID
            receiver_id: Receiving user ID
            points: Number of points (1 to 3 in the reference deployment)
            message: Optional thank-you message

        Returns:
            The recorded transaction

        Raises:
            InvalidAmountError: If points is not an integer in range
            SelfTransferNotAllowedError: If sender and receiver are the same
            SenderNotFoundError: If the sender is unknown or inactive
            ReceiverNotFoundError: If the receiver is unknown or inactive
            DailyLimitExceededError: If the sender used all of today's sends
            InsufficientBalanceError: If the sender cannot cover the points
            InvalidMessageError: If the message is not text or is too long
            StorageFailureError: If the store failed; nothing was applied
        """
        try:
            transaction = self._transfer(sender_id, receiver_id, points, message)
        except DomainError as exc:
            logger.info(
                "Rejected transfer %s -> %s (%r points): %s",
                sender_id,
                receiver_id,
                points,
                type(exc).__name__,
            )
            raise
        logger.info(
            "Transfer %d: %s -> %s, %d points",
            transaction.id,
            sender_id,
            receiver_id,
            transaction.points,
        )
        return transaction

    def _transfer(
        self, sender_id: str, receiver_id: str, points: int, message: Optional[str]
    ) -> TransactionEntity:
        if isinstance(points, bool) or not isinstance(points, int):
            raise InvalidAmountError(invalid_amount(points, self.config.min_points, self.config.max_points))
        if not self.config.min_points <= points <= self.config.max_points:
            raise InvalidAmountError(invalid_amount(points, self.config.min_points, self.config.max_points))
        if sender_id == receiver_id:
            raise SelfTransferNotAllowedError(self_transfer(sender_id))

        with self.db.atomic("transfer"):
            now = self.clock.now()
            today = self.clock.local(now).date()

            # Lock both rows in a fixed order so opposite transfers cannot deadlock
            locked = {}
            for user_id in sorted((sender_id, receiver_id)):
                locked[user_id] = self.db.get_user(user_id, for_update=True)
            sender = locked[sender_id]
            receiver = locked[receiver_id]

            if sender is None or not sender.is_active:
                raise SenderNotFoundError(sender_not_found(sender_id))
            if receiver is None or not receiver.is_active:
                raise ReceiverNotFoundError(receiver_not_found(receiver_id))
            if not self.limits.has_capacity(sender_id, today):
                raise DailyLimitExceededError(daily_limit_exceeded(sender_id, self.config.daily_send_limit))
            if sender.point_balance < points:
                raise InsufficientBalanceError(insufficient_balance(sender_id, sender.point_balance, points))
            message = self._normalize_message(message)

            self.db.adjust_balance(sender_id, -points)
            self.db.adjust_balance(receiver_id, points)
            transaction_id = self.db.create_transaction(
                sender_id=sender_id,
                receiver_id=receiver_id,
                points=points,
                message=message,
                created_at=now,
            )
            self.limits.increment(sender_id, today)
            return self.db.get_transaction(transaction_id)

    def _normalize_message(self, message: Optional[str]) -> Optional[str]:
        if message is None:
            return None
        if not isinstance(message, str):
            raise InvalidMessageError(message_not_text(message))
        message = message.strip()
        if not message:
            return None
        if len(message) > self.config.max_message_length:
            raise InvalidMessageError(message_too_long(len(message), self.config.max_message_length))
        return message

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def transaction_history(self, limit: int = 50, offset: int = 0) -> list[TransactionDetail]:
        """Page through all transactions, newest first.

        Raises:
            ValidationError: If limit < 1 or offset < 0
        """
        self._validate_page(limit, offset)
        return self.db.list_transaction_details(limit=limit, offset=offset)

    def user_transactions(self, user_id: str) -> list[TransactionDetail]:
        """All transactions a user sent or received, newest first.

        Raises:
            NotFoundError: If the user does not exist
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        return self.db.list_transaction_details(user_id=user_id)

    def recent_transactions(self, limit: int = 10) -> list[TransactionDetail]:
        """The latest transactions, newest first."""
        return self.transaction_history(limit=limit, offset=0)

    @staticmethod
    def _validate_page(limit: int, offset: int) -> None:
        if limit < 1:
            raise ValidationError(f"Limit must be at least 1, got {limit}")
        if offset < 0:
            raise ValidationError(f"Offset must not be negative, got {offset}")
