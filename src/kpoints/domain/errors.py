"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class LimitError(DomainError):
    """Operation refused because a ledger limit would be crossed."""


class PermissionDeniedError(DomainError):
    """Caller lacks the capability required for the operation."""


class StorageFailureError(DomainError):
    """The storage layer failed and the unit of work was rolled back."""


class InvalidAmountError(ValidationError):
    """Transfer amount outside the allowed point range."""


class SelfTransferNotAllowedError(ValidationError):
    """Sender and receiver are the same user."""


class InvalidMessageError(ValidationError):
    """Transfer message is too long."""


class SenderNotFoundError(NotFoundError):
    """Sender is unknown or inactive."""


class ReceiverNotFoundError(NotFoundError):
    """Receiver is unknown or inactive."""


class DailyLimitExceededError(LimitError):
    """Sender already used every send allowed for today."""


class InsufficientBalanceError(LimitError):
    """Sender balance is lower than the requested points."""


def invalid_amount(points: object, min_points: int, max_points: int) -> str:
    """Return message for an out-of-range transfer amount."""
    return f"Points must be an integer between {min_points} and {max_points}, got {points!r}"


def self_transfer(user_id: str) -> str:
    """Return message for a transfer to oneself."""
    return f"User '{user_id}' cannot send points to themselves"


def message_too_long(length: int, max_length: int) -> str:
    """Return message for an oversized transfer message."""
    return f"Message is {length} characters long; the maximum is {max_length}"


def message_not_text(message: object) -> str:
    """Return message for a transfer message that is not a string."""
    return f"Message must be text, got {type(message).__name__}"


def sender_not_found(user_id: str) -> str:
    """Return message for a missing or inactive sender."""
    return f"Sender '{user_id}' not found"


def receiver_not_found(user_id: str) -> str:
    """Return message for a missing or inactive receiver."""
    return f"Receiver '{user_id}' not found"


def user_not_found(user_id: str) -> str:
    """Return message for missing user."""
    return f"User '{user_id}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def daily_limit_exceeded(user_id: str, limit: int) -> str:
    """Return message when the daily send cap is reached."""
    return f"User '{user_id}' already sent points {limit} time{'s' if limit != 1 else ''} today"


def insufficient_balance(user_id: str, balance: int, points: int) -> str:
    """Return message when the sender cannot cover the transfer."""
    return (
        f"Insufficient points: user '{user_id}' has {balance} "
        f"point{'s' if balance != 1 else ''}, tried to send {points}"
    )


def duplicate_department(name: str) -> str:
    """Return message for duplicate department name."""
    return f"Department '{name}' already exists"


def admin_required(user_id: str) -> str:
    """Return message when a non-admin invokes an admin operation."""
    return f"Admin access required: user '{user_id}' is not an active admin"


def storage_failure(operation: str) -> str:
    """Return message when a unit of work was rolled back."""
    return f"Storage failure during {operation}; no changes were applied"
