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


class MalformedSnapshotError(DomainError):
    """Backup data is missing required collections or holds unreadable records."""


class InvalidPeriodError(ValidationError):
    """Month outside 1-12 passed where a calendar period is expected."""


def member_not_found(member_id: str) -> str:
    """Return message for missing member."""
    return f"Member {member_id} not found"


def legendary_number_not_found(legendary_number: str) -> str:
    """Return message for missing member by legendary number."""
    return f"No member with legendary number '{legendary_number}'"


def duplicate_legendary_number(legendary_number: str) -> str:
    """Return message for a legendary number already in use."""
    return f"Legendary number '{legendary_number}' is already in use"


def dues_payment_not_found(payment_id: str) -> str:
    """Return message for missing dues payment."""
    return f"Dues payment {payment_id} not found"


def duplicate_dues_payment(member_id: str, month: int, year: int) -> str:
    """Return message when a member already paid a given month."""
    return f"Member {member_id} already has dues recorded for {month:02d}/{year}"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def assistance_not_found(record_id: str) -> str:
    """Return message for missing assistance record."""
    return f"Assistance record {record_id} not found"


def invalid_month(month: int) -> str:
    """Return message for a month outside the calendar."""
    return f"Invalid month {month}: expected a value between 1 and 12"


def validate_period(month: int, year: int) -> tuple[int, int]:
    """Check a (month, year) pair at an input boundary.

    Raises:
        InvalidPeriodError: If month is not an integer between 1 and 12
    """
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise InvalidPeriodError(invalid_month(month))
    if not isinstance(year, int) or isinstance(year, bool) or year < 1:
        raise InvalidPeriodError(f"Invalid year {year}")
    return month, year
