"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain services
from legendarios.domain.entities import (
    DuesPayment,
    Member,
    Transaction,
)


class Database(ABC):
    """Abstract entity store for legendarios.

    Every collection is keyed by a string id. Upserts replace the stored
    record with the same id or insert a new one; removing an unknown id is
    a no-op. Weak references (``member_id`` on payments and transactions)
    are never checked.
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

    # Member operations
    @abstractmethod
    def list_members(self) -> list[Member]:
        """List all members."""
        pass

    @abstractmethod
    def get_member(self, member_id: str) -> Optional[Member]:
        """Get member by ID."""
        pass

    @abstractmethod
    def upsert_member(self, member: Member) -> None:
        """Insert or replace a member, including children and assistance history."""
        pass

    @abstractmethod
    def remove_member(self, member_id: str) -> None:
        """Delete a member. Their payments and transactions are kept."""
        pass

    # Dues payment operations
    @abstractmethod
    def list_dues_payments(self) -> list[DuesPayment]:
        """List all dues payments."""
        pass

    @abstractmethod
    def get_dues_payment(self, payment_id: str) -> Optional[DuesPayment]:
        """Get dues payment by ID."""
        pass

    @abstractmethod
    def upsert_dues_payment(self, payment: DuesPayment) -> None:
        """Insert or replace a dues payment."""
        pass

    @abstractmethod
    def remove_dues_payment(self, payment_id: str) -> None:
        """Delete a dues payment."""
        pass

    # Transaction operations
    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List all transactions, newest first."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def upsert_transaction(self, transaction: Transaction) -> None:
        """Insert or replace a transaction."""
        pass

    @abstractmethod
    def remove_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        pass

    # Whole-store operations
    @abstractmethod
    def replace_all(
        self,
        members: Iterable[Member],
        dues_payments: Iterable[DuesPayment],
        transactions: Iterable[Transaction],
    ) -> None:
        """Replace the three collections at once.

        Either every collection is replaced or, on failure, none is.
        """
        pass
