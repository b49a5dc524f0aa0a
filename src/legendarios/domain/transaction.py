"""Transaction domain service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from legendarios.database.base import Database
from legendarios.domain.dues import validate_amount
from legendarios.domain.entities import (
    DEFAULT_TRANSACTION_CATEGORY,
    Transaction as TransactionEntity,
    TransactionType,
)
from legendarios.domain.errors import NotFoundError, ValidationError, transaction_not_found
from legendarios.domain.member import new_id

logger = logging.getLogger(__name__)


def coerce_type(type: TransactionType | str) -> TransactionType:
    """Accept a TransactionType or its string value."""
    try:
        return TransactionType(type)
    except ValueError:
        raise ValidationError(f"Invalid transaction type '{type}'. Expected income or expense")


class TransactionService:
    """Service for managing manual cash-book transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        description: str,
        amount: Decimal,
        type: TransactionType | str,
        transaction_date: Optional[date] = None,
        category: Optional[str] = None,
        member_id: Optional[str] = None,
    ) -> TransactionEntity:
        """Create a transaction.

        Args:
            description: What the money was for
            amount: Non-negative amount
            type: income or expense
            transaction_date: Transaction date (defaults to today)
            category: Free-text category (defaults to "Geral")
            member_id: Optional link to a member

        Returns:
            The stored transaction

        Raises:
            ValidationError: If description is empty, amount negative or type unknown
        """
        if not description or not description.strip():
            raise ValidationError("Description is required")

        transaction = TransactionEntity(
            id=new_id(),
            description=description.strip(),
            amount=validate_amount(amount),
            type=coerce_type(type),
            date=transaction_date or date.today(),
            category=(category or "").strip() or DEFAULT_TRANSACTION_CATEGORY,
            member_id=member_id,
        )
        self.db.upsert_transaction(transaction)
        logger.info(
            "Created %s transaction %s (%s)", transaction.type.value, transaction.id, transaction.amount
        )
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: str) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType | str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with optional filters, newest first."""
        wanted = coerce_type(type) if type else None
        return [
            txn
            for txn in self.db.list_transactions()
            if (start_date is None or txn.date >= start_date)
            and (end_date is None or txn.date <= end_date)
            and (wanted is None or txn.type is wanted)
        ]

    def update_transaction(
        self,
        transaction_id: str,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        type: Optional[TransactionType | str] = None,
        transaction_date: Optional[date] = None,
        category: Optional[str] = None,
    ) -> TransactionEntity:
        """Update transaction fields. None leaves a field unchanged.

        Raises:
            NotFoundError: If transaction not found
            ValidationError: If a new value is invalid
        """
        transaction = self.require_transaction(transaction_id)
        if description is not None:
            if not description.strip():
                raise ValidationError("Description is required")
            transaction = replace(transaction, description=description.strip())
        if amount is not None:
            transaction = replace(transaction, amount=validate_amount(amount))
        if type is not None:
            transaction = replace(transaction, type=coerce_type(type))
        if transaction_date is not None:
            transaction = replace(transaction, date=transaction_date)
        if category is not None:
            transaction = replace(
                transaction, category=category.strip() or DEFAULT_TRANSACTION_CATEGORY
            )
        self.db.upsert_transaction(transaction)
        logger.info("Updated transaction %s", transaction.id)
        return transaction

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction not found
        """
        self.require_transaction(transaction_id)
        self.db.remove_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)
