"""Cash-book ledger: dues payments and transactions merged into one list."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from legendarios.database.base import Database
from legendarios.domain.dues import validate_amount
from legendarios.domain.entities import (
    DELETED_MEMBER_LABEL,
    DUES_CATEGORY,
    DuesPayment,
    LedgerEntry,
    Member,
    SourceKind,
    Transaction,
    TransactionType,
    month_name,
)
from legendarios.domain.errors import (
    NotFoundError,
    ValidationError,
    dues_payment_not_found,
    transaction_not_found,
)
from legendarios.domain.transaction import TransactionService
from legendarios.utils.date_parser import calendar_day

logger = logging.getLogger(__name__)


def member_name(members_by_id: dict[str, Member], member_id: Optional[str]) -> str:
    """Resolve a member's full name, falling back to the deleted-member label."""
    member = members_by_id.get(member_id) if member_id else None
    return member.full_name if member is not None else DELETED_MEMBER_LABEL


def dues_description(payment: DuesPayment, full_name: str) -> str:
    """Cash-book description of a dues payment."""
    return f"{DUES_CATEGORY} - {full_name} ({month_name(payment.month)}/{payment.year})"


def dues_to_entry(payment: DuesPayment, members_by_id: dict[str, Member]) -> LedgerEntry:
    """Project a dues payment onto a ledger entry."""
    return LedgerEntry(
        id=f"{SourceKind.DUES.value}:{payment.id}",
        date=calendar_day(payment.paid_date),
        description=dues_description(payment, member_name(members_by_id, payment.member_id)),
        category=DUES_CATEGORY,
        type=TransactionType.INCOME,
        amount=payment.amount,
        source_kind=SourceKind.DUES,
        source_id=payment.id,
    )


def transaction_to_entry(transaction: Transaction) -> LedgerEntry:
    """Project a transaction onto a ledger entry."""
    return LedgerEntry(
        id=f"{SourceKind.TRANSACTION.value}:{transaction.id}",
        date=calendar_day(transaction.date),
        description=transaction.description,
        category=transaction.category,
        type=transaction.type,
        amount=transaction.amount,
        source_kind=SourceKind.TRANSACTION,
        source_id=transaction.id,
    )


def build_ledger(
    payments: Iterable[DuesPayment],
    transactions: Iterable[Transaction],
    members: Iterable[Member],
) -> list[LedgerEntry]:
    """Merge dues payments and transactions into one ledger, newest first.

    Payments whose member no longer exists are labelled with the
    deleted-member fallback. Entries on the same day keep their input
    order, payments before transactions.
    """
    members_by_id = {member.id: member for member in members}
    entries = [dues_to_entry(payment, members_by_id) for payment in payments]
    entries.extend(transaction_to_entry(txn) for txn in transactions)
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


class LedgerService:
    """Service for reading and editing the cash book through its source records."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_ledger(self) -> list[LedgerEntry]:
        """Build the ledger from the current store contents."""
        return build_ledger(
            self.db.list_dues_payments(),
            self.db.list_transactions(),
            self.db.list_members(),
        )

    def update_entry(
        self,
        entry: LedgerEntry,
        amount: Optional[Decimal] = None,
        entry_date: Optional[date] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        type: Optional[TransactionType] = None,
    ) -> None:
        """Edit the record behind a ledger entry.

        Dues entries only accept a new amount and paid date; their
        description, category and type are derived. Transaction entries are
        updated by TransactionService.

        Raises:
            NotFoundError: If the source record no longer exists
            ValidationError: If a new value is invalid
        """
        if entry.source_kind is SourceKind.DUES:
            if description is not None or category is not None or type is not None:
                raise ValidationError("Dues entries only accept a new amount and date")
            payment = self.db.get_dues_payment(entry.source_id)
            if payment is None:
                raise NotFoundError(dues_payment_not_found(entry.source_id))
            payment = replace(
                payment,
                amount=payment.amount if amount is None else validate_amount(amount),
                paid_date=payment.paid_date if entry_date is None else entry_date,
            )
            self.db.upsert_dues_payment(payment)
            logger.info("Updated dues payment %s from cash book", payment.id)
            return

        TransactionService(self.db).update_transaction(
            entry.source_id,
            description=description,
            amount=amount,
            type=type,
            transaction_date=entry_date,
            category=category,
        )

    def delete_entry(self, entry: LedgerEntry) -> None:
        """Remove the record behind a ledger entry."""
        if entry.source_kind is SourceKind.DUES:
            if self.db.get_dues_payment(entry.source_id) is None:
                raise NotFoundError(dues_payment_not_found(entry.source_id))
            self.db.remove_dues_payment(entry.source_id)
        else:
            if self.db.get_transaction(entry.source_id) is None:
                raise NotFoundError(transaction_not_found(entry.source_id))
            self.db.remove_transaction(entry.source_id)
        logger.info("Deleted %s %s from cash book", entry.source_kind.value, entry.source_id)

    def find_entry(self, entry_id: str) -> LedgerEntry:
        """Find a ledger entry by its own id or by its source record id.

        Raises:
            NotFoundError: If no entry matches
        """
        for entry in self.get_ledger():
            if entry_id in (entry.id, entry.source_id):
                return entry
        raise NotFoundError(f"Ledger entry {entry_id} not found")
