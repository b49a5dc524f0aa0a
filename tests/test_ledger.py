"""Tests for the merged cash-book ledger."""

import pytest
from datetime import date
from decimal import Decimal

from legendarios.domain.entities import (
    DELETED_MEMBER_LABEL,
    DuesPayment,
    Member,
    SourceKind,
    Transaction,
    TransactionType,
)
from legendarios.domain.errors import NotFoundError, ValidationError
from legendarios.domain.ledger import build_ledger


def _payment(id, member_id, day, month=None, amount="50.00"):
    return DuesPayment(
        id=id,
        member_id=member_id,
        month=month or day.month,
        year=day.year,
        amount=Decimal(amount),
        paid_date=day,
    )


def _transaction(id, day, type=TransactionType.INCOME, amount="10.00"):
    return Transaction(
        id=id, description=f"Txn {id}", amount=Decimal(amount), type=type, date=day
    )


class TestBuildLedger:
    """Tests for build_ledger."""

    def test_dues_entry_fields(self):
        """Dues become income entries in the dues category."""
        member = Member(id="m1", legendary_number="7", full_name="Pedro Souza")
        entries = build_ledger([_payment("p1", "m1", date(2024, 3, 5))], [], [member])

        assert len(entries) == 1
        entry = entries[0]
        assert entry.id == "dues:p1"
        assert entry.source_kind is SourceKind.DUES
        assert entry.source_id == "p1"
        assert entry.type is TransactionType.INCOME
        assert entry.category == "Mensalidade"
        assert entry.description == "Mensalidade - Pedro Souza (Março/2024)"
        assert entry.amount == Decimal("50.00")

    def test_transaction_entry_fields(self):
        """Transactions keep their own description, category and type."""
        txn = Transaction(
            id="t1",
            description="Aluguel",
            amount=Decimal("300.00"),
            type=TransactionType.EXPENSE,
            date=date(2024, 3, 2),
            category="Sede",
        )
        entry = build_ledger([], [txn], [])[0]

        assert entry.id == "transaction:t1"
        assert entry.source_kind is SourceKind.TRANSACTION
        assert entry.description == "Aluguel"
        assert entry.category == "Sede"
        assert entry.type is TransactionType.EXPENSE

    def test_missing_member_uses_fallback_label(self):
        """A payment of a deleted member still appears, with a fallback name."""
        entries = build_ledger([_payment("p1", "gone", date(2024, 1, 10))], [], [])

        assert DELETED_MEMBER_LABEL in entries[0].description

    def test_sorted_newest_first(self):
        """Entries come out by date, newest first."""
        entries = build_ledger(
            [_payment("p1", "m1", date(2024, 1, 10))],
            [_transaction("t1", date(2024, 3, 1)), _transaction("t2", date(2024, 2, 1))],
            [],
        )

        assert [e.source_id for e in entries] == ["t1", "t2", "p1"]

    def test_same_day_keeps_input_order(self):
        """Ties keep payments before transactions, each in input order."""
        day = date(2024, 4, 1)
        entries = build_ledger(
            [_payment("p1", "m1", day), _payment("p2", "m2", day, month=3)],
            [_transaction("t1", day), _transaction("t2", day)],
            [],
        )

        assert [e.source_id for e in entries] == ["p1", "p2", "t1", "t2"]

    def test_ids_are_unique_across_sources(self):
        """A payment and a transaction sharing an id still get distinct entry ids."""
        entries = build_ledger(
            [_payment("x", "m1", date(2024, 1, 1))], [_transaction("x", date(2024, 1, 1))], []
        )

        assert len({e.id for e in entries}) == 2

    def test_empty(self):
        """No records, no entries."""
        assert build_ledger([], [], []) == []

    def test_one_entry_per_record_newest_first(self):
        """Every record yields one entry and dates never increase."""
        payments = [_payment(f"p{i}", "m1", date(2024, i, 3 * i)) for i in range(1, 8)]
        transactions = [_transaction(f"t{i}", date(2024, 8 - i, i)) for i in range(1, 6)]

        entries = build_ledger(payments, transactions, [])

        assert len(entries) == len(payments) + len(transactions)
        assert all(a.date >= b.date for a, b in zip(entries, entries[1:]))


class TestLedgerService:
    """Tests for editing through the ledger."""

    def test_get_ledger_reads_store(self, ledger_service, dues_service, transaction_service, sample_member):
        """The service builds the ledger from stored records."""
        dues_service.record_payment(sample_member.id, 1, 2024, paid_date=date(2024, 1, 5))
        transaction_service.create_transaction(
            "Doação", Decimal("20.00"), "income", transaction_date=date(2024, 1, 6)
        )

        entries = ledger_service.get_ledger()

        assert [e.source_kind for e in entries] == [SourceKind.TRANSACTION, SourceKind.DUES]
        assert "João da Silva" in entries[1].description

    def test_deleted_member_keeps_dues_in_ledger(
        self, ledger_service, dues_service, member_service, sample_member
    ):
        """Deleting a member leaves their dues, relabelled."""
        dues_service.record_payment(sample_member.id, 2, 2024, paid_date=date(2024, 2, 5))
        member_service.delete_member(sample_member.id)

        entries = ledger_service.get_ledger()

        assert len(entries) == 1
        assert DELETED_MEMBER_LABEL in entries[0].description

    def test_update_dues_entry(self, ledger_service, dues_service, sample_member):
        """Dues entries take a new amount and date."""
        payment = dues_service.record_payment(sample_member.id, 1, 2024, paid_date=date(2024, 1, 5))
        entry = ledger_service.find_entry(payment.id)

        ledger_service.update_entry(entry, amount=Decimal("60"), entry_date=date(2024, 1, 9))

        updated = dues_service.require_payment(payment.id)
        assert updated.amount == Decimal("60.00")
        assert updated.paid_date == date(2024, 1, 9)
        assert updated.month == 1

    def test_update_transaction_entry(self, ledger_service, transaction_service):
        """Transaction entries accept every field."""
        txn = transaction_service.create_transaction(
            "Compra", Decimal("15.00"), "expense", transaction_date=date(2024, 5, 1)
        )
        entry = ledger_service.find_entry(f"transaction:{txn.id}")

        ledger_service.update_entry(
            entry,
            description="Reembolso",
            category="Eventos",
            type=TransactionType.INCOME,
        )

        updated = transaction_service.require_transaction(txn.id)
        assert updated.description == "Reembolso"
        assert updated.category == "Eventos"
        assert updated.type is TransactionType.INCOME
        assert updated.amount == Decimal("15.00")

    def test_update_transaction_entry_applies_transaction_rules(
        self, ledger_service, transaction_service
    ):
        """Blank descriptions are refused and an empty category becomes Geral."""
        txn = transaction_service.create_transaction(
            "Compra", Decimal("15.00"), "expense", category="Sede"
        )
        entry = ledger_service.find_entry(txn.id)

        with pytest.raises(ValidationError, match="Description is required"):
            ledger_service.update_entry(entry, description="  ")

        ledger_service.update_entry(entry, description="  Lanche  ", category="")

        updated = transaction_service.require_transaction(txn.id)
        assert updated.description == "Lanche"
        assert updated.category == "Geral"

    def test_update_dues_entry_rejects_transaction_fields(
        self, ledger_service, dues_service, sample_member
    ):
        payment = dues_service.record_payment(sample_member.id, 1, 2024)
        entry = ledger_service.find_entry(payment.id)

        with pytest.raises(ValidationError):
            ledger_service.update_entry(entry, category="")

    def test_update_rejects_nan_amount(self, ledger_service, dues_service, sample_member):
        payment = dues_service.record_payment(sample_member.id, 1, 2024)
        entry = ledger_service.find_entry(payment.id)

        with pytest.raises(ValidationError):
            ledger_service.update_entry(entry, amount=Decimal("NaN"))

    def test_update_rejects_negative_amount(self, ledger_service, transaction_service):
        """Negative amounts are refused."""
        txn = transaction_service.create_transaction("Compra", Decimal("15.00"), "expense")
        entry = ledger_service.find_entry(txn.id)

        with pytest.raises(ValidationError):
            ledger_service.update_entry(entry, amount=Decimal("-1"))

    def test_delete_entry_removes_source(self, ledger_service, dues_service, sample_member):
        """Deleting an entry removes the record behind it."""
        payment = dues_service.record_payment(sample_member.id, 1, 2024)
        entry = ledger_service.find_entry(payment.id)

        ledger_service.delete_entry(entry)

        assert ledger_service.get_ledger() == []
        with pytest.raises(NotFoundError):
            ledger_service.delete_entry(entry)

    def test_find_entry_unknown(self, ledger_service):
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            ledger_service.find_entry("nope")
