"""Shared pytest fixtures for legendarios tests."""

import logging
import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from legendarios.database.factories import create_sqlite_database
from legendarios.domain.backup import BackupService
from legendarios.domain.dues import DuesService
from legendarios.domain.entities import (
    LedgerEntry,
    SourceKind,
    TransactionType,
)
from legendarios.domain.finance import FinanceService
from legendarios.domain.ledger import LedgerService
from legendarios.domain.member import MemberService
from legendarios.domain.transaction import TransactionService


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop CLI log handlers bound to a CliRunner stream that is now closed."""
    yield
    logger = logging.getLogger("legendarios")
    for handler in [h for h in logger.handlers if getattr(h, "_legendarios", False)]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

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
def member_service(temp_db):
    """Create a MemberService with a temporary database."""
    return MemberService(temp_db)


@pytest.fixture
def dues_service(temp_db):
    """Create a DuesService with a temporary database."""
    return DuesService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def finance_service(temp_db):
    """Create a FinanceService with a temporary database."""
    return FinanceService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def sample_member(member_service):
    """Create a paying member."""
    return member_service.create_member(
        legendary_number="1024",
        full_name="João da Silva",
        city="Recife",
        neighborhood="Boa Viagem",
        profession="Advogado",
        birth_date=date(1980, 3, 12),
    )


@pytest.fixture
def sample_members(member_service):
    """Create one member of each status."""
    return {
        "paying": member_service.create_member(
            legendary_number="1", full_name="Ana Paying", profession="Médico"
        ),
        "exempt": member_service.create_member(
            legendary_number="2", full_name="Bruno Exempt", status="active_exempt"
        ),
        "inactive": member_service.create_member(
            legendary_number="3",
            full_name="Carlos Inactive",
            status="inactive",
            inactive_reason="Mudou de cidade",
        ),
    }


@pytest.fixture
def make_entry():
    """Build ledger entries directly, without a database."""

    def _make(entry_date, amount, type=TransactionType.INCOME, description="Entry", entry_id=None):
        entry_id = entry_id or f"{description}-{entry_date}"
        return LedgerEntry(
            id=f"transaction:{entry_id}",
            date=entry_date,
            description=description,
            category="Geral",
            type=type,
            amount=Decimal(amount),
            source_kind=SourceKind.TRANSACTION,
            source_id=entry_id,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
