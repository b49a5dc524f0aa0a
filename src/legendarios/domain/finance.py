"""Dashboard and report domain service."""

from datetime import date
from typing import Optional

from legendarios.database.base import Database
from legendarios.domain.aggregation import cash_totals, summarize_as_of, summarize_period
from legendarios.domain.census import birthdays_in_month, census
from legendarios.domain.entities import (
    Census,
    FinancialReport,
    LedgerEntry,
    Member,
    PeriodSummary,
    PeriodTotals,
)
from legendarios.domain.ledger import LedgerService
from legendarios.domain.report import report_for_period


class FinanceService:
    """Read-only views over the cash book and member roll."""

    def __init__(self, db: Database):
        """Initialize finance service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger_service = LedgerService(db)

    def ledger(self) -> list[LedgerEntry]:
        """Current cash book, newest first."""
        return self.ledger_service.get_ledger()

    def dashboard(self, reference_date: Optional[date] = None) -> PeriodSummary:
        """Balances for the month of ``reference_date`` (default: today)."""
        return summarize_as_of(self.ledger(), reference_date)

    def period_summary(self, month: int, year: int) -> PeriodSummary:
        """Balances for an explicit month."""
        return summarize_period(self.ledger(), month, year)

    def report(self, month: int, year: int) -> FinancialReport:
        """Monthly report for preview or export."""
        return report_for_period(self.ledger(), month, year)

    def cash_totals(self) -> PeriodTotals:
        """All-time totals of the cash book."""
        return cash_totals(self.ledger())

    def census(self) -> Census:
        """Member head counts."""
        return census(self.db.list_members())

    def birthdays(self, month: int) -> list[Member]:
        """Members with a birthday in the given month."""
        return birthdays_in_month(self.db.list_members(), month)
