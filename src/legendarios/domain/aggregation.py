"""Period balances over the cash-book ledger.

Every balance shown by the application (dashboard card, cash book and
monthly report) goes through ``period_totals`` so that all of them agree
to the cent.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from legendarios.domain.entities import (
    LedgerEntry,
    PeriodSummary,
    PeriodTotals,
    TransactionType,
    month_name,
)
from legendarios.utils.amount_parser import to_money
from legendarios.utils.date_parser import calendar_day, month_start

ZERO = Decimal("0.00")


def signed_amount(entry: LedgerEntry) -> Decimal:
    """Amount with expenses negated."""
    return entry.amount if entry.type is TransactionType.INCOME else -entry.amount


def in_period(entry: LedgerEntry, month: int, year: int) -> bool:
    """Whether an entry's calendar day falls in the given month."""
    day = calendar_day(entry.date)
    return day.year == year and day.month == month


def period_totals(entries: Iterable[LedgerEntry]) -> PeriodTotals:
    """Sum income and expense over entries and return their difference."""
    income = ZERO
    expense = ZERO
    for entry in entries:
        if entry.type is TransactionType.INCOME:
            income += entry.amount
        else:
            expense += entry.amount
    income = to_money(income)
    expense = to_money(expense)
    return PeriodTotals(income=income, expense=expense, balance=income - expense)


def summarize_period(entries: Sequence[LedgerEntry], month: int, year: int) -> PeriodSummary:
    """Balances for a month given every ledger entry ever recorded.

    Entries dated before the first day of the month make up the prior
    balance; entries inside the month make up period income and expense;
    entries after the month are ignored.

    The month is assumed valid; check user input with
    ``errors.validate_period`` first.
    """
    start = month_start(month, year)
    prior = ZERO
    current: list[LedgerEntry] = []

    for entry in entries:
        day = calendar_day(entry.date)
        if day < start:
            prior += signed_amount(entry)
        elif day.year == year and day.month == month:
            current.append(entry)

    totals = period_totals(current)
    prior = to_money(prior)
    return PeriodSummary(
        month=month,
        year=year,
        month_label=month_name(month),
        prior_balance=prior,
        period_income=totals.income,
        period_expense=totals.expense,
        period_balance=prior + totals.income - totals.expense,
    )


def summarize_as_of(entries: Sequence[LedgerEntry], reference_date: Optional[date] = None) -> PeriodSummary:
    """Balances for the month containing ``reference_date`` (default: today)."""
    reference = calendar_day(reference_date) if reference_date is not None else date.today()
    return summarize_period(entries, reference.month, reference.year)


def cash_totals(entries: Iterable[LedgerEntry]) -> PeriodTotals:
    """All-time income, expense and balance of the cash book."""
    return period_totals(entries)
