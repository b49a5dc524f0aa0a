"""Monthly financial report rows for on-screen preview and exports."""

import csv
from typing import Sequence, TextIO

from legendarios.domain.aggregation import in_period, period_totals
from legendarios.domain.entities import FinancialReport, LedgerEntry, ReportRow, month_name
from legendarios.utils.amount_parser import format_decimal_comma

CSV_HEADERS = ("Data", "Descrição", "Categoria", "Tipo", "Valor")


def report_for_period(ledger: Sequence[LedgerEntry], month: int, year: int) -> FinancialReport:
    """Ledger entries of one month, in ledger order, with their totals.

    The totals come from the same routine the dashboard uses, so a preview
    and an exported document always show the same numbers.
    """
    entries = tuple(entry for entry in ledger if in_period(entry, month, year))
    return FinancialReport(
        month=month,
        year=year,
        month_label=month_name(month),
        entries=entries,
        totals=period_totals(entries),
    )


def report_rows(report: FinancialReport) -> list[ReportRow]:
    """Flatten report entries into display strings for exporters."""
    return [
        ReportRow(
            date=entry.date.isoformat(),
            description=entry.description,
            category=entry.category,
            type_label=entry.type.label,
            amount=format_decimal_comma(entry.amount),
        )
        for entry in report.entries
    ]


def report_filename(report: FinancialReport) -> str:
    """Default export file name for a report."""
    return f"financeiro_legendarios_{report.month}_{report.year}.csv"


def write_report_csv(report: FinancialReport, stream: TextIO) -> int:
    """Write report rows as CSV. Returns the number of data rows written."""
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADERS)
    rows = report_rows(report)
    for row in rows:
        writer.writerow([row.date, row.description, row.category, row.type_label, row.amount])
    return len(rows)
