"""Tests for the dashboard, report and network commands."""

import csv
import pytest
from datetime import date
from decimal import Decimal

from legendarios.cli.main import cli
from legendarios.domain.entities import Census


@pytest.fixture
def february_books(member_service, dues_service, transaction_service):
    """January dues, February income and expense."""
    member = member_service.create_member(legendary_number="1", full_name="Ana Paying")
    dues_service.record_payment(member.id, 1, 2024, paid_date=date(2024, 1, 15))
    transaction_service.create_transaction(
        "Doação", Decimal("100.00"), "income", transaction_date=date(2024, 2, 1)
    )
    transaction_service.create_transaction(
        "Aluguel", Decimal("30.00"), "expense", transaction_date=date(2024, 2, 10)
    )
    return member


class TestFinanceService:
    """Tests for FinanceService."""

    def test_dashboard(self, finance_service, february_books):
        summary = finance_service.dashboard(date(2024, 2, 20))

        assert summary.prior_balance == Decimal("50.00")
        assert summary.period_income == Decimal("100.00")
        assert summary.period_expense == Decimal("30.00")
        assert summary.period_balance == Decimal("120.00")

    def test_report_matches_dashboard(self, finance_service, february_books):
        summary = finance_service.period_summary(2, 2024)
        report = finance_service.report(2, 2024)

        assert report.totals.income == summary.period_income
        assert report.totals.expense == summary.period_expense
        assert [e.description for e in report.entries] == ["Aluguel", "Doação"]

    def test_cash_totals(self, finance_service, february_books):
        totals = finance_service.cash_totals()

        assert totals.balance == Decimal("120.00")

    def test_birthdays(self, finance_service, sample_member):
        assert [m.id for m in finance_service.birthdays(3)] == [sample_member.id]
        assert finance_service.birthdays(4) == []

    def test_census(self, finance_service, sample_members, member_service):
        member_service.add_assistance(sample_members["paying"].id, "Cesta básica")

        assert finance_service.census() == Census(paying=1, exempt=1, inactive=1, being_helped=1)


class TestDashboardCommand:
    """Tests for the dashboard command."""

    def test_dashboard_output(self, cli_runner, temp_db, february_books):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "dashboard", "--date", "2024-02-20"]
        )

        assert result.exit_code == 0
        assert "Fevereiro de 2024" in result.output
        assert "R$ 50,00" in result.output
        assert "R$ 100,00" in result.output
        assert "R$ 30,00" in result.output
        assert "R$ 120,00" in result.output
        assert "Paying" in result.output
        assert "Nenhum aniversariante este mês." in result.output

    def test_dashboard_lists_birthdays(self, cli_runner, temp_db, sample_member, member_service):
        member_service.create_member(
            legendary_number="2",
            full_name="Pedro Souza",
            birth_date=date(1979, 3, 2),
            phone="81 9999-0000",
        )
        member_service.create_member(
            legendary_number="3", full_name="Rui Lima", birth_date=date(1985, 7, 2)
        )

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "dashboard", "--date", "2024-03-15"]
        )

        assert result.exit_code == 0
        assert "Aniversariantes do mês" in result.output
        assert "02/03  #2 Pedro Souza  81 9999-0000" in result.output
        assert "12/03  #1024 João da Silva" in result.output
        assert result.output.index("Pedro Souza") < result.output.index("João da Silva")
        assert "Rui Lima" not in result.output

    def test_dashboard_invalid_date(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "dashboard", "--date", "someday"]
        )

        assert result.exit_code == 1
        assert "Invalid date" in result.output


class TestReportCommand:
    """Tests for the report command."""

    def test_report_preview(self, cli_runner, temp_db, february_books):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "report", "--month", "2", "--year", "2024"]
        )

        assert result.exit_code == 0
        assert "Relatório financeiro - Fevereiro/2024" in result.output
        assert "Aluguel" in result.output
        assert "Doação" in result.output
        assert "Mensalidade" not in result.output
        assert "R$ 70,00" in result.output

    def test_report_csv(self, cli_runner, temp_db, february_books, tmp_path):
        path = tmp_path / "report.csv"

        result = cli_runner.invoke(
            cli,
            [
                "--db-path",
                temp_db.database_path,
                "report",
                "--month",
                "2",
                "--year",
                "2024",
                "--csv",
                str(path),
            ],
        )

        assert result.exit_code == 0
        assert "Wrote 2 entries" in result.output
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["Data", "Descrição", "Categoria", "Tipo", "Valor"]
        assert rows[1] == ["2024-02-10", "Aluguel", "Geral", "Saída", "30,00"]

    def test_report_empty_period(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "report", "--month", "6", "--year", "2024"]
        )

        assert result.exit_code == 0
        assert "No entries in this period." in result.output

    def test_report_invalid_month(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "report", "--month", "0", "--year", "2024"]
        )

        assert result.exit_code == 1
        assert "Invalid month 0" in result.output

    def test_last_month_conflicts_with_month(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "report", "--last-month", "--month", "2"],
        )

        assert result.exit_code == 1
        assert "cannot be combined" in result.output


class TestNetworkCommands:
    """Tests for network commands."""

    def test_professions(self, cli_runner, temp_db, member_service):
        member_service.create_member(legendary_number="1", full_name="A", profession="Médico")
        member_service.create_member(legendary_number="2", full_name="B", profession="Médico")
        member_service.create_member(legendary_number="3", full_name="C", profession="Pedreiro")

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "network", "professions"]
        )

        assert result.exit_code == 0
        assert result.output.index("Médico") < result.output.index("Pedreiro")

    def test_assistance(self, cli_runner, temp_db, member_service, sample_member):
        member_service.add_assistance(sample_member.id, "Cesta básica", start_date=date(2024, 1, 1))

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "network", "assistance"]
        )

        assert result.exit_code == 0
        assert "Assistance records: 1 (1 ongoing)" in result.output
        assert "* João da Silva (Nº 1024)" in result.output
        assert "Cesta básica (2024-01-01 - ongoing)" in result.output
