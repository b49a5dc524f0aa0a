"""Tests for backup export and restore."""

import json
import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from legendarios.cli.main import cli
from legendarios.domain.entities import Child, MemberStatus, TransactionType
from legendarios.domain.errors import MalformedSnapshotError
from legendarios.domain.snapshot import SNAPSHOT_VERSION, snapshot_from_dict


def _member_dict(id="m1", number="1", name="Ana", **extra):
    data = {"id": id, "legendaryNumber": number, "fullName": name, "status": "active_paying"}
    data.update(extra)
    return data


def _payment_dict(id="p1", member_id="m1", month=3, year=2024, amount=50, paid="2024-03-05"):
    return {
        "id": id,
        "memberId": member_id,
        "month": month,
        "year": year,
        "amount": amount,
        "paidDate": paid,
    }


@pytest.fixture
def populated(member_service, dues_service, transaction_service):
    """A store with one member, one payment and one transaction."""
    member = member_service.create_member(
        legendary_number="1024",
        full_name="João da Silva",
        status="inactive",
        inactive_reason="Mudou de cidade",
        children=(Child("Maria", "7"),),
        birth_date=date(1980, 3, 12),
    )
    member_service.add_assistance(member.id, "Cesta básica", start_date=date(2024, 1, 1))
    dues_service.record_payment(member.id, 3, 2024, paid_date=date(2024, 3, 5))
    transaction_service.create_transaction(
        "Aluguel", Decimal("300"), "expense", transaction_date=date(2024, 3, 1), member_id=member.id
    )
    return member


class TestExport:
    """Tests for export_snapshot."""

    def test_export_document_shape(self, backup_service, populated):
        document = backup_service.export_snapshot(exported_at=datetime(2024, 4, 1, 12, 0, tzinfo=UTC))

        assert set(document) == {"members", "duesPayments", "transactions", "exportedAt", "version"}
        assert document["version"] == SNAPSHOT_VERSION
        assert document["exportedAt"] == "2024-04-01T12:00:00+00:00"

        member = document["members"][0]
        assert member["legendaryNumber"] == "1024"
        assert member["fullName"] == "João da Silva"
        assert member["status"] == "inactive"
        assert member["inactiveReason"] == "Mudou de cidade"
        assert member["birthDate"] == "1980-03-12"
        assert member["children"] == [{"name": "Maria", "age": "7"}]
        assert member["assistanceHistory"][0]["endDate"] is None

        payment = document["duesPayments"][0]
        assert payment["memberId"] == populated.id
        assert payment["amount"] == 50.0
        assert payment["paidDate"] == "2024-03-05"

        txn = document["transactions"][0]
        assert txn["type"] == "expense"
        assert txn["memberId"] == populated.id

    def test_export_is_json_serializable(self, backup_service, populated):
        assert json.loads(json.dumps(backup_service.export_snapshot()))

    def test_export_then_restore_preserves_store(self, backup_service, populated, temp_db):
        before = backup_service.take_snapshot()
        document = json.loads(json.dumps(backup_service.export_snapshot()))

        backup_service.restore(document)

        assert backup_service.take_snapshot() == before


class TestRestore:
    """Tests for restore and snapshot parsing."""

    def test_restore_replaces_everything(self, backup_service, populated, member_service):
        document = {
            "members": [_member_dict()],
            "duesPayments": [_payment_dict()],
            "transactions": [],
        }

        assert backup_service.restore_snapshot(document) is True

        members = member_service.list_members()
        assert [m.full_name for m in members] == ["Ana"]
        assert len(backup_service.take_snapshot().dues_payments) == 1
        assert backup_service.take_snapshot().transactions == ()

    def test_missing_members_rejected_store_untouched(self, backup_service, populated):
        before = backup_service.take_snapshot()

        assert backup_service.restore_snapshot({"duesPayments": []}) is False

        assert backup_service.take_snapshot() == before

    def test_missing_payments_rejected(self, backup_service, populated):
        before = backup_service.take_snapshot()

        with pytest.raises(MalformedSnapshotError):
            backup_service.restore({"members": [], "transactions": []})

        assert backup_service.take_snapshot() == before

    def test_unreadable_record_rejected(self, backup_service, populated):
        before = backup_service.take_snapshot()
        document = {"members": [{"fullName": "No id"}], "duesPayments": []}

        assert backup_service.restore_snapshot(document) is False
        assert backup_service.take_snapshot() == before

    @pytest.mark.parametrize("document", [None, [], "backup", 3])
    def test_non_object_rejected(self, document):
        with pytest.raises(MalformedSnapshotError):
            snapshot_from_dict(document)

    def test_legacy_payments_key(self):
        snapshot = snapshot_from_dict({"members": [_member_dict()], "payments": [_payment_dict()]})

        assert len(snapshot.dues_payments) == 1
        assert snapshot.dues_payments[0].amount == Decimal("50.00")

    def test_transactions_default_to_empty(self):
        snapshot = snapshot_from_dict({"members": [], "duesPayments": []})

        assert snapshot.transactions == ()

    def test_negative_amount_rejected(self):
        with pytest.raises(MalformedSnapshotError):
            snapshot_from_dict({"members": [], "duesPayments": [_payment_dict(amount=-1)]})

    def test_invalid_month_rejected(self):
        with pytest.raises(MalformedSnapshotError):
            snapshot_from_dict({"members": [], "duesPayments": [_payment_dict(month=13)]})

    def test_duplicate_ids_keep_last(self):
        snapshot = snapshot_from_dict(
            {
                "members": [_member_dict(name="Old"), _member_dict(name="New")],
                "duesPayments": [],
            }
        )

        assert [m.full_name for m in snapshot.members] == ["New"]

    def test_optional_member_fields(self):
        """Missing optional fields fall back to defaults."""
        member = snapshot_from_dict(
            {"members": [{"id": "m1", "legendaryNumber": "1", "fullName": "Ana"}], "duesPayments": []}
        ).members[0]

        assert member.status is MemberStatus.ACTIVE_PAYING
        assert member.city == ""
        assert member.email is None
        assert member.children == ()
        assert member.is_community_active is False

    @pytest.mark.parametrize("value,expected", [(True, True), ("false", False), ("TRUE", True)])
    def test_community_flag_reads_booleans(self, value, expected):
        member = snapshot_from_dict(
            {"members": [_member_dict(isCommunityActive=value)], "duesPayments": []}
        ).members[0]

        assert member.is_community_active is expected

    def test_community_flag_rejects_other_values(self):
        with pytest.raises(MalformedSnapshotError):
            snapshot_from_dict({"members": [_member_dict(isCommunityActive="sim")], "duesPayments": []})

    @pytest.mark.parametrize("amount", ["NaN", "Infinity"])
    def test_non_finite_amount_rejected(self, amount):
        with pytest.raises(MalformedSnapshotError):
            snapshot_from_dict({"members": [], "duesPayments": [_payment_dict(amount=amount)]})

    def test_offset_timestamps_keep_their_day(self):
        snapshot = snapshot_from_dict(
            {
                "members": [],
                "duesPayments": [],
                "transactions": [
                    {
                        "id": "t1",
                        "description": "Doação",
                        "amount": 10,
                        "type": "income",
                        "date": "2024-03-31T23:00:00-03:00",
                    }
                ],
            }
        )

        txn = snapshot.transactions[0]
        assert txn.date == date(2024, 3, 31)
        assert txn.type is TransactionType.INCOME
        assert txn.category == "Geral"


class TestBackupCommands:
    """Tests for backup CLI commands."""

    def test_export_and_restore(self, cli_runner, temp_db, populated, tmp_path):
        path = tmp_path / "backup.json"

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "backup", "export", str(path)]
        )

        assert result.exit_code == 0
        assert "Exported 1 members, 1 dues payments and 1 transactions" in result.output
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["members"][0]["fullName"] == "João da Silva"

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "backup", "restore", str(path), "--yes"]
        )

        assert result.exit_code == 0
        assert "Restored backup" in result.output

    def test_restore_invalid_backup(self, cli_runner, temp_db, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"members": []}), encoding="utf-8")

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "backup", "restore", str(path), "--yes"]
        )

        assert result.exit_code == 1
        assert "Invalid backup file" in result.output

    def test_restore_not_json(self, cli_runner, temp_db, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not json", encoding="utf-8")

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "backup", "restore", str(path), "--yes"]
        )

        assert result.exit_code == 1
        assert "not valid JSON" in result.output
