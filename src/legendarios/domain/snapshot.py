"""Conversion between domain entities and the JSON backup snapshot.

The snapshot keeps the camelCase field names of the browser app's
backups so files exported by either side can be restored by the other.
"""

from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from legendarios.domain.entities import (
    AssistanceRecord,
    Child,
    DEFAULT_TRANSACTION_CATEGORY,
    DuesPayment,
    Member,
    MemberStatus,
    Snapshot,
    Transaction,
    TransactionType,
)
from legendarios.domain.errors import MalformedSnapshotError
from legendarios.utils.amount_parser import to_money
from legendarios.utils.date_parser import calendar_day

SNAPSHOT_VERSION = "1.1"

# (entity attribute, snapshot key, kind); kind picks the converter pair below
MEMBER_FIELDS = (
    ("legendary_number", "legendaryNumber", "str"),
    ("top_number", "topNumber", "optstr"),
    ("track_name", "trackName", "optstr"),
    ("conquest_date", "conquestDate", "optdate"),
    ("full_name", "fullName", "str"),
    ("birth_date", "birthDate", "optdate"),
    ("profession", "profession", "str"),
    ("address", "address", "str"),
    ("neighborhood", "neighborhood", "optstr"),
    ("city", "city", "str"),
    ("state", "state", "optstr"),
    ("phone", "phone", "str"),
    ("email", "email", "optstr"),
    ("spouse_name", "spouseName", "optstr"),
    ("spouse_phone", "spousePhone", "optstr"),
    ("church_name", "churchName", "optstr"),
    ("pastor_name", "pastorName", "optstr"),
    ("pastor_phone", "pastorPhone", "optstr"),
    ("is_community_active", "isCommunityActive", "bool"),
    ("inactive_reason", "inactiveReason", "optstr"),
    ("socio_economic_notes", "socioEconomicNotes", "optstr"),
    ("joined_date", "joinedDate", "optdate"),
)


def _optional_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    return calendar_day(value)


def _amount(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid amount {value!r}")
    amount = to_money(Decimal(str(value)))
    if amount < 0:
        raise ValueError(f"Negative amount {value!r}")
    return amount


def _bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"Invalid boolean {value!r}")


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


READERS: dict[str, Callable[[Any], Any]] = {
    "str": lambda value: "" if value is None else str(value),
    "optstr": _optional_str,
    "date": calendar_day,
    "optdate": _optional_date,
    "bool": _bool,
}

WRITERS: dict[str, Callable[[Any], Any]] = {
    "str": lambda value: value,
    "optstr": lambda value: value,
    "date": lambda value: value.isoformat(),
    "optdate": lambda value: value.isoformat() if value is not None else None,
    "bool": lambda value: value,
}


def member_to_dict(member: Member) -> dict[str, Any]:
    """Serialize a member."""
    data: dict[str, Any] = {"id": member.id, "status": member.status.value}
    for attr, key, kind in MEMBER_FIELDS:
        data[key] = WRITERS[kind](getattr(member, attr))
    data["children"] = [{"name": c.name, "age": c.age} for c in member.children]
    data["assistanceHistory"] = [
        {
            "id": record.id,
            "description": record.description,
            "startDate": record.start_date.isoformat(),
            "endDate": record.end_date.isoformat() if record.end_date else None,
        }
        for record in member.assistance_history
    ]
    return data


def member_from_dict(data: dict[str, Any]) -> Member:
    """Deserialize a member. Raises KeyError, TypeError or ValueError on bad input."""
    fields = {attr: READERS[kind](data.get(key)) for attr, key, kind in MEMBER_FIELDS}
    return Member(
        id=str(data["id"]),
        status=MemberStatus(data.get("status") or MemberStatus.ACTIVE_PAYING.value),
        children=tuple(
            Child(name=str(child["name"]), age=str(child.get("age") or ""))
            for child in data.get("children") or []
        ),
        assistance_history=tuple(
            AssistanceRecord(
                id=str(record["id"]),
                description=str(record["description"]),
                start_date=calendar_day(record["startDate"]),
                end_date=_optional_date(record.get("endDate")),
            )
            for record in data.get("assistanceHistory") or []
        ),
        **fields,
    )


def dues_payment_to_dict(payment: DuesPayment) -> dict[str, Any]:
    """Serialize a dues payment."""
    return {
        "id": payment.id,
        "memberId": payment.member_id,
        "month": payment.month,
        "year": payment.year,
        "amount": float(payment.amount),
        "paidDate": payment.paid_date.isoformat(),
    }


def dues_payment_from_dict(data: dict[str, Any]) -> DuesPayment:
    """Deserialize a dues payment."""
    month = int(data["month"])
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}")
    return DuesPayment(
        id=str(data["id"]),
        member_id=str(data["memberId"]),
        month=month,
        year=int(data["year"]),
        amount=_amount(data["amount"]),
        paid_date=calendar_day(data["paidDate"]),
    )


def transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    """Serialize a transaction."""
    data = {
        "id": transaction.id,
        "description": transaction.description,
        "amount": float(transaction.amount),
        "type": transaction.type.value,
        "category": transaction.category,
        "date": transaction.date.isoformat(),
    }
    if transaction.member_id:
        data["memberId"] = transaction.member_id
    return data


def transaction_from_dict(data: dict[str, Any]) -> Transaction:
    """Deserialize a transaction."""
    return Transaction(
        id=str(data["id"]),
        description=str(data["description"]),
        amount=_amount(data["amount"]),
        type=TransactionType(data["type"]),
        category=str(data.get("category") or DEFAULT_TRANSACTION_CATEGORY),
        date=calendar_day(data["date"]),
        member_id=_optional_str(data.get("memberId")),
    )


def snapshot_to_dict(snapshot: Snapshot, exported_at: Optional[datetime] = None) -> dict[str, Any]:
    """Build the backup document for a snapshot."""
    exported_at = exported_at or datetime.now(UTC)
    return {
        "members": [member_to_dict(m) for m in snapshot.members],
        "duesPayments": [dues_payment_to_dict(p) for p in snapshot.dues_payments],
        "transactions": [transaction_to_dict(t) for t in snapshot.transactions],
        "exportedAt": exported_at.isoformat(),
        "version": SNAPSHOT_VERSION,
    }


def _unique_by_id(records: list) -> tuple:
    # Later records win, as repeated saves would in the store
    return tuple({record.id: record for record in records}.values())


def snapshot_from_dict(data: Any) -> Snapshot:
    """Parse a backup document.

    ``duesPayments`` may also be spelled ``payments``, as in backups taken
    by the browser version. A missing ``transactions`` list means none.

    Raises:
        MalformedSnapshotError: If a required list is missing or any record
            cannot be read
    """
    if not isinstance(data, dict):
        raise MalformedSnapshotError("Backup must be a JSON object")

    members = data.get("members")
    payments = data.get("duesPayments", data.get("payments"))
    transactions = data.get("transactions")
    if not isinstance(members, list) or not isinstance(payments, list):
        raise MalformedSnapshotError("Backup must contain 'members' and 'duesPayments' lists")
    if not isinstance(transactions, list):
        transactions = []

    try:
        return Snapshot(
            members=_unique_by_id([member_from_dict(m) for m in members]),
            dues_payments=_unique_by_id([dues_payment_from_dict(p) for p in payments]),
            transactions=_unique_by_id([transaction_from_dict(t) for t in transactions]),
        )
    except (KeyError, TypeError, ValueError, AttributeError, InvalidOperation) as e:
        raise MalformedSnapshotError(f"Unreadable record in backup: {e}") from e
