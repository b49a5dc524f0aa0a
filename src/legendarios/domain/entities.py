"""Domain model entities for legendarios.

These are pure data classes representing business concepts, independent of
database schema. Collections held by an entity are tuples so that every
entity stays hashable and immutable; use ``dataclasses.replace`` to derive
an edited copy.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


MONTHS = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)

DUES_CATEGORY = "Mensalidade"
DEFAULT_TRANSACTION_CATEGORY = "Geral"
DELETED_MEMBER_LABEL = "Membro Excluído"


def month_name(month: int) -> str:
    """Return the Portuguese name for a 1-based month number."""
    return MONTHS[month - 1]


class MemberStatus(str, Enum):
    """Membership status of a legendário."""

    ACTIVE_PAYING = "active_paying"
    ACTIVE_EXEMPT = "active_exempt"
    INACTIVE = "inactive"

    @property
    def label(self) -> str:
        return {
            MemberStatus.ACTIVE_PAYING: "Ativo (Pagante)",
            MemberStatus.ACTIVE_EXEMPT: "Ativo (Dispensado)",
            MemberStatus.INACTIVE: "Inativo",
        }[self]


class TransactionType(str, Enum):
    """Direction of a cash movement."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return "Entrada" if self is TransactionType.INCOME else "Saída"


class SourceKind(str, Enum):
    """Record type a ledger entry was projected from."""

    DUES = "dues"
    TRANSACTION = "transaction"


@dataclass(frozen=True)
class Child:
    """Child of a member."""

    name: str
    age: str = ""


@dataclass(frozen=True)
class AssistanceRecord:
    """Help given to a member. Ongoing while ``end_date`` is None."""

    id: str
    description: str
    start_date: date
    end_date: Optional[date] = None

    @property
    def is_ongoing(self) -> bool:
        return self.end_date is None


@dataclass(frozen=True)
class Member:
    """Legendário domain entity."""

    id: str
    legendary_number: str
    full_name: str
    status: MemberStatus = MemberStatus.ACTIVE_PAYING
    inactive_reason: Optional[str] = None
    top_number: Optional[str] = None
    track_name: Optional[str] = None
    conquest_date: Optional[date] = None
    birth_date: Optional[date] = None
    profession: str = ""
    address: str = ""
    neighborhood: Optional[str] = None
    city: str = ""
    state: Optional[str] = None
    phone: str = ""
    email: Optional[str] = None
    spouse_name: Optional[str] = None
    spouse_phone: Optional[str] = None
    children: tuple[Child, ...] = ()
    church_name: Optional[str] = None
    pastor_name: Optional[str] = None
    pastor_phone: Optional[str] = None
    is_community_active: bool = False
    assistance_history: tuple[AssistanceRecord, ...] = ()
    socio_economic_notes: Optional[str] = None
    joined_date: Optional[date] = None

    @property
    def is_being_helped(self) -> bool:
        return any(record.is_ongoing for record in self.assistance_history)


@dataclass(frozen=True)
class DuesPayment:
    """One month's dues paid by one member."""

    id: str
    member_id: str
    month: int
    year: int
    amount: Decimal
    paid_date: date


@dataclass(frozen=True)
class Transaction:
    """Manual cash movement not tied to dues."""

    id: str
    description: str
    amount: Decimal
    type: TransactionType
    date: date
    category: str = DEFAULT_TRANSACTION_CATEGORY
    member_id: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    """Normalized cash-book line projected from a dues payment or a transaction."""

    id: str
    date: date
    description: str
    category: str
    type: TransactionType
    amount: Decimal
    source_kind: SourceKind
    source_id: str


@dataclass(frozen=True)
class PeriodTotals:
    """Income, expense and their difference over a set of ledger entries."""

    income: Decimal = Decimal("0.00")
    expense: Decimal = Decimal("0.00")
    balance: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class PeriodSummary:
    """Balances for one calendar month, including everything before it."""

    month: int
    year: int
    month_label: str
    prior_balance: Decimal
    period_income: Decimal
    period_expense: Decimal
    period_balance: Decimal


@dataclass(frozen=True)
class FinancialReport:
    """Ledger entries of one month plus their totals."""

    month: int
    year: int
    month_label: str
    entries: tuple[LedgerEntry, ...] = ()
    totals: PeriodTotals = field(default_factory=PeriodTotals)


@dataclass(frozen=True)
class ReportRow:
    """Denormalized report line handed to exporters."""

    date: str
    description: str
    category: str
    type_label: str
    amount: str


@dataclass(frozen=True)
class Census:
    """Member head counts shown on the dashboard."""

    paying: int = 0
    exempt: int = 0
    inactive: int = 0
    being_helped: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Full copy of the three collections, as exported for backup."""

    members: tuple[Member, ...] = ()
    dues_payments: tuple[DuesPayment, ...] = ()
    transactions: tuple[Transaction, ...] = ()
