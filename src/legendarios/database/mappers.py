"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay
unaware of how members' children and assistance history are split into
their own tables.
"""

from legendarios.domain import entities as domain
from legendarios.database.models import (
    AssistanceRecord as ORMAssistanceRecord,
    DuesPayment as ORMDuesPayment,
    Member as ORMMember,
    MemberChild as ORMMemberChild,
    Transaction as ORMTransaction,
)

# Scalar columns shared one-to-one between the ORM and domain Member.
MEMBER_FIELDS = (
    "legendary_number",
    "full_name",
    "inactive_reason",
    "top_number",
    "track_name",
    "conquest_date",
    "birth_date",
    "profession",
    "address",
    "neighborhood",
    "city",
    "state",
    "phone",
    "email",
    "spouse_name",
    "spouse_phone",
    "church_name",
    "pastor_name",
    "pastor_phone",
    "is_community_active",
    "socio_economic_notes",
    "joined_date",
)


def member_to_domain(orm_member: ORMMember) -> domain.Member:
    """Convert SQLAlchemy Member model to domain Member entity."""
    return domain.Member(
        id=orm_member.id,
        status=domain.MemberStatus(orm_member.status),
        children=tuple(
            domain.Child(name=child.name, age=child.age) for child in orm_member.children
        ),
        assistance_history=tuple(
            domain.AssistanceRecord(
                id=record.record_id,
                description=record.description,
                start_date=record.start_date,
                end_date=record.end_date,
            )
            for record in orm_member.assistance_records
        ),
        **{name: getattr(orm_member, name) for name in MEMBER_FIELDS},
    )


def apply_member(orm_member: ORMMember, member: domain.Member) -> ORMMember:
    """Copy a domain Member onto a new or existing SQLAlchemy Member."""
    orm_member.id = member.id
    orm_member.status = member.status.value
    for name in MEMBER_FIELDS:
        setattr(orm_member, name, getattr(member, name))
    orm_member.children = [
        ORMMemberChild(position=index, name=child.name, age=child.age)
        for index, child in enumerate(member.children)
    ]
    orm_member.assistance_records = [
        ORMAssistanceRecord(
            record_id=record.id,
            position=index,
            description=record.description,
            start_date=record.start_date,
            end_date=record.end_date,
        )
        for index, record in enumerate(member.assistance_history)
    ]
    return orm_member


def dues_payment_to_domain(orm_payment: ORMDuesPayment) -> domain.DuesPayment:
    """Convert SQLAlchemy DuesPayment model to domain DuesPayment entity."""
    return domain.DuesPayment(
        id=orm_payment.id,
        member_id=orm_payment.member_id,
        month=orm_payment.month,
        year=orm_payment.year,
        amount=orm_payment.amount,
        paid_date=orm_payment.paid_date,
    )


def apply_dues_payment(orm_payment: ORMDuesPayment, payment: domain.DuesPayment) -> ORMDuesPayment:
    """Copy a domain DuesPayment onto a SQLAlchemy DuesPayment."""
    orm_payment.id = payment.id
    orm_payment.member_id = payment.member_id
    orm_payment.month = payment.month
    orm_payment.year = payment.year
    orm_payment.amount = payment.amount
    orm_payment.paid_date = payment.paid_date
    return orm_payment


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        type=domain.TransactionType(orm_transaction.type),
        category=orm_transaction.category,
        date=orm_transaction.date,
        member_id=orm_transaction.member_id,
    )


def apply_transaction(orm_transaction: ORMTransaction, transaction: domain.Transaction) -> ORMTransaction:
    """Copy a domain Transaction onto a SQLAlchemy Transaction."""
    orm_transaction.id = transaction.id
    orm_transaction.description = transaction.description
    orm_transaction.amount = transaction.amount
    orm_transaction.type = transaction.type.value
    orm_transaction.category = transaction.category
    orm_transaction.date = transaction.date
    orm_transaction.member_id = transaction.member_id
    return orm_transaction
