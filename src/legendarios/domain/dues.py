"""Monthly dues domain service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from legendarios.database.base import Database
from legendarios.domain.entities import DuesPayment, Member
from legendarios.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    dues_payment_not_found,
    duplicate_dues_payment,
    validate_period,
)
from legendarios.domain.member import new_id
from legendarios.utils.amount_parser import to_money

logger = logging.getLogger(__name__)

DEFAULT_DUES_AMOUNT = Decimal("50.00")


def validate_amount(amount: Decimal) -> Decimal:
    """Reject non-finite and negative amounts and round to cents."""
    try:
        amount = to_money(amount)
    except ValueError as e:
        raise ValidationError(str(e))
    if amount < 0:
        raise ValidationError(f"Amount must not be negative, got {amount}")
    return amount


class DuesService:
    """Service for recording and querying monthly dues."""

    def __init__(self, db: Database):
        """Initialize dues service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_payment(
        self,
        member_id: str,
        month: int,
        year: int,
        amount: Decimal = DEFAULT_DUES_AMOUNT,
        paid_date: Optional[date] = None,
    ) -> DuesPayment:
        """Record one month's dues for a member.

        The store does not enforce one payment per member and month, so the
        check happens here.

        Raises:
            InvalidPeriodError: If month is outside 1-12
            ValidationError: If amount is negative
            ConflictError: If the member already paid that month
        """
        validate_period(month, year)
        amount = validate_amount(amount)
        if self.find_payment(member_id, month, year) is not None:
            raise ConflictError(duplicate_dues_payment(member_id, month, year))

        payment = DuesPayment(
            id=new_id(),
            member_id=member_id,
            month=month,
            year=year,
            amount=amount,
            paid_date=paid_date or date.today(),
        )
        self.db.upsert_dues_payment(payment)
        logger.info("Recorded dues %s for member %s (%02d/%d)", payment.id, member_id, month, year)
        return payment

    def toggle_payment(
        self,
        member_id: str,
        month: int,
        year: int,
        amount: Decimal = DEFAULT_DUES_AMOUNT,
        paid_date: Optional[date] = None,
    ) -> Optional[DuesPayment]:
        """Remove the member's payment for a month, or record one if absent.

        Returns:
            The new payment, or None when an existing one was removed
        """
        existing = self.find_payment(member_id, month, year)
        if existing is not None:
            self.db.remove_dues_payment(existing.id)
            logger.info("Removed dues %s for member %s", existing.id, member_id)
            return None
        return self.record_payment(member_id, month, year, amount, paid_date)

    def update_payment(
        self,
        payment_id: str,
        amount: Optional[Decimal] = None,
        paid_date: Optional[date] = None,
    ) -> DuesPayment:
        """Change the amount or paid date of a payment.

        Raises:
            NotFoundError: If payment not found
        """
        payment = self.require_payment(payment_id)
        if amount is not None:
            payment = replace(payment, amount=validate_amount(amount))
        if paid_date is not None:
            payment = replace(payment, paid_date=paid_date)
        self.db.upsert_dues_payment(payment)
        return payment

    def delete_payment(self, payment_id: str) -> None:
        """Delete a payment.

        Raises:
            NotFoundError: If payment not found
        """
        self.require_payment(payment_id)
        self.db.remove_dues_payment(payment_id)
        logger.info("Deleted dues payment %s", payment_id)

    def require_payment(self, payment_id: str) -> DuesPayment:
        """Get payment by ID or raise NotFoundError."""
        payment = self.db.get_dues_payment(payment_id)
        if payment is None:
            raise NotFoundError(dues_payment_not_found(payment_id))
        return payment

    def find_payment(self, member_id: str, month: int, year: int) -> Optional[DuesPayment]:
        """Find a member's payment for a given month."""
        for payment in self.db.list_dues_payments():
            if payment.member_id == member_id and payment.month == month and payment.year == year:
                return payment
        return None

    def list_payments(
        self,
        year: int,
        member_id: Optional[str] = None,
        month: Optional[int] = None,
    ) -> list[DuesPayment]:
        """List a year's payments, latest month first.

        Args:
            year: Dues year
            member_id: Optional member filter
            month: Optional month filter
        """
        payments = [
            p
            for p in self.db.list_dues_payments()
            if p.year == year
            and (member_id is None or p.member_id == member_id)
            and (not month or p.month == month)
        ]
        return sorted(payments, key=lambda p: p.month, reverse=True)

    def monthly_total(self, month: int, year: int) -> Decimal:
        """Sum of dues recorded for a month."""
        return to_money(sum((p.amount for p in self.list_payments(year, month=month)), Decimal("0")))

    def member_total(self, member_id: str, year: int) -> Decimal:
        """Sum of a member's dues in a year."""
        return to_money(
            sum((p.amount for p in self.list_payments(year, member_id=member_id)), Decimal("0"))
        )

    def year_total(self, year: int) -> Decimal:
        """Sum of all dues recorded for a year."""
        return to_money(sum((p.amount for p in self.list_payments(year)), Decimal("0")))

    def payment_grid(
        self, year: int, members: list[Member]
    ) -> list[tuple[Member, dict[int, DuesPayment]]]:
        """Pair each member with their payments for the year, keyed by month."""
        by_member: dict[str, dict[int, DuesPayment]] = {}
        for payment in self.list_payments(year):
            by_member.setdefault(payment.member_id, {})[payment.month] = payment
        return [(member, by_member.get(member.id, {})) for member in members]
