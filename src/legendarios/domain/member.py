"""Member domain service."""

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Any, Optional

from legendarios.database.base import Database
from legendarios.domain.entities import AssistanceRecord, Child, Member, MemberStatus
from legendarios.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    assistance_not_found,
    duplicate_legendary_number,
    legendary_number_not_found,
    member_not_found,
)

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Generate a random record id."""
    return str(uuid.uuid4())


def coerce_status(status: MemberStatus | str) -> MemberStatus:
    """Accept a MemberStatus or its string value."""
    try:
        return MemberStatus(status)
    except ValueError:
        choices = ", ".join(s.value for s in MemberStatus)
        raise ValidationError(f"Invalid status '{status}'. Expected one of: {choices}")


def validate_member(member: Member) -> None:
    """Check the invariants a member must satisfy before it is stored.

    Raises:
        ValidationError: On a missing name or number, or an inactive member
            without a reason
    """
    if not member.full_name or not member.full_name.strip():
        raise ValidationError("Full name is required")
    if not member.legendary_number or not member.legendary_number.strip():
        raise ValidationError("Legendary number is required")
    if member.status is MemberStatus.INACTIVE and not (member.inactive_reason or "").strip():
        raise ValidationError("An inactive member requires an inactive reason")
    for record in member.assistance_history:
        if record.end_date is not None and record.end_date < record.start_date:
            raise ValidationError(
                f"Assistance '{record.description}' ends before it starts"
            )


class MemberService:
    """Service for managing members and their assistance history."""

    def __init__(self, db: Database):
        """Initialize member service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_member(
        self,
        legendary_number: str,
        full_name: str,
        status: MemberStatus | str = MemberStatus.ACTIVE_PAYING,
        inactive_reason: Optional[str] = None,
        children: tuple[Child, ...] = (),
        **details: Any,
    ) -> Member:
        """Create a new member.

        Args:
            legendary_number: Membership number, unique by convention
            full_name: Member's full name
            status: Membership status
            inactive_reason: Required when status is inactive
            children: Children in entry order
            **details: Any other Member field (city, profession, birth_date...)

        Returns:
            The stored member

        Raises:
            ValidationError: If the member is incomplete
            ConflictError: If the legendary number is already in use
        """
        details.setdefault("joined_date", date.today())
        member = Member(
            id=new_id(),
            legendary_number=legendary_number.strip(),
            full_name=full_name.strip(),
            status=coerce_status(status),
            inactive_reason=inactive_reason,
            children=tuple(children),
            **details,
        )
        self._save(member)
        logger.info("Created member %s (%s)", member.id, member.legendary_number)
        return member

    def update_member(self, member_id: str, **changes: Any) -> Member:
        """Update member fields.

        Raises:
            NotFoundError: If member not found
            ValidationError: If the updated member is incomplete
            ConflictError: If the legendary number is already in use
        """
        member = self.require_member(member_id)
        for key in ("legendary_number", "full_name"):
            if isinstance(changes.get(key), str):
                changes[key] = changes[key].strip()
        if "status" in changes:
            changes["status"] = coerce_status(changes["status"])
        if "children" in changes:
            changes["children"] = tuple(changes["children"])
        if "assistance_history" in changes:
            changes["assistance_history"] = tuple(changes["assistance_history"])
        member = replace(member, **changes)
        self._save(member)
        logger.info("Updated member %s", member.id)
        return member

    def delete_member(self, member_id: str) -> None:
        """Delete a member. Their dues payments stay in the cash book.

        Raises:
            NotFoundError: If member not found
        """
        self.require_member(member_id)
        self.db.remove_member(member_id)
        logger.info("Deleted member %s", member_id)

    def get_member(self, member_id: str) -> Optional[Member]:
        """Get member by ID."""
        return self.db.get_member(member_id)

    def require_member(self, member_id: str) -> Member:
        """Get member by ID or raise NotFoundError."""
        member = self.db.get_member(member_id)
        if member is None:
            raise NotFoundError(member_not_found(member_id))
        return member

    def list_members(self) -> list[Member]:
        """List all members."""
        return self.db.list_members()

    def find_by_legendary_number(self, legendary_number: str) -> Optional[Member]:
        """Find the member holding an exact legendary number."""
        wanted = legendary_number.strip()
        if not wanted:
            return None
        for member in self.db.list_members():
            if member.legendary_number == wanted:
                return member
        return None

    def resolve_member(self, reference: str) -> Member:
        """Resolve a member from an id or a legendary number.

        Raises:
            NotFoundError: If neither matches
        """
        member = self.db.get_member(reference) or self.find_by_legendary_number(reference)
        if member is None:
            raise NotFoundError(legendary_number_not_found(reference))
        return member

    def add_assistance(
        self, member_id: str, description: str, start_date: Optional[date] = None
    ) -> AssistanceRecord:
        """Open a new, ongoing assistance record for a member."""
        if not description or not description.strip():
            raise ValidationError("Assistance description is required")
        member = self.require_member(member_id)
        record = AssistanceRecord(
            id=new_id(),
            description=description.strip(),
            start_date=start_date or date.today(),
        )
        self._save(replace(member, assistance_history=member.assistance_history + (record,)))
        logger.info("Opened assistance %s for member %s", record.id, member_id)
        return record

    def close_assistance(
        self, member_id: str, record_id: str, end_date: Optional[date] = None
    ) -> AssistanceRecord:
        """Set the end date of an assistance record.

        Raises:
            NotFoundError: If member or record not found
        """
        member = self.require_member(member_id)
        history = list(member.assistance_history)
        for index, record in enumerate(history):
            if record.id == record_id:
                history[index] = replace(record, end_date=end_date or date.today())
                self._save(replace(member, assistance_history=tuple(history)))
                logger.info("Closed assistance %s for member %s", record_id, member_id)
                return history[index]
        raise NotFoundError(assistance_not_found(record_id))

    def _save(self, member: Member) -> None:
        validate_member(member)
        holder = self.find_by_legendary_number(member.legendary_number)
        if holder is not None and holder.id != member.id:
            raise ConflictError(duplicate_legendary_number(member.legendary_number))
        self.db.upsert_member(member)
