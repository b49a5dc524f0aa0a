"""Member head counts and list filters."""

from collections import Counter
from typing import Iterable, Sequence

from legendarios.domain.entities import Census, Member, MemberStatus


def census(members: Iterable[Member]) -> Census:
    """Count members by status, plus those with ongoing assistance.

    ``being_helped`` is independent of status, so a member can be counted
    in it and in one of the status buckets.
    """
    counts = {status: 0 for status in MemberStatus}
    being_helped = 0
    for member in members:
        counts[member.status] += 1
        if member.is_being_helped:
            being_helped += 1

    return Census(
        paying=counts[MemberStatus.ACTIVE_PAYING],
        exempt=counts[MemberStatus.ACTIVE_EXEMPT],
        inactive=counts[MemberStatus.INACTIVE],
        being_helped=being_helped,
    )


def matches_search(member: Member, search_text: str) -> bool:
    """Case-insensitive match on name, city and neighborhood; substring on legendary number."""
    needle = search_text.lower()
    return (
        needle in member.full_name.lower()
        or search_text in member.legendary_number
        or needle in (member.city or "").lower()
        or needle in (member.neighborhood or "").lower()
    )


def filter_members(
    members: Sequence[Member],
    search_text: str = "",
    profession: str = "",
    birth_month: int = 0,
) -> list[Member]:
    """Filter members, keeping their input order.

    Args:
        members: Members to filter
        search_text: Free text, ignored when empty
        profession: Exact profession, ignored when empty
        birth_month: Month 1-12 of the birth date, ignored when 0

    Returns:
        Members matching every non-empty filter
    """
    search_text = (search_text or "").strip()
    result = []
    for member in members:
        if search_text and not matches_search(member, search_text):
            continue
        if profession and member.profession != profession:
            continue
        if birth_month:
            if member.birth_date is None or member.birth_date.month != birth_month:
                continue
        result.append(member)
    return result


def professions(members: Iterable[Member]) -> list[str]:
    """Distinct non-empty professions, in first-seen order."""
    seen: dict[str, None] = {}
    for member in members:
        if member.profession:
            seen.setdefault(member.profession, None)
    return list(seen)


def profession_directory(members: Iterable[Member]) -> list[tuple[str, int]]:
    """Professions with their member counts, most common first."""
    counter = Counter(member.profession for member in members if member.profession)
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def assisted_members(members: Iterable[Member]) -> list[Member]:
    """Members with any assistance history, those currently helped first."""
    assisted = [member for member in members if member.assistance_history]
    return sorted(assisted, key=lambda member: not member.is_being_helped)


def assistance_counts(members: Iterable[Member]) -> tuple[int, int]:
    """Return (total records, ongoing records) across all members."""
    total = 0
    ongoing = 0
    for member in members:
        total += len(member.assistance_history)
        ongoing += sum(1 for record in member.assistance_history if record.is_ongoing)
    return total, ongoing


def birthdays_in_month(members: Sequence[Member], month: int) -> list[Member]:
    """Members born in ``month``, ordered by day of the month."""
    return sorted(
        filter_members(members, birth_month=month),
        key=lambda member: member.birth_date.day,
    )
