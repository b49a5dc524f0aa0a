"""Member roster export."""

import csv
from typing import Iterable, TextIO

from legendarios.domain.entities import Member

ROSTER_FILENAME = "legendarios_export.csv"

ROSTER_HEADERS = (
    "Nº Legendário",
    "TOP",
    "Pista Conquista",
    "Data Conquista",
    "Nome",
    "Status",
    "Motivo Inatividade",
    "Profissão",
    "Bairro",
    "Cidade",
    "Estado",
    "Telefone",
    "Email",
    "Telefone Esposa",
    "Data Nasc.",
    "Comunidade Ativo",
    "Igreja",
    "Pastor",
    "Tel. Pastor",
    "Filhos (Qtd)",
    "Nomes Filhos",
    "Histórico de Ajuda",
)


def _iso(value) -> str:
    return value.isoformat() if value is not None else ""


def roster_row(member: Member) -> list:
    """One roster line for a member, matching ROSTER_HEADERS."""
    children = "; ".join(f"{child.name} ({child.age})" for child in member.children)
    assistance = " | ".join(
        f"{record.description} ({record.start_date.isoformat()} - "
        f"{_iso(record.end_date) or 'Atual'})"
        for record in member.assistance_history
    )
    return [
        member.legendary_number,
        member.top_number or "",
        member.track_name or "",
        _iso(member.conquest_date),
        member.full_name,
        member.status.label,
        member.inactive_reason or "",
        member.profession or "",
        member.neighborhood or "",
        member.city or "",
        member.state or "",
        member.phone or "",
        member.email or "",
        member.spouse_phone or "",
        _iso(member.birth_date),
        "Sim" if member.is_community_active else "Não",
        member.church_name or "",
        member.pastor_name or "",
        member.pastor_phone or "",
        len(member.children),
        children,
        assistance,
    ]


def write_roster_csv(members: Iterable[Member], stream: TextIO) -> int:
    """Write the roster as CSV. Returns the number of members written."""
    writer = csv.writer(stream)
    writer.writerow(ROSTER_HEADERS)
    count = 0
    for member in members:
        writer.writerow(roster_row(member))
        count += 1
    return count
