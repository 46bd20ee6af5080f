"""
Presentation policies: small pure mappings from person fields to layout/style decisions.

Nothing here touches coordinates, so restyling cannot perturb positions.
"""

import re
from dataclasses import dataclass

from models import Person

YEAR_PATTERN = re.compile(r"(?<!\d)(\d{3,4})(?!\d)")


@dataclass(frozen=True)
class ConnectorStyle:
    color: str
    width: float
    dashed: bool


@dataclass(frozen=True)
class NodeStyle:
    fill: str
    edge: str
    linestyle: str  # matplotlib linestyle name
    alpha: float = 1.0


PARTNER_STYLE = ConnectorStyle(color="#94a3b8", width=2.0, dashed=True)
SOLID_STYLE = ConnectorStyle(color="#475569", width=2.5, dashed=False)
POSSIBLE_STYLE = ConnectorStyle(color="#cbd5e1", width=1.5, dashed=True)


def partner_order(member: Person, partner: Person, male_left: bool = True) -> tuple[Person, Person]:
    """
    Decide which of two paired partners goes on the left.

    With `male_left`, a female member with a male partner is placed second; every
    other combination (including missing or "other" gender) keeps the member first.
    """
    if male_left and member.gender == "female" and partner.gender == "male":
        return partner, member
    return member, partner


def connector_style(status: str | None) -> ConnectorStyle:
    """Line style of a parent-child connector, driven by the child's confidence status."""
    if status == "possible":
        return POSSIBLE_STYLE
    return SOLID_STYLE


def node_style(person: Person) -> NodeStyle:
    # Color by gender
    if person.gender == "male":
        fill, edge = "#eff6ff", "#bfdbfe"
    elif person.gender == "female":
        fill, edge = "#fff1f2", "#fecdd3"
    else:
        fill, edge = "white", "#e2e8f0"

    if person.status == "probable":
        return NodeStyle(fill=fill, edge="#fcd34d", linestyle="dashed")
    if person.status == "possible":
        return NodeStyle(fill=fill, edge="#cbd5e1", linestyle="dotted", alpha=0.75)
    return NodeStyle(fill=fill, edge=edge, linestyle="solid")


def parse_year(text: str | None) -> int | None:
    """Extract the first 3-4 digit year from a free-form string like 'abt. 1850' or 'c1790?'."""
    if not text:
        return None
    match = YEAR_PATTERN.search(text)
    return int(match.group(1)) if match else None


def lifespan_label(person: Person) -> str:
    return f"{person.birth_year or '????'} - {person.death_year or 'Now'}"


def infer_vital_status(person: Person, current_year: int, threshold_years: int = 100) -> str:
    """
    Best-effort vital status.

    An explicit value always wins. Otherwise a readable death year, or a birth more
    than `threshold_years` before `current_year`, means deceased.
    """
    if person.vital_status:
        return person.vital_status
    if parse_year(person.death_year) is not None:
        return "deceased"
    birth = parse_year(person.birth_year)
    if birth is None:
        return "unknown"
    if current_year - birth > threshold_years:
        return "deceased"
    return "living"
