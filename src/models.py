"""Data classes for family tree entities."""

from dataclasses import dataclass, field
from typing import Any, NamedTuple

GENDERS = ("male", "female", "other")
VITAL_STATUSES = ("living", "deceased", "unknown")
CONFIDENCE_STATUSES = ("definitive", "probable", "possible")

# Person ID -> generation index (0 is the topmost row)
GenerationMap = dict[str, int]


def _choice(value: Any, allowed: tuple[str, ...]) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    return value if value in allowed else None


def _id_list(value: Any) -> list[str]:
    """Normalize a list of person IDs, dropping blanks and repeats but keeping order."""
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        raise ValueError(f"Expected a list of person IDs, got {type(value).__name__}")
    ids = [str(v).strip() for v in value if v is not None]
    return list(dict.fromkeys(i for i in ids if i))


def _text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass
class Person:
    id: str
    name: str
    birth_year: str | None = None
    death_year: str | None = None
    gender: str | None = None  # male | female | other
    relationship: str | None = None
    vital_status: str | None = None  # living | deceased | unknown
    status: str | None = None  # definitive | probable | possible
    notes: str | None = None
    parents: list[str] = field(default_factory=list)
    partners: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        """
        Build a Person from an extraction record.

        Accepts camelCase keys (birthYear, vitalStatus, ...) as produced by the
        extraction service as well as snake_case ones. Enum-like fields outside
        their allowed values are dropped rather than rejected.
        """
        person_id = _text(data.get("id"))
        name = _text(data.get("name"))
        if person_id is None or name is None:
            raise ValueError(f"Person record needs both 'id' and 'name': {data!r}")

        def pick(camel: str, snake: str):
            return data.get(camel, data.get(snake))

        return cls(
            id=person_id,
            name=name,
            birth_year=_text(pick("birthYear", "birth_year")),
            death_year=_text(pick("deathYear", "death_year")),
            gender=_choice(data.get("gender"), GENDERS),
            relationship=_text(data.get("relationship")),
            vital_status=_choice(pick("vitalStatus", "vital_status"), VITAL_STATUSES),
            status=_choice(data.get("status"), CONFIDENCE_STATUSES),
            notes=_text(data.get("notes")),
            parents=_id_list(data.get("parents")),
            partners=_id_list(data.get("partners")),
        )

    def to_dict(self) -> dict:
        out = {
            "id": self.id,
            "name": self.name,
            "birthYear": self.birth_year,
            "deathYear": self.death_year,
            "gender": self.gender,
            "relationship": self.relationship,
            "vitalStatus": self.vital_status,
            "status": self.status,
            "notes": self.notes,
            "parents": list(self.parents),
            "partners": list(self.partners),
        }
        return {k: v for k, v in out.items() if v is not None}


@dataclass
class Source:
    title: str
    uri: str


@dataclass
class ExtractionResult:
    persons: list[Person]
    title: str | None = None
    description: str | None = None
    sources: list[Source] = field(default_factory=list)


class Position(NamedTuple):
    x: float
    y: float
