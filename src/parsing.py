"""Loading person records: extraction-service JSON and GEDCOM files."""

import json
import logging
from pathlib import Path

from ged4py import GedcomReader

from models import ExtractionResult, Person, Source
from policies import parse_year

log = logging.getLogger(__name__)

SEX_TO_GENDER = {"M": "male", "F": "female", "X": "other"}


def parse_extraction_result(data: dict) -> ExtractionResult:
    """
    Turn an extraction-service document into an ExtractionResult.

    The person list may be under "persons" or "members". Records without an id or
    name are skipped, as are sources missing a title or uri.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Extraction result must be a JSON object, got {type(data).__name__}")

    records = data.get("persons", data.get("members")) or []
    if not isinstance(records, list):
        log.warning("Ignoring person list of type %s", type(records).__name__)
        records = []

    persons: list[Person] = []
    for record in records:
        if not isinstance(record, dict):
            log.warning("Skipping non-object person record: %r", record)
            continue
        try:
            persons.append(Person.from_dict(record))
        except ValueError as e:
            log.warning("Skipping person record: %s", e)

    raw_sources = data.get("sources") or []
    if not isinstance(raw_sources, list):
        log.warning("Ignoring source list of type %s", type(raw_sources).__name__)
        raw_sources = []
    sources = [
        Source(title=str(s["title"]), uri=str(s["uri"]))
        for s in raw_sources
        if isinstance(s, dict) and s.get("title") and s.get("uri")
    ]

    return ExtractionResult(
        persons=persons,
        title=data.get("title") or None,
        description=data.get("description") or None,
        sources=sources,
    )


def load_extraction_result(filepath: Path) -> ExtractionResult:
    with open(filepath, encoding="utf-8") as f:
        return parse_extraction_result(json.load(f))


def normalize_xref(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I12@' into a plain ID 'I12'."""
    return xref_id.strip().strip("@")


def parse_gedcom(filepath: Path) -> GedcomReader:
    """Parse a GEDCOM file and return the reader object."""
    return GedcomReader(str(filepath))


def extract_name(indi) -> str:
    """Extract a display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    name_value = name_rec.value

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        parts = [p for p in name_value if p]
        return " ".join(parts) if parts else "Unknown"

    # Fallback: string format "Given /Surname/"
    return " ".join(str(name_value).replace("/", " ").split()) or "Unknown"


def extract_event_year(indi, tag: str) -> str | None:
    """Year of an event tag (BIRT, DEAT, ...), or the raw date text when no year is found."""
    event = indi.sub_tag(tag)
    if event is None:
        return None

    date_rec = event.sub_tag("DATE")
    if not date_rec or not date_rec.value:
        return None

    # ged4py may return DateValue objects
    date_text = str(date_rec.value)
    year = parse_year(date_text)
    return str(year) if year is not None else date_text


def extract_gender(indi) -> str | None:
    sex_rec = indi.sub_tag("SEX")
    if sex_rec is None or not sex_rec.value:
        return None
    return SEX_TO_GENDER.get(str(sex_rec.value).upper())


def persons_from_gedcom(filepath: Path) -> list[Person]:
    """
    Extract persons with parent and partner links from a GEDCOM file.

    FAM records supply both: HUSB/WIFE become each other's partners and the parents
    of every CHIL.
    """
    reader = parse_gedcom(filepath)
    persons: dict[str, Person] = {}

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue
        pid = normalize_xref(rec.xref_id)
        persons[pid] = Person(
            id=pid,
            name=extract_name(rec),
            birth_year=extract_event_year(rec, "BIRT"),
            death_year=extract_event_year(rec, "DEAT"),
            gender=extract_gender(rec),
            vital_status="deceased" if rec.sub_tag("DEAT") is not None else None,
        )

    for rec in reader.records0("FAM"):
        spouse_ids = []
        for tag in ("HUSB", "WIFE"):
            spouse = rec.sub_tag(tag)
            if spouse is not None and spouse.xref_id:
                spouse_ids.append(normalize_xref(spouse.xref_id))
        spouse_ids = [s for s in spouse_ids if s in persons]

        if len(spouse_ids) == 2:
            a, b = spouse_ids
            if b not in persons[a].partners:
                persons[a].partners.append(b)
            if a not in persons[b].partners:
                persons[b].partners.append(a)

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = normalize_xref(child.xref_id)
            if child_id not in persons:
                continue
            for parent_id in spouse_ids:
                if parent_id not in persons[child_id].parents:
                    persons[child_id].parents.append(parent_id)

    return list(persons.values())


def load_people(filepath: Path) -> ExtractionResult:
    """Load person records from a .json extraction result or a .ged/.gedcom file."""
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()
    if suffix == ".json":
        return load_extraction_result(filepath)
    if suffix in (".ged", ".gedcom"):
        return ExtractionResult(persons=persons_from_gedcom(filepath), title=filepath.stem)
    raise ValueError(f"Unsupported input file type: {filepath.suffix or filepath.name}")
