"""Loading people and relationships from JSON exports and GEDCOM files."""

from datetime import date
import json
import logging
from pathlib import Path
import re
from typing import Any

from ged4py import GedcomReader

from family_tree_layout.models import (
    BIOLOGICAL_PARENT,
    EX_SPOUSE,
    SPOUSE,
    Person,
    Relationship,
    relationship_category,
)

logger = logging.getLogger(__name__)


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1, "JANUARY": 1,
    "FEB": 2, "FEBRUARY": 2,
    "MAR": 3, "MARCH": 3,
    "APR": 4, "APRIL": 4,
    "MAY": 5,
    "JUN": 6, "JUNE": 6,
    "JUL": 7, "JULY": 7,
    "AUG": 8, "AUGUST": 8,
    "SEP": 9, "SEPT": 9, "SEPTEMBER": 9,
    "OCT": 10, "OCTOBER": 10,
    "NOV": 11, "NOVEMBER": 11,
    "DEC": 12, "DECEMBER": 12,
}

QUALIFIER_RE = re.compile(
    r"^(ABOUT|ABT\.?|BEFORE|BEF\.?|AFTER|AFT\.?|ESTIMATED|EST\.?|CALCULATED|CAL\.?|"
    r"INTERPRETED|INT\.?|BETWEEN|BET\.?|FROM|TO|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)

# Second half of "BETWEEN x AND y" / "FROM x TO y", and INTERPRETED's phrase
RANGE_END_RE = re.compile(r"\s+(AND|TO)\s+.*$", flags=re.IGNORECASE)
PHRASE_RE = re.compile(r"\s+\(.*$")

# (pattern, group order) where order names the day/month/year groups
DATE_PATTERNS = [
    (re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$"), "ymd"),  # 1839-08-29
    (re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$"), "dmy"),  # 25 NOV 1954, 02 May1838
    (re.compile(r"^([A-Za-z]+)\.?\s*(\d{1,2})(?:,\s*|\s+)(\d{4})$"), "mdy"),  # April 17, 1850 / April 17 1850
    (re.compile(r"^([A-Za-z]+)\.?,?\s*(\d{4})$"), "my"),  # NOV 1954, May, 1837
    (re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$"), "mdy"),  # 01/27/1920
    (re.compile(r"^(\d{1,2})\s+(\d{1,2})\s+(\d{4})$"), "mdy"),  # 04 05 1911
    (re.compile(r"^(\d{4})$"), "y"),  # 1698
]


def _month_number(value: str) -> int | None:
    if value.isdigit():
        return int(value)
    return MONTH_MAP.get(value.upper().rstrip("."))


def parse_date_string(date_str: str | None) -> date | None:
    """
    Parse a loosely formatted date into a date.
    Returns None if the date cannot be parsed.

    Handles ISO dates and the common GEDCOM forms ("25 NOV 1954",
    "ABT 1905", "JAN 1905", "(05/15/1923)", "April 17, 1850"), including
    ged4py's spelled-out qualifiers ("CALCULATED 1880", "ESTIMATED 1850").
    Ranges ("BETWEEN 1900 AND 1910", "FROM 1900 TO 1910") give their first
    date. Missing month or day default to 1.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = QUALIFIER_RE.sub("", s)
    s = PHRASE_RE.sub("", s)
    s = RANGE_END_RE.sub("", s).strip()
    if not s:
        return None

    for pattern, order in DATE_PATTERNS:
        match = pattern.match(s)
        if not match:
            continue

        parts = dict(zip(order, match.groups()))
        year = int(parts["y"])
        month = _month_number(parts["m"]) if "m" in parts else 1
        day = int(parts["d"]) if "d" in parts else 1
        if month is None:
            return None
        try:
            return date(year, month or 1, day or 1)
        except ValueError:
            return None

    return None


# ============================================================================
# JSON records (rows exported from the backend)
# ============================================================================


def _parse_iso_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def person_from_record(record: dict[str, Any]) -> Person:
    """Build a Person from a `people` row. Raises ValueError on a bad birthday."""
    person_id = record.get("id")
    if person_id is None:
        raise ValueError(f"Person record without id: {record}")

    try:
        birthday = _parse_iso_date(record.get("birthday"))
        death_date = _parse_iso_date(record.get("death_date"))
    except ValueError as e:
        raise ValueError(f"Person {person_id} has an invalid date: {e}") from e
    if birthday is None:
        raise ValueError(f"Person {person_id} has no birthday")

    return Person(
        id=str(person_id),
        birthday=birthday,
        is_living=bool(record.get("is_living", True)),
        first_name=record.get("first_name") or "",
        last_name=record.get("last_name") or "",
        middle_name=record.get("middle_name"),
        maiden_name=record.get("maiden_name"),
        nickname=record.get("nickname"),
        gender=record.get("gender"),
        birth_place=record.get("birth_place"),
        death_date=death_date,
        death_place=record.get("death_place"),
        occupation=record.get("occupation"),
        bio=record.get("bio"),
        photo_url=record.get("photo_url"),
    )


def relationship_from_record(record: dict[str, Any]) -> Relationship:
    """Build a Relationship from a `relationships` row."""
    try:
        rel_id = record["id"]
        person1_id = record["person1_id"]
        person2_id = record["person2_id"]
        relationship_type = record["relationship_type"]
    except KeyError as e:
        raise ValueError(f"Relationship record missing field {e}: {record}") from e

    if relationship_category(relationship_type) is None:
        logger.warning("Relationship %s has unknown type '%s'", rel_id, relationship_type)

    try:
        start_date = _parse_iso_date(record.get("start_date"))
        end_date = _parse_iso_date(record.get("end_date"))
    except ValueError as e:
        raise ValueError(f"Relationship {rel_id} has an invalid date: {e}") from e

    return Relationship(
        id=str(rel_id),
        person1_id=str(person1_id),
        person2_id=str(person2_id),
        relationship_type=relationship_type,
        start_date=start_date,
        end_date=end_date,
        notes=record.get("notes"),
    )


def parse_records(data: dict[str, Any]) -> tuple[list[Person], list[Relationship]]:
    """Convert {"people": [...], "relationships": [...]} rows. Soft-deleted relationships are skipped."""
    people = [person_from_record(r) for r in data.get("people", [])]
    relationships = [
        relationship_from_record(r)
        for r in data.get("relationships", [])
        if not r.get("is_deleted", False)
    ]
    return people, relationships


def load_json(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Load people and relationships from a JSON export."""
    data = json.loads(Path(filepath).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object with 'people' and 'relationships' in {filepath}")
    return parse_records(data)


# ============================================================================
# GEDCOM import
# ============================================================================


def gedcom_id(xref_id: str) -> str:
    """'@I1@' -> 'I1'"""
    return xref_id.strip("@")


def extract_name_parts(indi) -> tuple[str, str]:
    """Extract given name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("", "")

    # ged4py returns NAME as tuple: (given, surname, suffix[, maiden])
    if isinstance(name_rec.value, tuple):
        given, surname = name_rec.value[0], name_rec.value[1]
        return (given or "", surname or "")

    # Fallback: string format "Given /Surname/"
    parts = str(name_rec.value).split("/")
    given = parts[0].strip()
    surname = parts[1].strip() if len(parts) > 1 else ""
    return (given, surname)


def extract_event(indi, tag: str) -> tuple[bool, str | None, str | None]:
    """Return (present, date string, place) for an event tag (BIRT, DEAT, DIV)."""
    event = indi.sub_tag(tag)
    if event is None:
        return (False, None, None)

    date_rec = event.sub_tag("DATE")
    place_rec = event.sub_tag("PLAC")

    # ged4py may return DateValue objects
    date_val = str(date_rec.value) if date_rec and date_rec.value else None
    place_val = str(place_rec.value) if place_rec and place_rec.value else None
    return (True, date_val, place_val)


def normalize_gedcom(reader: GedcomReader) -> tuple[list[Person], list[Relationship]]:
    """
    Extract people and relationships from parsed GEDCOM data.

    Individuals without a usable birth date are skipped. Each family yields
    a spouse relationship (ex_spouse when divorced) and a biological_parent
    relationship from each partner to each child.
    """
    people: list[Person] = []
    relationships: list[Relationship] = []

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue

        person_id = gedcom_id(rec.xref_id)
        _, birth_date_string, birth_place = extract_event(rec, "BIRT")
        birthday = parse_date_string(birth_date_string)
        if birthday is None:
            logger.warning("Skipping %s: no usable birth date (%r)", person_id, birth_date_string)
            continue

        died, death_date_string, death_place = extract_event(rec, "DEAT")
        given, surname = extract_name_parts(rec)
        sex = rec.sub_tag("SEX")

        people.append(
            Person(
                id=person_id,
                birthday=birthday,
                is_living=not died,
                first_name=given,
                last_name=surname,
                gender=sex.value if sex else None,
                birth_place=birth_place,
                death_date=parse_date_string(death_date_string),
                death_place=death_place,
            )
        )

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue

        fam_id = gedcom_id(rec.xref_id)
        husb = rec.sub_tag("HUSB")
        wife = rec.sub_tag("WIFE")
        divorced, _, _ = extract_event(rec, "DIV")

        parent_ids = [gedcom_id(p.xref_id) for p in (husb, wife) if p and p.xref_id]
        child_ids = [gedcom_id(c.xref_id) for c in rec.sub_tags("CHIL") if c.xref_id]

        if len(parent_ids) == 2:
            relationships.append(
                Relationship(
                    id=f"{fam_id}-{parent_ids[0]}-{parent_ids[1]}",
                    person1_id=parent_ids[0],
                    person2_id=parent_ids[1],
                    relationship_type=EX_SPOUSE if divorced else SPOUSE,
                )
            )

        for child_id in child_ids:
            for parent_id in parent_ids:
                relationships.append(
                    Relationship(
                        id=f"{fam_id}-{parent_id}-{child_id}",
                        person1_id=parent_id,
                        person2_id=child_id,
                        relationship_type=BIOLOGICAL_PARENT,
                    )
                )

    return people, relationships


def load_gedcom(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Parse a GEDCOM file into people and relationships."""
    with GedcomReader(str(filepath)) as reader:
        return normalize_gedcom(reader)
