"""Tests for JSON record loading, date parsing and GEDCOM import."""

from datetime import date
import json

import pytest

from family_tree_layout.layout import calculate_layout
from family_tree_layout.parsing import (
    load_gedcom,
    load_json,
    parse_date_string,
    parse_records,
    person_from_record,
    relationship_from_record,
)


SAMPLE_GEDCOM = """0 HEAD
1 SOUR test
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 15 MAR 1850
2 PLAC Boston
1 DEAT
2 DATE 1910
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
1 BIRT
2 DATE 1852
0 @I3@ INDI
1 NAME Tom /Smith/
1 SEX M
1 BIRT
2 DATE 1875
0 @I4@ INDI
1 NAME Nobody /Known/
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
0 @F2@ FAM
1 HUSB @I3@
1 WIFE @I4@
1 DIV
0 TRLR
"""


# ============================================================================
# Dates
# ============================================================================

class TestParseDateString:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("25 NOV 1954", date(1954, 11, 25)),
            ("1698", date(1698, 1, 1)),
            ("ABT 1905", date(1905, 1, 1)),
            ("about 1833", date(1833, 1, 1)),
            ("JAN 1905", date(1905, 1, 1)),
            ("May, 1837", date(1837, 5, 1)),
            ("(05/15/1923)", date(1923, 5, 15)),
            ("(1839-08-29)", date(1839, 8, 29)),
            ("1746-00-00", date(1746, 1, 1)),
            ("April 17, 1850", date(1850, 4, 17)),
            ("02 May1838", date(1838, 5, 2)),
            ("(1789?)", date(1789, 1, 1)),
            ("April 17 1850", date(1850, 4, 17)),
            ("(04 05 1911)", date(1911, 4, 5)),
            ("CAL 1880", date(1880, 1, 1)),
            ("CALCULATED 1880", date(1880, 1, 1)),
            ("EST 1850", date(1850, 1, 1)),
            ("ESTIMATED 1850", date(1850, 1, 1)),
            ("AFTER 1900", date(1900, 1, 1)),
            ("BET 1900 AND 1910", date(1900, 1, 1)),
            ("BETWEEN 1900 AND 1910", date(1900, 1, 1)),
            ("FROM 1900", date(1900, 1, 1)),
            ("FROM 1900 TO 1910", date(1900, 1, 1)),
            ("INTERPRETED 1900 (about then)", date(1900, 1, 1)),
        ],
    )
    def test_formats(self, value, expected):
        assert parse_date_string(value) == expected

    @pytest.mark.parametrize("value", [None, "", "()", "unknown", "31 FEB 1900", "13/40/1900"])
    def test_unparseable(self, value):
        assert parse_date_string(value) is None


# ============================================================================
# JSON records
# ============================================================================

class TestRecords:

    def test_person_from_record(self):
        person = person_from_record(
            {
                "id": "p1",
                "first_name": "Alice",
                "last_name": "Doe",
                "birthday": "1950-04-02",
                "death_date": "2020-01-01T00:00:00Z",
                "is_living": False,
                "photo_url": None,
            }
        )
        assert person.id == "p1"
        assert person.birthday == date(1950, 4, 2)
        assert person.death_date == date(2020, 1, 1)
        assert person.is_living is False
        assert person.full_name == "Alice Doe"

    def test_person_without_birthday(self):
        with pytest.raises(ValueError, match="p1 has no birthday"):
            person_from_record({"id": "p1", "first_name": "Alice"})

    def test_person_with_bad_birthday(self):
        with pytest.raises(ValueError, match="p1 has an invalid date"):
            person_from_record({"id": "p1", "birthday": "not a date"})

    def test_relationship_missing_field(self):
        with pytest.raises(ValueError, match="person2_id"):
            relationship_from_record({"id": "r1", "person1_id": "a", "relationship_type": "spouse"})

    def test_unknown_relationship_type_is_kept(self):
        rel = relationship_from_record(
            {"id": 7, "person1_id": "a", "person2_id": "b", "relationship_type": "godparent"}
        )
        assert rel.id == "7"
        assert rel.relationship_type == "godparent"

    def test_soft_deleted_relationships_skipped(self):
        people, relationships = parse_records(
            {
                "people": [
                    {"id": "a", "birthday": "1950-01-01"},
                    {"id": "b", "birthday": "1952-01-01"},
                ],
                "relationships": [
                    {"id": "r1", "person1_id": "a", "person2_id": "b", "relationship_type": "spouse"},
                    {
                        "id": "r2",
                        "person1_id": "a",
                        "person2_id": "b",
                        "relationship_type": "ex_spouse",
                        "is_deleted": True,
                    },
                ],
            }
        )
        assert [p.id for p in people] == ["a", "b"]
        assert [r.id for r in relationships] == ["r1"]

    def test_load_json(self, tmp_path):
        path = tmp_path / "family.json"
        path.write_text(
            json.dumps(
                {
                    "people": [{"id": "a", "first_name": "Ann", "birthday": "1950-01-01"}],
                    "relationships": [],
                }
            ),
            encoding="utf-8",
        )
        people, relationships = load_json(path)
        assert people[0].first_name == "Ann"
        assert relationships == []

    def test_load_json_rejects_arrays(self, tmp_path):
        path = tmp_path / "family.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_json(path)


# ============================================================================
# GEDCOM
# ============================================================================

class TestGedcom:

    @pytest.fixture
    def gedcom_path(self, tmp_path):
        path = tmp_path / "family.ged"
        path.write_text(SAMPLE_GEDCOM, encoding="utf-8")
        return path

    def test_people(self, gedcom_path):
        people, _ = load_gedcom(gedcom_path)
        by_id = {p.id: p for p in people}

        # I4 has no birth date
        assert set(by_id) == {"I1", "I2", "I3"}
        assert by_id["I1"].first_name == "John"
        assert by_id["I1"].last_name == "Smith"
        assert by_id["I1"].birthday == date(1850, 3, 15)
        assert by_id["I1"].birth_place == "Boston"
        assert by_id["I1"].is_living is False
        assert by_id["I1"].death_date == date(1910, 1, 1)
        assert by_id["I2"].is_living is True
        assert by_id["I2"].gender == "F"

    def test_relationships(self, gedcom_path):
        _, relationships = load_gedcom(gedcom_path)
        triples = {(r.person1_id, r.person2_id, r.relationship_type) for r in relationships}

        assert triples == {
            ("I1", "I2", "spouse"),
            ("I1", "I3", "biological_parent"),
            ("I2", "I3", "biological_parent"),
            ("I3", "I4", "ex_spouse"),
        }

    def test_layout_of_imported_tree(self, gedcom_path):
        people, relationships = load_gedcom(gedcom_path)
        layout = calculate_layout(people, relationships)

        assert layout.generations == {"I1": 0, "I2": 0, "I3": 1}
        # I4 was skipped, so the divorce edge is dropped
        assert {e.id for e in layout.edges} == {"F1-I1-I2", "F1-I1-I3", "F1-I2-I3"}

    def test_qualified_and_ranged_birth_dates(self, tmp_path):
        path = tmp_path / "qualified.ged"
        path.write_text(
            """0 HEAD
1 SOUR test
1 GEDC
2 VERS 5.5.1
1 CHAR UTF-8
0 @I1@ INDI
1 NAME Ann /Abt/
1 BIRT
2 DATE ABT 1905
0 @I2@ INDI
1 NAME Ben /Bet/
1 BIRT
2 DATE BET 1900 AND 1910
0 @I3@ INDI
1 NAME Fay /From/
1 BIRT
2 DATE FROM 1900
0 @I4@ INDI
1 NAME Cal /Calc/
1 BIRT
2 DATE CAL 1880
0 @I5@ INDI
1 NAME Eve /Est/
1 BIRT
2 DATE EST 1850
0 TRLR
""",
            encoding="utf-8",
        )
        people, _ = load_gedcom(path)
        birthdays = {p.id: p.birthday for p in people}

        assert birthdays == {
            "I1": date(1905, 1, 1),
            "I2": date(1900, 1, 1),
            "I3": date(1900, 1, 1),
            "I4": date(1880, 1, 1),
            "I5": date(1850, 1, 1),
        }
