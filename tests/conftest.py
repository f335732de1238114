"""Shared fixtures for the family tree layout tests."""

from datetime import date

import matplotlib
import pytest

from family_tree_layout.models import Person, Relationship

matplotlib.use("Agg")


def make_person(person_id: str, year: int, **kwargs) -> Person:
    return Person(
        id=person_id,
        birthday=date(year, 1, 1),
        first_name=kwargs.pop("first_name", person_id),
        last_name=kwargs.pop("last_name", "Doe"),
        **kwargs,
    )


def make_rel(rel_id: str, person1_id: str, person2_id: str, relationship_type: str) -> Relationship:
    return Relationship(
        id=rel_id,
        person1_id=person1_id,
        person2_id=person2_id,
        relationship_type=relationship_type,
    )


@pytest.fixture
def person():
    return make_person


@pytest.fixture
def rel():
    return make_rel


@pytest.fixture
def three_generations():
    """
    Grandpa + Grandma -> Dad; Dad married to Mom (no recorded parents);
    Dad + Mom -> Kid and Kid2; Kid and Kid2 are siblings.
    """
    people = [
        make_person("grandpa", 1920),
        make_person("grandma", 1922),
        make_person("dad", 1950),
        make_person("mom", 1952, last_name="Smith"),
        make_person("kid", 1980),
        make_person("kid2", 1983),
    ]
    relationships = [
        make_rel("r1", "grandpa", "grandma", "spouse"),
        make_rel("r2", "grandpa", "dad", "biological_parent"),
        make_rel("r3", "grandma", "dad", "biological_parent"),
        make_rel("r4", "dad", "mom", "spouse"),
        make_rel("r5", "dad", "kid", "biological_parent"),
        make_rel("r6", "mom", "kid", "biological_parent"),
        make_rel("r7", "dad", "kid2", "biological_parent"),
        make_rel("r8", "mom", "kid2", "adoptive_parent"),
        make_rel("r9", "kid", "kid2", "sibling"),
    ]
    return people, relationships
