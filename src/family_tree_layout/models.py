"""Data classes for family tree entities and computed layouts."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any


# Relationship types (closed set, matches the backend enum)
BIOLOGICAL_PARENT = "biological_parent"
ADOPTIVE_PARENT = "adoptive_parent"
STEP_PARENT = "step_parent"
FOSTER_PARENT = "foster_parent"
GUARDIAN = "guardian"
SPOUSE = "spouse"
EX_SPOUSE = "ex_spouse"
PARTNER = "partner"
EX_PARTNER = "ex_partner"
SIBLING = "sibling"
HALF_SIBLING = "half_sibling"
STEP_SIBLING = "step_sibling"
ADOPTED_SIBLING = "adopted_sibling"

RELATIONSHIP_CATEGORIES: dict[str, frozenset[str]] = {
    "parent": frozenset(
        {BIOLOGICAL_PARENT, ADOPTIVE_PARENT, STEP_PARENT, FOSTER_PARENT, GUARDIAN}
    ),
    "spouse": frozenset({SPOUSE, EX_SPOUSE, PARTNER, EX_PARTNER}),
    "sibling": frozenset({SIBLING, HALF_SIBLING, STEP_SIBLING, ADOPTED_SIBLING}),
}

RELATIONSHIP_LABELS: dict[str, str] = {
    BIOLOGICAL_PARENT: "Biological Parent",
    ADOPTIVE_PARENT: "Adoptive Parent",
    STEP_PARENT: "Step Parent",
    FOSTER_PARENT: "Foster Parent",
    GUARDIAN: "Guardian",
    SPOUSE: "Spouse",
    EX_SPOUSE: "Ex-Spouse",
    PARTNER: "Partner",
    EX_PARTNER: "Ex-Partner",
    SIBLING: "Sibling",
    HALF_SIBLING: "Half-Sibling",
    STEP_SIBLING: "Step-Sibling",
    ADOPTED_SIBLING: "Adopted Sibling",
}


def relationship_category(relationship_type: str) -> str | None:
    """Return 'parent', 'spouse' or 'sibling' for a type tag, None if unknown."""
    for category, types in RELATIONSHIP_CATEGORIES.items():
        if relationship_type in types:
            return category
    return None


def is_parent_type(relationship_type: str) -> bool:
    return relationship_type in RELATIONSHIP_CATEGORIES["parent"]


def is_spouse_type(relationship_type: str) -> bool:
    return relationship_type in RELATIONSHIP_CATEGORIES["spouse"]


def is_sibling_type(relationship_type: str) -> bool:
    return relationship_type in RELATIONSHIP_CATEGORIES["sibling"]


@dataclass
class Person:
    id: str
    birthday: date
    is_living: bool = True
    first_name: str = ""
    last_name: str = ""
    middle_name: str | None = None
    maiden_name: str | None = None
    nickname: str | None = None
    gender: str | None = None
    birth_place: str | None = None
    death_date: date | None = None
    death_place: str | None = None
    occupation: str | None = None
    bio: str | None = None
    photo_url: str | None = None

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "middle_name": self.middle_name,
            "maiden_name": self.maiden_name,
            "nickname": self.nickname,
            "gender": self.gender,
            "birthday": self.birthday.isoformat(),
            "birth_place": self.birth_place,
            "death_date": self.death_date.isoformat() if self.death_date else None,
            "death_place": self.death_place,
            "is_living": self.is_living,
            "occupation": self.occupation,
            "bio": self.bio,
            "photo_url": self.photo_url,
        }


@dataclass
class Relationship:
    id: str
    person1_id: str  # the parent for parent-category types
    person2_id: str
    relationship_type: str
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None


# ============================================================================
# Layout output
# ============================================================================


@dataclass(frozen=True)
class EdgeStyle:
    stroke_color: str
    stroke_width: int
    dashed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "strokeColor": self.stroke_color,
            "strokeWidth": self.stroke_width,
            "dashed": self.dashed,
        }


@dataclass
class PositionedNode:
    id: str
    x: float
    y: float
    generation: int
    payload: Person

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "person",
            "position": {"x": self.x, "y": self.y},
            "generation": self.generation,
            "data": {"person": self.payload.to_dict()},
        }


@dataclass
class StyledEdge:
    id: str
    source: str
    target: str
    relationship_type: str
    style: EdgeStyle
    anchor: str = "default"  # "left-right" or "default"
    curve: str = "smoothstep"

    def to_dict(self) -> dict[str, Any]:
        edge = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "relationshipType": self.relationship_type,
            "style": self.style.to_dict(),
            "anchor": self.anchor,
            "type": self.curve,
        }
        if self.anchor == "left-right":
            edge["sourceHandle"] = "right"
            edge["targetHandle"] = "left"
        return edge


@dataclass
class TreeLayout:
    nodes: list[PositionedNode] = field(default_factory=list)
    edges: list[StyledEdge] = field(default_factory=list)

    def node(self, person_id: str) -> PositionedNode | None:
        for node in self.nodes:
            if node.id == person_id:
                return node
        return None

    @property
    def generations(self) -> dict[str, int]:
        return {node.id: node.generation for node in self.nodes}

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
