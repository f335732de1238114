"""Generation-row layout of people and styled relationship edges."""

from dataclasses import dataclass
import logging

from family_tree_layout.graph import assign_generations
from family_tree_layout.models import (
    ADOPTED_SIBLING,
    ADOPTIVE_PARENT,
    BIOLOGICAL_PARENT,
    EX_PARTNER,
    EX_SPOUSE,
    FOSTER_PARENT,
    GUARDIAN,
    HALF_SIBLING,
    PARTNER,
    SIBLING,
    SPOUSE,
    STEP_PARENT,
    STEP_SIBLING,
    EdgeStyle,
    Person,
    PositionedNode,
    Relationship,
    StyledEdge,
    TreeLayout,
    is_spouse_type,
)

logger = logging.getLogger(__name__)


PARENT_COLOR = "#6b7280"
SPOUSE_COLOR = "#ec4899"
SIBLING_COLOR = "#3b82f6"

DEFAULT_EDGE_STYLE = EdgeStyle(PARENT_COLOR, 2)

EDGE_STYLES: dict[str, EdgeStyle] = {
    # Biological = solid, other parentage = dashed
    BIOLOGICAL_PARENT: DEFAULT_EDGE_STYLE,
    ADOPTIVE_PARENT: EdgeStyle(PARENT_COLOR, 2, dashed=True),
    STEP_PARENT: EdgeStyle(PARENT_COLOR, 2, dashed=True),
    FOSTER_PARENT: EdgeStyle(PARENT_COLOR, 2, dashed=True),
    GUARDIAN: EdgeStyle(PARENT_COLOR, 2, dashed=True),
    # Current couples thick, former couples dashed
    SPOUSE: EdgeStyle(SPOUSE_COLOR, 3),
    PARTNER: EdgeStyle(SPOUSE_COLOR, 3),
    EX_SPOUSE: EdgeStyle(SPOUSE_COLOR, 2, dashed=True),
    EX_PARTNER: EdgeStyle(SPOUSE_COLOR, 2, dashed=True),
    SIBLING: EdgeStyle(SIBLING_COLOR, 2),
    HALF_SIBLING: EdgeStyle(SIBLING_COLOR, 2),
    STEP_SIBLING: EdgeStyle(SIBLING_COLOR, 2),
    ADOPTED_SIBLING: EdgeStyle(SIBLING_COLOR, 2),
}


@dataclass(frozen=True)
class LayoutConfig:
    horizontal_spacing: float = 250
    vertical_spacing: float = 200

    def __post_init__(self):
        if self.horizontal_spacing <= 0 or self.vertical_spacing <= 0:
            raise ValueError(
                f"Spacing must be positive, got horizontal={self.horizontal_spacing} "
                f"vertical={self.vertical_spacing}"
            )


def get_edge_style(relationship_type: str) -> EdgeStyle:
    return EDGE_STYLES.get(relationship_type, DEFAULT_EDGE_STYLE)


def group_by_generation(people: list[Person], generations: dict[str, int]) -> dict[int, list[Person]]:
    """Group people into generation rows, keeping input order within a row."""
    groups: dict[int, list[Person]] = {}
    for person in people:
        groups.setdefault(generations.get(person.id, 0), []).append(person)
    return groups


def position_nodes(
    people: list[Person], generations: dict[str, int], config: LayoutConfig
) -> list[PositionedNode]:
    """
    Place each generation on its own row, centered on x = 0.

    Smaller generations (ancestors) get larger y values, so they sit above
    their descendants. No collision avoidance or crossing minimization.
    """
    groups = group_by_generation(people, generations)
    nodes: list[PositionedNode] = []

    for gen in sorted(groups):
        group = groups[gen]
        start_x = -(len(group) - 1) * config.horizontal_spacing / 2
        y = -gen * config.vertical_spacing

        for index, person in enumerate(group):
            nodes.append(
                PositionedNode(
                    id=person.id,
                    x=start_x + index * config.horizontal_spacing,
                    y=y,
                    generation=gen,
                    payload=person,
                )
            )

    return nodes


def build_edges(people: list[Person], relationships: list[Relationship]) -> list[StyledEdge]:
    """One styled edge per relationship whose endpoints are both present."""
    person_ids = {p.id for p in people}
    edges: list[StyledEdge] = []
    added: set[str] = set()

    for rel in relationships:
        if rel.person1_id not in person_ids or rel.person2_id not in person_ids:
            continue

        edge_id = str(rel.id)
        if edge_id in added:
            continue
        added.add(edge_id)

        edges.append(
            StyledEdge(
                id=edge_id,
                source=rel.person1_id,
                target=rel.person2_id,
                relationship_type=rel.relationship_type,
                style=get_edge_style(rel.relationship_type),
                # Couples connect side to side
                anchor="left-right" if is_spouse_type(rel.relationship_type) else "default",
            )
        )

    return edges


def calculate_layout(
    people: list[Person],
    relationships: list[Relationship],
    config: LayoutConfig | None = None,
) -> TreeLayout:
    """
    Lay out a family tree.

    Args:
        people: Every person to place. Read only.
        relationships: Typed pairwise relationships. Entries referencing
            people outside `people` are ignored.
        config: Spacing settings (defaults to LayoutConfig()).

    Returns:
        A TreeLayout with one positioned node per person and one styled edge
        per surviving relationship.
    """
    if not people:
        return TreeLayout()

    config = config or LayoutConfig()
    generations = assign_generations(people, relationships)
    nodes = position_nodes(people, generations, config)
    edges = build_edges(people, relationships)

    logger.debug(
        "Laid out %d people on %d generations with %d edges",
        len(nodes),
        len(set(generations.values())),
        len(edges),
    )
    return TreeLayout(nodes=nodes, edges=edges)
