"""Data quality checks for people and relationships."""

import networkx as nx

from family_tree_layout.graph import assign_generations, build_graph
from family_tree_layout.models import (
    BIOLOGICAL_PARENT,
    Person,
    Relationship,
    is_sibling_type,
    relationship_category,
)

MIN_PARENT_AGE = 12


def validate_family(people: list[Person], relationships: list[Relationship]) -> list[str]:
    """
    Validate the family tree data for:
    - Relationships referencing unknown people or linking a person to themselves
    - Unknown relationship types
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent, very young parents)
    - Death before birth
    - Siblings that end up on different generations

    Nothing here raises; the layout copes with all of these. Returns a list
    of warning messages.
    """
    warnings: list[str] = []
    by_id = {p.id: p for p in people}

    for rel in relationships:
        missing = [pid for pid in (rel.person1_id, rel.person2_id) if pid not in by_id]
        if missing:
            warnings.append(f"Relationship {rel.id} references unknown people: {missing}")
            continue
        if rel.person1_id == rel.person2_id:
            warnings.append(f"Relationship {rel.id} links {rel.person1_id} to themselves")
            continue
        if relationship_category(rel.relationship_type) is None:
            warnings.append(
                f"Relationship {rel.id} has unknown type '{rel.relationship_type}'"
            )

    # Create a subgraph with only parent-child edges for cycle detection
    G = build_graph(people, relationships)
    parent_edges = [
        (u, v) for u, v, d in G.edges(data=True) if d.get("category") == "parent" and u != v
    ]
    parent_graph = nx.DiGraph(parent_edges)
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # Check for impossible ages (biological parents only, step/foster can be any age)
    for rel in relationships:
        if rel.relationship_type != BIOLOGICAL_PARENT:
            continue
        parent = by_id.get(rel.person1_id)
        child = by_id.get(rel.person2_id)
        if parent is None or child is None or parent is child:
            continue

        if child.birthday < parent.birthday:
            warnings.append(f"Impossible: {child.full_name} born before parent {parent.full_name}")
        elif child.birthday.year - parent.birthday.year < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {parent.full_name} was less than {MIN_PARENT_AGE} years "
                f"old when {child.full_name} was born"
            )

    for person in people:
        if person.death_date and person.death_date < person.birthday:
            warnings.append(f"Impossible: {person.full_name} died before being born")
        if person.death_date and person.is_living:
            warnings.append(f"Inconsistent: {person.full_name} has a death date but is marked living")

    # Siblings with unrecorded parents often land on the wrong row
    generations = assign_generations(people, relationships)
    for rel in relationships:
        if not is_sibling_type(rel.relationship_type):
            continue
        if rel.person1_id not in generations or rel.person2_id not in generations:
            continue
        gen1 = generations[rel.person1_id]
        gen2 = generations[rel.person2_id]
        if gen1 != gen2:
            warnings.append(
                f"Siblings {rel.person1_id} and {rel.person2_id} placed on different "
                f"generations ({gen1} and {gen2})"
            )

    return warnings
