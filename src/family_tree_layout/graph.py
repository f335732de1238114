"""NetworkX graph building and generation assignment."""

from collections import deque
import logging

import networkx as nx

from family_tree_layout.models import (
    Person,
    Relationship,
    is_parent_type,
    is_spouse_type,
    relationship_category,
)

logger = logging.getLogger(__name__)


def build_graph(people: list[Person], relationships: list[Relationship]) -> nx.MultiDiGraph:
    """
    Build a NetworkX multigraph of every person and every relationship.

    Relationships pointing at unknown people are left out, so the graph only
    contains edges between people that are present.
    """
    G = nx.MultiDiGraph()

    for person in people:
        G.add_node(
            person.id,
            person_name=person.full_name,
            birthday=person.birthday,
            death_date=person.death_date,
            is_living=person.is_living,
        )

    for rel in relationships:
        if rel.person1_id not in G or rel.person2_id not in G:
            continue
        G.add_edge(
            rel.person1_id,
            rel.person2_id,
            key=rel.id,
            relationship_id=rel.id,
            relationship_type=rel.relationship_type,
            category=relationship_category(rel.relationship_type),
        )

    return G


def build_adjacency(
    people: list[Person], relationships: list[Relationship]
) -> tuple[nx.DiGraph, nx.Graph]:
    """
    Build the parent -> child and spouse <-> spouse adjacency.

    Returns:
        (parent_graph, spouse_graph). Every person is a node of both graphs.
        In parent_graph an edge runs from parent to child, so predecessors are
        a person's parents and successors their children.
    """
    parent_graph = nx.DiGraph()
    spouse_graph = nx.Graph()
    person_ids = [p.id for p in people]
    parent_graph.add_nodes_from(person_ids)
    spouse_graph.add_nodes_from(person_ids)

    for rel in relationships:
        if rel.person1_id not in parent_graph or rel.person2_id not in parent_graph:
            continue
        if is_parent_type(rel.relationship_type):
            # person1 is parent, person2 is child
            parent_graph.add_edge(rel.person1_id, rel.person2_id)
        elif is_spouse_type(rel.relationship_type):
            spouse_graph.add_edge(rel.person1_id, rel.person2_id)

    return parent_graph, spouse_graph


def find_root_candidates(people: list[Person], parent_graph: nx.DiGraph) -> list[str]:
    """People with no recorded parent, in input order."""
    return [p.id for p in people if parent_graph.in_degree(p.id) == 0]


def select_start_nodes(people: list[Person], parent_graph: nx.DiGraph) -> list[str]:
    """
    Pick the BFS start points.

    All root candidates when there are any; otherwise (everyone has a parent,
    which means the parent data contains a cycle) the single oldest person.
    """
    roots = find_root_candidates(people, parent_graph)
    if roots or not people:
        return roots

    oldest = min(people, key=lambda p: p.birthday)
    logger.debug("No root ancestors found, starting from oldest person %s", oldest.id)
    return [oldest.id]


def assign_generations(people: list[Person], relationships: list[Relationship]) -> dict[str, int]:
    """
    Assign every person a generation number.

    Multi-source BFS from the start points at generation 0. Children are
    pushed one generation below the person being visited and spouses on the
    same generation. A visit is only processed when it raises the recorded
    generation, so a child always ends up below its deepest parent and
    spouses share the larger of their generations.

    Cyclic parent data would raise generations forever; visits deeper than
    the number of people cannot come from acyclic data and are dropped.
    People that no traversal reaches are placed on generation 0.
    """
    parent_graph, spouse_graph = build_adjacency(people, relationships)
    max_generation = len(people)

    generations: dict[str, int] = {}
    queue = deque((person_id, 0) for person_id in select_start_nodes(people, parent_graph))
    dropped = 0

    while queue:
        person_id, gen = queue.popleft()
        if gen > max_generation:
            dropped += 1
            continue
        if generations.get(person_id, -1) >= gen:
            continue
        generations[person_id] = gen

        for child_id in parent_graph.successors(person_id):
            queue.append((child_id, gen + 1))
        for spouse_id in spouse_graph.neighbors(person_id):
            queue.append((spouse_id, gen))

    if dropped:
        logger.debug("Dropped %d visits past generation %d (cyclic data)", dropped, max_generation)

    # Disconnected people
    for person in people:
        generations.setdefault(person.id, 0)

    return generations
