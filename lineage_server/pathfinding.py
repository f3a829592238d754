"""Shortest relational paths and lineage traversal over the relationship graph.

The graph treats every relationship as traversable in both directions. Each
directed edge is labeled with the role of the person it leaves from relative
to the person it reaches: a parent -> child edge is labeled "parent" and the
reverse edge "child", so the step Ned -> Robb reads "Ned → parent of → Robb".
Partnership edges carry their own type ("spouse" or "betrothed").
"""

from __future__ import annotations

from collections import deque

from .constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_RELATION_PHRASE,
    NO_CONNECTION_DESCRIPTION,
    NOT_CONNECTED,
    RELATION_PHRASES,
    SAME_PERSON_DESCRIPTION,
)
from .indexer import TreeIndex
from .models import ParentChild, Partnership, PathResult, PathStep

# person id -> {neighbor id: edge label}, both in insertion order
Graph = dict[str, dict[str, str]]


def build_graph(index: TreeIndex) -> Graph:
    """Build the undirected-for-traversal adjacency graph.

    Edges touching a person missing from the dataset are left out.
    """
    graph: Graph = {p.id: {} for p in index.persons}

    for rel in index.relationships:
        if isinstance(rel, ParentChild):
            if rel.parent in graph and rel.child in graph:
                graph[rel.parent][rel.child] = "parent"
                graph[rel.child][rel.parent] = "child"
        elif isinstance(rel, Partnership):
            if rel.person1 in graph and rel.person2 in graph:
                graph[rel.person1][rel.person2] = rel.type
                graph[rel.person2][rel.person1] = rel.type

    return graph


def describe_path(index: TreeIndex, start_id: str, steps: list[PathStep]) -> list[str]:
    """Render each step as "<from> → <relation> → <to>"."""

    def name_of(person_id: str) -> str:
        person = index.person_by_id.get(person_id)
        return person.name if person else person_id

    description = []
    current_id = start_id
    for step in steps:
        phrase = RELATION_PHRASES.get(step.relation, DEFAULT_RELATION_PHRASE)
        description.append(f"{name_of(current_id)} → {phrase} → {name_of(step.person_id)}")
        current_id = step.person_id
    return description


def find_path(
    index: TreeIndex, start_id: str, end_id: str, graph: Graph | None = None
) -> PathResult:
    """Find the shortest path between two persons using BFS.

    Neighbors are expanded in adjacency insertion order, so among equally
    short paths the one discovered first wins.

    Args:
        index: Index for the current snapshot
        start_id: Person to start from
        end_id: Person to reach
        graph: Prebuilt graph for the same snapshot (built on demand if omitted)

    Returns:
        PathResult; found=False when the persons are not connected
    """
    if start_id == end_id:
        return PathResult(found=True, description=[SAME_PERSON_DESCRIPTION])

    g = graph if graph is not None else build_graph(index)

    visited = {start_id}
    queue: deque[tuple[str, list[PathStep]]] = deque([(start_id, [])])

    while queue:
        current_id, path = queue.popleft()

        if current_id == end_id:
            return PathResult(
                found=True,
                steps=path,
                description=describe_path(index, start_id, path),
            )

        for neighbor_id, relation in g.get(current_id, {}).items():
            if neighbor_id not in visited:
                visited.add(neighbor_id)
                queue.append((neighbor_id, [*path, PathStep(neighbor_id, relation)]))

    return PathResult(found=False, description=[NO_CONNECTION_DESCRIPTION])


def get_connection_degree(
    index: TreeIndex, person1_id: str, person2_id: str, graph: Graph | None = None
) -> int:
    """Number of relationship hops between two persons, or -1 if unconnected."""
    result = find_path(index, person1_id, person2_id, graph)
    return result.degree if result.found else NOT_CONNECTED


def _collect_lineage(
    adjacency: dict[str, tuple[str, ...]], person_id: str, max_depth: int
) -> list[str]:
    found: list[str] = []
    # Shallowest depth each id was reached at; re-expand only on a shorter route
    best_depth: dict[str, int] = {person_id: 0}

    def traverse(current_id: str, depth: int) -> None:
        if depth >= max_depth:
            return
        for next_id in adjacency.get(current_id, ()):
            next_depth = depth + 1
            if next_id in best_depth and best_depth[next_id] <= next_depth:
                continue
            if next_id not in best_depth:
                found.append(next_id)
            best_depth[next_id] = next_depth
            traverse(next_id, next_depth)

    traverse(person_id, 0)
    return found


def get_ancestors(
    index: TreeIndex, person_id: str, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[str]:
    """IDs of all ancestors within max_depth generations, nearest branch first.

    Follows parent-child links only; spouses are ignored. IDs that do not
    resolve to a person are still reported.
    """
    return _collect_lineage(index.parents_by_child, person_id, max_depth)


def get_descendants(
    index: TreeIndex, person_id: str, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[str]:
    """IDs of all descendants within max_depth generations."""
    return _collect_lineage(index.children_by_parent, person_id, max_depth)
