# utils.py
from collections import deque
from typing import Dict, Iterable, List, Set

from grid_core import Edge, are_adjacent


def canonical_edge(edge: Edge) -> Edge:
    """Orders an edge's endpoints so (a, b) and (b, a) compare equal."""
    a, b = edge
    return (a, b) if a <= b else (b, a)


def build_adjacency(cell_count: int, edges: Iterable[Edge]) -> Dict[int, Set[int]]:
    """Undirected adjacency sets for the given edges."""
    adjacency: Dict[int, Set[int]] = {i: set() for i in range(cell_count)}
    for a, b in edges:
        adjacency[a].add(b)
        adjacency[b].add(a)
    return adjacency


def bfs_distances(adjacency: Dict[int, Set[int]], source: int) -> Dict[int, int]:
    """Hop distance from source to every cell; -1 marks cells it cannot reach."""
    distances = {cell_id: -1 for cell_id in adjacency}
    distances[source] = 0
    queue = deque([source])
    while queue:
        current = queue.popleft()
        for neighbour in adjacency[current]:
            if distances[neighbour] == -1:
                distances[neighbour] = distances[current] + 1
                queue.append(neighbour)
    return distances


def verify_spanning_tree(width: int, length: int, edges: List[Edge]) -> List[str]:
    """
    Checks that edges form a spanning tree of the width x length grid.
    Returns a list of problems found; an empty list means the tree is valid.
    """
    problems: List[str] = []
    cell_count = width * length

    if len(edges) != cell_count - 1:
        problems.append(f"expected {cell_count - 1} edges, found {len(edges)}")

    seen: Set[Edge] = set()
    valid_edges: List[Edge] = []
    for edge in edges:
        a, b = edge
        if not (0 <= a < cell_count and 0 <= b < cell_count):
            problems.append(f"edge {edge} references a cell outside the grid")
            continue
        if a == b:
            problems.append(f"edge {edge} is a self loop")
            continue
        if not are_adjacent(a, b, length):
            problems.append(f"edge {edge} joins cells that are not grid neighbours")
        key = canonical_edge(edge)
        if key in seen:
            problems.append(f"edge {edge} is duplicated")
            continue
        seen.add(key)
        valid_edges.append(edge)

    if cell_count > 0:
        distances = bfs_distances(build_adjacency(cell_count, valid_edges), 0)
        unreachable = [cell_id for cell_id, d in distances.items() if d == -1]
        if unreachable:
            problems.append(
                f"{len(unreachable)} cells are not connected (e.g. {unreachable[0]})"
            )

    return problems
