# maze_gen.py
import random
from typing import Dict, List, Optional, Tuple

# Import from other project modules
import constants as const
from grid_core import Cell, Edge, RectangularGrid


class GenerationStalledError(RuntimeError):
    """Raised when a random walk uses up its step budget without reaching the tree."""


def default_max_steps(cell_count: int) -> int:
    """Per-walk budget of direction draws for a grid with cell_count cells."""
    return max(const.MIN_WALK_STEPS, const.WALK_STEP_FACTOR * cell_count * cell_count)


def _is_dead_end(grid: RectangularGrid, cell_id: int) -> bool:
    return len(grid.neighbours(cell_id)) == 1


def _loop_erased_walk(
    grid: RectangularGrid, start: Cell, rng, max_steps: int
) -> List[int]:
    """
    Walks randomly from start until it steps onto a connected cell.
    Returns the loop-free path, start first and the connected cell last.

    Each draw picks one of the four directions uniformly. A direction that
    leaves the grid is swapped for its opposite; if that also leaves the grid
    (the grid is one cell wide on that axis) the draw is thrown away. Stepping
    straight back onto the previous cell is rejected unless the current cell
    is a dead end. Revisiting a cell already on the path cuts the loop off.
    """
    path: List[int] = [start.id]
    position: Dict[int, int] = {start.id: 0}
    previous: Optional[int] = None
    current = start.id
    steps = 0

    while True:
        steps += 1
        if steps > max_steps:
            raise GenerationStalledError(
                f"Walk from cell {start.id} did not reach the tree within {max_steps} steps "
                f"(path length {len(path)}, at cell {current})."
            )

        direction = rng.choice(const.DIRECTIONS)
        next_id = grid.neighbour(current, direction)
        if next_id is None:
            next_id = grid.neighbour(current, const.OPPOSITE_DIRECTION[direction])
            if next_id is None:
                continue
        if next_id == previous and not _is_dead_end(grid, current):
            continue

        grid.cells[current].set_next(next_id)
        previous, current = current, next_id

        if grid.cells[next_id].is_connected():
            path.append(next_id)
            return path

        if next_id in position:
            # Loop closed: drop everything after the first visit
            keep = position[next_id] + 1
            for erased in path[keep:]:
                del position[erased]
            del path[keep:]
        else:
            position[next_id] = len(path)
            path.append(next_id)


def _splice_path(grid: RectangularGrid, path: List[int]) -> int:
    """Commits a walk into the tree, start first. Returns the number of edges added."""
    for cell_id, expected_next in zip(path, path[1:]):
        cell = grid.cells[cell_id]
        if cell.next_id != expected_next:
            raise RuntimeError(
                f"Cell {cell_id} links to {cell.next_id}, expected {expected_next}."
            )
        cell.mark_connected()
        grid.edges.append((cell_id, cell.next_id))
    return len(path) - 1


def generate_maze(
    grid: RectangularGrid, rng=None, max_steps: Optional[int] = None
) -> int:
    """
    Generates a spanning tree over the grid using loop-erased random walks
    toward a single random target cell.
    Stores the target id and the edges (in commit order) on the grid and
    returns the target id.
    """
    print("--- Starting Maze Generation (Loop-Erased Random Walk) ---")
    rng = rng or random
    if max_steps is None:
        max_steps = default_max_steps(grid.size())

    # Reset previous tree state (if any)
    grid.reset()

    target = grid.random_cell(rng)
    target.mark_connected()
    grid.target_id = target.id
    print(f"  Target cell: {target.id} at {target.coords}")

    walk_count = 0
    # Lowest unconnected index only moves forward, cells never disconnect
    scan = 0
    while scan < grid.size():
        start = grid.cells[scan]
        if start.is_connected():
            scan += 1
            continue
        path = _loop_erased_walk(grid, start, rng, max_steps)
        _splice_path(grid, path)
        walk_count += 1

    print(
        f"--- Maze Generation Complete: {len(grid.edges)} edges from {walk_count} walks. ---"
    )

    # Sanity check: a spanning tree has exactly one edge fewer than cells
    if len(grid.edges) != grid.size() - 1 or not grid.all_connected():
        print("!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!")
        print(
            f"ERROR: MAZE GENERATION PRODUCED {len(grid.edges)} EDGES FOR {grid.size()} CELLS!"
        )
        unconnected_example = grid.first_unconnected()
        if unconnected_example:
            print(f"Example unconnected cell: {unconnected_example.id}")
        print("!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!")

    return target.id


def generate_spanning_tree(
    width: int, length: int, rng=None, max_steps: Optional[int] = None
) -> Tuple[int, List[Edge]]:
    """Builds a fresh width x length grid and returns (target_id, edges)."""
    grid = RectangularGrid(width, length)
    target_id = generate_maze(grid, rng=rng, max_steps=max_steps)
    return target_id, list(grid.edges)
