# geometry.py
import numpy as np
from typing import List, NamedTuple

# Import from other project modules
from grid_core import RectangularGrid, cell_coords
import constants as const


class NodePlacement(NamedTuple):
    cell_id: int
    position: np.ndarray  # (x, y) in scene units
    is_target: bool


class EdgePlacement(NamedTuple):
    a: int
    b: int
    midpoint: np.ndarray  # (x, y) in scene units
    orientation: str  # const.EDGE_VERTICAL or const.EDGE_HORIZONTAL


def node_position(
    cell_id: int, length: int, spacing: float = const.NODE_SPACING
) -> np.ndarray:
    """Scene position of a node: (x * spacing, y * spacing)."""
    x, y = cell_coords(cell_id, length)
    return np.array([x * spacing, y * spacing], dtype=float)


def edge_orientation(a: int, b: int, length: int) -> str:
    """
    VERTICAL for cells in the same column one row apart, HORIZONTAL for cells
    in the same row one column apart. Anything else is not a grid edge.
    """
    ax, ay = cell_coords(a, length)
    bx, by = cell_coords(b, length)
    if ax == bx and abs(ay - by) == 1:
        return const.EDGE_VERTICAL
    if ay == by and abs(ax - bx) == 1:
        return const.EDGE_HORIZONTAL
    raise ValueError(f"Cells {a} and {b} are not adjacent in a grid of length {length}.")


def node_placements(
    grid: RectangularGrid, spacing: float = const.NODE_SPACING
) -> List[NodePlacement]:
    """One placement per cell, in id order, with the target flagged."""
    return [
        NodePlacement(
            cell.id,
            node_position(cell.id, grid.length, spacing),
            cell.id == grid.target_id,
        )
        for cell in grid.get_all_cells()
    ]


def edge_placements(
    grid: RectangularGrid, spacing: float = const.NODE_SPACING
) -> List[EdgePlacement]:
    """
    One placement per tree edge, in edge-list order. The midpoint is measured
    from the lower-id endpoint, half a spacing up or across.
    """
    placements = []
    half = spacing / 2.0
    for a, b in grid.edges:
        orientation = edge_orientation(a, b, grid.length)
        origin = node_position(min(a, b), grid.length, spacing)
        if orientation == const.EDGE_VERTICAL:
            midpoint = origin + np.array([0.0, half])
        else:
            midpoint = origin + np.array([half, 0.0])
        placements.append(EdgePlacement(a, b, midpoint, orientation))
    return placements


def layout_bounds(
    grid: RectangularGrid, spacing: float = const.NODE_SPACING
) -> np.ndarray:
    """[[min_x, min_y], [max_x, max_y]] of the node centers."""
    return np.array(
        [[0.0, 0.0], [(grid.length - 1) * spacing, (grid.width - 1) * spacing]]
    )
