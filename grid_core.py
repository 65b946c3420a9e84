# grid_core.py
import random
from typing import List, Tuple, Optional, Iterator

# Import from other project modules
import constants as const

Edge = Tuple[int, int]


class InvalidDimensionError(ValueError):
    """Raised when a grid is requested with a non-positive width or length."""


# --- Grid Topology Helpers (no state) ---
def cell_coords(cell_id: int, length: int) -> Tuple[int, int]:
    """Returns the (x, y) coordinates of a cell id."""
    return cell_id % length, cell_id // length


def cell_index(x: int, y: int, length: int) -> int:
    """Returns the cell id for (x, y)."""
    return y * length + x


def neighbour_id(
    cell_id: int, direction: str, width: int, length: int
) -> Optional[int]:
    """
    Returns the id of the neighbour in the given direction, or None when the
    cell sits on that boundary. Each boundary is checked on its own, so a
    corner cell has two invalid directions.
    """
    x, y = cell_coords(cell_id, length)
    if direction == const.DIR_UP:
        return cell_id - length if y > 0 else None
    if direction == const.DIR_DOWN:
        return cell_id + length if y < width - 1 else None
    if direction == const.DIR_LEFT:
        return cell_id - 1 if x > 0 else None
    if direction == const.DIR_RIGHT:
        return cell_id + 1 if x < length - 1 else None
    raise ValueError(f"Unknown direction: {direction!r}")


def are_adjacent(a: int, b: int, length: int) -> bool:
    """True if cells a and b share a side (checked on coordinates, not id arithmetic)."""
    ax, ay = cell_coords(a, length)
    bx, by = cell_coords(b, length)
    return abs(ax - bx) + abs(ay - by) == 1


class Cell:
    """Represents a single cell of the rectangular grid."""

    def __init__(self, cell_id: int, length: int):
        self.id = cell_id
        self.x, self.y = cell_coords(cell_id, length)
        self.coords = (self.x, self.y)
        # Link to the next cell on the path toward the target
        self.next_id: Optional[int] = None
        self.status: str = const.STATUS_UNCONNECTED

    def reset(self):
        """Clears the link and returns the cell to the unconnected state."""
        self.next_id = None
        self.status = const.STATUS_UNCONNECTED

    def set_next(self, next_id: Optional[int]):
        """Points this cell at the next cell on its path. Only allowed while unconnected."""
        if self.is_connected():
            raise RuntimeError(
                f"Cell {self.id} is already connected; its link is frozen at {self.next_id}."
            )
        self.next_id = next_id

    def mark_connected(self):
        """Freezes the current link; the cell now has a path to the target."""
        self.status = const.STATUS_CONNECTED

    def is_connected(self) -> bool:
        return self.status == const.STATUS_CONNECTED

    def __repr__(self) -> str:
        return f"Cell({self.id})"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        return isinstance(other, Cell) and self.id == other.id


class RectangularGrid:
    """
    A width x length grid of cells addressed by integer id.
    Owns the per-run tree state: the target cell id and the edge list.
    """

    def __init__(
        self,
        width: int = const.DEFAULT_WIDTH,
        length: int = const.DEFAULT_LENGTH,
    ):
        if width <= 0 or length <= 0:
            raise InvalidDimensionError(
                f"Grid dimensions must be positive (width={width}, length={length})."
            )

        self.width = width
        self.length = length
        self.cells: List[Cell] = [Cell(i, length) for i in range(width * length)]
        self.target_id: Optional[int] = None
        self.edges: List[Edge] = []

        print(
            f"--- Grid Initialized: {self.width}x{self.length} ({self.size()} cells) ---"
        )

    def reset(self):
        """Drops all tree state so the grid can be generated again."""
        for cell in self.cells:
            cell.reset()
        self.target_id = None
        self.edges = []

    def get_cell(self, cell_id: int) -> Optional[Cell]:
        """Safely retrieves a cell by id."""
        if not (0 <= cell_id < len(self.cells)):
            return None
        return self.cells[cell_id]

    def get_cell_at(self, x: int, y: int) -> Optional[Cell]:
        """Safely retrieves a cell by coordinates."""
        if not (0 <= x < self.length and 0 <= y < self.width):
            return None
        return self.cells[cell_index(x, y, self.length)]

    def neighbour(self, cell_id: int, direction: str) -> Optional[int]:
        return neighbour_id(cell_id, direction, self.width, self.length)

    def neighbours(self, cell_id: int) -> List[int]:
        """All valid neighbour ids of a cell."""
        return [
            n
            for n in (self.neighbour(cell_id, d) for d in const.DIRECTIONS)
            if n is not None
        ]

    def random_cell(self, rng=None) -> Cell:
        """Returns a cell chosen uniformly at random."""
        rng = rng or random
        return self.cells[rng.randrange(len(self.cells))]

    def first_unconnected(self) -> Optional[Cell]:
        """Returns the lowest-indexed cell without a path to the target."""
        return next((c for c in self.cells if not c.is_connected()), None)

    def all_connected(self) -> bool:
        return all(c.is_connected() for c in self.cells)

    def size(self) -> int:
        """Returns the total number of cells in the grid."""
        return len(self.cells)

    def get_all_cells(self) -> Iterator[Cell]:
        """Returns an iterator over all cells in the grid."""
        yield from self.cells

    @property
    def target_cell(self) -> Optional[Cell]:
        if self.target_id is None:
            return None
        return self.cells[self.target_id]
