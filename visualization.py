# visualization.py
import matplotlib.pyplot as plt
import matplotlib.cm as cm
import matplotlib.colors as mcolors
import numpy as np
from typing import List, Tuple, Optional

# Import from other project modules
from grid_core import RectangularGrid, Cell
from geometry import edge_placements, node_placements, node_position
from utils import build_adjacency, bfs_distances
import constants as const


# --- Pathfinding (Often used with visualization) ---
def find_path_to_target(grid: RectangularGrid, cell_id: int) -> Optional[List[Cell]]:
    """Follows next links from a cell to the target. Returns the cells on the way, both ends included."""
    print(f"--- Finding path from {cell_id} to target {grid.target_id} ---")
    start_cell = grid.get_cell(cell_id)
    if start_cell is None or grid.target_id is None:
        print("ERROR: Invalid start cell or grid has no target yet.")
        return None

    path_cells: List[Cell] = [start_cell]
    current = start_cell
    # A valid tree reaches the target in fewer hops than there are cells
    while current.id != grid.target_id:
        if current.next_id is None or len(path_cells) > grid.size():
            print(f"  Path broken at cell {current.id}!")
            return None
        current = grid.cells[current.next_id]
        path_cells.append(current)

    print(f"  Path length: {len(path_cells)} cells.")
    return path_cells


# --- Visualization Helpers ---
def _setup_grid_plot(grid: RectangularGrid) -> Tuple[plt.Figure, plt.Axes]:
    """Creates and configures a flat plot axis sized to the grid."""
    margin = const.NODE_SPACING
    fig, ax = plt.subplots(
        figsize=(max(4, grid.length * 0.8), max(4, grid.width * 0.8))
    )
    ax.set_xlim(-margin, (grid.length - 1) * const.NODE_SPACING + margin)
    ax.set_ylim(-margin, (grid.width - 1) * const.NODE_SPACING + margin)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    return fig, ax


def _draw_edges(ax: plt.Axes, grid: RectangularGrid) -> int:
    """Draws each tree edge as a bar centred on its midpoint."""
    half = const.NODE_SPACING / 2.0
    placements = edge_placements(grid)
    for placement in placements:
        mx, my = placement.midpoint
        if placement.orientation == const.EDGE_VERTICAL:
            xs, ys = [mx, mx], [my - half, my + half]
        else:
            xs, ys = [mx - half, mx + half], [my, my]
        ax.plot(
            xs,
            ys,
            const.VIS_EDGE_LINE_STYLE,
            lw=const.VIS_EDGE_LINE_LW,
            alpha=const.VIS_EDGE_LINE_ALPHA,
            zorder=1,
        )
    return len(placements)


def _draw_nodes(ax: plt.Axes, grid: RectangularGrid):
    """Marks every node, the target in its own color."""
    for placement in node_placements(grid):
        x, y = placement.position
        if placement.is_target:
            ax.plot(
                x,
                y,
                "s",
                markersize=const.VIS_TARGET_MARKER_SIZE,
                mfc=const.VIS_TARGET_COLOR,
                mec=const.VIS_NODE_EDGE_COLOR,
                zorder=3,
                label="Target",
            )
        else:
            ax.plot(
                x,
                y,
                "s",
                markersize=const.VIS_NODE_MARKER_SIZE,
                mfc=const.VIS_NODE_COLOR,
                mec=const.VIS_NODE_EDGE_COLOR,
                zorder=2,
            )


# --- Main Visualization Functions ---

def visualize_tree_links(grid: RectangularGrid, filename="maze_links.png"):
    """Visualizes the generated tree: nodes, edges and the target."""
    print(f"--- Generating Tree Links Visualization: {filename} ---")
    try:
        fig, ax = _setup_grid_plot(grid)
        edge_count = _draw_edges(ax, grid)
        _draw_nodes(ax, grid)
        ax.set_title(f"Spanning Tree ({edge_count} Edges)")
        plt.savefig(filename, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"  Links visualization saved to {filename}")
    except Exception as e:
        print(f"ERROR during visualization: {e}")


def visualize_path_to_target(
    grid: RectangularGrid, cell_id: int, filename="maze_path.png"
):
    """Draws the tree path from one cell to the target on top of the tree."""
    print(f"--- Generating Path Visualization: {filename} ---")
    path = find_path_to_target(grid, cell_id)
    if not path:
        print("  Could not find path to target, cannot visualize.")
        return

    try:
        fig, ax = _setup_grid_plot(grid)
        _draw_edges(ax, grid)
        _draw_nodes(ax, grid)

        print(f"  Visualizing path ({len(path)} cells)...")
        points = np.array([node_position(c.id, grid.length) for c in path])
        ax.plot(
            points[:, 0],
            points[:, 1],
            const.VIS_PATH_LINE_STYLE,
            lw=const.VIS_PATH_LINE_LW,
            alpha=const.VIS_PATH_LINE_ALPHA,
            zorder=4,
        )
        ax.plot(
            points[0, 0],
            points[0, 1],
            const.VIS_PATH_START_MARKER,
            markersize=const.VIS_PATH_START_MARKER_SIZE,
            mfc=const.VIS_PATH_START_MFC,
            mec=const.VIS_NODE_EDGE_COLOR,
            zorder=5,
            label="Start",
        )

        ax.set_title(f"Path from Cell {cell_id} to Target {grid.target_id}")
        plt.savefig(filename, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"  Path visualization saved to {filename}")
    except Exception as e:
        print(f"ERROR during visualization: {e}")


def visualize_tree_connectivity(
    grid: RectangularGrid, filename="maze_connectivity.png"
):
    """Visualizes cell connectivity and tree distance from the target cell."""
    print(f"--- Generating Connectivity Visualization: {filename} ---")
    if grid.target_id is None:
        print("Grid has no target, cannot visualize connectivity.")
        return

    distances = bfs_distances(build_adjacency(grid.size(), grid.edges), grid.target_id)
    reachable = sum(1 for d in distances.values() if d >= 0)
    max_distance = max(distances.values())
    print(f"  Connectivity check reached {reachable}/{grid.size()} cells.")
    if reachable < grid.size():
        print("  WARNING: Not all cells are reachable from the target!")

    # Plotting
    try:
        fig, ax = _setup_grid_plot(grid)
        ax.set_axis_off()
        cmap = cm.viridis
        norm = mcolors.Normalize(vmin=0, vmax=max(1, max_distance))
        half = const.NODE_SPACING / 2.0

        print("  Coloring cells based on distance...")
        for cell in grid.get_all_cells():
            distance = distances[cell.id]
            color = (
                const.VIS_CONN_UNREACHABLE_COLOR
                if distance == -1
                else cmap(norm(distance))
            )
            x, y = node_position(cell.id, grid.length)
            ax.fill(
                [x - half, x + half, x + half, x - half],
                [y - half, y - half, y + half, y + half],
                facecolor=color,
                edgecolor="dimgrey",
                linewidth=0.1,
                alpha=0.95,
            )
        _draw_edges(ax, grid)

        sm = plt.cm.ScalarMappable(cmap=cmap, norm=norm)
        sm.set_array([])
        cbar = plt.colorbar(sm, ax=ax, shrink=0.7, aspect=20, pad=0.08)
        cbar.set_label(f"Distance from Target Cell ({grid.target_id})")
        if reachable < grid.size():
            cbar.ax.set_title("Grey = Unreachable Cells", fontsize=8, color="red")

        ax.set_title(f"Tree Connectivity ({reachable}/{grid.size()} Reachable)")
        plt.savefig(filename, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"  Connectivity visualization saved to {filename}")

    except Exception as e:
        print(f"ERROR during visualization: {e}")
