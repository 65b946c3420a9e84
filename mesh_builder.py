# mesh_builder.py

import numpy as np
import trimesh
from typing import List, Optional

import constants as const

# Import from other project modules
from grid_core import RectangularGrid
from geometry import edge_placements, layout_bounds, node_placements

import trimesh.creation
import trimesh.transformations


def _box_at(
    center_xy: np.ndarray, extents_xy, height: float, z_base: float = 0.0
) -> trimesh.Trimesh:
    """Axis-aligned box standing on z_base, centred on center_xy."""
    box = trimesh.creation.box(extents=[extents_xy[0], extents_xy[1], height])
    box.apply_transform(
        trimesh.transformations.translation_matrix(
            [center_xy[0], center_xy[1], z_base + height / 2.0]
        )
    )
    return box


def create_node_meshes(
    grid: RectangularGrid,
    spacing: float = const.NODE_SPACING,
    node_size: float = const.MESH_NODE_SIZE,
    node_height: float = const.MESH_NODE_HEIGHT,
    target_height: float = const.MESH_TARGET_HEIGHT,
) -> List[trimesh.Trimesh]:
    """One square pad per node. The target pad is taller."""
    meshes = []
    for placement in node_placements(grid, spacing):
        height = target_height if placement.is_target else node_height
        meshes.append(_box_at(placement.position, (node_size, node_size), height))
    return meshes


def create_edge_meshes(
    grid: RectangularGrid,
    spacing: float = const.NODE_SPACING,
    edge_width: float = const.MESH_EDGE_WIDTH,
    edge_height: float = const.MESH_EDGE_HEIGHT,
) -> List[trimesh.Trimesh]:
    """One bar per tree edge, running between the two node centers."""
    meshes = []
    for placement in edge_placements(grid, spacing):
        if placement.orientation == const.EDGE_VERTICAL:
            extents = (edge_width, spacing)
        else:
            extents = (spacing, edge_width)
        meshes.append(_box_at(placement.midpoint, extents, edge_height))
    return meshes


def create_base_plate(
    grid: RectangularGrid,
    spacing: float = const.NODE_SPACING,
    thickness: float = const.MESH_BASE_THICKNESS,
    margin: float = const.MESH_BASE_MARGIN,
) -> Optional[trimesh.Trimesh]:
    """Flat plate under the whole layout, top face at z=0."""
    if thickness <= const.GEOMETRY_TOLERANCE:
        return None
    (min_x, min_y), (max_x, max_y) = layout_bounds(grid, spacing)
    center = np.array([(min_x + max_x) / 2.0, (min_y + max_y) / 2.0])
    extents = (max_x - min_x + 2 * margin, max_y - min_y + 2 * margin)
    return _box_at(center, extents, thickness, z_base=-thickness)


def create_tree_mesh(
    grid: RectangularGrid,
    spacing: float = const.NODE_SPACING,
    include_base: bool = True,
) -> trimesh.Trimesh:
    """
    Builds a printable model of the generated tree: node pads, edge bars and
    (optionally) a base plate, concatenated into one mesh.
    """
    if grid.target_id is None:
        raise ValueError("Grid has no generated tree; run generate_maze first.")

    print(f"\n--- Creating Tree Mesh ({grid.size()} nodes, {len(grid.edges)} edges) ---")
    parts = create_node_meshes(grid, spacing) + create_edge_meshes(grid, spacing)
    if include_base:
        base = create_base_plate(grid, spacing)
        if base is not None:
            parts.append(base)
        else:
            print("  Skipping base plate creation.")

    mesh = trimesh.util.concatenate(parts)
    mesh.merge_vertices()
    print(f"  Tree mesh: {len(mesh.vertices)}V, {len(mesh.faces)}F")
    return mesh


def export_tree_stl(
    grid: RectangularGrid,
    output_filename: str,
    spacing: float = const.NODE_SPACING,
    include_base: bool = True,
):
    """Creates the tree mesh and writes it to an STL file."""
    print(f"\n--- Generating Tree STL: {output_filename} ---")
    try:
        mesh = create_tree_mesh(grid, spacing, include_base=include_base)
    except Exception as e:
        print(f"ERROR creating tree mesh: {e}")
        return

    if mesh is None or len(mesh.faces) == 0:
        print("ERROR: Final tree mesh is invalid or empty. Cannot export.")
        return
    print(f"  Exporting tree mesh to {output_filename}...")
    try:
        mesh.export(output_filename)
        print("  Export complete.")
    except Exception as e:
        print(f"ERROR during tree mesh export: {e}")
        import traceback

        traceback.print_exc()
