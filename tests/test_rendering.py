import random

import pytest
import trimesh

import constants as const
from grid_core import RectangularGrid
from main import main, run_tree_generation
from maze_gen import generate_maze
from mesh_builder import (
    create_base_plate,
    create_edge_meshes,
    create_node_meshes,
    create_tree_mesh,
    export_tree_stl,
)
from visualization import (
    find_path_to_target,
    visualize_path_to_target,
    visualize_tree_connectivity,
    visualize_tree_links,
)


@pytest.fixture
def grid():
    g = RectangularGrid(4, 5)
    generate_maze(g, rng=random.Random(21))
    return g


def test_every_cell_has_path_to_target(grid):
    for cell in grid.get_all_cells():
        path = find_path_to_target(grid, cell.id)
        assert path is not None
        assert path[0].id == cell.id
        assert path[-1].id == grid.target_id


def test_path_from_target_is_just_target(grid):
    path = find_path_to_target(grid, grid.target_id)
    assert [c.id for c in path] == [grid.target_id]


def test_path_lookup_before_generation_fails():
    assert find_path_to_target(RectangularGrid(2, 2), 0) is None


def test_visualizations_write_images(grid, tmp_path):
    links = tmp_path / "links.png"
    connectivity = tmp_path / "connectivity.png"
    path = tmp_path / "path.png"

    visualize_tree_links(grid, filename=str(links))
    visualize_tree_connectivity(grid, filename=str(connectivity))
    visualize_path_to_target(grid, 0, filename=str(path))

    for image in (links, connectivity, path):
        assert image.exists()
        assert image.stat().st_size > 0


def test_mesh_parts_match_tree(grid):
    nodes = create_node_meshes(grid)
    edges = create_edge_meshes(grid)
    assert len(nodes) == grid.size()
    assert len(edges) == len(grid.edges)

    heights = [m.extents[2] for m in nodes]
    assert heights[grid.target_id] == pytest.approx(const.MESH_TARGET_HEIGHT)
    others = [h for i, h in enumerate(heights) if i != grid.target_id]
    assert others == pytest.approx([const.MESH_NODE_HEIGHT] * (grid.size() - 1))


def test_base_plate_sits_below_nodes(grid):
    base = create_base_plate(grid)
    assert base.bounds[1][2] == pytest.approx(0.0)
    assert base.bounds[0][2] == pytest.approx(-const.MESH_BASE_THICKNESS)
    assert create_base_plate(grid, thickness=0.0) is None


def test_tree_mesh_requires_generated_tree():
    with pytest.raises(ValueError):
        create_tree_mesh(RectangularGrid(2, 2))


def test_tree_mesh_for_single_cell():
    g = RectangularGrid(1, 1)
    generate_maze(g, rng=random.Random(0))
    mesh = create_tree_mesh(g)
    assert isinstance(mesh, trimesh.Trimesh)
    assert len(mesh.faces) > 0


def test_export_tree_stl(grid, tmp_path):
    output = tmp_path / "tree.stl"
    export_tree_stl(grid, str(output))
    assert output.exists()
    loaded = trimesh.load(str(output))
    assert len(loaded.faces) > 0


def test_run_tree_generation_writes_outputs(tmp_path):
    g = run_tree_generation(3, 4, seed=8, output_dir=str(tmp_path))
    assert len(g.edges) == 11
    for name in ("maze_links.png", "maze_connectivity.png", "maze_path.png", "maze_tree.stl"):
        assert (tmp_path / name).exists()


def test_main_accepts_command_line_options(tmp_path):
    out = tmp_path / "out"
    assert main(["--width", "2", "--length", "3", "--seed", "1", "--output-dir", str(out), "--no-stl"]) == 0
    assert (out / "maze_links.png").exists()
    assert not (out / "maze_tree.stl").exists()
