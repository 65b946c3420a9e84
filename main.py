# main.py
import argparse
import os
import random
import time
import traceback
from typing import Optional, Sequence

# Import project modules
import constants as const
from grid_core import RectangularGrid
from maze_gen import generate_maze
from mesh_builder import export_tree_stl
from utils import bfs_distances, build_adjacency, verify_spanning_tree
from visualization import (
    visualize_path_to_target,
    visualize_tree_connectivity,
    visualize_tree_links,
)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a random spanning tree over a grid and render it"
    )
    parser.add_argument(
        "--width", type=int, default=const.DEFAULT_WIDTH, help="Number of rows"
    )
    parser.add_argument(
        "--length", type=int, default=const.DEFAULT_LENGTH, help="Number of columns"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--output-dir", default="output", help="Directory for images and STL"
    )
    parser.add_argument(
        "--no-stl", action="store_true", help="Skip the 3D STL export"
    )
    return parser.parse_args(argv)


def run_tree_generation(
    width: int,
    length: int,
    seed: Optional[int] = None,
    output_dir: str = "output",
    export_stl: bool = True,
) -> RectangularGrid:
    start_time = time.time()
    os.makedirs(output_dir, exist_ok=True)

    print("\n--- Configuration ---")
    print(f"  Grid: {width} rows x {length} columns")
    print(f"  Seed: {seed if seed is not None else 'random'}")
    print(f"  Output: {output_dir}")

    rng = random.Random(seed)

    # === Generation ===
    grid = RectangularGrid(width, length)
    target_id = generate_maze(grid, rng=rng)

    problems = verify_spanning_tree(grid.width, grid.length, grid.edges)
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}")
        raise RuntimeError("Generated edges do not form a spanning tree.")
    print(f"  Spanning tree verified ({len(grid.edges)} edges, target {target_id}).")

    for a, b in grid.edges:
        print(f"  Edge goes from: {a} to: {b}")

    # --- Visualizations ---
    print("\n--- Generating Visualizations ---")
    try:
        visualize_tree_links(grid, filename=os.path.join(output_dir, "maze_links.png"))
        visualize_tree_connectivity(
            grid, filename=os.path.join(output_dir, "maze_connectivity.png")
        )
        # Show the longest route into the target
        distances = bfs_distances(build_adjacency(grid.size(), grid.edges), target_id)
        farthest = max(distances, key=lambda cell_id: distances[cell_id])
        visualize_path_to_target(
            grid, farthest, filename=os.path.join(output_dir, "maze_path.png")
        )
    except Exception as e:
        print(f"An error occurred during visualization generation: {e}")
        traceback.print_exc()

    # --- Create 3D STL ---
    if export_stl:
        print("\n--- Generating 3D STL ---")
        try:
            export_tree_stl(grid, os.path.join(output_dir, "maze_tree.stl"))
        except Exception as e:
            print(f"An error occurred during STL generation: {e}")
            traceback.print_exc()

    end_time = time.time()
    print(f"\n--- Total Execution Time: {end_time - start_time:.2f} seconds ---")
    return grid


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    run_tree_generation(
        args.width,
        args.length,
        seed=args.seed,
        output_dir=args.output_dir,
        export_stl=not args.no_stl,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
