"""Minimal CLI for generating and exporting BlockMaze worlds.

Usage examples:
  python3 cli.py generate --size-x 4 --size-z 4 --seed 123 --out builds/maze.glb
  python3 cli.py generate --floors 3 --path-width 2 --theme cherry --json saves/tower.json --summary
  python3 cli.py themes
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from config import check_config, config
from mazegen.constants import (
    BLOCKMAZE_VERSION,
    DEFAULT_EXPORT_NAME,
    DEFAULT_SAVE_NAME,
    FILE_EXT_GLB,
    FILE_EXT_JSON,
    FLOORS_RANGE,
    PATH_WIDTH_RANGE,
    RANDOM_THEME,
    SIZE_RANGE,
    WALL_HEIGHT_RANGE,
)
from mazegen.generators.maze import GenerationResult, Player, generate, get_maze_snapshot_metrics
from mazegen.geometry import build_world_meshes
from mazegen.io import export_meshes_to_glb, save_world_to_json
from mazegen.scheduler import TickScheduler
from mazegen.themes import get_themes
from mazegen.world import VoxelWorld

logger = logging.getLogger("blockmaze")


def _bounded_int(value_range):
    low, high = value_range

    def parse(text: str) -> int:
        value = int(text)
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(f"must be between {low} and {high}, got {value}")
        return value

    return parse


def _configure_logging(verbose: bool):
    level = logging.DEBUG if verbose or config.VERBOSE or config.DEBUG else getattr(logging, config.LOG_LEVEL)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _build_maze(
    origin: List[int],
    size_x: int,
    size_z: int,
    wall_height: int,
    path_width: int,
    theme: Optional[str],
    floors: int,
    seed: Optional[int],
    connector_delay: int,
    max_ticks: int,
) -> GenerationResult:
    scheduler = TickScheduler()
    world = VoxelWorld(clock=lambda: scheduler.current_tick)
    result = generate(
        world,
        scheduler,
        Player("console"),
        origin,
        size_x,
        size_z,
        wall_height=wall_height,
        path_width=path_width,
        theme=None if theme == RANDOM_THEME else theme,
        floors=floors,
        seed=seed,
        connector_delay=connector_delay,
    )
    if result.success:
        ticks = scheduler.run_until_idle(max_ticks=max_ticks)
        logger.info("Maze finished after %d ticks (%d fills)", ticks, len(world.fills))
    return result


def _export(result: GenerationResult, output: Optional[Path], json_path: Optional[Path], summary: bool):
    maze = result.maze
    world = maze.world

    if output:
        meshes = build_world_meshes(world)
        if meshes:
            export_meshes_to_glb(meshes, str(output))
        else:
            logger.warning("World is empty; skipping GLB export")

    if json_path:
        save_world_to_json(world, str(json_path))

    if summary:
        metrics = get_maze_snapshot_metrics(maze)
        print(
            f"Blocks: {metrics['block_count']} | Fills: {metrics['fill_count']}"
            f" | Bounds: min{metrics['bounds_min']} max{metrics['bounds_max']}"
        )
        print(
            "Maze metrics:"
            f" floors={metrics['floors']}"
            f" grid={metrics['grid'][0]}x{metrics['grid'][1]}"
            f" phase={metrics['phase']}"
            f" drill_paths={metrics['drill_path_lengths']}"
            f" connectors={metrics['connectors']}"
            f" far_points={metrics['far_points']}"
        )
        for material, count in sorted(world.count_by_material().items()):
            print(f"  {material}: {count}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="BlockMaze CLI")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {BLOCKMAZE_VERSION}")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a maze and export it to GLB/JSON")
    gen.add_argument("--origin", type=int, nargs=3, default=[0, 0, 0], metavar=("X", "Y", "Z"),
                     help="World corner the maze is built from")
    gen.add_argument("--size-x", type=_bounded_int(SIZE_RANGE), default=config.MAZE_SIZE_X,
                     help="Maze nodes along X")
    gen.add_argument("--size-z", type=_bounded_int(SIZE_RANGE), default=config.MAZE_SIZE_Z,
                     help="Maze nodes along Z")
    gen.add_argument("--wall-height", type=_bounded_int(WALL_HEIGHT_RANGE), default=config.MAZE_WALL_HEIGHT)
    gen.add_argument("--path-width", type=_bounded_int(PATH_WIDTH_RANGE), default=config.MAZE_PATH_WIDTH)
    gen.add_argument("--floors", type=_bounded_int(FLOORS_RANGE), default=config.MAZE_FLOORS)
    gen.add_argument("--theme", choices=[RANDOM_THEME] + get_themes(), default=config.MAZE_THEME or RANDOM_THEME)
    gen.add_argument("--seed", type=int, default=None)
    gen.add_argument("--connector-delay", type=int, default=config.CONNECTOR_DELAY_TURNS,
                     help="Turns before ladders are placed")
    gen.add_argument("--max-ticks", type=int, default=config.MAX_TICKS, help="Stop the tick loop after this many ticks")
    gen.add_argument("--out", type=Path, nargs="?", const=config.EXPORT_DIR / f"{DEFAULT_EXPORT_NAME}{FILE_EXT_GLB}",
                     help="Output GLB path (defaults to the export dir when given without a value)")
    gen.add_argument("--json", type=Path, nargs="?", const=config.SAVE_DIR / f"{DEFAULT_SAVE_NAME}{FILE_EXT_JSON}",
                     help="JSON world save path (defaults to the save dir when given without a value)")
    gen.add_argument("--summary", action="store_true", help="Print counts, bounds and floor links")

    sub.add_parser("themes", help="List available themes")
    sub.add_parser("config", help="Show the configuration summary")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "themes":
        for name in get_themes():
            print(name)
        return 0

    if args.command == "config":
        print(config.get_summary())
        issues = check_config()
        return 1 if issues else 0

    check_config()
    result = _build_maze(
        args.origin,
        args.size_x,
        args.size_z,
        args.wall_height,
        args.path_width,
        args.theme,
        args.floors,
        args.seed,
        args.connector_delay,
        args.max_ticks,
    )
    if not result.success:
        logger.error("Generation failed: %s", result.message)
        return 1
    _export(result, args.out, args.json, args.summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
