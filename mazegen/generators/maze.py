from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..carver import carve_floor
from ..constants import (
    CONNECTOR_DELAY_TURNS,
    DEFAULT_FLOORS,
    DEFAULT_PATH_WIDTH,
    DEFAULT_WALL_HEIGHT,
    ENTRANCE_CELL,
    GROUND_ENTRY,
    PLAYERS_ONLY_MESSAGE,
)
from ..geometry import Vec3, Volume, cell_volume, connector_placements, floor_slab, shaft_volume
from ..grid import GridPos, MazeGrid
from ..materials import AIR, Material
from ..pathfinding import find_furthest_point
from ..scheduler import DrillTask, GenerationPhase, PhaseMachine, TickScheduler
from ..themes import AppearanceProvider, get_theme_generators
from ..world import VoxelWorld

logger = logging.getLogger(__name__)


class Player:
    """A requester that can receive feedback messages."""

    def __init__(self, name: str):
        self.name = name
        self.messages: List[str] = []

    def send_message(self, text: str):
        self.messages.append(text)
        logger.info("[%s] %s", self.name, text)


@dataclass(frozen=True)
class GenerationResult:
    success: bool
    message: Optional[str] = None
    maze: Optional["MazeGenerator"] = field(default=None, repr=False, compare=False)

    @classmethod
    def ok(cls, maze: Optional["MazeGenerator"] = None) -> "GenerationResult":
        return cls(True, None, maze)

    @classmethod
    def failure(cls, reason: str) -> "GenerationResult":
        return cls(False, reason)


def _require_positive(name: str, value: int):
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


class MazeGenerator:
    """
    One maze generation task.

    Owns the grid, the per-floor themes and the drawing phase. All world
    mutations go through the scheduler: the solid fill on the next turn, one
    drilled cell per floor per turn after that, shafts on the next turn and
    connectors after `connector_delay` turns.
    """

    def __init__(
        self,
        world: VoxelWorld,
        scheduler: TickScheduler,
        source: Any,
        start: Sequence[int],
        size_x: int,
        size_z: int,
        wall_height: Optional[int] = None,
        path_width: Optional[int] = None,
        theme: Optional[str] = None,
        floors: Optional[int] = None,
        seed: Optional[int] = None,
        connector_delay: int = CONNECTOR_DELAY_TURNS,
    ):
        self.wall_height = DEFAULT_WALL_HEIGHT if wall_height is None else wall_height
        self.path_width = DEFAULT_PATH_WIDTH if path_width is None else path_width
        floor_count = DEFAULT_FLOORS if floors is None else floors
        for name, value in (
            ("sizeX", size_x),
            ("sizeZ", size_z),
            ("wallHeight", self.wall_height),
            ("pathWidth", self.path_width),
            ("floors", floor_count),
        ):
            _require_positive(name, value)

        self.world = world
        self.scheduler = scheduler
        self.source = source
        self.start: Vec3 = tuple(int(v) for v in start)
        self.seed = seed
        self.rng = random.Random(seed)
        self.connector_delay = connector_delay
        self.grid = MazeGrid(floor_count, size_x, size_z)
        self.floor_themes: List[AppearanceProvider] = [
            get_theme_generators(theme, self.rng) for _ in range(floor_count)
        ]
        self.phases = PhaseMachine()
        self.drill_paths: Dict[int, List[GridPos]] = {}
        self.drill_tasks: List[DrillTask] = []
        self.far_points: List[List[GridPos]] = []
        self.connectors: List[tuple] = []

    @property
    def phase(self) -> GenerationPhase:
        return self.phases.phase

    @property
    def floor_count(self) -> int:
        return self.grid.floor_count

    def start_maze(self) -> GenerationResult:
        if not isinstance(self.source, Player):
            logger.warning("Maze requested by %r, which cannot receive feedback", self.source)
            return GenerationResult.failure(PLAYERS_ONLY_MESSAGE)

        logger.info(
            "Generating %dx%d maze with %d floor(s) at %s (width=%d, height=%d, seed=%s)",
            self.grid.size_x, self.grid.size_z, self.floor_count, self.start,
            self.path_width, self.wall_height, self.seed,
        )
        self.scheduler.run_next_turn(self._fill_all)

        # Carving and floor linking run now; the fill above lands on the next turn
        for level in range(self.floor_count):
            self.build_maze(level)
        self.connect_floors(GROUND_ENTRY)

        self.source.send_message(
            f"Building a {self.grid.size_x}x{self.grid.size_z} maze with {self.floor_count} floor(s)."
        )
        return GenerationResult.ok(self)

    def _fill_all(self):
        for floor in self.grid.floors:
            for cell in floor:
                self.fill_position(cell.grid_pos, floor.level)
        self.fill_position(ENTRANCE_CELL, 0, air=True)
        self.phases.advance_to(GenerationPhase.DRILLING)

    def build_maze(self, level: int) -> List[GridPos]:
        """Carve one floor and hand its drill path to a drill task."""
        drill_path = carve_floor(self.grid.floor(level), self.rng)
        self.drill_paths[level] = list(drill_path)
        task = DrillTask(level, drill_path, self.phases, self.drill_position, self.scheduler)
        self.drill_tasks.append(task)
        task.step()
        return drill_path

    def connect_floors(self, entry_point: GridPos):
        """Link each floor to the one above at the far end of its tree."""
        for level in range(self.floor_count - 1):
            furthest = find_furthest_point(self.grid.floor(level), entry_point)
            self.far_points.append(furthest)
            self.drill_floor(furthest[-1], level + 1)
            self.fill_connector(furthest, level)
            entry_point = furthest[-1]

    def fill_connector(self, ending_path: List[GridPos], level: int):
        if len(ending_path) < 2:
            logger.warning("Floor %d has a single node; shaft opened without a connector", level)
            return
        for material, volume in connector_placements(
            self.start, ending_path, level, self.path_width, self.wall_height
        ):
            self.connectors.append((level, material, volume))
            self.scheduler.run_after_delay(
                lambda material=material, volume=volume: self._place_connector(material, volume),
                self.connector_delay,
            )

    def _place_connector(self, material: Material, volume: Volume):
        self.phases.advance_to(GenerationPhase.LADDERS)
        self.world.fill_volume(material, volume.min_corner, volume.max_corner)

    def fill_position(self, pos: GridPos, level: int, air: bool = False):
        """Render one cell solid with its floor slab, or open it with air."""
        volume = cell_volume(self.start, level, pos, self.path_width, self.wall_height)
        theme = self.floor_themes[level]
        self.world.fill_volume(AIR if air else theme.wall(), volume.min_corner, volume.max_corner)
        if not air:
            slab = floor_slab(volume)
            self.world.fill_volume(theme.floor(), slab.min_corner, slab.max_corner)

    def drill_position(self, pos: GridPos, level: int):
        self.fill_position(pos, level, air=True)

    def drill_floor(self, pos: GridPos, level: int):
        """Open the slab of `level` above `pos` on the next turn."""
        volume = shaft_volume(self.start, level, pos, self.path_width, self.wall_height)
        self.scheduler.run_next_turn(lambda: self.world.fill_volume(AIR, volume.min_corner, volume.max_corner))


def generate(
    world: VoxelWorld,
    scheduler: TickScheduler,
    requester: Any,
    origin: Sequence[int],
    size_x: int,
    size_z: int,
    wall_height: Optional[int] = None,
    path_width: Optional[int] = None,
    theme: Optional[str] = None,
    floors: Optional[int] = None,
    seed: Optional[int] = None,
    connector_delay: int = CONNECTOR_DELAY_TURNS,
) -> GenerationResult:
    """
    Start a maze generation request.

    The maze is carved immediately and drawn over the following scheduler
    turns; drive the scheduler to see it built.

    Returns:
        A successful result carrying the generator, or a failure with the
        reason when the requester cannot receive feedback.
    """
    return MazeGenerator(
        world,
        scheduler,
        requester,
        origin,
        size_x,
        size_z,
        wall_height=wall_height,
        path_width=path_width,
        theme=theme,
        floors=floors,
        seed=seed,
        connector_delay=connector_delay,
    ).start_maze()


def get_maze_snapshot_metrics(maze: MazeGenerator) -> Dict[str, Any]:
    bounds_min, bounds_max = maze.world.bounds()
    return {
        "floors": maze.floor_count,
        "grid": [maze.grid.floors[0].cols, maze.grid.floors[0].rows],
        "phase": maze.phase.name,
        "drill_path_lengths": [len(maze.drill_paths.get(level, [])) for level in range(maze.floor_count)],
        "cells_remaining": sum(len(task.remaining) for task in maze.drill_tasks),
        "far_points": [[list(pos) for pos in pair] for pair in maze.far_points],
        "connectors": len(maze.connectors),
        "block_count": len(maze.world.blocks),
        "fill_count": len(maze.world.fills),
        "bounds_min": bounds_min.tolist(),
        "bounds_max": bounds_max.tolist(),
    }
