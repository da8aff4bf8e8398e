"""
Block palettes for maze floors and walls.

Each theme lists weighted materials for floors and walls. A floor of the maze
gets its own appearance provider, drawing from its theme on every call.
"""

from dataclasses import dataclass, field
import logging
import random
from typing import Dict, List, Optional, Tuple

from .constants import RANDOM_THEME
from .materials import Material

logger = logging.getLogger(__name__)

BlockWeight = Tuple[Material, int]


@dataclass
class Theme:
    name: str
    floor: List[BlockWeight] = field(default_factory=list)
    walls: List[BlockWeight] = field(default_factory=list)


class AppearanceProvider:
    """Weighted random floor/wall picker for one maze floor."""

    def __init__(self, theme: Theme, rng: Optional[random.Random] = None):
        self.theme = theme
        self.rng = rng or random.Random()
        self._floor_blocks = [material for material, _ in theme.floor]
        self._floor_weights = [weight for _, weight in theme.floor]
        self._wall_blocks = [material for material, _ in theme.walls]
        self._wall_weights = [weight for _, weight in theme.walls]

    def floor(self) -> Material:
        return self.rng.choices(self._floor_blocks, weights=self._floor_weights)[0]

    def wall(self) -> Material:
        return self.rng.choices(self._wall_blocks, weights=self._wall_weights)[0]


def _block(name: str) -> Material:
    return Material(f"minecraft:{name}")


# Define custom themes here
THEMES: Dict[str, Theme] = {
    "stone": Theme(
        "stone",
        floor=[(_block("stone"), 1)],
        walls=[
            (_block("stone_bricks"), 3),
            (_block("mossy_stone_bricks"), 1),
            (_block("deepslate_bricks"), 1),
            (_block("polished_blackstone_bricks"), 1),
        ],
    ),
    "cherry": Theme(
        "cherry",
        floor=[(_block("pink_glazed_terracotta"), 1)],
        walls=[
            (_block("cherry_wood"), 1),
            (_block("cherry_planks"), 3),
            (_block("stripped_cherry_wood"), 1),
        ],
    ),
    "sandstone": Theme(
        "sandstone",
        floor=[(_block("smooth_sandstone"), 2), (_block("sandstone"), 1)],
        walls=[
            (_block("cut_sandstone"), 3),
            (_block("sandstone"), 2),
            (_block("chiseled_sandstone"), 1),
        ],
    ),
    "nether": Theme(
        "nether",
        floor=[(_block("netherrack"), 3), (_block("blackstone"), 1)],
        walls=[
            (_block("nether_bricks"), 4),
            (_block("red_nether_bricks"), 1),
        ],
    ),
}


def get_themes() -> List[str]:
    return list(THEMES.keys())


def get_theme(name: str) -> Theme:
    """Look up a theme by name, raising ValueError for unknown names."""
    try:
        return THEMES[name]
    except KeyError:
        raise ValueError(f"Unknown theme '{name}'. Available: {', '.join(get_themes())}") from None


def get_theme_generators(theme_name: Optional[str], rng: Optional[random.Random] = None) -> AppearanceProvider:
    """
    Appearance provider for a theme; missing, "random" or unknown names pick one at random.

    Args:
        theme_name: Theme to use.
        rng: Random source for both the theme choice and the block draws.

    Returns:
        An AppearanceProvider bound to the chosen theme.
    """
    rng = rng or random.Random()
    if theme_name is None or theme_name not in THEMES:
        if theme_name not in (None, RANDOM_THEME):
            logger.warning("Unknown theme '%s', picking a random one", theme_name)
        theme_name = rng.choice(get_themes())
    return AppearanceProvider(THEMES[theme_name], rng)
