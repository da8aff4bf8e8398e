from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

# Define a type hint for colors (e.g., RGBA)
ColorTuple = Tuple[int, int, int, int]


class Facing(Enum):
    """Cardinal facing of a directional block, valued by its facing_direction state."""
    NORTH = 2
    SOUTH = 3
    WEST = 4
    EAST = 5

    @property
    def opposite(self) -> "Facing":
        return _OPPOSITES[self]


_OPPOSITES = {
    Facing.NORTH: Facing.SOUTH,
    Facing.SOUTH: Facing.NORTH,
    Facing.WEST: Facing.EAST,
    Facing.EAST: Facing.WEST,
}


@dataclass(frozen=True)
class Material:
    """A block type plus the optional facing of directional blocks (ladders)."""
    name: str
    facing: Optional[Facing] = None

    @property
    def is_air(self) -> bool:
        return self.name == AIR_NAME

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"name": self.name}
        if self.facing is not None:
            data["facing"] = self.facing.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Material":
        facing = data.get("facing")
        return cls(str(data["name"]), Facing[facing] if facing else None)

    def __str__(self) -> str:
        if self.facing is None:
            return self.name
        return f"{self.name}[facing={self.facing.name.lower()}]"


AIR_NAME = "minecraft:air"
LADDER_NAME = "minecraft:ladder"

AIR = Material(AIR_NAME)


def ladder(facing: Facing) -> Material:
    return Material(LADDER_NAME, facing)


# Palette used for preview meshes. Unknown materials fall back to DEFAULT_COLOR.
DEFAULT_COLOR: ColorTuple = (200, 200, 200, 255)
MATERIAL_COLORS: Dict[str, ColorTuple] = {
    "minecraft:stone": (125, 125, 125, 255),
    "minecraft:stone_bricks": (122, 121, 122, 255),
    "minecraft:mossy_stone_bricks": (115, 121, 105, 255),
    "minecraft:deepslate_bricks": (70, 70, 71, 255),
    "minecraft:polished_blackstone_bricks": (48, 42, 49, 255),
    "minecraft:pink_glazed_terracotta": (235, 154, 181, 255),
    "minecraft:cherry_wood": (54, 33, 44, 255),
    "minecraft:cherry_planks": (226, 178, 172, 255),
    "minecraft:stripped_cherry_wood": (215, 145, 148, 255),
    "minecraft:sandstone": (216, 203, 155, 255),
    "minecraft:cut_sandstone": (217, 206, 159, 255),
    "minecraft:chiseled_sandstone": (216, 202, 154, 255),
    "minecraft:smooth_sandstone": (223, 214, 170, 255),
    "minecraft:netherrack": (97, 38, 38, 255),
    "minecraft:nether_bricks": (44, 21, 26, 255),
    "minecraft:red_nether_bricks": (69, 7, 9, 255),
    "minecraft:blackstone": (42, 36, 41, 255),
    LADDER_NAME: (124, 97, 57, 255),
}


def color_for(material: Material) -> ColorTuple:
    return MATERIAL_COLORS.get(material.name, DEFAULT_COLOR)
