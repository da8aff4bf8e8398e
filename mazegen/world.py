from collections import Counter
from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .geometry import Vec3, Volume
from .materials import Material

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FillRecord:
    """One fill_volume call as the world received it."""
    material: Material
    volume: Volume
    tick: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"material": self.material.to_dict(), "volume": self.volume.to_list(), "tick": self.tick}


class VoxelWorld:
    """
    An unbounded voxel world addressed by integer (x, y, z).

    Empty positions are air. Every fill is recorded in `fills` in the order it
    was received so callers can replay or inspect the mutation stream.
    """

    def __init__(self, record_fills: bool = True, clock: Optional[Callable[[], int]] = None):
        self.blocks: Dict[Vec3, Material] = {}
        self.fills: List[FillRecord] = []
        self.record_fills = record_fills
        # Stamps fills with the tick they happened on
        self.clock = clock

    def fill_volume(self, material: Material, from_corner: Sequence[int], to_corner: Sequence[int]) -> Volume:
        """
        Fill an inclusive cuboid with a single material.

        Args:
            material: Block to place; air clears the positions.
            from_corner: One corner (x, y, z).
            to_corner: The opposite corner, in any order relative to the first.

        Returns:
            The normalised volume that was filled.
        """
        volume = Volume.between(from_corner, to_corner)
        if material.is_air:
            for position in volume.positions():
                self.blocks.pop(position, None)
        else:
            for position in volume.positions():
                self.blocks[position] = material
        if self.record_fills:
            self.fills.append(FillRecord(material, volume, self.clock() if self.clock else 0))
        logger.debug("Filled %s %s -> %s", material, volume.min_corner, volume.max_corner)
        return volume

    def block_at(self, x: int, y: int, z: int) -> Optional[Material]:
        """The material at a position, or None for air."""
        return self.blocks.get((x, y, z))

    def is_air(self, x: int, y: int, z: int) -> bool:
        return (x, y, z) not in self.blocks

    def count_by_material(self) -> Dict[str, int]:
        return dict(Counter(str(material) for material in self.blocks.values()))

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Min and max occupied corners; zeros for an empty world."""
        if not self.blocks:
            return np.zeros(3, dtype=int), np.zeros(3, dtype=int)
        positions = np.array(list(self.blocks.keys()), dtype=int)
        return positions.min(axis=0), positions.max(axis=0)

    def clear(self):
        """Removes all blocks and the fill history."""
        self.blocks = {}
        self.fills = []

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the world state to a dictionary."""
        palette: List[Material] = sorted(set(self.blocks.values()), key=str)
        index = {material: i for i, material in enumerate(palette)}
        return {
            "palette": [material.to_dict() for material in palette],
            "blocks": [[x, y, z, index[material]] for (x, y, z), material in sorted(self.blocks.items())],
            "fill_count": len(self.fills),
        }

    def from_dict(self, data: Dict[str, Any]):
        """Reconstructs the world state from a dictionary. The fill history is not restored."""
        self.clear()
        palette = [Material.from_dict(entry) for entry in data.get("palette", [])]
        for x, y, z, material_index in data.get("blocks", []):
            self.blocks[(int(x), int(y), int(z))] = palette[material_index]
        logger.info("World loaded from dict. Blocks: %d", len(self.blocks))
