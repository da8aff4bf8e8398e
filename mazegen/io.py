import json
import logging
import os
from typing import List

import trimesh

from .constants import FILE_EXT_GLB, FILE_EXT_JSON
from .world import VoxelWorld

logger = logging.getLogger(__name__)


def _ensure_parent_dir(file_path: str):
    export_dir = os.path.dirname(file_path)
    if export_dir:
        os.makedirs(export_dir, exist_ok=True)


def export_meshes_to_glb(meshes: List[trimesh.Trimesh], file_path: str) -> str:
    """
    Exports a list of Trimesh meshes to a single GLB file (binary glTF).

    If multiple meshes are provided, they are concatenated into a single mesh
    before export.

    Args:
        meshes: A list of trimesh.Trimesh objects.
        file_path: The full path for the output GLB file.

    Returns:
        The path written, with the .glb extension added if it was missing.

    Raises:
        ValueError: If the meshes list is empty.
        Exception: Propagates exceptions from trimesh export.
    """
    if not meshes:
        raise ValueError("Cannot export an empty list of meshes.")

    if not file_path.lower().endswith(FILE_EXT_GLB):
        file_path += FILE_EXT_GLB
    _ensure_parent_dir(file_path)

    if len(meshes) > 1:
        logger.debug("Concatenating %d meshes for export", len(meshes))
        final_mesh = trimesh.util.concatenate(meshes)
    else:
        final_mesh = meshes[0]

    try:
        final_mesh.export(file_type='glb', file_obj=file_path)
    except Exception:
        logger.exception("GLB export to %s failed", file_path)
        raise
    logger.info("Exported mesh to %s", file_path)
    return file_path


def save_world_to_json(world: VoxelWorld, file_path: str) -> str:
    """
    Saves the world's blocks to a JSON file.

    Args:
        world: The VoxelWorld to save.
        file_path: The full path for the output JSON file.

    Returns:
        The path written, with the .json extension added if it was missing.
    """
    if not file_path.lower().endswith(FILE_EXT_JSON):
        file_path += FILE_EXT_JSON
    _ensure_parent_dir(file_path)

    try:
        with open(file_path, 'w') as f:
            json.dump(world.to_dict(), f, indent=2)
    except Exception:
        logger.exception("World save to %s failed", file_path)
        raise
    logger.info("Saved world to %s (%d blocks)", file_path, len(world.blocks))
    return file_path


def load_world_from_json(world: VoxelWorld, file_path: str):
    """
    Loads world state from a JSON file into the provided world (cleared first).

    Raises:
        FileNotFoundError: If the file_path does not exist.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"World file not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
        world.from_dict(data)
    except Exception:
        logger.exception("World load from %s failed", file_path)
        raise
