"""
BlockMaze Configuration Module

Centralized configuration management for the BlockMaze generator.
Loads settings from environment variables with sensible defaults.

Usage:
    from config import config
    wall_height = config.MAZE_WALL_HEIGHT
    export_dir = config.EXPORT_DIR
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from mazegen.constants import (
    CONNECTOR_DELAY_TURNS,
    DEFAULT_FLOORS,
    DEFAULT_PATH_WIDTH,
    DEFAULT_SIZE_X,
    DEFAULT_SIZE_Z,
    DEFAULT_WALL_HEIGHT,
    MAX_TICKS_DEFAULT,
    RANDOM_THEME,
)
from mazegen.themes import get_themes

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    """
    Configuration class for BlockMaze.

    Attributes are loaded from environment variables with fallback defaults.
    """

    # =============================================================================
    # Maze Defaults
    # =============================================================================

    @property
    def MAZE_SIZE_X(self) -> int:
        """Default maze footprint along X, in nodes"""
        return int(os.getenv('MAZE_SIZE_X', str(DEFAULT_SIZE_X)))

    @property
    def MAZE_SIZE_Z(self) -> int:
        """Default maze footprint along Z, in nodes"""
        return int(os.getenv('MAZE_SIZE_Z', str(DEFAULT_SIZE_Z)))

    @property
    def MAZE_WALL_HEIGHT(self) -> int:
        """Default wall height in blocks"""
        return int(os.getenv('MAZE_WALL_HEIGHT', str(DEFAULT_WALL_HEIGHT)))

    @property
    def MAZE_PATH_WIDTH(self) -> int:
        """Default passage width in blocks"""
        return int(os.getenv('MAZE_PATH_WIDTH', str(DEFAULT_PATH_WIDTH)))

    @property
    def MAZE_FLOORS(self) -> int:
        """Default number of stacked floors"""
        return int(os.getenv('MAZE_FLOORS', str(DEFAULT_FLOORS)))

    @property
    def MAZE_THEME(self) -> Optional[str]:
        """Default theme name (unset picks a random theme per floor)"""
        return os.getenv('MAZE_THEME', None)

    # =============================================================================
    # Scheduling
    # =============================================================================

    @property
    def CONNECTOR_DELAY_TURNS(self) -> int:
        """Turns to wait before ladders are placed between floors"""
        return int(os.getenv('CONNECTOR_DELAY_TURNS', str(CONNECTOR_DELAY_TURNS)))

    @property
    def MAX_TICKS(self) -> int:
        """Upper bound on ticks for a headless generation run"""
        return int(os.getenv('MAX_TICKS', str(MAX_TICKS_DEFAULT)))

    # =============================================================================
    # File Paths
    # =============================================================================

    @property
    def PROJECT_ROOT(self) -> Path:
        """Project root directory"""
        return Path(__file__).parent

    @property
    def EXPORT_DIR(self) -> Path:
        """Default directory for GLB exports"""
        export_dir = Path(os.getenv('EXPORT_DIR', 'exports'))
        if not export_dir.is_absolute():
            export_dir = self.PROJECT_ROOT / export_dir
        return export_dir

    @property
    def SAVE_DIR(self) -> Path:
        """Default directory for JSON world saves"""
        save_dir = Path(os.getenv('SAVE_DIR', 'saves'))
        if not save_dir.is_absolute():
            save_dir = self.PROJECT_ROOT / save_dir
        return save_dir

    # =============================================================================
    # Debug/Development
    # =============================================================================

    @property
    def DEBUG(self) -> bool:
        """Enable debug mode"""
        return _env_bool('DEBUG', 'False')

    @property
    def LOG_LEVEL(self) -> str:
        """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"""
        level = os.getenv('LOG_LEVEL', 'INFO').upper()
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        return level if level in valid_levels else 'INFO'

    @property
    def VERBOSE(self) -> bool:
        """Enable verbose output during generation"""
        return _env_bool('VERBOSE', 'False')

    # =============================================================================
    # Helper Methods
    # =============================================================================

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of warnings/errors.

        Returns:
            List of warning/error messages (empty if all OK)
        """
        issues = []

        try:
            dimensions = {
                'MAZE_SIZE_X': self.MAZE_SIZE_X,
                'MAZE_SIZE_Z': self.MAZE_SIZE_Z,
                'MAZE_WALL_HEIGHT': self.MAZE_WALL_HEIGHT,
                'MAZE_PATH_WIDTH': self.MAZE_PATH_WIDTH,
                'MAZE_FLOORS': self.MAZE_FLOORS,
                'CONNECTOR_DELAY_TURNS': self.CONNECTOR_DELAY_TURNS,
                'MAX_TICKS': self.MAX_TICKS,
            }
        except ValueError as exc:
            return [f"Numeric setting is not an integer: {exc}"]

        for name, value in dimensions.items():
            if value < 1:
                issues.append(f"{name} must be a positive integer (got {value})")

        if self.MAZE_SIZE_X < 2 or self.MAZE_SIZE_Z < 2:
            issues.append("Maze footprints below 2x2 produce a single-cell floor")

        if self.MAZE_THEME:
            if self.MAZE_THEME not in get_themes() and self.MAZE_THEME != RANDOM_THEME:
                issues.append(f"Unknown theme '{self.MAZE_THEME}'; a random theme will be used")

        return issues

    def get_summary(self) -> str:
        """
        Get human-readable configuration summary.

        Returns:
            Formatted configuration summary string
        """
        lines = [
            "BlockMaze Configuration:",
            f"  Project Root: {self.PROJECT_ROOT}",
            f"  Export Dir: {self.EXPORT_DIR}",
            f"  Save Dir: {self.SAVE_DIR}",
            "",
            "Maze Defaults:",
            f"  Footprint: {self.MAZE_SIZE_X}x{self.MAZE_SIZE_Z}",
            f"  Wall Height: {self.MAZE_WALL_HEIGHT}",
            f"  Path Width: {self.MAZE_PATH_WIDTH}",
            f"  Floors: {self.MAZE_FLOORS}",
            f"  Theme: {self.MAZE_THEME or 'random'}",
            "",
            "Scheduling:",
            f"  Connector delay: {self.CONNECTOR_DELAY_TURNS} turns",
            f"  Max ticks: {self.MAX_TICKS}",
            "",
            "Debug:",
            f"  Debug mode: {self.DEBUG}",
            f"  Log level: {self.LOG_LEVEL}",
            f"  Verbose: {self.VERBOSE}",
        ]
        return "\n".join(lines)


# Global config instance
config = Config()


def check_config() -> list[str]:
    """
    Check configuration and log warnings.
    Call this at application startup.
    """
    issues = config.validate()
    for issue in issues:
        logging.getLogger(__name__).warning("Configuration: %s", issue)
    return issues


if __name__ == "__main__":
    # Allow running as script to check configuration
    print(config.get_summary())
    print()

    issues = config.validate()
    if issues:
        print("Issues found:")
        for issue in issues:
            print(f"   - {issue}")
    else:
        print("Configuration valid!")
