"""
Settings Module for Tour Grid Solver

Provides persistent storage for solver preferences using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from tourgrid.solver import TourSolver, create_tie_break

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "board_size": 5,
    "move_variant": "knight",
    "node_limit": 250_000,
    "tie_break": "stable",
    "tie_break_seed": None,
    "debug_enabled": False,
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def create_solver_from_settings(settings: Dict[str, Any]) -> TourSolver:
    """
    Build a TourSolver from a settings dictionary.

    Missing keys fall back to DEFAULT_SETTINGS.

    Raises:
        InvalidVariant: If move_variant is unknown
        ValueError: If tie_break is unknown or node_limit negative
    """
    merged = DEFAULT_SETTINGS.copy()
    merged.update(settings)

    kwargs = {}
    if merged["tie_break"] == "random":
        kwargs["seed"] = merged["tie_break_seed"]
    policy = create_tie_break(merged["tie_break"], **kwargs)

    return TourSolver(
        variant=merged["move_variant"],
        node_limit=int(merged["node_limit"]),
        tie_break=policy,
    )
