"""
Configuration management for Recipe Studio.

This module centralizes environment variable loading from .env file at project root.
It should be imported early in both backend (api/main.py) and frontend (streamlit_app/app.py)
to ensure .env is loaded before any other code accesses environment variables.

In production .env will usually not exist; load_dotenv() is safe to call and will no-op,
and platform environment variables are used instead.

Environment Variables:
- RESULTS_PER_PAGE: Optional, search results per page (default: 10)
- DEFAULT_INGREDIENT_ROWS: Optional, blank ingredient rows in a new recipe form (default: 3)
- ICONS_URL: Optional, URL of the SVG icon sprite (default: "img/icons.svg")
- MODAL_CLOSE_SEC: Optional, seconds before the form closes after a successful upload (default: 2.5)
- EVENT_LOG_FILE: Optional, path of the JSONL interaction log (default: "events.log")
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    This function locates the project root by going up from this file's location
    (api/config.py -> project root) and loads .env if it exists.

    Safe to call multiple times. Existing environment variables take precedence.
    """
    this_file = Path(__file__).resolve()
    project_root = this_file.parent.parent
    env_path = project_root / ".env"

    # override=False means existing env vars take precedence
    load_dotenv(env_path, override=False)


# Load .env file on module import
load_env_file()


def _get_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%d: must be at least %d, using %d", name, value, minimum, default)
        return default
    return value


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default


class PaginationConfig:
    """Configuration for search result pagination."""

    @staticmethod
    def get_results_per_page() -> int:
        """
        Get the number of search results shown per page.

        Returns:
            Page size (default: 10)
        """
        return _get_int("RESULTS_PER_PAGE", 10, minimum=1)


class RecipeFormConfig:
    """Configuration for the add/edit recipe form."""

    @staticmethod
    def get_default_ingredient_rows() -> int:
        """
        Get the number of blank ingredient rows shown when creating a recipe.

        Returns:
            Row count (default: 3)
        """
        return _get_int("DEFAULT_INGREDIENT_ROWS", 3, minimum=0)

    @staticmethod
    def get_icons_url() -> str:
        """
        Get the URL of the SVG sprite that icon references point into.

        Returns:
            Sprite URL (default: "img/icons.svg")
        """
        return os.getenv("ICONS_URL", "img/icons.svg")

    @staticmethod
    def get_modal_close_seconds() -> float:
        """
        Get the delay before the form window closes after a successful upload.

        Returns:
            Seconds (default: 2.5)
        """
        return _get_float("MODAL_CLOSE_SEC", 2.5)
