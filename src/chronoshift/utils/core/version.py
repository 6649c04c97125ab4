"""
Version utilities for Chronoshift.

This module reads the project version from installed package metadata, with
a fallback to pyproject.toml for source checkouts.
"""

import logging
import tomllib
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

logger = logging.getLogger(__name__)

FALLBACK_VERSION = "1.0.0"


def _read_version_from_pyproject() -> str:
    """
    Read the version field from pyproject.toml.

    Raises:
        RuntimeError: If the file is missing or has no version
    """
    pyproject_path = Path("pyproject.toml")

    if not pyproject_path.exists():
        # Try relative to this file's location (src/chronoshift/utils/core)
        pyproject_path = Path(__file__).parents[4] / "pyproject.toml"

    if not pyproject_path.exists():
        raise RuntimeError("pyproject.toml not found")

    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise RuntimeError(f"Failed to read version from pyproject.toml: {e}") from e

    project_data = data.get("project")
    if not isinstance(project_data, dict):
        raise RuntimeError("project section not found or invalid")

    project_version = project_data.get("version")
    if not isinstance(project_version, str):
        raise RuntimeError("version field not found or not a string")

    return project_version


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """
    Get the project version.

    Raises:
        RuntimeError: If version cannot be determined from any source
    """
    try:
        return version("chronoshift")
    except PackageNotFoundError:
        logger.debug("Package metadata not found, falling back to pyproject.toml")

    return _read_version_from_pyproject()


def get_version() -> str:
    """Get the project version with error handling."""
    try:
        return get_project_version()
    except RuntimeError:
        logger.warning("Could not determine project version, using fallback")
        return FALLBACK_VERSION
