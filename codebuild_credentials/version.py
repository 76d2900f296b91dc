"""Version utility to read from environment or pyproject.toml"""

import os
import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def get_version() -> str:
    """
    Read version from BUILD_VERSION environment variable or pyproject.toml.

    Priority:
    1. BUILD_VERSION environment variable (set by release builds)
    2. pyproject.toml project.version (source checkout)
    3. installed distribution metadata
    4. "unknown" as fallback

    Returns:
        str: Version string (e.g., "1.0.0")
    """
    if build_version := os.getenv("BUILD_VERSION"):
        return build_version

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
            return data.get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        pass

    try:
        return version("codebuild-credentials")
    except PackageNotFoundError:
        return "unknown"


__version__ = get_version()
