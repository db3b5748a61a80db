"""Version lookup for loxexpr."""

import tomllib
from importlib import metadata
from pathlib import Path

# Present only in a source checkout
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_version() -> str:
    if not _PYPROJECT.is_file():
        return "0.0.0"
    with open(_PYPROJECT, "rb") as f:
        project = tomllib.load(f).get("project", {})
    return str(project.get("version", "0.0.0"))


def get_version() -> str:
    """Installed distribution version, else the version in a checkout's pyproject.toml."""
    try:
        return metadata.version("loxexpr")
    except metadata.PackageNotFoundError:
        return _source_version()


__version__ = get_version()
