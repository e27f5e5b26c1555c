"""Version lookup for tcalc."""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"
_VERSION_RE = re.compile(r'^version\s*=\s*"([^"]+)"', re.MULTILINE)


def _source_tree_version() -> str | None:
    if not _PYPROJECT.is_file():
        return None
    match = _VERSION_RE.search(_PYPROJECT.read_text(encoding="utf-8"))
    return match.group(1) if match else None


def get_version() -> str:
    """Version of a source checkout first, then of the installed distribution."""
    found = _source_tree_version()
    if found:
        return found
    try:
        return _metadata_version("tcalc")
    except PackageNotFoundError:
        return "0.0.0"
