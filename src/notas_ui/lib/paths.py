"""Filesystem locations used by the dashboard."""

import tempfile
from pathlib import Path


def temp_dir() -> Path:
    """Return the system temporary directory as a Path."""
    return Path(tempfile.gettempdir())


def cache_dir(name: str) -> Path:
    """
    Return a named cache directory under the temp dir, creating it if needed.

    Args:
        name: Sub-directory name, e.g. "notas_ui_config_docs".
    """
    path = temp_dir() / name
    path.mkdir(parents=True, exist_ok=True)
    return path
