"""
Logging utilities for the Notas Fiscais dashboard.

Every module gets its logger through `logger(__file__)`. File paths are
turned into dotted module names below the `notas_ui` package so log lines
read `notas_ui.services.member_service_impl` instead of a bare file stem.
"""

import logging
import os
from pathlib import Path

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_ROOT = "notas_ui"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logger(name: str) -> logging.Logger:
    """
    Return the logger for a module.

    Args:
        name: Logger name or the module's `__file__`.

    Returns:
        A logger that propagates to the configured `notas_ui` root logger.
    """
    _configure_root()
    return logging.getLogger(_module_name(name))


def _module_name(name: str) -> str:
    if "/" not in name and "\\" not in name:
        return name
    parts = list(Path(name).with_suffix("").parts)
    if _ROOT in parts:
        parts = parts[parts.index(_ROOT) :]
        if parts[-1] == "__init__":
            parts = parts[:-1]
        return ".".join(parts)
    return Path(name).stem


def _configure_root() -> None:
    root = logging.getLogger(_ROOT)
    if root.handlers:
        return
    root.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
