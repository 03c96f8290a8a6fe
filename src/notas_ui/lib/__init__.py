"""
Support modules shared across the dashboard.

Modules:
    logs: Logger factory
    objects: Cache keys and JSON helpers
    paths: Temp and cache directories
    caches: Disk-based caching with TTL support
    debounce: Asyncio debouncer for search inputs
    supersede: Latest-request tracking for fetches
"""

from notas_ui.lib import caches, debounce, logs, objects, paths, supersede

__all__ = ["caches", "debounce", "logs", "objects", "paths", "supersede"]
