"""
Object helpers for cache keys and log-friendly JSON.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


def cache_key(*parts: Any) -> str:
    """
    Build a stable hexadecimal key from arbitrary JSON-friendly parts.

    Args:
        *parts: Values identifying the cached item (URL, invoice number...).

    Returns:
        SHA-256 hex digest of the parts serialized with sorted keys.
    """
    payload = json.dumps(list(parts), sort_keys=True, default=_default_serializer)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def to_json(obj: Any, indent: int | None = None) -> str:
    """Serialize dataclasses, enums and decimals to a JSON string."""
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_default_serializer, indent=indent, ensure_ascii=False)


def _default_serializer(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Decimal):
        return str(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return str(obj)
