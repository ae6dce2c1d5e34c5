"""Shared JSON helpers for dashboard payloads.

Provides numpy-aware, non-finite-float sanitisation for engine output and
tolerant decoding / unwrapping of the API payloads the engine consumes.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

__all__ = [
    "as_list",
    "load_json_file",
    "safe_json_dumps",
    "safe_json_loads",
    "sanitize_for_json",
    "unwrap_data",
]

LOGGER = logging.getLogger(__name__)


def sanitize_for_json(obj: Any) -> tuple[Any, bool]:
    """Recursively replace non-finite floats (NaN, Inf, -Inf) with ``None``.

    Numpy arrays are converted to Python lists and numpy scalars to native
    Python types so the result is always plain-Python and serialisable with
    ``json.dumps(allow_nan=False)``.

    Returns the sanitised object and a boolean flag indicating whether any
    non-finite value was encountered.
    """
    found_non_finite = False

    def _walk(v: Any) -> Any:
        nonlocal found_non_finite
        if hasattr(v, "tolist") and hasattr(v, "ndim"):
            v = v.tolist()
        elif hasattr(v, "item"):
            v = v.item()
        if isinstance(v, float):
            if math.isfinite(v):
                return v
            found_non_finite = True
            return None
        if isinstance(v, dict):
            return {k: _walk(val) for k, val in v.items()}
        if isinstance(v, (list, tuple)):
            return [_walk(item) for item in v]
        return v

    cleaned = _walk(obj)
    return cleaned, found_non_finite


def safe_json_dumps(value: Any, *, indent: int | None = None) -> str:
    """Sanitise *value* and serialise it with ``allow_nan=False``."""
    cleaned, _ = sanitize_for_json(value)
    return json.dumps(cleaned, ensure_ascii=False, allow_nan=False, indent=indent)


def safe_json_loads(value: str | None, *, context: str) -> Any | None:
    """Deserialise a JSON string, returning ``None`` on empty/invalid input.

    Logs a warning (with traceback) instead of raising on malformed JSON.
    *context* is included in the warning message to identify the source::

        safe_json_loads(raw, context="file payload abc.json")
    """
    if not value:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        LOGGER.warning("Skipping invalid JSON payload while reading %s", context, exc_info=True)
        return None


def load_json_file(path: Path) -> Any | None:
    """Read and decode *path*; ``None`` when the file holds no valid JSON."""
    return safe_json_loads(path.read_text(encoding="utf-8"), context=str(path))


def unwrap_data(response: Any) -> Any:
    """Return ``response["data"]`` when present and truthy, else *response*.

    API responses arrive either bare or wrapped as ``{"data": ..., "error": ...}``.
    """
    if isinstance(response, dict):
        inner = response.get("data")
        if inner:
            return inner
    return response


def as_list(response: Any) -> list[Any] | None:
    """Return the list carried by *response* (bare or ``data``-wrapped), else ``None``."""
    if isinstance(response, list):
        return response
    if isinstance(response, dict) and isinstance(response.get("data"), list):
        return response["data"]
    return None
