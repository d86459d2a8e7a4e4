# modgate/core/jsonutils.py
from __future__ import annotations

import json
from collections.abc import Mapping, Iterable
from dataclasses import is_dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Any

__all__ = ["safeJsonDumps", "tryJSONify"]



def safeJsonDumps(obj: object) -> str:
    """
    Serializes an object to a compact JSON string (used for JSON log lines).
    If direct encoding fails, falls back to tryJSONify and retries.
    """
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except Exception:
        return json.dumps(tryJSONify(obj), ensure_ascii=False, allow_nan=False, separators=(",", ":"))



def tryJSONify(obj: Any, *, _seen: set[int] | None = None, _depth: int = 0, _maxDepth: int = 10) -> Any:
    """
    Best-effort conversion of `obj` into JSON-safe data.

    Scalars pass through, enums become their value, dataclasses and pydantic
    models become dicts, sets/tuples/iterables become lists, and anything else
    becomes repr(obj). Cycles and excessive depth are replaced by markers.
    """
    if _seen is None:
        _seen = set()

    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        return obj if obj == obj and obj not in (float("inf"), float("-inf")) else repr(obj)

    oid = id(obj)
    if oid in _seen:
        return f"<circular_ref {type(obj).__name__}>"
    if _depth > _maxDepth:
        return f"<max_depth_exceeded {type(obj).__name__}>"
    _seen.add(oid)

    def _next(value: Any) -> Any:
        return tryJSONify(value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth)

    if isinstance(obj, Enum):
        return _next(obj.value)
    if isinstance(obj, BaseException):
        return {"type": type(obj).__name__, "message": str(obj)}
    if is_dataclass(obj) and not isinstance(obj, type):
        return _next(asdict(obj))
    if hasattr(obj, "model_dump"):
        try:
            return _next(obj.model_dump())
        except Exception:
            return repr(obj)
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Mapping):
        return {str(key): _next(value) for key, value in obj.items()}
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return repr(bytes(obj))
    if isinstance(obj, Iterable):
        return [_next(value) for value in obj]
    return repr(obj)
