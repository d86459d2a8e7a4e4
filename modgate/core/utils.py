# modgate/core/utils.py
from __future__ import annotations
import copy
from collections.abc import Mapping
from typing import Any, TypeVar

__all__ = ["deepCopy", "deepMerge", "joinIdentifiers"]

T = TypeVar("T")



def deepCopy(value: T) -> T:
    """Deep-copies JSON-like data, raising RuntimeError with context when that fails."""
    try:
        return copy.deepcopy(value)
    except Exception as err:
        raise RuntimeError(f"deepCopy failed - {err.__class__.__name__} {err}") from err



def deepMerge(left: Mapping[str, Any], right: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merges `right` over `left` without mutating either.

      - dicts on both sides: merged recursively
      - anything else (lists included): right replaces left
    """
    out: dict[str, Any] = {key: deepCopy(value) for key, value in left.items()}
    for key, rightValue in right.items():
        leftValue = out.get(key)
        if isinstance(leftValue, Mapping) and isinstance(rightValue, Mapping):
            out[key] = deepMerge(leftValue, rightValue)
        else:
            out[key] = deepCopy(rightValue)
    return out



def joinIdentifiers(identifiers: Any) -> str:
    """Comma-joins identifiers for user-facing notices, keeping order and dropping repeats."""
    seen: set[str] = set()
    ordered: list[str] = []
    for ident in identifiers:
        if ident in seen:
            continue
        seen.add(ident)
        ordered.append(ident)
    return ", ".join(ordered)
