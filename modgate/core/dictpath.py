# modgate/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import MutableMapping

__all__ = ["splitPath", "setByPath", "deleteByPath"]



def splitPath(path: str) -> list[str]:
    """
    Splits a dotted settings path into segments. Backslash escapes the next
    character, so a literal dot inside a key is written as '\\.'.

    Examples:
      - gating.patienceSeconds -> ["gating", "patienceSeconds"]
      - mods.My\\.Lib.enabled  -> ["mods", "My.Lib", "enabled"]

    Raises ValueError on empty paths, empty segments or a dangling escape.
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Path must be a non-empty string")

    parts: list[str] = []
    curr: list[str] = []
    esc = False
    for ch in path:
        if esc:
            curr.append(ch)
            esc = False
            continue
        if ch == "\\":
            esc = True
            continue
        if ch == ".":
            parts.append("".join(curr))
            curr = []
            continue
        curr.append(ch)
    if esc:
        raise ValueError("Path ends with a dangling escape (trailing backslash)")
    parts.append("".join(curr))

    if any(part == "" for part in parts):
        raise ValueError(f"Path '{path}' contains empty segment(s)")
    return parts



def setByPath(obj: MutableMapping[str, Any], path: str, value: Any, *, createIfMissing: bool = False) -> None:
    """
    Sets the value at `path`. Intermediate mappings are created only when
    `createIfMissing` is True, otherwise a missing hop raises KeyError.
    Walking into a non-mapping value raises TypeError.
    """
    parts = splitPath(path)

    current: Any = obj
    for part in parts[:-1]:
        if not isinstance(current, MutableMapping):
            raise TypeError(f"Cannot descend into '{part}': {type(current).__name__} is not a mutable mapping")
        if part not in current:
            if not createIfMissing:
                raise KeyError(f"path segment '{part}' not found in mapping")
            current[part] = {}
        current = current[part]

    if not isinstance(current, MutableMapping):
        raise TypeError(f"Cannot write '{parts[-1]}' into {type(current).__name__}")
    current[parts[-1]] = value



def deleteByPath(obj: MutableMapping[str, Any], path: str, *, pruneEmptyParents: bool = True) -> bool:
    """
    Deletes the value at `path`. Returns True if something was removed.

    With pruneEmptyParents=True, intermediate mappings left empty by the
    removal are removed too (never the root itself).
    """
    parts = splitPath(path)

    stack: list[tuple[MutableMapping[str, Any], str]] = []
    current: Any = obj
    for part in parts[:-1]:
        if not isinstance(current, MutableMapping) or part not in current:
            return False
        stack.append((current, part))
        current = current[part]

    last = parts[-1]
    if not isinstance(current, MutableMapping) or last not in current:
        return False
    del current[last]

    if pruneEmptyParents:
        for parent, key in reversed(stack):
            child = parent.get(key)
            if isinstance(child, MutableMapping) and len(child) == 0:
                del parent[key]
            else:
                break
    return True
