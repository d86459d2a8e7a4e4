# modgate/config/providers.py
from __future__ import annotations
import os
from typing import Any
from collections.abc import Mapping
from pathlib import Path
import logging

import json5

from modgate.core.dictpath import setByPath, deleteByPath
from modgate.core.utils import deepCopy
from .types import ConfigProvider

logger = logging.getLogger(__name__)

__all__ = ["OverrideProvider", "DefaultsProvider", "FileProvider"]



class OverrideProvider(ConfigProvider):
    """In-memory overrides passed by the embedder. Topmost layer, never persisted."""
    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = deepCopy(dict(data)) if data else {}

    def to_dict(self) -> dict[str, Any]:
        return deepCopy(self._data)



class DefaultsProvider(ConfigProvider):
    """Shipped defaults. Bottom layer."""
    def __init__(self, data: Mapping[str, Any]) -> None:
        if not isinstance(data, Mapping):
            raise TypeError(f"{type(self).__name__}: 'data' must be a Mapping, not '{type(data).__name__}'")
        self._data = data

    def to_dict(self) -> dict[str, Any]:
        return deepCopy(dict(self._data))



class FileProvider(ConfigProvider):
    """
    Per-user gating settings in a .json or .json5 file.

    Behavior:
        • Missing file → empty layer
        • Parse error → logs warning, empty layer
        • Non-object JSON → raises TypeError

    set() edits by dotted path (None removes the key) and save() writes the
    file atomically.
    """
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("%s: '%s' is missing → empty layer", type(self).__name__, self.path)
            return
        if not self.path.is_file():
            raise IsADirectoryError(f"{type(self).__name__}: '{self.path}' exists but is not a file")

        try:
            parsed = json5.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as err:
            logger.warning("%s: parse failed for '%s': %s", type(self).__name__, self.path, err)
            return

        if parsed is None:
            return
        if not isinstance(parsed, Mapping):
            raise TypeError(f"{type(self).__name__}: file content must be a JSON object, not '{type(parsed).__name__}'")
        self._data = dict(parsed)

    def set(self, key: str, value: Any) -> None:
        if value is None:
            deleteByPath(self._data, key, pruneEmptyParents=True)
            return
        setByPath(self._data, key, deepCopy(value), createIfMissing=True)

    def to_dict(self) -> dict[str, Any]:
        return deepCopy(self._data)

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        out = json5.dumps(self._data, indent=2, quote_keys=True)

        tmpPath = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmpPath, "w", encoding="utf-8") as fl:
            fl.write(out)
            fl.write("\n")
        os.replace(tmpPath, self.path)
        logger.debug("%s: saved %d top-level keys to '%s'", type(self).__name__, len(self._data), self.path)
