# modgate/ui/localization.py
from __future__ import annotations
import logging
from collections.abc import Mapping
from pathlib import Path

import json5

logger = logging.getLogger(__name__)

__all__ = ["TEXT_KEYS", "ENGLISH", "Localizer", "loadLocaleTable"]

TEXT_KEYS = (
    "API_ERR_TITLE",
    "API_ERR_MSG",
    "MISSING_TITLE",
    "MISSING_MSG",
    "DISABLED_TITLE",
    "DISABLED_MSG",
    "WAITING_TITLE",
    "WAITING_MSG",
    "SUBSCRIBE_LINK",
    "CLOSE_BTN",
)

ENGLISH: dict[str, str] = {
    "API_ERR_TITLE": "API Error",
    "API_ERR_MSG": "Cannot ask the mod host whether dependencies are enabled, please contact the author.",
    "MISSING_TITLE": "Missing Dependency",
    "MISSING_MSG": "Please subscribe to the following MODs:",
    "DISABLED_TITLE": "Dependency Disabled",
    "DISABLED_MSG": "Dependency library is disabled, please check it in the MOD list:",
    "WAITING_TITLE": "Waiting for Dependencies",
    "WAITING_MSG": "Still waiting for the following MODs to finish loading:",
    "SUBSCRIBE_LINK": "Workshop:",
    "CLOSE_BTN": "[ Click to Close ]",
}



def loadLocaleTable(path: Path | str) -> dict[str, str]:
    """Reads a flat {key: text} JSON5 table. Non-string values are dropped with a warning."""
    path = Path(path)
    raw = json5.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, Mapping):
        raise TypeError(f"Locale table '{path}' must be a JSON object, not '{type(raw).__name__}'")
    table: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(value, str):
            logger.warning("Locale table '%s': key '%s' is not a string, skipping", path, key)
            continue
        table[str(key)] = value
    return table



class Localizer:
    """
    Key → text lookups for notices. Resolution: selected language table,
    then English, then the key itself.
    """
    def __init__(self, language: str = "en", tables: Mapping[str, Mapping[str, str]] | None = None):
        self.language = language
        self._tables: dict[str, dict[str, str]] = {"en": dict(ENGLISH)}
        for lang, table in (tables or {}).items():
            self._tables.setdefault(lang, {}).update(table)

    @classmethod
    def fromDirectory(cls, language: str, localeDir: Path | str | None) -> Localizer:
        """Loads every <lang>.json5 / <lang>.json under `localeDir`."""
        tables: dict[str, dict[str, str]] = {}
        if localeDir is not None:
            base = Path(localeDir)
            if base.is_dir():
                for file in sorted(base.iterdir()):
                    if file.suffix not in (".json5", ".json") or not file.is_file():
                        continue
                    try:
                        tables[file.stem] = loadLocaleTable(file)
                    except Exception as err:
                        logger.warning("Skipping locale table '%s': %s", file, err)
            else:
                logger.warning("Locale directory '%s' does not exist", base)
        return cls(language, tables)

    def text(self, key: str) -> str:
        table = self._tables.get(self.language)
        if table and key in table:
            return table[key]
        return self._tables["en"].get(key, key)
