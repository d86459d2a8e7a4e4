# modgate/mods/discover.py
from __future__ import annotations
import logging
from collections.abc import Mapping
from pathlib import Path

import json5

from modgate.mods.manifest import InstalledCopy, ModManifest

logger = logging.getLogger(__name__)

__all__ = ["MANIFEST_FILENAMES", "scanInstalledCopies"]

MANIFEST_FILENAMES = ("manifest.json5", "manifest.json")



def _loadManifest(manifestPath: Path) -> ModManifest | None:
    try:
        raw = json5.loads(manifestPath.read_text(encoding="utf-8"))
        return ModManifest.model_validate(raw)
    except Exception as err:
        logger.warning("Skipping mod manifest at '%s': %s", manifestPath, err, exc_info=True)
        return None



def _findManifest(modDir: Path) -> Path | None:
    for filename in MANIFEST_FILENAMES:
        candidate = modDir / filename
        if candidate.is_file():
            return candidate
    return None



def scanInstalledCopies(roots: Mapping[str, Path | str]) -> list[InstalledCopy]:
    """
    Builds the installed-copies snapshot from labelled roots, e.g.
    {"local": Path("Mods"), "workshop": Path("workshop/content/1234")}.

    Each direct child directory holding a manifest is one installed copy.
    Copies sharing an id across (or within) roots are all kept; deciding which
    one is enabled is the enabled query's job, not discovery's.

    Order: roots in the given order, then directory names sorted.
    """
    copies: list[InstalledCopy] = []
    for source, root in roots.items():
        rootPath = Path(root)
        if not rootPath.is_dir():
            logger.debug("Mod root '%s' (%s) does not exist, skipping", rootPath, source)
            continue

        for modDir in sorted(path for path in rootPath.iterdir() if path.is_dir()):
            manifestPath = _findManifest(modDir)
            if manifestPath is None:
                continue
            manifest = _loadManifest(manifestPath)
            if manifest is None:
                continue
            copies.append(InstalledCopy(
                modId=manifest.id,
                displayName=manifest.displayName,
                source=source,
                path=modDir.as_posix(),
                enabled=manifest.enabled,
                version=manifest.version,
                publishedFileId=manifest.publishedFileId,
            ))
            logger.debug("Found installed copy '%s' (%s) at '%s'", manifest.id, source, modDir)

    logger.info("Discovered %d installed mod copies in %d root(s)", len(copies), len(roots))
    return copies
