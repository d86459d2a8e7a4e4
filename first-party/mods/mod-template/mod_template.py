# first-party/mods/mod-template/mod_template.py
from __future__ import annotations
from typing import Any

from modgate.core.logger import getModLogger
from modgate.mods.gated_mod import GatedMod
from modgate.mods.manifest import InstalledCopy, ModDependency

NAME = "ModTemplate"
VERSION = "1.0.0"
TAG = f"[{NAME} v{VERSION}]"

logger = getModLogger(NAME)



class ModTemplateImpl:
    """The actual mod logic, created only once every dependency is loaded."""
    def __init__(self, master: Any, info: InstalledCopy):
        self.master = master
        self.info = info
        self.active = True
        logger.info("%s payload enabled", TAG)

    def deactivate(self) -> None:
        self.active = False
        logger.info("%s payload disabled", TAG)



class ModTemplate(GatedMod):
    # All dependencies listed here load before the payload does
    dependencies: tuple[str | ModDependency, ...] = (
        # ModDependency(modId="SharedLib", publishedFileId=3613297900),
    )

    def getDependencies(self):
        return list(self.dependencies)

    def createImplementation(self, master: Any, info: InstalledCopy) -> ModTemplateImpl:
        return ModTemplateImpl(master, info)
