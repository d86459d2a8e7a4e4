# modgate/mods/gated_mod.py
from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from modgate.config.settings import GateSettings
from modgate.core.logger import getModLogger
from modgate.gating.controller import GateController, GateState
from modgate.gating.stacking import StackRegistry
from modgate.host.api import ModHost
from modgate.mods.manifest import DependencyLike, InstalledCopy
from modgate.ui.localization import Localizer
from modgate.ui.notifications import NoticePresenter

__all__ = ["GatedMod"]



class GatedMod(ABC):
    """
    Base class for a mod whose real logic must wait for other mods.

    Subclasses declare their dependencies and build the payload; the host
    drives the lifecycle:

        mod = MyMod(host, registry, info=InstalledCopy(modId="MyMod"))
        mod.onAfterSetup()          # once, after the host set the mod up
        mod.onUpdate(deltaSeconds)  # every frame
        mod.onBeforeDeactivate()    # when the host unloads the mod

    createImplementation() runs at most once, when every dependency is loaded.
    """
    def __init__(
        self,
        host: ModHost,
        registry: StackRegistry,
        *,
        info: InstalledCopy,
        master: Any = None,
        settings: GateSettings | None = None,
        localizer: Localizer | None = None,
    ):
        self.host = host
        self.registry = registry
        self.info = info
        self.master = master
        self.settings = settings or GateSettings()
        self.localizer = localizer or Localizer.fromDirectory(self.settings.ui.language, self.settings.ui.localeDir)
        self.log = getModLogger(info.modId)
        self._controller: GateController | None = None

    @abstractmethod
    def getDependencies(self) -> Sequence[DependencyLike]:
        """Ids (or ModDependency values) that must be loaded first. May be empty."""

    @abstractmethod
    def createImplementation(self, master: Any, info: InstalledCopy) -> Any:
        """Build and return the payload. Exceptions propagate to the host."""

    @property
    def identity(self) -> str:
        return self.info.modId

    @property
    def controller(self) -> GateController:
        if self._controller is None:
            raise RuntimeError(f"Mod '{self.identity}' has not been set up yet")
        return self._controller

    @property
    def presenter(self) -> NoticePresenter:
        return self.controller.presenter

    @property
    def isLoaded(self) -> bool:
        return self._controller is not None and self._controller.state is GateState.ACTIVATED

    def onAfterSetup(self) -> GateState:
        if self._controller is not None:
            self.log.warning("onAfterSetup() called twice, ignoring")
            return self._controller.state

        presenter = NoticePresenter(
            self.identity,
            self.registry,
            displayName=self.info.displayName or self.identity,
        )
        self._controller = GateController(
            self.identity,
            self.getDependencies(),
            self.host,
            self._createPayload,
            presenter,
            settings=self.settings,
            localizer=self.localizer,
        )
        return self._controller.setup()

    def onUpdate(self, deltaSeconds: float) -> None:
        if self._controller is not None:
            self._controller.tick(deltaSeconds)

    def onBeforeDeactivate(self) -> None:
        if self._controller is not None:
            self._controller.teardown()

    def _createPayload(self) -> Any:
        return self.createImplementation(self.master, self.info)
