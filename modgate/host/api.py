# modgate/host/api.py
from __future__ import annotations
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from modgate.host.events import ActivationBus
from modgate.mods.discover import scanInstalledCopies
from modgate.mods.manifest import InstalledCopy

logger = logging.getLogger(__name__)

__all__ = ["EnabledQuery", "ModHost", "CopyFlagEnabledQuery", "LocalModHost"]



@runtime_checkable
class EnabledQuery(Protocol):
    """Host activation policy for one installed copy. May raise per call."""
    def isComponentEnabled(self, copy: InstalledCopy) -> bool: ...



class ModHost(Protocol):
    """
    What gating needs from the mod host.

    `enabledQuery` is None when the host has no way to answer "is this copy
    enabled"; that is the unsupported variant callers must handle.
    """
    events: ActivationBus
    enabledQuery: EnabledQuery | None

    def installedCopies(self) -> list[InstalledCopy]: ...
    def activeModIds(self) -> Iterable[str]: ...



class CopyFlagEnabledQuery:
    """Answers from the `enabled` flag each copy carries in its manifest."""
    def isComponentEnabled(self, copy: InstalledCopy) -> bool:
        return copy.enabled



_DEFAULT_QUERY = object()



class LocalModHost:
    """
    In-process host: an installed-copies snapshot, the set of components
    resident in memory, and the activation broadcast.

    Embedders call markLoaded() as each component finishes loading.
    """
    def __init__(
        self,
        copies: Iterable[InstalledCopy] = (),
        *,
        enabledQuery: EnabledQuery | None | object = _DEFAULT_QUERY,
        events: ActivationBus | None = None,
    ) -> None:
        self._copies: list[InstalledCopy] = list(copies)
        self._active: dict[str, Any] = {}
        self.events = events or ActivationBus()
        self.enabledQuery: EnabledQuery | None = (
            CopyFlagEnabledQuery() if enabledQuery is _DEFAULT_QUERY else enabledQuery  # type: ignore[assignment]
        )

    @classmethod
    def fromRoots(cls, roots: Mapping[str, Path | str], **kwargs: Any) -> LocalModHost:
        return cls(scanInstalledCopies(roots), **kwargs)

    def installedCopies(self) -> list[InstalledCopy]:
        return list(self._copies)

    def addCopy(self, copy: InstalledCopy) -> None:
        self._copies.append(copy)

    def activeModIds(self) -> set[str]:
        return set(self._active)

    def handleOf(self, modId: str) -> Any | None:
        return self._active.get(modId)

    def markLoaded(self, modId: str, handle: Any = None, *, publish: bool = True) -> None:
        """
        Records `modId` as resident. With publish=False the component becomes
        visible to polling only, as if its activation event had been lost.
        An exception raised by an activation handler propagates after every
        handler has been called.
        """
        self._active[modId] = handle
        logger.info("Component '%s' is now loaded", modId)
        if publish:
            self.events.publish(modId, handle)

    def markUnloaded(self, modId: str) -> None:
        self._active.pop(modId, None)
