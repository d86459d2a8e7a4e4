# modgate/gating/probe.py
from __future__ import annotations
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from modgate.core.errors import ProbeQueryFailure
from modgate.host.api import ModHost
from modgate.mods.manifest import InstalledCopy

logger = logging.getLogger(__name__)

__all__ = ["EnabledReport", "AvailabilityProbe"]



@dataclass(frozen=True)
class EnabledReport:
    """
    Result of the administrative check.

    apiAvailable=False is the "host cannot answer" variant: nothing was
    queried and `disabled` is empty. Callers decide whether that is fatal.
    """
    apiAvailable: bool
    disabled: tuple[str, ...] = ()
    failures: tuple[ProbeQueryFailure, ...] = ()

    @classmethod
    def unavailable(cls) -> EnabledReport:
        return cls(apiAvailable=False)



class AvailabilityProbe:
    """
    Answers the two questions gating needs from the host:

      • loaded: is the component resident in the running process? This is the
        authoritative ready signal and ignores the enabled flag.
      • enabled: does the host's activation policy enable any installed copy?

    The installed-copies registry is read once, on first use, and kept as a
    snapshot. The loaded set is read from the host on every call.
    """
    def __init__(self, host: ModHost):
        self._host = host
        self._copiesById: dict[str, list[InstalledCopy]] | None = None

    def _snapshot(self) -> dict[str, list[InstalledCopy]]:
        if self._copiesById is None:
            byId: dict[str, list[InstalledCopy]] = {}
            for copy in self._host.installedCopies():
                byId.setdefault(copy.modId, []).append(copy)
            self._copiesById = byId
        return self._copiesById

    def installedCopies(self, identifier: str) -> list[InstalledCopy]:
        return list(self._snapshot().get(identifier, ()))

    def notInstalled(self, identifiers: Iterable[str]) -> list[str]:
        """Ids with zero installed copies, in the given order without repeats."""
        snapshot = self._snapshot()
        out: list[str] = []
        for ident in identifiers:
            if ident not in snapshot and ident not in out:
                out.append(ident)
        return out

    def loadedAmong(self, identifiers: Iterable[str]) -> set[str]:
        active = set(self._host.activeModIds() or ())
        return {ident for ident in identifiers if ident in active}

    def isLoaded(self, identifier: str) -> bool:
        return identifier in self.loadedAmong((identifier,))

    @property
    def enabledQueryAvailable(self) -> bool:
        return getattr(self._host, "enabledQuery", None) is not None

    def checkEnabled(self, identifiers: Iterable[str]) -> EnabledReport:
        """
        Administrative check for installed ids. An id counts as enabled when
        any of its copies is enabled; a copy whose query raises counts as not
        enabled and the failure is recorded, never raised. Ids without
        installed copies are skipped; they are the not-installed check's job.
        """
        query = getattr(self._host, "enabledQuery", None)
        if query is None:
            return EnabledReport.unavailable()

        snapshot = self._snapshot()
        disabled: list[str] = []
        failures: list[ProbeQueryFailure] = []

        for ident in dict.fromkeys(identifiers):
            copies = snapshot.get(ident)
            if not copies:
                continue
            anyEnabled = False
            for copy in copies:
                try:
                    if query.isComponentEnabled(copy):
                        anyEnabled = True
                        break
                except Exception as err:
                    failure = ProbeQueryFailure(copy.modId, copy.source, err)
                    logger.debug("%s", failure)
                    failures.append(failure)
            if not anyEnabled:
                disabled.append(ident)

        return EnabledReport(apiAvailable=True, disabled=tuple(disabled), failures=tuple(failures))
