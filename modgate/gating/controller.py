# modgate/gating/controller.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from enum import Enum
from typing import Any

from modgate.config.settings import GateSettings
from modgate.core.errors import DependencyDisabled, DependencyNotInstalled, GatingError, HostApiUnavailable
from modgate.core.logger import getModLogger, logContext
from modgate.core.time import nowMonotonic
from modgate.core.utils import joinIdentifiers
from modgate.gating.dependency_set import DependencySet
from modgate.gating.probe import AvailabilityProbe
from modgate.host.api import ModHost
from modgate.mods.manifest import DependencyLike, ModDependency, normalizeDependencies
from modgate.ui.localization import Localizer
from modgate.ui.notifications import NoticePresenter, Severity

logger = logging.getLogger(__name__)

__all__ = ["LOADER_VERSION", "GateState", "ActivationSink", "GateController"]

LOADER_VERSION = "1.0.0"

# Invoked exactly once when every dependency is loaded. Returns the payload handle.
ActivationSink = Callable[[], Any]



class GateState(str, Enum):
    UNINITIALIZED = "uninitialized"
    FATAL_MISSING = "fatalMissing"
    FATAL_API_UNAVAILABLE = "fatalApiUnavailable"
    WAITING_QUIET = "waitingQuiet"
    WAITING_VISIBLE = "waitingVisible"
    ACTIVATED = "activated"



FATAL_STATES = frozenset({GateState.FATAL_MISSING, GateState.FATAL_API_UNAVAILABLE})
WAITING_STATES = frozenset({GateState.WAITING_QUIET, GateState.WAITING_VISIBLE})



class GateController:
    """
    Decides when a mod's payload may run.

    setup() checks the declared dependencies once: ids with no installed copy
    halt gating for good, everything else is waited on. While waiting, the
    controller resolves ids from two sources, activation events from the host
    and a re-poll of the loaded check on tick(), because events may arrive
    before setup() subscribed. After `patienceSeconds` of waiting a warning
    notice lists what is still outstanding. Once nothing is outstanding the
    sink runs exactly once and the controller is done.

    Event handlers and ticks arriving after activation, a fatal halt or
    teardown are ignored.
    """
    def __init__(
        self,
        identity: str,
        dependencies: Iterable[DependencyLike] | None,
        host: ModHost,
        sink: ActivationSink,
        presenter: NoticePresenter,
        *,
        settings: GateSettings | None = None,
        localizer: Localizer | None = None,
    ):
        self.identity = identity
        self.settings = settings or GateSettings()
        self._declared: list[ModDependency] = normalizeDependencies(dependencies)
        self._host = host
        self._sink = sink
        self._presenter = presenter
        self._localizer = localizer or Localizer.fromDirectory(self.settings.ui.language, self.settings.ui.localeDir)
        self._probe = AvailabilityProbe(host)
        self._pending = DependencySet(dep.modId for dep in self._declared)
        self._log = getModLogger(identity)

        self._state = GateState.UNINITIALIZED
        self._subscribed = False
        self._tornDown = False
        self._elapsed = 0.0
        self._sincePoll = 0.0
        self._payload: Any = None
        self._haltReason: GatingError | None = None

    # ----------------------------------------------
    #                   Properties
    # ----------------------------------------------

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def presenter(self) -> NoticePresenter:
        return self._presenter

    @property
    def probe(self) -> AvailabilityProbe:
        return self._probe

    @property
    def outstanding(self) -> tuple[str, ...]:
        return self._pending.outstanding()

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def payload(self) -> Any:
        return self._payload

    @property
    def haltReason(self) -> GatingError | None:
        return self._haltReason

    @property
    def isSubscribed(self) -> bool:
        return self._subscribed

    @property
    def isTornDown(self) -> bool:
        return self._tornDown

    @property
    def isWaiting(self) -> bool:
        return not self._tornDown and self._state in WAITING_STATES

    @property
    def isSettled(self) -> bool:
        """True once nothing can change any more: activated, halted or torn down."""
        return self._tornDown or self._state is GateState.ACTIVATED or self._state in FATAL_STATES

    # ----------------------------------------------
    #                   Lifecycle
    # ----------------------------------------------

    def setup(self) -> GateState:
        if self._tornDown or self._state is not GateState.UNINITIALIZED:
            self._log.warning("setup() called twice; staying in state '%s'", self._state.value)
            return self._state

        with self._logScope():
            self._log.info("Initializing dependency gate v%s ...", LOADER_VERSION)

            if not self._declared:
                self._activate()
                return self._state

            try:
                disabled = self._checkDependencies()
            except DependencyNotInstalled as err:
                self._halt(GateState.FATAL_MISSING, err, self._missingMessage(err.identifiers))
                return self._state
            except HostApiUnavailable as err:
                self._halt(GateState.FATAL_API_UNAVAILABLE, err, self._localizer.text(err.messageKey))
                return self._state

            removed = self._pending.removeIfAvailable(self._probe)
            if removed:
                self._log.debug("Already loaded: %s", joinIdentifiers(removed))

            if self._pending.isEmpty():
                self._activate()
                return self._state

            self._host.events.subscribe(self._onModActivated)
            self._subscribed = True

            stillDisabled = [ident for ident in disabled if ident in self._pending]
            if stillDisabled:
                # Advisory only: the player may tick the box in the mod list any moment
                err = DependencyDisabled(stillDisabled)
                self._showWarning(err.titleKey, err.messageKey, stillDisabled)
                self._state = GateState.WAITING_VISIBLE
                self._log.warning("Waiting for dependencies to be enabled: %s", joinIdentifiers(stillDisabled))
            else:
                self._state = GateState.WAITING_QUIET
                self._log.info("Waiting for load order: %s", joinIdentifiers(self._pending))
            return self._state

    def tick(self, deltaSeconds: float) -> GateState:
        """Advance time by `deltaSeconds`. Called by the host every frame while waiting."""
        if not self.isWaiting:
            return self._state

        delta = max(0.0, float(deltaSeconds))
        self._elapsed += delta
        self._sincePoll += delta

        with self._logScope():
            if self._sincePoll >= self.settings.gating.pollIntervalSeconds:
                self._sincePoll = 0.0
                removed = self._pending.removeIfAvailable(self._probe)
                if removed:
                    self._log.debug("Found loaded by polling: %s", joinIdentifiers(removed))
                if self._pending.isEmpty():
                    self._activate()
                    return self._state

            if self._state is GateState.WAITING_QUIET and self._elapsed >= self.settings.gating.patienceSeconds:
                self._showWarning("WAITING_TITLE", "WAITING_MSG", self._pending.outstanding())
                self._state = GateState.WAITING_VISIBLE
                self._log.info("Still waiting after %.1fs: %s", self._elapsed, joinIdentifiers(self._pending))

        return self._state

    def onModActivated(self, identifier: str, handle: Any = None) -> None:
        """Host activation event. Safe to call at any time, any number of times."""
        self._onModActivated(identifier, handle)

    def _onModActivated(self, identifier: str, handle: Any) -> None:
        if not self.isWaiting:
            return
        if not self._pending.remove(identifier):
            return
        with self._logScope():
            self._log.debug("Dependency '%s' activated, %d outstanding", identifier, len(self._pending))
            if self._pending.isEmpty():
                self._activate()

    def dismissNotice(self) -> None:
        """Player closed the notice. Gating state is not affected."""
        self._presenter.dismiss()

    def teardown(self) -> None:
        """Host is deactivating the mod. Idempotent."""
        if self._tornDown:
            return
        self._tornDown = True

        with self._logScope():
            self._unsubscribe()
            self._presenter.clear()
            self._log.debug("Torn down in state '%s'", self._state.value)

            if self._state is GateState.ACTIVATED:
                deactivate = getattr(self._payload, "deactivate", None)
                if callable(deactivate):
                    deactivate()

    async def waitUntilSettled(
        self,
        tickSeconds: float | None = None,
        *,
        clock: Callable[[], float] = nowMonotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> GateState:
        """
        Cooperative wait routine: yields every `tickSeconds`, feeds the real
        elapsed time into tick() and returns once the controller has settled.
        Waits indefinitely for slow dependencies; cancel the task to stop.
        """
        if self._state is GateState.UNINITIALIZED and not self._tornDown:
            raise RuntimeError(f"GateController '{self.identity}': call setup() before waitUntilSettled()")

        interval = tickSeconds if tickSeconds is not None else self.settings.gating.tickSeconds
        last = clock()
        while not self.isSettled:
            await sleep(interval)
            now = clock()
            self.tick(now - last)
            last = now
        return self._state

    # ----------------------------------------------
    #                   Internals
    # ----------------------------------------------

    def _checkDependencies(self) -> list[str]:
        """
        Raises DependencyNotInstalled or (strict policy) HostApiUnavailable.
        Returns the installed ids no enabled copy exists for.
        """
        ids = [dep.modId for dep in self._declared]

        # Strict hosts must answer the enabled question before anything else is looked at
        if self.settings.gating.hostApiPolicy == "strict" and not self._probe.enabledQueryAvailable:
            raise HostApiUnavailable()

        missing = self._probe.notInstalled(ids)
        if missing:
            raise DependencyNotInstalled(missing)

        report = self._probe.checkEnabled(ids)
        if not report.apiAvailable:
            self._log.warning("Host cannot report enabled state; waiting optimistically for: %s", joinIdentifiers(ids))
            return []

        for failure in report.failures:
            self._log.debug("Treating copy as disabled: %s", failure)
        return list(report.disabled)

    def _logScope(self):
        return logContext(modId=self.identity, gateState=self._state.value)

    def _missingMessage(self, identifiers: Iterable[str]) -> str:
        ids = list(identifiers)
        lines = [self._localizer.text("MISSING_MSG"), joinIdentifiers(ids)]
        urls = [dep.subscribeUrl for dep in self._declared if dep.modId in ids and dep.subscribeUrl]
        if urls:
            lines.append(self._localizer.text("SUBSCRIBE_LINK"))
            lines.extend(dict.fromkeys(urls))
        return "\n".join(lines)

    def _showWarning(self, titleKey: str, messageKey: str, identifiers: Iterable[str]) -> None:
        self._presenter.show(
            self._localizer.text(titleKey),
            f"{self._localizer.text(messageKey)}\n{joinIdentifiers(identifiers)}",
            Severity.WARNING,
        )

    def _halt(self, state: GateState, err: GatingError, message: str) -> None:
        self._state = state
        self._haltReason = err
        self._presenter.show(self._localizer.text(err.titleKey), message, Severity.FATAL)

    def _unsubscribe(self) -> None:
        if self._subscribed:
            self._host.events.unsubscribe(self._onModActivated)
            self._subscribed = False

    def _activate(self) -> None:
        self._unsubscribe()
        self._presenter.clear()
        # State first: a raising sink must never be invoked a second time
        self._state = GateState.ACTIVATED
        self._log.info("All dependencies ready, activating after %.1fs", self._elapsed)
        self._payload = self._sink()
