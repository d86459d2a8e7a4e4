import sys
from collections.abc import Callable, Iterable
from typing import Any

import pytest

from modgate.config.settings import GateSettings, loadGateSettings
from modgate.gating.controller import GateController
from modgate.gating.stacking import StackRegistry
from modgate.host.api import LocalModHost
from modgate.mods.manifest import InstalledCopy
from modgate.ui.notifications import NoticePresenter



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



class SinkSpy:
    """Stands in for a mod's createImplementation(); counts calls and returns a payload."""
    def __init__(self, payload: Any = None, error: BaseException | None = None):
        self.calls = 0
        self.payload = payload if payload is not None else PayloadSpy()
        self.error = error

    def __call__(self) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload



class PayloadSpy:
    def __init__(self) -> None:
        self.deactivations = 0

    def deactivate(self) -> None:
        self.deactivations += 1



@pytest.fixture()
def registry() -> StackRegistry:
    return StackRegistry()



@pytest.fixture()
def makeHost() -> Callable[..., LocalModHost]:
    def _make(*modIds: str, disabled: Iterable[str] = (), **kwargs: Any) -> LocalModHost:
        disabledSet = set(disabled)
        copies = [InstalledCopy(modId=modId, enabled=modId not in disabledSet) for modId in modIds]
        return LocalModHost(copies, **kwargs)
    return _make



@pytest.fixture()
def makeController(registry: StackRegistry) -> Callable[..., tuple[GateController, SinkSpy]]:
    def _make(
        dependencies,
        host: LocalModHost,
        *,
        identity: str = "ModA",
        sink: SinkSpy | None = None,
        settings: GateSettings | None = None,
        **overrides: Any,
    ) -> tuple[GateController, SinkSpy]:
        sink = sink or SinkSpy()
        if settings is None:
            settings = loadGateSettings(overrides=overrides) if overrides else GateSettings()
        controller = GateController(
            identity,
            dependencies,
            host,
            sink,
            NoticePresenter(identity, registry),
            settings=settings,
        )
        return controller, sink
    return _make



@pytest.fixture()
def makeSink() -> type[SinkSpy]:
    return SinkSpy
