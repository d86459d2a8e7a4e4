# tests/modgate/mods/test_gated_mod.py
from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

import json5
import pytest

from modgate.gating.controller import GateState
from modgate.mods.gated_mod import GatedMod
from modgate.mods.manifest import InstalledCopy, ModDependency, ModManifest

TEMPLATE_DIR = Path(__file__).resolve().parents[3] / "first-party" / "mods" / "mod-template"



class RecordingMod(GatedMod):
    def __init__(self, *args, dependencies=(), **kwargs):
        super().__init__(*args, **kwargs)
        self._dependencies = list(dependencies)
        self.created: list[tuple[Any, InstalledCopy]] = []

    def getDependencies(self):
        return self._dependencies

    def createImplementation(self, master, info):
        self.created.append((master, info))
        return {"master": master}



def _info(modId: str = "ModA") -> InstalledCopy:
    return InstalledCopy(modId=modId, displayName="Mod A")


def test_controller_requires_setup(makeHost, registry):
    mod = RecordingMod(makeHost(), registry, info=_info())
    with pytest.raises(RuntimeError):
        _ = mod.controller
    assert not mod.isLoaded
    mod.onUpdate(1.0)
    mod.onBeforeDeactivate()


def test_no_dependencies_creates_payload_on_setup(makeHost, registry):
    master = object()
    mod = RecordingMod(makeHost(), registry, info=_info(), master=master)

    assert mod.onAfterSetup() is GateState.ACTIVATED
    assert mod.isLoaded
    assert mod.created == [(master, mod.info)]
    assert mod.controller.payload == {"master": master}


def test_waits_then_activates_from_event(makeHost, registry):
    host = makeHost("LibA")
    mod = RecordingMod(host, registry, info=_info(), dependencies=["LibA"])

    assert mod.onAfterSetup() is GateState.WAITING_QUIET
    mod.onUpdate(0.1)
    assert mod.created == []

    host.markLoaded("LibA")
    assert mod.isLoaded
    assert len(mod.created) == 1


def test_missing_dependency_notice_uses_display_name(makeHost, registry):
    mod = RecordingMod(
        makeHost(), registry, info=_info(),
        dependencies=[ModDependency(modId="LibA", publishedFileId=7)],
    )

    assert mod.onAfterSetup() is GateState.FATAL_MISSING
    notice = mod.presenter.notice
    assert notice is not None
    assert notice.title == "[Mod A] Missing Dependency"
    assert "https://steamcommunity.com/sharedfiles/filedetails/?id=7" in notice.message
    assert registry.isPresenting("ModA")


def test_second_setup_is_ignored(makeHost, registry):
    mod = RecordingMod(makeHost(), registry, info=_info())
    mod.onAfterSetup()
    controller = mod.controller
    assert mod.onAfterSetup() is GateState.ACTIVATED
    assert mod.controller is controller
    assert len(mod.created) == 1


def test_deactivate_tears_down_waiting_gate(makeHost, registry):
    host = makeHost("LibA")
    mod = RecordingMod(host, registry, info=_info(), dependencies=["LibA"])
    mod.onAfterSetup()

    mod.onBeforeDeactivate()
    host.markLoaded("LibA")

    assert mod.controller.isTornDown
    assert mod.created == []
    assert len(host.events) == 0


def test_localizer_loaded_from_settings(makeHost, registry, tmp_path: Path):
    (tmp_path / "de.json5").write_text(json5.dumps({"MISSING_TITLE": "Fehlt"}), encoding="utf-8")
    from modgate.config.settings import loadGateSettings
    settings = loadGateSettings(overrides={"ui": {"language": "de", "localeDir": str(tmp_path)}})

    mod = RecordingMod(makeHost(), registry, info=_info(), settings=settings, dependencies=["LibA"])
    mod.onAfterSetup()

    assert mod.presenter.notice.title == "[Mod A] Fehlt"



def _loadTemplateModule():
    spec = importlib.util.spec_from_file_location("mod_template", TEMPLATE_DIR / "mod_template.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_template_manifest_is_valid():
    raw = json5.loads((TEMPLATE_DIR / "manifest.json5").read_text(encoding="utf-8"))
    manifest = ModManifest.model_validate(raw)
    assert manifest.id == "ModTemplate"


def test_template_mod_lifecycle(makeHost, registry):
    module = _loadTemplateModule()
    info = InstalledCopy(modId=module.NAME, displayName="Mod Template")
    assert module.ModTemplate.dependencies == ()
    assert isinstance(module.ModTemplate.dependencies, tuple)
    mod = module.ModTemplate(makeHost(), registry, info=info)

    assert mod.onAfterSetup() is GateState.ACTIVATED
    payload = mod.controller.payload
    assert isinstance(payload, module.ModTemplateImpl)
    assert payload.active

    mod.onBeforeDeactivate()
    assert not payload.active


def test_template_mod_waits_for_declared_dependency(makeHost, registry):
    module = _loadTemplateModule()

    class WithLib(module.ModTemplate):
        dependencies = ("SharedLib",)

    host = makeHost("SharedLib")
    mod = WithLib(host, registry, info=InstalledCopy(modId=module.NAME))

    assert mod.onAfterSetup() is GateState.WAITING_QUIET
    host.markLoaded("SharedLib")
    assert isinstance(mod.controller.payload, module.ModTemplateImpl)
