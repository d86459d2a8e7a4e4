# tests/modgate/gating/test_dependency_set.py
from __future__ import annotations

from modgate.gating.dependency_set import DependencySet
from modgate.gating.probe import AvailabilityProbe
from modgate.host.api import LocalModHost
from modgate.mods.manifest import InstalledCopy


def _probeWithLoaded(*loaded: str) -> AvailabilityProbe:
    host = LocalModHost([InstalledCopy(modId=modId) for modId in ("A", "B", "C")])
    for modId in loaded:
        host.markLoaded(modId, publish=False)
    return AvailabilityProbe(host)


def test_duplicates_collapse_and_order_is_kept():
    deps = DependencySet(["B", "A", "B", "C"])
    assert deps.outstanding() == ("B", "A", "C")
    assert len(deps) == 3


def test_empty_set_is_satisfied():
    deps = DependencySet([])
    assert deps.isEmpty()
    assert deps.removeIfAvailable(_probeWithLoaded("A")) == []


def test_remove_is_idempotent():
    deps = DependencySet(["A"])
    assert deps.remove("A") is True
    assert deps.remove("A") is False
    assert deps.remove("Z") is False
    assert deps.isEmpty()


def test_remove_if_available_removes_every_loaded_id_in_one_pass():
    deps = DependencySet(["A", "B", "C"])
    removed = deps.removeIfAvailable(_probeWithLoaded("C", "A"))

    assert removed == ["A", "C"]
    assert deps.outstanding() == ("B",)
    assert "A" not in deps
    assert "B" in deps


def test_removed_ids_are_never_reinserted():
    host = LocalModHost([InstalledCopy(modId="A")])
    probe = AvailabilityProbe(host)
    deps = DependencySet(["A"])

    host.markLoaded("A", publish=False)
    deps.removeIfAvailable(probe)
    host.markUnloaded("A")
    deps.removeIfAvailable(probe)

    assert deps.isEmpty()
