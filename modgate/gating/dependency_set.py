# modgate/gating/dependency_set.py
from __future__ import annotations
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modgate.gating.probe import AvailabilityProbe

__all__ = ["DependencySet"]



class DependencySet:
    """
    Outstanding dependency ids of one gate controller.

    Built once from the declared list and only ever shrinks: nothing is added
    after construction, and an id that was removed is never checked again even
    if its component later unloads. Iteration keeps declaration order so
    notices list ids the way the mod declared them.
    """
    def __init__(self, identifiers: Iterable[str]):
        # dict as an insertion-ordered set
        self._pending: dict[str, None] = dict.fromkeys(identifiers)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._pending))

    def __repr__(self) -> str:
        return f"DependencySet({list(self._pending)!r})"

    def isEmpty(self) -> bool:
        return not self._pending

    def outstanding(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def remove(self, identifier: str) -> bool:
        """Removes one id. Returns False when it was not outstanding (idempotent)."""
        if identifier not in self._pending:
            return False
        del self._pending[identifier]
        return True

    def removeIfAvailable(self, probe: AvailabilityProbe) -> list[str]:
        """
        Asks the probe which outstanding ids are loaded and removes all of them
        in one pass. Returns the removed ids in declaration order.
        """
        if not self._pending:
            return []
        loaded = probe.loadedAmong(self._pending)
        removed = [ident for ident in self._pending if ident in loaded]
        for ident in removed:
            del self._pending[ident]
        return removed
