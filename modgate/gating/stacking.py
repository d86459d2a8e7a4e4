# modgate/gating/stacking.py
from __future__ import annotations

__all__ = ["StackRegistry"]



class StackRegistry:
    """
    Shared view of which gate controllers are currently presenting a notice.

    One instance is created by the host and handed to every presenter. Each
    presenter only ever writes its own identity's entry. Rank is derived on
    demand from a lexicographic sort, so every presenter computes the same
    stacking order without coordinating.
    """
    def __init__(self) -> None:
        self._presenting: dict[str, bool] = {}

    def setPresenting(self, identity: str, presenting: bool) -> None:
        if presenting:
            self._presenting[identity] = True
        else:
            self._presenting.pop(identity, None)

    def isPresenting(self, identity: str) -> bool:
        return self._presenting.get(identity, False)

    def presentingIdentities(self) -> list[str]:
        return sorted(identity for identity, flag in self._presenting.items() if flag)

    def rankOf(self, identity: str) -> int:
        """0-based stack position. An identity that is not presenting ranks 0."""
        ordered = self.presentingIdentities()
        try:
            return ordered.index(identity)
        except ValueError:
            return 0

    def __len__(self) -> int:
        return len(self._presenting)
