# modgate/core/errors.py
from __future__ import annotations
from collections.abc import Iterable

__all__ = [
    "GatingError",
    "DependencyNotInstalled",
    "DependencyDisabled",
    "HostApiUnavailable",
    "ProbeQueryFailure",
]



class GatingError(Exception):
    """Base for everything that can go wrong while gating a mod on its dependencies."""
    fatal: bool = False
    titleKey: str = ""
    messageKey: str = ""



class DependencyNotInstalled(GatingError):
    """One or more declared dependencies match zero installed copies. Gating halts for good."""
    fatal = True
    titleKey = "MISSING_TITLE"
    messageKey = "MISSING_MSG"

    def __init__(self, identifiers: Iterable[str]):
        self.identifiers: tuple[str, ...] = tuple(identifiers)
        super().__init__(f"Dependencies not installed: {', '.join(self.identifiers)}")



class DependencyDisabled(GatingError):
    """Dependencies are installed, but the host says none of their copies is enabled."""
    titleKey = "DISABLED_TITLE"
    messageKey = "DISABLED_MSG"

    def __init__(self, identifiers: Iterable[str]):
        self.identifiers: tuple[str, ...] = tuple(identifiers)
        super().__init__(f"Dependencies disabled: {', '.join(self.identifiers)}")



class HostApiUnavailable(GatingError):
    """The host offers no way to ask whether a component is administratively enabled."""
    fatal = True
    titleKey = "API_ERR_TITLE"
    messageKey = "API_ERR_MSG"

    def __init__(self, detail: str = "host exposes no enabled-query capability"):
        self.detail = detail
        super().__init__(detail)



class ProbeQueryFailure(GatingError):
    """A single installed copy could not be queried. Always treated as 'not enabled'."""
    def __init__(self, modId: str, source: str, cause: BaseException):
        self.modId = modId
        self.source = source
        self.cause = cause
        super().__init__(f"Enabled query failed for '{modId}' ({source}): {type(cause).__name__}: {cause}")
