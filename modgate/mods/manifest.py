# modgate/mods/manifest.py
from __future__ import annotations
from collections.abc import Iterable
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["ModDependency", "InstalledCopy", "ModManifest", "DependencyLike", "normalizeDependencies"]

WORKSHOP_URL = "https://steamcommunity.com/sharedfiles/filedetails/?id={publishedFileId}"



class ModDependency(BaseModel):
    """A component a gated mod needs before its payload may run."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    modId: str = Field(min_length=1)
    publishedFileId: int | None = None              # Workshop item, if the dependency is published

    @property
    def subscribeUrl(self) -> str | None:
        if self.publishedFileId is None:
            return None
        return WORKSHOP_URL.format(publishedFileId=self.publishedFileId)



DependencyLike = Union[str, ModDependency]



def normalizeDependencies(declared: Iterable[DependencyLike] | None) -> list[ModDependency]:
    """Accepts bare ids or ModDependency values; None means no dependencies."""
    out: list[ModDependency] = []
    for item in declared or ():
        if isinstance(item, ModDependency):
            out.append(item)
        elif isinstance(item, str):
            out.append(ModDependency(modId=item))
        else:
            raise TypeError(f"Dependency must be str or ModDependency, not '{type(item).__name__}'")
    return out



class InstalledCopy(BaseModel):
    """
    One installed copy of a component. Several copies may share a modId,
    e.g. a local development copy next to a workshop subscription.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    modId: str
    displayName: str | None = None
    source: str = "local"                           # Root label: "local", "workshop", ...
    path: str | None = None
    enabled: bool = True
    version: str | None = None
    publishedFileId: int | None = None              # Workshop item this copy was installed from



class ModManifest(BaseModel):
    """On-disk manifest.json5 of an installed component."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    displayName: str | None = None
    version: str | None = None
    description: str | None = None
    author: str | None = None
    enabled: bool = True
    publishedFileId: int | None = None
    tags: list[str] = Field(default_factory=list)
