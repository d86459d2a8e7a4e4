# modgate/config/settings.py
from __future__ import annotations
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from modgate.core.utils import deepMerge
from .providers import DefaultsProvider, FileProvider, OverrideProvider
from .types import ConfigProvider

__all__ = [
    "HostApiPolicy",
    "GatingSettings",
    "UiSettings",
    "SuppressRecurringSettings",
    "LoggingSettings",
    "GateSettings",
    "DEFAULT_SETTINGS",
    "loadGateSettings",
    "saveGateSettings",
]

# strict: a host without an enabled-query halts gating with an error notice.
# tolerant: the enabled check is skipped and gating waits optimistically.
HostApiPolicy = Literal["strict", "tolerant"]



class GatingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    patienceSeconds: float = Field(default=5.0, ge=0)       # Quiet period before the wait notice
    pollIntervalSeconds: float = Field(default=0.0, ge=0)   # 0 → re-poll on every tick
    tickSeconds: float = Field(default=1 / 60, gt=0)        # Cadence of waitUntilSettled()
    hostApiPolicy: HostApiPolicy = "tolerant"



class UiSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    language: str = "en"
    localeDir: str | None = None                            # Extra <lang>.json5 tables



class SuppressRecurringSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    windowSeconds: int = Field(default=60, ge=1)
    maxPerWindow: int = Field(default=5, ge=1)
    summaryLevel: str = "INFO"



class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    devMode: bool = True
    traceEnabled: bool = False
    filePath: str | None = None
    suppressRecurring: SuppressRecurringSettings = Field(default_factory=SuppressRecurringSettings)



class GateSettings(BaseModel):
    """Validated, merged settings for every gate controller in the process."""
    model_config = ConfigDict(extra="forbid")

    gating: GatingSettings = Field(default_factory=GatingSettings)
    ui: UiSettings = Field(default_factory=UiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)



DEFAULT_SETTINGS: dict[str, Any] = GateSettings().model_dump()



def loadGateSettings(
    path: Path | str | None = None,
    overrides: Mapping[str, Any] | None = None,
    *,
    defaults: Mapping[str, Any] | None = None,
) -> GateSettings:
    """
    Builds GateSettings from layered providers, lowest precedence first:

      1) shipped defaults (or `defaults` when given)
      2) optional JSON/JSON5 settings file at `path` (missing file = empty layer)
      3) in-memory `overrides`

    Raises pydantic.ValidationError when the merged result is invalid.
    """
    layers: list[ConfigProvider] = [DefaultsProvider(data=defaults if defaults is not None else DEFAULT_SETTINGS)]
    if path is not None:
        layers.append(FileProvider(path))
    if overrides:
        layers.append(OverrideProvider(overrides))

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = deepMerge(merged, layer.to_dict())
    return GateSettings.model_validate(merged)



def saveGateSettings(path: Path | str, changes: Mapping[str, Any]) -> GateSettings:
    """
    Writes dotted-key `changes` (e.g. {"gating.patienceSeconds": 10}) into the
    user settings file at `path`. A None value removes the key, falling back to
    the shipped default. The file is only written if the result validates.

    Returns the settings the file now yields over the shipped defaults.
    """
    userFile = FileProvider(path)
    for key, value in changes.items():
        userFile.set(key, value)
    settings = GateSettings.model_validate(deepMerge(DEFAULT_SETTINGS, userFile.to_dict()))
    userFile.save()
    return settings
