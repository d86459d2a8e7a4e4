# modgate/config/types.py
from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

__all__ = ["ConfigProvider"]



class ConfigProvider(ABC):
    """One layer of settings. Layers are merged bottom to top by loadGateSettings()."""

    @abstractmethod
    def to_dict(self) -> Mapping[str, Any]: ...
