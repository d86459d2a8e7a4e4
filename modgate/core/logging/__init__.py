# modgate/core/logging/__init__.py
from __future__ import annotations

from .context import setLogContext, clearLogContext, getLogContext, logContext
from .setup import configureLogging
from .util import ModLogger, getModLogger, setTraceEnabled

__all__ = [
    "configureLogging",
    "getModLogger",
    "ModLogger",
    "setTraceEnabled",
    "setLogContext",
    "clearLogContext",
    "getLogContext",
    "logContext",
]
