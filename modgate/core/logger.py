# modgate/core/logger.py
from __future__ import annotations
from .logging import (
    configureLogging,
    getModLogger,
    setLogContext,
    clearLogContext,
    getLogContext,
    logContext,
)

__all__ = [
    "configureLogging",
    "getModLogger",
    "setLogContext",
    "clearLogContext",
    "getLogContext",
    "logContext",
]
