# modgate/core/logging/util.py
from __future__ import annotations

import logging

_traceEnabled = False



class ModLogger:
    """Tiny sugar for mod loggers with trace()."""
    def __init__(self, logger: logging.Logger) -> None:
        self._log = logger

    @property
    def name(self) -> str:
        return self._log.name

    def isEnabledFor(self, level: int) -> bool: return self._log.isEnabledFor(level)
    def debug(self, msg: str, *args, **kwargs): self._log.debug(msg, *args, **kwargs)
    def info(self, msg: str, *args, **kwargs): self._log.info(msg, *args, **kwargs)
    def warning(self, msg: str, *args, **kwargs): self._log.warning(msg, *args, **kwargs)
    def error(self, msg: str, *args, **kwargs): self._log.error(msg, *args, **kwargs)
    def exception(self, msg: str, *args, **kwargs): self._log.exception(msg, *args, **kwargs)
    def trace(self, msg: str, *args, **kwargs):
        if _traceEnabled:
            self._log.debug("[TRACE] " + msg, *args, **kwargs)

def setTraceEnabled(enabled: bool) -> None:
    global _traceEnabled
    _traceEnabled = bool(enabled)

def getModLogger(modId: str) -> ModLogger:
    return ModLogger(logging.getLogger(f"mods.{str(modId).strip()}"))
