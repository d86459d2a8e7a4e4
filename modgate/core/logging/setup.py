# modgate/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers

from modgate.config.settings import LoggingSettings
from .formatters import DevFormatter, JsonFormatter
from .filters import RecurringSuppressFilter
from .util import setTraceEnabled

__all__ = ["configureLogging"]



def configureLogging(settings: LoggingSettings | None = None) -> None:
    """
    Initiate the global logging configuration for a host embedding modgate.

    Dev:
      - Console pretty logs (DEBUG)
      - Optional JSON file log (DEBUG)

    Prod:
      - Console INFO
      - Optional JSON file log INFO with rotation
      - Optional recurring suppression (per-tick poll noise)
    """
    settings = settings or LoggingSettings()
    rootLevel = logging.DEBUG if settings.devMode else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(rootLevel)

    handlers: list[logging.Handler] = []

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(DevFormatter())
    handlers.append(consoleHandler)

    if settings.filePath:
        fileHandler = logging.handlers.RotatingFileHandler(
            settings.filePath,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(JsonFormatter())
        handlers.append(fileHandler)

    suppress = settings.suppressRecurring
    if suppress.enabled:
        summaryLevel = getattr(logging, str(suppress.summaryLevel).upper(), logging.INFO)
        # Each handler counts records with its own filter instance
        for handler in handlers:
            handler.addFilter(RecurringSuppressFilter(
                windowSeconds=suppress.windowSeconds,
                maxPerWindow=suppress.maxPerWindow,
                summaryLevel=summaryLevel,
            ))

    for handler in handlers:
        root.addHandler(handler)

    setTraceEnabled(settings.traceEnabled)
