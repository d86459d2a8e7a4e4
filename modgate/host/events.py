# modgate/host/events.py
from __future__ import annotations
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["ActivationHandler", "ActivationBus"]

# (identifier, componentHandle)
ActivationHandler = Callable[[str, Any], None]



class ActivationBus:
    """
    Process-wide "component activated" broadcast.

    Handlers are called in subscription order. A handler may unsubscribe
    itself (or others) during delivery; delivery works on a snapshot.
    """
    def __init__(self) -> None:
        self._handlers: list[ActivationHandler] = []

    def subscribe(self, handler: ActivationHandler) -> None:
        if handler in self._handlers:
            logger.debug("Handler %r already subscribed to activation events", handler)
            return
        self._handlers.append(handler)

    def unsubscribe(self, handler: ActivationHandler) -> bool:
        """Removes `handler`. Returns False when it was not subscribed."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def isSubscribed(self, handler: ActivationHandler) -> bool:
        return handler in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def publish(self, identifier: str, handle: Any = None) -> None:
        """
        Delivers to every handler, then re-raises the first handler exception.
        Exceptions from later handlers are logged.
        """
        logger.debug("Component '%s' activated (%d listeners).", identifier, len(self._handlers))
        firstError: Exception | None = None
        for handler in list(self._handlers):
            try:
                handler(identifier, handle)
            except Exception as err:
                if firstError is None:
                    firstError = err
                    continue
                logger.exception("Activation handler %r raised while handling '%s'.", handler, identifier)
        if firstError is not None:
            raise firstError
