# modgate/core/logging/context.py
from __future__ import annotations
import contextvars
from collections.abc import Iterator
from contextlib import contextmanager

# All log context lives here. Gated mods put their modId in it around lifecycle calls.
_logContextVar: contextvars.ContextVar[dict[str, object] | None] = contextvars.ContextVar("modgate.logctx", default=None)

def setLogContext(**kvs):
    """Set or update per-log context values (modId, identity, etc.)."""
    current = dict(_logContextVar.get() or {}) # use copy
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    _logContextVar.set(current)

def clearLogContext():
    _logContextVar.set(None)

def getLogContext():
    """Return current context dict or None."""
    return _logContextVar.get()

@contextmanager
def logContext(**kvs) -> Iterator[None]:
    """Scope context values to a block and restore whatever was there before."""
    current = dict(_logContextVar.get() or {})
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    token = _logContextVar.set(current)
    try:
        yield
    finally:
        _logContextVar.reset(token)
