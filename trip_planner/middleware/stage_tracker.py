"""Per-request handler stage trail using contextvars.

Usage:
    # In the request handler (main.py):
    reset_stages()
    advance(Stage.PROMPTED)
    ...
    logger.info("stages: %s", format_stages())
"""

import contextvars
from enum import Enum
from typing import Optional


class Stage(str, Enum):
    RECEIVED = "received"
    PROMPTED = "prompted"
    COMPLETING = "completing"
    EXTRACTED = "extracted"
    RESPONDED = "responded"


_stages: contextvars.ContextVar[Optional[list[Stage]]] = contextvars.ContextVar("handler_stages", default=None)


def reset_stages() -> None:
    """Start a new trail at RECEIVED."""
    _stages.set([Stage.RECEIVED])


def advance(stage: Stage) -> None:
    """Record a stage, starting a fresh trail if this context has none."""
    trail = _stages.get()
    if trail is None:
        trail = [Stage.RECEIVED]
        _stages.set(trail)
    trail.append(stage)


def get_stages() -> list[Stage]:
    """Return the stages reached so far in the current request."""
    return list(_stages.get() or [])


def format_stages() -> str:
    return " -> ".join(s.value for s in _stages.get() or [])
