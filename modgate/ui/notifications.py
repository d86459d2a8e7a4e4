# modgate/ui/notifications.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

from modgate.gating.stacking import StackRegistry

logger = logging.getLogger(__name__)

__all__ = [
    "Severity",
    "Notice",
    "NoticeRect",
    "SEVERITY_COLORS",
    "computeNoticeRect",
    "NoticePresenter",
]



class Severity(str, Enum):
    FATAL = "fatal"
    WARNING = "warning"



# RGBA. Red for missing files, dark orange for "waiting" (white text stays readable)
SEVERITY_COLORS: dict[Severity, tuple[float, float, float, float]] = {
    Severity.FATAL: (0.9, 0.2, 0.2, 1.0),
    Severity.WARNING: (0.9, 0.5, 0.0, 1.0),
}



class Notice(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    severity: Severity
    ownerIdentity: str



@dataclass(frozen=True)
class NoticeRect:
    x: float
    y: float
    width: float
    height: float



REFERENCE_HEIGHT = 1080.0
MIN_SCALE = 0.8
BOX_WIDTH = 420.0
BOX_HEIGHT = 140.0
MARGIN = 20.0
SPACING = 10.0



def computeNoticeRect(screenWidth: float, screenHeight: float, rank: int) -> NoticeRect:
    """
    Bottom-right anchored box for a notice at stack position `rank`.
    Higher ranks sit further up the screen.
    """
    scale = max(screenHeight / REFERENCE_HEIGHT, MIN_SCALE)
    width = BOX_WIDTH * scale
    height = BOX_HEIGHT * scale
    margin = MARGIN * scale
    spacing = SPACING * scale

    stackOffset = max(rank, 0) * (height + spacing)
    return NoticeRect(
        x=screenWidth - width - margin,
        y=screenHeight - margin - height - stackOffset,
        width=width,
        height=height,
    )



class NoticePresenter:
    """
    Holds the single live notice of one gate controller and keeps the shared
    StackRegistry entry for its identity in sync with what is on screen.

    Renderers read `notice`, `color` and `layout()` every frame. show()
    replaces any previous notice. clear() is gating's way to remove it,
    dismiss() is the player's; neither affects gating state.
    """
    def __init__(self, identity: str, registry: StackRegistry, *, displayName: str | None = None):
        self.identity = identity
        self.displayName = displayName or identity
        self._registry = registry
        self._notice: Notice | None = None
        self._dismissed = False

    @property
    def notice(self) -> Notice | None:
        return self._notice

    @property
    def isPresenting(self) -> bool:
        return self._notice is not None

    @property
    def wasDismissed(self) -> bool:
        return self._dismissed

    @property
    def rank(self) -> int:
        return self._registry.rankOf(self.identity)

    @property
    def color(self) -> tuple[float, float, float, float] | None:
        if self._notice is None:
            return None
        return SEVERITY_COLORS[self._notice.severity]

    def layout(self, screenWidth: float, screenHeight: float) -> NoticeRect | None:
        if self._notice is None:
            return None
        return computeNoticeRect(screenWidth, screenHeight, self.rank)

    def show(self, title: str, message: str, severity: Severity) -> Notice:
        notice = Notice(
            title=f"[{self.displayName}] {title}",
            message=message,
            severity=Severity(severity),
            ownerIdentity=self.identity,
        )
        self._notice = notice
        self._dismissed = False
        self._registry.setPresenting(self.identity, True)

        if notice.severity is Severity.FATAL:
            logger.error("[%s] %s: %s", self.identity, title, message)
        else:
            logger.warning("[%s] %s: %s", self.identity, title, message)
        return notice

    def clear(self) -> None:
        self._notice = None
        self._registry.setPresenting(self.identity, False)

    def dismiss(self) -> None:
        if self._notice is None:
            return
        logger.info("[%s] Notice '%s' dismissed by player", self.identity, self._notice.title)
        self._dismissed = True
        self.clear()
