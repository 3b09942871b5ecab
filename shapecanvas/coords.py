# shapecanvas/coords.py
"""Conversion des coordonnées écran vers les coordonnées locales du canevas."""

import logging
from typing import Callable, NamedTuple

logger = logging.getLogger(__name__)


class CanvasRect(NamedTuple):
    """On-screen rectangle of the canvas: origin and size in pixels."""

    left: float
    top: float
    width: float
    height: float


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into [low, high]; ``low`` wins if the range is empty."""
    return max(low, min(value, high))


class CoordinateTranslator:
    """Translate pointer positions into canvas-local coordinates.

    The canvas may reflow or scroll between gestures, so the rectangle is
    read from ``rect_provider`` at the start of each gesture and only used
    for that gesture.
    """

    def __init__(self, rect_provider: Callable[[], CanvasRect]):
        self._rect_provider = rect_provider
        self._rect = None

    @property
    def rect(self):
        return self._rect

    def begin_gesture(self) -> CanvasRect:
        self._rect = CanvasRect(*self._rect_provider())
        logger.debug(
            f"Canvas rect {self._rect.left:.0f},{self._rect.top:.0f} "
            f"{self._rect.width:.0f}x{self._rect.height:.0f}"
        )
        return self._rect

    def _current(self) -> CanvasRect:
        if self._rect is None:
            return self.begin_gesture()
        return self._rect

    def to_local(self, pointer) -> tuple:
        rect = self._current()
        px, py = pointer
        return (px - rect.left, py - rect.top)

    def clamp_position(self, x, y, width, height) -> tuple:
        rect = self._current()
        return (
            clamp(x, 0, rect.width - width),
            clamp(y, 0, rect.height - height),
        )
