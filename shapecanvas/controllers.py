# shapecanvas/controllers.py
"""
Machines à états des gestes sur le canevas.

``PlacementController`` gère le glisser-déposer depuis la palette,
``MoveController`` le déplacement d'une forme existante. Les deux partagent
un ``GestureToken`` : un seul geste est actif à la fois.
"""

import logging
from dataclasses import dataclass

from .coords import CoordinateTranslator
from .core import ShapeRepository
from .shapes import ShapeTemplate, instantiate, template_for

logger = logging.getLogger(__name__)

# Nominal half size of a 60x60 template. Applied to every kind as is.
DROP_OFFSET = 30


class GestureToken:
    """Exclusive ownership of the active gesture, shared by the controllers."""

    def __init__(self):
        self._owner = None

    @property
    def owner(self):
        return self._owner

    def acquire(self, owner) -> bool:
        if self._owner is not None and self._owner is not owner:
            logger.debug(
                f"Gesture refused for {type(owner).__name__}: held by "
                f"{type(self._owner).__name__}"
            )
            return False
        self._owner = owner
        return True

    def release(self, owner):
        if self._owner is owner:
            self._owner = None


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PendingPlacement:
    template: ShapeTemplate


@dataclass(frozen=True)
class Dragging:
    shape_id: str
    grab_offset: tuple


IDLE = Idle()


class PlacementController:
    """Idle -> PendingPlacement(template) -> Idle, driven by palette drags."""

    def __init__(
        self,
        repository: ShapeRepository,
        translator: CoordinateTranslator,
        token: GestureToken,
    ):
        self.repository = repository
        self.translator = translator
        self.token = token
        self.state = IDLE

    @property
    def is_pending(self) -> bool:
        return isinstance(self.state, PendingPlacement)

    def begin(self, kind: str) -> bool:
        """Start dragging the palette entry ``kind``."""
        template = template_for(kind)
        if not self.token.acquire(self):
            return False
        self.translator.begin_gesture()
        self.state = PendingPlacement(template)
        logger.debug(f"Placement pending: {kind}")
        return True

    def hover(self, pointer):
        """Drag over the canvas: nothing changes until the drop."""
        return self.is_pending

    def drop(self, pointer):
        """Drop over the canvas; returns the new shape or ``None``."""
        if not self.is_pending:
            logger.debug("Drop without pending placement ignored")
            return None
        template = self.state.template
        try:
            lx, ly = self.translator.to_local(pointer)
            shape = instantiate(
                template.kind, (lx - DROP_OFFSET, ly - DROP_OFFSET)
            )
            self.repository.add(shape)
        finally:
            self._finish()
        return shape

    def cancel(self):
        if self.is_pending:
            logger.debug("Placement cancelled")
        self._finish()

    def _finish(self):
        self.state = IDLE
        self.token.release(self)


class MoveController:
    """Idle -> Dragging(shape_id, grab_offset) -> Idle, driven by the mouse.

    ``clamp`` is the deployment's bounds policy. It is fixed for the life of
    the controller.
    """

    def __init__(
        self,
        repository: ShapeRepository,
        translator: CoordinateTranslator,
        token: GestureToken,
        clamp: bool = True,
    ):
        self.repository = repository
        self.translator = translator
        self.token = token
        self._clamp = bool(clamp)
        self.state = IDLE

    @property
    def clamp(self) -> bool:
        return self._clamp

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    @property
    def dragged_id(self):
        return self.state.shape_id if self.is_dragging else None

    def press(self, shape_id, pointer) -> bool:
        if self.is_dragging:
            return False
        shape = self.repository.get(shape_id)
        if shape is None:
            return False
        if not self.token.acquire(self):
            return False
        self.translator.begin_gesture()
        lx, ly = self.translator.to_local(pointer)
        offset = (lx - shape.x, ly - shape.y)
        self.state = Dragging(shape_id, offset)
        logger.debug(
            f"Dragging {shape_id} grab offset {offset[0]:.1f},{offset[1]:.1f}"
        )
        return True

    def move(self, pointer):
        """Follow the pointer; returns the new position or ``None``."""
        if not self.is_dragging:
            return None
        shape = self.repository.get(self.state.shape_id)
        if shape is None:
            # deleted while being dragged
            self.release()
            return None
        lx, ly = self.translator.to_local(pointer)
        gx, gy = self.state.grab_offset
        x, y = lx - gx, ly - gy
        if self._clamp:
            x, y = self.translator.clamp_position(
                x, y, shape.width, shape.height
            )
        self.repository.move_to(shape.id, x, y)
        return (x, y)

    def release(self):
        if self.is_dragging:
            logger.debug(f"Drag of {self.state.shape_id} ended")
        self.state = IDLE
        self.token.release(self)

    # leaving the canvas ends the drag where the shape is
    leave = release

    def double_click(self, shape_id) -> bool:
        """Delete ``shape_id``. Deleting an absent id does nothing."""
        if self.dragged_id == shape_id:
            self.release()
        return self.repository.remove(shape_id)
