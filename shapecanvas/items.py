# shapecanvas/items.py

import logging

from PyQt5.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsEllipseItem,
    QGraphicsPolygonItem,
)
from PyQt5.QtGui import QBrush, QColor, QPen, QPolygonF
from PyQt5.QtCore import Qt, QPointF

from .shapes import SQUARE, CIRCLE, TRIANGLE

logger = logging.getLogger(__name__)

SHAPE_ID_ROLE = 0


def look_of(shape):
    return (shape.kind, shape.width, shape.height, shape.color)


class ShapeItemMixin:
    """Rendu à plat d'une forme ; le déplacement est géré par le canevas."""

    def _setup(self, shape):
        self.setData(SHAPE_ID_ROLE, shape.id)
        self.look = look_of(shape)
        self.setPen(QPen(Qt.NoPen))
        self.setBrush(QBrush(QColor(shape.color)))
        self.setCursor(Qt.SizeAllCursor)
        self.setToolTip("Double-clic pour supprimer")
        self.setPos(shape.x, shape.y)

    @property
    def shape_id(self):
        return self.data(SHAPE_ID_ROLE)

    def matches(self, shape) -> bool:
        """True while the item can still draw ``shape`` by moving."""
        return self.look == look_of(shape)

    def sync(self, shape):
        """Follow the model; only the position can change."""
        if self.pos().x() != shape.x or self.pos().y() != shape.y:
            self.setPos(shape.x, shape.y)


class SquareItem(ShapeItemMixin, QGraphicsRectItem):
    def __init__(self, shape):
        QGraphicsRectItem.__init__(self, 0, 0, shape.width, shape.height)
        self._setup(shape)


class CircleItem(ShapeItemMixin, QGraphicsEllipseItem):
    """Ellipse inscrite dans la boîte de la forme."""

    def __init__(self, shape):
        QGraphicsEllipseItem.__init__(self, 0, 0, shape.width, shape.height)
        self._setup(shape)


class TriangleItem(ShapeItemMixin, QGraphicsPolygonItem):
    """Triangle inscrit, pointe en haut au centre."""

    def __init__(self, shape):
        w, h = shape.width, shape.height
        QGraphicsPolygonItem.__init__(
            self,
            QPolygonF([QPointF(w / 2, 0), QPointF(w, h), QPointF(0, h)]),
        )
        self._setup(shape)


ITEM_CLASSES = {
    SQUARE: SquareItem,
    CIRCLE: CircleItem,
    TRIANGLE: TriangleItem,
}


def is_renderable(shape) -> bool:
    numbers = (shape.x, shape.y, shape.width, shape.height)
    return (
        shape.kind in ITEM_CLASSES
        and all(isinstance(v, (int, float)) for v in numbers)
        and isinstance(shape.color, str)
    )


def make_item(shape):
    """Return the graphics item for ``shape``, or ``None`` if it can't be drawn."""
    if not is_renderable(shape):
        logger.warning(f"Shape {shape.id!r} ({shape.kind!r}) cannot be drawn")
        return None
    return ITEM_CLASSES[shape.kind](shape)
