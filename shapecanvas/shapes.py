# shapecanvas/shapes.py
"""
Modèle des formes :
- gabarits immuables (carré, cercle, triangle)
- formes posées sur le canevas
- ``instantiate`` qui crée une forme à partir d'un gabarit
"""

import logging
import uuid
from dataclasses import dataclass, field

from .errors import UnknownKindError

logger = logging.getLogger(__name__)

SQUARE = "square"
CIRCLE = "circle"
TRIANGLE = "triangle"

# Fields stored on a Shape, in serialization order.
SHAPE_FIELDS = ("id", "kind", "x", "y", "width", "height", "color")


@dataclass(frozen=True)
class ShapeTemplate:
    """Prototype d'une forme : taille et couleur par défaut."""

    kind: str
    width: float
    height: float
    color: str


TEMPLATES = {
    SQUARE: ShapeTemplate(SQUARE, 60, 60, "#007bff"),
    CIRCLE: ShapeTemplate(CIRCLE, 60, 60, "#dc3545"),
    TRIANGLE: ShapeTemplate(TRIANGLE, 60, 60, "#28a745"),
}

KINDS = tuple(TEMPLATES)


@dataclass
class Shape:
    """A shape placed on the canvas.

    ``x``/``y`` is the top-left corner of the bounding box in canvas-local
    pixels. Only the position changes after creation. ``extra`` keeps fields
    read from a document that this version does not know about, so that they
    are written back unchanged.
    """

    id: str
    kind: str
    x: float
    y: float
    width: float
    height: float
    color: str
    extra: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def position(self) -> tuple:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update({name: getattr(self, name) for name in SHAPE_FIELDS})
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Shape":
        """Build a shape from a document entry without repairing it.

        Missing fields become ``None``; unknown fields land in ``extra``.
        """
        values = {name: data.get(name) for name in SHAPE_FIELDS}
        extra = {k: v for k, v in data.items() if k not in SHAPE_FIELDS}
        return cls(extra=extra, **values)


def template_for(kind: str) -> ShapeTemplate:
    try:
        return TEMPLATES[kind]
    except KeyError:
        raise UnknownKindError(kind) from None


def new_shape_id() -> str:
    """Return a fresh id, unique even for calls within the same tick."""
    return uuid.uuid4().hex


def instantiate(kind: str, position) -> Shape:
    """Copie le gabarit ``kind`` et le place en ``position`` (x, y)."""
    template = template_for(kind)
    x, y = position
    shape = Shape(
        id=new_shape_id(),
        kind=template.kind,
        x=float(x),
        y=float(y),
        width=template.width,
        height=template.height,
        color=template.color,
    )
    logger.debug(f"Instantiated {kind} {shape.id} at {x:.1f},{y:.1f}")
    return shape
