# shapecanvas/core.py

import logging
from collections import Counter

from PyQt5.QtCore import QObject, pyqtSignal

from .errors import DuplicateIdError, InvalidFormatError

logger = logging.getLogger(__name__)


class ShapeRepository(QObject):
    """
    Logique métier du canevas :
    - conserve la liste ordonnée des formes posées (ordre = ordre de dessin)
    - ajoute, déplace, supprime ou remplace toutes les formes
    - émet ``changed`` une seule fois, après chaque mutation complète
    """

    changed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._shapes: list = []

    def __len__(self):
        return len(self._shapes)

    def __iter__(self):
        return iter(list(self._shapes))

    def __contains__(self, shape_id):
        return self._index_of(shape_id) is not None

    def _index_of(self, shape_id):
        for idx, shape in enumerate(self._shapes):
            if shape.id == shape_id:
                return idx
        return None

    def shapes(self) -> list:
        """Return a copy of the ordered shape list."""
        return list(self._shapes)

    def get(self, shape_id):
        idx = self._index_of(shape_id)
        return None if idx is None else self._shapes[idx]

    def add(self, shape):
        if shape.id in self:
            raise DuplicateIdError(shape.id)
        self._shapes.append(shape)
        logger.debug(f"Added {shape.kind} {shape.id}")
        self.changed.emit()
        return shape

    def move_to(self, shape_id, x, y) -> bool:
        """Move a shape; returns False and does nothing if the id is absent."""
        shape = self.get(shape_id)
        if shape is None:
            logger.debug(f"move_to ignored, no shape {shape_id}")
            return False
        shape.x = x
        shape.y = y
        self.changed.emit()
        return True

    def remove(self, shape_id) -> bool:
        idx = self._index_of(shape_id)
        if idx is None:
            return False
        shape = self._shapes.pop(idx)
        logger.debug(f"Removed {shape.kind} {shape_id}")
        self.changed.emit()
        return True

    def replace_all(self, shapes):
        """Remplace tout le contenu (chargement d'une scène)."""
        new_shapes = list(shapes)
        seen = set()
        for shape in new_shapes:
            try:
                duplicate = shape.id in seen
            except TypeError as e:
                raise InvalidFormatError(f"unusable shape id: {shape.id!r}") from e
            if duplicate:
                raise DuplicateIdError(shape.id)
            seen.add(shape.id)
        self._shapes = new_shapes
        logger.debug(f"Replaced repository with {len(new_shapes)} shapes")
        self.changed.emit()

    def clear(self):
        """Supprime toutes les formes."""
        self.replace_all([])

    def counts_by_kind(self) -> dict:
        """Count shapes per kind; kinds with no shape are not reported."""
        return dict(Counter(shape.kind for shape in self._shapes))
