# shapecanvas/canvas.py
# -*- coding: utf-8 -*-

import logging
from PyQt5.QtWidgets import QGraphicsView, QGraphicsScene, QLabel
from PyQt5.QtCore import Qt, QPoint, QRectF, pyqtSignal
from PyQt5.QtGui import QPainter, QColor

from .controllers import GestureToken, MoveController, PlacementController
from .coords import CanvasRect, CoordinateTranslator
from .core import ShapeRepository
from .items import make_item

logger = logging.getLogger(__name__)

MIME_SHAPE_KIND = "application/x-shapecanvas-kind"


def _point(qpoint):
    return (qpoint.x(), qpoint.y())


class CanvasWidget(QGraphicsView):
    """Vue du canevas : dessine les formes et relaie les gestes.

    The viewport is the canvas. Pointer positions are handed to the
    controllers in screen coordinates, and the translator subtracts the
    viewport's on-screen origin read at the start of each gesture.
    """

    shapeDropped = pyqtSignal(str)  # shape id

    def __init__(self, repository: ShapeRepository, clamp=True, parent=None):
        super().__init__(parent)
        logger.debug("CanvasWidget initialized")
        self.repository = repository

        # Scène
        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setFrameShape(QGraphicsView.NoFrame)
        self.setRenderHint(QPainter.Antialiasing)
        self.setBackgroundBrush(QColor("white"))
        self.setAcceptDrops(True)

        # Gestes
        self.token = GestureToken()
        self.translator = CoordinateTranslator(self.canvas_rect)
        self.placement = PlacementController(
            repository, self.translator, self.token
        )
        self.move_ctrl = MoveController(
            repository, self.translator, self.token, clamp=clamp
        )
        self._pending_clamp = None

        # Rendu
        self._items = {}
        self._raised_id = None
        self.hint = QLabel(
            "Glissez des formes depuis la palette pour commencer",
            self.viewport(),
        )
        self.hint.setObjectName("canvas_hint")
        self.hint.setStyleSheet("color: #6c757d; font-size: 14pt;")
        self.hint.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setMinimumHeight(400)
        self._fit_scene_rect()

        repository.changed.connect(self.sync_items)
        self.sync_items()

    # ------------------------------------------------------------------
    def canvas_rect(self) -> CanvasRect:
        viewport = self.viewport()
        origin = viewport.mapToGlobal(QPoint(0, 0))
        return CanvasRect(
            origin.x(), origin.y(), viewport.width(), viewport.height()
        )

    def set_clamp_policy(self, clamp: bool):
        """Swap the move controller; never in the middle of a drag."""
        if self.move_ctrl.is_dragging:
            self._pending_clamp = clamp
            return
        self._pending_clamp = None
        if clamp != self.move_ctrl.clamp:
            logger.debug(f"Clamp policy set to {clamp}")
            self.move_ctrl = MoveController(
                self.repository, self.translator, self.token, clamp=clamp
            )

    def _end_drag(self):
        self.move_ctrl.release()
        self._apply_pending_clamp()

    def _apply_pending_clamp(self):
        if self._pending_clamp is not None and not self.move_ctrl.is_dragging:
            self.set_clamp_policy(self._pending_clamp)

    # ------------------------------------------------------------------
    def sync_items(self):
        """Met la scène graphique en accord avec le dépôt de formes."""
        shapes = self.repository.shapes()
        live = {shape.id for shape in shapes}
        for shape_id in list(self._items):
            if shape_id not in live:
                self.scene.removeItem(self._items.pop(shape_id))
        for z, shape in enumerate(shapes):
            item = self._items.get(shape.id)
            if item is not None and not item.matches(shape):
                # même id, autre forme : on reconstruit
                self.scene.removeItem(self._items.pop(shape.id))
                item = None
            if item is None:
                item = make_item(shape)
                if item is None:
                    continue
                self.scene.addItem(item)
                self._items[shape.id] = item
            else:
                item.sync(shape)
            item.setZValue(len(shapes) if shape.id == self._raised_id else z)
        self.hint.setVisible(not shapes)
        self._place_hint()

    def item_for(self, shape_id):
        return self._items.get(shape_id)

    def _shape_id_at(self, pos):
        item = self.itemAt(pos)
        while item is not None:
            shape_id = getattr(item, "shape_id", None)
            if shape_id is not None:
                return shape_id
            item = item.parentItem()
        return None

    def _place_hint(self):
        self.hint.adjustSize()
        self.hint.move(
            (self.viewport().width() - self.hint.width()) // 2,
            (self.viewport().height() - self.hint.height()) // 2,
        )

    def _fit_scene_rect(self):
        # scene coordinates == viewport coordinates
        size = self.viewport().size()
        self.setSceneRect(QRectF(0, 0, size.width(), size.height()))

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._fit_scene_rect()
        self._place_hint()

    # ─── Déplacement / suppression ────────────────────────────────────
    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        shape_id = self._shape_id_at(event.pos())
        if shape_id is not None and self.move_ctrl.press(
            shape_id, _point(event.screenPos())
        ):
            self._raised_id = shape_id
            self.sync_items()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self.move_ctrl.is_dragging:
            if not self.viewport().rect().contains(event.pos()):
                logger.debug("Pointer left the canvas")
                self._end_drag()
            else:
                self.move_ctrl.move(_point(event.screenPos()))
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if self.move_ctrl.is_dragging:
            self._end_drag()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        if self.move_ctrl.is_dragging:
            self._end_drag()
        super().leaveEvent(event)

    def mouseDoubleClickEvent(self, event):
        shape_id = self._shape_id_at(event.pos())
        if event.button() == Qt.LeftButton and shape_id is not None:
            self.move_ctrl.double_click(shape_id)
            self._apply_pending_clamp()
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    # ─── Dépôt depuis la palette ──────────────────────────────────────
    def _global(self, pos):
        return _point(self.viewport().mapToGlobal(pos))

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(MIME_SHAPE_KIND) and self.placement.is_pending:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self.placement.hover(self._global(event.pos())):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        event.accept()

    def dropEvent(self, event):
        shape = self.placement.drop(self._global(event.pos()))
        if shape is None:
            event.ignore()
            return
        event.acceptProposedAction()
        self.shapeDropped.emit(shape.id)
