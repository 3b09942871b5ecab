# shapecanvas/ui/palette.py

import logging
from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel, QApplication
from PyQt5.QtGui import QPainter, QColor, QPolygonF, QDrag, QPixmap
from PyQt5.QtCore import Qt, QPoint, QPointF, QMimeData, pyqtSignal

from ..shapes import TEMPLATES, SQUARE, CIRCLE, TRIANGLE
from ..canvas import MIME_SHAPE_KIND

logger = logging.getLogger(__name__)

TITLES = {SQUARE: "Carré", CIRCLE: "Cercle", TRIANGLE: "Triangle"}


def paint_kind(painter: QPainter, kind: str, color, w: float, h: float):
    """Dessine la silhouette d'un type de forme dans une boîte w x h."""
    painter.setPen(Qt.NoPen)
    painter.setBrush(QColor(color))
    if kind == CIRCLE:
        painter.drawEllipse(0, 0, int(w), int(h))
    elif kind == TRIANGLE:
        painter.drawPolygon(
            QPolygonF([QPointF(w / 2, 0), QPointF(w, h), QPointF(0, h)])
        )
    else:
        painter.drawRect(0, 0, int(w), int(h))


class PaletteEntry(QWidget):
    """Entrée de palette que l'on fait glisser vers le canevas."""

    SIZE = 48

    dragStarted = pyqtSignal(str)
    dragFinished = pyqtSignal(str)

    def __init__(self, kind: str, parent=None):
        super().__init__(parent)
        self.kind = kind
        self.template = TEMPLATES[kind]
        self._press_pos = None
        self._hover = False
        self.setFixedSize(self.SIZE, self.SIZE)
        self.setCursor(Qt.OpenHandCursor)
        self.setToolTip(TITLES.get(kind, kind))

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        color = QColor(self.template.color)
        if self._hover:
            color = color.darker(130)
        paint_kind(painter, self.kind, color, self.width(), self.height())
        painter.end()

    def enterEvent(self, event):
        self._hover = True
        self.update()
        super().enterEvent(event)

    def leaveEvent(self, event):
        self._hover = False
        self.update()
        super().leaveEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._press_pos = event.pos()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._press_pos is None or not event.buttons() & Qt.LeftButton:
            return
        distance = (event.pos() - self._press_pos).manhattanLength()
        if distance < QApplication.startDragDistance():
            return
        self._press_pos = None
        self.start_drag()

    def mouseReleaseEvent(self, event):
        self._press_pos = None
        super().mouseReleaseEvent(event)

    def start_drag(self):
        logger.debug(f"Palette drag started: {self.kind}")
        self.dragStarted.emit(self.kind)
        mime = QMimeData()
        mime.setData(MIME_SHAPE_KIND, self.kind.encode("utf-8"))
        drag = QDrag(self)
        drag.setMimeData(mime)
        pix = QPixmap(self.size())
        pix.fill(Qt.transparent)
        self.render(pix)
        drag.setPixmap(pix)
        drag.setHotSpot(QPoint(self.width() // 2, self.height() // 2))
        drag.exec_(Qt.CopyAction)
        self.dragFinished.emit(self.kind)


class Palette(QWidget):
    """Barre latérale « Outils » listant les gabarits."""

    dragStarted = pyqtSignal(str)
    dragFinished = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedWidth(80)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 24, 16, 24)
        layout.setSpacing(16)
        title = QLabel("Outils", self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("color: #6c757d;")
        layout.addWidget(title)
        self.entries = {}
        for kind in TEMPLATES:
            entry = PaletteEntry(kind, self)
            entry.dragStarted.connect(self.dragStarted)
            entry.dragFinished.connect(self.dragFinished)
            layout.addWidget(entry, 0, Qt.AlignHCenter)
            self.entries[kind] = entry
        layout.addStretch(1)
