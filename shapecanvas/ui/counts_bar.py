# shapecanvas/ui/counts_bar.py

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QLabel
from PyQt5.QtGui import QPainter
from PyQt5.QtCore import Qt

from ..shapes import TEMPLATES
from .palette import TITLES, paint_kind


class _Swatch(QWidget):
    def __init__(self, kind, parent=None):
        super().__init__(parent)
        self.kind = kind
        self.setFixedSize(12, 12)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        paint_kind(
            painter, self.kind, TEMPLATES[self.kind].color,
            self.width(), self.height(),
        )
        painter.end()


class CountsBar(QWidget):
    """Pied de page : nombre de formes par type."""

    def __init__(self, repository, parent=None):
        super().__init__(parent)
        self.repository = repository
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 4, 16, 4)
        layout.setSpacing(24)
        caption = QLabel("Nombre de formes :", self)
        caption.setStyleSheet("color: #6c757d;")
        layout.addWidget(caption)
        self.labels = {}
        for kind in TEMPLATES:
            layout.addWidget(_Swatch(kind, self), 0, Qt.AlignVCenter)
            label = QLabel(self)
            layout.addWidget(label)
            self.labels[kind] = label
        layout.addStretch(1)
        repository.changed.connect(self.refresh)
        self.refresh()

    def refresh(self):
        counts = self.repository.counts_by_kind()
        for kind, label in self.labels.items():
            label.setText(f"{TITLES.get(kind, kind)} : {counts.get(kind, 0)}")
