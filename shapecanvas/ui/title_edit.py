# shapecanvas/ui/title_edit.py

import logging
from PyQt5.QtWidgets import QStackedWidget, QLabel, QLineEdit
from PyQt5.QtCore import Qt, pyqtSignal

from ..serializer import DEFAULT_NAME

logger = logging.getLogger(__name__)


class ClickableLabel(QLabel):
    clicked = pyqtSignal()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)


class TitleEdit(QStackedWidget):
    """Painting title shown as a label; click it to edit in place."""

    titleChanged = pyqtSignal(str)

    def __init__(self, title: str = DEFAULT_NAME, parent=None):
        super().__init__(parent)
        self._title = title

        self.label = ClickableLabel(title, self)
        self.label.setObjectName("painting_title")
        self.label.setStyleSheet("font-size: 18pt; font-weight: bold;")
        self.label.setCursor(Qt.PointingHandCursor)
        self.label.setToolTip("Cliquer pour renommer la peinture")
        self.label.clicked.connect(self.start_editing)
        self.addWidget(self.label)

        self.editor = QLineEdit(title, self)
        self.editor.setStyleSheet("font-size: 18pt; font-weight: bold;")
        self.editor.setFrame(False)
        self.editor.editingFinished.connect(self.commit)
        self.addWidget(self.editor)

    def title(self) -> str:
        return self._title

    def set_title(self, title: str):
        self._title = title.strip() or DEFAULT_NAME
        self.label.setText(self._title)
        self.editor.setText(self._title)

    def is_editing(self) -> bool:
        return self.currentWidget() is self.editor

    def start_editing(self):
        self.editor.setText(self._title)
        self.setCurrentWidget(self.editor)
        self.editor.setFocus()
        self.editor.selectAll()

    def commit(self):
        """Valide le titre ; un titre vide redevient le titre par défaut."""
        if not self.is_editing():
            return
        old = self._title
        self.set_title(self.editor.text())
        self.setCurrentWidget(self.label)
        if self._title != old:
            logger.debug(f"Painting renamed to {self._title!r}")
            self.titleChanged.emit(self._title)
