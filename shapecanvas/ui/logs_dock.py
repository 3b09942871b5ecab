from PyQt5.QtWidgets import QWidget, QVBoxLayout, QPlainTextEdit
from ..logger import log_emitter

class LogsWidget(QWidget):
    """Simple widget that displays application logs."""

    MAX_LINES = 2000

    def __init__(self, parent=None):
        super().__init__(parent)
        self.text_edit = QPlainTextEdit(self)
        self.text_edit.setReadOnly(True)
        self.text_edit.setMaximumBlockCount(self.MAX_LINES)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.text_edit)
        log_emitter.log_record.connect(self.text_edit.appendPlainText)
