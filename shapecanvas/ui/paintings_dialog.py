# shapecanvas/ui/paintings_dialog.py

from PyQt5.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QListWidget,
    QListWidgetItem,
    QLabel,
    QDialogButtonBox,
)
from PyQt5.QtCore import Qt


class PaintingsDialog(QDialog):
    """Choix d'une peinture enregistrée sur le serveur."""

    def __init__(self, paintings: list, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Ouvrir depuis le serveur")
        self.setModal(True)

        layout = QVBoxLayout(self)
        if not paintings:
            layout.addWidget(QLabel("Aucune peinture enregistrée.", self))

        self.list = QListWidget(self)
        for painting in paintings:
            item = QListWidgetItem(painting.get("name") or "(sans titre)")
            item.setData(Qt.UserRole, painting["id"])
            self.list.addItem(item)
        self.list.itemDoubleClicked.connect(lambda _: self.accept())
        layout.addWidget(self.list)

        self.buttons = QDialogButtonBox(
            QDialogButtonBox.Open | QDialogButtonBox.Cancel, Qt.Horizontal, self
        )
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        layout.addWidget(self.buttons)
        if paintings:
            self.list.setCurrentRow(0)
        else:
            self.buttons.button(QDialogButtonBox.Open).setEnabled(False)

    def selected_id(self):
        item = self.list.currentItem()
        return item.data(Qt.UserRole) if item else None
