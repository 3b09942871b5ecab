# shapecanvas/ui/settings_dialog.py

from PyQt5.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QLineEdit,
    QSpinBox,
    QCheckBox,
    QComboBox,
    QDialogButtonBox,
)
from PyQt5.QtCore import Qt

from ..settings import AppSettings

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class SettingsDialog(QDialog):
    def __init__(self, settings: AppSettings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Paramètres")
        self.setModal(True)
        self._settings = settings

        main_layout = QVBoxLayout(self)
        form = QFormLayout()
        main_layout.addLayout(form)

        # Serveur
        self.url_edit = QLineEdit(settings.server_url)
        self.url_edit.setPlaceholderText("http://localhost:3001/api")
        form.addRow("Serveur :", self.url_edit)

        self.timeout_spin = QSpinBox()
        self.timeout_spin.setRange(1, 300)
        self.timeout_spin.setSuffix(" s")
        self.timeout_spin.setValue(int(settings.request_timeout))
        form.addRow("Délai réseau :", self.timeout_spin)

        # Canevas
        self.clamp_check = QCheckBox("Garder les formes dans le canevas")
        self.clamp_check.setChecked(bool(settings.clamp_to_canvas))
        form.addRow("Déplacement :", self.clamp_check)

        # Journal
        self.level_combo = QComboBox()
        self.level_combo.addItems(LOG_LEVELS)
        idx = self.level_combo.findText(settings.log_level.upper())
        if idx >= 0:
            self.level_combo.setCurrentIndex(idx)
        form.addRow("Niveau de log :", self.level_combo)

        buttons = QDialogButtonBox(
            QDialogButtonBox.Ok | QDialogButtonBox.Cancel, Qt.Horizontal, self
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        main_layout.addWidget(buttons)

    def get_settings(self) -> AppSettings:
        """Retourne les paramètres modifiés (copie)."""
        return AppSettings(
            server_url=self.url_edit.text().strip() or AppSettings.server_url,
            request_timeout=self.timeout_spin.value(),
            clamp_to_canvas=self.clamp_check.isChecked(),
            last_username=self._settings.last_username,
            log_level=self.level_combo.currentText(),
        )
