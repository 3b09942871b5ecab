# shapecanvas/ui/main_window.py
import os
import logging
from PyQt5.QtWidgets import (
    QMainWindow,
    QDockWidget,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QAction,
    QFileDialog,
    QMessageBox,
    QInputDialog,
    QDialog,
    QFrame,
)
from PyQt5.QtCore import Qt, QTimer

from ..core import ShapeRepository
from ..canvas import CanvasWidget
from ..errors import DuplicateIdError, InvalidFormatError, NotFoundError
from ..remote import AsyncPaintingStore, PaintingStore
from ..serializer import (
    DEFAULT_NAME,
    capture_scene,
    export_filename,
    read_scene_file,
    write_scene_file,
)
from ..settings import AppSettings, open_settings
from .counts_bar import CountsBar
from .logs_dock import LogsWidget
from .paintings_dialog import PaintingsDialog
from .palette import Palette
from .settings_dialog import SettingsDialog
from .title_edit import TitleEdit

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings: AppSettings = None):
        super().__init__()
        logger.debug("MainWindow initialized")
        self.setWindowTitle("Shape Canvas")
        self.resize(1024, 768)

        # Paramètres de l'application
        self.qsettings = open_settings()
        self.app_settings = settings or AppSettings.load(self.qsettings)
        self.export_dir = os.path.expanduser("~")

        # Modèle
        self.repository = ShapeRepository(self)
        self.repository.changed.connect(self.set_dirty)
        self.unsaved_changes = False

        # Session serveur
        self.username = None
        self.remote_id = None
        self._after_login = None
        self._pending_username = None
        self._pending_open_id = None
        self.store = AsyncPaintingStore(self._make_store(), self)
        self.store.succeeded.connect(self._on_store_succeeded)
        self.store.failed.connect(self._on_store_failed)

        self._build_ui()
        self._build_menu()
        self._status_timer = QTimer(self)
        self._status_timer.setSingleShot(True)
        self._status_timer.timeout.connect(self.status_label.clear)
        self._update_window_title()

    def _make_store(self) -> PaintingStore:
        return PaintingStore(
            self.app_settings.server_url, self.app_settings.request_timeout
        )

    # ─── Interface ─────────────────────────────────────────────
    def _build_ui(self):
        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        # En-tête : titre + import/export
        header = QFrame(central)
        header.setFrameShape(QFrame.StyledPanel)
        hl = QHBoxLayout(header)
        hl.setContentsMargins(24, 12, 24, 12)
        self.title_edit = TitleEdit(DEFAULT_NAME, header)
        self.title_edit.titleChanged.connect(self._on_title_changed)
        hl.addWidget(self.title_edit, 1)
        self.status_label = QLabel("", header)
        self.status_label.setObjectName("save_status")
        self.status_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        hl.addWidget(self.status_label)
        self.import_btn = QPushButton("Importer", header)
        self.import_btn.clicked.connect(self.import_painting)
        hl.addWidget(self.import_btn)
        self.export_btn = QPushButton("Exporter", header)
        self.export_btn.clicked.connect(self.export_painting)
        hl.addWidget(self.export_btn)
        root.addWidget(header)

        # Palette + canevas
        body = QHBoxLayout()
        body.setSpacing(0)
        self.canvas = CanvasWidget(
            self.repository, clamp=self.app_settings.clamp_to_canvas, parent=central
        )
        self.palette = Palette(central)
        self.palette.dragStarted.connect(self.canvas.placement.begin)
        self.palette.dragFinished.connect(
            lambda _kind: self.canvas.placement.cancel()
        )
        self.canvas.shapeDropped.connect(self._on_shape_dropped)
        body.addWidget(self.palette)
        body.addWidget(self.canvas, 1)
        root.addLayout(body, 1)

        # Pied de page
        self.counts_bar = CountsBar(self.repository, central)
        root.addWidget(self.counts_bar)
        self.setCentralWidget(central)

        # Logs
        self.logs_dock = QDockWidget("Logs", self)
        self.logs_dock.setObjectName("logs_dock")
        self.logs_dock.setWidget(LogsWidget(self.logs_dock))
        self.addDockWidget(Qt.BottomDockWidgetArea, self.logs_dock)
        self.logs_dock.hide()

    def _build_menu(self):
        mb = self.menuBar()
        self.actions = {}

        filem = mb.addMenu("Fichier")
        import_act = QAction("Importer…", self)
        import_act.setShortcut("Ctrl+O")
        import_act.triggered.connect(self.import_painting)
        filem.addAction(import_act)
        self.actions["import"] = import_act

        export_act = QAction("Exporter…", self)
        export_act.setShortcut("Ctrl+E")
        export_act.triggered.connect(self.export_painting)
        filem.addAction(export_act)
        self.actions["export"] = export_act

        filem.addSeparator()
        quit_act = QAction("Quitter", self)
        quit_act.setShortcut("Ctrl+Q")
        quit_act.triggered.connect(self.close)
        filem.addAction(quit_act)

        serverm = mb.addMenu("Serveur")
        login_act = QAction("Se connecter…", self)
        login_act.triggered.connect(lambda: self.login())
        serverm.addAction(login_act)
        self.actions["login"] = login_act

        open_act = QAction("Ouvrir depuis le serveur…", self)
        open_act.triggered.connect(self.open_remote)
        serverm.addAction(open_act)
        self.actions["open_remote"] = open_act

        save_act = QAction("Enregistrer sur le serveur", self)
        save_act.setShortcut("Ctrl+S")
        save_act.triggered.connect(self.save_remote)
        serverm.addAction(save_act)
        self.actions["save_remote"] = save_act

        viewm = mb.addMenu("Affichage")
        logs_act = self.logs_dock.toggleViewAction()
        logs_act.setText("Logs")
        viewm.addAction(logs_act)

        toolsm = mb.addMenu("Outils")
        settings_act = QAction("Paramètres…", self)
        settings_act.triggered.connect(self.open_settings)
        toolsm.addAction(settings_act)

    # ─── État ──────────────────────────────────────────────────
    def painting_name(self) -> str:
        return self.title_edit.title()

    def set_dirty(self, value: bool = True):
        self.unsaved_changes = value
        self._update_window_title()

    def _update_window_title(self):
        title = f"Shape Canvas - {self.painting_name()}"
        if self.username:
            title += f" ({self.username})"
        if self.unsaved_changes:
            title = "* " + title
        self.setWindowTitle(title)

    def _on_title_changed(self, _title):
        self.set_dirty(True)

    def _on_shape_dropped(self, shape_id):
        shape = self.repository.get(shape_id)
        if shape is not None:
            logger.debug(f"Placed {shape.kind} at {shape.position}")

    def show_status(self, text: str):
        """Display a temporary status message in the header."""
        self.status_label.setText(text)
        self._status_timer.start(2000)

    def load_scene(self, scene) -> bool:
        """Remplace tout le canevas par ``scene`` ; rien ne change en cas d'échec."""
        name = scene.name or DEFAULT_NAME
        try:
            if not isinstance(name, str):
                raise InvalidFormatError(f"painting name must be a string: {name!r}")
            self.repository.replace_all(scene.shapes)
        except (DuplicateIdError, InvalidFormatError) as e:
            logger.warning(f"Painting rejected: {e}")
            QMessageBox.critical(
                self, "Erreur", f"Peinture invalide : {e}")
            return False
        self.title_edit.set_title(name)
        return True

    # ─── Fichiers ──────────────────────────────────────────────
    def export_painting(self):
        default = os.path.join(
            self.export_dir, export_filename(self.painting_name()))
        path, _ = QFileDialog.getSaveFileName(
            self, "Exporter la peinture", default, "JSON (*.json)"
        )
        if not path:
            return
        try:
            write_scene_file(path, capture_scene(self.painting_name(), self.repository))
        except OSError as e:
            logger.error(f"Export failed: {e}")
            QMessageBox.critical(
                self, "Erreur", f"Impossible d'exporter : {e}")
            return
        self.export_dir = os.path.dirname(path)
        self.show_status("Peinture exportée")

    def import_painting(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Importer une peinture", self.export_dir, "JSON (*.json)"
        )
        if path:
            self.import_file(path)

    def import_file(self, path) -> bool:
        try:
            scene = read_scene_file(path)
        except (InvalidFormatError, OSError) as e:
            logger.warning(f"Import of {path} rejected: {e}")
            QMessageBox.critical(
                self, "Erreur", f"Fichier de peinture invalide : {e}")
            return False
        if not self.load_scene(scene):
            return False
        self.remote_id = None
        self.set_dirty(False)
        self.show_status("Peinture importée")
        return True

    # ─── Serveur ───────────────────────────────────────────────
    def login(self, then=None):
        """Demande un nom d'utilisateur puis vérifie qu'il existe."""
        name, ok = QInputDialog.getText(
            self,
            "Se connecter",
            "Nom d'utilisateur :",
            text=self.username or self.app_settings.last_username,
        )
        name = name.strip()
        if not ok or not name:
            return
        self._after_login = then
        self._pending_username = name
        self.store.submit("check_user_exists", name)

    def _require_user(self, action) -> bool:
        if self.username:
            return True
        self.login(then=action)
        return False

    def _set_user(self, name):
        self.username = name
        self._pending_username = None
        self.app_settings.last_username = name
        self.app_settings.save(self.qsettings)
        self._update_window_title()
        self.show_status(f"Connecté : {name}")
        then, self._after_login = self._after_login, None
        if then:
            then()

    def open_remote(self):
        if self._require_user(self.open_remote):
            self.store.submit("list_paintings", self.username)

    def save_remote(self):
        if not self._require_user(self.save_remote):
            return
        scene = capture_scene(self.painting_name(), self.repository)
        if self.remote_id is not None:
            self.store.submit(
                "update_painting", self.remote_id, self.username, scene)
        else:
            self.store.submit("create_painting", self.username, scene)
        self.show_status("Enregistrement…")

    def _on_store_succeeded(self, operation, result):
        logger.debug(f"Store call {operation} succeeded")
        if operation == "check_user_exists":
            name = self._pending_username
            if result:
                self._set_user(name)
                return
            resp = QMessageBox.question(
                self,
                "Utilisateur inconnu",
                f"L'utilisateur « {name} » n'existe pas. Le créer ?",
                QMessageBox.Yes | QMessageBox.No,
            )
            if resp == QMessageBox.Yes:
                self.store.submit("create_user", name)
            else:
                self._after_login = None
        elif operation == "create_user":
            self._set_user(self._pending_username)
        elif operation == "list_paintings":
            dlg = PaintingsDialog(result, self)
            if dlg.exec_() == QDialog.Accepted and dlg.selected_id() is not None:
                self._pending_open_id = dlg.selected_id()
                self.store.submit(
                    "get_painting", self._pending_open_id, self.username)
        elif operation == "get_painting":
            if self.load_scene(result):
                self.remote_id = self._pending_open_id
                self.set_dirty(False)
                self.show_status("Peinture chargée")
        elif operation == "create_painting":
            self.remote_id = result["id"]
            self.set_dirty(False)
            self.show_status("Peinture enregistrée")
        elif operation == "update_painting":
            self.set_dirty(False)
            self.show_status("Peinture enregistrée")

    def _on_store_failed(self, operation, error):
        if operation in ("check_user_exists", "create_user"):
            self._after_login = None
        if isinstance(error, NotFoundError):
            text = "Peinture ou utilisateur introuvable."
        elif isinstance(error, InvalidFormatError):
            text = f"Réponse du serveur invalide : {error}"
        else:
            text = f"Le serveur ne répond pas : {error}"
        self.status_label.clear()
        QMessageBox.warning(self, "Serveur", text)

    # ─── Paramètres ────────────────────────────────────────────
    def open_settings(self):
        dlg = SettingsDialog(self.app_settings, self)
        if dlg.exec_() != QDialog.Accepted:
            return
        self.app_settings = dlg.get_settings()
        self.app_settings.save(self.qsettings)
        self.store.store = self._make_store()
        self.canvas.set_clamp_policy(self.app_settings.clamp_to_canvas)
        logging.getLogger().setLevel(self.app_settings.log_level)
        self.show_status("Paramètres enregistrés")
