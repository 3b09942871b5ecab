import sys
import os
import logging
import traceback
from datetime import datetime
from PyQt5.QtWidgets import QApplication, QMessageBox

logger = logging.getLogger(__name__)

LOG_DIR = os.path.join(os.path.expanduser("~"), "shapecanvas_logs")
LOG_FILE = os.path.join(LOG_DIR, "shapecanvas.log")


def write_report(exc_type, exc_value, exc_tb, path=LOG_FILE):
    """Append the traceback to the crash log and return its path."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"\n=== {datetime.now().isoformat()} ===\n")
        traceback.print_exception(exc_type, exc_value, exc_tb, file=f)
    return path


def _excepthook(exc_type, exc_value, exc_tb):
    """Write the traceback to a log file and show a user-friendly dialog."""
    logger.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))
    write_report(exc_type, exc_value, exc_tb)

    app = QApplication.instance()
    if app is not None:
        try:
            msg = QMessageBox()
            msg.setIcon(QMessageBox.Critical)
            msg.setWindowTitle("Shape Canvas - Erreur")
            msg.setText(
                "Une erreur inattendue est survenue. "
                f"Un rapport a été enregistré dans:\n{LOG_FILE}"
            )
            details = "".join(
                traceback.format_exception(exc_type, exc_value, exc_tb)
            )
            msg.setDetailedText(details)
            msg.exec_()
        except Exception:
            # the report is already on disk
            pass

    sys.__excepthook__(exc_type, exc_value, exc_tb)


def install_excepthook():
    """Install global exception handler that logs uncaught exceptions."""
    sys.excepthook = _excepthook
