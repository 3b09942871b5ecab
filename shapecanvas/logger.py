import logging
from PyQt5.QtCore import QObject, pyqtSignal

FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class LogEmitter(QObject):
    log_record = pyqtSignal(str)

log_emitter = LogEmitter()

class QtHandler(logging.Handler):
    """Forward formatted records to the logs dock through a Qt signal."""

    def emit(self, record):
        msg = self.format(record)
        log_emitter.log_record.emit(msg)

def setup_logging(level="DEBUG"):
    logger = logging.getLogger()
    if logger.handlers:
        return
    logger.setLevel(getattr(logging, str(level).upper(), logging.DEBUG))
    fmt = logging.Formatter(FORMAT)
    stream = logging.StreamHandler()
    stream.setFormatter(fmt)
    logger.addHandler(stream)

    qt_handler = QtHandler()
    qt_handler.setFormatter(fmt)
    logger.addHandler(qt_handler)
