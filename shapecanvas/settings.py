# shapecanvas/settings.py
"""Paramètres de l'application, conservés via QSettings."""

import logging
from dataclasses import dataclass

from PyQt5.QtCore import QSettings

logger = logging.getLogger(__name__)

ORGANIZATION = "shapecanvas"
APPLICATION = "shapecanvas"


def open_settings() -> QSettings:
    return QSettings(ORGANIZATION, APPLICATION)


@dataclass
class AppSettings:
    server_url: str = "http://localhost:3001/api"
    request_timeout: int = 10
    clamp_to_canvas: bool = True
    last_username: str = ""
    log_level: str = "DEBUG"

    @classmethod
    def load(cls, settings: QSettings = None) -> "AppSettings":
        settings = settings or open_settings()
        defaults = cls()
        return cls(
            server_url=settings.value(
                "server_url", defaults.server_url, type=str),
            request_timeout=settings.value(
                "request_timeout", defaults.request_timeout, type=int),
            clamp_to_canvas=settings.value(
                "clamp_to_canvas", defaults.clamp_to_canvas, type=bool),
            last_username=settings.value(
                "last_username", defaults.last_username, type=str),
            log_level=settings.value(
                "log_level", defaults.log_level, type=str),
        )

    def save(self, settings: QSettings = None):
        settings = settings or open_settings()
        settings.setValue("server_url", self.server_url)
        settings.setValue("request_timeout", self.request_timeout)
        settings.setValue("clamp_to_canvas", self.clamp_to_canvas)
        settings.setValue("last_username", self.last_username)
        settings.setValue("log_level", self.log_level)
        settings.sync()
        logger.debug(f"Settings saved: {self}")
