"""
Tests for persisted application settings.
"""

import os
import shutil
import tempfile
import unittest

from PyQt5.QtCore import QSettings

from tests.qt_helpers import get_app
from shapecanvas.settings import AppSettings


class TestAppSettings(unittest.TestCase):
    """Tests for AppSettings load/save through QSettings."""

    @classmethod
    def setUpClass(cls):
        get_app()

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "settings.ini")

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def qsettings(self):
        return QSettings(self.path, QSettings.IniFormat)

    def test_defaults(self):
        settings = AppSettings.load(self.qsettings())
        self.assertEqual(settings, AppSettings())
        self.assertTrue(settings.clamp_to_canvas)

    def test_save_and_load(self):
        AppSettings(
            server_url="https://paint.example/api",
            request_timeout=30,
            clamp_to_canvas=False,
            last_username="ana",
            log_level="INFO",
        ).save(self.qsettings())
        loaded = AppSettings.load(self.qsettings())
        self.assertEqual(loaded.server_url, "https://paint.example/api")
        self.assertEqual(loaded.request_timeout, 30)
        self.assertFalse(loaded.clamp_to_canvas)
        self.assertEqual(loaded.last_username, "ana")
        self.assertEqual(loaded.log_level, "INFO")


if __name__ == "__main__":
    unittest.main()
