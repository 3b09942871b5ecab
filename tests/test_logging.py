"""
Tests for the logging bridge and the crash report.
"""

import logging
import os
import shutil
import sys
import tempfile
import unittest

from tests.qt_helpers import get_app
from shapecanvas.bug_report import write_report
from shapecanvas.logger import FORMAT, QtHandler, log_emitter


class TestQtHandler(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        get_app()

    def test_records_reach_the_signal(self):
        received = []

        def on_record(msg):
            received.append(msg)

        log_emitter.log_record.connect(on_record)
        handler = QtHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        log = logging.getLogger("shapecanvas.test")
        log.addHandler(handler)
        try:
            log.warning("drop ignored")
        finally:
            log.removeHandler(handler)
            log_emitter.log_record.disconnect(on_record)
        self.assertEqual(len(received), 1)
        self.assertIn("WARNING - drop ignored", received[0])


class TestBugReport(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_write_report(self):
        path = os.path.join(self.temp_dir, "logs", "crash.log")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            write_report(*sys.exc_info(), path=path)
        with open(path, encoding="utf-8") as f:
            content = f.read()
        self.assertIn("RuntimeError: boom", content)


if __name__ == "__main__":
    unittest.main()
