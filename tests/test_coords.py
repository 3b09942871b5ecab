"""
Tests for the coordinate translator.
"""

import unittest

from shapecanvas.coords import CanvasRect, CoordinateTranslator, clamp


class TestCoordinateTranslator(unittest.TestCase):
    """Tests for CoordinateTranslator."""

    def setUp(self):
        self.rects = [CanvasRect(100, 200, 500, 500)]
        self.translator = CoordinateTranslator(lambda: self.rects[-1])

    def test_to_local(self):
        self.translator.begin_gesture()
        self.assertEqual(self.translator.to_local((130, 230)), (30, 40))

    def test_rect_is_read_at_gesture_start_only(self):
        self.translator.begin_gesture()
        self.rects.append(CanvasRect(0, 0, 500, 500))
        self.assertEqual(self.translator.to_local((130, 230)), (30, 40))
        self.translator.begin_gesture()
        self.assertEqual(self.translator.to_local((130, 230)), (130, 230))

    def test_clamp_position(self):
        self.translator.begin_gesture()
        self.assertEqual(
            self.translator.clamp_position(-20, 550, 60, 60), (0, 440)
        )
        self.assertEqual(
            self.translator.clamp_position(12.5, 30, 60, 60), (12.5, 30)
        )

    def test_clamp_when_canvas_smaller_than_shape(self):
        self.assertEqual(clamp(15, 0, -10), 0)


if __name__ == "__main__":
    unittest.main()
