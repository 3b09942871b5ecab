"""
Tests for the placement and move state machines.
"""

import unittest

from shapecanvas.controllers import (
    DROP_OFFSET,
    Dragging,
    GestureToken,
    Idle,
    MoveController,
    PendingPlacement,
    PlacementController,
)
from shapecanvas.coords import CanvasRect, CoordinateTranslator
from shapecanvas.core import ShapeRepository
from shapecanvas.errors import UnknownKindError
from shapecanvas.shapes import instantiate
from tests.qt_helpers import get_app


class ControllerTestCase(unittest.TestCase):
    clamp = True

    @classmethod
    def setUpClass(cls):
        get_app()

    def setUp(self):
        self.rect = CanvasRect(100, 200, 500, 500)
        self.repo = ShapeRepository()
        self.token = GestureToken()
        self.translator = CoordinateTranslator(lambda: self.rect)
        self.placement = PlacementController(
            self.repo, self.translator, self.token)
        self.mover = MoveController(
            self.repo, self.translator, self.token, clamp=self.clamp)

    def place(self, kind, local_x, local_y):
        shape = instantiate(kind, (local_x, local_y))
        return self.repo.add(shape)

    def screen(self, local_x, local_y):
        return (self.rect.left + local_x, self.rect.top + local_y)


class TestPlacementController(ControllerTestCase):
    """Tests for PlacementController."""

    def test_drop_centres_shape_under_cursor(self):
        self.assertTrue(self.placement.begin("square"))
        self.assertIsInstance(self.placement.state, PendingPlacement)
        shape = self.placement.drop((130, 230))
        self.assertEqual((shape.x, shape.y), (0, 0))
        self.assertEqual(self.repo.shapes(), [shape])
        self.assertIsInstance(self.placement.state, Idle)
        self.assertIsNone(self.token.owner)

    def test_offset_is_fixed_for_every_kind(self):
        self.placement.begin("triangle")
        shape = self.placement.drop(self.screen(200, 100))
        self.assertEqual(
            (shape.x, shape.y), (200 - DROP_OFFSET, 100 - DROP_OFFSET))

    def test_drop_without_pending_placement_is_noop(self):
        self.assertIsNone(self.placement.drop((130, 230)))
        self.assertEqual(len(self.repo), 0)

    def test_hover_does_not_mutate(self):
        self.placement.begin("circle")
        for x in range(0, 300, 30):
            self.placement.hover(self.screen(x, x))
        self.assertEqual(len(self.repo), 0)
        self.assertIsInstance(self.placement.state, PendingPlacement)

    def test_cancel(self):
        self.placement.begin("circle")
        self.placement.cancel()
        self.assertIsNone(self.placement.drop((130, 230)))
        self.assertIsNone(self.token.owner)

    def test_unknown_kind(self):
        with self.assertRaises(UnknownKindError):
            self.placement.begin("hexagon")
        self.assertIsInstance(self.placement.state, Idle)

    def test_canvas_rect_is_read_when_drag_starts(self):
        self.rect = CanvasRect(0, 0, 500, 500)
        self.placement.begin("square")
        shape = self.placement.drop((130, 230))
        self.assertEqual((shape.x, shape.y), (100, 200))


class TestMoveController(ControllerTestCase):
    """Tests for MoveController with clamping enabled."""

    def test_grab_offset_is_preserved(self):
        shape = self.place("square", 50, 50)
        self.assertTrue(self.mover.press(shape.id, self.screen(70, 80)))
        self.assertEqual(self.mover.state, Dragging(shape.id, (20, 30)))
        self.mover.move(self.screen(200, 200))
        self.assertEqual(self.repo.get(shape.id).position, (180, 170))

    def test_sub_pixel_moves(self):
        shape = self.place("circle", 10, 10)
        self.mover.press(shape.id, self.screen(10, 10))
        self.mover.move(self.screen(10.25, 11.5))
        self.assertEqual(self.repo.get(shape.id).position, (10.25, 11.5))

    def test_clamped_to_canvas(self):
        shape = self.place("square", 0, 0)
        self.mover.press(shape.id, self.screen(10, 10))
        pos = self.mover.move(self.screen(-10, 560))
        self.assertEqual(pos, (0, 440))
        self.assertEqual(self.repo.get(shape.id).position, (0, 440))

    def test_release_keeps_position(self):
        shape = self.place("square", 0, 0)
        self.mover.press(shape.id, self.screen(0, 0))
        self.mover.move(self.screen(100, 100))
        self.mover.release()
        self.assertIsInstance(self.mover.state, Idle)
        self.assertIsNone(self.token.owner)
        self.mover.move(self.screen(300, 300))
        self.assertEqual(self.repo.get(shape.id).position, (100, 100))

    def test_leave_acts_like_release(self):
        shape = self.place("square", 0, 0)
        self.mover.press(shape.id, self.screen(0, 0))
        self.mover.move(self.screen(40, 40))
        self.mover.leave()
        self.assertFalse(self.mover.is_dragging)
        self.assertEqual(self.repo.get(shape.id).position, (40, 40))

    def test_press_on_absent_shape(self):
        self.assertFalse(self.mover.press("nope", (0, 0)))
        self.assertIsInstance(self.mover.state, Idle)

    def test_move_while_idle_is_ignored(self):
        shape = self.place("square", 5, 5)
        self.assertIsNone(self.mover.move(self.screen(50, 50)))
        self.assertEqual(self.repo.get(shape.id).position, (5, 5))

    def test_double_click_delete_is_idempotent(self):
        shape = self.place("triangle", 0, 0)
        other = self.place("circle", 0, 0)
        self.assertTrue(self.mover.double_click(shape.id))
        self.assertFalse(self.mover.double_click(shape.id))
        self.assertEqual(self.repo.shapes(), [other])

    def test_double_click_on_dragged_shape_ends_drag(self):
        shape = self.place("square", 0, 0)
        self.mover.press(shape.id, self.screen(0, 0))
        self.mover.double_click(shape.id)
        self.assertFalse(self.mover.is_dragging)
        self.assertIsNone(self.token.owner)

    def test_shape_removed_during_drag(self):
        shape = self.place("square", 0, 0)
        self.mover.press(shape.id, self.screen(0, 0))
        self.repo.remove(shape.id)
        self.assertIsNone(self.mover.move(self.screen(10, 10)))
        self.assertFalse(self.mover.is_dragging)


class TestMoveControllerWithoutClamp(ControllerTestCase):
    """Tests for MoveController when clamping is disabled."""

    clamp = False

    def test_not_clamped(self):
        shape = self.place("square", 0, 0)
        self.mover.press(shape.id, self.screen(10, 10))
        self.mover.move(self.screen(-10, 560))
        self.assertEqual(self.repo.get(shape.id).position, (-20, 550))


class TestGestureExclusivity(ControllerTestCase):
    """Only one gesture may be active at a time."""

    def test_press_refused_during_placement(self):
        shape = self.place("square", 0, 0)
        self.placement.begin("circle")
        self.assertFalse(self.mover.press(shape.id, self.screen(0, 0)))
        self.placement.drop(self.screen(100, 100))
        self.assertTrue(self.mover.press(shape.id, self.screen(0, 0)))

    def test_placement_refused_during_drag(self):
        shape = self.place("square", 0, 0)
        self.mover.press(shape.id, self.screen(0, 0))
        self.assertFalse(self.placement.begin("circle"))
        self.assertIsNone(self.placement.drop(self.screen(100, 100)))
        self.assertEqual(len(self.repo), 1)

    def test_token(self):
        token = GestureToken()
        a, b = object(), object()
        self.assertTrue(token.acquire(a))
        self.assertTrue(token.acquire(a))
        self.assertFalse(token.acquire(b))
        token.release(b)
        self.assertIs(token.owner, a)
        token.release(a)
        self.assertIsNone(token.owner)


if __name__ == "__main__":
    unittest.main()
