"""
Tests for the ShapeRepository.
"""

import random
import unittest

from shapecanvas.core import ShapeRepository
from shapecanvas.errors import DuplicateIdError, InvalidFormatError
from shapecanvas.shapes import Shape, instantiate
from tests.qt_helpers import get_app


class TestShapeRepository(unittest.TestCase):
    """Tests for the ShapeRepository class."""

    @classmethod
    def setUpClass(cls):
        get_app()

    def setUp(self):
        self.repo = ShapeRepository()
        self.changes = []
        self.repo.changed.connect(lambda: self.changes.append(len(self.repo)))

    def test_add_keeps_insertion_order(self):
        a = self.repo.add(instantiate("square", (0, 0)))
        b = self.repo.add(instantiate("circle", (5, 5)))
        self.assertEqual([s.id for s in self.repo.shapes()], [a.id, b.id])
        self.assertEqual(self.changes, [1, 2])

    def test_add_rejects_duplicate_id(self):
        shape = self.repo.add(instantiate("square", (0, 0)))
        with self.assertRaises(DuplicateIdError):
            self.repo.add(shape)
        self.assertEqual(len(self.repo), 1)

    def test_move_to(self):
        shape = self.repo.add(instantiate("square", (0, 0)))
        self.assertTrue(self.repo.move_to(shape.id, 10.5, 20.25))
        moved = self.repo.get(shape.id)
        self.assertEqual((moved.x, moved.y), (10.5, 20.25))
        self.assertEqual((moved.width, moved.height), (60, 60))

    def test_move_to_absent_id_is_noop(self):
        self.repo.add(instantiate("square", (0, 0)))
        del self.changes[:]
        self.assertFalse(self.repo.move_to("missing", 1, 1))
        self.assertEqual(self.changes, [])

    def test_remove_is_idempotent(self):
        shape = self.repo.add(instantiate("triangle", (0, 0)))
        self.assertTrue(self.repo.remove(shape.id))
        self.assertFalse(self.repo.remove(shape.id))
        self.assertEqual(len(self.repo), 0)
        self.assertEqual(self.changes, [1, 0])

    def test_count_matches_adds_minus_removes(self):
        rng = random.Random(4)
        live = []
        for _ in range(300):
            op = rng.choice(["add", "add", "remove", "remove_absent", "move"])
            if op == "add":
                live.append(self.repo.add(instantiate("square", (0, 0))).id)
            elif op == "remove" and live:
                self.repo.remove(live.pop(rng.randrange(len(live))))
            elif op == "remove_absent":
                self.repo.remove("never-added")
            elif op == "move" and live:
                self.repo.move_to(rng.choice(live), rng.random(), rng.random())
            self.assertEqual(len(self.repo), len(live))

    def test_replace_all(self):
        self.repo.add(instantiate("square", (0, 0)))
        new = [instantiate("circle", (1, 1)), instantiate("circle", (2, 2))]
        self.repo.replace_all(new)
        self.assertEqual(self.repo.shapes(), new)

    def test_replace_all_with_duplicates_leaves_contents(self):
        kept = self.repo.add(instantiate("square", (0, 0)))
        dup = instantiate("circle", (1, 1))
        with self.assertRaises(DuplicateIdError):
            self.repo.replace_all([dup, dup])
        self.assertEqual([s.id for s in self.repo], [kept.id])

    def test_replace_all_with_unhashable_id_leaves_contents(self):
        kept = self.repo.add(instantiate("square", (0, 0)))
        bad = Shape.from_dict({"id": [1], "kind": "circle"})
        with self.assertRaises(InvalidFormatError):
            self.repo.replace_all([instantiate("circle", (1, 1)), bad])
        self.assertEqual([s.id for s in self.repo], [kept.id])
        self.assertEqual(self.changes, [1])

    def test_counts_by_kind(self):
        self.repo.add(instantiate("circle", (0, 0)))
        self.repo.add(instantiate("circle", (0, 0)))
        self.repo.add(instantiate("triangle", (0, 0)))
        self.assertEqual(self.repo.counts_by_kind(), {"circle": 2, "triangle": 1})

    def test_shapes_returns_copy(self):
        self.repo.add(instantiate("square", (0, 0)))
        self.repo.shapes().clear()
        self.assertEqual(len(self.repo), 1)


if __name__ == "__main__":
    unittest.main()
