import unittest

from crosslayout.core.constants import EMPTY_CELL, Orientation
from crosslayout.core.exceptions import PlacementError
from crosslayout.core.models import Placement
from crosslayout.engine.grid import Bounds, LayoutGrid


ACROSS = Orientation.ACROSS
DOWN = Orientation.DOWN


class BoundsTests(unittest.TestCase):
    def test_dimensions_are_inclusive(self) -> None:
        bounds = Bounds(min_x=-1, max_x=2, min_y=0, max_y=2)
        self.assertEqual(bounds.width, 4)
        self.assertEqual(bounds.height, 3)
        self.assertEqual(bounds.area, 12)
        self.assertEqual(bounds.perimeter, 14)
        self.assertTrue(bounds.contains(-1, 2))
        self.assertFalse(bounds.contains(3, 0))

    def test_including_grows_along_orientation(self) -> None:
        bounds = Bounds(0, 2, 0, 0)
        grown = bounds.including(1, -1, DOWN, 3)
        self.assertEqual(grown, Bounds(0, 2, -1, 1))
        self.assertEqual(bounds.including(0, 0, ACROSS, 2), bounds)


class LayoutGridTests(unittest.TestCase):
    def test_empty_grid_reports_unit_box(self) -> None:
        grid = LayoutGrid()
        self.assertTrue(grid.is_empty)
        self.assertEqual(len(grid), 0)
        self.assertEqual(grid.bounds.area, 1)

    def test_place_writes_letters(self) -> None:
        grid = LayoutGrid()
        grid.place(Placement("CAT", 0, 0, ACROSS))
        self.assertEqual(grid.get(1, 0), "A")
        self.assertIsNone(grid.get(0, 1))
        self.assertIn((2, 0), grid)
        self.assertEqual(grid.letters(), {"C", "A", "T"})
        self.assertEqual((grid.bounds.width, grid.bounds.height), (3, 1))

    def test_bounds_follow_each_placement(self) -> None:
        grid = LayoutGrid()
        grid.place(Placement("CAT", 0, 0, ACROSS))
        self.assertEqual(grid.bounds, Bounds(0, 2, 0, 0))
        grid.place(Placement("BAT", 1, -1, DOWN))
        self.assertEqual(grid.bounds, Bounds(0, 2, -1, 1))
        self.assertEqual(len(grid), 5)

    def test_conflicting_letter_raises(self) -> None:
        grid = LayoutGrid()
        grid.place(Placement("CAT", 0, 0, ACROSS))
        with self.assertRaises(PlacementError):
            grid.place(Placement("DOG", 2, 0, DOWN))
        self.assertIsNone(grid.get(2, 1))

    def test_clone_is_independent(self) -> None:
        grid = LayoutGrid()
        grid.place(Placement("CAT", 0, 0, ACROSS))
        copy = grid.clone()
        copy.place(Placement("TAR", 2, 0, DOWN))
        self.assertEqual(len(grid), 3)
        self.assertEqual(len(copy), 5)
        self.assertIsNot(grid.cells, copy.cells)
        self.assertEqual(grid.bounds.height, 1)
        self.assertEqual(copy.bounds.height, 3)

    def test_to_table_is_normalized_to_bounds(self) -> None:
        grid = LayoutGrid.from_placements(
            [Placement("CAT", 0, 0, ACROSS), Placement("BAT", 1, -1, DOWN)]
        )
        self.assertEqual(
            grid.to_table(),
            [
                [EMPTY_CELL, "B", EMPTY_CELL],
                ["C", "A", "T"],
                [EMPTY_CELL, "T", EMPTY_CELL],
            ],
        )


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
