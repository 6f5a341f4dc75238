import math
import unittest

from crosslayout.core.constants import Orientation
from crosslayout.core.models import Placement
from crosslayout.engine.grid import LayoutGrid
from crosslayout.engine.scoring import (
    attempt_metrics,
    average_intersections,
    beam_score,
    compactness,
    count_intersections,
    count_outliers,
    density,
    filled_interior_cells,
    intersections_per_word,
    outlier_penalty,
)


ACROSS = Orientation.ACROSS
DOWN = Orientation.DOWN

CAT_TAR = [Placement("CAT", 0, 0, ACROSS), Placement("TAR", 2, 0, DOWN)]


def grid_from_rows(*rows: str) -> LayoutGrid:
    return LayoutGrid(
        {(x, y): ch for y, row in enumerate(rows) for x, ch in enumerate(row) if ch != "-"}
    )


class IntersectionTests(unittest.TestCase):
    def test_shared_cells_are_counted_once(self) -> None:
        self.assertEqual(count_intersections(CAT_TAR), 1)
        self.assertEqual(intersections_per_word(CAT_TAR), [1, 1])
        self.assertEqual(average_intersections(CAT_TAR), 1.0)

    def test_no_placements(self) -> None:
        self.assertEqual(count_intersections([]), 0)
        self.assertEqual(average_intersections([]), 0.0)


class ShapeTests(unittest.TestCase):
    def test_compactness_of_an_l_shape(self) -> None:
        grid = LayoutGrid.from_placements(CAT_TAR)
        self.assertAlmostEqual(compactness(grid), 4 * math.sqrt(5) / 12)

    def test_compactness_is_capped_at_one(self) -> None:
        self.assertEqual(compactness(grid_from_rows("AB", "CD")), 1.0)

    def test_single_word_counts_as_compact(self) -> None:
        grid = LayoutGrid.from_placements([Placement("HELLO", 0, 0, ACROSS)])
        self.assertEqual(compactness(grid, placed_count=1), 1.0)
        self.assertEqual(compactness(LayoutGrid()), 1.0)

    def test_density_is_a_percentage(self) -> None:
        grid = LayoutGrid.from_placements(CAT_TAR)
        self.assertAlmostEqual(density(grid), 5 / 9 * 100)

    def test_enclosed_empty_cell(self) -> None:
        table = [list("ABC"), list("D-E"), list("FGH")]
        self.assertEqual(filled_interior_cells(table), {(1, 1)})

    def test_border_reachable_cells_are_not_enclosed(self) -> None:
        table = [list("AB-"), list("C--")]
        self.assertEqual(filled_interior_cells(table), set())
        self.assertEqual(filled_interior_cells([["A"]]), set())

    def test_outliers(self) -> None:
        self.assertEqual(count_outliers(grid_from_rows("AB", "CD")), 0)
        self.assertEqual(count_outliers(grid_from_rows("ABC", "D-E", "FGH")), 0)
        self.assertEqual(count_outliers(grid_from_rows("HELLO")), 5)
        self.assertEqual(count_outliers(grid_from_rows("A")), 0)
        self.assertEqual(count_outliers(grid_from_rows("AB-", "CDE")), 1)

    def test_outlier_penalty(self) -> None:
        self.assertEqual(outlier_penalty(0), 0)
        self.assertEqual(outlier_penalty(4), 16)


class ScoreTests(unittest.TestCase):
    def test_beam_score(self) -> None:
        grid = LayoutGrid.from_placements(CAT_TAR)
        self.assertAlmostEqual(beam_score(grid, 2, 1), 100 * 4 * math.sqrt(5) / 12)
        self.assertEqual(beam_score(LayoutGrid(), 0, 0), 0.0)

    def test_attempt_metrics(self) -> None:
        grid = LayoutGrid.from_placements(CAT_TAR)
        metrics = attempt_metrics(grid, CAT_TAR, total_words=3)

        compact = 4 * math.sqrt(5) / 12
        occupied = 5 / 9 * 100
        expected = 1.0 * compact * 100 + (9 / 4) * occupied / 4 - outlier_penalty(5)
        self.assertAlmostEqual(metrics.score, expected)
        self.assertEqual(metrics.intersections, 1)
        self.assertEqual(metrics.outliers, 5)
        self.assertEqual(metrics.filled_cells, 0)
        self.assertEqual(metrics.word_count, 2)
        self.assertEqual(metrics.leftover, 1)

    def test_single_word_metrics(self) -> None:
        placements = [Placement("HELLO", 0, 0, ACROSS)]
        metrics = attempt_metrics(LayoutGrid.from_placements(placements), placements, 1)
        self.assertEqual(metrics.avg_intersections, 0)
        self.assertEqual(metrics.compactness, 1.0)
        self.assertEqual(metrics.density, 100)
        self.assertEqual(metrics.leftover, 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
