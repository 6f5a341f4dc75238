import unittest

from crosslayout.core.constants import Orientation
from crosslayout.core.models import Placement
from crosslayout.engine.candidates import find_candidates, future_links
from crosslayout.engine.grid import LayoutGrid
from crosslayout.engine.validator import check_placement


ACROSS = Orientation.ACROSS
DOWN = Orientation.DOWN


class FutureLinksTests(unittest.TestCase):
    def test_counts_letters_found_in_other_words(self) -> None:
        self.assertEqual(future_links("TAR", ["ART"]), 3)
        self.assertEqual(future_links("TAR", ["BOX", "RUN"]), 1)
        self.assertEqual(future_links("TAR", []), 0)


class FindCandidatesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = LayoutGrid.from_placements([Placement("CAT", 0, 0, ACROSS)])

    def test_empty_grid_offers_both_seed_orientations(self) -> None:
        candidates = find_candidates(LayoutGrid(), "HELLO", [])
        self.assertEqual(
            [(c.x, c.y, c.orientation) for c in candidates],
            [(0, 0, ACROSS), (0, 0, DOWN)],
        )
        self.assertTrue(all(c.score == 0 for c in candidates))

    def test_only_valid_crossings_are_returned(self) -> None:
        candidates = find_candidates(self.grid, "TAR", [])
        self.assertEqual(
            {(c.x, c.y, c.orientation) for c in candidates},
            {(1, -1, DOWN), (2, 0, DOWN)},
        )
        for candidate in candidates:
            self.assertEqual(candidate.intersections, 1)
            check = check_placement(self.grid, "TAR", candidate.x, candidate.y, candidate.orientation)
            self.assertTrue(check.valid)

    def test_score_combines_density_aspect_and_expansion(self) -> None:
        # 3x1 box grows to 3x3: 300 for one crossing, 5/9 density,
        # square aspect, and a 150 * (3 - 1) expansion penalty.
        candidates = find_candidates(self.grid, "TAR", [])
        expected = 300 + (5 / 9) * 40 + 40 - 2 * 150
        for candidate in candidates:
            self.assertAlmostEqual(candidate.score, expected)

    def test_future_links_raise_the_score(self) -> None:
        plain = find_candidates(self.grid, "TAR", [])
        linked = find_candidates(self.grid, "TAR", ["ART"])
        self.assertAlmostEqual(linked[0].score - plain[0].score, 30)

    def test_no_shared_letter_means_no_candidates(self) -> None:
        self.assertEqual(find_candidates(self.grid, "XYZ", []), [])

    def test_sorted_and_limited(self) -> None:
        grid = LayoutGrid.from_placements(
            [Placement("BANANA", 0, 0, ACROSS), Placement("NAB", 0, -2, DOWN)]
        )
        candidates = find_candidates(grid, "ANNA", ["BAN"], limit=3)
        self.assertLessEqual(len(candidates), 3)
        scores = [c.score for c in candidates]
        self.assertEqual(scores, sorted(scores, reverse=True))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
