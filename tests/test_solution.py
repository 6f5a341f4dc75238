import unittest

from crosslayout.io.solution import assign_solution_positions, split_phrase


TABLE = [list("CAT"), list("--A"), list("--R")]


class SplitPhraseTests(unittest.TestCase):
    def test_marks_word_starts(self) -> None:
        self.assertEqual(
            split_phrase("at a"),
            [("a", True), ("t", False), ("a", True)],
        )

    def test_skips_repeated_spaces(self) -> None:
        self.assertEqual(split_phrase("  ab"), [("a", True), ("b", False)])


class SolutionOverlayTests(unittest.TestCase):
    def test_letters_take_the_first_free_cell(self) -> None:
        overlay = assign_solution_positions(TABLE, "at a")
        self.assertEqual([c.position for c in overlay.chars], [(1, 0), (2, 0), (2, 1)])
        self.assertEqual([c.number for c in overlay.chars], [1, 2, 3])
        self.assertEqual(overlay.numbers, {(1, 0): 1, (2, 0): 2, (2, 1): 3})
        self.assertEqual(overlay.given, [])

    def test_missing_letters_are_given(self) -> None:
        overlay = assign_solution_positions(TABLE, "CAZ")
        self.assertEqual(len(overlay.given), 1)
        given = overlay.given[0]
        self.assertEqual(given.char, "Z")
        self.assertIsNone(given.position)
        self.assertEqual(given.number, 3)
        self.assertNotIn(None, overlay.numbers)

    def test_letter_used_up(self) -> None:
        overlay = assign_solution_positions(TABLE, "RR")
        self.assertEqual(overlay.chars[0].position, (2, 2))
        self.assertTrue(overlay.chars[1].is_given)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
