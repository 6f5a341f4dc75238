import unittest

from crosslayout.engine.canonical import (
    SignatureRegistry,
    encode,
    equivalent,
    mirror_horizontal,
    mirror_vertical,
    rotate90,
    signature,
    transforms,
)


L_SHAPE = [list("CAT"), list("--A"), list("--R")]


class TransformTests(unittest.TestCase):
    def test_encode_joins_rows(self) -> None:
        self.assertEqual(encode(L_SHAPE), "CAT|--A|--R")

    def test_rotate_clockwise(self) -> None:
        self.assertEqual(rotate90([list("AB"), list("CD")]), [list("CA"), list("DB")])
        self.assertEqual(rotate90([list("ABC")]), [["A"], ["B"], ["C"]])

    def test_four_rotations_are_the_identity(self) -> None:
        table = L_SHAPE
        for _ in range(4):
            table = rotate90(table)
        self.assertEqual(table, L_SHAPE)

    def test_mirrors(self) -> None:
        self.assertEqual(mirror_horizontal([list("AB")]), [list("BA")])
        self.assertEqual(mirror_vertical([list("AB"), list("CD")]), [list("CD"), list("AB")])

    def test_transforms_do_not_alias_the_input(self) -> None:
        table = [list("AB"), list("C-")]
        variants = transforms(table)
        variants[0][0][0] = "Z"
        self.assertEqual(table[0][0], "A")


class SignatureTests(unittest.TestCase):
    def test_asymmetric_table_has_eight_encodings(self) -> None:
        self.assertEqual(len(signature(L_SHAPE)), 8)

    def test_every_variant_shares_the_signature(self) -> None:
        expected = signature(L_SHAPE)
        for variant in transforms(L_SHAPE):
            self.assertEqual(signature(variant), expected)

    def test_symmetric_table_collapses(self) -> None:
        self.assertEqual(signature([list("AA"), list("AA")]), frozenset({"AA|AA"}))

    def test_across_and_down_word_are_equivalent(self) -> None:
        across = [list("HELLO")]
        down = [[ch] for ch in "HELLO"]
        self.assertTrue(equivalent(across, down))
        self.assertFalse(equivalent(across, [list("HOLLA")]))


class SignatureRegistryTests(unittest.TestCase):
    def test_register_rejects_rotations_and_mirrors(self) -> None:
        registry = SignatureRegistry()
        self.assertTrue(registry.register(L_SHAPE))
        self.assertFalse(registry.register(rotate90(L_SHAPE)))
        self.assertFalse(registry.register(mirror_horizontal(L_SHAPE)))
        self.assertTrue(registry.register([list("CAT"), list("A--"), list("R--")]))
        self.assertIn(encode(L_SHAPE), registry)
        self.assertEqual(len(registry), 16)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
