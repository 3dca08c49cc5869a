import unittest

from triplemap.mapping.transforms import (
    BUILTIN_TRANSFORMS,
    UnknownTransformError,
    build_transform_catalog,
    get_transform,
    iri_local_name,
    parse_hex_color,
    parse_position,
)


class TransformTests(unittest.TestCase):
    def test_parse_position_accepts_padded_csv(self) -> None:
        self.assertEqual(parse_position("1, -2.5 ,3e1"), (1.0, -2.5, 30.0))

    def test_parse_position_rejects_wrong_arity_and_non_finite(self) -> None:
        self.assertIsNone(parse_position("1,2"))
        self.assertIsNone(parse_position("1,2,3,4"))
        self.assertIsNone(parse_position("a,b,c"))
        self.assertIsNone(parse_position("1,inf,3"))

    def test_parse_hex_color_prefixes(self) -> None:
        self.assertEqual(parse_hex_color("ff8800"), 0xFF8800)
        self.assertEqual(parse_hex_color("0xFF8800"), 0xFF8800)
        self.assertEqual(parse_hex_color("#ff8800"), 0xFF8800)
        with self.assertRaises(ValueError):
            parse_hex_color("orange")

    def test_iri_local_name(self) -> None:
        self.assertEqual(iri_local_name("http://example.org/multiverse/Earth616"), "Earth616")
        self.assertEqual(iri_local_name("http://example.org/multiverse/"), "")
        self.assertEqual(iri_local_name("plain"), "plain")

    def test_position_csv_raises_on_bad_input(self) -> None:
        transform = BUILTIN_TRANSFORMS["position_csv"]

        self.assertEqual(transform("0,0,1"), (0.0, 0.0, 1.0))
        with self.assertRaises(ValueError):
            transform("0,0")

    def test_catalog_merges_host_transforms_over_builtins(self) -> None:
        catalog = build_transform_catalog({"upper": str.upper, "strip": str.lower})

        self.assertEqual(get_transform(catalog, "upper")("abc"), "ABC")
        self.assertEqual(get_transform(catalog, "strip")("ABC"), "abc")
        self.assertIs(get_transform(catalog, "float"), float)
        self.assertIs(build_transform_catalog(), BUILTIN_TRANSFORMS)

    def test_unknown_transform_raises(self) -> None:
        with self.assertRaises(UnknownTransformError):
            get_transform(BUILTIN_TRANSFORMS, "nope")


if __name__ == "__main__":
    unittest.main()
