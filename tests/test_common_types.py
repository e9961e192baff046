import sys
import unittest
from pathlib import Path

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from atlas.resources._common_types import _normalize_id, _normalize_id_sequence  # noqa: E402
from atlas.utils import canonical_json, format_number, unique_in_order  # noqa: E402


class CommonTypesTests(unittest.TestCase):
    def test_normalize_id_strips(self):
        self.assertEqual(_normalize_id("  abc "), "abc")

    def test_normalize_id_rejects_blank_and_non_string(self):
        self.assertIsNone(_normalize_id("   "))
        self.assertIsNone(_normalize_id(12))
        self.assertIsNone(_normalize_id(None))

    def test_normalize_id_sequence_single(self):
        self.assertEqual(_normalize_id_sequence("a"), ["a"])

    def test_normalize_id_sequence_filters_and_dedupes(self):
        self.assertEqual(_normalize_id_sequence(["a", "", 3, "b", "a"]), ["a", "b"])

    def test_normalize_id_sequence_invalid(self):
        self.assertIsNone(_normalize_id_sequence(b"a"))
        self.assertIsNone(_normalize_id_sequence(5))
        self.assertIsNone(_normalize_id_sequence(["", " "]))


class UtilsTests(unittest.TestCase):
    def test_unique_in_order(self):
        self.assertEqual(unique_in_order(["b", "a", "b", "c"]), ["b", "a", "c"])

    def test_canonical_json_sorted_and_compact(self):
        self.assertEqual(canonical_json({"b": 1, "a": [1, 2]}), '{"a":[1,2],"b":1}')

    def test_canonical_json_rejects_nan(self):
        with self.assertRaises(ValueError):
            canonical_json({"a": float("nan")})

    def test_canonical_json_rejects_non_string_keys(self):
        with self.assertRaises(TypeError):
            canonical_json({1: "a"})

    def test_canonical_json_strings_unescaped(self):
        self.assertEqual(canonical_json(["ß", 'a"b', None, True]), '["ß","a\\"b",null,true]')

    def test_format_number(self):
        cases = [
            (0.0, "0"),
            (-0.0, "0"),
            (100.0, "100"),
            (123.456, "123.456"),
            (-2.5, "-2.5"),
            (0.1, "0.1"),
            (0.000001, "0.000001"),
            (1.23e-5, "0.0000123"),
            (1e-7, "1e-7"),
            (2.5e-8, "2.5e-8"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1.5e300, "1.5e+300"),
            (-1e21, "-1e+21"),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(format_number(value), expected)

    def test_format_number_int(self):
        self.assertEqual(format_number(2**53 - 1), "9007199254740991")
        self.assertEqual(format_number(-7), "-7")

    def test_format_number_rejects_infinity(self):
        with self.assertRaises(ValueError):
            format_number(float("inf"))


if __name__ == "__main__":
    unittest.main()
