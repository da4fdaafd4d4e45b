"""Tests for DiffOptions and DiffAlgorithm."""

import unittest

from movediff.domain.options import DEFAULT_CONTEXT_LINES, DiffAlgorithm, DiffOptions


class TestDiffAlgorithm(unittest.TestCase):

    def test_from_string(self):
        self.assertEqual(DiffAlgorithm.from_string("patience"), DiffAlgorithm.PATIENCE)
        self.assertEqual(DiffAlgorithm.from_string("Histogram"), DiffAlgorithm.HISTOGRAM)

    def test_from_string_rejects_unknown(self):
        with self.assertRaises(ValueError):
            DiffAlgorithm.from_string("minimal")


class TestDiffOptionsFromDict(unittest.TestCase):

    def test_none_gives_defaults(self):
        options = DiffOptions.from_dict(None)
        self.assertEqual(options.context_lines, DEFAULT_CONTEXT_LINES)
        self.assertEqual(options.algorithm, DiffAlgorithm.MYERS)
        self.assertFalse(options.ignore_all_space)

    def test_reads_all_fields(self):
        options = DiffOptions.from_dict(
            {
                "context_lines": 7,
                "ignore_all_space": True,
                "ignore_space_change": True,
                "ignore_blank_lines": True,
                "minimal": True,
                "algorithm": "histogram",
                "show_function": True,
            }
        )
        self.assertEqual(options.context_lines, 7)
        self.assertTrue(options.ignore_all_space)
        self.assertTrue(options.ignore_space_change)
        self.assertTrue(options.ignore_blank_lines)
        self.assertTrue(options.minimal)
        self.assertEqual(options.algorithm, DiffAlgorithm.HISTOGRAM)
        self.assertTrue(options.show_function)

    def test_rejects_negative_context(self):
        with self.assertRaises(ValueError):
            DiffOptions.from_dict({"context_lines": -1})

    def test_rejects_non_integer_context(self):
        with self.assertRaises(ValueError):
            DiffOptions.from_dict({"context_lines": "three"})

    def test_rejects_non_boolean_flag(self):
        with self.assertRaises(ValueError) as ctx:
            DiffOptions.from_dict({"minimal": "yes"})
        self.assertIn("minimal", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
