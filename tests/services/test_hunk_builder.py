"""Tests for hunk layout.

Tests cover:
- Context lines around a single change
- Context clipped at file bounds
- Merging nearby changes, splitting distant ones
- Ignored changes (joined to a nearby real change, else dropped)
- Empty-range header starts
- Function-line section headers
"""

from __future__ import annotations

import unittest

from movediff.domain.diff import ChangeHunk, ChangeScript, DiffLineType, DiffResult
from movediff.services.hunk_builder import build_hunks, find_function_line, group_changes


def _lines(*names: str) -> list[bytes]:
    return [f"{name}\n".encode() for name in names]


def _result(old: list[bytes], new: list[bytes], changes: list[ChangeHunk]) -> DiffResult:
    return DiffResult(old_lines=old, new_lines=new, script=ChangeScript(changes=changes))


TEN = [f"l{n}" for n in range(1, 11)]


class TestSingleChange(unittest.TestCase):

    def test_context_on_both_sides(self):
        new = list(TEN)
        new[4] = "X"
        result = _result(_lines(*TEN), _lines(*new), [ChangeHunk(4, 1, 4, 1)])
        hunks = build_hunks(result, 3)
        self.assertEqual(len(hunks), 1)
        hunk = hunks[0]
        self.assertEqual(hunk.header, "@@ -2,7 +2,7 @@")
        self.assertEqual(
            [(line.prefix, line.content) for line in hunk.lines],
            [
                (" ", b"l2\n"),
                (" ", b"l3\n"),
                (" ", b"l4\n"),
                ("-", b"l5\n"),
                ("+", b"X\n"),
                (" ", b"l6\n"),
                (" ", b"l7\n"),
                (" ", b"l8\n"),
            ],
        )

    def test_context_clipped_at_start_and_end(self):
        result = _result(_lines("a", "b"), _lines("A", "b"), [ChangeHunk(0, 1, 0, 1)])
        hunk = build_hunks(result, 3)[0]
        self.assertEqual(hunk.header, "@@ -1,2 +1,2 @@")

    def test_zero_context(self):
        result = _result(_lines(*TEN), _lines(*TEN[:4], *TEN[5:]), [ChangeHunk(4, 1, 4, 0)])
        hunk = build_hunks(result, 0)[0]
        self.assertEqual(hunk.header, "@@ -5,1 +4,0 @@")
        self.assertEqual([line.line_type for line in hunk.lines], [DiffLineType.REMOVED])

    def test_line_numbers(self):
        result = _result(_lines("a", "b"), _lines("a", "c"), [ChangeHunk(1, 1, 1, 1)])
        hunk = build_hunks(result, 1)[0]
        removed, added = [line for line in hunk.lines if line.line_type != DiffLineType.CONTEXT]
        self.assertEqual(removed.old_line_number, 2)
        self.assertEqual(added.new_line_number, 2)

    def test_insertion_into_empty_file(self):
        result = _result([], _lines("x"), [ChangeHunk(0, 0, 0, 1)])
        hunk = build_hunks(result, 3)[0]
        self.assertEqual(hunk.header, "@@ -0,0 +1,1 @@")

    def test_insertion_without_context_names_line_before(self):
        result = _result(_lines("a", "b"), _lines("a", "NEW", "b"), [ChangeHunk(1, 0, 1, 1)])
        hunk = build_hunks(result, 0)[0]
        self.assertEqual(hunk.header, "@@ -1,0 +2,1 @@")
        self.assertEqual([line.content for line in hunk.lines], [b"NEW\n"])

    def test_deleting_whole_file(self):
        result = _result(_lines("a", "b"), [], [ChangeHunk(0, 2, 0, 0)])
        hunk = build_hunks(result, 3)[0]
        self.assertEqual(hunk.header, "@@ -1,2 +0,0 @@")

    def test_no_changes(self):
        self.assertEqual(build_hunks(_result(_lines("a"), _lines("a"), []), 3), [])


class TestHunkGrouping(unittest.TestCase):

    def _two_changes(self, first: int, second: int) -> DiffResult:
        new = list(TEN)
        new[first] = "X"
        new[second] = "Y"
        return _result(
            _lines(*TEN),
            _lines(*new),
            [ChangeHunk(first, 1, first, 1), ChangeHunk(second, 1, second, 1)],
        )

    def test_changes_within_twice_context_merge(self):
        # six unchanged lines between them
        hunks = build_hunks(self._two_changes(1, 8), 3)
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].header, "@@ -1,10 +1,10 @@")

    def test_distant_changes_split(self):
        hunks = build_hunks(self._two_changes(0, 9), 2)
        self.assertEqual([h.header for h in hunks], ["@@ -1,3 +1,3 @@", "@@ -8,3 +8,3 @@"])

    def test_context_does_not_overlap_neighbouring_change(self):
        hunks = build_hunks(self._two_changes(0, 9), 2)
        first_lines = [line.content for line in hunks[0].lines]
        self.assertNotIn(b"l10\n", first_lines)


class TestIgnoredChanges(unittest.TestCase):

    def test_only_ignored_changes_produce_no_hunks(self):
        result = _result(_lines("a", "b"), [b"a\n", b"\n", b"b\n"], [ChangeHunk(1, 0, 1, 1, ignore=True)])
        self.assertEqual(build_hunks(result, 3), [])

    def test_ignored_change_between_real_changes_is_shown(self):
        old = _lines("x", "m", "n", "y")
        new = [b"X\n", b"m\n", b"\n", b"n\n", b"Y\n"]
        result = _result(
            old,
            new,
            [
                ChangeHunk(0, 1, 0, 1),
                ChangeHunk(2, 0, 2, 1, ignore=True),
                ChangeHunk(3, 1, 4, 1),
            ],
        )
        hunks = build_hunks(result, 3)
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].header, "@@ -1,4 +1,5 @@")
        added = [line.content for line in hunks[0].lines if line.line_type == DiffLineType.ADDED]
        self.assertEqual(added, [b"X\n", b"\n", b"Y\n"])

    def test_nearby_ignored_change_joins_hunk(self):
        old = _lines("a", "b", "c")
        new = [b"a\n", b"\n", b"b\n", b"C\n"]
        result = _result(old, new, [ChangeHunk(1, 0, 1, 1, ignore=True), ChangeHunk(2, 1, 3, 1)])
        hunk = build_hunks(result, 3)[0]
        self.assertEqual(hunk.header, "@@ -1,3 +1,4 @@")
        self.assertEqual(
            [(line.prefix, line.content) for line in hunk.lines],
            [(" ", b"a\n"), ("+", b"\n"), (" ", b"b\n"), ("-", b"c\n"), ("+", b"C\n")],
        )

    def test_distant_ignored_change_is_dropped(self):
        old = [b"\n", *_lines("l1", "l2", "l3", "l4", "l5", "l6", "x")]
        new = _lines("l1", "l2", "l3", "l4", "l5", "l6", "X")
        result = _result(old, new, [ChangeHunk(0, 1, 0, 0, ignore=True), ChangeHunk(7, 1, 6, 1)])
        hunks = build_hunks(result, 3)
        self.assertEqual([h.header for h in hunks], ["@@ -5,4 +4,4 @@"])
        self.assertEqual(hunks[0].lines[0].content, b"l4\n")

    def test_blank_line_removed_near_real_change(self):
        # a b <blank> c d e  ->  a b c d E
        changes = [ChangeHunk(2, 1, 2, 0, ignore=True), ChangeHunk(5, 1, 4, 1)]
        self.assertEqual(group_changes(changes, 3), [(0, 1)])

    def test_ignored_change_after_group_is_left_out(self):
        changes = [ChangeHunk(0, 1, 0, 1), ChangeHunk(5, 1, 5, 1, ignore=True)]
        self.assertEqual(group_changes(changes, 3), [(0, 0)])

    def test_trailing_ignored_changes_alone_form_no_group(self):
        changes = [ChangeHunk(0, 1, 0, 1), ChangeHunk(20, 1, 20, 0, ignore=True)]
        self.assertEqual(group_changes(changes, 3), [(0, 0)])


class TestShowFunction(unittest.TestCase):

    def test_section_from_preceding_function_line(self):
        old = _lines("def first():", "    a = 1", "    b = 2", "    c = 3", "    d = 4", "    e = 5")
        new = list(old)
        new[5] = b"    e = 6\n"
        result = _result(old, new, [ChangeHunk(5, 1, 5, 1)])
        hunk = build_hunks(result, 1, show_function=True)[0]
        self.assertEqual(hunk.header, "@@ -5,2 +5,2 @@ def first():")

    def test_no_candidate_gives_plain_header(self):
        result = _result(_lines("  a", "  b"), _lines("  a", "  c"), [ChangeHunk(1, 1, 1, 1)])
        hunk = build_hunks(result, 1, show_function=True)[0]
        self.assertEqual(hunk.header, "@@ -1,2 +1,2 @@")

    def test_find_function_line_truncates(self):
        old = [b"x" * 100 + b"  \n", b" body\n"]
        self.assertEqual(find_function_line(old, 2), "x" * 80)

    def test_find_function_line_searches_strictly_before(self):
        old = _lines("$setup", "_helper", " indented")
        self.assertEqual(find_function_line(old, 1), "$setup")
        self.assertEqual(find_function_line(old, 3), "_helper")
        self.assertEqual(find_function_line(old, 0), "")


if __name__ == "__main__":
    unittest.main()
