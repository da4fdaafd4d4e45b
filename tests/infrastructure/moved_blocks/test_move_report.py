"""Tests for the JSON move report."""

import json
import unittest

from moved_block_fixtures import two_moves

from movediff.domain.moved import MovedMode
from movediff.infrastructure.moved_blocks import build_move_report, detect_moved_blocks


class TestBuildMoveReport(unittest.TestCase):

    def test_zebra_report(self):
        with detect_moved_blocks(two_moves(), MovedMode.ZEBRA) as ctx:
            report = build_move_report(ctx)
        self.assertEqual(report.mode, "zebra")
        self.assertEqual(report.moves_detected, 2)
        self.assertEqual(report.total_lines_moved, 2)
        self.assertEqual(report.moves[0].source_lines, (1, 1))
        self.assertEqual(report.moves[0].target_lines, (3, 3))
        self.assertEqual(report.moves[1].group, 1)

    def test_to_dict_is_json_serializable(self):
        with detect_moved_blocks(two_moves(), MovedMode.PLAIN) as ctx:
            data = build_move_report(ctx).to_dict()
        round_tripped = json.loads(json.dumps(data))
        self.assertEqual(round_tripped["moves"][1]["source_lines"], [3, 3])
        self.assertEqual(round_tripped["moves"][1]["target_lines"], [5, 5])
        self.assertIsNone(round_tripped["moves"][0]["group"])

    def test_empty_report_for_mode_no(self):
        with detect_moved_blocks(two_moves(), MovedMode.NO) as ctx:
            report = build_move_report(ctx)
        self.assertEqual(report.moves_detected, 0)
        self.assertEqual(report.moves, ())


if __name__ == "__main__":
    unittest.main()
