"""Tests for comparison slider pointer math and drag state."""

from __future__ import annotations

import unittest

from lumina_design.slider import (
    DEFAULT_DIVIDER_PERCENT,
    DragState,
    clamp_percent,
    divider_percent,
)


class DividerPercentTests(unittest.TestCase):
    """Validate pointer-to-percent mapping."""

    def test_quarter_width_maps_to_25(self) -> None:
        left, width = 40.0, 200.0
        self.assertAlmostEqual(divider_percent(left + 0.25 * width, left, width), 25.0)

    def test_edges(self) -> None:
        self.assertEqual(divider_percent(10, 10, 50), 0.0)
        self.assertEqual(divider_percent(60, 10, 50), 100.0)

    def test_outside_range_clamps(self) -> None:
        self.assertEqual(divider_percent(-500, 10, 50), 0.0)
        self.assertEqual(divider_percent(5000, 10, 50), 100.0)

    def test_zero_width_returns_default(self) -> None:
        self.assertEqual(divider_percent(12, 10, 0), DEFAULT_DIVIDER_PERCENT)

    def test_clamp_percent(self) -> None:
        self.assertEqual(clamp_percent(-1), 0.0)
        self.assertEqual(clamp_percent(42.5), 42.5)
        self.assertEqual(clamp_percent(101), 100.0)


class DragStateTests(unittest.TestCase):
    """Validate drag lifecycle."""

    def test_defaults(self) -> None:
        state = DragState()
        self.assertEqual(state.percent, 50.0)
        self.assertFalse(state.dragging)

    def test_move_ignored_without_drag(self) -> None:
        state = DragState()
        self.assertFalse(state.move(10, 0, 100))
        self.assertEqual(state.percent, 50.0)

    def test_drag_updates_percent_until_release(self) -> None:
        state = DragState()
        state.begin()
        self.assertTrue(state.move(30, 0, 100))
        self.assertEqual(state.percent, 30.0)
        state.end()
        self.assertFalse(state.move(80, 0, 100))
        self.assertEqual(state.percent, 30.0)

    def test_move_to_same_position_reports_no_change(self) -> None:
        state = DragState()
        state.begin()
        self.assertFalse(state.move(50, 0, 100))

    def test_nudge_clamps(self) -> None:
        state = DragState(percent=97.0)
        self.assertEqual(state.nudge(5), 100.0)
        self.assertEqual(state.nudge(-150), 0.0)

    def test_reset(self) -> None:
        state = DragState(percent=12.0, dragging=True)
        state.reset()
        self.assertEqual(state.percent, DEFAULT_DIVIDER_PERCENT)
        self.assertFalse(state.dragging)


if __name__ == "__main__":
    unittest.main()
