import unittest
from datetime import date

from calendar_logic import month_view
from habits import HABITS
from layout import (
    BREAKPOINTS,
    CanvasSpec,
    canvas_for_screen,
    compute_layout,
    row_centered_left,
)

MARCH_2024 = month_view(date(2024, 3, 1))
FOUR_WEEKS = month_view(date(2015, 2, 1))
FIVE_WEEKS = month_view(date(2024, 4, 1))


def all_canvases() -> list[CanvasSpec]:
    return [CanvasSpec(w, h) for _min, w, h in BREAKPOINTS]


class TestBreakpoints(unittest.TestCase):
    def test_screen_width_selects_canvas(self) -> None:
        cases = {
            430: (364, 382),
            428: (364, 382),
            414: (338, 354),
            390: (338, 354),
            389: (329, 345),
            375: (329, 345),
            374: (292, 311),
            320: (292, 311),
            0: (292, 311),
        }
        for screen, size in cases.items():
            canvas = canvas_for_screen(screen)
            self.assertEqual((canvas.width, canvas.height), size, screen)

    def test_scale_and_rounding(self) -> None:
        canvas = CanvasSpec(329, 345)
        self.assertEqual(canvas.scale, 1.0)
        self.assertEqual(canvas.px(28), 28)
        self.assertEqual(CanvasSpec(338, 354).px(36), 37)
        self.assertEqual(CanvasSpec(338, 354).inner_width, 314)


class TestGrid(unittest.TestCase):
    def test_rows_never_overflow_grid_budget(self) -> None:
        for canvas in all_canvases():
            for month in (FOUR_WEEKS, FIVE_WEEKS, MARCH_2024):
                plan = compute_layout(canvas, month)
                self.assertLessEqual(plan.row_height * plan.weeks, plan.grid_budget)
                last = plan.cells[-1]
                self.assertLessEqual(last.y + plan.row_height,
                                     plan.grid_top + plan.grid_budget)

    def test_everything_fits_on_canvas(self) -> None:
        for canvas in all_canvases():
            plan = compute_layout(canvas, MARCH_2024)
            self.assertGreater(plan.divider.y, plan.cells[-1].y)
            for indicator in plan.indicators:
                self.assertLessEqual(indicator.label.bottom, canvas.height)
                self.assertGreaterEqual(indicator.circle.x, 0)
                self.assertLessEqual(indicator.circle.x + indicator.circle.width,
                                     canvas.width)

    def test_march_2024_scenario(self) -> None:
        canvas = CanvasSpec(338, 354)
        plan = compute_layout(canvas, MARCH_2024)
        self.assertEqual(plan.weeks, 6)
        self.assertEqual(plan.grid_budget, 160)
        self.assertEqual(plan.row_height, 26)
        self.assertEqual(plan.grid_top, 74)

        first = plan.cell_for(1)
        self.assertEqual((first.row, first.column), (0, 5))
        self.assertEqual(first.y, 74)
        last = plan.cell_for(31)
        self.assertEqual((last.row, last.column), (5, 0))
        self.assertEqual(last.y, 74 + 5 * 26)
        self.assertEqual(plan.divider.y, 74 + 6 * 26 + 8)

    def test_cells_cover_every_day_without_gaps(self) -> None:
        for month in (FOUR_WEEKS, FIVE_WEEKS, MARCH_2024):
            plan = compute_layout(CanvasSpec(338, 354), month)
            self.assertEqual([c.day for c in plan.cells],
                             list(range(1, month.days_in_month + 1)))
            positions = [(c.row, c.column) for c in plan.cells]
            self.assertEqual(len(set(positions)), len(positions))
            self.assertEqual(positions[0], (0, month.first_weekday_offset))
            linear = [r * 7 + c for r, c in positions]
            self.assertEqual(linear, list(range(linear[0], linear[0] + len(linear))))
            self.assertEqual(positions[-1][0], month.weeks_needed - 1)

    def test_columns_span_inner_width(self) -> None:
        canvas = CanvasSpec(338, 354)
        plan = compute_layout(canvas, MARCH_2024)
        self.assertEqual(len(plan.column_x), 7)
        self.assertAlmostEqual(plan.column_x[0] - plan.cell_width / 2, canvas.padding)
        self.assertAlmostEqual(plan.column_x[6] + plan.cell_width / 2,
                               canvas.width - canvas.padding)
        self.assertAlmostEqual(plan.cell_for(1).x, plan.column_x[5])


class TestHighlight(unittest.TestCase):
    def test_highlight_on_today(self) -> None:
        canvas = CanvasSpec(338, 354)
        plan = compute_layout(canvas, MARCH_2024, today=date(2024, 3, 13))
        cell = plan.cell_for(13)
        self.assertIsNotNone(plan.highlight)
        self.assertAlmostEqual(plan.highlight.center_x, cell.x)
        self.assertEqual(plan.highlight.width, canvas.px(28))
        self.assertEqual(plan.highlight.y, cell.y - canvas.px(4))

    def test_no_highlight_outside_month(self) -> None:
        canvas = CanvasSpec(338, 354)
        self.assertIsNone(compute_layout(canvas, MARCH_2024, today=date(2024, 4, 13)).highlight)
        self.assertIsNone(compute_layout(canvas, MARCH_2024, today=date(2023, 3, 13)).highlight)
        self.assertIsNone(compute_layout(canvas, MARCH_2024).highlight)


class TestCentering(unittest.TestCase):
    def test_dot_row_centered_under_day(self) -> None:
        plan = compute_layout(CanvasSpec(338, 354), MARCH_2024)
        cell = plan.cell_for(10)
        for n in (1, 2, 3):
            boxes = plan.dot_row(cell, n)
            total = n * plan.dot_size + (n - 1) * plan.dot_spacing
            self.assertEqual(len(boxes), n)
            self.assertAlmostEqual(boxes[0].x, cell.x - total / 2)
            self.assertAlmostEqual(boxes[-1].x + boxes[-1].width, cell.x + total / 2)
            for box in boxes:
                self.assertEqual(box.y, cell.y + plan.dot_offset)

    def test_wins_indicators_centered(self) -> None:
        for canvas in all_canvases():
            plan = compute_layout(canvas, MARCH_2024)
            circle = canvas.px(32)
            spacing = canvas.px(70)
            total = 3 * circle + 2 * spacing
            self.assertEqual([i.habit for i in plan.indicators], list(HABITS))
            self.assertAlmostEqual(plan.indicators[0].circle.x, (canvas.width - total) / 2)
            right = plan.indicators[-1].circle
            self.assertAlmostEqual(right.x + right.width, (canvas.width + total) / 2)
            for indicator in plan.indicators:
                self.assertAlmostEqual(indicator.label.center_x,
                                       indicator.circle.center_x)
                self.assertGreater(indicator.label.y, indicator.circle.bottom)

    def test_row_centered_left(self) -> None:
        self.assertEqual(row_centered_left(100, 1, 10, 5), 45)
        self.assertEqual(row_centered_left(100, 3, 10, 5), 30)


if __name__ == "__main__":
    unittest.main(verbosity=2)
