from __future__ import annotations

import dataclasses
import unittest
from datetime import date

from sweem_tui.layout import (
    ProjectStatus,
    axis_cells,
    bar_area_width,
    classify_status,
    filter_by_status,
    layout_bar,
    layout_frame,
    project_details,
    sort_by_status,
)
from sweem_tui.transform import TimelineTransform
from sweem_tui.viewport import ViewportState

from ._fixtures import EPOCH, day, make_project

WIDTH = 26 + 60


class StatusTests(unittest.TestCase):
    def test_completed_wins_over_overdue(self) -> None:
        project = make_project(1, 0, 5, actual_end=9)
        self.assertEqual(classify_status(project, day(30)), ProjectStatus.COMPLETED)

    def test_overdue_when_planned_end_passed(self) -> None:
        project = make_project(1, 0, 8)
        self.assertEqual(classify_status(project, day(10)), ProjectStatus.OVERDUE)
        self.assertEqual(classify_status(project, day(8)), ProjectStatus.ACTIVE)

    def test_pending_before_start(self) -> None:
        self.assertEqual(classify_status(make_project(1, 12, 20), day(10)), ProjectStatus.PENDING)

    def test_active_by_default(self) -> None:
        self.assertEqual(classify_status(make_project(1, 5, 20), day(10)), ProjectStatus.ACTIVE)

    def test_filter_and_sort_use_classification(self) -> None:
        done = make_project(1, 0, 5, actual_end=5)
        late = make_project(2, 0, 8)
        active = make_project(3, 5, 20)
        later = make_project(4, 15, 30)
        today = day(10)
        projects = [done, later, active, late]
        self.assertEqual(filter_by_status(projects, [ProjectStatus.OVERDUE], today), [late])
        self.assertEqual(sort_by_status(projects, today), [late, active, later, done])


class LayoutBarTests(unittest.TestCase):
    def test_scenario_active_and_overdue(self) -> None:
        today = day(10)
        project_a = make_project(1, 5, 20)
        project_b = make_project(2, 0, 8)
        frame = layout_frame([project_a, project_b], ViewportState(), WIDTH, today)

        self.assertEqual(frame.epoch, EPOCH)
        row_a, row_b = frame.rows
        self.assertEqual(row_a.status, ProjectStatus.ACTIVE)
        self.assertEqual(row_a.span.visible_start, 5)
        self.assertEqual(row_a.span.visible_end, 20)
        self.assertEqual(row_a.span.today_column, 10)
        self.assertEqual(row_b.status, ProjectStatus.OVERDUE)
        self.assertIsNone(row_b.span.today_column)
        self.assertEqual(frame.today_column, 10)

    def test_project_before_viewport_is_invisible(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=50, zoom=1.0)
        self.assertIsNone(layout_bar(make_project(1, 0, 20), transform, 60, day(0)))

    def test_project_after_viewport_is_invisible(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=0, zoom=1.0)
        self.assertIsNone(layout_bar(make_project(1, 60, 90), transform, 60, day(0)))
        self.assertIsNotNone(layout_bar(make_project(2, 59, 90), transform, 60, day(0)))

    def test_project_straddling_left_edge_starts_at_zero(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=10, zoom=1.0)
        span = layout_bar(make_project(1, 5, 20), transform, 60, day(0))
        self.assertEqual(span.start_col_raw, -5)
        self.assertEqual(span.visible_start, 0)
        self.assertEqual(span.visible_end, 10)
        self.assertFalse(span.starts_in_view)
        self.assertTrue(span.ends_in_view)

    def test_project_straddling_right_edge_is_clipped(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=0, zoom=1.0)
        span = layout_bar(make_project(1, 50, 100), transform, 60, day(0))
        self.assertEqual(span.visible_end, 59)
        self.assertFalse(span.ends_in_view)
        self.assertEqual(span.length, 10)

    def test_today_outside_bar_has_no_marker(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=0, zoom=1.0)
        span = layout_bar(make_project(1, 20, 30), transform, 60, day(10))
        self.assertIsNone(span.today_column)

    def test_single_day_project_at_sub_day_zoom(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=0, zoom=0.25)
        span = layout_bar(make_project(1, 3, 3), transform, 60, day(0))
        self.assertEqual((span.visible_start, span.visible_end), (12, 12))

    def test_invalid_span_is_skipped_and_logged(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=0, zoom=1.0)
        with self.assertLogs("sweem_tui.layout", level="WARNING") as captured:
            span = layout_bar(make_project(1, 20, 10), transform, 60, day(0))
        self.assertIsNone(span)
        self.assertIn("Skipping project", captured.output[0])

    def test_zero_width_bar_area_draws_nothing(self) -> None:
        transform = TimelineTransform(EPOCH, scroll_offset=0, zoom=1.0)
        self.assertIsNone(layout_bar(make_project(1, 0, 20), transform, 0, day(0)))


class LayoutFrameTests(unittest.TestCase):
    def test_bar_area_width_saturates(self) -> None:
        self.assertEqual(bar_area_width(100), 74)
        self.assertEqual(bar_area_width(10), 0)

    def test_degenerate_viewport_returns_nothing_visible(self) -> None:
        frame = layout_frame([make_project(1, 0, 20)], ViewportState(), 20, day(5))
        self.assertTrue(frame.is_degenerate)
        self.assertEqual(frame.bar_width, 0)
        self.assertIsNone(frame.rows[0].span)
        self.assertIsNone(frame.today_column)

    def test_stale_selection_marks_no_row(self) -> None:
        state = ViewportState(selected_index=5)
        frame = layout_frame([make_project(1, 0, 20), make_project(2, 3, 9)], state, WIDTH, day(5))
        self.assertIsNone(frame.selected_row)
        self.assertEqual(state.selected_index, 5)

    def test_selected_row_is_flagged(self) -> None:
        state = ViewportState(selected_index=1)
        frame = layout_frame([make_project(1, 0, 20), make_project(2, 3, 9)], state, WIDTH, day(5))
        self.assertEqual(frame.selected_row.index, 1)
        self.assertFalse(frame.rows[0].is_selected)

    def test_empty_projects_use_lookback_epoch(self) -> None:
        today = date(2026, 10, 16)
        frame = layout_frame([], ViewportState(), WIDTH, today)
        self.assertEqual(frame.rows, ())
        self.assertEqual(frame.today_column, 30)


class AxisCellTests(unittest.TestCase):
    def test_labels_weekends_and_today(self) -> None:
        transform = TimelineTransform(date(2026, 1, 30), scroll_offset=0, zoom=1.0)
        cells = axis_cells(transform, 10, date(2026, 2, 3))
        self.assertEqual(len(cells), 10)
        self.assertEqual(cells[2].label, "Feb")
        self.assertEqual(cells[8].label, "07")
        self.assertIsNone(cells[0].label)
        self.assertFalse(cells[0].is_weekend)
        self.assertTrue(cells[1].is_weekend)
        self.assertTrue(cells[4].is_today)
        self.assertEqual(sum(cell.is_today for cell in cells), 1)


class ProjectDetailsTests(unittest.TestCase):
    def test_active_progress_is_elapsed_share_of_plan(self) -> None:
        details = project_details(make_project(1, 0, 40), day(10))
        self.assertEqual(details.status_label, "ACTIVE")
        self.assertEqual(details.deadline, "30 days left")
        self.assertEqual(details.progress, 0.25)
        self.assertEqual(details.progress_percent, 25)

    def test_overdue_counts_days_past_deadline_and_caps_progress(self) -> None:
        details = project_details(make_project(1, 0, 5), day(10))
        self.assertEqual(details.status_label, "LATE")
        self.assertEqual(details.days_until_deadline, -5)
        self.assertEqual(details.deadline, "5 days OVERDUE")
        self.assertEqual(details.progress, 1.0)

    def test_pending_has_no_progress(self) -> None:
        details = project_details(make_project(1, 20, 40), day(10))
        self.assertEqual(details.status_label, "PLANNED")
        self.assertEqual(details.deadline, "30 days left")
        self.assertEqual(details.progress, 0.0)

    def test_completed_is_full_even_before_planned_end(self) -> None:
        details = project_details(make_project(1, 0, 40, actual_end=8), day(10))
        self.assertEqual(details.status_label, "DONE")
        self.assertEqual(details.deadline, "Completed")
        self.assertEqual(details.progress_percent, 100)

    def test_zero_length_plan_does_not_divide_by_zero(self) -> None:
        details = project_details(make_project(1, 10, 10), day(10))
        self.assertEqual(details.status, ProjectStatus.ACTIVE)
        self.assertEqual(details.deadline, "0 days left")
        self.assertEqual(details.progress, 0.0)

    def test_placeholder_deadline_reads_not_set(self) -> None:
        placeholder = dataclasses.replace(
            make_project(1, 0, 1),
            start_date=date(1, 1, 1),
            planned_end_date=date(1, 1, 1),
        )
        self.assertEqual(project_details(placeholder, day(10)).deadline, "Not Set")


if __name__ == "__main__":
    unittest.main()
