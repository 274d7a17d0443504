from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Sequence

from .centering import NAME_COLUMN_WIDTH
from .models import Project
from .transform import TimelineTransform
from .viewport import ViewportState

logger = logging.getLogger(__name__)


class ProjectStatus(Enum):
    COMPLETED = "completed"
    OVERDUE = "overdue"
    PENDING = "pending"
    ACTIVE = "active"


_STATUS_ORDER = {
    ProjectStatus.OVERDUE: 0,
    ProjectStatus.ACTIVE: 1,
    ProjectStatus.PENDING: 2,
    ProjectStatus.COMPLETED: 3,
}


def classify_status(project: Project, today: date) -> ProjectStatus:
    if project.actual_end_date is not None:
        return ProjectStatus.COMPLETED
    if today > project.planned_end_date:
        return ProjectStatus.OVERDUE
    if project.start_date > today:
        return ProjectStatus.PENDING
    return ProjectStatus.ACTIVE


def filter_by_status(
    projects: Iterable[Project],
    statuses: Iterable[ProjectStatus],
    today: date,
) -> list[Project]:
    wanted = set(statuses)
    return [project for project in projects if classify_status(project, today) in wanted]


def sort_by_status(projects: Iterable[Project], today: date) -> list[Project]:
    return sorted(
        projects,
        key=lambda project: (
            _STATUS_ORDER[classify_status(project, today)],
            project.start_date,
            project.display_name.lower(),
        ),
    )


def bar_area_width(total_width: int, side_panel_width: int = NAME_COLUMN_WIDTH) -> int:
    return max(0, total_width - side_panel_width)


@dataclass(frozen=True)
class BarSpan:
    start_col_raw: int
    end_col_raw: int
    visible_start: int
    visible_end: int
    today_column: int | None = None

    @property
    def starts_in_view(self) -> bool:
        return self.start_col_raw == self.visible_start

    @property
    def ends_in_view(self) -> bool:
        return self.end_col_raw == self.visible_end

    @property
    def length(self) -> int:
        return self.visible_end - self.visible_start + 1

    def contains(self, column: int) -> bool:
        return self.visible_start <= column <= self.visible_end


def layout_bar(
    project: Project,
    transform: TimelineTransform,
    bar_width: int,
    today: date,
) -> BarSpan | None:
    if not project.is_valid_span:
        logger.warning(
            "Skipping project %s: end %s is before start %s",
            project.id,
            project.effective_end.isoformat(),
            project.start_date.isoformat(),
        )
        return None
    if bar_width <= 0:
        return None

    start_col_raw = transform.raw_column(project.start_date)
    end_col_raw = transform.raw_column(project.effective_end)
    if end_col_raw < 0 or start_col_raw >= bar_width:
        return None

    visible_start = min(max(start_col_raw, 0), bar_width - 1)
    visible_end = min(max(end_col_raw, 0), bar_width - 1)
    if visible_end < visible_start:
        return None

    today_column = transform.visible_column(today, bar_width)
    if today_column is not None and not visible_start <= today_column <= visible_end:
        today_column = None

    return BarSpan(
        start_col_raw=start_col_raw,
        end_col_raw=end_col_raw,
        visible_start=visible_start,
        visible_end=visible_end,
        today_column=today_column,
    )


@dataclass(frozen=True)
class BarRow:
    index: int
    project: Project
    status: ProjectStatus
    span: BarSpan | None
    is_selected: bool


@dataclass(frozen=True)
class TimelineFrame:
    transform: TimelineTransform
    width: int
    bar_width: int
    today: date
    today_column: int | None
    rows: tuple[BarRow, ...]

    @property
    def epoch(self) -> date:
        return self.transform.epoch

    @property
    def is_degenerate(self) -> bool:
        return self.bar_width <= 0

    @property
    def selected_row(self) -> BarRow | None:
        for row in self.rows:
            if row.is_selected:
                return row
        return None


def layout_frame(
    projects: Sequence[Project],
    state: ViewportState,
    width: int,
    today: date,
    side_panel_width: int = NAME_COLUMN_WIDTH,
) -> TimelineFrame:
    transform = TimelineTransform.for_state(state, projects, today)
    bar_width = bar_area_width(width, side_panel_width)
    selected = state.selection(len(projects))

    rows = tuple(
        BarRow(
            index=index,
            project=project,
            status=classify_status(project, today),
            span=layout_bar(project, transform, bar_width, today),
            is_selected=index == selected,
        )
        for index, project in enumerate(projects)
    )
    return TimelineFrame(
        transform=transform,
        width=max(0, width),
        bar_width=bar_width,
        today=today,
        today_column=transform.visible_column(today, bar_width),
        rows=rows,
    )


@dataclass(frozen=True)
class AxisCell:
    column: int
    day: date
    label: str | None
    is_today: bool
    is_weekend: bool


def axis_cells(transform: TimelineTransform, bar_width: int, today: date) -> list[AxisCell]:
    today_column = transform.raw_column(today)
    cells: list[AxisCell] = []
    for column in range(max(0, bar_width)):
        day = transform.date_for_column(column)
        if day.day == 1:
            label = day.strftime("%b")
        elif day.day % 7 == 0 and column > 0:
            label = day.strftime("%d")
        else:
            label = None
        cells.append(
            AxisCell(
                column=column,
                day=day,
                label=label,
                is_today=column == today_column,
                is_weekend=day.weekday() >= 5,
            )
        )
    return cells


STATUS_LABELS = {
    ProjectStatus.COMPLETED: "DONE",
    ProjectStatus.OVERDUE: "LATE",
    ProjectStatus.PENDING: "PLANNED",
    ProjectStatus.ACTIVE: "ACTIVE",
}

# planned end dates before this year are placeholders from the backend
_FIRST_REAL_DEADLINE_YEAR = 2000


@dataclass(frozen=True)
class ProjectDetails:
    project: Project
    status: ProjectStatus
    days_until_deadline: int
    deadline: str
    progress: float

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    @property
    def progress_percent(self) -> int:
        return round(self.progress * 100)


def project_details(project: Project, today: date) -> ProjectDetails:
    """Summary of one project for the details panel.

    The deadline countdown always runs against ``planned_end_date``. Progress
    is elapsed time over planned duration, clamped to ``[0, 1]``; pending
    projects are at 0 and completed ones at 1 regardless of dates.
    """
    status = classify_status(project, today)
    days_left = (project.planned_end_date - today).days

    if project.planned_end_date.year < _FIRST_REAL_DEADLINE_YEAR:
        deadline = "Not Set"
    elif status is ProjectStatus.COMPLETED:
        deadline = "Completed"
    elif days_left < 0:
        deadline = f"{-days_left} days OVERDUE"
    else:
        deadline = f"{days_left} days left"

    if status is ProjectStatus.COMPLETED:
        progress = 1.0
    elif status is ProjectStatus.PENDING:
        progress = 0.0
    else:
        planned = max(1, (project.planned_end_date - project.start_date).days)
        elapsed = max(0, (today - project.start_date).days)
        progress = min(1.0, elapsed / planned)

    return ProjectDetails(
        project=project,
        status=status,
        days_until_deadline=days_left,
        deadline=deadline,
        progress=progress,
    )
