from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Iterable

from . import centering
from .centering import NAME_COLUMN_WIDTH
from .layout import (
    ProjectStatus,
    TimelineFrame,
    bar_area_width,
    filter_by_status,
    layout_frame,
    sort_by_status,
)
from .models import Project
from .transform import timeline_epoch
from .viewport import PAGE_SCROLL_DAYS, ViewportState

logger = logging.getLogger(__name__)


class Command(Enum):
    SCROLL_LEFT = "scroll_left"
    SCROLL_RIGHT = "scroll_right"
    PAGE_LEFT = "page_left"
    PAGE_RIGHT = "page_right"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    SELECT_NEXT = "select_next"
    SELECT_PREVIOUS = "select_previous"
    JUMP_TO_SELECTED = "jump_to_selected"
    CENTER_ON_TODAY = "center_on_today"
    RESET = "reset"
    CYCLE_FILTER = "cycle_filter"
    TOGGLE_SORT = "toggle_sort"


class AutoCenter(str, Enum):
    PROJECT = "project"
    START = "start"


# None shows every project
FILTER_CYCLE = (
    None,
    ProjectStatus.ACTIVE,
    ProjectStatus.OVERDUE,
    ProjectStatus.PENDING,
    ProjectStatus.COMPLETED,
)


class TimelineController:
    def __init__(
        self,
        auto_center: AutoCenter | str = AutoCenter.PROJECT,
        side_panel_width: int = NAME_COLUMN_WIDTH,
        state: ViewportState | None = None,
    ):
        self.auto_center = AutoCenter(auto_center)
        self.side_panel_width = side_panel_width
        self.state = state or ViewportState()
        self.status_filter: ProjectStatus | None = None
        self.sorted_by_status = False
        self.loaded: tuple[Project, ...] = ()
        self.projects: tuple[Project, ...] = ()

    def set_projects(self, projects: Iterable[Project], today: date, viewport_width: int) -> None:
        self.loaded = tuple(projects)
        self.projects = self._arrange(today)
        if not self.projects:
            logger.info("Project list is empty")
            return
        if self.state.selected_index is None:
            self.state.selected_index = 0
        if self.auto_center is AutoCenter.START:
            self.state.reset()
        else:
            self.jump_to_selected(today, viewport_width)

    def _arrange(self, today: date) -> tuple[Project, ...]:
        projects = list(self.loaded)
        if self.status_filter is not None:
            projects = filter_by_status(projects, [self.status_filter], today)
        if self.sorted_by_status:
            projects = sort_by_status(projects, today)
        return tuple(projects)

    def _rearrange(self, today: date, viewport_width: int) -> None:
        """Rebuild the visible list and keep the selection on the same project."""
        selected = self.selected_project()
        self.projects = self._arrange(today)
        if not self.projects:
            self.state.selected_index = None
            return
        ids = [project.id for project in self.projects]
        if selected is not None and selected.id in ids:
            self.state.selected_index = ids.index(selected.id)
        else:
            self.state.selected_index = 0
        self.jump_to_selected(today, viewport_width)

    def cycle_filter(self, today: date, viewport_width: int) -> ProjectStatus | None:
        position = FILTER_CYCLE.index(self.status_filter)
        self.status_filter = FILTER_CYCLE[(position + 1) % len(FILTER_CYCLE)]
        self._rearrange(today, viewport_width)
        logger.info(
            "Status filter %s: %d of %d projects shown",
            self.status_filter.value if self.status_filter else "off",
            len(self.projects),
            len(self.loaded),
        )
        return self.status_filter

    def toggle_sort(self, today: date, viewport_width: int) -> bool:
        self.sorted_by_status = not self.sorted_by_status
        self._rearrange(today, viewport_width)
        return self.sorted_by_status

    def selected_project(self) -> Project | None:
        index = self.state.selection(len(self.projects))
        if index is None:
            return None
        return self.projects[index]

    def epoch(self, today: date) -> date:
        return timeline_epoch(self.projects, today)

    def jump_to_selected(self, today: date, viewport_width: int) -> bool:
        project = self.selected_project()
        if project is None:
            return False
        if not project.is_valid_span:
            logger.warning("Not centering on project %s with an invalid span", project.id)
            return False
        self.state.set_scroll(
            centering.jump_to_project(
                self.epoch(today),
                project,
                self.state.zoom,
                viewport_width,
                self.side_panel_width,
            )
        )
        return True

    def center_on_today(self, today: date, viewport_width: int) -> None:
        width = bar_area_width(viewport_width, self.side_panel_width)
        self.state.set_scroll(
            centering.center_on_today(self.epoch(today), today, self.state.zoom, width)
        )

    def handle(self, command: Command, today: date, viewport_width: int) -> None:
        state = self.state
        total = len(self.projects)
        if command is Command.SCROLL_LEFT:
            state.scroll_left(1)
        elif command is Command.SCROLL_RIGHT:
            state.scroll_right(1)
        elif command is Command.PAGE_LEFT:
            state.scroll_left(PAGE_SCROLL_DAYS)
        elif command is Command.PAGE_RIGHT:
            state.scroll_right(PAGE_SCROLL_DAYS)
        elif command is Command.ZOOM_IN:
            state.zoom_in()
        elif command is Command.ZOOM_OUT:
            state.zoom_out()
        elif command is Command.SELECT_NEXT:
            state.select_next(total)
            self.jump_to_selected(today, viewport_width)
        elif command is Command.SELECT_PREVIOUS:
            state.select_previous(total)
            self.jump_to_selected(today, viewport_width)
        elif command is Command.JUMP_TO_SELECTED:
            self.jump_to_selected(today, viewport_width)
        elif command is Command.CENTER_ON_TODAY:
            self.center_on_today(today, viewport_width)
        elif command is Command.RESET:
            state.reset()
        elif command is Command.CYCLE_FILTER:
            self.cycle_filter(today, viewport_width)
        elif command is Command.TOGGLE_SORT:
            self.toggle_sort(today, viewport_width)
        else:
            raise ValueError(f"Unsupported command: {command}")

    def frame(self, width: int, today: date) -> TimelineFrame:
        return layout_frame(self.projects, self.state, width, today, self.side_panel_width)

    def tick(self) -> None:
        self.state.tick()
