from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from .models import Project
from .viewport import ViewportState

EPOCH_LOOKBACK_DAYS = 30


def timeline_epoch(projects: Iterable[Project], today: date) -> date:
    starts = [project.start_date for project in projects]
    if not starts:
        return today - timedelta(days=EPOCH_LOOKBACK_DAYS)
    return min(starts)


@dataclass(frozen=True)
class TimelineTransform:
    """Date <-> column mapping for one frame.

    All intermediate quantities are days; the division by ``zoom`` in
    :meth:`raw_column` is the only place days become columns.
    """

    epoch: date
    scroll_offset: int
    zoom: float

    @classmethod
    def for_state(
        cls,
        state: ViewportState,
        projects: Iterable[Project],
        today: date,
    ) -> TimelineTransform:
        return cls(
            epoch=timeline_epoch(projects, today),
            scroll_offset=state.scroll_offset,
            zoom=state.zoom,
        )

    def days_from_epoch(self, day: date) -> int:
        return (day - self.epoch).days

    def raw_column(self, day: date) -> int:
        return math.floor((self.days_from_epoch(day) - self.scroll_offset) / self.zoom)

    def visible_column(self, day: date, width: int) -> int | None:
        column = self.raw_column(day)
        if 0 <= column < width:
            return column
        return None

    def date_for_column(self, column: int) -> date:
        return self.epoch + timedelta(days=math.floor(self.scroll_offset + column * self.zoom))
