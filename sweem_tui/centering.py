from __future__ import annotations

import math
from datetime import date, timedelta

from .models import Project

# selection marker (1) + status glyph (1) + gap (1) + name (21) + gap (2)
NAME_COLUMN_WIDTH = 26


def effective_width(viewport_width: int, side_panel_width: int = NAME_COLUMN_WIDTH) -> int:
    return max(0, viewport_width - side_panel_width)


def columns_to_days(columns: int, zoom: float) -> int:
    return math.floor(columns * zoom)


def center_offset(epoch: date, target: date, zoom: float, width: int) -> int:
    """Scroll offset (days) that puts ``target`` at column ``width // 2``."""
    offset_days = columns_to_days(max(0, width) // 2, zoom)
    return max(0, (target - epoch).days - offset_days)


def center_on_today(epoch: date, today: date, zoom: float, width: int) -> int:
    return center_offset(epoch, today, zoom, width)


def project_midpoint(project: Project) -> date:
    return project.start_date + timedelta(days=project.duration_days // 2)


def jump_to_project(
    epoch: date,
    project: Project,
    zoom: float,
    viewport_width: int,
    side_panel_width: int = NAME_COLUMN_WIDTH,
) -> int:
    """Scroll offset (days) centering ``project`` in the date area.

    The side panel takes screen columns but has no date axis, so only the
    remaining width is used. The half-width is a column count and is
    converted to days before it is subtracted from the midpoint offset.
    """
    width = effective_width(viewport_width, side_panel_width)
    return center_offset(epoch, project_midpoint(project), zoom, width)
