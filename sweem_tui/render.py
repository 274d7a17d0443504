from __future__ import annotations

import math

from rich.color import Color, blend_rgb
from rich.color_triplet import ColorTriplet
from rich.style import Style
from rich.text import Text

from .centering import NAME_COLUMN_WIDTH
from .layout import BarRow, ProjectDetails, ProjectStatus, TimelineFrame, axis_cells
from .viewport import ViewportState

BLOCK_FULL = "█"
BLOCK_LEFT = "▌"
BLOCK_RIGHT = "▐"
BLOCK_DARK = "▓"
TODAY_LINE = "│"
TODAY_AXIS = "▼"
SPARKLE_CHARS = ("✦", "✧", "⋆", "★")

STATUS_GLYPHS = {
    ProjectStatus.COMPLETED: "✓",
    ProjectStatus.OVERDUE: "!",
    ProjectStatus.PENDING: "○",
    ProjectStatus.ACTIVE: "●",
}

RED = ColorTriplet(232, 36, 36)
GREEN = ColorTriplet(152, 187, 108)
YELLOW = ColorTriplet(230, 195, 132)
PURPLE = ColorTriplet(149, 127, 184)
BLUE = ColorTriplet(126, 156, 216)
FG_PRIMARY = ColorTriplet(220, 215, 186)
FG_DIM = ColorTriplet(114, 113, 105)
BORDER = ColorTriplet(84, 84, 109)
BORDER_DIM = ColorTriplet(54, 54, 70)
BG_DARK = ColorTriplet(24, 22, 22)

PROJECT_COLORS = (
    ColorTriplet(195, 64, 67),
    ColorTriplet(255, 160, 102),
    ColorTriplet(230, 195, 132),
    ColorTriplet(152, 187, 108),
    ColorTriplet(106, 149, 137),
    ColorTriplet(126, 156, 216),
    ColorTriplet(149, 127, 184),
    ColorTriplet(210, 126, 153),
)

NAME_WIDTH = NAME_COLUMN_WIDTH - 5


def project_color(index: int) -> ColorTriplet:
    return PROJECT_COLORS[index % len(PROJECT_COLORS)]


def dim(color: ColorTriplet, factor: float) -> ColorTriplet:
    return ColorTriplet(
        int(color.red * factor),
        int(color.green * factor),
        int(color.blue * factor),
    )


def status_color(status: ProjectStatus, index: int) -> ColorTriplet:
    if status is ProjectStatus.COMPLETED:
        return GREEN
    if status is ProjectStatus.OVERDUE:
        return RED
    if status is ProjectStatus.PENDING:
        return FG_DIM
    return project_color(index)


def bar_color(
    status: ProjectStatus,
    index: int,
    relative_pos: float,
    animation_frame: int,
) -> ColorTriplet:
    base = project_color(index)
    if status is ProjectStatus.COMPLETED:
        return blend_rgb(base, GREEN, min(1.0, 0.4 + relative_pos * 0.2))
    if status is ProjectStatus.OVERDUE:
        pulse = math.sin((animation_frame % 20) / 20.0 * math.pi) * 0.3
        return blend_rgb(base, RED, 0.5 + pulse)
    if status is ProjectStatus.PENDING:
        return dim(base, 0.5)
    if relative_pos < 0.15 or relative_pos > 0.85:
        return dim(base, 0.7)
    return base


def _style(color: ColorTriplet, **kwargs) -> Style:
    return Style(color=Color.from_triplet(color), **kwargs)


def fit_name(name: str, width: int = NAME_WIDTH) -> str:
    if width <= 0:
        return ""
    if len(name) > width:
        return name[: width - 1] + "…"
    return name.ljust(width)


def render_axis(frame: TimelineFrame) -> list[Text]:
    labels = Text(" " * NAME_COLUMN_WIDTH)
    line = Text(" " * NAME_COLUMN_WIDTH)
    cells = axis_cells(frame.transform, frame.bar_width, frame.today)

    label_row = [" "] * frame.bar_width
    label_styles: list[Style | None] = [None] * frame.bar_width
    for cell in cells:
        if cell.label is None or cell.column + len(cell.label) > frame.bar_width:
            continue
        is_month = not cell.label.isdigit()
        style = _style(PURPLE, bold=True) if is_month else _style(FG_DIM)
        for offset, char in enumerate(cell.label):
            label_row[cell.column + offset] = char
            label_styles[cell.column + offset] = style
    for char, style in zip(label_row, label_styles):
        labels.append(char, style)

    for cell in cells:
        if cell.is_today:
            line.append(TODAY_AXIS, _style(YELLOW, bold=True))
        elif cell.is_weekend:
            line.append("┄", _style(BORDER_DIM))
        else:
            line.append("─", _style(BORDER))
    return [labels, line]


def render_row(row: BarRow, frame: TimelineFrame, animation_frame: int) -> Text:
    color = project_color(row.index)
    text = Text()

    if row.is_selected:
        sparkle = SPARKLE_CHARS[(animation_frame // 4) % len(SPARKLE_CHARS)]
        text.append(sparkle, _style(YELLOW))
    else:
        text.append("│", _style(color))
    text.append(
        STATUS_GLYPHS[row.status],
        _style(status_color(row.status, row.index), bold=True, blink=row.is_selected),
    )
    text.append(" ")
    name_style = (
        Style(color=Color.from_triplet(BG_DARK), bgcolor=Color.from_triplet(color), bold=True)
        if row.is_selected
        else _style(FG_PRIMARY)
    )
    text.append(fit_name(row.project.display_name), name_style)
    text.append("  ")

    span = row.span
    for column in range(frame.bar_width):
        if span is not None and span.contains(column):
            if column == span.today_column:
                text.append(TODAY_LINE, _style(YELLOW, bold=True))
                continue
            text.append(_bar_char(row, column, animation_frame), _bar_style(row, column, animation_frame))
        elif column == frame.today_column:
            glow = "┃" if (row.index + animation_frame // 3) % 3 == 0 else TODAY_LINE
            text.append(glow, _style(YELLOW, dim=True))
        else:
            text.append(" ")
    return text


def _bar_char(row: BarRow, column: int, animation_frame: int) -> str:
    span = row.span
    is_start = column == span.start_col_raw
    is_end = column == span.end_col_raw
    if is_start and not is_end:
        return BLOCK_LEFT
    if is_end and not is_start:
        return BLOCK_RIGHT
    if row.is_selected:
        shift = (animation_frame // 2) % 4
        return BLOCK_FULL if (column + shift) % 2 == 0 else BLOCK_DARK
    return BLOCK_FULL


def _bar_style(row: BarRow, column: int, animation_frame: int) -> Style:
    span = row.span
    if span.length > 1:
        relative_pos = (column - span.visible_start) / (span.length - 1)
    else:
        relative_pos = 0.5
    color = bar_color(row.status, row.index, relative_pos, animation_frame)
    return _style(color, bold=row.is_selected)


def render_legend() -> Text:
    legend = Text()
    items = (
        (STATUS_GLYPHS[ProjectStatus.ACTIVE], "Active", BLUE),
        (STATUS_GLYPHS[ProjectStatus.PENDING], "Pending", FG_DIM),
        (STATUS_GLYPHS[ProjectStatus.COMPLETED], "Done", GREEN),
        (STATUS_GLYPHS[ProjectStatus.OVERDUE], "Overdue", RED),
        (TODAY_LINE, "Today", YELLOW),
    )
    for glyph, label, color in items:
        legend.append(glyph, _style(color, bold=True))
        legend.append(f"{label}  ", _style(FG_DIM))
    return legend


def render_status_line(
    state: ViewportState,
    project_count: int,
    connected: bool | None = None,
    status_filter: ProjectStatus | None = None,
    sorted_by_status: bool = False,
) -> Text:
    selected = state.selection(project_count)
    selected_info = f"#{selected + 1}" if selected is not None else "none"
    status = Text()
    if connected is not None:
        if connected:
            status.append("● Connected  ", _style(GREEN))
        else:
            status.append("○ Disconnected  ", _style(RED))
    status.append(
        f"{project_count} projects  ▸ {selected_info}  {state.zoom:.2f}d/col",
        _style(FG_DIM),
    )
    if status_filter is not None:
        status.append(f"  filter: {status_filter.value}", _style(BLUE))
    if sorted_by_status:
        status.append("  sorted by status", _style(BLUE))
    sparkle = SPARKLE_CHARS[(state.animation_frame // 8) % len(SPARKLE_CHARS)]
    status.append(f"  {sparkle}", _style(PURPLE))
    return status


DETAILS_BAR_WIDTH = 20


def render_details(details: ProjectDetails | None) -> Text:
    if details is None:
        return Text("Awaiting selection…\n\nUse j/k to pick a project", _style(FG_DIM))

    project = details.project
    color = BLUE if details.status is ProjectStatus.ACTIVE else status_color(details.status, 0)
    if details.deadline == "Not Set":
        deadline_style = _style(FG_DIM)
    elif details.status is ProjectStatus.COMPLETED:
        deadline_style = _style(GREEN)
    elif details.days_until_deadline < 0:
        deadline_style = _style(RED)
    else:
        deadline_style = _style(BLUE)
    filled = int(details.progress * DETAILS_BAR_WIDTH)

    text = Text()
    text.append(project.display_name, Style(color=Color.from_triplet(FG_PRIMARY), bold=True, underline=True))
    text.append(f"\nID: {project.id}\n\n", _style(FG_DIM))
    text.append("Status:   ")
    text.append(details.status_label, _style(color, bold=True))
    text.append("\nDeadline: ")
    text.append(details.deadline, deadline_style)
    text.append("\nProgress: ")
    text.append(f"{details.progress_percent}% ", _style(FG_PRIMARY))
    text.append(
        "[" + "█" * filled + "░" * (DETAILS_BAR_WIDTH - filled) + "]",
        _style(color),
    )
    text.append("\nStart:    ")
    text.append(project.start_date.isoformat(), _style(FG_DIM))
    text.append("\nPlan End: ")
    text.append(project.planned_end_date.isoformat(), _style(FG_DIM))
    return text


def visible_rows(frame: TimelineFrame, capacity: int) -> tuple[BarRow, ...]:
    if capacity <= 0:
        return ()
    rows = frame.rows
    first = 0
    selected = frame.selected_row
    if selected is not None and selected.index >= capacity:
        first = selected.index - capacity + 1
    return rows[first : first + capacity]


def render_timeline(frame: TimelineFrame, height: int, animation_frame: int = 0) -> Text:
    if frame.is_degenerate or height < 3:
        return Text("Terminal too small for the timeline", _style(FG_DIM))

    lines = render_axis(frame)
    for row in visible_rows(frame, height - 3):
        lines.append(render_row(row, frame, animation_frame))
    if not frame.rows:
        lines.append(Text("No projects loaded", _style(FG_DIM)))

    footer = Text()
    if frame.transform.scroll_offset > 0:
        footer.append("◀ h  ", _style(FG_DIM))
    footer.append_text(render_legend())
    footer.append("l ▶", _style(FG_DIM))
    lines.append(footer)
    return Text("\n").join(lines)
