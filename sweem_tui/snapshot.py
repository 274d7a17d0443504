from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .layout import TimelineFrame, axis_cells
from .render import BG_DARK, BORDER, FG_PRIMARY, PURPLE, YELLOW, bar_color, fit_name, status_color

logger = logging.getLogger(__name__)

CELL_WIDTH = 8
ROW_HEIGHT = 18
HEADER_HEIGHT = 24
BAR_INSET = 3


def snapshot_size(frame: TimelineFrame) -> tuple[int, int]:
    width = max(1, frame.width) * CELL_WIDTH
    height = HEADER_HEIGHT + max(1, len(frame.rows)) * ROW_HEIGHT
    return width, height


def bar_origin(frame: TimelineFrame) -> int:
    return (frame.width - frame.bar_width) * CELL_WIDTH


def render_snapshot(frame: TimelineFrame) -> Image.Image:
    image = Image.new("RGB", snapshot_size(frame), tuple(BG_DARK))
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()
    origin = bar_origin(frame)

    for cell in axis_cells(frame.transform, frame.bar_width, frame.today):
        x = origin + cell.column * CELL_WIDTH
        if cell.label is not None and not cell.label.isdigit():
            draw.text((x, 2), cell.label, fill=tuple(PURPLE), font=font)
        draw.line((x, HEADER_HEIGHT - 2, x + CELL_WIDTH - 1, HEADER_HEIGHT - 2), fill=tuple(BORDER))

    if frame.today_column is not None:
        x = origin + frame.today_column * CELL_WIDTH + CELL_WIDTH // 2
        draw.line((x, HEADER_HEIGHT, x, image.height - 1), fill=tuple(YELLOW))

    for position, row in enumerate(frame.rows):
        top = HEADER_HEIGHT + position * ROW_HEIGHT
        draw.text(
            (4, top + 3),
            fit_name(row.project.display_name).rstrip(),
            fill=tuple(status_color(row.status, row.index) if row.is_selected else FG_PRIMARY),
            font=font,
        )
        span = row.span
        if span is None:
            continue
        left = origin + span.visible_start * CELL_WIDTH
        right = origin + (span.visible_end + 1) * CELL_WIDTH - 1
        color = bar_color(row.status, row.index, 0.5, 0)
        draw.rectangle((left, top + BAR_INSET, right, top + ROW_HEIGHT - BAR_INSET), fill=tuple(color))
        if span.today_column is not None:
            x = origin + span.today_column * CELL_WIDTH + CELL_WIDTH // 2
            draw.line((x, top, x, top + ROW_HEIGHT - 1), fill=tuple(YELLOW), width=2)

    return image


def write_snapshot(frame: TimelineFrame, path: Path | str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    image = render_snapshot(frame)
    image.save(target, format="PNG")
    logger.info("Wrote timeline snapshot %s (%dx%d)", target, image.width, image.height)
    return target
