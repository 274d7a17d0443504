from __future__ import annotations

from dataclasses import dataclass

MIN_ZOOM = 0.25
MAX_ZOOM = 14.0
DEFAULT_ZOOM = 1.0
PAGE_SCROLL_DAYS = 7

_FRAME_MODULUS = 2**64


@dataclass
class ViewportState:
    """Scroll, zoom and selection of the timeline.

    ``scroll_offset`` is measured in days from the timeline epoch and ``zoom``
    in days per column. Every mutator leaves ``scroll_offset >= 0`` and
    ``MIN_ZOOM <= zoom <= MAX_ZOOM``.
    """

    scroll_offset: int = 0
    zoom: float = DEFAULT_ZOOM
    selected_index: int | None = None
    animation_frame: int = 0

    def __post_init__(self) -> None:
        self.scroll_offset = max(0, int(self.scroll_offset))
        self.zoom = min(MAX_ZOOM, max(MIN_ZOOM, float(self.zoom)))

    def scroll_left(self, days: int = 1) -> None:
        self.scroll_offset = max(0, self.scroll_offset - days)

    def scroll_right(self, days: int = 1) -> None:
        self.scroll_offset = max(0, self.scroll_offset + days)

    def set_scroll(self, days: int) -> None:
        self.scroll_offset = max(0, int(days))

    def reset(self) -> None:
        self.scroll_offset = 0

    def zoom_in(self) -> None:
        if self.zoom / 2.0 >= MIN_ZOOM:
            self.zoom /= 2.0

    def zoom_out(self) -> None:
        if self.zoom * 2.0 <= MAX_ZOOM:
            self.zoom *= 2.0

    def select_next(self, total: int) -> None:
        self._step_selection(1, total)

    def select_previous(self, total: int) -> None:
        self._step_selection(-1, total)

    def _step_selection(self, step: int, total: int) -> None:
        if total <= 0:
            self.selected_index = None
            return
        # no selection moves like a cursor resting on the first project
        current = self.selected_index if self.selected_index is not None else 0
        self.selected_index = (current + step) % total

    def selection(self, total: int) -> int | None:
        # a stale index reads as no selection but is kept for the next refresh
        index = self.selected_index
        if index is None or not 0 <= index < total:
            return None
        return index

    def tick(self) -> None:
        self.animation_frame = (self.animation_frame + 1) % _FRAME_MODULUS
