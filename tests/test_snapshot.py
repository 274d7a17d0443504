from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from sweem_tui.layout import layout_frame
from sweem_tui.render import BG_DARK, project_color
from sweem_tui.snapshot import CELL_WIDTH, HEADER_HEIGHT, ROW_HEIGHT, bar_origin, write_snapshot
from sweem_tui.viewport import ViewportState

from ._fixtures import day, make_project

WIDTH = 26 + 60


class SnapshotTests(unittest.TestCase):
    def test_writes_png_with_bars(self) -> None:
        projects = [make_project(1, 5, 20), make_project(2, 0, 8)]
        frame = layout_frame(projects, ViewportState(), WIDTH, day(10))
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = write_snapshot(frame, Path(tmp_dir) / "out" / "timeline.png")
            self.assertTrue(path.exists())
            with Image.open(path) as image:
                self.assertEqual(image.format, "PNG")
                self.assertEqual(image.size, (WIDTH * CELL_WIDTH, HEADER_HEIGHT + 2 * ROW_HEIGHT))
                rgb = image.convert("RGB")
                origin = bar_origin(frame)
                inside_a = (origin + 15 * CELL_WIDTH + CELL_WIDTH // 2, HEADER_HEIGHT + ROW_HEIGHT // 2)
                outside_b = (origin + 30 * CELL_WIDTH + CELL_WIDTH // 2, HEADER_HEIGHT + ROW_HEIGHT + ROW_HEIGHT // 2)
                self.assertEqual(rgb.getpixel(inside_a), tuple(project_color(0)))
                self.assertEqual(rgb.getpixel(outside_b), tuple(BG_DARK))

    def test_degenerate_frame_still_writes_image(self) -> None:
        frame = layout_frame([make_project(1, 0, 3)], ViewportState(), 10, day(1))
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = write_snapshot(frame, Path(tmp_dir) / "tiny.png")
            with Image.open(path) as image:
                self.assertEqual(image.size, (10 * CELL_WIDTH, HEADER_HEIGHT + ROW_HEIGHT))


if __name__ == "__main__":
    unittest.main()
