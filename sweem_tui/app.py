from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Sequence

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Footer, Header, Static

from . import __version__
from .api import ApiClient, ApiError, load_projects_file
from .config import Config
from .controller import Command, TimelineController
from .logs import setup_logging
from .models import Project
from .paths import default_log_path
from .layout import project_details
from .render import render_details, render_status_line, render_timeline
from .snapshot import write_snapshot

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 1 / 30
DEFAULT_SNAPSHOT_WIDTH = 120

ProjectLoader = Callable[[], list[Project]]
HealthCheck = Callable[[], bool]


class TimelineView(Widget):
    DEFAULT_CSS = """
    TimelineView {
        width: 1fr;
        height: 1fr;
        border: round $accent;
        border-title-color: $accent;
    }
    """

    def __init__(self, controller: TimelineController, today: Callable[[], date], **kwargs) -> None:
        super().__init__(**kwargs)
        self.controller = controller
        self._today = today
        self.border_title = "✨ Project Timeline"

    def render(self) -> Text:
        frame = self.controller.frame(self.content_size.width, self._today())
        return render_timeline(frame, self.content_size.height, self.controller.state.animation_frame)


class ProjectDetailsPanel(Static):
    DEFAULT_CSS = """
    ProjectDetailsPanel {
        width: 40;
        height: 1fr;
        padding: 0 1;
        border: round $accent;
        border-title-color: $accent;
    }
    """

    def on_mount(self) -> None:
        self.border_title = "Project Details"


class TimelineStatus(Static):
    DEFAULT_CSS = """
    TimelineStatus {
        height: 1;
        padding: 0 1;
    }
    """


class SweemTimelineApp(App):
    TITLE = "SWEeM Timeline"

    CSS = """
    #main {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("h,left", "command('scroll_left')", "Earlier"),
        Binding("l,right", "command('scroll_right')", "Later"),
        Binding("H,shift+left", "command('page_left')", "Week back", show=False),
        Binding("L,shift+right", "command('page_right')", "Week on", show=False),
        Binding("j,down", "command('select_next')", "Next"),
        Binding("k,up", "command('select_previous')", "Previous"),
        Binding("enter", "command('jump_to_selected')", "Jump"),
        Binding("plus,equals_sign", "command('zoom_in')", "Zoom in"),
        Binding("minus", "command('zoom_out')", "Zoom out"),
        Binding("t", "command('center_on_today')", "Today"),
        Binding("home", "command('reset')", "Start", show=False),
        Binding("f", "command('cycle_filter')", "Filter"),
        Binding("s", "command('toggle_sort')", "Sort"),
        Binding("r", "refresh_projects", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        loader: ProjectLoader,
        config: Config,
        today: date | None = None,
        health_check: HealthCheck | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.loader = loader
        self.health_check = health_check
        self.app_config = config
        self._fixed_today = today
        self.api_connected: bool | None = None
        self.controller = TimelineController(auto_center=config.get("auto_center", "project"))

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            yield TimelineView(self.controller, self.current_day, id="timeline")
            yield ProjectDetailsPanel(id="details")
        yield TimelineStatus(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.set_interval(FRAME_INTERVAL, self._on_frame)
        refresh_interval = self.app_config.get_float("refresh_interval", 0.0)
        if refresh_interval > 0:
            self.set_interval(refresh_interval, self.action_refresh_projects)
        if self.health_check is not None:
            health_interval = self.app_config.get_float("health_interval", 15.0)
            if health_interval > 0:
                self.set_interval(health_interval, self.action_check_connection)
            self.action_check_connection()
        self.action_refresh_projects()

    def current_day(self) -> date:
        return self._fixed_today or date.today()

    def viewport_width(self) -> int:
        width = self.query_one(TimelineView).content_size.width
        if width <= 0:
            return self.app_config.get_int("viewport_width_fallback", 100)
        return width

    def action_command(self, name: str) -> None:
        self.controller.handle(Command(name), self.current_day(), self.viewport_width())
        self._repaint()

    def action_refresh_projects(self) -> None:
        self.query_one(TimelineStatus).update("Loading projects…")
        self._load_projects()

    def action_check_connection(self) -> None:
        self._check_connection()

    @work(thread=True, exclusive=True, group="refresh")
    def _load_projects(self) -> None:
        try:
            projects = self.loader()
        except ApiError as exc:
            logger.error("Project refresh failed: %s", exc)
            self.call_from_thread(self._show_error, str(exc))
            return
        self.call_from_thread(self._apply_projects, projects)

    @work(thread=True, exclusive=True, group="health")
    def _check_connection(self) -> None:
        connected = self.health_check()
        self.call_from_thread(self._set_connected, connected)

    def _set_connected(self, connected: bool) -> None:
        was_connected = self.api_connected
        self.api_connected = connected
        if connected and not was_connected:
            logger.info("Connected to API")
        elif not connected and was_connected:
            logger.warning("Disconnected from API")
        self._repaint()

    def _apply_projects(self, projects: list[Project]) -> None:
        self.controller.set_projects(projects, self.current_day(), self.viewport_width())
        self.notify(f"Loaded {len(projects)} projects", timeout=2)
        self._repaint()

    def _show_error(self, message: str) -> None:
        self.notify(message, title="Refresh failed", severity="error")
        self._repaint()

    def _on_frame(self) -> None:
        self.controller.tick()
        self._repaint()

    def _repaint(self) -> None:
        controller = self.controller
        self.query_one(TimelineView).refresh()
        project = controller.selected_project()
        self.query_one(ProjectDetailsPanel).update(
            render_details(project_details(project, self.current_day()) if project else None)
        )
        self.query_one(TimelineStatus).update(
            render_status_line(
                controller.state,
                len(controller.projects),
                connected=self.api_connected,
                status_filter=controller.status_filter,
                sorted_by_status=controller.sorted_by_status,
            )
        )


def _build_source(args: argparse.Namespace, config: Config) -> tuple[ProjectLoader, HealthCheck | None]:
    if args.projects_file:
        path = Path(args.projects_file)
        return (lambda: load_projects_file(path)), None
    client = ApiClient(
        args.api_url or config.get("api_url"),
        timeout=config.get_float("request_timeout", 30.0),
    )
    page_size = config.get_int("page_size", 100)
    return (lambda: client.fetch_all_projects(page_size)), client.health_check


def _snapshot_cli(loader: ProjectLoader, target: Path, width: int, today: date, config: Config) -> int:
    try:
        projects = loader()
    except ApiError as exc:
        logger.error("Could not load projects: %s", exc)
        return 1
    controller = TimelineController(auto_center=config.get("auto_center", "project"))
    controller.set_projects(projects, today, width)
    path = write_snapshot(controller.frame(width, today), target)
    print(f"snapshot={path} projects={len(projects)} epoch={controller.epoch(today).isoformat()}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sweem-tui")
    parser.add_argument("--api-url", help="Backend base URL (overrides config and SWEEM_API_URL)")
    parser.add_argument("--projects-file", help="Load projects from a JSON file instead of the API")
    parser.add_argument("--snapshot", metavar="PATH", help="Write the timeline as a PNG and exit")
    parser.add_argument("--width", type=int, default=DEFAULT_SNAPSHOT_WIDTH, help="Snapshot width in columns")
    parser.add_argument("--today", type=date.fromisoformat, help="Treat YYYY-MM-DD as today")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--version", action="store_true", help="Print app version and exit")
    args = parser.parse_args(argv)
    if args.version:
        print(__version__)
        return 0

    config = Config()
    level = args.log_level or config.get("log_level", "INFO")
    loader, health_check = _build_source(args, config)
    today = args.today or date.today()

    if args.snapshot:
        setup_logging(level, config.get("log_file") or None, to_console=True)
        return _snapshot_cli(loader, Path(args.snapshot), args.width, today, config)

    setup_logging(level, config.get("log_file") or default_log_path(), to_console=False)
    SweemTimelineApp(loader, config, today=args.today, health_check=health_check).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
