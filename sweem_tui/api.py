from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import requests

from .config import DEFAULT_API_URL
from .models import Project, ProjectPage, project_from_json

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
DEFAULT_TIMEOUT = 30.0


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_projects(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> ProjectPage:
        data = self._get_json("/projects", params={"page": page, "pageSize": page_size})
        try:
            return ProjectPage.from_json(data)
        except (TypeError, ValueError) as exc:
            raise ApiError(f"Malformed projects page: {exc}") from exc

    def fetch_all_projects(self, page_size: int = DEFAULT_PAGE_SIZE) -> list[Project]:
        projects: list[Project] = []
        page = 1
        while True:
            result = self.fetch_projects(page, page_size)
            projects.extend(decode_projects(result.items))
            if not result.has_next:
                break
            page += 1
        logger.info("Loaded %d projects from %s", len(projects), self.base_url)
        return projects

    def health_check(self) -> bool:
        try:
            self.fetch_projects(1, 1)
        except ApiError as exc:
            logger.debug("Health check failed: %s", exc)
            return False
        return True

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ApiError(f"Request to {url} failed: {exc}") from exc

        if not response.ok:
            raise ApiError(
                f"API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"{url} returned non-JSON response.") from exc


def decode_projects(items: Iterable[dict[str, Any]]) -> list[Project]:
    projects: list[Project] = []
    for item in items:
        try:
            projects.append(project_from_json(item))
        except ValueError as exc:
            logger.warning("Skipping malformed project record %r: %s", item.get("id"), exc)
    return projects


def load_projects_file(path: Path | str) -> list[Project]:
    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ApiError(f"Could not read projects file {source}: {exc}") from exc

    if isinstance(data, list):
        items = [item for item in data if isinstance(item, dict)]
    else:
        try:
            items = ProjectPage.from_json(data).items
        except (TypeError, ValueError) as exc:
            raise ApiError(f"Malformed projects file {source}: {exc}") from exc
    projects = decode_projects(items)
    logger.info("Loaded %d projects from %s", len(projects), source)
    return projects
