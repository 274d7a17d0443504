from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any
from uuid import UUID

UNNAMED_PROJECT = "Unnamed Project"


@dataclass(frozen=True)
class Project:
    id: UUID
    client_id: UUID
    name: str | None
    start_date: date
    planned_end_date: date
    actual_end_date: date | None = None
    manager_id: UUID | None = None

    @property
    def display_name(self) -> str:
        name = (self.name or "").strip()
        return name or UNNAMED_PROJECT

    @property
    def effective_end(self) -> date:
        if self.actual_end_date is not None:
            return self.actual_end_date
        return self.planned_end_date

    @property
    def duration_days(self) -> int:
        return (self.effective_end - self.start_date).days

    @property
    def is_completed(self) -> bool:
        return self.actual_end_date is not None

    @property
    def is_valid_span(self) -> bool:
        return self.effective_end >= self.start_date


@dataclass(frozen=True)
class ProjectPage:
    items: list[dict[str, Any]] = field(default_factory=list)
    page: int = 1
    page_size: int = 0
    total_count: int = 0
    total_pages: int = 0
    has_previous: bool = False
    has_next: bool = False

    @classmethod
    def from_json(cls, data: Any) -> ProjectPage:
        if not isinstance(data, dict):
            raise ValueError("Paginated response must be a JSON object.")
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ValueError("Paginated response 'items' must be a list.")
        try:
            return cls(
                items=[item for item in items if isinstance(item, dict)],
                page=int(data.get("page", 1)),
                page_size=int(data.get("pageSize", len(items))),
                total_count=int(data.get("totalCount", len(items))),
                total_pages=int(data.get("totalPages", 1)),
                has_previous=bool(data.get("hasPrevious", False)),
                has_next=bool(data.get("hasNext", False)),
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Paginated response has a malformed counter: {exc}") from exc


def project_from_json(data: dict[str, Any]) -> Project:
    try:
        return Project(
            id=UUID(str(data["id"])),
            client_id=UUID(str(data["clientId"])),
            name=_optional_str(data.get("name")),
            start_date=_parse_day(data["startDate"]),
            planned_end_date=_parse_day(data["plannedEndDate"]),
            actual_end_date=_parse_optional_day(data.get("actualEndDate")),
            manager_id=_parse_optional_uuid(data.get("managerId")),
        )
    except KeyError as exc:
        raise ValueError(f"Project record is missing field {exc.args[0]!r}.") from exc


def _parse_day(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}.")
    # the backend serializes DateOnly, but tolerate a datetime suffix
    return date.fromisoformat(value.strip()[:10])


def _parse_optional_day(value: Any) -> date | None:
    if value is None or value == "":
        return None
    return _parse_day(value)


def _parse_optional_uuid(value: Any) -> UUID | None:
    if value is None or value == "":
        return None
    return UUID(str(value))


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
