# src/tasklog/cli/render.py

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime

from ..core.app_config import AppConfig
from ..tasks.task_models import Task

NO_TASKS_MESSAGE = "No tasks meet the criteria"


def format_heading_date(dt: datetime) -> str:
    """Local time, e.g. "October 16, 2026 at 10 AM"."""
    local = dt.astimezone()
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%B} {local.day}, {local.year} at {hour} {meridiem}"


def _render_task(task: Task, *, short: bool) -> str:
    when = task.when
    heading = format_heading_date(when) if when is not None else task.date
    tags_line = f"Tags: {', '.join(task.tags)}\n" if task.tags is not None else ""
    body = task.short_description if short and task.short_description is not None else task.description
    return f"## {heading}\n{tags_line}\n{body.strip()}"


def render_tasks_markdown(tasks: Iterable[Task], *, short: bool = False) -> str:
    sections = [_render_task(t, short=short) for t in tasks]
    if not sections:
        return NO_TASKS_MESSAGE
    return "# Recent Tasks\n\n" + "\n\n".join(sections)


def render_tags(tags: Iterable[str]) -> str:
    return "\n".join(["Tags:", *(f" • {tag}" for tag in tags)])


def render_config(config: AppConfig) -> str:
    return json.dumps(config.to_json(), ensure_ascii=False, indent=4)
