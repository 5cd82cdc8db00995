# src/tasklog/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from ..core.duration import Duration
from .task_models import Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, Task], None]


def extract_recent_tasks(
    tasks: Iterable[Task],
    duration: Duration,
    *,
    now: datetime | None = None,
) -> list[Task]:
    """Tasks dated at or after now - duration, in their original order."""
    now = now or datetime.now(timezone.utc)
    try:
        cutoff = now - duration.to_timedelta()
    except OverflowError:
        # Window reaches past datetime.min: nothing is too old.
        cutoff = datetime.min.replace(tzinfo=timezone.utc)

    out: list[Task] = []
    for task in tasks:
        when = task.when
        if when is None:
            logger.warning("Skipping task with unparseable date: %r", task.date)
            continue
        if when >= cutoff:
            out.append(task)
    return out


def filter_by_tags(tasks: Iterable[Task], tags: Iterable[str]) -> list[Task]:
    """Tasks carrying at least one of `tags`. An empty filter keeps everything."""
    wanted = set(tags)
    if not wanted:
        return list(tasks)
    return [t for t in tasks if t.tags and wanted.intersection(t.tags)]


def collect_tags(tasks: Iterable[Task]) -> list[str]:
    """Distinct tags in first-seen order."""
    seen: dict[str, None] = {}
    for task in tasks:
        for tag in task.tags or []:
            seen.setdefault(tag, None)
    return list(seen)


def parse_tags(raw: str | None) -> list[str]:
    """Comma-separated tag list from the command line."""
    if raw is None:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def build_transcript(tasks: Iterable[Task]) -> str:
    return "\n\n".join(t.description.strip() for t in tasks)


def backfill_short_descriptions(
    store: TaskStore,
    generate: Callable[[str], str],
    *,
    on_progress: ProgressCallback | None = None,
) -> int:
    """
    Fill in missing short descriptions, one task at a time, in order.

    The whole file is saved after each generated description, so when a
    request fails part-way every description produced before it is already
    on disk. The failure itself propagates.
    """
    tasks = store.load()
    count = 0
    for task in tasks:
        if task.short_description is not None:
            continue
        if on_progress is not None:
            on_progress("start", task)
        task.short_description = generate(task.description)
        store.save(tasks)
        count += 1
        if on_progress is not None:
            on_progress("done", task)
    logger.info("Backfilled %d short descriptions", count)
    return count
