# src/tasklog/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..core.jsonfile import read_json, write_json
from ..errors import NotFoundError, ValidationError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON task store: <dir>/tasks.json holds one array of task objects.

    Every write replaces the whole file. There is no locking; the last
    writer wins.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def ensure_exists(self) -> None:
        if not self.exists():
            raise NotFoundError(
                f"tasks file not found: {self._path} (run `tasklog init` first)"
            )

    def load(self) -> list[Task]:
        self.ensure_exists()
        raw = read_json(self._path)
        if not isinstance(raw, list):
            raise ValidationError(f"tasks: expected a JSON array, got {type(raw).__name__}")
        tasks = [Task.from_json(item, label=f"tasks[{i}]") for i, item in enumerate(raw)]
        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        data = [t.to_json() for t in tasks]
        write_json(self._path, data)
        logger.debug("Saved %d tasks to %s", len(data), self._path)

    def append(self, task: Task) -> list[Task]:
        tasks = self.load()
        tasks.append(task)
        self.save(tasks)
        logger.info("Appended task (total=%d)", len(tasks))
        return tasks
