# src/tasklog/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- resolves the tasks directory and its two files,
- wires the stores and the summary client factory into an AppContext.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..core.app_config import AppConfig, ConfigStore
from ..core.ports import Summarizer
from ..errors import NotFoundError
from ..llm.client import OpenAIChatBackend
from ..llm.summarizer import SummaryClient
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
TASKS_FILE_NAME = "tasks.json"

SummarizerFactory = Callable[[AppConfig], Summarizer]


def default_summarizer_factory(config: AppConfig) -> Summarizer:
    return SummaryClient(OpenAIChatBackend.from_config(config))


@dataclass(slots=True)
class AppContext:
    base_dir: Path
    config_override: str | None
    config_store: ConfigStore
    task_store: TaskStore
    summarizer_factory: SummarizerFactory

    def require_dir(self) -> None:
        if not self.base_dir.is_dir():
            raise NotFoundError(
                f"tasks directory not found: {self.base_dir} (run `tasklog init` first)"
            )

    def load_config(self) -> AppConfig:
        return self.config_store.load(self.config_override)

    def summarizer(self, config: AppConfig | None = None) -> Summarizer:
        return self.summarizer_factory(config or self.load_config())


def create_context(
    base_dir: str | Path,
    *,
    config_override: str | None = None,
    summarizer_factory: SummarizerFactory | None = None,
) -> AppContext:
    """
    Build the AppContext for one invocation.

    Keeping the summarizer factory injectable makes the commands testable
    without a live chat endpoint.
    """
    base = Path(base_dir).expanduser()
    logger.debug("Using tasks directory %s", base)
    return AppContext(
        base_dir=base,
        config_override=config_override,
        config_store=ConfigStore(base / CONFIG_FILE_NAME),
        task_store=TaskStore(base / TASKS_FILE_NAME),
        summarizer_factory=summarizer_factory or default_summarizer_factory,
    )
