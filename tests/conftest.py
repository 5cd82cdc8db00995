# tests/conftest.py

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from tasklog.cli import main as cli_main
from tasklog.cli.bootstrap import AppContext, create_context
from tasklog.core.app_config import DEFAULT_CONFIG

from .fakes import FakeSummarizer


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep main() from replacing pytest's own logging handlers."""
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)


@pytest.fixture()
def tasks_dir(tmp_path: Path) -> Path:
    """An initialized tasks directory with default config and no tasks."""
    d = tmp_path / "tasks"
    d.mkdir()
    (d / "tasks.json").write_text("[]", "utf-8")
    (d / "config.json").write_text(json.dumps(DEFAULT_CONFIG.to_json()), "utf-8")
    return d


@pytest.fixture()
def fake_summarizer() -> FakeSummarizer:
    return FakeSummarizer()


@pytest.fixture()
def ctx(tasks_dir: Path, fake_summarizer: FakeSummarizer) -> AppContext:
    return create_context(tasks_dir, summarizer_factory=lambda config: fake_summarizer)


@pytest.fixture()
def now() -> datetime:
    return datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)
