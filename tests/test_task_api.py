# tests/test_task_api.py

from __future__ import annotations

from datetime import datetime

import pytest

from tasklog.cli.bootstrap import AppContext
from tasklog.core.duration import Duration, TimeUnit
from tasklog.errors import ExternalServiceError
from tasklog.tasks.task_api import (
    backfill_short_descriptions,
    build_transcript,
    collect_tags,
    extract_recent_tasks,
    filter_by_tags,
    parse_tags,
)
from tasklog.tasks.task_models import Task

from .fakes import FakeSummarizer, ago


def test_extract_recent_tasks_keeps_order_and_window(now: datetime) -> None:
    tasks = [
        Task(date=ago(now, seconds=0), description="now"),
        Task(date=ago(now, hours=2), description="two hours"),
        Task(date=ago(now, days=2), description="two days"),
    ]

    recent = extract_recent_tasks(tasks, Duration(1, TimeUnit.DAY), now=now)

    assert [t.description for t in recent] == ["now", "two hours"]
    assert len(tasks) == 3


def test_extract_recent_tasks_cutoff_is_inclusive(now: datetime) -> None:
    tasks = [Task(date=ago(now, hours=1), description="edge")]
    assert extract_recent_tasks(tasks, Duration(60, TimeUnit.MINUTE), now=now) == tasks


def test_extract_recent_tasks_year_window_is_265_days(now: datetime) -> None:
    tasks = [
        Task(date=ago(now, days=264), description="inside"),
        Task(date=ago(now, days=300), description="outside a 265-day year"),
    ]
    recent = extract_recent_tasks(tasks, Duration(1, TimeUnit.YEAR), now=now)
    assert [t.description for t in recent] == ["inside"]


@pytest.mark.parametrize("count", [10_000, 1e20])
def test_extract_recent_tasks_huge_window_keeps_everything(now: datetime, count: float) -> None:
    tasks = [
        Task(date="Mon, 01 Jan 1900 00:00:00 GMT", description="ancient"),
        Task(date=ago(now, minutes=5), description="fresh"),
    ]
    recent = extract_recent_tasks(tasks, Duration(count, TimeUnit.YEAR), now=now)
    assert recent == tasks


def test_extract_recent_tasks_skips_unparseable_dates(now: datetime) -> None:
    tasks = [Task(date="whenever", description="bad"), Task(date=ago(now, minutes=5), description="good")]
    recent = extract_recent_tasks(tasks, Duration(1, TimeUnit.HOUR), now=now)
    assert [t.description for t in recent] == ["good"]


def test_filter_by_tags_any_of() -> None:
    tasks = [
        Task(date="d", description="a", tags=["a"]),
        Task(date="d", description="b", tags=["b"]),
        Task(date="d", description="none", tags=[]),
        Task(date="d", description="missing"),
    ]

    assert [t.description for t in filter_by_tags(tasks, {"a"})] == ["a"]
    assert [t.description for t in filter_by_tags(tasks, ["a", "b"])] == ["a", "b"]
    assert filter_by_tags(tasks, []) == tasks


def test_collect_tags_first_seen_order() -> None:
    tasks = [
        Task(date="d", description="1", tags=["work", "ops"]),
        Task(date="d", description="2"),
        Task(date="d", description="3", tags=["home", "work"]),
    ]
    assert collect_tags(tasks) == ["work", "ops", "home"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, []), ("", []), ("a", ["a"]), (" a, b ,,c ", ["a", "b", "c"])],
)
def test_parse_tags(raw, expected) -> None:
    assert parse_tags(raw) == expected


def test_build_transcript_joins_descriptions_with_blank_line() -> None:
    tasks = [Task(date="d", description=" one "), Task(date="d", description="two")]
    assert build_transcript(tasks) == "one\n\ntwo"


def test_backfill_fills_only_blanks(ctx: AppContext, fake_summarizer: FakeSummarizer) -> None:
    ctx.task_store.save(
        [
            Task(date="d", description="first"),
            Task(date="d", description="second", short_description="keep me"),
            Task(date="d", description="third"),
        ]
    )

    count = backfill_short_descriptions(ctx.task_store, fake_summarizer.short_description)

    assert count == 2
    assert fake_summarizer.descriptions == ["first", "third"]
    assert [t.short_description for t in ctx.task_store.load()] == [
        "short: first",
        "keep me",
        "short: third",
    ]


def test_backfill_saves_each_completed_description_before_failing(ctx: AppContext) -> None:
    ctx.task_store.save([Task(date="d", description=str(i)) for i in range(3)])
    summarizer = FakeSummarizer(fail_after=1)

    with pytest.raises(ExternalServiceError):
        backfill_short_descriptions(ctx.task_store, summarizer.short_description)

    assert [t.short_description for t in ctx.task_store.load()] == ["short: 0", None, None]


def test_backfill_reports_progress(ctx: AppContext, fake_summarizer: FakeSummarizer) -> None:
    ctx.task_store.save([Task(date="d", description="x")])
    seen: list[tuple[str, str | None]] = []

    backfill_short_descriptions(
        ctx.task_store,
        fake_summarizer.short_description,
        on_progress=lambda stage, task: seen.append((stage, task.short_description)),
    )

    assert seen == [("start", None), ("done", "short: x")]
