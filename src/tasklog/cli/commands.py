# src/tasklog/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.app_config import resolved_recency
from ..core.duration import parse_duration, show_duration
from ..errors import ValidationError
from ..tasks.task_api import (
    backfill_short_descriptions,
    build_transcript,
    collect_tags,
    extract_recent_tasks,
    filter_by_tags,
    parse_tags,
)
from ..tasks.task_models import Task
from .bootstrap import AppContext
from .render import NO_TASKS_MESSAGE, render_config, render_tags, render_tasks_markdown

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppContext, argparse.Namespace, CommandEmitter], str | None]
ArgsConfigurator = Callable[[argparse.ArgumentParser], None]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Command:
    handler: CommandHandler
    help_text: str
    configure: ArgsConfigurator | None


class CommandRegistry:
    """Subcommand registry: each entry becomes an argparse subparser."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        configure: ArgsConfigurator | None = None,
    ) -> None:
        self._commands[name] = _Command(handler=handler, help_text=help_text, configure=configure)

    def names(self) -> list[str]:
        return list(self._commands)

    def add_subparsers(self, parser: argparse.ArgumentParser) -> None:
        sub = parser.add_subparsers(dest="cmd", required=True, metavar="<command>")
        for name, cmd in self._commands.items():
            p = sub.add_parser(name, help=cmd.help_text, description=cmd.help_text)
            if cmd.configure is not None:
                cmd.configure(p)

    def handle(self, ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str | None:
        cmd = self._commands.get(args.cmd)
        if cmd is None:
            raise ValidationError(f"Unknown command: {args.cmd}")
        logger.debug("Running command %s", args.cmd)
        return cmd.handler(ctx, args, emit)


registry = CommandRegistry()


def cmd_init(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    """Create the directory and any missing file. Existing files are kept."""
    ctx.base_dir.mkdir(parents=True, exist_ok=True)
    if not ctx.task_store.exists():
        ctx.task_store.save([])
    else:
        emit(f"[•] keeping existing tasks file {ctx.task_store.path}")
    if not ctx.config_store.exists():
        ctx.config_store.reset()
    else:
        emit(f"[•] keeping existing config file {ctx.config_store.path}")
    return f"[✔] initialized new tasks directory at {ctx.base_dir}"


def cmd_config_reset(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    ctx.require_dir()
    ctx.config_store.reset()
    return f"[✔] reset config at {ctx.config_store.path}"


def cmd_config_set(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    ctx.config_store.set(args.key, args.val)
    return f"[✔] updated config at {ctx.config_store.path}"


def cmd_config_show(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    return render_config(ctx.load_config())


def cmd_new(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    description = (args.description or "").strip()
    if not description:
        raise ValidationError("task description is empty")

    config = ctx.load_config()
    ctx.task_store.ensure_exists()

    task = Task.create(description, tags=parse_tags(args.tags))
    if args.gen_short:
        task.short_description = ctx.summarizer(config).short_description(description)

    tasks = ctx.task_store.append(task)

    recency = resolved_recency(config)
    recent = extract_recent_tasks(tasks, recency)
    return f"[✔] created new task ({len(recent)} tasks in the last {show_duration(recency)})"


def cmd_gen_short_descriptions(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    summarizer = ctx.summarizer()

    def progress(stage: str, task: Task) -> None:
        if stage == "start":
            emit(f"[•] generating short description for task:\n\n{task.description}\n")
        else:
            emit(f"[✔] generated short description for task:\n\n{task.short_description}\n")

    count = backfill_short_descriptions(
        ctx.task_store, summarizer.short_description, on_progress=progress
    )
    return f"[✔] generated short descriptions for {count} tasks"


def cmd_show(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    tasks = ctx.task_store.load()
    if args.recency is not None:
        tasks = extract_recent_tasks(tasks, parse_duration(args.recency))
    tasks = filter_by_tags(tasks, parse_tags(args.tags))
    return render_tasks_markdown(tasks, short=args.short)


def cmd_tags_show(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    return render_tags(collect_tags(ctx.task_store.load()))


def cmd_summarize(ctx: AppContext, args: argparse.Namespace, emit: CommandEmitter) -> str:
    config = ctx.load_config()
    if args.duration is not None:
        duration = parse_duration(args.duration)
    else:
        duration = resolved_recency(config)

    recent = extract_recent_tasks(ctx.task_store.load(), duration)
    if not recent:
        return NO_TASKS_MESSAGE

    logger.info("Summarizing %d tasks from the last %s", len(recent), show_duration(duration))
    return ctx.summarizer(config).summarize_transcript(build_transcript(recent))


def _args_config_set(p: argparse.ArgumentParser) -> None:
    p.add_argument("key", help="One of: baseURL, apiKey, model, recency.")
    p.add_argument("val", help='Value; for recency a duration such as "2 week".')


def _args_new(p: argparse.ArgumentParser) -> None:
    p.add_argument("description", help="The description of the task.")
    p.add_argument("--tags", default=None, help="Comma-separated tags to associate with the task.")
    p.add_argument(
        "--gen-short",
        action="store_true",
        help="Ask the model for a one-sentence short description right away.",
    )


def _args_show(p: argparse.ArgumentParser) -> None:
    p.add_argument("recency", nargs="?", default=None, help='Only tasks from this recent duration, e.g. "1 day".')
    p.add_argument("--tags", default=None, help="Filter by tasks that have any of these comma-separated tags.")
    p.add_argument(
        "--short",
        action="store_true",
        help="Show the short description instead of the full description where available.",
    )


def _args_summarize(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "duration",
        nargs="?",
        default=None,
        help='Recent duration to summarize, e.g. "1 week" (default: config recency).',
    )


registry.register("init", cmd_init, help_text="Initializes a new tasks directory.")
registry.register("config-reset", cmd_config_reset, help_text="Resets config to the default config.")
registry.register("config-set", cmd_config_set, help_text="Set key-value pair in config.", configure=_args_config_set)
registry.register("config-show", cmd_config_show, help_text="Show config.")
registry.register("new", cmd_new, help_text="Creates a new task.", configure=_args_new)
registry.register(
    "gen-short-descriptions",
    cmd_gen_short_descriptions,
    help_text="For each task that does not have a short description, generates one for it.",
)
registry.register("show", cmd_show, help_text="Shows list of tasks in markdown format.", configure=_args_show)
registry.register("tags-show", cmd_tags_show, help_text="Shows all existing tags.")
registry.register(
    "summarize",
    cmd_summarize,
    help_text="Summarizes tasks in the recent duration.",
    configure=_args_summarize,
)
