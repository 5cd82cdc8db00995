# src/tasklog/cli/main.py

"""
CLI entrypoint.

Parses arguments, initializes logging, builds the AppContext and runs exactly
one command. AppError is the only exception handled here: it is printed to
stderr without a traceback and the process still exits 0.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from ..config import Settings, get_settings
from ..errors import AppError
from ..logging_setup import level_from_name, setup_logging
from .bootstrap import SummarizerFactory, create_context
from .commands import registry

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasklog",
        description="Log completed tasks, browse them by recency and tag, and summarize them with an LLM.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--dir",
        default=str(settings.default_dir),
        help="The directory where related files are stored (default: %(default)s).",
    )
    parser.add_argument(
        "--config",
        default="{}",
        help="JSON object of config values overriding the config file and the defaults.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v info, -vv debug).",
    )
    registry.add_subparsers(parser)
    return parser


def _console_level(settings: Settings, verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return level_from_name(settings.log_level)


def _emit(text: str) -> None:
    print(text, flush=True)


def main(argv: list[str] | None = None, *, summarizer_factory: SummarizerFactory | None = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    ctx = create_context(
        args.dir,
        config_override=args.config,
        summarizer_factory=summarizer_factory,
    )
    setup_logging(
        log_file=ctx.base_dir / settings.log_file_name,
        console_level=_console_level(settings, args.verbose),
    )

    try:
        output = registry.handle(ctx, args, _emit)
    except AppError as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(str(e), file=sys.stderr)
        return 0

    if output:
        _emit(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
