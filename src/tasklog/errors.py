# src/tasklog/errors.py

"""
Application error taxonomy.

AppError and its subclasses are "expected" failures: the command boundary
prints their message to stderr and exits cleanly. Anything else is a bug and
is allowed to crash with a traceback.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that are reported to the user without a traceback."""


class ValidationError(AppError):
    """Malformed JSON or a shape violation (config, tasks, CLI arguments)."""


class ParseError(ValidationError):
    """A user string (e.g. a duration) could not be parsed."""


class NotFoundError(AppError):
    """The tasks directory or one of its files does not exist."""


class ExternalServiceError(AppError):
    """The chat-completion endpoint failed or returned no usable reply."""
