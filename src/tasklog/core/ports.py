# src/tasklog/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the commands.

Commands depend on these Protocols instead of the OpenAI-backed client,
which keeps the chat provider swappable and makes testing easier.
"""

from typing import Protocol

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class ChatBackend(Protocol):
    """Single-shot chat completion: returns the reply text of the first choice."""

    def complete(self, messages: list[ChatMessage]) -> str: ...


class Summarizer(Protocol):
    def summarize_transcript(self, transcript: str) -> str: ...

    def short_description(self, description: str) -> str: ...
