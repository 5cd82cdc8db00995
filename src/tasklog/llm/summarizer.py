# src/tasklog/llm/summarizer.py

from __future__ import annotations

import logging

from ..core.ports import ChatBackend, ChatMessage
from ..errors import ExternalServiceError

logger = logging.getLogger(__name__)

TRANSCRIPT_SYSTEM_PROMPT = """
You are a helpful assistant that summarizes transcripts of tasks that have been completed recently.

The user will provide a detailed transcript of all the tasks they have completed recently. You should reply with a short summary that accurately and comprehensively sums up the transcript. Make sure to include high-level descriptions that at least account for every single task that was completed. It is critical that your summary reflects at least something about each task in the transcript.

Your response must only contain your summary. DO NOT editorialize. Just write very plain descriptions of what happened, WITHOUT any observations or judgments about it. Use bullet points.
""".strip()

SHORT_DESCRIPTION_SYSTEM_PROMPT = (
    "You are a specialized assistant for summarizing reports of completed tasks into concise, "
    "short 1-sentence summaries. The user will give you a description of a task they completed. "
    "You should respond with a single, very concise, 1-sentence summary of the task, which just "
    "captures the essence of the description. Reply with JUST your summary."
)


class SummaryClient:
    """Task-level prompts on top of a ChatBackend."""

    def __init__(self, backend: ChatBackend) -> None:
        self._backend = backend

    def _ask(self, system_prompt: str, user_content: str) -> str:
        messages: list[ChatMessage] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]
        return self._backend.complete(messages)

    def summarize_transcript(self, transcript: str) -> str:
        summary = self._ask(TRANSCRIPT_SYSTEM_PROMPT, f"Transcript:\n\n{transcript}").strip()
        logger.debug("Transcript summary produced len=%d", len(summary))
        return summary

    def short_description(self, description: str) -> str:
        try:
            text = self._ask(SHORT_DESCRIPTION_SYSTEM_PROMPT, description).strip()
        except ExternalServiceError as e:
            raise ExternalServiceError(f"Error when generating short description: {e}") from e
        if not text:
            raise ExternalServiceError("Error when generating short description: reply was empty")
        return text
