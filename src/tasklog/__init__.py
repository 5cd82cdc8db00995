# src/tasklog/__init__.py

"""Personal task log: JSON-backed entries, recency filters, LLM summaries."""

__version__ = "0.3.0"
