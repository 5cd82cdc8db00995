# src/tasklog/core/jsonfile.py

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from ..errors import NotFoundError, ValidationError


def read_json(path: Path) -> Any:
    try:
        text = path.read_text("utf-8")
    except FileNotFoundError as e:
        raise NotFoundError(f"file not found: {path}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"{path.name} is not valid JSON: {e}") from e


def write_json(path: Path, data: Any) -> None:
    """Pretty-print (4-space indent) and replace the whole file."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=4) + "\n", "utf-8")
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
