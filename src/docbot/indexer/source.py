"""Loader for the JSON types file written by yii2-apidoc."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console

from docbot.exceptions import InvalidInputError

console = Console(stderr=True)


def load_source(path: Path) -> dict[str, Any]:
    """Read a documentation source file.

    Args:
        path: Path to the JSON types file.

    Returns:
        Mapping of fully-qualified type name to type record, in file order.

    Raises:
        InvalidInputError: If the file is missing, unreadable, not JSON, or
            not a JSON object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidInputError(f"Cannot read documentation source {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Documentation source {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidInputError(
            f"Documentation source {path} must contain a JSON object of types, "
            f"got {type(data).__name__}"
        )

    console.print(f"[bold blue]Source[/bold blue] read [bold]{len(data)}[/bold] types from {path}")
    return data
