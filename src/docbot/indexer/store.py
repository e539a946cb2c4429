"""JSON persistence for the keyword index."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from rich.console import Console

from docbot.exceptions import PersistenceError
from docbot.indexer.index import DocIndex

console = Console(stderr=True)

DEFAULT_INDEX_PATH = Path("docs.json")


class IndexStore:
    """Reads and writes a DocIndex as pretty-printed JSON."""

    def __init__(self, path: Path = DEFAULT_INDEX_PATH) -> None:
        """Initialize the store.

        Args:
            path: Index file location; relative paths resolve against the cwd.
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def save(self, index: DocIndex) -> None:
        """Serialize index to the store path.

        The file is written next to its destination and then swapped into
        place, so a reader never sees a half-written index.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        text = json.dumps(index.to_dict(), indent=2, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            target_dir = self._path.parent
            target_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=target_dir, prefix=".docs-", suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(text)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceError(f"Cannot write index to {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        console.print(
            f"[green]Index[/green] wrote [bold]{len(index)}[/bold] keywords "
            f"to {self._path}"
        )

    def load(self) -> DocIndex | None:
        """Load a previously saved index.

        Returns:
            The index, or None if no index file exists.

        Raises:
            PersistenceError: If the file exists but cannot be read or parsed.
        """
        if not self._path.is_file():
            return None

        try:
            data: Any = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            return DocIndex.from_dict(data)
        except OSError as exc:
            raise PersistenceError(f"Cannot read index at {self._path}: {exc}") from exc
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
            raise PersistenceError(f"Corrupt index at {self._path}: {exc}") from exc
