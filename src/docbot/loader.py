"""Bot module loading with an explicit reload policy.

A bot module is any Python file that defines ``bot(nick, message)``
returning a list of answer lines (or None). If it also defines
``configure(index_path)``, the loader calls it after each import with the
index location from the resolved configuration. The loader either imports it
once and keeps it, or imports a fresh copy from source on every call so a
developer can edit the bot while the process is running.
"""

from __future__ import annotations

import importlib.util
from enum import Enum
from pathlib import Path
from types import ModuleType

from rich.console import Console

from docbot.exceptions import BotLoadError

console = Console(stderr=True)

_BUILTIN_BOT = "docbot.bot"


class ReloadPolicy(Enum):
    """When the loader imports the bot module."""

    ONCE = "once"
    EVERY_CALL = "every-call"


class BotLoader:
    """Loads and caches the bot module according to a ReloadPolicy."""

    def __init__(
        self,
        path: Path | None = None,
        policy: ReloadPolicy = ReloadPolicy.ONCE,
        index_path: Path | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            path: Bot source file. None selects the built-in bot.
            policy: ONCE keeps the first import; EVERY_CALL re-imports each time.
            index_path: Index file handed to the bot's configure() hook.
        """
        self._index_path = index_path
        self._path = path.resolve() if path is not None else _builtin_path()
        self._policy = policy
        self._module: ModuleType | None = None
        self.load_count = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def policy(self) -> ReloadPolicy:
        return self._policy

    def get(self) -> ModuleType:
        """Return the bot module, importing it if the policy requires."""
        if self._module is None or self._policy is ReloadPolicy.EVERY_CALL:
            self._module = self._import()
        return self._module

    def ask(self, nick: str, message: str) -> list[str]:
        """Pass one message to the bot and return its answers."""
        answers = self.get().bot(nick, message)
        return list(answers or [])

    def _import(self) -> ModuleType:
        if not self._path.is_file():
            raise BotLoadError(f"Bot module not found: {self._path}")

        spec = importlib.util.spec_from_file_location(f"_docbot_bot_{self._path.stem}", self._path)
        if spec is None or spec.loader is None:
            raise BotLoadError(f"Cannot import bot module from {self._path}")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:  # noqa: BLE001
            raise BotLoadError(f"Error importing bot module {self._path}: {exc}") from exc

        if not callable(getattr(module, "bot", None)):
            raise BotLoadError(f"Bot module {self._path} has no bot(nick, message) function")

        configure = getattr(module, "configure", None)
        if self._index_path is not None and callable(configure):
            try:
                configure(self._index_path)
            except Exception as exc:  # noqa: BLE001
                raise BotLoadError(f"Error configuring bot module {self._path}: {exc}") from exc

        self.load_count += 1
        if self.load_count == 1:
            console.print(f"[bold blue]Bot[/bold blue] loaded {self._path.name}")
        else:
            console.print(f"[dim]Bot reloaded {self._path.name}[/dim]")
        return module


def _builtin_path() -> Path:
    spec = importlib.util.find_spec(_BUILTIN_BOT)
    if spec is None or spec.origin is None:
        raise BotLoadError(f"Built-in bot module {_BUILTIN_BOT} is not installed")
    return Path(spec.origin)
