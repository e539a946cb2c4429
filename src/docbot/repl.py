"""Interactive read-eval-print loop that sends each line to the bot."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TextIO

from rich.console import Console

from docbot.exceptions import DocbotError
from docbot.loader import BotLoader

console = Console()

ANSWER_SEPARATOR = "  ...  "
_QUIT_COMMANDS = frozenset({".exit", ".quit"})


def millinow(now: datetime | None = None) -> str:
    """UTC wall-clock time as ``HH:MM:SS.mmmZ``."""
    now = now or datetime.now(UTC)
    now = now.astimezone(UTC)
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}Z"


def run_repl(loader: BotLoader, nick: str = "nick", stream: TextIO | None = None) -> int:
    """Read lines until EOF or .exit and print the bot's answers.

    Args:
        loader: Supplies the bot module.
        nick: Nickname passed to the bot as the sender.
        stream: Input stream; defaults to the terminal.

    Returns:
        Number of lines evaluated.
    """
    evaluated = 0
    while True:
        try:
            line = console.input("bot> ", stream=stream)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if stream is not None and not line:
            break

        line = line.strip()
        if line in _QUIT_COMMANDS:
            break
        if not line:
            continue

        evaluated += 1
        console.print(f"[dim]{millinow()}[/dim]")
        try:
            answers = loader.ask(nick, line)
        except DocbotError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            continue
        except Exception as exc:  # noqa: BLE001
            console.print(f"[bold red]Error:[/bold red] bot raised {type(exc).__name__}: {exc}")
            continue

        if answers:
            console.print(ANSWER_SEPARATOR.join(answers), markup=False, highlight=False)
    return evaluated
