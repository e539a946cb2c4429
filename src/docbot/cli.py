"""Typer CLI entry point for docbot."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from docbot import __version__
from docbot.config import DocbotConfig, load_config
from docbot.exceptions import (
    DocbotError,
    InvalidInputError,
    MalformedRecordError,
    PersistenceError,
)
from docbot.indexer import DocIndex, IndexBuilder, IndexStore, load_source
from docbot.loader import BotLoader
from docbot.lookup import IndexConsumer
from docbot.repl import run_repl

app = typer.Typer(
    name="docbot",
    help="docbot - keyword search over API documentation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

EXIT_ERROR = 1
EXIT_BAD_INPUT = 2
EXIT_PERSISTENCE = 3

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML config file", dir_okay=False),
]


def _error_exit(message: str, hint: str | None = None, code: int = EXIT_ERROR) -> NoReturn:
    """Print a styled error and exit."""
    console.print(f"[bold red]Error:[/bold red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
    raise typer.Exit(code=code)


def _exit_code(exc: DocbotError) -> int:
    if isinstance(exc, (InvalidInputError, MalformedRecordError)):
        return EXIT_BAD_INPUT
    if isinstance(exc, PersistenceError):
        return EXIT_PERSISTENCE
    return EXIT_ERROR


def _build_and_save(config: DocbotConfig, types: Path, skip_malformed: bool) -> DocIndex:
    builder = IndexBuilder(skip_malformed=skip_malformed)
    index = builder.build(load_source(types))
    report = builder.report

    for name, reason in report.skipped:
        console.print(f"[yellow]Skipped[/yellow] {name}: {reason}")

    table = Table(title="Documentation Index", border_style="cyan", header_style="bold cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Source", str(types))
    table.add_row("Types", str(report.types))
    table.add_row("Entries", str(report.entries))
    table.add_row("Keywords", str(report.keywords))
    if skip_malformed:
        table.add_row("Skipped", str(len(report.skipped)))
    console.print(table)

    IndexStore(config.index_path).save(index)
    return index


@app.command()
def index(
    types: Annotated[Path, typer.Argument(help="JSON types file written by yii2-apidoc")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Where to write the index")
    ] = None,
    skip_malformed: Annotated[
        bool, typer.Option("--skip-malformed", help="Skip and report bad records instead of failing")
    ] = False,
    config_path: ConfigOption = None,
) -> None:
    """Build the keyword index from a documentation dump."""
    try:
        config = load_config(config_path, {"index_path": output})
        _build_and_save(config, types, skip_malformed)
    except MalformedRecordError as exc:
        _error_exit(str(exc), hint="Use --skip-malformed to index the remaining records.",
                    code=EXIT_BAD_INPUT)
    except DocbotError as exc:
        _error_exit(str(exc), code=_exit_code(exc))


@app.command()
def lookup(
    token: Annotated[str, typer.Argument(help="Type or member name to look up")],
    index_path: Annotated[
        Path | None, typer.Option("--index", "-i", help="Index file to read")
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Look up a name in a previously built index."""
    try:
        config = load_config(config_path, {"index_path": index_path})
        loaded = IndexStore(config.index_path).load()
    except DocbotError as exc:
        _error_exit(str(exc), code=_exit_code(exc))

    if loaded is None:
        _error_exit(
            f"No index at {config.index_path}.",
            hint="Run 'docbot index <types.json>' first.",
            code=EXIT_PERSISTENCE,
        )

    result = IndexConsumer(loaded).lookup(token)
    if not result.is_match:
        console.print(f"[yellow]No match[/yellow] for '{token}'")
        return

    title = f"{len(result.entries)} candidates" if result.is_ambiguous else "Match"
    table = Table(title=f"[bold]{result.keyword}[/bold]: {title}", border_style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Defined by", style="dim")
    for entry in result.entries:
        table.add_row(entry.name, entry.desc, entry.defined_by or "")
    console.print(table)


@app.command()
def repl(
    bot_path: Annotated[
        Path | None, typer.Option("--bot", help="Python file defining bot(nick, message)")
    ] = None,
    types: Annotated[
        Path | None, typer.Option("--types", help="Rebuild the index from this file first")
    ] = None,
    test: Annotated[
        bool, typer.Option("--test", help="Reload the bot module on every line")
    ] = False,
    nick: Annotated[
        str | None, typer.Option("--nick", help="Sender nick passed to the bot")
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Chat with the bot in an interactive prompt."""
    try:
        config = load_config(
            config_path, {"bot_path": bot_path, "types": types, "test": test or None, "nick": nick}
        )
        if config.types is not None:
            _build_and_save(config, config.types, skip_malformed=False)
        loader = BotLoader(config.bot_path, config.reload_policy, index_path=config.index_path)
        loader.get()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(code=130)
    except DocbotError as exc:
        _error_exit(str(exc), code=_exit_code(exc))

    console.print(Panel(
        f"Bot: [bold]{loader.path.name}[/bold]   reload: [bold]{loader.policy.value}[/bold]\n"
        "Type [cyan].exit[/cyan] to quit.",
        title=f"[bold cyan]docbot[/bold cyan] v{__version__}",
        border_style="cyan",
    ))
    run_repl(loader, nick=config.nick)


@app.command()
def version() -> None:
    """Show the docbot version."""
    console.print(f"docbot {__version__}")
