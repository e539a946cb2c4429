"""Configuration management for docbot.

Settings are resolved once at startup from four layers, lowest priority
first:
1. Built-in defaults
2. A TOML config file passed with --config
3. Environment variables (DOCBOT_*)
4. Explicit command-line overrides

The result is a frozen DocbotConfig that is passed to whatever needs it.
"""

from __future__ import annotations

import dataclasses
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from rich.console import Console

from docbot.exceptions import ConfigError
from docbot.loader import ReloadPolicy

console = Console(stderr=True)

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"true", "1", "yes", "on"})

_ENV_VARS: Final[dict[str, str]] = {
    "DOCBOT_NICK": "nick",
    "DOCBOT_TYPES": "types",
    "DOCBOT_BOT_PATH": "bot_path",
    "DOCBOT_INDEX_PATH": "index_path",
    "DOCBOT_TEST": "test",
}


@dataclass(frozen=True)
class DocbotConfig:
    """docbot configuration.

    Attributes:
        nick: Sender nickname the REPL passes to the bot.
        types: yii2-apidoc JSON types file to index at startup, if any.
        bot_path: Python file providing bot(nick, message); None = built-in bot.
        index_path: Where the keyword index is written and read.
        test: Reload the bot module on every message.
    """

    nick: str = "nick"
    types: Path | None = None
    bot_path: Path | None = None
    index_path: Path = field(default_factory=lambda: Path("docs.json"))
    test: bool = False

    @property
    def reload_policy(self) -> ReloadPolicy:
        return ReloadPolicy.EVERY_CALL if self.test else ReloadPolicy.ONCE


_FIELD_NAMES: Final[frozenset[str]] = frozenset(f.name for f in dataclasses.fields(DocbotConfig))


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> DocbotConfig:
    """Resolve configuration from defaults, config file, env vars and overrides.

    Args:
        config_path: Optional TOML config file.
        overrides: Values given on the command line; None values are ignored.

    Returns:
        A fully resolved, immutable DocbotConfig.

    Raises:
        ConfigError: If the config file is missing or invalid, or a value
            cannot be converted.
    """
    settings: dict[str, Any] = {}

    if config_path is not None:
        settings.update(_load_toml(config_path))

    settings.update(_env_settings())

    if overrides:
        settings.update({k: v for k, v in overrides.items() if v is not None})

    return _build(settings)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load the config file, keeping only known keys."""
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc

    known: dict[str, Any] = {}
    for key, value in data.items():
        if key in _FIELD_NAMES:
            known[key] = value
        else:
            console.print(f"[yellow]Warning:[/yellow] Ignoring unknown config key '{key}' in {path}")
    return known


def _env_settings() -> dict[str, Any]:
    return {
        name: value
        for env_var, name in _ENV_VARS.items()
        if (value := os.environ.get(env_var))
    }


def _build(settings: dict[str, Any]) -> DocbotConfig:
    values: dict[str, Any] = {}
    for key, value in settings.items():
        if key == "test":
            values[key] = _to_bool(value)
        elif key in ("types", "bot_path", "index_path"):
            values[key] = Path(value) if value not in ("", None) else None
        else:
            values[key] = str(value)

    if values.get("index_path", ...) is None:
        raise ConfigError("index_path must not be empty")
    return DocbotConfig(**values)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES
