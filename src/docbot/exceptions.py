"""docbot exception hierarchy.

All exceptions inherit from DocbotError so callers can catch the base
class when they want to handle any docbot failure uniformly.
"""

from __future__ import annotations


class DocbotError(Exception):
    """Base exception for all docbot errors."""


class ConfigError(DocbotError):
    """Configuration-related errors (missing config file, invalid TOML, etc.)."""


class InvalidInputError(DocbotError):
    """The documentation source is absent or not a mapping of type records."""


class MalformedRecordError(DocbotError):
    """A type or member name cannot yield a non-empty keyword."""

    def __init__(self, message: str, record_name: object = None) -> None:
        super().__init__(message)
        self.record_name = record_name


class PersistenceError(DocbotError):
    """Errors reading or writing the serialized index."""


class BotLoadError(DocbotError):
    """The bot module could not be found, imported, or has no bot() function."""
