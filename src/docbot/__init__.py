"""docbot: keyword search index and lookup bot for API documentation."""

__version__ = "0.3.0"
