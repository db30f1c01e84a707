"""
Engine exceptions.

Insufficient interaction data is not an error (see ProfileUpdateResult);
these cover the failures a caller may need to tell apart.
"""


class TasteEngineError(Exception):
    """Base class; message is meant to be shown to a human."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(TasteEngineError):
    """A store read or write failed. Never retried by the engine."""


class EmbeddingError(TasteEngineError):
    """The embedding provider failed for one text."""


class ConfigurationError(TasteEngineError):
    """Settings or config file are missing or invalid."""
