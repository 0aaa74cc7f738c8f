"""Exceptions raised by the import block engine."""

from typing import Optional


class TidyImportsError(Exception):
    """Base exception for tidyimports errors."""

    pass


class UnparsableFragment(TidyImportsError):
    """Raised when a statement's member list cannot be classified."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class EngineFault(TidyImportsError):
    """Raised when the pipeline fails unexpectedly."""

    pass


class ConfigError(TidyImportsError):
    """Raised when a configuration file cannot be used."""

    pass
