"""Error taxonomy for strategy import/export.

Absence of data is never an error (callers receive ``None``); these are
raised only for malformed input or failed I/O.
"""
from __future__ import annotations


class StrategyError(Exception):
    """Base class for all strategy import/export failures."""


class ParseError(StrategyError, ValueError):
    """Serialized text is not valid JSON."""


class ValidationError(StrategyError, ValueError):
    """Well-formed data that violates the strategy schema."""


class CodecError(StrategyError, ValueError):
    """Shorthand payload could not be converted to canonical form."""


class NoFileSelected(StrategyError):
    """Import was requested without any file."""

    def __init__(self, message: str = "No file selected") -> None:
        super().__init__(message)


class FileReadError(StrategyError):
    """The selected file could not be read as text."""

    def __init__(self, message: str = "Failed to read file") -> None:
        super().__init__(message)


class InvalidStrategyFile(StrategyError):
    """Parse, decode or validation failure of an imported file."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid strategy file: {reason}")
