"""Strategy import/export toolkit.

Validates user-authored betting strategies and moves their serialized form
between a persistent key-value store and exported/imported JSON files.
"""
from __future__ import annotations

from .errors import (
    CodecError,
    FileReadError,
    InvalidStrategyFile,
    NoFileSelected,
    ParseError,
    StrategyError,
    ValidationError,
)
from .manager import StrategyManager
from .validator import (
    validate_action,
    validate_block,
    validate_condition,
    validate_strategies,
    validate_strategy,
)

__all__ = [
    "CodecError",
    "FileReadError",
    "InvalidStrategyFile",
    "NoFileSelected",
    "ParseError",
    "StrategyError",
    "StrategyManager",
    "ValidationError",
    "validate_action",
    "validate_block",
    "validate_condition",
    "validate_strategies",
    "validate_strategy",
]
