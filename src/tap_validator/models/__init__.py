"""Data models for taps, validation outcomes and run options."""

from __future__ import annotations

from .options import ALL_TAPS, ValidationOptions
from .outcome import AggregateResult, ValidationOutcome
from .tap import AliasEntry, DefinitionFile, Tap

__all__ = [
    "ALL_TAPS",
    "AggregateResult",
    "AliasEntry",
    "DefinitionFile",
    "Tap",
    "ValidationOptions",
    "ValidationOutcome",
]
