"""Validators for files and taps."""

from .aliases import AliasResolver
from .syntax import SyntaxValidator, check_file
from .tap_structure import TapCheckState, TapStructureValidator

__all__ = [
    "AliasResolver",
    "SyntaxValidator",
    "TapCheckState",
    "TapStructureValidator",
    "check_file",
]
