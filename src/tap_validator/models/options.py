"""Options selecting which checks a run performs."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable
from typing import Literal, Union

ALL_TAPS = "all"

TapSelection = Union[tuple[str, ...], Literal["all"]]


@dataclass(frozen=True)
class ValidationOptions:
    """Mode switches and tap selection for ``run_validation``."""

    check_syntax: bool = False
    check_aliases: bool = False
    taps: TapSelection = ALL_TAPS

    def __post_init__(self) -> None:
        if self.taps != ALL_TAPS:
            if isinstance(self.taps, str) or not all(isinstance(t, str) and t for t in self.taps):
                raise ValueError("taps must be 'all' or a sequence of tap identifiers")
            object.__setattr__(self, "taps", tuple(self.taps))

    @property
    def all_taps(self) -> bool:
        return self.taps == ALL_TAPS or not self.taps

    @classmethod
    def from_names(
        cls, names: Iterable[str], *, check_syntax: bool = False, check_aliases: bool = False
    ) -> ValidationOptions:
        """Build options from CLI-style names; no names selects every installed tap."""
        selected = tuple(names)
        return cls(
            check_syntax=check_syntax,
            check_aliases=check_aliases,
            taps=selected if selected else ALL_TAPS,
        )
