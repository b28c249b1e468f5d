"""Diagnostics reported by the validators and the fatal errors that abort a run.

Reported issues are values: they are collected into ``ValidationOutcome``
objects and never raised. The ``*Error`` classes at the bottom of the module
are raised because no useful work can continue after them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar


class AliasProblem(str, Enum):
    """Why an alias record failed to resolve."""

    DANGLING_TARGET = "danglingTarget"
    CROSS_TAP_TARGET = "crossTapTarget"
    MALFORMED_NAME = "malformedName"
    NOT_SYMLINK = "notSymlink"
    DUPLICATES_DEFINITION = "duplicatesDefinition"


@dataclass(frozen=True)
class Issue:
    """Base class for every reported diagnostic."""

    kind: ClassVar[str] = "issue"

    @property
    def message(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind, "message": self.message}

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SyntaxIssue(Issue):
    """The syntax oracle rejected a file."""

    kind: ClassVar[str] = "syntax"

    file: Path
    line: int | None
    detail: str

    @property
    def message(self) -> str:
        location = f"{self.file}:{self.line}" if self.line is not None else str(self.file)
        return f"{location}: {self.detail}"

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({"file": str(self.file), "line": self.line})
        return data


@dataclass(frozen=True)
class UnreadableFileIssue(Issue):
    """A candidate file could not be read at all."""

    kind: ClassVar[str] = "unreadable"

    file: Path
    cause: str

    @property
    def message(self) -> str:
        return f"{self.file}: unreadable ({self.cause})"

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["file"] = str(self.file)
        return data


_ALIAS_REASON_TEXT = {
    AliasProblem.DANGLING_TARGET: "target does not exist",
    AliasProblem.CROSS_TAP_TARGET: "target is outside the tap's definitions",
    AliasProblem.MALFORMED_NAME: "alias name is not a valid package name",
    AliasProblem.NOT_SYMLINK: "alias is not a symlink",
    AliasProblem.DUPLICATES_DEFINITION: "a definition with the same name exists",
}


@dataclass(frozen=True)
class BrokenAliasIssue(Issue):
    """An alias entry inside a tap does not resolve correctly."""

    kind: ClassVar[str] = "broken-alias"

    tap: str
    alias_name: str
    reason: AliasProblem
    detail: str = ""

    @property
    def message(self) -> str:
        text = f"{self.tap}: alias '{self.alias_name}': {_ALIAS_REASON_TEXT[self.reason]}"
        if self.detail:
            text += f" ({self.detail})"
        return text

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({"tap": self.tap, "alias": self.alias_name, "reason": self.reason.value})
        return data


@dataclass(frozen=True)
class EmptyTapIssue(Issue):
    """A requested tap holds no definitions."""

    kind: ClassVar[str] = "empty-tap"

    tap: str

    @property
    def message(self) -> str:
        return f"{self.tap}: tap contains no definitions"

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["tap"] = self.tap
        return data


class UnknownTapError(RuntimeError):
    """Raised when a tap identifier does not resolve to an installed tap."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"No available tap {identifier}")
        self.identifier = identifier


class ScanError(RuntimeError):
    """Raised when a scan root exists but cannot be enumerated."""

    def __init__(self, root: Path, reason: str) -> None:
        super().__init__(f"Cannot scan {root}: {reason}")
        self.root = root


class OracleUnavailableError(RuntimeError):
    """Raised when the syntax-checking oracle itself cannot be run."""
