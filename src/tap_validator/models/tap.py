"""Tap, definition and alias records built from filesystem state."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Iterable

DEFINITION_SUFFIX = ".rb"
_DEFINITION_DIRS = ("Formula", "HomebrewFormula")
_ALIAS_DIR = "Aliases"


@dataclass(frozen=True)
class DefinitionFile:
    """A single package definition inside a tap."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.stem

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass(frozen=True)
class AliasEntry:
    """An alternate name for a definition, as recorded in the alias directory.

    ``target_path`` is the value stored in the record, which for symlinks is
    usually relative to the alias directory.
    """

    name: str
    target_path: Path
    is_symlink: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Alias name must be non-empty")


@dataclass(frozen=True)
class Tap:
    """A named, independently rooted collection of definitions."""

    name: str
    path: Path
    definitions: tuple[DefinitionFile, ...] = ()
    aliases: tuple[AliasEntry, ...] = ()

    def __post_init__(self) -> None:
        if "/" not in self.name:
            raise ValueError(f"Tap name must be of the form owner/repo: {self.name}")

    @property
    def definition_dir(self) -> Path:
        return definition_dir_for(self.path)

    @property
    def alias_dir(self) -> Path:
        return self.path / _ALIAS_DIR

    def definition_names(self) -> set[str]:
        return {definition.name for definition in self.definitions}

    @classmethod
    def from_path(cls, name: str, path: Path) -> Tap:
        """Read definitions and alias records for the tap rooted at ``path``."""
        path = Path(path)
        return cls(
            name=name,
            path=path,
            definitions=tuple(_iter_definitions(definition_dir_for(path), path)),
            aliases=tuple(_iter_aliases(path / _ALIAS_DIR)),
        )


def definition_dir_for(root: Path) -> Path:
    for candidate in _DEFINITION_DIRS:
        if (root / candidate).is_dir():
            return root / candidate
    return root


def _iter_definitions(definition_dir: Path, root: Path) -> Iterable[DefinitionFile]:
    if not definition_dir.is_dir():
        return
    # Definitions kept at the tap root are never nested.
    pattern = f"*{DEFINITION_SUFFIX}" if definition_dir == root else f"**/*{DEFINITION_SUFFIX}"
    for path in sorted(definition_dir.glob(pattern)):
        if path.is_file() and not path.is_symlink():
            yield DefinitionFile(path=path)


def _iter_aliases(alias_dir: Path) -> Iterable[AliasEntry]:
    if not alias_dir.is_dir():
        return
    for path in sorted(alias_dir.iterdir()):
        if path.is_symlink():
            yield AliasEntry(name=path.name, target_path=Path(os.readlink(path)))
        elif path.is_file():
            yield AliasEntry(name=path.name, target_path=path, is_symlink=False)
