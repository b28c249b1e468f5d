"""Alias resolution for a single tap."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from collections.abc import Callable

from ..issues import AliasProblem, BrokenAliasIssue
from ..models.tap import AliasEntry, Tap

logger = logging.getLogger(__name__)

PACKAGE_NAME = re.compile(r"^[a-z0-9][a-z0-9@+._-]*$")


def _normalise(path: Path) -> Path:
    return Path(os.path.normpath(path))


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
    except ValueError:
        return False
    return True


class AliasResolver:
    """Check that every alias in a tap points at one of its own definitions.

    ``is_file`` decides whether a resolved target exists; it defaults to the
    real filesystem and can be replaced to check synthetic alias maps.
    """

    def __init__(self, tap: Tap, is_file: Callable[[str], bool] = os.path.isfile) -> None:
        self.tap = tap
        self.is_file = is_file
        self._definition_dir = _normalise(tap.definition_dir.absolute())
        self._definition_paths = {
            _normalise(definition.path.absolute()) for definition in tap.definitions
        }
        self._definition_names = tap.definition_names()

    def target_of(self, entry: AliasEntry) -> Path:
        target = entry.target_path
        if not target.is_absolute():
            target = self.tap.alias_dir / target
        return _normalise(target.absolute())

    def check(self, entry: AliasEntry) -> BrokenAliasIssue | None:
        """Return the first problem with ``entry``, or None when it resolves."""
        if not entry.is_symlink:
            return self._issue(entry, AliasProblem.NOT_SYMLINK)

        target = self.target_of(entry)
        if not self.is_file(str(target)):
            return self._issue(entry, AliasProblem.DANGLING_TARGET, str(entry.target_path))
        if not _is_within(target, self._definition_dir):
            return self._issue(entry, AliasProblem.CROSS_TAP_TARGET, str(target))
        if target not in self._definition_paths:
            return self._issue(
                entry, AliasProblem.DANGLING_TARGET, f"{entry.target_path} is not a definition"
            )
        if not PACKAGE_NAME.match(entry.name):
            return self._issue(entry, AliasProblem.MALFORMED_NAME)
        if entry.name in self._definition_names:
            return self._issue(entry, AliasProblem.DUPLICATES_DEFINITION)
        return None

    def resolve(self) -> list[BrokenAliasIssue]:
        """Check every alias; one issue per broken alias, in alias order."""
        issues: list[BrokenAliasIssue] = []
        for entry in self.tap.aliases:
            issue = self.check(entry)
            if issue is None:
                logger.debug("%s: alias %s resolves", self.tap.name, entry.name)
                continue
            issues.append(issue)
        return issues

    def _issue(self, entry: AliasEntry, reason: AliasProblem, detail: str = "") -> BrokenAliasIssue:
        return BrokenAliasIssue(
            tap=self.tap.name, alias_name=entry.name, reason=reason, detail=detail
        )
