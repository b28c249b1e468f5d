"""Tap lookup by identifier.

Installed taps live under a taps root as ``<owner>/homebrew-<repo>``. A tap
is addressed as ``owner/repo``; a bare ``repo`` belongs to the ``homebrew``
owner, so ``core`` means ``homebrew/core``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Sequence
from typing import Protocol

from .issues import UnknownTapError
from .models.tap import Tap

logger = logging.getLogger(__name__)

DEFAULT_OWNER = "homebrew"
REPO_PREFIX = "homebrew-"


def normalise_tap_name(identifier: str) -> str:
    """Return the canonical ``owner/repo`` form of a tap identifier."""
    parts = identifier.strip().strip("/").lower().split("/")
    if len(parts) == 1 and parts[0]:
        owner, repo = DEFAULT_OWNER, parts[0]
    elif len(parts) == 2 and all(parts):
        owner, repo = parts
    else:
        raise UnknownTapError(identifier)
    if repo.startswith(REPO_PREFIX):
        repo = repo[len(REPO_PREFIX):]
    if not repo:
        raise UnknownTapError(identifier)
    return f"{owner}/{repo}"


class TapRegistry(Protocol):
    def resolve(self, identifiers: Sequence[str] = ()) -> list[Tap]: ...


class FilesystemTapRegistry:
    """Find taps installed under ``taps_root``."""

    def __init__(self, taps_root: Path) -> None:
        self.taps_root = Path(taps_root)

    def installed_paths(self) -> dict[str, Path]:
        """Map canonical name to on-disk directory for every installed tap."""
        if not self.taps_root.is_dir():
            return {}
        found: dict[str, Path] = {}
        for owner_dir in sorted(self.taps_root.iterdir()):
            if not owner_dir.is_dir():
                continue
            for repo_dir in sorted(owner_dir.iterdir()):
                if repo_dir.is_dir() and repo_dir.name.startswith(REPO_PREFIX):
                    found[normalise_tap_name(f"{owner_dir.name}/{repo_dir.name}")] = repo_dir
        return found

    def installed(self) -> list[str]:
        """Return canonical names of every installed tap, sorted."""
        return sorted(self.installed_paths())

    def resolve(self, identifiers: Sequence[str] = ()) -> list[Tap]:
        """Build taps for ``identifiers``, or for every installed tap when empty.

        Directories are looked up by canonical name, so installed taps whose
        directories carry capitals still resolve.

        Raises:
            UnknownTapError: for the first identifier that is not installed.
        """
        installed = self.installed_paths()
        if not identifiers:
            return [Tap.from_path(name, path) for name, path in sorted(installed.items())]

        taps: list[Tap] = []
        for identifier in identifiers:
            name = normalise_tap_name(identifier)
            path = installed.get(name)
            if path is None:
                raise UnknownTapError(identifier)
            taps.append(Tap.from_path(name, path))

        logger.debug("Resolved %d taps under %s", len(taps), self.taps_root)
        return taps
