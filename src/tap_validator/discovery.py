"""Candidate source file discovery."""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Iterator

from .issues import ScanError

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "**/*.rb"
EXCLUDES = {"vendor", "cask"}


def is_excluded(relative: Path) -> bool:
    """Return True when any directory segment of ``relative`` is excluded."""
    return any(part in EXCLUDES for part in relative.parts[:-1])


def scan_files(root: Path, pattern: str = DEFAULT_PATTERN) -> Iterator[Path]:
    """Yield files under root matching pattern (excluding vendored and cask dirs).

    Each call starts a fresh enumeration. A missing root yields nothing.
    """
    root = Path(root)
    if not root.exists():
        logger.debug("Scan root %s does not exist; nothing to scan", root)
        return
    if not root.is_dir():
        raise ScanError(root, "not a directory")

    for path in sorted(root.glob(pattern)):
        if not path.is_file():
            continue
        if is_excluded(path.relative_to(root)):
            logger.debug("Skipping excluded path %s", path)
            continue
        yield path
