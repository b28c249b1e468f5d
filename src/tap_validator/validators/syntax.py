"""Per-file syntax validation."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from collections.abc import Iterable

from ..issues import Issue, SyntaxIssue, UnreadableFileIssue
from ..models.outcome import ValidationOutcome
from ..oracles import SyntaxOracle
from ..report import ResultAggregator

logger = logging.getLogger(__name__)


def check_file(oracle: SyntaxOracle, path: Path) -> list[Issue]:
    """Return the issues the oracle finds in one file (empty when valid)."""
    try:
        verdict = oracle.check(path)
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return [UnreadableFileIssue(file=path, cause=exc.strerror or str(exc))]

    if verdict.valid:
        return []
    return [SyntaxIssue(file=path, line=verdict.line, detail=verdict.message or "syntax error")]


class SyntaxValidator:
    """Run an oracle over files, producing one outcome per file."""

    def __init__(self, oracle: SyntaxOracle) -> None:
        self.oracle = oracle

    def validate(self, path: Path) -> ValidationOutcome:
        issues = check_file(self.oracle, path)
        logger.debug("%s: %s", path, "ok" if not issues else "failed")
        return ValidationOutcome.for_file(path, issues)

    def validate_all(
        self, paths: Iterable[Path], aggregator: ResultAggregator, jobs: int = 1
    ) -> int:
        """Validate every path, recording each outcome; return the file count.

        A failing file never stops the remaining files from being checked.
        """
        count = 0
        if jobs <= 1:
            for path in paths:
                aggregator.record(self.validate(path))
                count += 1
            return count

        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="syntax") as pool:
            for outcome in pool.map(self.validate, paths):
                aggregator.record(outcome)
                count += 1
        return count
