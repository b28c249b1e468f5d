"""Core validation entrypoints.

This module has no CLI dependencies so it can be driven by the bundled
command line, by CI scripts, or by tests with injected collaborators. Each
entry point returns an ``AggregateResult``; callers decide what a failure
means for their exit status.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from collections.abc import Iterable

from .config import Settings
from .discovery import DEFAULT_PATTERN, scan_files
from .models.options import ValidationOptions
from .models.outcome import AggregateResult, ValidationOutcome
from .models.tap import Tap
from .oracles import SyntaxOracle, build_oracle
from .report import ResultAggregator
from .taps import FilesystemTapRegistry, TapRegistry
from .validators.syntax import SyntaxValidator
from .validators.tap_structure import TapStructureValidator

logger = logging.getLogger(__name__)


def check_syntax(
    paths: Iterable[Path],
    oracle: SyntaxOracle,
    jobs: int = 1,
) -> AggregateResult:
    """Syntax-check every path; one file outcome each."""
    aggregator = ResultAggregator()
    count = SyntaxValidator(oracle).validate_all(paths, aggregator, jobs=jobs)
    result = aggregator.result
    logger.info("Syntax-checked %d files, %d failed", count, len(result.failures()))
    return result


def check_library_syntax(
    root: Path,
    oracle: SyntaxOracle,
    pattern: str = DEFAULT_PATTERN,
    jobs: int = 1,
) -> AggregateResult:
    """Scan ``root`` for candidate files and syntax-check them."""
    return check_syntax(scan_files(root, pattern), oracle, jobs=jobs)


def check_taps(
    taps: Iterable[Tap],
    oracle: SyntaxOracle,
    check_aliases: bool = False,
    jobs: int = 1,
    require_definitions: bool = True,
) -> AggregateResult:
    """Validate each tap's structure; one tap outcome each.

    ``require_definitions`` makes a tap without definitions fail; pass False
    when the taps were enumerated rather than requested by name.
    """

    def _validate(tap: Tap) -> ValidationOutcome:
        return TapStructureValidator(
            tap, oracle, check_aliases=check_aliases, require_definitions=require_definitions
        ).run()

    aggregator = ResultAggregator()
    if jobs <= 1:
        for tap in taps:
            aggregator.record(_validate(tap))
    else:
        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="tap") as pool:
            for outcome in pool.map(_validate, taps):
                aggregator.record(outcome)
    return aggregator.result


def run_validation(
    options: ValidationOptions,
    *,
    settings: Settings | None = None,
    registry: TapRegistry | None = None,
    oracle: SyntaxOracle | None = None,
) -> AggregateResult:
    """Run the checks selected by ``options``.

    Params:
        options: which modes to run and which taps to check
        settings: scan root, pattern, taps root and worker count; defaults
            to ``Settings()``
        registry: tap lookup; defaults to the filesystem under
            ``settings.taps_root``
        oracle: syntax checker; defaults to the one named in settings

    Raises:
        UnknownTapError: a requested tap is not installed; nothing is checked.
        ScanError: the syntax scan root cannot be enumerated.
    """
    settings = settings or Settings()
    registry = registry or FilesystemTapRegistry(settings.taps_root)
    oracle = oracle or build_oracle(settings)

    # Resolve taps before any work so an unknown tap aborts the run up front.
    identifiers = () if options.all_taps else tuple(options.taps)
    taps = registry.resolve(identifiers)

    aggregator = ResultAggregator()
    if options.check_syntax:
        aggregator.extend(
            check_library_syntax(
                settings.library_path, oracle, pattern=settings.pattern, jobs=settings.jobs
            )
        )

    aggregator.extend(
        check_taps(
            taps,
            oracle,
            check_aliases=options.check_aliases,
            jobs=settings.jobs,
            require_definitions=not options.all_taps,
        )
    )

    result = aggregator.result

    logger.info(
        "Validation finished: %d outcomes, %s",
        len(result.outcomes),
        "failed" if result.any_failed else "ok",
    )
    return result
