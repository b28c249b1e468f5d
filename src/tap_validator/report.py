"""Outcome aggregation and schema-friendly output."""

from __future__ import annotations

import threading
from collections import Counter
from typing import Any

from .models.outcome import AggregateResult, ValidationOutcome


class ResultAggregator:
    """Fold outcomes from any component, in any order, into one result.

    Safe to share between worker threads. Outcomes are never dropped, even
    after the run has already failed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcomes: list[ValidationOutcome] = []
        self._any_failed = False

    def record(self, outcome: ValidationOutcome) -> None:
        with self._lock:
            self._outcomes.append(outcome)
            self._any_failed = self._any_failed or not outcome.ok

    def extend(self, result: AggregateResult) -> None:
        with self._lock:
            self._outcomes.extend(result.outcomes)
            self._any_failed = self._any_failed or result.any_failed

    @property
    def result(self) -> AggregateResult:
        with self._lock:
            return AggregateResult(any_failed=self._any_failed, outcomes=tuple(self._outcomes))

    @property
    def any_failed(self) -> bool:
        with self._lock:
            return self._any_failed


def to_report(result: AggregateResult) -> dict[str, Any]:
    """Render an aggregate result as a JSON-compatible report.

    Totals are counted per outcome scope and per issue kind; outcomes are
    passed through in the order they were recorded.
    """

    scopes = Counter(outcome.scope for outcome in result.outcomes)
    failed_scopes = Counter(outcome.scope for outcome in result.failures())
    kinds = Counter(issue.kind for issue in result.issues)

    report: dict[str, Any] = {
        "version": "1",
        "anyFailed": result.any_failed,
        "totals": {
            "files": scopes.get("file", 0),
            "taps": scopes.get("tap", 0),
            "failedFiles": failed_scopes.get("file", 0),
            "failedTaps": failed_scopes.get("tap", 0),
            "issues": dict(sorted(kinds.items())),
        },
        "outcomes": [outcome.to_dict() for outcome in result.outcomes],
    }

    return report
