"""Per-unit validation outcomes and the run-wide aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable

from ..issues import Issue

_VALID_SCOPES = {"file", "tap"}


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one file or one tap."""

    scope: str
    subject: str
    diagnostics: tuple[Issue, ...] = ()

    def __post_init__(self) -> None:
        if self.scope not in _VALID_SCOPES:
            raise ValueError(f"Invalid scope: {self.scope}")
        if not self.subject:
            raise ValueError("Outcome subject must be non-empty")

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def to_dict(self) -> dict[str, object]:
        return {
            "scope": self.scope,
            "subject": self.subject,
            "ok": self.ok,
            "diagnostics": [issue.to_dict() for issue in self.diagnostics],
        }

    @classmethod
    def for_file(cls, path: object, issues: Iterable[Issue] = ()) -> ValidationOutcome:
        return cls(scope="file", subject=str(path), diagnostics=tuple(issues))

    @classmethod
    def for_tap(cls, name: str, issues: Iterable[Issue] = ()) -> ValidationOutcome:
        return cls(scope="tap", subject=name, diagnostics=tuple(issues))


@dataclass(frozen=True)
class AggregateResult:
    """Every outcome of a run plus the single pass/fail signal.

    Combining two results is an OR over ``any_failed`` and a concatenation of
    outcomes, so the final boolean does not depend on the order of merges.
    """

    any_failed: bool = False
    outcomes: tuple[ValidationOutcome, ...] = ()

    @classmethod
    def empty(cls) -> AggregateResult:
        return cls()

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[ValidationOutcome]) -> AggregateResult:
        collected = tuple(outcomes)
        return cls(
            any_failed=any(not outcome.ok for outcome in collected),
            outcomes=collected,
        )

    def add(self, outcome: ValidationOutcome) -> AggregateResult:
        return AggregateResult(
            any_failed=self.any_failed or not outcome.ok,
            outcomes=self.outcomes + (outcome,),
        )

    def merge(self, other: AggregateResult) -> AggregateResult:
        return AggregateResult(
            any_failed=self.any_failed or other.any_failed,
            outcomes=self.outcomes + other.outcomes,
        )

    @property
    def issues(self) -> list[Issue]:
        return [issue for outcome in self.outcomes for issue in outcome.diagnostics]

    def failures(self) -> list[ValidationOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]
