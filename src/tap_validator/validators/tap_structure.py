"""Structural validation of a single tap."""

from __future__ import annotations

import logging
from enum import Enum
from collections.abc import Callable

from ..issues import EmptyTapIssue, Issue
from ..models.outcome import ValidationOutcome
from ..models.tap import Tap
from ..oracles import SyntaxOracle
from .aliases import AliasResolver
from .syntax import check_file

logger = logging.getLogger(__name__)


class TapCheckState(Enum):
    NOT_STARTED = 0
    DEFINITIONS_CHECKED = 1
    ALIASES_CHECKED = 2
    DONE = 3


class TapStructureValidator:
    """Check one tap's definitions and, optionally, its aliases.

    The checks always run to completion: a failing definition check does not
    skip the alias check. The resulting outcome fails when any check failed.
    With ``require_definitions`` a tap holding no definitions is a failure;
    it is set for taps requested by name.
    """

    def __init__(
        self,
        tap: Tap,
        oracle: SyntaxOracle,
        check_aliases: bool = False,
        require_definitions: bool = True,
        alias_resolver: Callable[[Tap], AliasResolver] = AliasResolver,
    ) -> None:
        self.tap = tap
        self.oracle = oracle
        self.check_aliases = check_aliases
        self.require_definitions = require_definitions
        self.alias_resolver = alias_resolver
        self.state = TapCheckState.NOT_STARTED
        self._issues: list[Issue] = []

    def _advance(self, state: TapCheckState) -> None:
        if state.value <= self.state.value:
            raise RuntimeError(f"Cannot move from {self.state.name} to {state.name}")
        self.state = state

    def check_definitions(self) -> None:
        if self.require_definitions and not self.tap.definitions:
            self._issues.append(EmptyTapIssue(tap=self.tap.name))
        for definition in self.tap.definitions:
            self._issues.extend(check_file(self.oracle, definition.path))
        self._advance(TapCheckState.DEFINITIONS_CHECKED)

    def check_alias_entries(self) -> None:
        self._issues.extend(self.alias_resolver(self.tap).resolve())
        self._advance(TapCheckState.ALIASES_CHECKED)

    def run(self) -> ValidationOutcome:
        if self.state is not TapCheckState.NOT_STARTED:
            raise RuntimeError(f"{self.tap.name} has already been validated")

        self.check_definitions()
        if self.check_aliases:
            self.check_alias_entries()
        self._advance(TapCheckState.DONE)

        outcome = ValidationOutcome.for_tap(self.tap.name, self._issues)
        logger.info(
            "%s: %d definitions, %d aliases, %d issues",
            self.tap.name,
            len(self.tap.definitions),
            len(self.tap.aliases),
            len(outcome.diagnostics),
        )
        return outcome
