"""Tests for per-tap structural validation."""

import pytest

from tap_validator.issues import AliasProblem, BrokenAliasIssue, EmptyTapIssue, SyntaxIssue
from tap_validator.models.tap import Tap
from tap_validator.validators.tap_structure import TapCheckState, TapStructureValidator


def test_tap_with_valid_definitions_and_aliases_is_ok(tap_factory, fake_oracle):
    definitions = {f"pkg{i}": "ok\n" for i in range(5)}
    aliases = {f"alias{i}": f"../Formula/pkg{i}.rb" for i in range(3)}
    tap = Tap.from_path("homebrew/core", tap_factory("homebrew/core", definitions, aliases))

    validator = TapStructureValidator(tap, fake_oracle, check_aliases=True)
    outcome = validator.run()

    assert outcome.ok
    assert outcome.scope == "tap"
    assert outcome.subject == "homebrew/core"
    assert validator.state is TapCheckState.DONE


def test_empty_tap_is_a_failure(tap_factory, fake_oracle):
    tap = Tap.from_path("foo/bar", tap_factory("foo/bar"))

    outcome = TapStructureValidator(tap, fake_oracle).run()

    assert not outcome.ok
    assert outcome.diagnostics == (EmptyTapIssue(tap="foo/bar"),)


def test_definition_failure_does_not_skip_alias_check(tap_factory, fake_oracle):
    tap = Tap.from_path(
        "homebrew/core",
        tap_factory(
            "homebrew/core",
            definitions={"good": "ok\n", "bad": "ok\nBROKEN\n"},
            aliases={"dangling": "../Formula/nothing.rb"},
        ),
    )

    outcome = TapStructureValidator(tap, fake_oracle, check_aliases=True).run()

    kinds = sorted(type(issue).__name__ for issue in outcome.diagnostics)
    assert kinds == ["BrokenAliasIssue", "SyntaxIssue"]
    syntax = next(i for i in outcome.diagnostics if isinstance(i, SyntaxIssue))
    assert syntax.line == 2


def test_aliases_ignored_when_disabled(tap_factory, fake_oracle):
    tap = Tap.from_path(
        "homebrew/core",
        tap_factory("homebrew/core", {"good": "ok\n"}, {"dangling": "../Formula/nothing.rb"}),
    )

    validator = TapStructureValidator(tap, fake_oracle, check_aliases=False)
    outcome = validator.run()

    assert outcome.ok
    assert validator.state is TapCheckState.DONE


def test_states_only_move_forward(tap_factory, fake_oracle):
    tap = Tap.from_path("homebrew/core", tap_factory("homebrew/core", {"good": "ok\n"}))
    validator = TapStructureValidator(tap, fake_oracle, check_aliases=True)

    validator.check_definitions()
    assert validator.state is TapCheckState.DEFINITIONS_CHECKED
    with pytest.raises(RuntimeError):
        validator.check_definitions()

    validator.check_alias_entries()
    assert validator.state is TapCheckState.ALIASES_CHECKED


def test_run_twice_is_rejected(tap_factory, fake_oracle):
    tap = Tap.from_path("homebrew/core", tap_factory("homebrew/core", {"good": "ok\n"}))
    validator = TapStructureValidator(tap, fake_oracle)
    validator.run()

    with pytest.raises(RuntimeError):
        validator.run()


def test_hundred_files_with_one_broken_alias(tap_factory, fake_oracle):
    definitions = {f"pkg{i:03d}": "ok\n" for i in range(100)}
    aliases = {"good": "../Formula/pkg000.rb", "broken": "../Formula/pkg999.rb"}
    tap = Tap.from_path("homebrew/core", tap_factory("homebrew/core", definitions, aliases))

    outcome = TapStructureValidator(tap, fake_oracle, check_aliases=True).run()

    assert len(fake_oracle.checked) == 100
    broken = [i for i in outcome.diagnostics if isinstance(i, BrokenAliasIssue)]
    assert len(broken) == 1
    assert len(outcome.diagnostics) == 1


def test_empty_tap_passes_when_definitions_not_required(tap_factory, fake_oracle):
    tap = Tap.from_path("foo/bar", tap_factory("foo/bar"))

    outcome = TapStructureValidator(tap, fake_oracle, require_definitions=False).run()

    assert outcome.ok


def test_custom_alias_resolver_is_used(tap_factory, fake_oracle):
    tap = Tap.from_path("homebrew/core", tap_factory("homebrew/core", {"good": "ok\n"}))
    seen = []

    class RejectingResolver:
        def __init__(self, tap):
            seen.append(tap.name)

        def resolve(self):
            return [BrokenAliasIssue(tap.name, "x", AliasProblem.MALFORMED_NAME)]

    outcome = TapStructureValidator(
        tap, fake_oracle, check_aliases=True, alias_resolver=RejectingResolver
    ).run()

    assert seen == ["homebrew/core"]
    assert [i.reason for i in outcome.diagnostics] == [AliasProblem.MALFORMED_NAME]
