"""Pytest fixtures for tap-validator tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from tap_validator.oracles import PythonSyntaxOracle, SyntaxVerdict

VALID_SOURCE = "name = 'example'\nversion = '1.0'\n"
BROKEN_SOURCE = "name = 'example'\ndef install(:\n"


class FakeOracle:
    """Oracle that rejects files whose content contains ``BROKEN``."""

    def __init__(self) -> None:
        self.checked: list[Path] = []

    def check(self, path: Path) -> SyntaxVerdict:
        self.checked.append(Path(path))
        text = Path(path).read_text(encoding="utf-8")
        for number, line in enumerate(text.splitlines(), start=1):
            if "BROKEN" in line:
                return SyntaxVerdict(valid=False, line=number, message="unexpected BROKEN")
        return SyntaxVerdict.ok()


@pytest.fixture
def fake_oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def python_oracle() -> PythonSyntaxOracle:
    return PythonSyntaxOracle()


@pytest.fixture
def taps_root(tmp_path: Path) -> Path:
    root = tmp_path / "Taps"
    root.mkdir()
    return root


def make_tap(
    taps_root: Path,
    name: str,
    definitions: dict[str, str] | None = None,
    aliases: dict[str, str] | None = None,
) -> Path:
    """Create ``<taps_root>/<owner>/homebrew-<repo>`` with Formula and Aliases.

    ``aliases`` maps alias name to the symlink target as stored in the link.
    """
    owner, repo = name.split("/")
    tap_dir = taps_root / owner / f"homebrew-{repo}"
    formula_dir = tap_dir / "Formula"
    formula_dir.mkdir(parents=True)
    for definition, source in (definitions or {}).items():
        (formula_dir / f"{definition}.rb").write_text(source, encoding="utf-8")
    if aliases:
        alias_dir = tap_dir / "Aliases"
        alias_dir.mkdir()
        for alias, target in aliases.items():
            os.symlink(target, alias_dir / alias)
    return tap_dir


@pytest.fixture
def tap_factory(taps_root: Path):
    def _factory(name: str, definitions=None, aliases=None) -> Path:
        return make_tap(taps_root, name, definitions, aliases)

    return _factory
