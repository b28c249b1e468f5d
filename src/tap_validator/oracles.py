"""Syntax-checking oracles.

An oracle decides whether a file is well formed without executing it. Any
``OSError`` raised while reading the file is left to propagate so callers can
tell an unreadable file apart from a rejected one.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Iterable
from typing import Protocol, TYPE_CHECKING

from .issues import OracleUnavailableError

if TYPE_CHECKING:  # pragma: no cover
    from .config import Settings

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_WARNINGS = ("named capture conflicts a local variable",)

# Ruby reports stdin as "-" e.g. "-:3: syntax error, unexpected end-of-input"
_RUBY_LOCATION = re.compile(r"^-:(?P<line>\d+):\s*(?P<message>.*)$")


@dataclass(frozen=True)
class SyntaxVerdict:
    """Answer from an oracle for a single file."""

    valid: bool
    line: int | None = None
    message: str = ""

    @classmethod
    def ok(cls) -> SyntaxVerdict:
        return cls(valid=True)


class SyntaxOracle(Protocol):
    def check(self, path: Path) -> SyntaxVerdict: ...


class RubySyntaxOracle:
    """Check Ruby files with ``ruby -c -w``.

    Warnings are treated as failures, except those matching one of
    ``ignored_warnings``.
    """

    def __init__(
        self,
        ruby_path: str = "ruby",
        ignored_warnings: Iterable[str] = DEFAULT_IGNORED_WARNINGS,
        timeout: float | None = 60,
    ) -> None:
        self.ruby_path = ruby_path
        self.ignored_warnings = tuple(ignored_warnings)
        self.timeout = timeout

    def check(self, path: Path) -> SyntaxVerdict:
        source = Path(path).read_bytes()
        try:
            proc = subprocess.run(
                [self.ruby_path, "-c", "-w", "-"],
                input=source,
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except OSError as exc:
            raise OracleUnavailableError(f"Cannot run {self.ruby_path}: {exc}") from exc
        except subprocess.TimeoutExpired:
            return SyntaxVerdict(valid=False, message=f"syntax check timed out after {self.timeout}s")

        stderr = proc.stderr.decode("utf-8", errors="replace")
        messages = [
            line
            for line in stderr.splitlines()
            if line.strip() and not any(ignored in line for ignored in self.ignored_warnings)
        ]
        if proc.returncode == 0 and not messages:
            return SyntaxVerdict.ok()

        logger.debug("ruby rejected %s: %s", path, messages)
        return _first_located_message(messages, proc.returncode)


def _first_located_message(messages: list[str], returncode: int) -> SyntaxVerdict:
    for raw in messages:
        match = _RUBY_LOCATION.match(raw)
        if match:
            return SyntaxVerdict(
                valid=False, line=int(match.group("line")), message=match.group("message")
            )
    if messages:
        return SyntaxVerdict(valid=False, message=messages[0].strip())
    return SyntaxVerdict(valid=False, message=f"ruby exited with status {returncode}")


class PythonSyntaxOracle:
    """Check Python files by compiling them without executing."""

    def check(self, path: Path) -> SyntaxVerdict:
        source = Path(path).read_bytes()
        try:
            compile(source, str(path), "exec", dont_inherit=True)
        except SyntaxError as exc:
            return SyntaxVerdict(valid=False, line=exc.lineno, message=exc.msg)
        except ValueError as exc:
            # e.g. source containing null bytes
            return SyntaxVerdict(valid=False, message=str(exc))
        return SyntaxVerdict.ok()


ORACLES = ("ruby", "python")


def build_oracle(settings: Settings) -> SyntaxOracle:
    """Return the oracle named in settings."""
    if settings.oracle == "python":
        return PythonSyntaxOracle()
    if settings.oracle == "ruby":
        return RubySyntaxOracle(
            ruby_path=settings.ruby_path, ignored_warnings=settings.ignored_warnings
        )
    raise ValueError(f"Unknown oracle: {settings.oracle}")
