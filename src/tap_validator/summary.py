"""Human-readable renderings of an aggregate result."""

from __future__ import annotations

from .models.outcome import AggregateResult


def render_diagnostics(result: AggregateResult) -> list[str]:
    """Return one ``Error: ...`` line per issue, in recorded order."""
    return [f"Error: {issue.message}" for issue in result.issues]


def render_summary(result: AggregateResult) -> str:
    """Return a Markdown string with totals and a table of failing units."""
    files = [o for o in result.outcomes if o.scope == "file"]
    taps = [o for o in result.outcomes if o.scope == "tap"]
    failures = result.failures()

    lines = []
    lines.append("# tap-validator Summary")
    lines.append("")
    lines.append(
        f"Files checked: {len(files)} | Taps checked: {len(taps)} | "
        f"Failed: {len(failures)} | Status: {'FAILED' if result.any_failed else 'OK'}"
    )
    lines.append("")
    lines.append("| Scope | Subject | Kind | Message |")
    lines.append("| --- | --- | --- | --- |")

    has_rows = False

    for outcome in failures:
        for issue in outcome.diagnostics:
            message = issue.message.replace("|", "\\|")
            lines.append(f"| {outcome.scope} | {outcome.subject} | {issue.kind} | {message} |")
            has_rows = True

    if not has_rows:
        lines.append("| (none) | No issues found | n/a | n/a |")

    return "\n".join(lines) + "\n"
