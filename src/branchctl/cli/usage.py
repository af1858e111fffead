from __future__ import annotations

from ..presets import PRESETS, Preset

OPTIONS: tuple[tuple[str, str], ...] = (
    ("--dry-run", "Print the resolved command without running it"),
    ("--list", "List presets (combine with --json for JSON)"),
    ("--json", "Emit JSON for --dry-run, --list and errors"),
    ("--engine CMD", "Test engine command (default: node test-runner.js)"),
    ("--timeout MS", "Forward --timeout=MS to the test engine"),
    ("--server-timeout MS", "Forward --server-timeout=MS to the test engine"),
    ("--run-id ID", "Run identifier for log lines"),
    ("--log-json", "Emit log lines as JSON"),
    ("--quiet", "Suppress log lines"),
    ("--version", "Show the branchctl version"),
    ("--help, -h", "Show this help message"),
)

EXAMPLES: tuple[tuple[str, str], ...] = (
    ("branchctl quick", "Quick test all branches"),
    ("branchctl verbose", "Detailed test all branches"),
    ("branchctl main-only", "Test only main branch"),
    ("branchctl features-only", "Test only feature branches"),
    ("branchctl single main", "Test specific branch"),
    ("branchctl debug", "Debug mode"),
)


def _table(rows: list[tuple[str, str]], indent: str = "  ") -> list[str]:
    width = max(len(left) for left, _ in rows) + 2
    return [f"{indent}{left.ljust(width)}{right}" for left, right in rows]


def preset_lines(presets: tuple[Preset, ...] = PRESETS) -> list[str]:
    return _table([(preset.usage, preset.description) for preset in presets])


def render_usage() -> str:
    lines = [
        "branchctl - test all branches",
        "",
        "Quick testing presets for common scenarios:",
        "",
        "Usage: branchctl [options] [preset] [argument]",
        "",
        "Presets:",
        *preset_lines(),
        "",
        "Options:",
        *_table(list(OPTIONS)),
        "",
        "Examples:",
        *_table([(cmd, f"# {note}") for cmd, note in EXAMPLES]),
        "",
        "For advanced options, run the test engine directly with --help.",
    ]
    return "\n".join(lines)
