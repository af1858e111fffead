"""Named presets and their expansion into test engine flags.

The registry is closed: a name that is not listed here is rejected before any
command is built, so an unknown preset never runs the engine with defaults.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .core.errors import ScriptError
from .exit_codes import ERR_USAGE

MAIN_BRANCH = "main"
FEATURE_BRANCHES: tuple[str, ...] = (
    "feature/automated-diagnostics",
    "feature/enhanced-error-handling",
    "feature/proxy-support",
    "feature/platform-enhancements",
)

FLAG_VERBOSE = "--verbose"
FLAG_SKIP_CLEANUP = "--skip-cleanup"

ArgsBuilder = Callable[[Sequence[str]], list[str]]


def branches_flag(branches: Sequence[str]) -> str:
    return f"--branches={','.join(branches)}"


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    announcement: str
    build_args: ArgsBuilder = field(compare=False)
    argument: str = ""

    @property
    def usage(self) -> str:
        return f"{self.name} <{self.argument}>" if self.argument else self.name

    def announce(self, args: Sequence[str]) -> str:
        return self.announcement.format(branch=args[0] if args else "")


def _no_flags(_args: Sequence[str]) -> list[str]:
    return []


def _verbose(_args: Sequence[str]) -> list[str]:
    return [FLAG_VERBOSE]


def _main_only(_args: Sequence[str]) -> list[str]:
    return [branches_flag((MAIN_BRANCH,))]


def _features_only(_args: Sequence[str]) -> list[str]:
    return [branches_flag(FEATURE_BRANCHES)]


def _single(args: Sequence[str]) -> list[str]:
    if not args or not args[0]:
        raise ScriptError(
            "Error: Please specify a branch name for single branch testing",
            ERR_USAGE,
            hint="Example: branchctl single main",
        )
    return [branches_flag((args[0],))]


def _debug(_args: Sequence[str]) -> list[str]:
    return [FLAG_SKIP_CLEANUP, FLAG_VERBOSE]


PRESETS: tuple[Preset, ...] = (
    Preset("quick", "Test all branches with minimal output", "Running quick test of all branches...", _no_flags),
    Preset("verbose", "Test all branches with detailed output", "Running verbose test of all branches...", _verbose),
    Preset("main-only", "Test only the main branch", "Testing main branch only...", _main_only),
    Preset("features-only", "Test only feature branches", "Testing feature branches only...", _features_only),
    Preset("single", "Test a specific branch", "Testing single branch: {branch}...", _single, argument="name"),
    Preset("debug", "Test with debug mode (no cleanup)", "Running in debug mode (no cleanup)...", _debug),
)

_REGISTRY: dict[str, Preset] = {preset.name: preset for preset in PRESETS}


def preset_names() -> tuple[str, ...]:
    return tuple(preset.name for preset in PRESETS)


def get_preset(name: str) -> Preset:
    preset = _REGISTRY.get(name)
    if preset is None:
        raise ScriptError(
            f"Unknown preset: {name}",
            ERR_USAGE,
            hint="Run with --help to see available presets",
        )
    return preset


def resolve_preset(name: str, args: Sequence[str] = ()) -> tuple[Preset, list[str]]:
    """Return the preset called ``name`` and the engine flags it expands to.

    Raises ``ScriptError`` for an unknown name or a missing required argument.
    """
    preset = get_preset(name)
    return preset, preset.build_args(list(args))
