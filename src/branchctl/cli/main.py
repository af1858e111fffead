from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from .. import __version__
from ..config import load_engine_config
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.logging import log_event
from ..engine import build_invocation, tuning_flags
from ..exit_codes import ERR_INTERNAL, ERR_USAGE, OK
from ..presets import PRESETS, resolve_preset
from .dispatch import run_preset
from .output import base_payload, emit, render_error
from .usage import preset_lines, render_usage

HELP_FLAGS = ("--help", "-h")
USAGE_HINT = "Run with --help to see available presets"


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ScriptError(f"{self.prog}: error: {message}", ERR_USAGE, hint=USAGE_HINT)


def _milliseconds(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid milliseconds value: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"milliseconds must be non-negative: {raw!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="branchctl", add_help=False, allow_abbrev=False)
    p.add_argument("preset", nargs="?", help="preset name")
    p.add_argument("args", nargs="*", help="preset argument, e.g. the branch for `single`")
    p.add_argument("--dry-run", action="store_true", help="print resolved command and exit")
    p.add_argument("--list", action="store_true", help="list presets")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--engine", help="test engine command")
    p.add_argument("--timeout", type=_milliseconds, help="engine operation timeout in ms")
    p.add_argument("--server-timeout", type=_milliseconds, help="engine server startup timeout in ms")
    p.add_argument("--run-id", help="run identifier for log lines")
    p.add_argument("--log-json", action="store_true", help="emit structured log lines as JSON")
    p.add_argument("--quiet", action="store_true", help="suppress log lines")
    p.add_argument("--version", action="store_true", help="print version and exit")
    return p


def _list_payload(run_id: str) -> dict[str, object]:
    return {
        **base_payload(run_id),
        "schema_name": "branchctl.presets.v1",
        "presets": [
            {"name": preset.name, "usage": preset.usage, "description": preset.description}
            for preset in PRESETS
        ],
    }


def main(argv: list[str] | None = None) -> int:
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    if not raw_argv or any(arg in HELP_FLAGS for arg in raw_argv):
        print(render_usage())
        return OK
    as_json = "--json" in raw_argv
    try:
        ns = build_parser().parse_intermixed_args(raw_argv)
        if ns.version:
            print(f"branchctl {__version__}")
            return OK
        ctx = RunContext.from_args(ns.run_id, "json" if ns.json else "text", ns.quiet, ns.log_json)
        log_event(ctx, "info", "cli", "start", preset=ns.preset or "-", dry_run=ns.dry_run)
        if ns.list:
            if as_json:
                emit(_list_payload(ctx.run_id), True)
            else:
                print("\n".join(preset_lines()))
            return OK
        if ns.preset is None:
            raise ScriptError("Error: Please specify a preset", ERR_USAGE, hint=USAGE_HINT)
        preset, flags = resolve_preset(ns.preset, ns.args)
        engine = load_engine_config(ns.engine, ctx.cwd)
        invocation = build_invocation(engine, flags, tuning_flags(ns.timeout, ns.server_timeout))
        if ns.dry_run:
            if as_json:
                emit(
                    {
                        **base_payload(ctx.run_id),
                        "schema_name": "branchctl.dry_run.v1",
                        "preset": preset.name,
                        "args": list(ns.args),
                        "engine_source": engine.source,
                        "command": invocation.argv,
                        "display": invocation.display,
                    },
                    True,
                )
            else:
                print(f"Executing: {invocation.display}")
            return OK
        return run_preset(ctx, preset, ns.args, invocation)
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, hint=exc.hint), file=sys.stderr)
        return exc.code
    except Exception as exc:
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


def main_entry() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
