from __future__ import annotations

import sys
from collections.abc import Sequence

from ..core.context import RunContext
from ..core.process import run_inherited
from ..engine import Invocation
from ..exit_codes import OK
from ..presets import Preset


def run_preset(ctx: RunContext, preset: Preset, args: Sequence[str], invocation: Invocation) -> int:
    """Run the engine once for ``preset`` and return the dispatcher's exit status."""
    print(preset.announce(args))
    print(f"Executing: {invocation.display}")
    print()
    result = run_inherited(invocation.argv, ctx.cwd, ctx)
    print()
    if result.ok:
        print("Test execution completed successfully!")
        return OK
    print("Test execution failed!", file=sys.stderr)
    if result.error:
        print(f"Reason: {result.error}", file=sys.stderr)
    elif result.signal is not None:
        print(f"Terminated by signal {result.signal}", file=sys.stderr)
    print(f"Exit code: {result.exit_status}", file=sys.stderr)
    return result.exit_status
