from __future__ import annotations

import signal
import subprocess
import sys
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..exit_codes import ERR_UNAVAILABLE
from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext

# Terminal interrupts reach the whole foreground group; the child decides how to stop.
DEFERRED_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, name)
)


@dataclass(frozen=True)
class ExecutionResult:
    code: int | None
    signal: int | None = None
    duration_ms: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def exit_status(self) -> int:
        if self.code is None:
            return ERR_UNAVAILABLE
        return self.code


def _ignore(_signum: int, _frame: object) -> None:
    return None


@contextmanager
def deferred_signals() -> Iterator[None]:
    """Keep this process alive on interrupt while the child handles it.

    A Python-level handler is installed rather than ``SIG_IGN`` so the child
    starts with default dispositions after exec.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = {signum: signal.getsignal(signum) for signum in DEFERRED_SIGNALS}
    for signum in DEFERRED_SIGNALS:
        signal.signal(signum, _ignore)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def run_inherited(cmd: list[str], cwd: Path, ctx: RunContext | None = None) -> ExecutionResult:
    """Run ``cmd`` once, sharing this process's stdin, stdout and stderr.

    Blocks until the child exits, including while it shuts down after an
    interrupt. There is no timeout and no retry. A child killed by a signal
    or one that cannot be started has no exit code.
    """
    # Output already printed must reach the shared descriptors before the child writes.
    sys.stdout.flush()
    sys.stderr.flush()
    if ctx is not None:
        log_event(ctx, "info", "process", "spawn", command=" ".join(cmd), cwd=str(cwd))
    started = time.monotonic()
    with deferred_signals():
        try:
            proc = subprocess.Popen(cmd, cwd=cwd)
        except OSError as exc:
            result = ExecutionResult(
                code=None,
                duration_ms=int((time.monotonic() - started) * 1000),
                error=f"{cmd[0]}: {exc.strerror or exc}",
            )
        else:
            returncode = proc.wait()
            result = ExecutionResult(
                code=returncode if returncode >= 0 else None,
                signal=-returncode if returncode < 0 else None,
                duration_ms=int((time.monotonic() - started) * 1000),
            )
    if ctx is not None:
        log_event(
            ctx,
            "info" if result.ok else "error",
            "process",
            "exit",
            code=result.code,
            signal=result.signal,
            duration_ms=result.duration_ms,
        )
    return result
