from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from .config import EngineConfig


@dataclass(frozen=True)
class Invocation:
    program: tuple[str, ...]
    flags: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [*self.program, *self.flags]

    @property
    def display(self) -> str:
        return shlex.join(self.argv)


def tuning_flags(timeout_ms: int | None = None, server_timeout_ms: int | None = None) -> list[str]:
    flags: list[str] = []
    if timeout_ms is not None:
        flags.append(f"--timeout={timeout_ms}")
    if server_timeout_ms is not None:
        flags.append(f"--server-timeout={server_timeout_ms}")
    return flags


def build_invocation(engine: EngineConfig, preset_flags: Sequence[str], extra_flags: Sequence[str] = ()) -> Invocation:
    return Invocation(program=engine.command, flags=(*preset_flags, *extra_flags))
