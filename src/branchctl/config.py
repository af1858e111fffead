from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from .core.errors import ScriptError
from .exit_codes import ERR_USAGE

DEFAULT_ENGINE = "node test-runner.js"
ENGINE_ENV = "BRANCHCTL_ENGINE"
PYPROJECT = "pyproject.toml"


@dataclass(frozen=True)
class EngineConfig:
    command: tuple[str, ...]
    source: str


def _tool_table(cwd: Path) -> dict[str, Any]:
    path = cwd / PYPROJECT
    if not path.is_file():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ScriptError(f"invalid {PYPROJECT}: {exc}", ERR_USAGE) from exc
    table = data.get("tool", {}).get("branchctl", {})
    return table if isinstance(table, dict) else {}


def split_engine(raw: str, source: str) -> tuple[str, ...]:
    try:
        parts = tuple(shlex.split(raw))
    except ValueError as exc:
        raise ScriptError(f"invalid engine command from {source}: {exc}", ERR_USAGE) from exc
    if not parts:
        raise ScriptError(f"empty engine command from {source}", ERR_USAGE)
    return parts


def load_engine_config(cli_engine: str | None, cwd: Path) -> EngineConfig:
    """Resolve the engine command: --engine, then env, then pyproject, then default."""
    if cli_engine is not None:
        return EngineConfig(split_engine(cli_engine, "--engine"), "cli")
    env_engine = os.environ.get(ENGINE_ENV)
    if env_engine is not None:
        return EngineConfig(split_engine(env_engine, ENGINE_ENV), "env")
    raw = _tool_table(cwd).get("engine")
    if raw is not None:
        if not isinstance(raw, str):
            raise ScriptError(f"[tool.branchctl] engine must be a string in {PYPROJECT}", ERR_USAGE)
        return EngineConfig(split_engine(raw, PYPROJECT), "pyproject")
    return EngineConfig(split_engine(DEFAULT_ENGINE, "default"), "default")
