from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SCHEMAS = ROOT / "src/branchctl/schemas"


def load_schema(name: str) -> dict[str, object]:
    return json.loads((SCHEMAS / name).read_text(encoding="utf-8"))


def branchctl_env(env: dict[str, str] | None = None) -> dict[str, str]:
    full_env = os.environ.copy()
    full_env["PYTHONPATH"] = str(ROOT / "src")
    full_env.pop("BRANCHCTL_ENGINE", None)
    full_env.update(env or {})
    return full_env


def run_branchctl(*args: str, cwd: Path, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    full_env = branchctl_env(env)
    return subprocess.run(
        [sys.executable, "-m", "branchctl", *args],
        cwd=cwd,
        env=full_env,
        text=True,
        capture_output=True,
        check=False,
    )
