from __future__ import annotations

import socket
from pathlib import Path

import pytest
from hypothesis import settings

from branchctl.core.process import ExecutionResult

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("branchctl", deadline=None, max_examples=50)
settings.load_profile("branchctl")

FAKE_ENGINE = """\
import json
import os
import sys

print("FAKE-ENGINE " + json.dumps(sys.argv[1:]))
sys.exit(int(os.environ.get("FAKE_ENGINE_EXIT", "0")))
"""


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("BRANCHCTL_ENGINE", raising=False)
    monkeypatch.delenv("RUN_ID", raising=False)
    monkeypatch.chdir(tmp_path)


class EngineCalls:
    def __init__(self) -> None:
        self.commands: list[list[str]] = []
        self.result = ExecutionResult(code=0)

    def __call__(self, cmd: list[str], cwd: Path, ctx: object = None) -> ExecutionResult:
        self.commands.append(list(cmd))
        return self.result


@pytest.fixture
def engine_calls(monkeypatch: pytest.MonkeyPatch) -> EngineCalls:
    calls = EngineCalls()
    monkeypatch.setattr("branchctl.cli.dispatch.run_inherited", calls)
    return calls


@pytest.fixture
def fake_engine(tmp_path: Path) -> Path:
    script = tmp_path / "fake_engine.py"
    script.write_text(FAKE_ENGINE, encoding="utf-8")
    return script
