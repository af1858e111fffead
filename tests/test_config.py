from __future__ import annotations

from pathlib import Path

import pytest

from branchctl.config import DEFAULT_ENGINE, load_engine_config
from branchctl.core.errors import ScriptError


def _write_pyproject(root: Path, body: str) -> None:
    (root / "pyproject.toml").write_text(body, encoding="utf-8")


def test_default_engine(tmp_path: Path) -> None:
    cfg = load_engine_config(None, tmp_path)
    assert cfg.command == tuple(DEFAULT_ENGINE.split())
    assert cfg.source == "default"


def test_pyproject_engine(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, '[tool.branchctl]\nengine = "node comprehensive-test.js"\n')
    cfg = load_engine_config(None, tmp_path)
    assert cfg.command == ("node", "comprehensive-test.js")
    assert cfg.source == "pyproject"


def test_env_wins_over_pyproject(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_pyproject(tmp_path, '[tool.branchctl]\nengine = "node comprehensive-test.js"\n')
    monkeypatch.setenv("BRANCHCTL_ENGINE", "node 'my runner.js'")
    cfg = load_engine_config(None, tmp_path)
    assert cfg.command == ("node", "my runner.js")
    assert cfg.source == "env"


def test_cli_wins_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BRANCHCTL_ENGINE", "node env.js")
    cfg = load_engine_config("node cli.js", tmp_path)
    assert cfg.command == ("node", "cli.js")
    assert cfg.source == "cli"


def test_pyproject_without_tool_table_uses_default(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, '[project]\nname = "x"\n')
    assert load_engine_config(None, tmp_path).source == "default"


@pytest.mark.parametrize("raw", ["", "   ", "node 'unterminated"])
def test_bad_engine_command_is_usage_error(tmp_path: Path, raw: str) -> None:
    with pytest.raises(ScriptError) as excinfo:
        load_engine_config(raw, tmp_path)
    assert excinfo.value.code == 1


def test_non_string_engine_rejected(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, "[tool.branchctl]\nengine = 3\n")
    with pytest.raises(ScriptError, match="must be a string"):
        load_engine_config(None, tmp_path)


def test_invalid_pyproject_rejected(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, "[tool.branchctl\n")
    with pytest.raises(ScriptError, match="invalid pyproject.toml"):
        load_engine_config(None, tmp_path)
