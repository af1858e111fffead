"""CLI payload output helpers."""

from __future__ import annotations

import json

TOOL = "branchctl"


def dumps_json(payload: dict[str, object], pretty: bool = False) -> str:
    # Key order is fixed so repeated runs print identical payloads.
    return json.dumps(payload, indent=2 if pretty else None, sort_keys=True)


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def base_payload(run_id: str, status: str = "ok") -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": TOOL,
        "status": status,
        "run_id": run_id,
    }


def render_error(*, as_json: bool, message: str, code: int, hint: str = "") -> str:
    if as_json:
        error: dict[str, object] = {"code": code, "message": message}
        if hint:
            error["hint"] = hint
        return dumps_json(
            {
                "schema_name": "branchctl.error.v1",
                "schema_version": 1,
                "tool": TOOL,
                "status": "error",
                "errors": [error],
            },
            pretty=False,
        )
    return message if not hint else f"{message}\n{hint}"
