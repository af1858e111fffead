from __future__ import annotations

from dataclasses import dataclass

from ..exit_codes import ERR_USAGE


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_USAGE
    hint: str = ""

    def __str__(self) -> str:
        return self.message
