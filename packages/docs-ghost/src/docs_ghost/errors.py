from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONFIG


@dataclass
class AuditError(Exception):
    message: str
    code: int = ERR_CONFIG
    kind: str = "config_error"

    def __str__(self) -> str:
        return self.message
