from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    DAEMON_ERROR = 3
    RUNTIME_ERROR = 4


@dataclass
class ApiError(Exception):
    message: str
    status: int | None = None
    body: str = ""
    unreachable: bool = False

    def __str__(self) -> str:
        return self.message


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
