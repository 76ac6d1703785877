"""Error types raised by the interpreter."""

from __future__ import annotations

from typing import Any


class UnknownCmdError(TypeError):
    """Raised when a value with an unknown command kind reaches the interpreter."""

    def __init__(self, cmd: Any) -> None:
        self.cmd = cmd
        super().__init__(f"Not a command: {cmd!r}")

    def __repr__(self) -> str:
        return f"UnknownCmdError(cmd={self.cmd!r})"
