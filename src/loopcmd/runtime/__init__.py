"""Runtime module - interpreter and host helper."""

from loopcmd.runtime.host import execute
from loopcmd.runtime.interpreter import Pending, interpret, interpret_env

__all__ = [
    "Pending",
    "execute",
    "interpret",
    "interpret_env",
]
