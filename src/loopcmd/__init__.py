from .kernel import (
    DISPATCH,
    GET_STATE,
    Cmd,
    Env,
    Evidence,
    RunOptions,
    Trace,
    UnknownCmdError,
    action,
    batch,
    describe,
    is_cmd,
    map,
    none,
    run,
    sequence,
)
from .runtime import execute, interpret, interpret_env

__all__ = [
    # Algebra
    "Cmd",
    "RunOptions",
    "none",
    "action",
    "run",
    "batch",
    "sequence",
    "map",
    "is_cmd",
    "describe",
    "GET_STATE",
    "DISPATCH",
    # Interpreter
    "interpret",
    "interpret_env",
    "execute",
    "Env",
    # Tracing
    "Trace",
    "Evidence",
    # Errors
    "UnknownCmdError",
]
