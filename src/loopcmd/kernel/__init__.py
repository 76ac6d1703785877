"""Kernel layer - command algebra and host boundary."""

from loopcmd.kernel.cmd import (
    DISPATCH,
    GET_STATE,
    ActionCmd,
    BatchCmd,
    Cmd,
    CmdBase,
    MapCmd,
    NoneCmd,
    RunCmd,
    SequenceCmd,
    action,
    batch,
    describe,
    is_cmd,
    map,
    none,
    run,
    sequence,
)
from loopcmd.kernel.env import Env
from loopcmd.kernel.errors import UnknownCmdError
from loopcmd.kernel.options import RunOptions
from loopcmd.kernel.ports import Dispatch, GetState
from loopcmd.kernel.trace import Evidence, Trace

__all__ = [
    # Algebra
    "Cmd",
    "CmdBase",
    "NoneCmd",
    "ActionCmd",
    "RunCmd",
    "BatchCmd",
    "SequenceCmd",
    "MapCmd",
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
    # Env & ports
    "Env",
    "Dispatch",
    "GetState",
    # Tracing
    "Trace",
    "Evidence",
    # Errors
    "UnknownCmdError",
]
