"""Environment - bundles what the interpreter needs from its host."""

from __future__ import annotations

from dataclasses import dataclass

from loopcmd.kernel.ports import Dispatch, GetState
from loopcmd.kernel.trace import Trace


@dataclass
class Env:
    """Environment aggregation - combines the host ports."""

    dispatch: Dispatch
    get_state: GetState
    trace: Trace | None = None
