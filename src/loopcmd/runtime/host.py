"""Host helper - the caller side of the interpreter contract."""

from __future__ import annotations

from typing import Any

from loopcmd.kernel.cmd import Cmd
from loopcmd.kernel.env import Env
from loopcmd.runtime.interpreter import interpret_env


async def execute(cmd: Cmd, env: Env) -> list[Any]:
    """Interpret a command, await it and dispatch the resolved actions in order.

    Args:
        cmd: The command to execute
        env: Host ports; env.dispatch receives every resolved action

    Returns:
        The dispatched actions, empty when there was nothing to dispatch
    """
    pending = interpret_env(cmd, env)
    if pending is None:
        return []

    actions = await pending or []
    for action in actions:
        env.dispatch(action)
    return list(actions)
