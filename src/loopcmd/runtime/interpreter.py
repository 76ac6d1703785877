"""Interpreter - executes command trees and resolves them to actions.

``interpret`` is synchronous. It runs the synchronous portion of a command
tree immediately (argument resolution, function calls, action creators for
values known up front) and returns either:

- None: nothing to await, nothing to dispatch
- an awaitable resolving to the ordered list of actions to dispatch

The interpreter never dispatches. Dispatching the resolved actions is the
caller's job (see ``loopcmd.runtime.host.execute``).
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Iterable, Sequence
from typing import Any

from loopcmd.kernel.cmd import (
    DISPATCH,
    GET_STATE,
    BatchCmd,
    Cmd,
    MapCmd,
    RunCmd,
    SequenceCmd,
    callable_name,
    is_cmd,
)
from loopcmd.kernel.env import Env
from loopcmd.kernel.errors import UnknownCmdError
from loopcmd.kernel.ports import Dispatch, GetState
from loopcmd.kernel.trace import Trace

logger = logging.getLogger(__name__)

# Strong references to awaitables left to settle after their result was abandoned.
_background: set[asyncio.Future[Any]] = set()

Pending = Awaitable[list[Any]] | None


def interpret(
    cmd: Cmd,
    dispatch: Dispatch,
    get_state: GetState,
    *,
    trace: Trace | None = None,
) -> Pending:
    """Interpret a command against a live dispatch function and state accessor.

    Args:
        cmd: The command tree to execute
        dispatch: Live dispatch, substituted for DISPATCH run arguments
        get_state: Live state accessor, substituted for GET_STATE run arguments
        trace: Optional trace recording interpretation events

    Returns:
        None, or an awaitable resolving to the actions to dispatch, in order

    Raises:
        Exception: Whatever a run function raised when it has no fail_action_creator
        UnknownCmdError: If a value in the tree is not a command
    """
    return _interpret(cmd, dispatch, get_state, trace, None)


def interpret_env(cmd: Cmd, env: Env) -> Pending:
    """Interpret using the ports bundled in an Env."""
    return interpret(cmd, env.dispatch, env.get_state, trace=env.trace)


def _interpret(
    cmd: Cmd,
    dispatch: Dispatch,
    get_state: GetState,
    trace: Trace | None,
    parent_id: int | None,
) -> Pending:
    if not is_cmd(cmd):
        raise UnknownCmdError(cmd)

    # Async tails interleave, so parents are threaded explicitly instead of push/pop.
    event_id: int | None = None
    if trace is not None:
        event_id = trace.record("cmd_begin", info={"kind": cmd.kind}, parent_id=parent_id)

    if cmd.kind == "none":
        return None
    if cmd.kind == "action":
        return _resolved([cmd.action])
    if cmd.kind == "run":
        return _run(cmd, dispatch, get_state, trace, event_id)
    if cmd.kind == "batch":
        return _batch(cmd, dispatch, get_state, trace, event_id)
    if cmd.kind == "sequence":
        return _sequence(cmd, dispatch, get_state, trace, event_id)
    if cmd.kind == "map":
        return _map(cmd, dispatch, get_state, trace, event_id)
    raise UnknownCmdError(cmd)


async def _resolved(actions: list[Any]) -> list[Any]:
    return actions


def _resolve_args(args: Iterable[Any], dispatch: Dispatch, get_state: GetState) -> list[Any]:
    resolved = []
    for arg in args:
        if arg is GET_STATE:
            resolved.append(get_state)
        elif arg is DISPATCH:
            resolved.append(dispatch)
        else:
            resolved.append(arg)
    return resolved


def _run(
    cmd: RunCmd,
    dispatch: Dispatch,
    get_state: GetState,
    trace: Trace | None,
    event_id: int | None,
) -> Pending:
    args = _resolve_args(cmd.args, dispatch, get_state)
    try:
        result = cmd.func(*args)
    except Exception as exc:
        if cmd.fail_action_creator is None:
            _record(trace, "run_error", {"error": repr(exc)}, event_id)
            raise
        _record(trace, "run_settled", {"outcome": "failure", "actions": 1}, event_id)
        return _resolved([cmd.fail_action_creator(exc)])

    # force_sync hands the raw return value, awaitable or not, to the success creator.
    if cmd.force_sync or not inspect.isawaitable(result):
        if cmd.success_action_creator is None:
            if inspect.isawaitable(result):
                _settle_in_background([result])
            return None
        _record(trace, "run_settled", {"outcome": "success", "actions": 1}, event_id)
        return _resolved([cmd.success_action_creator(result)])

    return _await_run(cmd, result, trace, event_id)


async def _await_run(
    cmd: RunCmd,
    pending: Awaitable[Any],
    trace: Trace | None,
    event_id: int | None,
) -> list[Any]:
    try:
        value = await pending
    except Exception as exc:
        if cmd.fail_action_creator is None:
            logger.debug("Dropped failure of %s: %r", callable_name(cmd.func), exc)
            _record(trace, "run_settled", {"outcome": "failure", "actions": 0}, event_id)
            return []
        _record(trace, "run_settled", {"outcome": "failure", "actions": 1}, event_id)
        return [cmd.fail_action_creator(exc)]

    if cmd.success_action_creator is None:
        _record(trace, "run_settled", {"outcome": "success", "actions": 0}, event_id)
        return []
    _record(trace, "run_settled", {"outcome": "success", "actions": 1}, event_id)
    return [cmd.success_action_creator(value)]


def _batch(
    cmd: BatchCmd,
    dispatch: Dispatch,
    get_state: GetState,
    trace: Trace | None,
    event_id: int | None,
) -> Pending:
    # Every child's synchronous portion runs here, in declaration order.
    pending = []
    try:
        for child in cmd.cmds:
            child_pending = _interpret(child, dispatch, get_state, trace, event_id)
            if child_pending is not None:
                pending.append(child_pending)
    except BaseException:
        # Siblings already started must still settle.
        _settle_in_background(pending)
        raise

    if not pending:
        return None
    return _gather(pending, len(cmd.cmds), trace, event_id)


async def _gather(
    pending: Sequence[Awaitable[list[Any]]],
    children: int,
    trace: Trace | None,
    event_id: int | None,
) -> list[Any]:
    results = await asyncio.gather(*pending)
    actions = _concat(results)
    _record(trace, "batch_settled", {"actions": len(actions), "children": children}, event_id)
    return actions


def _sequence(
    cmd: SequenceCmd,
    dispatch: Dispatch,
    get_state: GetState,
    trace: Trace | None,
    event_id: int | None,
) -> Pending:
    # Leading children that settle synchronously need no awaiting.
    for index, child in enumerate(cmd.cmds):
        pending = _interpret(child, dispatch, get_state, trace, event_id)
        if pending is not None:
            return _continue_sequence(
                pending, cmd.cmds[index + 1 :], dispatch, get_state, trace, event_id
            )
    return None


async def _continue_sequence(
    first: Awaitable[list[Any]],
    rest: Sequence[Cmd],
    dispatch: Dispatch,
    get_state: GetState,
    trace: Trace | None,
    event_id: int | None,
) -> list[Any]:
    actions = list(await first or [])
    skipped = 0
    for child in rest:
        pending = _interpret(child, dispatch, get_state, trace, event_id)
        if pending is None:
            skipped += 1
            continue
        actions.extend(await pending or [])
    _record(
        trace, "sequence_settled", {"actions": len(actions), "skipped": skipped}, event_id
    )
    return actions


def _map(
    cmd: MapCmd,
    dispatch: Dispatch,
    get_state: GetState,
    trace: Trace | None,
    event_id: int | None,
) -> Pending:
    pending = _interpret(cmd.cmd, dispatch, get_state, trace, event_id)
    if pending is None:
        return None
    return _tag(cmd, pending, trace, event_id)


async def _tag(
    cmd: MapCmd,
    pending: Awaitable[list[Any]],
    trace: Trace | None,
    event_id: int | None,
) -> list[Any]:
    actions = await pending or []
    tagged = [cmd.tagger(*cmd.args, action) for action in actions]
    _record(trace, "map_settled", {"actions": len(tagged)}, event_id)
    return tagged


def _concat(results: Iterable[list[Any] | None]) -> list[Any]:
    actions: list[Any] = []
    for result in results:
        if result:
            actions.extend(result)
    return actions


def _record(trace: Trace | None, action: str, info: dict[str, Any], parent_id: int | None) -> None:
    if trace is not None:
        trace.record(action, info=info, parent_id=parent_id)


def _settle_in_background(pending: Iterable[Awaitable[Any]]) -> None:
    """Let abandoned awaitables settle, discarding their outcome.

    Without a running loop nothing can drive them, so coroutines are closed.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    for awaitable in pending:
        if loop is None:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            continue
        future = asyncio.ensure_future(awaitable)
        _background.add(future)
        future.add_done_callback(_discard_outcome)


def _discard_outcome(future: asyncio.Future[Any]) -> None:
    _background.discard(future)
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.debug("Dropped abandoned outcome: %r", exc)
