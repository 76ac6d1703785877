"""Command algebra - immutable descriptions of side effects."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Final, Literal

from loopcmd.kernel.errors import UnknownCmdError
from loopcmd.kernel.options import RunOptions

Kind = Literal["none", "action", "run", "batch", "sequence", "map"]

KINDS: Final[frozenset[str]] = frozenset(
    {"none", "action", "run", "batch", "sequence", "map"}
)


@dataclass(frozen=True, eq=False)
class _Sentinel:
    """Placeholder substituted at call time by the interpreter."""

    name: str

    def __repr__(self) -> str:
        return f"<{self.name}>"


# Compared by identity only, so equal-looking user data never collides.
GET_STATE: Final = _Sentinel("GET_STATE")
DISPATCH: Final = _Sentinel("DISPATCH")


@dataclass(frozen=True)
class CmdBase:
    """Common base of every command variant."""

    kind: Kind = field(init=False)


@dataclass(frozen=True)
class NoneCmd(CmdBase):
    """The empty command. Use the ``none`` singleton."""

    kind: Literal["none"] = field(default="none", init=False)


@dataclass(frozen=True)
class ActionCmd(CmdBase):
    """Hand an already-known action back to the caller."""

    action: Any
    kind: Literal["action"] = field(default="action", init=False)


@dataclass(frozen=True)
class RunCmd(CmdBase):
    """
    Call a function and map its outcome to an action.

    Attributes:
        func: The side-effecting callable
        args: Positional arguments, may contain GET_STATE / DISPATCH
        success_action_creator: Maps a success value to an action
        fail_action_creator: Maps a raised exception to an action
        force_sync: Pass the raw return value to the success creator without awaiting it

    With force_sync and no success_action_creator the run interprets to None.
    A returned awaitable is then scheduled on the running loop and left to
    settle on its own, its outcome discarded.
    """

    func: Callable[..., Any]
    args: tuple[Any, ...] = ()
    success_action_creator: Callable[[Any], Any] | None = None
    fail_action_creator: Callable[[Any], Any] | None = None
    force_sync: bool = False
    kind: Literal["run"] = field(default="run", init=False)


@dataclass(frozen=True)
class BatchCmd(CmdBase):
    """Run all children concurrently."""

    cmds: tuple[Cmd, ...] = ()
    kind: Literal["batch"] = field(default="batch", init=False)


@dataclass(frozen=True)
class SequenceCmd(CmdBase):
    """Run children one after another."""

    cmds: tuple[Cmd, ...] = ()
    kind: Literal["sequence"] = field(default="sequence", init=False)


@dataclass(frozen=True)
class MapCmd(CmdBase):
    """Tag every action produced by ``cmd`` with ``tagger(*args, action)``."""

    cmd: Cmd
    tagger: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kind: Literal["map"] = field(default="map", init=False)


Cmd = NoneCmd | ActionCmd | RunCmd | BatchCmd | SequenceCmd | MapCmd

none: Final = NoneCmd()


def is_cmd(value: Any) -> bool:
    """Return True only for values built by the command constructors."""
    return isinstance(value, CmdBase) and getattr(value, "kind", None) in KINDS


def action(action: Any) -> ActionCmd:
    return ActionCmd(action)


def run(func: Callable[..., Any], options: RunOptions | None = None, **kwargs: Any) -> RunCmd:
    """Describe a function call.

    Args:
        func: The function to call when interpreted
        options: Run options, or pass the same fields as keyword arguments

    Returns:
        A RunCmd
    """
    if options is None:
        options = RunOptions(**kwargs)
    elif kwargs:
        overrides = RunOptions(**kwargs)
        options = options.model_copy(
            update={name: getattr(overrides, name) for name in overrides.model_fields_set}
        )
    return RunCmd(
        func=func,
        args=options.args,
        success_action_creator=options.success_action_creator,
        fail_action_creator=options.fail_action_creator,
        force_sync=options.force_sync,
    )


def batch(cmds: Iterable[Cmd]) -> BatchCmd:
    return BatchCmd(tuple(cmds))


def sequence(cmds: Iterable[Cmd]) -> SequenceCmd:
    return SequenceCmd(tuple(cmds))


def map(cmd: Cmd, tagger: Callable[..., Any], *args: Any) -> MapCmd:
    """Describe ``cmd`` with every resulting action passed through ``tagger``.

    Extra positional args are passed to the tagger before the action.
    """
    return MapCmd(cmd=cmd, tagger=tagger, args=args)


def describe(cmd: Cmd, indent: int = 0) -> str:
    """Render a command tree as an indented outline for debugging."""
    if not is_cmd(cmd):
        raise UnknownCmdError(cmd)
    prefix = "  " * indent
    if cmd.kind == "none":
        return f"{prefix}none"
    if cmd.kind == "action":
        return f"{prefix}action({cmd.action!r})"
    if cmd.kind == "run":
        parts = [callable_name(cmd.func)]
        if cmd.args:
            parts.append("args=" + ", ".join(repr(a) for a in cmd.args))
        if cmd.success_action_creator is not None:
            parts.append(f"success={callable_name(cmd.success_action_creator)}")
        if cmd.fail_action_creator is not None:
            parts.append(f"fail={callable_name(cmd.fail_action_creator)}")
        if cmd.force_sync:
            parts.append("force_sync")
        return f"{prefix}run({', '.join(parts)})"
    if cmd.kind in ("batch", "sequence"):
        lines = [f"{prefix}{cmd.kind}"]
        lines.extend(describe(child, indent + 1) for child in cmd.cmds)
        return "\n".join(lines)
    if cmd.kind == "map":
        head = f"{prefix}map({callable_name(cmd.tagger)}"
        if cmd.args:
            head += ", " + ", ".join(repr(a) for a in cmd.args)
        return head + ")\n" + describe(cmd.cmd, indent + 1)
    raise UnknownCmdError(cmd)


def callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__name__", repr(fn))
