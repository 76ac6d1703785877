"""Tests for the command algebra."""

import dataclasses

import pytest
from pydantic import ValidationError

import loopcmd as cmd
from loopcmd.kernel import ActionCmd, BatchCmd, CmdBase, MapCmd, NoneCmd, RunCmd, SequenceCmd
from fakes import action_creator1, action_creator2


def noop() -> None:
    return None


def test_is_cmd_true_for_every_constructor() -> None:
    values = [
        cmd.none,
        cmd.action(action_creator1(1)),
        cmd.run(noop),
        cmd.batch([]),
        cmd.sequence([]),
        cmd.map(cmd.none, action_creator1),
    ]
    assert all(cmd.is_cmd(value) for value in values)


def test_is_cmd_false_for_plain_data() -> None:
    assert not cmd.is_cmd({"foo": "bar"})
    assert not cmd.is_cmd({"kind": "run", "func": noop})
    assert not cmd.is_cmd(None)
    assert not cmd.is_cmd(cmd.GET_STATE)
    assert not cmd.is_cmd(noop)
    assert not cmd.is_cmd(CmdBase())


def test_constructors_tag_their_variant() -> None:
    assert isinstance(cmd.none, NoneCmd) and cmd.none.kind == "none"
    assert isinstance(cmd.action(1), ActionCmd) and cmd.action(1).kind == "action"
    assert isinstance(cmd.run(noop), RunCmd) and cmd.run(noop).kind == "run"
    assert isinstance(cmd.batch([]), BatchCmd) and cmd.batch([]).kind == "batch"
    assert isinstance(cmd.sequence([]), SequenceCmd) and cmd.sequence([]).kind == "sequence"
    mapped = cmd.map(cmd.none, action_creator1, "a", "b")
    assert isinstance(mapped, MapCmd) and mapped.kind == "map"
    assert mapped.args == ("a", "b")


def test_commands_are_immutable() -> None:
    run_cmd = cmd.run(noop, args=[1, 2])
    with pytest.raises(dataclasses.FrozenInstanceError):
        run_cmd.func = print  # type: ignore[misc]
    assert run_cmd.args == (1, 2)

    batch_cmd = cmd.batch(iter([cmd.none, cmd.action(1)]))
    assert batch_cmd.cmds == (cmd.none, cmd.action(1))


def test_commands_compare_structurally() -> None:
    assert cmd.action(action_creator1(1)) == cmd.action(action_creator1(1))
    assert cmd.run(noop, args=[1]) == cmd.run(noop, args=(1,))
    assert cmd.none == NoneCmd()


def test_run_accepts_options_model_or_keywords() -> None:
    options = cmd.RunOptions(
        args=[1, cmd.DISPATCH],
        success_action_creator=action_creator1,
        fail_action_creator=action_creator2,
        force_sync=True,
    )
    from_model = cmd.run(noop, options)
    from_kwargs = cmd.run(
        noop,
        args=[1, cmd.DISPATCH],
        success_action_creator=action_creator1,
        fail_action_creator=action_creator2,
        force_sync=True,
    )
    assert from_model == from_kwargs
    assert from_model.args[1] is cmd.DISPATCH


def test_run_keywords_override_options() -> None:
    options = cmd.RunOptions(success_action_creator=action_creator1)
    run_cmd = cmd.run(noop, options, force_sync=True)
    assert run_cmd.success_action_creator is action_creator1
    assert run_cmd.force_sync is True


def test_run_options_are_validated() -> None:
    with pytest.raises(ValidationError):
        cmd.RunOptions(success_action_creator="not callable")
    with pytest.raises(ValidationError):
        cmd.run(noop, unknown_option=True)


def test_sentinels_are_distinct_identities() -> None:
    assert cmd.GET_STATE is not cmd.DISPATCH
    assert cmd.GET_STATE != cmd.DISPATCH


def test_construction_has_no_side_effects() -> None:
    calls = []

    def effect() -> None:
        calls.append(1)

    cmd.batch([cmd.run(effect), cmd.sequence([cmd.run(effect)]), cmd.map(cmd.run(effect), noop)])
    assert calls == []


def test_describe_renders_nested_tree() -> None:
    tree = cmd.batch(
        [
            cmd.run(noop, args=[1], success_action_creator=action_creator1),
            cmd.map(cmd.sequence([cmd.none, cmd.action("x")]), action_creator2, "tag"),
        ]
    )
    assert cmd.describe(tree) == "\n".join(
        [
            "batch",
            "  run(noop, args=1, success=action_creator1)",
            "  map(action_creator2, 'tag')",
            "    sequence",
            "      none",
            "      action('x')",
        ]
    )


def test_describe_rejects_non_commands() -> None:
    with pytest.raises(cmd.UnknownCmdError):
        cmd.describe({"kind": "none"})  # type: ignore[arg-type]
