"""Host-side execution: interpret, await, dispatch."""

import asyncio

import loopcmd as cmd
from loopcmd import Trace, execute, interpret_env
from fakes import FakeStore, SideEffect, action_creator1, action_creator2


def test_execute_dispatches_resolved_actions_in_order() -> None:
    async def run_flow():
        store = FakeStore()

        async def slow() -> int:
            await asyncio.sleep(0.01)
            return 1

        tree = cmd.batch(
            [
                cmd.run(slow, success_action_creator=action_creator1),
                cmd.action(action_creator2("fast")),
            ]
        )
        return await execute(tree, store.env()), store

    dispatched, store = asyncio.run(run_flow())
    assert dispatched == [action_creator1(1), action_creator2("fast")]
    assert store.dispatched == dispatched


def test_execute_with_nothing_to_dispatch() -> None:
    async def run_flow():
        store = FakeStore()
        side_effect = SideEffect()
        return await execute(cmd.run(side_effect), store.env()), store, side_effect

    dispatched, store, side_effect = asyncio.run(run_flow())
    assert dispatched == []
    assert store.dispatched == []
    assert len(side_effect.calls) == 1


def test_interpret_env_uses_env_ports() -> None:
    async def run_flow():
        store = FakeStore(state="state")
        trace = Trace()
        side_effect = SideEffect().returns("done")
        run_cmd = cmd.run(
            side_effect,
            args=[cmd.GET_STATE, cmd.DISPATCH],
            success_action_creator=action_creator1,
        )
        env = store.env(trace=trace)
        result = await interpret_env(run_cmd, env)
        return result, side_effect, env, trace

    result, side_effect, env, trace = asyncio.run(run_flow())
    assert result == [action_creator1("done")]
    assert side_effect.calls[0] == (env.get_state, env.dispatch)
    assert len(trace.find("cmd_begin")) == 1
