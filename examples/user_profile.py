from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import loopcmd as cmd
from loopcmd import Env, Trace, execute


def user_loaded(user: dict[str, Any]) -> dict[str, Any]:
    return {"type": "USER_LOADED", "user": user}


def user_failed(error: Exception) -> dict[str, Any]:
    return {"type": "USER_FAILED", "error": str(error)}


def scoped(scope: str, action: dict[str, Any]) -> dict[str, Any]:
    return {**action, "scope": scope}


async def fetch_user(user_id: int) -> dict[str, Any]:
    await asyncio.sleep(0.05)
    if user_id < 0:
        raise LookupError(f"no user {user_id}")
    return {"id": user_id, "name": f"user-{user_id}"}


def log_state(get_state: Any) -> None:
    print(f"state before loading: {get_state()}")


@dataclass
class Store:
    state: dict[str, Any] = field(default_factory=dict)
    log: list[dict[str, Any]] = field(default_factory=list)

    def dispatch(self, action: dict[str, Any]) -> None:
        self.log.append(action)

    def get_state(self) -> dict[str, Any]:
        return self.state


def load_profile(user_id: int) -> cmd.Cmd:
    return cmd.sequence(
        [
            cmd.run(log_state, args=[cmd.GET_STATE]),
            cmd.map(
                cmd.batch(
                    [
                        cmd.run(
                            fetch_user,
                            args=[user_id],
                            success_action_creator=user_loaded,
                            fail_action_creator=user_failed,
                        ),
                        cmd.run(
                            fetch_user,
                            args=[-user_id],
                            success_action_creator=user_loaded,
                            fail_action_creator=user_failed,
                        ),
                    ]
                ),
                scoped,
                "profile",
            ),
            cmd.action({"type": "PROFILE_READY"}),
        ]
    )


async def main() -> None:
    store = Store(state={"page": "profile"})
    trace = Trace()
    command = load_profile(7)
    print(cmd.describe(command))

    dispatched = await execute(command, Env(store.dispatch, store.get_state, trace))
    for action in dispatched:
        print(action)
    print(f"{len(trace)} trace events")


if __name__ == "__main__":
    asyncio.run(main())
