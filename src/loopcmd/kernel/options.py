"""Run options - validated configuration of a run command."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class RunOptions(BaseModel):
    """Options accepted by ``run``."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    args: tuple[Any, ...] = ()
    success_action_creator: Callable[..., Any] | None = None
    fail_action_creator: Callable[..., Any] | None = None
    force_sync: bool = False

    @field_validator("args", mode="before")
    @classmethod
    def _freeze_args(cls, value: Any) -> tuple[Any, ...]:
        if value is None:
            return ()
        return tuple(value)
