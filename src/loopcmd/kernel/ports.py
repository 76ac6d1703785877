"""Port protocols - the live host functions handed to the interpreter."""

from __future__ import annotations

from typing import Any, Protocol


class Dispatch(Protocol):
    """Store dispatch function. Never called by the interpreter itself."""

    def __call__(self, action: Any) -> Any: ...


class GetState(Protocol):
    """Store state accessor."""

    def __call__(self) -> Any: ...
