"""Exception types raised by the parameterize engine.

`ParameterizeError` reports misuse of the engine: reading state that has not
been declared, declaring parameters in a different order between iterations,
and similar programming errors in the parameterized block.

`ParameterizeControlFlow` and its two subclasses are non-local signals raised
from inside a declaration and handled by the loop that owns the raising state.
They derive from `BaseException` so that ``except Exception`` handlers in the
parameterized block let them through. Code outside this package must not catch
them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from parameterize.state.run import ParameterizeState

__all__ = [
    "ParameterizeError",
    "ParameterizeControlFlow",
    "ParameterizeContinue",
    "ParameterizeBreak",
]


class ParameterizeError(RuntimeError):
    """Raised when parameterize is used incorrectly."""


class ParameterizeControlFlow(BaseException):
    """Base class for signals that abort the current iteration of a run.

    Attributes:
        state: The run state that raised the signal. Only the loop driving that
            state handles it; any other loop re-raises it.
    """

    def __init__(self, state: "ParameterizeState") -> None:
        super().__init__()
        self.state = state


class ParameterizeContinue(ParameterizeControlFlow):
    """Skip the rest of the iteration because a parameter had no arguments."""


class ParameterizeBreak(ParameterizeControlFlow):
    """Abort the whole run because of `error`."""

    def __init__(self, state: "ParameterizeState", error: ParameterizeError) -> None:
        super().__init__(state)
        self.error = error

    def __str__(self) -> str:
        return str(self.error)
