"""The parameterize loop.

`parameterize` runs a block once for every combination of the arguments of the
parameters it declares:

    def block(scope):
        red = scope.parameter("red", range(128, 256))
        green = scope.parameter("green", range(64, red - 31))
        blue = scope.parameter("blue", range(0, green - 63))
        colors.append((red, green, blue))

    parameterize(block)

is equivalent to three nested ``for`` loops with the same dependent ranges.
Parameters are declared inside the block instead of up front, so which
parameters exist, and their arguments, can depend on earlier arguments.

Restrictions:

- The block must be deterministic, executing the same way for the same
  arguments.
- Arguments must not be mutated, since they are reused between iterations.
- Parameters cannot be declared while another parameter's arguments are being
  computed, such as inside a `lazy_parameter` factory.
"""

from __future__ import annotations

from typing import Callable, Optional

from parameterize.config import (
    Decorator,
    DecoratorScope,
    OnComplete,
    OnFailure,
    ParameterizeConfiguration,
)
from parameterize.exceptions import (
    ParameterizeBreak,
    ParameterizeContinue,
    ParameterizeControlFlow,
    ParameterizeError,
)
from parameterize.logging import get_logger
from parameterize.scope import ParameterizeScope
from parameterize.state.run import ParameterizeState

__all__ = ["ParameterizeIterator", "parameterize"]

logger = get_logger(__name__)

Block = Callable[[ParameterizeScope], None]


class ParameterizeIterator:
    """Drives a block through every combination of its parameters' arguments.

    Args:
        block: Callable run once per iteration with a fresh `ParameterizeScope`.
        configuration: Hooks for decorating iterations and handling failures.
    """

    def __init__(self, block: Block, configuration: ParameterizeConfiguration) -> None:
        self._block = block
        self._configuration = configuration
        self._state = ParameterizeState()
        self._finished = False
        self._completed_early = False

    @property
    def state(self) -> ParameterizeState:
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._finished

    def run(self) -> None:
        """Iterate until every combination is covered, then call `on_complete`.

        Raises:
            ParameterizeError: If the block declares parameters inconsistently
                between iterations, or the decorator misuses its iteration
                function.
        """
        logger.debug(
            "Starting parameterize run of %s",
            getattr(self._block, "__qualname__", repr(self._block)),
        )
        while not self._finished:
            self.run_iteration()
        self._state.handle_complete(
            self._configuration.on_complete, self._completed_early
        )

    def run_iteration(self) -> None:
        """Run the next iteration through the decorator and advance the arguments."""
        state = self._state
        state.start_iteration()

        scope = ParameterizeScope(state)
        decorator_scope = DecoratorScope(state)
        invocations = 0
        failure: Optional[Exception] = None
        signal: Optional[ParameterizeControlFlow] = None

        def iteration() -> None:
            nonlocal invocations, failure, signal
            invocations += 1
            if invocations > 1:
                raise ParameterizeError(
                    "Decorator must invoke the iteration function exactly once, "
                    f"but was invoked {invocations} times"
                )

            try:
                self._block(scope)
            except ParameterizeControlFlow as raised:
                if raised.state is not state:
                    raise
                signal = raised
            except Exception as raised:
                failure = raised
            finally:
                scope.end_iteration()

            if not isinstance(signal, ParameterizeBreak):
                decorator_scope.is_last_iteration = not state.has_next_combination

        self._configuration.decorator(decorator_scope, iteration)

        if invocations != 1:
            raise ParameterizeError(
                "Decorator must invoke the iteration function exactly once, "
                f"but was invoked {invocations} times"
            )

        if isinstance(signal, ParameterizeBreak):
            raise signal.error from signal

        if isinstance(signal, ParameterizeContinue):
            state.check_iteration_complete()
            state.handle_continue()
        elif failure is not None:
            state.check_iteration_complete(failed=True)
            if state.handle_failure(self._configuration.on_failure, failure):
                self._completed_early = state.has_next_combination
                self._finished = True
                logger.debug(
                    "Breaking early after iteration %d", state.iteration_count
                )
                return
        else:
            state.check_iteration_complete()

        if not state.advance_combination():
            self._finished = True


def parameterize(
    block: Block,
    configuration: Optional[ParameterizeConfiguration] = None,
    *,
    decorator: Optional[Decorator] = None,
    on_failure: Optional[OnFailure] = None,
    on_complete: Optional[OnComplete] = None,
) -> None:
    """Run `block` for each combination of the arguments of the parameters it declares.

    Args:
        block: Callable taking a `ParameterizeScope`, used to declare
            parameters and read their current arguments.
        configuration: Base configuration. Defaults to
            `ParameterizeConfiguration.default()`.
        decorator: Replaces the configuration's decorator for this call.
        on_failure: Replaces the configuration's failure handler for this call.
        on_complete: Replaces the configuration's completion handler for this call.

    Raises:
        ParameterizeFailedError: With the default configuration, if any
            iteration failed.
        ParameterizeError: If the block or the configuration misuses the API.

    Example:
        >>> seen = []
        >>> parameterize(lambda s: seen.append((s.parameter("a", [1, 2]), s.parameter("b", "xy"))))
        >>> seen
        [(1, 'x'), (1, 'y'), (2, 'x'), (2, 'y')]
    """
    if configuration is None:
        configuration = ParameterizeConfiguration.default()
    configuration = configuration.copy(
        decorator=decorator, on_failure=on_failure, on_complete=on_complete
    )
    ParameterizeIterator(block, configuration).run()
