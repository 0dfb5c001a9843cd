"""Run state: the declared parameters of a parameterize run and how they advance.

The loop nest of a parameterized block is not known up front. It is recovered
by running the block repeatedly and recording, per position in declaration
order, a `ParameterState`. After each iteration the declared states are
advanced like an odometer: the most recently declared parameter is the fastest
digit, and a parameter on its last argument carries into the one declared
before it. Positions after the advanced one are reset, so the next iteration
declares them afresh, possibly with arguments derived from the new values.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, List

from parameterize.config import OnCompleteScope, OnFailureScope
from parameterize.exceptions import ParameterizeBreak, ParameterizeError
from parameterize.failure.record import ParameterizeFailure
from parameterize.logging import get_logger
from parameterize.parameters import DeclaredParameter, site_name
from parameterize.state.parameter import ParameterState

__all__ = ["ParameterizeState"]

logger = get_logger(__name__)

_NOT_DECLARING = object()


class ParameterizeState:
    """Parameters, counters and recorded failures for one parameterize run.

    Parameter states are reused between iterations and never removed; the
    number declared in the current iteration is tracked separately.

    Attributes:
        iteration_count: Iterations started so far, including skipped and
            failed ones.
        skip_count: Iterations abandoned because a parameter had no arguments.
        failure_count: Iterations that raised a failure.
        recorded_failures: Failures that `on_failure` chose to record.
    """

    def __init__(self) -> None:
        self._parameters: List[ParameterState] = []
        self._parameter_count = 0
        self._declaring_site: Any = _NOT_DECLARING

        # Number of leading positions the current iteration must declare again.
        # Set to one past the position advanced after the previous iteration.
        self._required_count = 0

        self.iteration_count = 0
        self.skip_count = 0
        self.failure_count = 0
        self.recorded_failures: List[ParameterizeFailure] = []

    @property
    def parameter_count(self) -> int:
        """Number of parameters declared so far in the current iteration."""
        return self._parameter_count

    @property
    def is_first_iteration(self) -> bool:
        return self.iteration_count == 1

    @property
    def has_next_combination(self) -> bool:
        """True if another combination follows the current one.

        Before the first iteration this is True, since the block must run at
        least once for its parameters to be discovered.
        """
        if self.iteration_count == 0:
            return True
        return any(
            not parameter.is_last_argument
            for parameter in self._parameters[: self._parameter_count]
        )

    def start_iteration(self) -> None:
        self.iteration_count += 1
        self._parameter_count = 0

    def declare_parameter(
        self, site: Hashable, arguments: Iterable[Any]
    ) -> DeclaredParameter[Any]:
        """Declare the next parameter of this iteration and return its argument.

        Raises:
            ParameterizeBreak: If a different parameter was declared at this
                position before, or if declared while another parameter's
                arguments are being computed.
            ParameterizeContinue: If `arguments` is empty.
        """
        outer_site = self._declaring_site
        if outer_site is not _NOT_DECLARING:
            message = (
                "Nesting parameters is not currently supported: "
                f"`{site_name(site)}` was declared within "
                f"`{site_name(outer_site)}`'s arguments"
            )
            raise ParameterizeBreak(self, ParameterizeError(message))

        self._declaring_site = site
        try:
            index = self._parameter_count
            if index < len(self._parameters):
                parameter = self._parameters[index]
            else:
                parameter = ParameterState(self)
                self._parameters.append(parameter)

            parameter.declare(site, arguments)
            # Counted after declaring, since a parameter without arguments
            # doesn't contribute to this iteration.
            self._parameter_count += 1
            return parameter.declared_parameter()
        finally:
            self._declaring_site = outer_site

    def declared_parameters(self) -> List[DeclaredParameter[Any]]:
        """Parameters declared so far in the current iteration, in order."""
        return [
            parameter.declared_parameter()
            for parameter in self._parameters[: self._parameter_count]
        ]

    def handle_continue(self) -> None:
        self.skip_count += 1
        logger.debug(
            "Iteration %d skipped: parameter %d has no arguments",
            self.iteration_count,
            self._parameter_count + 1,
        )

    def check_iteration_complete(self, failed: bool = False) -> None:
        """Verify the iteration reached every position it was expected to declare.

        The parameters before the advanced one kept their arguments, so a
        deterministic block must declare at least as far as the advanced
        parameter again.

        Raises:
            ParameterizeError: If the iteration stopped declaring early.
        """
        if self._parameter_count >= self._required_count:
            return

        if failed:
            message = (
                "Previous iteration executed to this point successfully, "
                "but now failed with the same arguments"
            )
        else:
            expected = self._parameters[self._parameter_count]
            message = (
                f"Expected to be declaring `{site_name(expected.site)}`, but the "
                "iteration completed without declaring it"
            )
        raise ParameterizeError(message)

    def handle_failure(
        self,
        on_failure: Callable[[OnFailureScope, Exception], None],
        failure: Exception,
    ) -> bool:
        """Count a failing iteration and let `on_failure` decide what to do.

        Returns:
            True if `on_failure` requested to break early.
        """
        self.failure_count += 1
        logger.debug(
            "Iteration %d failed with %s (%d failures so far)",
            self.iteration_count,
            type(failure).__name__,
            self.failure_count,
        )

        scope = OnFailureScope(
            self,
            iteration_count=self.iteration_count,
            failure_count=self.failure_count,
        )
        on_failure(scope, failure)

        if scope.record_failure:
            self.recorded_failures.append(
                ParameterizeFailure(failure, tuple(scope.parameters))
            )

        return scope.break_early

    def advance_combination(self) -> bool:
        """Advance to the next combination of arguments.

        Returns:
            False if every combination has been iterated.
        """
        for index in reversed(range(self._parameter_count)):
            parameter = self._parameters[index]
            if not parameter.is_last_argument:
                parameter.advance()
                for later in self._parameters[index + 1 :]:
                    later.reset()
                self._required_count = index + 1
                return True

        for parameter in self._parameters:
            parameter.reset()
        self._required_count = 0
        return False

    def handle_complete(
        self,
        on_complete: Callable[[OnCompleteScope], None],
        completed_early: bool,
    ) -> None:
        logger.debug(
            "Completed %d iterations: %d skipped, %d failed%s",
            self.iteration_count,
            self.skip_count,
            self.failure_count,
            " (completed early)" if completed_early else "",
        )
        scope = OnCompleteScope(
            iteration_count=self.iteration_count,
            skip_count=self.skip_count,
            failure_count=self.failure_count,
            completed_early=completed_early,
            recorded_failures=tuple(self.recorded_failures),
        )
        on_complete(scope)

    def __repr__(self) -> str:
        declared = ", ".join(str(p) for p in self.declared_parameters())
        return f"ParameterizeState({declared})"

