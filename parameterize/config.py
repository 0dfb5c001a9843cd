"""Configuration for parameterize runs.

A `ParameterizeConfiguration` bundles three hooks:

- ``decorator(scope, iteration)`` wraps each iteration. It must call
  ``iteration()`` exactly once. ``iteration()`` returns normally even if the
  iteration fails, so cleanup placed after it always runs.
- ``on_failure(scope, failure)`` runs after each failing iteration and can set
  ``scope.record_failure`` and ``scope.break_early``.
- ``on_complete(scope)`` runs once after the last iteration.

Exceptions raised from any hook propagate out of `parameterize` unchanged, and
no further hooks run.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from parameterize.exceptions import ParameterizeError
from parameterize.failure.error import ParameterizeFailedError
from parameterize.failure.record import ParameterizeFailure
from parameterize.parameters import DeclaredParameter

if TYPE_CHECKING:
    from parameterize.state.run import ParameterizeState

__all__ = [
    "DEFAULT_MAX_RECORDED_FAILURES",
    "DecoratorScope",
    "OnFailureScope",
    "OnCompleteScope",
    "ParameterizeConfiguration",
    "default_decorator",
    "default_on_failure",
    "default_on_complete",
]

# Failures recorded by the default on_failure handler
DEFAULT_MAX_RECORDED_FAILURES = 10


class DecoratorScope:
    """Information about the iteration being decorated."""

    def __init__(self, state: "ParameterizeState") -> None:
        self.is_first_iteration: bool = state.is_first_iteration
        self._is_last_iteration: Optional[bool] = None

    @property
    def is_last_iteration(self) -> bool:
        """True if no combination follows this iteration.

        Raises:
            ParameterizeError: If read before the iteration function has been
                invoked, since it can't be known until the iteration runs.
        """
        if self._is_last_iteration is None:
            raise ParameterizeError(
                "Last iteration cannot be known until after the iteration "
                "function is invoked"
            )
        return self._is_last_iteration

    @is_last_iteration.setter
    def is_last_iteration(self, value: bool) -> None:
        self._is_last_iteration = value


class OnFailureScope:
    """Details of a failing iteration, and options for handling it.

    Attributes:
        iteration_count: Iterations run so far, including this one.
        failure_count: Failures so far, including this one.
        break_early: Set to True to stop after this iteration instead of
            continuing with the next combination. Defaults to False.
        record_failure: Set to True to add this failure to
            `OnCompleteScope.recorded_failures`. Defaults to False.
    """

    def __init__(
        self,
        state: "ParameterizeState",
        iteration_count: int,
        failure_count: int,
    ) -> None:
        self._state = state
        self.iteration_count = iteration_count
        self.failure_count = failure_count
        self.break_early = False
        self.record_failure = False

    @cached_property
    def parameters(self) -> List[DeclaredParameter[Any]]:
        """The parameters declared when the failure was raised."""
        return self._state.declared_parameters()


@dataclass(frozen=True)
class OnCompleteScope:
    """Summary of a finished run.

    Attributes:
        iteration_count: Total iterations, including skipped and failed ones.
        skip_count: Iterations skipped because a parameter had no arguments.
        failure_count: Failed iterations.
        completed_early: True if `on_failure` requested to break early while
            combinations were left. Breaking early on the last combination
            leaves this False, since every combination was iterated.
        recorded_failures: Failures recorded by `on_failure`.
    """

    iteration_count: int
    skip_count: int
    failure_count: int
    completed_early: bool
    recorded_failures: Tuple[ParameterizeFailure, ...] = ()

    @property
    def success_count(self) -> int:
        """Iterations that completed without being skipped or failing."""
        return self.iteration_count - self.skip_count - self.failure_count

    def failed_error(self) -> ParameterizeFailedError:
        """Build the error summarizing this run's failures."""
        return ParameterizeFailedError(
            self.recorded_failures,
            success_count=self.success_count,
            failure_count=self.failure_count,
            completed_early=self.completed_early,
        )


Decorator = Callable[[DecoratorScope, Callable[[], None]], None]
OnFailure = Callable[[OnFailureScope, Exception], None]
OnComplete = Callable[[OnCompleteScope], None]


def default_decorator(scope: DecoratorScope, iteration: Callable[[], None]) -> None:
    iteration()


def default_on_failure(scope: OnFailureScope, failure: Exception) -> None:
    """Record the first failures and keep iterating."""
    scope.record_failure = scope.failure_count <= DEFAULT_MAX_RECORDED_FAILURES


def default_on_complete(scope: OnCompleteScope) -> None:
    """Raise `ParameterizeFailedError` if any iteration failed."""
    if scope.failure_count > 0:
        raise scope.failed_error()


@dataclass(frozen=True)
class ParameterizeConfiguration:
    """Hooks controlling how parameterize iterates and reports failures.

    Example:
        base = ParameterizeConfiguration.default()
        fail_fast = base.copy(on_failure=lambda scope, failure: setattr(scope, "break_early", True))
    """

    decorator: Decorator = field(default=default_decorator)
    on_failure: OnFailure = field(default=default_on_failure)
    on_complete: OnComplete = field(default=default_on_complete)

    @classmethod
    def default(cls) -> "ParameterizeConfiguration":
        return cls()

    def copy(
        self,
        decorator: Optional[Decorator] = None,
        on_failure: Optional[OnFailure] = None,
        on_complete: Optional[OnComplete] = None,
    ) -> "ParameterizeConfiguration":
        """Return a copy with the given hooks replaced.

        Hooks passed as None keep this configuration's value.
        """
        overrides = {
            name: value
            for name, value in (
                ("decorator", decorator),
                ("on_failure", on_failure),
                ("on_complete", on_complete),
            )
            if value is not None
        }
        return replace(self, **overrides)
