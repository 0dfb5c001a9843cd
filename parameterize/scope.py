"""Scope handed to a parameterized block for declaring its parameters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Hashable, Iterable, TypeVar

from parameterize.exceptions import ParameterizeError
from parameterize.parameters import (
    DeclaredParameter,
    Parameter,
    lazy_parameter,
    parameter_of,
    site_name,
)

if TYPE_CHECKING:
    from parameterize.state.run import ParameterizeState

__all__ = ["ParameterizeScope"]

T = TypeVar("T")


class ParameterizeScope:
    """Declares parameters for one iteration of a parameterize block.

    Every iteration gets a new scope. Parameters must be declared in the same
    order each iteration, with the same names, for the same argument values of
    the parameters declared before them.

    Declarations may raise `ParameterizeControlFlow` signals. They derive from
    `BaseException`, and code in the block must let them propagate.

    Example:
        def block(scope):
            letter = scope.parameter("letter", "abc")
            number = scope.parameter_of("number", 1, 2, 3)
            ...
    """

    def __init__(self, state: "ParameterizeState") -> None:
        self._state = state
        self._iteration_ended = False

    def end_iteration(self) -> None:
        self._iteration_ended = True

    def declare(self, parameter: Parameter[T], site: Hashable) -> DeclaredParameter[T]:
        """Declare `parameter` at `site`, returning it with its current argument.

        Raises:
            ParameterizeError: If this scope's iteration has already ended.
        """
        if self._iteration_ended:
            raise ParameterizeError(
                f"Cannot declare parameter `{site_name(site)}` after its "
                "iteration has ended"
            )
        return self._state.declare_parameter(site, parameter.arguments)

    def parameter(self, name: Hashable, arguments: Iterable[T]) -> T:
        """Declare a parameter named `name` and return its current argument."""
        return self.declare(Parameter(arguments), name).argument

    def parameter_of(self, name: Hashable, *arguments: T) -> T:
        """Declare a parameter with the listed arguments."""
        return self.declare(parameter_of(*arguments), name).argument

    def lazy_parameter(self, name: Hashable, factory: Callable[[], Iterable[T]]) -> T:
        """Declare a parameter whose arguments are computed on first declaration."""
        return self.declare(lazy_parameter(factory), name).argument

    def __repr__(self) -> str:
        declared = ", ".join(str(p) for p in self._state.declared_parameters())
        return f"ParameterizeScope({declared})"
