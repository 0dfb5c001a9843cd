"""Record of a failing parameterize iteration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from parameterize.parameters import DeclaredParameter

__all__ = ["ParameterizeFailure"]


@dataclass(frozen=True)
class ParameterizeFailure:
    """A failure raised from a parameterize iteration, and the parameters that caused it.

    Attributes:
        failure: The exception raised by the iteration.
        parameters: The parameters declared when the failure was raised, in
            declaration order.
    """

    failure: BaseException
    parameters: Tuple[DeclaredParameter[Any], ...]

    @property
    def arguments(self) -> Tuple[Any, ...]:
        """The argument of each parameter, in declaration order."""
        return tuple(parameter.argument for parameter in self.parameters)

    def describe(self) -> str:
        """Describe the arguments the failure occurred with.

        Example:
            >>> ParameterizeFailure(ValueError(), ()).describe()
            'Failed with no arguments'
        """
        if not self.parameters:
            return "Failed with no arguments"
        if len(self.parameters) == 1:
            return f"Failed with argument:\n\t\t{self.parameters[0]}"
        lines = "\n\t\t".join(str(parameter) for parameter in self.parameters)
        return f"Failed with arguments:\n\t\t{lines}"
