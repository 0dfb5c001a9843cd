"""Iteration state for a single declared parameter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable, Iterable, Iterator, Optional

from parameterize.exceptions import (
    ParameterizeBreak,
    ParameterizeContinue,
    ParameterizeError,
)
from parameterize.parameters import DeclaredParameter, is_same_site, site_name

if TYPE_CHECKING:
    from parameterize.state.run import ParameterizeState

__all__ = ["ParameterState"]

_EXHAUSTED = object()


class ParameterState:
    """Holds one parameter's current argument and its position in the arguments.

    When first declared, the state stores the binding site and the arguments it
    was declared with, creates an iterator, and takes the first argument from
    it. Arguments are read lazily, one ahead of the current argument so that
    `is_last_argument` is known without consuming more than needed. After the
    last argument, `advance` starts over with a new iterator.

    Every iteration of a run declares the same parameters in the same order, so
    declaring an already-declared state again only validates the site. The new
    arguments are ignored and iteration continues where it left off.

    Args:
        state: The run state that owns this parameter state. Control-flow
            signals raised by `declare` carry it.
    """

    def __init__(self, state: "ParameterizeState") -> None:
        self._state = state
        self._declared: Optional[DeclaredParameter[Any]] = None
        self._arguments: Optional[Iterable[Any]] = None
        self._iterator: Optional[Iterator[Any]] = None
        self._next_argument: Any = _EXHAUSTED

    def reset(self) -> None:
        """Forget the declared parameter so the state can be declared anew."""
        self._declared = None
        self._arguments = None
        self._iterator = None
        self._next_argument = _EXHAUSTED

    @property
    def is_declared(self) -> bool:
        return self._declared is not None

    @property
    def site(self) -> Hashable:
        return self._require_declared("Parameter has not been declared").site

    @property
    def is_last_argument(self) -> bool:
        """True if the current argument is the last one before wrapping around.

        Raises:
            ParameterizeError: If the parameter has not been declared.
        """
        self._require_declared("Parameter has not been declared")
        return self._iterator is None

    def declare(self, site: Hashable, arguments: Iterable[Any]) -> None:
        """Declare the parameter at `site` with `arguments`.

        Raises:
            ParameterizeBreak: If already declared at a different site.
            ParameterizeContinue: If `arguments` is empty. The state is left
                undeclared.
        """
        if self._declared is not None:
            declared_site = self._declared.site
            if not is_same_site(site, declared_site):
                message = (
                    f"Expected to be declaring `{site_name(declared_site)}`, "
                    f"but got `{site_name(site)}`"
                )
                raise ParameterizeBreak(self._state, ParameterizeError(message))
            return

        iterator = iter(arguments)
        first = next(iterator, _EXHAUSTED)
        if first is _EXHAUSTED:
            raise ParameterizeContinue(self._state)

        self._declared = DeclaredParameter(site, first)
        self._arguments = arguments
        self._read_ahead(iterator)

    def declared_parameter(self) -> DeclaredParameter[Any]:
        """Return the declared site with its current argument.

        Raises:
            ParameterizeError: If the parameter has not been declared.
        """
        return self._require_declared(
            "Cannot get declared parameter before it's been declared"
        )

    def current_argument(self, site: Hashable) -> Any:
        """Return the current argument, checking that `site` declared it.

        Raises:
            ParameterizeError: If the parameter has not been declared, or was
                declared at a different site.
        """
        declared = self._require_declared(
            "Cannot get argument before parameter has been declared"
        )
        if not is_same_site(site, declared.site):
            raise ParameterizeError(
                f"Cannot use parameter declared for `{site_name(declared.site)}` "
                f"with `{site_name(site)}`"
            )
        return declared.argument

    def advance(self) -> None:
        """Move to the next argument, starting over after the last one.

        Raises:
            ParameterizeError: If the parameter has not been declared, or its
                arguments are empty when iterated again.
        """
        declared = self._require_declared(
            "Cannot iterate arguments before parameter has been declared"
        )

        if self._iterator is None:
            iterator = iter(self._arguments)
            argument = next(iterator, _EXHAUSTED)
            if argument is _EXHAUSTED:
                raise ParameterizeError(
                    f"Arguments for `{declared.name}` were empty when iterated "
                    "again. Use a re-iterable sequence instead of an iterator."
                )
        else:
            iterator = self._iterator
            argument = self._next_argument

        self._declared = DeclaredParameter(declared.site, argument)
        self._read_ahead(iterator)

    def _read_ahead(self, iterator: Iterator[Any]) -> None:
        self._next_argument = next(iterator, _EXHAUSTED)
        self._iterator = None if self._next_argument is _EXHAUSTED else iterator

    def _require_declared(self, message: str) -> DeclaredParameter[Any]:
        if self._declared is None:
            raise ParameterizeError(message)
        return self._declared

    def __repr__(self) -> str:
        if self._declared is None:
            return "ParameterState(<not declared>)"
        return f"ParameterState({self._declared})"
