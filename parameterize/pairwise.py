"""Pairwise parameters: iterate arguments side by side instead of as a product.

Parameters declared through `PairwiseParameters` are zipped: the first one
iterates its arguments as usual, and each one after it takes the argument at
the same index as the parameter declared before it.

    def block(scope):
        pairwise = PairwiseParameters(scope)
        letter = pairwise.parameter("letter", "abc")
        number = pairwise.parameter("number", [1, 2, 3])
        ...  # (a, 1), (b, 2), (c, 3)

    parameterize(block)

All pairwise parameters must have the same number of arguments.
"""

from __future__ import annotations

from typing import Any, Generic, Hashable, Iterable, Optional, TypeVar

from parameterize.parameters import Parameter, is_same_site, site_name
from parameterize.scope import ParameterizeScope

__all__ = ["PairwiseParameters"]

T = TypeVar("T")

_EXHAUSTED = object()


class _PairwiseArgumentIterator(Generic[T]):
    """Iterates one pairwise parameter's arguments, linked to the next parameter's.

    A parameter's argument iterator is kept by the run state between
    iterations, which makes it a reliable place to keep the iterator of the
    parameter declared after it.
    """

    def __init__(self, arguments: Iterable[T], site: Hashable) -> None:
        self.site = site
        self._iterator = iter(arguments)
        self._next: Any = next(self._iterator, _EXHAUSTED)
        self._is_first = True
        self.next_iterator: Optional[_PairwiseArgumentIterator[Any]] = None

    def has_next(self) -> bool:
        return self._next is not _EXHAUSTED

    def __iter__(self) -> "_PairwiseArgumentIterator[T]":
        return self

    def __next__(self) -> "_PairwiseArgument[T]":
        if self._next is _EXHAUSTED:
            raise StopIteration
        argument = self._next
        self._next = next(self._iterator, _EXHAUSTED)
        is_first, self._is_first = self._is_first, False
        return _PairwiseArgument(argument, is_first, not self.has_next(), self)


class _PairwiseArgument(Generic[T]):
    def __init__(
        self,
        argument: T,
        is_first: bool,
        is_last: bool,
        iterator: _PairwiseArgumentIterator[T],
    ) -> None:
        self.argument = argument
        self.is_first = is_first
        self.is_last = is_last
        self.iterator = iterator
        # Argument paired with this one, kept for re-executions of the block
        self.next_argument: Optional[_PairwiseArgument[Any]] = None

    def __repr__(self) -> str:
        return repr(self.argument)


class _PairwiseArguments(Generic[T]):
    def __init__(self, arguments: Iterable[T], site: Hashable) -> None:
        self._arguments = arguments
        self._site = site

    def __iter__(self) -> _PairwiseArgumentIterator[T]:
        return _PairwiseArgumentIterator(self._arguments, self._site)


class PairwiseParameters:
    """Declares parameters whose arguments are paired by index.

    Create a new instance inside the parameterized block on every iteration.

    Args:
        scope: The scope of the current iteration.
    """

    def __init__(self, scope: ParameterizeScope) -> None:
        self._scope = scope
        self._previous: Optional[_PairwiseArgument[Any]] = None

    def parameter(self, name: Hashable, arguments: Iterable[T]) -> T:
        """Declare a pairwise parameter and return its current argument.

        Raises:
            ValueError: If the arguments don't have the same length as the
                previous pairwise parameter's, or the parameters are declared
                differently than in previous iterations.
        """
        previous = self._previous

        if previous is None:
            pairwise_arguments: Iterable[Any] = _PairwiseArguments(arguments, name)
        elif previous.next_argument is not None:
            # The block is running again with the same previous argument
            paired = previous.next_argument
            self._check_site(name, paired.iterator.site)
            pairwise_arguments = [paired]
        else:
            pairwise_arguments = [self._pair(previous, name, arguments)]

        declared = self._scope.declare(Parameter(pairwise_arguments), name)
        self._previous = declared.argument
        return declared.argument.argument

    @staticmethod
    def _check_site(name: Hashable, expected: Hashable) -> None:
        if not is_same_site(name, expected):
            raise ValueError(
                f"Expected to be declaring '{site_name(expected)}', "
                f"but declared '{site_name(name)}'."
            )

    def _pair(
        self,
        previous: _PairwiseArgument[Any],
        name: Hashable,
        arguments: Iterable[T],
    ) -> _PairwiseArgument[T]:
        previous_name = site_name(previous.iterator.site)
        iterator = previous.iterator.next_iterator
        if iterator is None:
            if not previous.is_first:
                raise ValueError(
                    f"Pairwise parameter '{site_name(name)}' was declared "
                    "when it previously wasn't."
                )
            iterator = _PairwiseArgumentIterator(arguments, name)
            previous.iterator.next_iterator = iterator
        else:
            self._check_site(name, iterator.site)

        if not iterator.has_next():
            raise ValueError(
                f"Pairwise parameter '{site_name(name)}' has fewer arguments "
                f"than '{previous_name}'."
            )
        paired = next(iterator)
        if previous.is_last and iterator.has_next():
            raise ValueError(
                f"Pairwise parameter '{site_name(name)}' has more arguments "
                f"than '{previous_name}'."
            )
        previous.next_argument = paired
        return paired
