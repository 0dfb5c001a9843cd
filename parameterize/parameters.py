"""Parameters and their argument sequences.

A `Parameter` is an immutable wrapper around the arguments one parameter can
take. Arguments may be any re-iterable object: lists, tuples, ranges, strings,
or objects whose ``__iter__`` returns a new iterator on every call. The engine
calls ``iter()`` on them when the parameter is first declared and again each
time it wraps around to its first argument, so a one-shot generator only
supports a single pass.

Builders:

- `parameter(arguments)` - wrap an existing iterable.
- `parameter_of(*arguments)` - wrap the listed values.
- `lazy_parameter(factory)` - compute the arguments the first time they are
  iterated, then reuse them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Iterable, Iterator, TypeVar

__all__ = [
    "Parameter",
    "DeclaredParameter",
    "LazyArguments",
    "parameter",
    "parameter_of",
    "lazy_parameter",
    "is_same_site",
    "site_name",
]

T = TypeVar("T")


def is_same_site(site: Any, other: Any) -> bool:
    """Return True if two binding sites identify the same declaration."""
    return site is other or site == other


def site_name(site: Any) -> str:
    """Human-readable name of a binding site."""
    name = getattr(site, "__name__", None)
    if isinstance(name, str):
        return name
    return str(site)


@dataclass(frozen=True)
class Parameter(Generic[T]):
    """Arguments that can be declared within a parameterize scope."""

    arguments: Iterable[T]


@dataclass(frozen=True, eq=False)
class DeclaredParameter(Generic[T]):
    """A parameter declared at `site`, with the argument selected for it.

    Equality is by identity. The same instance is returned for every
    declaration of a parameter while its argument stays unchanged, so instances
    can be used to track parameters across iterations.
    """

    site: Hashable
    argument: T

    @property
    def name(self) -> str:
        return site_name(self.site)

    def __str__(self) -> str:
        return f"{self.name} = {self.argument!r}"


class LazyArguments(Generic[T]):
    """Iterable that builds its arguments on first iteration and caches them."""

    def __init__(self, factory: Callable[[], Iterable[T]]) -> None:
        self._factory = factory
        self._arguments: Iterable[T] | None = None

    def __iter__(self) -> Iterator[T]:
        if self._arguments is None:
            self._arguments = self._factory()
        return iter(self._arguments)

    def __repr__(self) -> str:
        state = "pending" if self._arguments is None else repr(self._arguments)
        return f"LazyArguments({state})"


def parameter(arguments: Iterable[T]) -> Parameter[T]:
    """Create a parameter from an iterable of arguments.

    Example:
        >>> parameter(range(3)).arguments
        range(0, 3)
    """
    return Parameter(arguments)


def parameter_of(*arguments: T) -> Parameter[T]:
    """Create a parameter from the listed arguments."""
    return Parameter(arguments)


def lazy_parameter(factory: Callable[[], Iterable[T]]) -> Parameter[T]:
    """Create a parameter whose arguments are computed only when first needed.

    The factory runs at most once per declared parameter. It must not have
    side effects the parameterized block depends on, since later iterations
    reuse its result instead of calling it again.
    """
    return Parameter(LazyArguments(factory))
