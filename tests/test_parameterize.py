"""Tests for the parameterize loop: enumeration order and iteration counts."""

from __future__ import annotations

import itertools

import pytest

from parameterize import (
    ParameterizeConfiguration,
    ParameterizeFailedError,
    parameter,
    parameterize,
)


def _collect(block, **kwargs) -> list:
    seen: list = []
    parameterize(lambda scope: seen.append(block(scope)), **kwargs)
    return seen


def test_block_without_parameters_runs_once():
    calls = []
    parameterize(lambda scope: calls.append(scope))
    assert len(calls) == 1


def test_two_parameters_first_is_slowest():
    """The last declared parameter iterates fastest."""
    seen = _collect(
        lambda scope: (
            scope.parameter_of("prime", 2, 3, 5, 7),
            scope.parameter("letter", ["x", "y"]),
        )
    )

    assert seen == [
        (2, "x"), (2, "y"),
        (3, "x"), (3, "y"),
        (5, "x"), (5, "y"),
        (7, "x"), (7, "y"),
    ]


@pytest.mark.parametrize("sizes", [(1,), (3,), (2, 3), (3, 1, 2), (2, 2, 2, 2)])
def test_iteration_count_is_product_of_sizes(sizes):
    """Independent parameters produce every combination."""
    def block(scope):
        return tuple(
            scope.parameter(f"p{index}", range(size))
            for index, size in enumerate(sizes)
        )

    seen = _collect(block)

    assert seen == list(itertools.product(*(range(size) for size in sizes)))


def test_dependent_parameters_match_nested_loops():
    """Dependent arguments match the equivalent nested for loops."""
    def block(scope):
        red = scope.parameter("red", range(3, 6))
        green = scope.parameter("green", range(1, red - 1))
        blue = scope.parameter("blue", range(green))
        return red, green, blue

    expected = [
        (red, green, blue)
        for red in range(3, 6)
        for green in range(1, red - 1)
        for blue in range(green)
    ]
    assert _collect(block) == expected


def test_conditional_parameter():
    """Parameters declared only for some arguments are supported."""
    def block(scope):
        use_extra = scope.parameter_of("use_extra", False, True)
        extra = scope.parameter_of("extra", "a", "b") if use_extra else None
        last = scope.parameter_of("last", 1, 2)
        return use_extra, extra, last

    assert _collect(block) == [
        (False, None, 1),
        (False, None, 2),
        (True, "a", 1),
        (True, "a", 2),
        (True, "b", 1),
        (True, "b", 2),
    ]


def test_lazy_parameter_factory_runs_once_per_declaration():
    """A lazy factory runs again only when its parameter is declared anew."""
    factory_calls = []

    def factory():
        factory_calls.append(1)
        return [1, 2, 3]

    def block(scope):
        return scope.lazy_parameter("value", factory), scope.parameter_of("b", 0, 1)

    seen = _collect(block)

    assert len(seen) == 6
    assert len(factory_calls) == 1


def test_declare_with_parameter_object():
    def block(scope):
        declared = scope.declare(parameter("abc"), "letter")
        return declared.name, declared.argument

    assert _collect(block) == [("letter", "a"), ("letter", "b"), ("letter", "c")]


def test_redeclaring_same_parameter_in_one_iteration_declares_new_position():
    """The same name declared twice in one iteration is two parameters."""
    def block(scope):
        return scope.parameter("a", [1, 2]), scope.parameter("a", [3, 4])

    assert _collect(block) == [(1, 3), (1, 4), (2, 3), (2, 4)]


def test_arguments_with_side_effects_are_iterated_once_per_pass():
    """Arguments are read lazily and once per pass through them."""
    iterations = []

    class Arguments:
        def __iter__(self):
            iterations.append(1)
            return iter(range(3))

    arguments = Arguments()
    _collect(lambda scope: (scope.parameter("a", arguments), scope.parameter("b", "xy")))

    assert len(iterations) == 1


def test_scope_repr_lists_declared_parameters():
    reprs = []

    def block(scope):
        scope.parameter("a", [1])
        scope.parameter("b", ["x"])
        reprs.append(repr(scope))

    parameterize(block)
    assert reprs == ["ParameterizeScope(a = 1, b = 'x')"]


def test_failures_are_collected_into_error():
    """Failures don't stop the run and are summarized at the end."""
    def block(scope):
        a = scope.parameter("a", range(11))
        if a in (3, 7):
            raise ValueError(f"bad {a}")

    with pytest.raises(ParameterizeFailedError) as exc_info:
        parameterize(block)

    message = str(exc_info.value)
    assert message.startswith("Failed 2/11 cases")
    assert "ValueError: bad 3\n\t\ta = 3" in message
    assert "ValueError: bad 7\n\t\ta = 7" in message


def test_configuration_is_copied_with_overrides():
    completions = []
    base = ParameterizeConfiguration.default()

    parameterize(
        lambda scope: scope.parameter("a", [1, 2]),
        base,
        on_complete=completions.append,
    )

    assert len(completions) == 1
    assert completions[0].iteration_count == 2
    assert base == ParameterizeConfiguration.default()


def test_nested_parameterize_runs_independently():
    """An inner parameterize call has its own combinations."""
    seen = []

    def outer(scope):
        a = scope.parameter("a", [1, 2])

        def inner(inner_scope):
            b = inner_scope.parameter("b", "xy")
            seen.append((a, b))

        parameterize(inner)

    parameterize(outer)
    assert seen == [(1, "x"), (1, "y"), (2, "x"), (2, "y")]


def test_keyboard_interrupt_propagates():
    """Non-Exception errors stop the run without being handled."""
    calls = []

    def block(scope):
        calls.append(scope.parameter("a", [1, 2]))
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        parameterize(block)
    assert calls == [1]
