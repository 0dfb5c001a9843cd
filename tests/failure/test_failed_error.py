"""Tests for ParameterizeFailedError messages and ParameterizeFailure records."""

from __future__ import annotations

import pickle

import pytest

from parameterize import DeclaredParameter, ParameterizeFailedError, ParameterizeFailure


def _failure(error: BaseException, **arguments) -> ParameterizeFailure:
    return ParameterizeFailure(
        error,
        tuple(DeclaredParameter(name, value) for name, value in arguments.items()),
    )


def test_is_assertion_error():
    """Test frameworks treat the aggregate as an assertion failure."""
    assert issubclass(ParameterizeFailedError, AssertionError)


def test_message_summary_only():
    error = ParameterizeFailedError([], success_count=5, failure_count=0)
    assert str(error) == "Failed 0/5 cases"


def test_message_completed_early_has_plus():
    """Total gets a trailing plus when combinations were left untried."""
    error = ParameterizeFailedError([], success_count=4, failure_count=1, completed_early=True)
    assert str(error).startswith("Failed 1/5+ cases")


def test_message_lists_recorded_failures():
    """Each recorded failure shows its type, message and declared parameters."""
    recorded = [
        _failure(ValueError("first"), a=1, b="x"),
        _failure(KeyError("missing"), a=2, b="y"),
    ]
    error = ParameterizeFailedError(recorded, success_count=9, failure_count=2)

    assert str(error) == (
        "Failed 2/11 cases"
        "\n\tValueError: first"
        "\n\t\ta = 1"
        "\n\t\tb = 'x'"
        "\n\tKeyError: 'missing'"
        "\n\t\ta = 2"
        "\n\t\tb = 'y'"
    )


def test_message_truncates_multiline_and_blank_messages():
    """Only the first message line is kept; unrecorded failures end with '...'."""
    recorded = [
        _failure(AssertionError("line one\nline two"), a=1),
        _failure(RuntimeError("   "), a=2),
    ]
    error = ParameterizeFailedError(recorded, success_count=0, failure_count=3)

    lines = str(error).split("\n")
    assert lines[1] == "\tAssertionError: line one ..."
    assert lines[3] == "\tRuntimeError: <no message>"
    assert lines[-1] == "\t..."


def test_cause_is_first_recorded_failure():
    first = ValueError("first")
    recorded = [_failure(first), _failure(ValueError("second"))]
    error = ParameterizeFailedError(recorded, success_count=0, failure_count=2)

    assert error.__cause__ is first
    assert error.failures == [first, recorded[1].failure]


def test_no_cause_without_recorded_failures():
    error = ParameterizeFailedError([], success_count=1, failure_count=1)
    assert error.__cause__ is None


def test_pickle_keeps_counts_and_failures():
    """The error survives pickling, e.g. when reported from a worker process."""
    recorded = [_failure(ValueError("first"), a=1)]
    error = ParameterizeFailedError(
        recorded, success_count=3, failure_count=2, completed_early=True
    )

    restored = pickle.loads(pickle.dumps(error))

    assert isinstance(restored, ParameterizeFailedError)
    assert str(restored) == str(error)
    assert restored.success_count == 3
    assert restored.failure_count == 2
    assert restored.completed_early is True
    assert isinstance(restored.__cause__, ValueError)
    assert restored.recorded_failures[0].arguments == (1,)


@pytest.mark.parametrize(
    ("arguments", "expected"),
    [
        ({}, "Failed with no arguments"),
        ({"a": 1}, "Failed with argument:\n\t\ta = 1"),
        ({"a": 1, "b": "x"}, "Failed with arguments:\n\t\ta = 1\n\t\tb = 'x'"),
    ],
)
def test_failure_describe(arguments, expected):
    assert _failure(ValueError(), **arguments).describe() == expected


def test_failure_arguments_and_immutability():
    """Failure records expose their arguments and cannot be modified."""
    failure = _failure(ValueError(), a=1, b=2)

    assert failure.arguments == (1, 2)
    with pytest.raises(AttributeError):
        failure.failure = ValueError()  # type: ignore[misc]
