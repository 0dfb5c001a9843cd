"""Tests for the on_failure configuration hook."""

from __future__ import annotations

import pytest

from parameterize import ParameterizeFailedError, parameterize
from parameterize.config import DEFAULT_MAX_RECORDED_FAILURES


def _failing_block(fail_at):
    def block(scope):
        value = scope.parameter("value", range(100))
        if value in fail_at:
            raise ValueError(f"failed at {value}")

    return block


def test_on_failure_receives_failure_and_counts():
    """on_failure sees the exception, running counts and declared parameters."""
    received = []

    def on_failure(scope, failure):
        received.append(
            (scope.iteration_count, scope.failure_count, str(failure), scope.parameters)
        )

    parameterize(
        _failing_block({4, 9}),
        on_failure=on_failure,
        on_complete=lambda scope: None,
    )

    assert [r[:3] for r in received] == [(5, 1, "failed at 4"), (10, 2, "failed at 9")]
    assert [[str(p) for p in r[3]] for r in received] == [["value = 4"], ["value = 9"]]


def test_break_early_stops_iterating():
    """Setting break_early ends the run and marks it completed early."""
    completions = []

    def on_failure(scope, failure):
        scope.break_early = True

    parameterize(
        _failing_block({49}),
        on_failure=on_failure,
        on_complete=completions.append,
    )

    (complete,) = completions
    assert complete.iteration_count == 50
    assert complete.completed_early is True


def test_break_early_on_last_combination_is_not_early():
    """Breaking on the last combination leaves completed_early False."""
    completions = []

    def on_failure(scope, failure):
        scope.break_early = True

    parameterize(
        _failing_block({99}),
        on_failure=on_failure,
        on_complete=completions.append,
    )

    (complete,) = completions
    assert complete.iteration_count == 100
    assert complete.completed_early is False


def test_record_failure_controls_recorded_failures():
    """Only failures with record_failure set reach recorded_failures."""
    completions = []

    def on_failure(scope, failure):
        scope.record_failure = scope.failure_count % 2 == 0

    parameterize(
        _failing_block({1, 2, 3, 4}),
        on_failure=on_failure,
        on_complete=completions.append,
    )

    (complete,) = completions
    assert complete.failure_count == 4
    assert [str(f.failure) for f in complete.recorded_failures] == [
        "failed at 2",
        "failed at 4",
    ]


def test_default_records_first_failures_only():
    """The default handler records the first ten failures."""
    with pytest.raises(ParameterizeFailedError) as exc_info:
        parameterize(_failing_block(set(range(0, 100, 5))))

    error = exc_info.value
    assert error.failure_count == 20
    assert len(error.recorded_failures) == DEFAULT_MAX_RECORDED_FAILURES
    assert str(error).endswith("\n\t...")


def test_on_failure_raising_propagates_immediately():
    """An exception from on_failure ends the run unchanged."""
    completions = []

    def on_failure(scope, failure):
        raise failure

    with pytest.raises(ValueError, match="failed at 3"):
        parameterize(
            _failing_block({3, 5}),
            on_failure=on_failure,
            on_complete=completions.append,
        )

    assert completions == []
