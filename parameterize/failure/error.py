"""Aggregate error summarizing the failures of a parameterize run."""

from __future__ import annotations

from typing import List, Sequence

from parameterize.failure.record import ParameterizeFailure

__all__ = ["ParameterizeFailedError"]


def _first_line(failure: BaseException) -> str:
    message = str(failure).strip()
    if not message:
        return "<no message>"
    lines = message.splitlines()
    if len(lines) == 1:
        return message
    return f"{lines[0]} ..."


class ParameterizeFailedError(AssertionError):
    """Raised when a parameterize run completes with failures.

    The message summarizes the number of failures and total iterations, e.g.
    ``"Failed 2/11 cases"``. A plus after the total means the run completed
    early, with combinations left untried. Each recorded failure follows on
    its own line with its type and the first line of its message, then one
    line per parameter it was declared with. A trailing ``"..."`` line means
    not every failure was recorded.

    The first recorded failure is attached as ``__cause__`` so its traceback is
    shown along with the summary.

    Normally built from `OnCompleteScope.failed_error`.

    Attributes:
        recorded_failures: Failures recorded by `on_failure`.
        success_count: Number of iterations that passed.
        failure_count: Number of iterations that failed, recorded or not.
        completed_early: True if the run stopped with combinations left.
    """

    def __init__(
        self,
        recorded_failures: Sequence[ParameterizeFailure],
        success_count: int,
        failure_count: int,
        completed_early: bool = False,
    ) -> None:
        self.recorded_failures: List[ParameterizeFailure] = list(recorded_failures)
        self.success_count = success_count
        self.failure_count = failure_count
        self.completed_early = completed_early
        super().__init__(self._build_message())

        if self.recorded_failures:
            self.__cause__ = self.recorded_failures[0].failure

    def __reduce__(self):
        return (
            type(self),
            (
                self.recorded_failures,
                self.success_count,
                self.failure_count,
                self.completed_early,
            ),
        )

    @property
    def failures(self) -> List[BaseException]:
        """The recorded exceptions, without their arguments."""
        return [recorded.failure for recorded in self.recorded_failures]

    def _build_message(self) -> str:
        total = self.success_count + self.failure_count
        parts = [f"Failed {self.failure_count}/{total}"]
        if self.completed_early:
            parts.append("+")
        parts.append(" cases")

        for recorded in self.recorded_failures:
            failure = recorded.failure
            parts.append(f"\n\t{type(failure).__name__}: {_first_line(failure)}")
            for parameter in recorded.parameters:
                parts.append(f"\n\t\t{parameter}")

        if len(self.recorded_failures) < self.failure_count:
            parts.append("\n\t...")

        return "".join(parts)
