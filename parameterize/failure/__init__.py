"""Failure records and the aggregate error raised when a run has failures.

- `parameterize.failure.record` - `ParameterizeFailure`, one failing iteration
  and the parameters it was declared with.
- `parameterize.failure.error` - `ParameterizeFailedError`, the summary raised
  by the default `on_complete` handler.
"""

from parameterize.failure.error import ParameterizeFailedError
from parameterize.failure.record import ParameterizeFailure

__all__ = ["ParameterizeFailure", "ParameterizeFailedError"]
