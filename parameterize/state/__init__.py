"""Iteration state of a parameterize run.

- `parameterize.state.parameter` - `ParameterState`, one declared parameter.
- `parameterize.state.run` - `ParameterizeState`, all parameters of a run and
  the combination advance.
"""

from parameterize.state.parameter import ParameterState
from parameterize.state.run import ParameterizeState

__all__ = ["ParameterState", "ParameterizeState"]
