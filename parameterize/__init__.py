"""parameterize: run a block of code for every combination of its parameters.

Parameters are declared inside the block, so the loop nest is discovered at
runtime instead of being written out as nested ``for`` loops.

Primary API:
    parameterize() - Run a block for each combination of arguments
    ParameterizeScope - Declares parameters inside the block
    ParameterizeConfiguration - Decorator, on_failure and on_complete hooks
    PairwiseParameters - Pair arguments by index instead of by product
    ParameterizeFailedError - Raised when iterations failed

Example:
    from parameterize import parameterize

    def block(scope):
        a = scope.parameter("a", range(1, 4))
        b = scope.parameter_of("b", 0, 1, -1)
        assert a + b >= a

    parameterize(block)
"""

from __future__ import annotations

from parameterize import logging
from parameterize._version import __version__
from parameterize.config import (
    DecoratorScope,
    OnCompleteScope,
    OnFailureScope,
    ParameterizeConfiguration,
)
from parameterize.exceptions import (
    ParameterizeBreak,
    ParameterizeContinue,
    ParameterizeControlFlow,
    ParameterizeError,
)
from parameterize.failure import ParameterizeFailedError, ParameterizeFailure
from parameterize.pairwise import PairwiseParameters
from parameterize.parameters import (
    DeclaredParameter,
    Parameter,
    lazy_parameter,
    parameter,
    parameter_of,
)
from parameterize.runner import parameterize
from parameterize.scope import ParameterizeScope

__all__ = [
    # Version
    "__version__",
    # Running
    "parameterize",
    "ParameterizeScope",
    "PairwiseParameters",
    # Parameters
    "Parameter",
    "DeclaredParameter",
    "parameter",
    "parameter_of",
    "lazy_parameter",
    # Configuration
    "ParameterizeConfiguration",
    "DecoratorScope",
    "OnFailureScope",
    "OnCompleteScope",
    # Failures
    "ParameterizeFailure",
    "ParameterizeFailedError",
    "ParameterizeError",
    "ParameterizeControlFlow",
    "ParameterizeContinue",
    "ParameterizeBreak",
    # Utilities
    "logging",
]
