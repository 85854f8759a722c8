__version__ = "0.1.0"

import logging

from .state_vector import (
    StateVector,
    TransitionGroup,
    Transition,
    StateSet,
    any_of,
    StateVectorError,
    NullArgumentError,
    InvalidArgumentError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "StateVector",
    "TransitionGroup",
    "Transition",
    "StateSet",
    "any_of",
    "StateVectorError",
    "NullArgumentError",
    "InvalidArgumentError",
)
