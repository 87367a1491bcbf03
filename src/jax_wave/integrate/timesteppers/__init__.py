"""Time-stepping schemes for initial value problems."""

from .base import AbstractStepper
from .explicit import ForwardEuler, RK4

__all__ = [
    # Base class
    'AbstractStepper',

    # Explicit methods
    'ForwardEuler',
    'RK4',
]
