"""
Explicit fixed-step time integration written in JAX.
"""

# Solver interfaces
from .solve import integrate, integrate_with_history, check_rhs

# Time-stepping schemes
from .timesteppers import ForwardEuler, RK4, AbstractStepper

__all__ = [
    # Solver interfaces
    'integrate',
    'integrate_with_history',
    'check_rhs',

    # Time-stepping methods
    'AbstractStepper',
    'ForwardEuler',
    'RK4',
]
