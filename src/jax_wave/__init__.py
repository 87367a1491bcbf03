"""
JAX 1D wave solver

Explicit time integration of the 1D wave equation and a diffusion-like
equation on [0, 2π], using second-order finite differences in space and
fixed-step Runge-Kutta schemes in time.

Main components:
- derivatives: Finite difference operators
- equations: Right-hand sides of the supported PDEs
- integrate: Time-stepping schemes and compiled integration loops
- simulation: Driver owning the grid, time step and state
"""

import jax

# Fields are IEEE double precision
jax.config.update("jax_enable_x64", True)

from .errors import (
    WaveSolverError,
    ConfigurationError,
    NotInitializedError,
    ImplementationError,
)
from .grid import Grid, create_uniform_grid
from .derivatives import d__dx_c, d2__dx2_c, d2__dx2_c_dirichlet
from .boundary_conditions import DirichletBC, apply_dirichlet
from .equations import Equation, WaveState, diffusion_rhs_1d, wave_rhs_1d, DIFFUSION, WAVE
from .integrate import integrate, integrate_with_history, RK4, ForwardEuler
from .initial_conditions import sine_wave, gaussian_bump
from .simulation import Simulation, TimeStepConfig
from .logging_config import setup_logging

__all__ = [
    # Errors
    "WaveSolverError",
    "ConfigurationError",
    "NotInitializedError",
    "ImplementationError",

    # Grid and finite differences
    "Grid",
    "create_uniform_grid",
    "d__dx_c",
    "d2__dx2_c",
    "d2__dx2_c_dirichlet",

    # Boundary conditions
    "DirichletBC",
    "apply_dirichlet",

    # Built-in equations
    "Equation",
    "WaveState",
    "diffusion_rhs_1d",
    "wave_rhs_1d",
    "DIFFUSION",
    "WAVE",

    # Time integration
    "integrate",
    "integrate_with_history",
    "RK4",
    "ForwardEuler",

    # Simulation driver
    "Simulation",
    "TimeStepConfig",

    # Initial conditions
    "sine_wave",
    "gaussian_bump",

    # Logging
    "setup_logging",
]
