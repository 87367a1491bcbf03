"""
Simulation driver.

A `Simulation` owns its grid, time-step configuration and state. It is
created uninitialized, becomes ready after `initialize`, and can then be
advanced any number of times. Independent simulations never share state.

Example usage:
```python
from jax_wave import Simulation, WAVE, sine_wave

sim = Simulation(equation=WAVE, wave_speed=1.0)
sim.initialize(point_count=100, cfl_fraction=0.15, initial_condition=sine_wave)
u = sim.advance(1000)
```
"""

import logging
import math
import numbers
import operator
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

import jax
from jax import Array
import jax.numpy as jnp

from .boundary_conditions import DirichletBC
from .equations import Equation, WAVE
from .errors import ConfigurationError, NotInitializedError
from .grid import Grid
from .integrate import AbstractStepper, RK4, check_rhs, integrate, integrate_with_history

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeStepConfig:
    """
    Fixed time step derived from the grid spacing.

    Attributes:
        cfl_fraction: Courant-Friedrichs-Lewy fraction in (0, 1].
        dt: Time step size, cfl_fraction * dx.
    """

    cfl_fraction: float
    dt: float

    @classmethod
    def from_grid(cls, grid: Grid, cfl_fraction: float) -> "TimeStepConfig":
        if isinstance(cfl_fraction, bool) or not isinstance(cfl_fraction, numbers.Real):
            raise ConfigurationError(f"CFL fraction must be a real number, got {cfl_fraction!r}")
        if not math.isfinite(cfl_fraction) or not 0.0 < cfl_fraction <= 1.0:
            raise ConfigurationError(f"CFL fraction must lie in (0, 1], got {cfl_fraction}")
        return cls(float(cfl_fraction), float(cfl_fraction) * grid.spacing)


@dataclass(frozen=True)
class DisplacementConstraint:
    """Applies a boundary condition to the displacement field of a state."""

    equation: Equation
    bc: DirichletBC

    def __call__(self, y: Any) -> Any:
        u = self.bc(self.equation.displacement(y))
        return self.equation.with_displacement(y, u)


def _as_count(value, name: str, minimum: int = 0) -> int:
    """Convert an integer-like value (Python or 0-d array) to an int."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        count = operator.index(value)
    except TypeError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None
    if count < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {count}")
    return count


class Simulation:
    """
    Explicit time integration of a 1D PDE on [0, 2π] with Dirichlet ends.

    Args:
        equation: PDE to solve (`WAVE` or `DIFFUSION`).
        wave_speed: Wave speed c; the right-hand side is scaled by c².
        method: Time-stepping scheme (default: RK4).
        bc: Boundary values imposed on the displacement after every step.
    """

    def __init__(
        self,
        equation: Equation = WAVE,
        wave_speed: float = 1.0,
        method: Optional[AbstractStepper] = None,
        bc: DirichletBC = DirichletBC(),
    ):
        if not math.isfinite(wave_speed):
            raise ConfigurationError(f"Wave speed must be finite, got {wave_speed}")

        self.equation = equation
        self.wave_speed = float(wave_speed)
        self.method = method if method is not None else RK4()
        self.bc = bc
        self._constraint = DisplacementConstraint(equation, bc)

        self._grid: Optional[Grid] = None
        self._config: Optional[TimeStepConfig] = None
        self._state: Any = None
        self._time = 0.0

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise NotInitializedError(
                "Simulation has not been initialized; call initialize() first"
            )

    @property
    def _args(self) -> tuple:
        return (self.wave_speed**2, self._grid.spacing)

    def initialize(
        self,
        point_count: int,
        cfl_fraction: float,
        initial_condition: Callable[[Array], Array],
        initial_velocity: Optional[Callable[[Array], Array]] = None,
    ) -> None:
        """
        Build the grid and time step and sample the initial state.

        The initial condition is evaluated at the grid coordinates
        x[i] = i * dx, either on the whole array at once or point by point
        for scalar functions. The boundary condition is applied once so the
        starting state already satisfies it. Calling `initialize` again
        restarts the simulation from t = 0.

        Args:
            point_count: Number of grid points N (at least 4).
            cfl_fraction: Time step as a fraction of dx, in (0, 1].
            initial_condition: Displacement u0(x).
            initial_velocity: Velocity v0(x) for the wave equation.
                Defaults to zero; ignored by the diffusion equation.

        Raises:
            ConfigurationError: on invalid parameters. The simulation is
                left as it was.
        """
        grid = Grid.uniform(point_count)
        config = TimeStepConfig.from_grid(grid, cfl_fraction)
        x = grid.x

        u0 = self._sample(initial_condition, x, "initial_condition")
        v0 = None
        if initial_velocity is not None:
            v0 = self._sample(initial_velocity, x, "initial_velocity")

        state = self._constraint(self.equation.make_state(u0, v0))
        check_rhs(self.equation.rhs, 0.0, state, (self.wave_speed**2, grid.spacing))

        self._grid = grid
        self._config = config
        self._state = state
        self._time = 0.0

        logger.info(
            "Initialized %s simulation: N=%d, dx=%.6g, dt=%.6g (CFL %.3g)",
            self.equation.name, grid.point_count, grid.spacing, config.dt, config.cfl_fraction
        )

    @staticmethod
    def _sample(fn: Callable, x: Array, name: str) -> Array:
        """
        Evaluate `fn` on the grid coordinates.

        `fn` is first called on the whole coordinate array. Scalar functions
        (e.g. `math.sin`) fail or return a single value there, and are then
        evaluated once per grid point.
        """
        dtype = jnp.result_type(float)
        try:
            values = jnp.asarray(fn(x), dtype=dtype)
        except (TypeError, ValueError):
            values = None
        if values is not None and values.shape == x.shape:
            return values

        try:
            values = jnp.array([fn(xi) for xi in x.tolist()], dtype=dtype)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{name} could not be evaluated on the grid: {e}") from e
        if values.shape != x.shape:
            raise ConfigurationError(
                f"{name} must return one value per grid point: "
                f"expected shape {x.shape}, got {values.shape}"
            )
        return values

    def advance(self, steps: int) -> Array:
        """
        Take `steps` time steps, re-imposing the boundary values after each.

        Args:
            steps: Number of steps (non-negative). Zero is a no-op.

        Returns:
            A copy of the displacement field after the last step.
        """
        self._require_initialized()
        steps = _as_count(steps, "Number of steps")

        if steps > 0:
            t, self._state = integrate(
                self.equation.rhs,
                self._time,
                self._state,
                self.method,
                self._config.dt,
                steps,
                self._args,
                self._constraint,
            )
            self._time = float(t)
            logger.debug("Advanced %d steps to t=%.6g", steps, self._time)

        return jnp.array(self.equation.displacement(self._state), copy=True)

    def trajectory(self, steps: int, save_every: int = 1) -> Tuple[Array, Array]:
        """
        Advance `steps` time steps while recording the displacement.

        Args:
            steps: Number of steps (non-negative).
            save_every: Record every N steps; the final state is always recorded.

        Returns:
            t: Times of the recorded states, starting with the current time.
            u: Displacement at those times, shape (len(t), N).
        """
        self._require_initialized()
        steps = _as_count(steps, "Number of steps")
        save_every = _as_count(save_every, "save_every", minimum=1)

        t, y = integrate_with_history(
            self.equation.rhs,
            self._time,
            self._state,
            self.method,
            self._config.dt,
            steps,
            save_every=save_every,
            args=self._args,
            constraint=self._constraint,
        )

        self._state = jax.tree_util.tree_map(lambda leaf: leaf[-1], y)
        self._time = float(t[-1])
        return t, self.equation.displacement(y)

    def current_time_step(self) -> float:
        """Time step size dt."""
        self._require_initialized()
        return self._config.dt

    @property
    def time(self) -> float:
        """Simulated time, the number of steps taken times dt."""
        self._require_initialized()
        return self._time

    @property
    def grid(self) -> Grid:
        self._require_initialized()
        return self._grid

    @property
    def time_step_config(self) -> TimeStepConfig:
        self._require_initialized()
        return self._config

    @property
    def state(self) -> Any:
        """Current state: a field, or a `WaveState` for the wave equation."""
        self._require_initialized()
        return self._state
