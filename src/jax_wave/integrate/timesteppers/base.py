"""Abstract base class for time-stepping schemes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class AbstractStepper(ABC):
    """
    Base class for time-stepping schemes.

    Steppers are frozen dataclasses, hence hashable, so they can be passed
    as static arguments to compiled integration loops.
    """

    @abstractmethod
    def step(
        self,
        fun: Callable,
        t: Any,
        y: Any,
        h: Any,
        args: tuple = ()
    ) -> Any:
        """
        Take a single time step.

        Args:
            fun: Right-hand side of system dydt = f(t, y, *args).
            t: Current time.
            y: Current solution. Any JAX pytree (an array, or a tuple of
                arrays for coupled systems).
            h: Time step size.
            args: Additional arguments to pass to fun.

        Returns:
            Solution at t + h, with the same structure as `y`.
        """
        ...
