"""Explicit time-stepping schemes."""

from dataclasses import dataclass
from typing import Any, Callable

import jax

from .base import AbstractStepper


def _axpy(a, x, y):
    """y + a * x, leaf by leaf."""
    return jax.tree_util.tree_map(lambda x_, y_: y_ + a * x_, x, y)


@dataclass(frozen=True)
class ForwardEuler(AbstractStepper):
    """
    Forward Euler method.

    Discretisation:
        $$ \\frac{\\partial y}{\\partial t} \\rightarrow
        \\frac{(y_{n+1} - y_n)}{h} = f(t_n, y_n) $$
    """

    def step(
        self,
        fun: Callable,
        t: Any,
        y: Any,
        h: Any,
        args: tuple = ()
    ) -> Any:
        """
        Perform a single Forward Euler step.

        Computes $$ y_{n+1} = y_n + h f(t_n, y_n, *args). $$
        """
        return _axpy(h, fun(t, y, *args), y)


@dataclass(frozen=True)
class RK4(AbstractStepper):
    """
    Fourth (4th) order Runge-Kutta method.

    Works on any pytree state. For coupled systems, e.g. a (u, v) pair,
    every stage builds the full intermediate state before the next
    right-hand side evaluation, so all components share the same four
    stages.
    """

    def step(
        self,
        fun: Callable,
        t: Any,
        y: Any,
        h: Any,
        args: tuple = ()
    ) -> Any:
        """
        Perform a single RK4 step.

        Args:
            fun: Right-hand side of system dy/dt = f(t, y, *args).
            t: Current time.
            y: Current solution.
            h: Time step size.
            args: Additional arguments to pass to fun.

        Returns:
            Solution at t + h.
        """
        k1 = fun(t, y, *args)
        k2 = fun(t + 0.5 * h, _axpy(0.5 * h, k1, y), *args)
        k3 = fun(t + 0.5 * h, _axpy(0.5 * h, k2, y), *args)
        k4 = fun(t + h, _axpy(h, k3, y), *args)
        return jax.tree_util.tree_map(
            lambda y_, a, b, c, d: y_ + (h / 6.0) * (a + 2.0 * b + 2.0 * c + d),
            y, k1, k2, k3, k4,
        )
