import logging
import time
from functools import partial
from typing import Any, Callable, Optional, Tuple

import jax
from jax import Array
import jax.numpy as jnp

from ..errors import ConfigurationError, ImplementationError
from .timesteppers import AbstractStepper

logger = logging.getLogger(__name__)


def check_rhs(fun: Callable, t: float, y: Any, args: tuple = ()) -> None:
    """
    Check once that `fun(t, y, *args)` returns a state shaped like `y`.

    The right-hand side is evaluated abstractly with `jax.eval_shape`, so no
    floating point work is done.

    Raises:
        ImplementationError: if the tree structure, a leaf shape or a leaf
            dtype of the output differs from the input state.
    """
    out = jax.eval_shape(lambda t_, y_: fun(t_, y_, *args), t, y)
    expected = jax.eval_shape(lambda y_: y_, y)

    out_tree = jax.tree_util.tree_structure(out)
    expected_tree = jax.tree_util.tree_structure(expected)
    if out_tree != expected_tree:
        raise ImplementationError(
            f"Right-hand side {getattr(fun, '__name__', fun)!r} returned structure "
            f"{out_tree}, expected {expected_tree}"
        )

    for got, want in zip(jax.tree_util.tree_leaves(out), jax.tree_util.tree_leaves(expected)):
        if got.shape != want.shape or got.dtype != want.dtype:
            raise ImplementationError(
                f"Right-hand side {getattr(fun, '__name__', fun)!r} returned "
                f"{got.dtype}{list(got.shape)}, expected {want.dtype}{list(want.shape)}"
            )


@partial(jax.jit, static_argnames=['fun', 'method', 'constraint'])
def integrate(
    fun: Callable,
    t0: float,
    y0: Any,
    method: AbstractStepper,
    step_size: float,
    n_steps: int,
    args: tuple = (),
    constraint: Optional[Callable] = None,
) -> Tuple[Array, Any]:
    """
    Take `n_steps` fixed steps of size `step_size` of dy/dt = fun(t, y, *args).

    Args:
        fun: Right-hand side of system dy/dt = fun(t, y, *args)
        t0: Initial time
        y0: Initial condition (array or pytree of arrays)
        method: Time-stepping method instance (e.g., RK4())
        step_size: Time step size
        n_steps: Number of steps
        args: Additional arguments to pass to fun
        constraint: Optional map y -> y applied after every step, e.g. to
            re-impose boundary values

    Returns:
        t_final: Final time, t0 + n_steps * step_size
        y_final: Solution at t_final

    Example usage:
    ```python
    import jax.numpy as jnp
    from jax_wave.integrate import integrate, RK4

    # Define ODE: dy/dt = -k*y
    def fun(t, y, k):
        return -k * y

    y0 = jnp.array([1.0])
    t, y = integrate(fun, 0.0, y0, RK4(), step_size=0.01, n_steps=200, args=(0.5,))
    ```
    """
    t0 = jnp.asarray(t0, dtype=jnp.result_type(float))

    def body_fn(i, carry):
        t, y = carry
        y_next = method.step(fun, t, y, step_size, args)
        if constraint is not None:
            y_next = constraint(y_next)
        # t = t0 + i * h, not a running sum
        t_next = t0 + (i + 1) * step_size
        return (t_next, y_next)

    t_final, y_final = jax.lax.fori_loop(0, n_steps, body_fn, (t0, y0))

    return t_final, y_final


def integrate_with_history(
    fun: Callable,
    t0: float,
    y0: Any,
    method: AbstractStepper,
    step_size: float,
    n_steps: int,
    save_every: int = 1,
    args: tuple = (),
    constraint: Optional[Callable] = None,
    verbose: bool = False,
) -> Tuple[Array, Any]:
    """
    Integrate like `integrate`, additionally returning intermediate states.

    The integration is done in chunks of `save_every` steps by calling the
    compiled `integrate`, so the history itself is not traceable.

    Args:
        fun: Right-hand side function with signature (t, y, *args) -> dydt
        t0: Initial time
        y0: Initial condition
        method: Time-stepping method instance
        step_size: Time step size
        n_steps: Total number of steps
        save_every: Save the solution every N steps. The final state is
            always saved.
        args: Additional arguments to pass to fun
        constraint: Optional map applied after every step
        verbose: Log progress information at INFO level

    Returns:
        t: Array of time points, shape (n_points,)
        y: Solution at times t, each leaf of shape (n_points, *leaf.shape)
    """
    if save_every < 1:
        raise ConfigurationError(f"save_every must be positive, got {save_every}")

    if verbose:
        logger.info(
            "Solving with %s: t0=%s, dt=%s, %d steps",
            type(method).__name__, t0, step_size, n_steps
        )

    t_save = [jnp.asarray(t0, dtype=jnp.result_type(float))]
    y_save = [y0]
    t, y = t_save[0], y0

    start_wallclock = time.time()

    done = 0
    while done < n_steps:
        chunk = min(save_every, n_steps - done)
        t, y = integrate(fun, t, y, method, step_size, chunk, args, constraint)
        done += chunk
        t_save.append(t)
        y_save.append(y)

    t_arr = jnp.stack(t_save)
    y_arr = jax.tree_util.tree_map(lambda *leaves: jnp.stack(leaves, axis=0), *y_save)

    if verbose:
        elapsed_wallclock = time.time() - start_wallclock
        logger.info(
            "Completed in %.3fs (%.1f steps/s)",
            elapsed_wallclock, n_steps / max(elapsed_wallclock, 1e-12)
        )

    return t_arr, y_arr
