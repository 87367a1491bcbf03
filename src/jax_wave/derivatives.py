"""
Finite difference operators on a uniform grid with boundary samples included.

Interior points use central differences; the two end points use one-sided
stencils of the same (second) order, so the output has the same length as
the input.
"""

import jax.numpy as jnp

from .errors import ConfigurationError
from .grid import MIN_POINTS


def _check_length(u: jnp.ndarray) -> None:
    # Shapes are static under jit, so this runs once per trace
    if u.shape[-1] < MIN_POINTS:
        raise ConfigurationError(
            f"Finite difference stencils need at least {MIN_POINTS} points, got {u.shape[-1]}"
        )


def d__dx_c(u: jnp.ndarray, dx: float) -> jnp.ndarray:
    """
    Approximate the first derivative using central differences in the interior
    and one-sided differences at the boundaries.

    Accuracy: Second-order
    """
    _check_length(u)
    du_dx = jnp.zeros_like(u)

    # Interior points: central difference
    du_dx = du_dx.at[1:-1].set((u[2:] - u[:-2]) / (2.0 * dx))

    # Boundary points: forward/backward three-point differences
    du_dx = du_dx.at[0].set((-3.0 * u[0] + 4.0 * u[1] - u[2]) / (2.0 * dx))
    du_dx = du_dx.at[-1].set((3.0 * u[-1] - 4.0 * u[-2] + u[-3]) / (2.0 * dx))

    return du_dx


def d2__dx2_c(u: jnp.ndarray, dx: float) -> jnp.ndarray:
    """
    Approximate the second derivative using the three-point central formula in
    the interior and four-point one-sided differences at the boundaries.

    The stencil is applied directly rather than by composing `d__dx_c` with
    itself, so the boundary error does not leak into the neighbouring
    interior points.

    Accuracy: Second-order
    """
    _check_length(u)
    d2u_dx2 = jnp.zeros_like(u)

    # Interior points: central difference
    d2u_dx2 = d2u_dx2.at[1:-1].set((u[2:] - 2.0 * u[1:-1] + u[:-2]) / (dx**2))

    # Boundary points
    d2u_dx2 = d2u_dx2.at[0].set(
        (2.0 * u[0] - 5.0 * u[1] + 4.0 * u[2] - u[3]) / (dx**2)
    )
    d2u_dx2 = d2u_dx2.at[-1].set(
        (2.0 * u[-1] - 5.0 * u[-2] + 4.0 * u[-3] - u[-4]) / (dx**2)
    )

    return d2u_dx2


def d2__dx2_c_dirichlet(u: jnp.ndarray, dx: float) -> jnp.ndarray:
    """
    Approximate the second derivative using central differences, for a field
    whose end samples are held fixed by Dirichlet boundary conditions.

    Interior points match `d2__dx2_c`. The boundary rows are zero: the end
    samples are prescribed, so they have no rate of change.

    Accuracy: Second-order (interior)
    """
    _check_length(u)
    d2u_dx2 = jnp.zeros_like(u)

    # Interior points: central difference
    d2u_dx2 = d2u_dx2.at[1:-1].set((u[2:] - 2.0 * u[1:-1] + u[:-2]) / (dx**2))

    return d2u_dx2
