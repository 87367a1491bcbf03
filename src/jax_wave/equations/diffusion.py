import jax.numpy as jnp

from ..derivatives import d2__dx2_c_dirichlet
from .base import Equation


def diffusion_rhs_1d(t: float, u: jnp.ndarray, c2: float, dx: float) -> jnp.ndarray:
    """
    Diffusion-like equation in 1D: ∂u/∂t = c²∂²u/∂x²

    Args:
        t: Current time (unused, the equation is autonomous)
        u: Field at time t
        c2: Coefficient c² multiplying the second derivative
        dx: Spatial grid spacing
    """
    return c2 * d2__dx2_c_dirichlet(u, dx)


def _make_state(u0, v0):
    return u0


def _displacement(y):
    return y


def _with_displacement(y, u):
    return u


DIFFUSION = Equation(
    name="diffusion",
    rhs=diffusion_rhs_1d,
    make_state=_make_state,
    displacement=_displacement,
    with_displacement=_with_displacement,
)
