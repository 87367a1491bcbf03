from typing import NamedTuple

import jax.numpy as jnp

from ..derivatives import d2__dx2_c_dirichlet
from .base import Equation


class WaveState(NamedTuple):
    """Displacement `u` and velocity `v = ∂u/∂t` sampled on the same grid."""
    u: jnp.ndarray
    v: jnp.ndarray


def wave_rhs_1d(t: float, y: WaveState, c2: float, dx: float) -> WaveState:
    """
    Wave equation in 1D: ∂²u/∂t² = c²∂²u/∂x², written as the first-order system

        ∂u/∂t = v
        ∂v/∂t = c²∂²u/∂x²

    Args:
        t: Current time (unused, the equation is autonomous)
        y: Current (u, v) state
        c2: Squared wave speed c²
        dx: Spatial grid spacing
    """
    return WaveState(u=y.v, v=c2 * d2__dx2_c_dirichlet(y.u, dx))


def _make_state(u0, v0):
    if v0 is None:
        v0 = jnp.zeros_like(u0)
    return WaveState(u=u0, v=v0)


def _displacement(y):
    return y.u


def _with_displacement(y, u):
    return y._replace(u=u)


WAVE = Equation(
    name="wave",
    rhs=wave_rhs_1d,
    make_state=_make_state,
    displacement=_displacement,
    with_displacement=_with_displacement,
)
