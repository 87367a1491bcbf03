"""Initial conditions sampled on the grid coordinates."""

import math
from typing import Callable

import jax.numpy as jnp


def sine_wave(x: jnp.ndarray) -> jnp.ndarray:
    """u0(x) = sin(x). Vanishes at both ends of [0, 2π]."""
    return jnp.sin(x)


def gaussian_bump(
    center: float = math.pi,
    width: float = 0.5,
    amplitude: float = 1.0
) -> Callable[[jnp.ndarray], jnp.ndarray]:
    """
    Gaussian initial condition.

    Args:
        center: Location of the peak
        width: Standard deviation
        amplitude: Peak value

    Returns:
        A function x -> amplitude * exp(-(x - center)² / (2 width²))
    """
    if width <= 0.0:
        raise ValueError(f"width must be positive, got {width}")

    def u0(x: jnp.ndarray) -> jnp.ndarray:
        return amplitude * jnp.exp(-((x - center)**2) / (2.0 * width**2))

    return u0
