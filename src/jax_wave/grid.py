import math
import numbers
from dataclasses import dataclass

import jax.numpy as jnp

from .errors import ConfigurationError


# Smallest grid supported by the one-sided boundary stencils
MIN_POINTS = 4


def _validate_point_count(nx) -> None:
    if isinstance(nx, bool) or not isinstance(nx, numbers.Integral):
        raise ConfigurationError(f"Number of grid points must be an integer, got {nx!r}")
    if nx < MIN_POINTS:
        raise ConfigurationError(
            f"Number of grid points must be at least {MIN_POINTS}, got {nx}"
        )


def create_uniform_grid(nx: int, L: float = 2.0 * math.pi, return_spacing=False):
    """
    Create a uniform grid on [0, L] including both endpoints.

    Args:
        nx: Number of grid points (boundary points included)
        L: Domain length (default 2π)

    Returns:
        x: Grid
        dx: Grid spacing
    """
    _validate_point_count(nx)
    dx = L / (nx - 1)
    x = jnp.arange(nx) * dx

    if return_spacing:
        return x, dx
    else:
        return x


@dataclass(frozen=True)
class Grid:
    """
    Uniform 1D sampling of [0, 2π].

    Index 0 and `point_count - 1` are boundary samples, all others interior.

    Attributes:
        point_count: Number of samples N.
        spacing: Grid spacing dx = 2π / (N - 1).
    """

    point_count: int
    spacing: float

    def __post_init__(self):
        _validate_point_count(self.point_count)
        expected = 2.0 * math.pi / (self.point_count - 1)
        if not math.isclose(self.spacing, expected, rel_tol=1e-12):
            raise ConfigurationError(
                f"Grid spacing {self.spacing} inconsistent with {self.point_count} points "
                f"(expected {expected})"
            )

    @classmethod
    def uniform(cls, point_count: int) -> "Grid":
        """Build the grid with `point_count` samples over [0, 2π]."""
        _validate_point_count(point_count)
        point_count = int(point_count)
        return cls(point_count, 2.0 * math.pi / (point_count - 1))

    @property
    def length(self) -> float:
        return 2.0 * math.pi

    @property
    def x(self) -> jnp.ndarray:
        """Sample coordinates x[i] = i * dx."""
        return jnp.arange(self.point_count) * self.spacing
