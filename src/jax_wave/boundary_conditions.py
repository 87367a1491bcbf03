from dataclasses import dataclass

import jax.numpy as jnp


def apply_dirichlet(u: jnp.ndarray, left: float = 0.0, right: float = 0.0) -> jnp.ndarray:
    """Return a copy of `u` with the first and last samples fixed to `left` and `right`."""
    return u.at[0].set(left).at[-1].set(right)


@dataclass(frozen=True)
class DirichletBC:
    """
    Fixed values at both ends of a field.

    Instances are hashable, so they can be passed as static arguments to
    compiled integration loops.
    """

    left: float = 0.0
    right: float = 0.0

    def __call__(self, u: jnp.ndarray) -> jnp.ndarray:
        return apply_dirichlet(u, self.left, self.right)
