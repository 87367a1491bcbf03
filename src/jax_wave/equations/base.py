from dataclasses import dataclass
from typing import Any, Callable, Optional

from jax import Array


@dataclass(frozen=True)
class Equation:
    """
    A PDE together with the layout of its state.

    Attributes:
        name: Human-readable name.
        rhs: Right-hand side with signature (t, y, c2, dx) -> dy/dt.
        make_state: Builds the state from the sampled displacement and
            velocity, signature (u0, v0) -> y. `v0` may be ignored.
        displacement: Extracts the displacement field from a state.
        with_displacement: Returns a copy of a state with its displacement
            field replaced.
    """

    name: str
    rhs: Callable[..., Any]
    make_state: Callable[[Array, Optional[Array]], Any]
    displacement: Callable[[Any], Array]
    with_displacement: Callable[[Any, Array], Any]
