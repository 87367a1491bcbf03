"""
Built-in PDEs

Right-hand sides for the diffusion-like equation and the 1D wave equation.

All right-hand sides follow the standard interface:
- rhs(t, y, c2, dx) -> dy/dt
"""

from .base import Equation
from .diffusion import diffusion_rhs_1d, DIFFUSION
from .wave import WaveState, wave_rhs_1d, WAVE

__all__ = [
    "Equation",
    "WaveState",
    "diffusion_rhs_1d",
    "wave_rhs_1d",
    "DIFFUSION",
    "WAVE",
]
