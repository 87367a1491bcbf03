"""Data utilities for saving and exporting simulation output."""

from .readwrite import save_trajectory, load_trajectory, to_payload

__all__ = [
    "save_trajectory",
    "load_trajectory",
    "to_payload",
]
