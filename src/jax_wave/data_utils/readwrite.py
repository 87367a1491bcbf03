"""
Utilities for saving simulation output.
"""

import logging
import os
from typing import Optional, Tuple

import numpy as np
import jax.numpy as jnp

logger = logging.getLogger(__name__)


def save_trajectory(
    save_path: str,
    t: jnp.ndarray,
    x: jnp.ndarray,
    u: jnp.ndarray,
    metadata: Optional[dict] = None
):
    """
    Save a recorded trajectory to a compressed NPZ file.

    Args:
        save_path: Path to save the NPZ file
        t: Times, shape (nt,)
        x: Grid coordinates, shape (nx,)
        u: Fields at times t, shape (nt, nx)
        metadata: Additional scalar metadata (e.g. cfl_fraction, wave_speed)
    """
    t = np.asarray(t)
    x = np.asarray(x)
    u = np.asarray(u)
    if u.shape != (t.shape[0], x.shape[0]):
        raise ValueError(
            f"u must have shape (len(t), len(x)) = {(t.shape[0], x.shape[0])}, got {u.shape}"
        )

    # Create directory if it doesn't exist
    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    save_data = {"t": t, "x": x, "u": u}
    if metadata:
        for key, value in metadata.items():
            save_data[f"meta_{key}"] = value

    np.savez_compressed(save_path, **save_data)
    logger.info("Trajectory saved to %s: %d snapshots of %d points", save_path, u.shape[0], u.shape[1])


def load_trajectory(file_path: str, convert_to_jax: bool = True) -> Tuple[dict, dict]:
    """
    Load a trajectory saved with `save_trajectory`.

    Args:
        file_path: Path to the NPZ file
        convert_to_jax: Whether to convert arrays to JAX arrays (default: True)

    Returns:
        Tuple of (data, metadata) dictionaries
        - data: Contains 't', 'x' and 'u'
        - metadata: Contains metadata with 'meta_' prefix removed
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Trajectory file not found: {file_path}")

    data = {}
    metadata = {}
    with np.load(file_path) as npz:
        for key in npz.files:
            value = npz[key]
            if key.startswith('meta_'):
                metadata[key[len('meta_'):]] = value.item() if value.ndim == 0 else value
            else:
                data[key] = jnp.asarray(value) if convert_to_jax else value

    logger.debug("Loaded %s with keys %s", file_path, sorted(data))
    return data, metadata


def to_payload(x: jnp.ndarray, u: jnp.ndarray) -> dict:
    """
    Plain-Python view of a field for transport layers.

    Returns:
        {'x': [...], 'f': [...]} with float lists of equal length
    """
    x = np.asarray(x, dtype=float)
    u = np.asarray(u, dtype=float)
    if x.shape != u.shape or x.ndim != 1:
        raise ValueError(f"x and u must be 1D arrays of equal length, got {x.shape} and {u.shape}")
    return {"x": x.tolist(), "f": u.tolist()}
