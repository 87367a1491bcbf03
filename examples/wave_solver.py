import argparse
import logging

import jax.numpy as jnp
from matplotlib import pyplot as plt

from jax_wave import Simulation, WAVE, DIFFUSION, gaussian_bump, sine_wave, setup_logging


def main(nx=100, cfl=0.15, steps=1000, save_every=100, c=1.0, equation="wave"):
    """
    Solve the wave equation (or the diffusion-like equation) in 1D and plot
    snapshots of the displacement.

    Arguments:
        nx - Number of grid points (default 100)
        cfl - CFL fraction, dt = cfl * dx (default 0.15)
        steps - Number of time steps (default 1000)
        save_every - Steps between plotted snapshots (default 100)
        c - Wave speed (default 1.0)
        equation - 'wave' or 'diffusion' (default 'wave')
    """
    setup_logging(logging.INFO)

    if equation == "wave":
        sim = Simulation(equation=WAVE, wave_speed=c)
        sim.initialize(nx, cfl, sine_wave)
    else:
        sim = Simulation(equation=DIFFUSION, wave_speed=c)
        sim.initialize(nx, cfl, gaussian_bump())

    x = sim.grid.x
    t, u = sim.trajectory(steps, save_every=save_every)

    if equation == "wave":
        # Standing wave: u(x, t) = sin(x) cos(ct)
        for i in range(len(t)):
            exact = jnp.sin(x) * jnp.cos(c * t[i])
            error = jnp.max(jnp.abs(u[i] - exact))
            print(f"t={float(t[i]):.3f}: max error = {float(error):.3e}")

    fig, ax = plt.subplots()
    for i in range(len(t)):
        ax.plot(x, u[i], '-', label=f"$t={float(t[i]):.2f}$")
    ax.legend()
    ax.set_xlabel('x')
    ax.set_ylabel('u')
    plt.show()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="1D wave/diffusion solver demo")
    parser.add_argument("--nx", type=int, default=100)
    parser.add_argument("--cfl", type=float, default=0.15)
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--save-every", type=int, default=100)
    parser.add_argument("--c", type=float, default=1.0)
    parser.add_argument("--equation", choices=["wave", "diffusion"], default="wave")
    args = parser.parse_args()
    main(args.nx, args.cfl, args.steps, args.save_every, args.c, args.equation)
