"""Unit/integration tests for the simulation driver."""

import math

import numpy as np
import pytest
import jax.numpy as jnp

from jax_wave import (
    ConfigurationError,
    DIFFUSION,
    Equation,
    ForwardEuler,
    ImplementationError,
    NotInitializedError,
    Simulation,
    WAVE,
    gaussian_bump,
    sine_wave,
)


@pytest.fixture
def wave_sim():
    """Wave equation, c = 1, sine initial condition on 100 points."""
    sim = Simulation(equation=WAVE, wave_speed=1.0)
    sim.initialize(point_count=100, cfl_fraction=0.15, initial_condition=sine_wave)
    return sim


class TestLifecycle:

    def test_not_initialized(self):
        sim = Simulation()
        assert not sim.is_initialized
        with pytest.raises(NotInitializedError):
            sim.advance(1)
        with pytest.raises(NotInitializedError):
            sim.current_time_step()
        with pytest.raises(NotInitializedError):
            sim.trajectory(1)
        with pytest.raises(NotInitializedError):
            _ = sim.grid
        assert not sim.is_initialized

    def test_time_step(self, wave_sim):
        dx = 2.0 * math.pi / 99
        assert wave_sim.is_initialized
        assert wave_sim.grid.spacing == pytest.approx(dx)
        assert wave_sim.current_time_step() == pytest.approx(0.15 * dx)
        assert wave_sim.time_step_config.cfl_fraction == 0.15

    def test_time_advances(self, wave_sim):
        dt = wave_sim.current_time_step()
        wave_sim.advance(10)
        wave_sim.advance(5)
        assert wave_sim.time == pytest.approx(15 * dt)

    def test_reinitialize_restarts(self, wave_sim):
        wave_sim.advance(20)
        wave_sim.initialize(point_count=50, cfl_fraction=0.1, initial_condition=sine_wave)
        assert wave_sim.time == 0.0
        assert wave_sim.grid.point_count == 50
        assert wave_sim.advance(0).shape == (50,)


class TestConfiguration:

    @pytest.mark.parametrize("point_count", [3, 0, 10.5])
    def test_invalid_point_count(self, point_count):
        sim = Simulation()
        with pytest.raises(ConfigurationError):
            sim.initialize(point_count, 0.1, sine_wave)
        assert not sim.is_initialized

    @pytest.mark.parametrize("cfl", [0.0, -0.1, 1.5, float("nan"), float("inf")])
    def test_invalid_cfl(self, cfl):
        sim = Simulation()
        with pytest.raises(ConfigurationError):
            sim.initialize(100, cfl, sine_wave)

    @pytest.mark.parametrize("steps", [-1, 1.5, True])
    def test_invalid_steps(self, wave_sim, steps):
        before = wave_sim.advance(0)
        with pytest.raises(ConfigurationError):
            wave_sim.advance(steps)
        assert jnp.array_equal(wave_sim.advance(0), before)
        assert wave_sim.time == 0.0

    def test_failed_initialize_keeps_state(self, wave_sim):
        wave_sim.advance(3)
        before = wave_sim.advance(0)
        with pytest.raises(ConfigurationError):
            wave_sim.initialize(3, 0.15, sine_wave)
        assert wave_sim.grid.point_count == 100
        assert jnp.array_equal(wave_sim.advance(0), before)

    def test_initial_condition_shape(self):
        sim = Simulation()
        with pytest.raises(ConfigurationError):
            sim.initialize(10, 0.1, lambda x: jnp.zeros(3))

    def test_scalar_initial_condition(self):
        """A per-point function such as math.sin gives the same field as the array form."""
        scalar = Simulation()
        scalar.initialize(10, 0.1, lambda xi: math.sin(xi))
        vectorised = Simulation()
        vectorised.initialize(10, 0.1, sine_wave)

        assert jnp.allclose(scalar.advance(0), vectorised.advance(0), atol=1e-15)
        assert jnp.allclose(scalar.advance(5), vectorised.advance(5), atol=1e-12)

    def test_constant_initial_condition(self):
        sim = Simulation(equation=DIFFUSION)
        sim.initialize(6, 0.1, lambda x: 2.0)
        assert jnp.array_equal(sim.advance(0), jnp.array([0.0, 2.0, 2.0, 2.0, 2.0, 0.0]))

    def test_unevaluable_initial_condition(self):
        def needs_string(x):
            return "u" + x

        sim = Simulation()
        with pytest.raises(ConfigurationError):
            sim.initialize(10, 0.1, needs_string)
        assert not sim.is_initialized

    @pytest.mark.parametrize("steps", [2, np.int64(2), jnp.int32(2), jnp.array(2)])
    def test_integer_like_steps(self, wave_sim, steps):
        expected = Simulation()
        expected.initialize(100, 0.15, sine_wave)

        assert jnp.array_equal(wave_sim.advance(steps), expected.advance(2))
        assert wave_sim.time == pytest.approx(2 * wave_sim.current_time_step())

    def test_integer_like_save_every(self, wave_sim):
        t, u = wave_sim.trajectory(4, save_every=jnp.int32(2))
        assert t.shape == (3,)
        assert u.shape == (3, 100)

    @pytest.mark.parametrize("save_every", [0, 1.0, True])
    def test_invalid_save_every(self, wave_sim, save_every):
        with pytest.raises(ConfigurationError):
            wave_sim.trajectory(4, save_every=save_every)

    def test_invalid_wave_speed(self):
        with pytest.raises(ConfigurationError):
            Simulation(wave_speed=float("nan"))

    def test_bad_rhs_fails_fast(self):
        def truncating_rhs(t, u, c2, dx):
            return u[1:]

        broken = Equation(
            name="broken",
            rhs=truncating_rhs,
            make_state=DIFFUSION.make_state,
            displacement=DIFFUSION.displacement,
            with_displacement=DIFFUSION.with_displacement,
        )
        sim = Simulation(equation=broken)
        with pytest.raises(ImplementationError):
            sim.initialize(10, 0.1, sine_wave)
        assert not sim.is_initialized


class TestWaveScenario:

    def test_advance_zero(self, wave_sim):
        """advance(0) returns the sampled sine with the ends forced to zero."""
        u = wave_sim.advance(0)
        expected = jnp.sin(wave_sim.grid.x).at[0].set(0.0).at[-1].set(0.0)

        assert u.shape == (100,)
        assert jnp.array_equal(u, expected)
        assert wave_sim.time == 0.0

    def test_long_run_bounded(self, wave_sim):
        u = wave_sim.advance(1000)

        assert jnp.isfinite(u).all()
        assert jnp.max(jnp.abs(u)) < 1.1
        assert u[0] == 0.0 and u[-1] == 0.0

        # Standing wave: u(x, t) = sin(x) cos(t)
        exact = jnp.sin(wave_sim.grid.x) * jnp.cos(wave_sim.time)
        assert jnp.allclose(u, exact, atol=2e-2)

    def test_boundary_every_step(self, wave_sim):
        t, u = wave_sim.trajectory(1000)

        assert t.shape == (1001,)
        assert u.shape == (1001, 100)
        assert (u[:, 0] == 0.0).all()
        assert (u[:, -1] == 0.0).all()

    def test_velocity_not_constrained(self):
        sim = Simulation(equation=WAVE)
        sim.initialize(50, 0.1, sine_wave, initial_velocity=lambda x: jnp.ones_like(x))
        assert sim.state.v[0] == 1.0 and sim.state.v[-1] == 1.0
        sim.advance(5)
        assert sim.state.u[0] == 0.0 and sim.state.u[-1] == 0.0
        assert sim.state.v[0] != 0.0

    def test_returned_field_is_a_copy(self, wave_sim):
        u = wave_sim.advance(1)
        u_saved = np.array(u)
        wave_sim.advance(10)
        assert np.array_equal(np.asarray(u), u_saved)

    def test_determinism(self):
        """Identical parameters and calls give bit-identical fields."""
        sims = [Simulation(equation=WAVE, wave_speed=1.0) for _ in range(2)]
        for sim in sims:
            sim.initialize(100, 0.15, sine_wave)

        results = [[sim.advance(n) for n in (7, 0, 31)] for sim in sims]

        for a, b in zip(*results):
            assert jnp.array_equal(a, b)

    def test_instances_independent(self):
        a = Simulation()
        b = Simulation()
        a.initialize(40, 0.1, sine_wave)
        b.initialize(40, 0.1, sine_wave)
        u_b = b.advance(0)

        a.advance(50)

        assert b.time == 0.0
        assert jnp.array_equal(b.advance(0), u_b)

    def test_trajectory_matches_advance(self):
        a = Simulation()
        b = Simulation()
        a.initialize(60, 0.15, sine_wave)
        b.initialize(60, 0.15, sine_wave)

        t, u = a.trajectory(10, save_every=4)
        u_final = b.advance(10)

        assert t.shape == (4,)
        assert jnp.allclose(t, jnp.array([0, 4, 8, 10]) * a.current_time_step())
        assert jnp.allclose(u[-1], u_final, rtol=0.0, atol=1e-12)
        assert a.time == pytest.approx(b.time)

    def test_wave_speed_scales_frequency(self):
        """With c = 2 the standing wave oscillates as cos(2t)."""
        sim = Simulation(equation=WAVE, wave_speed=2.0)
        sim.initialize(100, 0.05, sine_wave)
        u = sim.advance(200)
        exact = jnp.sin(sim.grid.x) * jnp.cos(2.0 * sim.time)
        assert jnp.allclose(u, exact, atol=2e-2)

    def test_instability_is_not_an_error(self):
        """Too large a step blows up silently rather than raising."""
        sim = Simulation(equation=DIFFUSION)
        sim.initialize(100, 1.0, gaussian_bump())
        u = sim.advance(200)
        assert u.shape == (100,)
        assert not jnp.isfinite(u).all() or jnp.max(jnp.abs(u)) > 1e3


class TestDiffusionScenario:

    def test_peak_non_increasing(self):
        sim = Simulation(equation=DIFFUSION)
        sim.initialize(41, 0.05, gaussian_bump(center=math.pi, width=0.5))

        peaks = [float(jnp.max(sim.advance(0)))]
        for _ in range(20):
            u = sim.advance(25)
            assert u[0] == 0.0 and u[-1] == 0.0
            peaks.append(float(jnp.max(u)))

        assert all(later <= earlier for earlier, later in zip(peaks, peaks[1:]))
        assert peaks[-1] < peaks[0]

    def test_forward_euler_method(self):
        sim = Simulation(equation=DIFFUSION, method=ForwardEuler())
        sim.initialize(41, 0.02, gaussian_bump())
        u = sim.advance(100)
        assert jnp.isfinite(u).all()
        assert float(jnp.max(u)) < 1.0
        assert u[0] == 0.0 and u[-1] == 0.0
