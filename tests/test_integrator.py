import numpy as np
import pytest

from leapgrav import (
	Diagnostics,
	Integrator,
	LeapfrogScheme,
	NBodySimulation,
	SimConfig,
	SimulationState,
	cutoff_accelerations,
	initialize,
)
from leapgrav.constants import D_TIME, G, LIGHT_YEAR


def _two_body_state(separation=1.0e13, mass=1.0e27, dtype="float32"):
	return SimulationState.from_arrays(
		masses=[mass, mass],
		positions=[(0.0, 0.0), (separation, 0.0)],
		velocities=[(0.0, 0.0), (0.0, 0.0)],
		dtype=dtype,
	)


def test_elapsed_time_is_exact_multiple_of_dt():
	state = initialize(10, seed=4)
	integ = Integrator(SimConfig())
	for k in range(1, 26):
		integ.step(state)
		assert state.step_count == k
		assert state.elapsed_time == k * D_TIME


def test_first_step_uses_zero_stored_acceleration():
	state = _two_body_state()
	x0 = state.pos.copy()
	Integrator().step(state)

	# zero velocity and zero stored acceleration: the drift does not move anything
	np.testing.assert_array_equal(state.pos, x0)
	np.testing.assert_array_equal(state.vel, state.acc * np.float32(0.5 * D_TIME))
	assert state.acc[0, 0] > 0.0 > state.acc[1, 0]


def test_committed_acceleration_matches_committed_positions():
	state = initialize(40, seed=9)
	Integrator().run(state, 3)
	expected = cutoff_accelerations(state.pos, state.mass, G, LIGHT_YEAR)
	np.testing.assert_array_equal(state.acc, expected)


def test_kick_drift_kick_order():
	calls = []

	def forces(pos, mass):
		calls.append(pos.copy())
		return np.full_like(pos, 2.0)

	scheme = LeapfrogScheme(forces)
	pos = np.array([[1.0, 1.0]])
	vel = np.array([[3.0, -1.0]])
	acc = np.array([[4.0, 0.0]])

	pos_new, vel_new, acc_new = scheme.advance(pos, vel, acc, np.array([1.0]), 0.5)

	vel_half = vel + acc * 0.25
	np.testing.assert_allclose(pos_new, pos + vel_half * 0.5)
	np.testing.assert_allclose(calls[0], pos_new)
	np.testing.assert_allclose(vel_new, vel_half + 2.0 * 0.25)
	np.testing.assert_allclose(acc_new, [[2.0, 2.0]])
	# inputs are left untouched
	np.testing.assert_array_equal(pos, [[1.0, 1.0]])
	np.testing.assert_array_equal(vel, [[3.0, -1.0]])


def test_force_pass_sees_only_drifted_positions():
	seen = []
	base = Integrator()

	def forces(pos, mass):
		seen.append(pos.copy())
		return base.forces(pos, mass)

	state = initialize(15, seed=21)
	integ = Integrator(scheme=LeapfrogScheme(forces))
	integ.step(state)

	np.testing.assert_array_equal(seen[0], state.pos)


def test_isolated_body_moves_in_a_straight_line():
	state = SimulationState.from_arrays(
		masses=[5.0e29], positions=[(1.0e14, -2.0e14)], velocities=[(3.0e3, -2.0e3)],
		dtype="float64",
	)
	x0 = state.pos.copy()
	v0 = state.vel.copy()
	Integrator().run(state, 60)

	np.testing.assert_array_equal(state.vel, v0)
	assert np.all(state.acc == 0.0)
	np.testing.assert_allclose(state.pos, x0 + v0 * 60 * D_TIME, rtol=1e-12)


def test_bodies_beyond_cutoff_keep_constant_velocity():
	state = SimulationState.from_arrays(
		masses=[9.0e29, 9.0e29],
		positions=[(0.0, 0.0), (3.0 * LIGHT_YEAR, 0.0)],
		velocities=[(1.0e3, 0.0), (-1.0e3, 2.0e3)],
	)
	v0 = state.vel.copy()
	Integrator().run(state, 100)
	assert np.all(state.acc == 0.0)
	np.testing.assert_array_equal(state.vel, v0)


def test_run_is_deterministic():
	start = initialize(60, seed=123)
	a = start.copy()
	b = start.copy()

	Integrator().run(a, 30)
	Integrator().run(b, 30)

	np.testing.assert_array_equal(a.pos, b.pos)
	np.testing.assert_array_equal(a.vel, b.vel)
	np.testing.assert_array_equal(a.acc, b.acc)
	assert a.elapsed_time == b.elapsed_time


def test_two_body_energy_is_conserved():
	sim = NBodySimulation(SimConfig(n_bodies=2), _two_body_state())
	sim.step()
	e1 = sim.total_energy
	assert e1 < 0.0

	sim.run(400)
	drift = abs(sim.total_energy - e1) / abs(e1)
	assert drift < 0.01
	assert sim.kinetic_energy > 0.0


def test_two_body_energy_conserved_with_threaded_forces():
	cfg = SimConfig(n_bodies=2, dtype="float64", n_workers=2)
	with NBodySimulation(cfg, _two_body_state(dtype="float64")) as sim:
		sim.step()
		e1 = sim.total_energy
		sim.run(300)
		assert abs(sim.total_energy - e1) / abs(e1) < 0.01


def test_diagnostics_do_not_feed_back_into_motion():
	a = initialize(20, seed=8)
	b = a.copy()
	integ = Integrator()
	diag = Diagnostics()
	for _ in range(5):
		integ.step(a)
		diag.update(a)
		integ.step(b)
	np.testing.assert_array_equal(a.pos, b.pos)
	np.testing.assert_array_equal(a.vel, b.vel)


def test_empty_run_is_a_no_op():
	state = initialize(3, seed=0)
	before = state.pos.copy()
	Integrator().run(state, 0)
	np.testing.assert_array_equal(state.pos, before)
	assert state.elapsed_time == 0.0


def test_base_scheme_is_abstract():
	from leapgrav import IntegrationScheme
	with pytest.raises(NotImplementedError):
		IntegrationScheme(lambda p, m: p).advance(
			np.zeros((1, 2)), np.zeros((1, 2)), np.zeros((1, 2)), np.ones(1), 1.0
		)
