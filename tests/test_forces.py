import warnings

import numpy as np
import pytest

from leapgrav import ConfigError, ForceEvaluator, cutoff_accelerations, reference_accelerations
from leapgrav.constants import G, LIGHT_YEAR


def _pair(separation, m0=1.0e27, m1=1.0e27, dtype=np.float64):
	pos = np.array([[0.0, 0.0], [separation, 0.0]], dtype=dtype)
	mass = np.array([m0, m1], dtype=dtype)
	return pos, mass


def test_two_body_magnitude_and_direction():
	pos, mass = _pair(1.0e13)
	acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)

	expected = G * 1.0e27 / 1.0e26
	assert acc[0, 0] == pytest.approx(expected, rel=1e-12)
	assert acc[1, 0] == pytest.approx(-expected, rel=1e-12)
	assert acc[0, 1] == 0.0
	assert acc[1, 1] == 0.0


def test_acceleration_points_towards_the_other_body():
	pos = np.array([[1.0e12, -2.0e12], [-3.0e12, 5.0e12]])
	mass = np.array([3.0e28, 7.0e28])
	acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)

	d = pos[1] - pos[0]
	cos = np.dot(acc[0], d) / (np.linalg.norm(acc[0]) * np.linalg.norm(d))
	assert cos == pytest.approx(1.0, abs=1e-12)
	np.testing.assert_allclose(acc[0] * mass[0], -acc[1] * mass[1], rtol=1e-12)


def test_doubling_source_mass_doubles_contribution():
	pos, mass = _pair(4.0e13, m1=5.0e28)
	acc1 = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)

	mass2 = mass.copy()
	mass2[1] *= 2.0
	acc2 = cutoff_accelerations(pos, mass2, G, LIGHT_YEAR)

	np.testing.assert_array_equal(acc2[0], 2.0 * acc1[0])
	np.testing.assert_array_equal(acc2[1], acc1[1])


@pytest.mark.parametrize("m", [1.0, 1.0e15, 9.0e29, 1.0e40])
def test_pairs_beyond_cutoff_contribute_nothing(m):
	pos, mass = _pair(2.0 * LIGHT_YEAR, m0=m, m1=m)
	acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)
	assert np.all(acc == 0.0)


def test_pair_exactly_at_cutoff_still_interacts():
	pos, mass = _pair(10.0, m0=1.0, m1=1.0)
	acc = cutoff_accelerations(pos, mass, 1.0, 10.0)
	assert acc[0, 0] == pytest.approx(0.01)

	acc_out = cutoff_accelerations(pos, mass, 1.0, 9.999)
	assert np.all(acc_out == 0.0)


def test_cutoff_only_drops_far_pairs():
	pos = np.array([[0.0, 0.0], [1.0e13, 0.0], [2.0 * LIGHT_YEAR, 0.0]])
	mass = np.array([1.0e27, 1.0e27, 1.0e29])
	acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)

	near, _ = _pair(1.0e13)
	acc_near = cutoff_accelerations(near, mass[:2], G, LIGHT_YEAR)
	np.testing.assert_array_equal(acc[:2], acc_near)
	assert np.all(acc[2] == 0.0)


def test_single_body_feels_nothing():
	acc = cutoff_accelerations(np.array([[3.0, 4.0]]), np.array([1.0e30]), G, LIGHT_YEAR)
	assert acc.shape == (1, 2)
	assert np.all(acc == 0.0)


def test_float32_in_float32_out():
	pos, mass = _pair(1.0e13, dtype=np.float32)
	acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)
	assert acc.dtype == np.float32


def test_coincident_bodies_give_non_finite_silently():
	pos = np.array([[1.0e12, 1.0e12], [1.0e12, 1.0e12], [5.0e12, 0.0]], dtype=np.float32)
	mass = np.full(3, 1.0e27, dtype=np.float32)
	with warnings.catch_warnings():
		warnings.simplefilter("error")
		acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)
	assert not np.all(np.isfinite(acc[:2]))
	assert np.all(np.isfinite(acc[2]))


def test_softening_keeps_coincident_bodies_finite():
	pos = np.array([[0.0, 0.0], [0.0, 0.0]])
	mass = np.array([1.0e27, 1.0e27])
	acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR, softening=1.0e9)
	assert np.all(np.isfinite(acc))
	assert np.all(acc == 0.0)


def test_matches_pairwise_reference():
	rng = np.random.default_rng(11)
	pos = rng.uniform(-2.0e16, 2.0e16, size=(25, 2))
	mass = rng.uniform(1.0e25, 1.0e29, size=25)

	acc = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)
	ref = np.array(reference_accelerations(pos, mass, G, LIGHT_YEAR))

	scale = np.max(np.abs(ref))
	np.testing.assert_allclose(acc, ref, rtol=1e-9, atol=1e-12 * scale)


def test_rows_slice_matches_full_evaluation():
	rng = np.random.default_rng(5)
	pos = rng.uniform(-5.0e14, 5.0e14, size=(12, 2))
	mass = rng.uniform(1.0e15, 9.0e29, size=12)

	full = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)
	block = cutoff_accelerations(pos, mass, G, LIGHT_YEAR, rows=slice(4, 9))
	assert block.shape == (5, 2)
	np.testing.assert_allclose(block, full[4:9], rtol=1e-12)


def test_threaded_evaluator_matches_serial():
	rng = np.random.default_rng(2)
	pos = rng.uniform(-5.0e14, 5.0e14, size=(40, 2))
	mass = rng.uniform(1.0e15, 9.0e29, size=40)

	serial = ForceEvaluator(G, LIGHT_YEAR)(pos, mass)
	with ForceEvaluator(G, LIGHT_YEAR, n_workers=3) as threaded:
		par = threaded(pos, mass)
		again = threaded(pos, mass)

	assert par.shape == serial.shape
	scale = np.max(np.abs(serial))
	np.testing.assert_allclose(par, serial, rtol=1e-12, atol=1e-12 * scale)
	np.testing.assert_array_equal(par, again)


def test_evaluator_blocks_cover_all_rows():
	ev = ForceEvaluator(G, LIGHT_YEAR, n_workers=4)
	blocks = ev._blocks(10)
	covered = [i for b in blocks for i in range(b.start, b.stop)]
	assert covered == list(range(10))


def test_evaluator_rejects_negative_softening():
	with pytest.raises(ConfigError):
		ForceEvaluator(G, LIGHT_YEAR, softening=-1.0)


@pytest.mark.parametrize("n_workers", [0, -2])
def test_evaluator_rejects_too_few_workers(n_workers):
	with pytest.raises(ConfigError):
		ForceEvaluator(G, LIGHT_YEAR, n_workers=n_workers)


def test_evaluator_rejects_empty_row_blocks():
	with pytest.raises(ConfigError):
		ForceEvaluator(G, LIGHT_YEAR, block_rows=0)


@pytest.mark.parametrize("block_rows", [1, 3, 7, 40])
def test_row_blocked_evaluation_matches_single_pass(block_rows):
	rng = np.random.default_rng(5)
	pos = rng.uniform(-5.0e14, 5.0e14, size=(17, 2))
	mass = rng.uniform(1.0e15, 9.0e29, size=17)

	single = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)
	blocked = ForceEvaluator(G, LIGHT_YEAR, block_rows=block_rows)(pos, mass)
	assert blocked.shape == single.shape
	scale = np.max(np.abs(single))
	np.testing.assert_allclose(blocked, single, rtol=1e-12, atol=1e-12 * scale)


def test_threaded_row_blocks_match_single_pass():
	rng = np.random.default_rng(6)
	pos = rng.uniform(-5.0e14, 5.0e14, size=(30, 2))
	mass = rng.uniform(1.0e15, 9.0e29, size=30)

	single = cutoff_accelerations(pos, mass, G, LIGHT_YEAR)
	with ForceEvaluator(G, LIGHT_YEAR, n_workers=2, block_rows=4) as ev:
		blocked = ev(pos, mass)
	scale = np.max(np.abs(single))
	np.testing.assert_allclose(blocked, single, rtol=1e-12, atol=1e-12 * scale)
