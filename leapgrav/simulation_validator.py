"""
This module provides validation utilities for N-body simulation states.

The SimulationValidator class offers static methods to check that raw inputs describe a
usable system (positive finite masses, finite positions and velocities, matching body
counts, two components per vector), to report what is wrong with an invalid input, and to
test whether a running state is still finite. The last check only observes: a state that
has gone non-finite after two bodies met is reported, never repaired.
"""

from __future__ import annotations
import logging
from typing import Sequence, Tuple, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
	from .simulation_state import SimulationState


logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]


class SimulationValidator:
	@staticmethod
	def state_is_valid(
		masses: Sequence[float],
		positions: Sequence[Vec2],
		velocities: Sequence[Vec2],
	) -> bool:
		if masses is None or positions is None or velocities is None:
			return False

		m = np.asarray(masses, dtype=float).ravel()
		r = np.asarray(positions, dtype=float)
		v = np.asarray(velocities, dtype=float)

		if r.ndim != 2 or v.ndim != 2 or r.shape != v.shape:
			return False
		if r.shape[0] != m.size or r.shape[1] != 2:
			return False
		if m.size == 0:
			return False
		if not np.all(np.isfinite(m)) or np.any(m <= 0.0):
			return False
		if not np.all(np.isfinite(r)) or not np.all(np.isfinite(v)):
			return False
		return True

	@staticmethod
	def report_invalid_state(
		label: str,
		masses=None,
		positions=None,
		velocities=None,
	) -> None:
		logger.warning("[invalid] %s", label)
		if masses is not None:
			m = np.asarray(masses, dtype=float).ravel()
			bad = np.flatnonzero(~np.isfinite(m) | (m <= 0.0))
			if bad.size:
				logger.warning("  non-positive or non-finite masses at %s", bad.tolist())
		for name, arr in (("position", positions), ("velocity", velocities)):
			if arr is None:
				continue
			a = np.asarray(arr, dtype=float)
			if a.ndim != 2 or a.shape[1] != 2:
				logger.warning("  %s array has shape %s (expected (N, 2))", name, a.shape)
				continue
			bad = np.flatnonzero(~np.all(np.isfinite(a), axis=1))
			if bad.size:
				logger.warning("  non-finite %s at %s", name, bad.tolist())

	@staticmethod
	def all_finite(state: "SimulationState") -> bool:
		return bool(
			np.all(np.isfinite(state.pos))
			and np.all(np.isfinite(state.vel))
			and np.all(np.isfinite(state.acc))
		)
