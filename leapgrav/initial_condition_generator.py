"""
This module generates randomized initial conditions for the simulation.

The InitialConditionGenerator class draws every body attribute independently and
uniformly from the bounds held in SimConfig: mass, x and y position, and the two speed
magnitudes, each of which is then negated with an independent probability of one half.
Draws are taken per body in a fixed order (mass, x, y, |vx|, sign of vx, |vy|, sign of vy)
from a numpy Generator, so a fixed seed reproduces the same system. Accelerations, the
elapsed time and both energies start at zero. The initialize function is the short form
used by the simulation facade. Malformed configurations are rejected with ConfigError
before anything is drawn.
"""

from __future__ import annotations

import logging
import numpy as np
from typing import Tuple

from .sim_config import SimConfig, ConfigError
from .simulation_state import SimulationState


logger = logging.getLogger(__name__)

_DRAWS_PER_BODY = 7


def _scale(r: np.ndarray, bounds: Tuple[float, float]) -> np.ndarray:
	lo, hi = float(bounds[0]), float(bounds[1])
	return r * (hi - lo) + lo


def make_rng(seed=None) -> np.random.Generator:
	if isinstance(seed, np.random.Generator):
		return seed
	return np.random.default_rng(seed)


class InitialConditionGenerator:

	def __init__(self, config: SimConfig | None = None, rng=None):
		self.config: SimConfig = (config or SimConfig()).validate()
		self.rng = make_rng(self.config.seed if rng is None else rng)

	def _signed_speed(self, magnitude_draw: np.ndarray, flip_draw: np.ndarray) -> np.ndarray:
		speed = _scale(magnitude_draw, self.config.speed_range)
		return np.where(flip_draw < 0.5, -speed, speed)

	def generate_single(self, n_bodies: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
		n = int(n_bodies)
		if n < 1:
			raise ConfigError(f"cannot generate a system of {n_bodies} bodies")

		r = self.rng.random((n, _DRAWS_PER_BODY))
		cfg = self.config

		m = _scale(r[:, 0], cfg.mass_range)
		p = np.column_stack((_scale(r[:, 1], cfg.x_range), _scale(r[:, 2], cfg.y_range)))
		v = np.column_stack((
			self._signed_speed(r[:, 3], r[:, 4]),
			self._signed_speed(r[:, 5], r[:, 6]),
		))
		return m, p, v

	def create_state(self, n_bodies: int | None = None) -> SimulationState:
		n = self.config.n_bodies if n_bodies is None else n_bodies
		m, p, v = self.generate_single(n)
		state = SimulationState(self.config.dtype).build_state(masses=m, positions=p, velocities=v)
		logger.info("Initialized %d bodies (dtype=%s)", state.n_bodies, state.dtype)
		return state


def initialize(n: int, seed=None, config: SimConfig | None = None) -> SimulationState:
	cfg = (config or SimConfig()).replace(n_bodies=int(n))
	return InitialConditionGenerator(cfg, rng=make_rng(seed if seed is not None else cfg.seed)).create_state()
