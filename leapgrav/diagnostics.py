from __future__ import annotations
import math
import numpy as np
from typing import Tuple, TYPE_CHECKING

from .sim_config import SimConfig
if TYPE_CHECKING:
	from .simulation_state import SimulationState

"""
This module computes the conserved quantities used to monitor an N-body run. The Diagnostics class reports the total kinetic energy, sum of 0.5 * m * |v|^2, and the total potential energy, -G times the sum over unordered pairs of m_i * m_j / r_ij, both accumulated in double precision although the body arrays are single precision. Squared speeds and pair displacements are formed in the storage dtype and widened before accumulation, and G is widened from the storage dtype as well. The potential counts every unordered pair exactly once, including pairs farther apart than the force cutoff, and skips pairs at zero separation instead of dividing by zero. pair_terms materializes all N(N-1)/2 pair terms at once in float64, so its memory grows quadratically with the body count (about 4 MB of terms at the default thousand bodies); the force path, which runs every step, is row-blocked instead. Helpers cover linear momentum, center of mass, relative energy drift, and the number of pair terms. The class only reads state, except for update, which stores the two energies on the state after the integrator commits a step.

"""


def pair_count(n: int) -> int:
	n = int(n)
	return n * (n - 1) // 2 if n > 1 else 0


def kinetic_energy_of(mass: np.ndarray, vel: np.ndarray) -> float:
	vel = np.asarray(vel)
	if vel.shape[0] == 0:
		return 0.0
	v2 = (vel[:, 0] * vel[:, 0] + vel[:, 1] * vel[:, 1]).astype(np.float64)
	m = np.asarray(mass).astype(np.float64)
	return float(np.sum(0.5 * m * v2))


def pair_terms(pos: np.ndarray, mass: np.ndarray, G: float) -> np.ndarray:
	pos = np.asarray(pos)
	n = pos.shape[0]
	iu, ju = np.triu_indices(n, 1)
	if iu.size == 0:
		return np.zeros(0, dtype=np.float64)

	dtype = pos.dtype if np.issubdtype(pos.dtype, np.floating) else np.dtype(np.float64)
	g = float(dtype.type(G))
	d = (pos[ju] - pos[iu]).astype(np.float64)
	r = np.sqrt(d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1])

	m = np.asarray(mass).astype(np.float64)
	terms = np.zeros_like(r)
	nz = r != 0.0
	terms[nz] = -1.0 * g * m[iu[nz]] * m[ju[nz]] / r[nz]
	return terms


def potential_energy_of(pos: np.ndarray, mass: np.ndarray, G: float) -> float:
	return float(np.sum(pair_terms(pos, mass, G)))


def energy_drift(e0: float, e: float) -> float:
	if e0 == 0.0:
		return 0.0 if e == 0.0 else math.inf
	return (e - e0) / abs(e0)


class Diagnostics:

	def __init__(self, config: SimConfig | None = None, *, G: float | None = None):
		cfg = config or SimConfig()
		self.G = float(cfg.G if G is None else G)


	def kinetic_energy(self, state: "SimulationState") -> float:
		return kinetic_energy_of(state.mass, state.vel)

	def potential_energy(self, state: "SimulationState") -> float:
		return potential_energy_of(state.pos, state.mass, self.G)

	def compute(self, state: "SimulationState") -> Tuple[float, float]:
		return self.kinetic_energy(state), self.potential_energy(state)

	def total_energy(self, state: "SimulationState") -> float:
		ke, pe = self.compute(state)
		return ke + pe

	def update(self, state: "SimulationState") -> Tuple[float, float]:
		ke, pe = self.compute(state)
		state.kinetic_energy = ke
		state.potential_energy = pe
		return ke, pe


	def momentum(self, state: "SimulationState") -> np.ndarray:
		m = state.mass.astype(np.float64)
		return np.sum(m[:, None] * state.vel.astype(np.float64), axis=0)

	def center_of_mass(self, state: "SimulationState") -> Tuple[np.ndarray, np.ndarray]:
		m = state.mass.astype(np.float64)
		M = float(np.sum(m))
		if M == 0.0:
			return np.zeros(2), np.zeros(2)
		com_pos = np.sum(m[:, None] * state.pos.astype(np.float64), axis=0) / M
		com_vel = np.sum(m[:, None] * state.vel.astype(np.float64), axis=0) / M
		return com_pos, com_vel
