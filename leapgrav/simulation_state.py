"""
This module manages the internal state representation for N-body simulations.

The SimulationState class maintains numpy arrays for masses, positions, velocities and
accelerations together with the scalar diagnostics (elapsed time, kinetic and potential
energy) and the number of completed steps. It provides property accessors with shape and
mass validation, builds state from Body objects or raw arrays, hands out BodyView proxies
for per-body access, and produces read-only StateSnapshot copies for presentation code.
The body count is fixed once the state is built. Only the integrator advances the arrays
and the step counter; diagnostics write the two energy scalars after each commit.
"""

from __future__ import annotations
import copy
from dataclasses import dataclass
from typing import Iterator, List, Sequence, TYPE_CHECKING
import numpy as np

from .body_view import BodyView
from .sim_config import ConfigError

if TYPE_CHECKING:
	from .body import Body




@dataclass(frozen=True)
class StateSnapshot:
	masses: np.ndarray
	positions: np.ndarray
	velocities: np.ndarray
	accelerations: np.ndarray
	elapsed_time: float
	kinetic_energy: float
	potential_energy: float
	step_count: int

	@property
	def n_bodies(self) -> int:
		return int(self.masses.shape[0])

	@property
	def total_energy(self) -> float:
		return self.kinetic_energy + self.potential_energy


def _frozen(arr: np.ndarray) -> np.ndarray:
	out = np.array(arr, copy=True)
	out.setflags(write=False)
	return out


class SimulationState:

	def __init__(self, dtype: str | np.dtype = np.float32):
		self.dtype = np.dtype(dtype)
		self._mass: np.ndarray = np.empty(0, dtype=self.dtype)
		self._pos: np.ndarray = np.empty((0, 2), dtype=self.dtype)
		self._vel: np.ndarray = np.empty((0, 2), dtype=self.dtype)
		self._acc: np.ndarray = np.empty((0, 2), dtype=self.dtype)
		self.elapsed_time: float = 0.0
		self.kinetic_energy: float = 0.0
		self.potential_energy: float = 0.0
		self.step_count: int = 0

	@property
	def n_bodies(self) -> int:
		return int(self._mass.shape[0])

	def __len__(self) -> int:
		return self.n_bodies

	@property
	def pos(self) -> np.ndarray:
		return self._pos

	@property
	def vel(self) -> np.ndarray:
		return self._vel

	@property
	def mass(self) -> np.ndarray:
		return self._mass

	@property
	def acc(self) -> np.ndarray:
		return self._acc

	@pos.setter
	def pos(self, value: np.ndarray) -> None:
		self._pos[...] = self._as_pairs("pos", value, self._pos.shape)

	@vel.setter
	def vel(self, value: np.ndarray) -> None:
		self._vel[...] = self._as_pairs("vel", value, self._vel.shape)

	@mass.setter
	def mass(self, value: np.ndarray) -> None:
		arr = np.asarray(value, dtype=self.dtype).ravel()
		if arr.shape != self._mass.shape:
			raise ValueError(f"shape mismatch when assigning to state.mass: "
							 f"expected {self._mass.shape}, got {arr.shape}")
		if np.any(arr <= 0) or not np.all(np.isfinite(arr)):
			raise ValueError("all masses must be positive finite numbers")
		self._mass[...] = arr

	def _as_pairs(self, name: str, value, shape) -> np.ndarray:
		arr = np.asarray(value, dtype=self.dtype)
		if arr.ndim == 1:
			arr = arr.reshape(-1, 2)
		if arr.shape != shape:
			raise ValueError(f"shape mismatch when assigning to state.{name}: "
							 f"expected {shape}, got {arr.shape}")
		return arr

	def build_state(
		self,
		bodies: Sequence["Body"] | None = None,
		masses=None,
		positions=None,
		velocities=None,
	) -> "SimulationState":
		if bodies is not None:
			masses = [b.mass for b in bodies]
			positions = [(b.x, b.y) for b in bodies]
			velocities = [(b.vx, b.vy) for b in bodies]

		if masses is None or positions is None:
			raise ValueError("build_state needs either bodies or masses and positions")

		mass = np.asarray(masses, dtype=self.dtype).ravel()
		pos = np.asarray(positions, dtype=self.dtype).reshape(-1, 2)
		if velocities is None:
			vel = np.zeros_like(pos)
		else:
			vel = np.asarray(velocities, dtype=self.dtype).reshape(-1, 2)

		if mass.shape[0] < 1:
			raise ConfigError("a simulation state needs at least one body")
		if not (mass.shape[0] == pos.shape[0] == vel.shape[0]):
			raise ValueError(f"masses, positions and velocities disagree on the body count: "
							 f"{mass.shape[0]}, {pos.shape[0]}, {vel.shape[0]}")
		if np.any(mass <= 0) or not np.all(np.isfinite(mass)):
			raise ValueError("all masses must be positive finite numbers")

		self._mass = mass.copy()
		self._pos = pos.copy()
		self._vel = vel.copy()
		self._acc = np.zeros_like(self._pos)
		self.elapsed_time = 0.0
		self.kinetic_energy = 0.0
		self.potential_energy = 0.0
		self.step_count = 0
		return self

	@classmethod
	def from_bodies(cls, bodies: Sequence["Body"], dtype: str | np.dtype = np.float32) -> "SimulationState":
		return cls(dtype).build_state(bodies=bodies)

	@classmethod
	def from_arrays(cls, masses, positions, velocities=None,
					dtype: str | np.dtype = np.float32) -> "SimulationState":
		return cls(dtype).build_state(masses=masses, positions=positions, velocities=velocities)

	def body(self, idx: int) -> BodyView:
		if not -self.n_bodies <= idx < self.n_bodies:
			raise IndexError(f"body index {idx} out of range for {self.n_bodies} bodies")
		return BodyView(self, idx % self.n_bodies)

	@property
	def bodies(self) -> List[BodyView]:
		return [BodyView(self, i) for i in range(self.n_bodies)]

	def __iter__(self) -> Iterator[BodyView]:
		return iter(self.bodies)

	def commit(self, pos: np.ndarray, vel: np.ndarray, acc: np.ndarray) -> None:
		self._pos[...] = pos
		self._vel[...] = vel
		self._acc[...] = acc

	def snapshot(self) -> StateSnapshot:
		return StateSnapshot(
			masses=_frozen(self._mass),
			positions=_frozen(self._pos),
			velocities=_frozen(self._vel),
			accelerations=_frozen(self._acc),
			elapsed_time=float(self.elapsed_time),
			kinetic_energy=float(self.kinetic_energy),
			potential_energy=float(self.potential_energy),
			step_count=int(self.step_count),
		)

	def copy(self) -> "SimulationState":
		return copy.deepcopy(self)

	def __repr__(self) -> str:
		return (f"SimulationState(n_bodies={self.n_bodies}, dtype={self.dtype}, "
				f"elapsed_time={self.elapsed_time}, step_count={self.step_count})")
