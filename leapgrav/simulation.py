"""
This module implements NBodySimulation, the object a host application drives once per
frame.

A simulation owns one SimulationState, one Integrator and one Diagnostics instance. step
advances the state by exactly one time quantum and then recomputes the kinetic and
potential energy from the committed state; presentation code reads the result through
snapshot, positions and the energy properties, all of which are copies or plain floats.
Wall-clock time plays no part: every call advances simulated time by the same dt. When
the configuration asks for it, an EnergyHistory row is recorded after every step. The
first time the state stops being finite a warning is logged; the state itself is left
as the integrator produced it.
"""

from __future__ import annotations
import logging
from typing import Optional, Sequence, TYPE_CHECKING
import numpy as np

from .sim_config import SimConfig
from .simulation_state import SimulationState, StateSnapshot
from .initial_condition_generator import InitialConditionGenerator, make_rng
from .integrator import Integrator
from .diagnostics import Diagnostics
from .energy_history import EnergyHistory
from .simulation_validator import SimulationValidator

if TYPE_CHECKING:
	from .body import Body


logger = logging.getLogger(__name__)


class NBodySimulation:

	def __init__(self, config: SimConfig | None = None, state: SimulationState | None = None):
		self.cfg = (config or SimConfig()).validate()
		if state is None:
			state = InitialConditionGenerator(self.cfg).create_state()
		self._state = state
		self._integrator = Integrator(self.cfg)
		self.diagnostics = Diagnostics(self.cfg)
		self.history: Optional[EnergyHistory] = EnergyHistory() if self.cfg.record_history else None
		self._warned_non_finite = False

	@classmethod
	def random(cls, n: int, seed=None, config: SimConfig | None = None) -> "NBodySimulation":
		cfg = (config or SimConfig()).replace(n_bodies=int(n))
		gen = InitialConditionGenerator(cfg, rng=make_rng(seed if seed is not None else cfg.seed))
		return cls(cfg, gen.create_state())

	@classmethod
	def from_arrays(cls, masses, positions, velocities=None,
					config: SimConfig | None = None) -> "NBodySimulation":
		cfg = (config or SimConfig())
		if velocities is None:
			velocities = np.zeros((len(masses), 2))
		if not SimulationValidator.state_is_valid(masses, positions, velocities):
			SimulationValidator.report_invalid_state("from_arrays", masses, positions, velocities)
			raise ValueError("invalid initial state: see log for details")
		state = SimulationState(cfg.dtype).build_state(masses=masses, positions=positions,
													   velocities=velocities)
		return cls(cfg.replace(n_bodies=state.n_bodies), state)

	@classmethod
	def from_bodies(cls, bodies: Sequence["Body"], config: SimConfig | None = None) -> "NBodySimulation":
		return cls.from_arrays(
			[b.mass for b in bodies],
			[(b.x, b.y) for b in bodies],
			[(b.vx, b.vy) for b in bodies],
			config=config,
		)

	@property
	def state(self) -> SimulationState:
		return self._state

	@property
	def n_bodies(self) -> int:
		return self._state.n_bodies

	@property
	def dt(self) -> float:
		return self._integrator.dt

	@property
	def elapsed_time(self) -> float:
		return self._state.elapsed_time

	@property
	def kinetic_energy(self) -> float:
		return self._state.kinetic_energy

	@property
	def potential_energy(self) -> float:
		return self._state.potential_energy

	@property
	def total_energy(self) -> float:
		return self._state.kinetic_energy + self._state.potential_energy

	def step(self) -> None:
		self._integrator.step(self._state)
		self.diagnostics.update(self._state)

		if not self._warned_non_finite and not SimulationValidator.all_finite(self._state):
			logger.warning("non-finite body state after step %d (coincident bodies?)",
						   self._state.step_count)
			self._warned_non_finite = True

		if self.history is not None:
			self.history.record(self._state)

	def run(self, n_steps: int) -> None:
		for _ in range(max(0, int(n_steps))):
			self.step()

	def snapshot(self) -> StateSnapshot:
		return self._state.snapshot()

	def positions(self) -> np.ndarray:
		return self._state.pos.copy()

	def close(self) -> None:
		self._integrator.close()

	def __enter__(self) -> "NBodySimulation":
		return self

	def __exit__(self, *exc) -> None:
		self.close()

	def __repr__(self) -> str:
		return (f"NBodySimulation(n_bodies={self.n_bodies}, dt={self.dt}, "
				f"elapsed_time={self.elapsed_time})")
