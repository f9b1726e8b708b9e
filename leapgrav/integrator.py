from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .sim_config import SimConfig
from .forces import ForceEvaluator
from .integration_scheme_base import IntegrationScheme
from .leapfrog_scheme import LeapfrogScheme

if TYPE_CHECKING:
	from .simulation_state import SimulationState

"""
This central module implements the Integrator class that advances a SimulationState by one fixed time quantum per call. It owns the force evaluator and the integration scheme, passes the current positions, velocities, stored accelerations and masses to the scheme, commits the three returned arrays to the state together, and then advances the step counter and the elapsed time. The elapsed time is recomputed as step_count * dt so it never accumulates rounding. The integrator is the only writer of the body arrays; there is no recovery path, so non-finite values produced by the force law are committed as they are. It assumes the state was built with the same dtype the configuration asks for.

"""

logger = logging.getLogger(__name__)


class Integrator:

	def __init__(
		self,
		config: SimConfig | None = None,
		*,
		forces: ForceEvaluator | None = None,
		scheme: IntegrationScheme | None = None,
	) -> None:
		self.cfg = (config or SimConfig()).validate()
		self.dt = float(self.cfg.dt)
		self.forces = forces if forces is not None else ForceEvaluator.from_config(self.cfg)
		self._scheme = scheme if scheme is not None else LeapfrogScheme(self.forces)

	@property
	def scheme(self) -> IntegrationScheme:
		return self._scheme

	def step(self, state: "SimulationState") -> None:
		pos_new, vel_new, acc_new = self._scheme.advance(
			state.pos, state.vel, state.acc, state.mass, self.dt
		)
		state.commit(pos_new, vel_new, acc_new)

		state.step_count += 1
		state.elapsed_time = state.step_count * self.dt
		logger.debug("step %d committed, t=%.6e s", state.step_count, state.elapsed_time)

	def run(self, state: "SimulationState", n_steps: int) -> None:
		for _ in range(max(0, int(n_steps))):
			self.step(state)

	def close(self) -> None:
		close = getattr(self.forces, "close", None)
		if callable(close):
			close()
