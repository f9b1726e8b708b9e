"""
This abstract base class defines the interface for numerical integration schemes.

The IntegrationScheme class holds the force evaluator and provides the two primitive
operators shared by splitting methods: kick, which advances velocities by an
acceleration times a step, and drift, which advances positions by a velocity times a
step. Both return new arrays and never touch the simulation state, so a scheme can
build a whole step out of local temporaries and hand the result back to the integrator
for a single commit. Subclasses implement advance.
"""

from __future__ import annotations
from typing import Callable, Tuple
import numpy as np


AccelFn = Callable[[np.ndarray, np.ndarray], np.ndarray]
Phase = Tuple[np.ndarray, np.ndarray, np.ndarray]


class IntegrationScheme:
	name = "base"

	def __init__(self, forces: AccelFn) -> None:
		self.forces = forces

	@staticmethod
	def kick(vel: np.ndarray, acc: np.ndarray, h: float) -> np.ndarray:
		return vel + acc * vel.dtype.type(h)

	@staticmethod
	def drift(pos: np.ndarray, vel: np.ndarray, h: float) -> np.ndarray:
		return pos + vel * pos.dtype.type(h)

	def advance(
		self,
		pos: np.ndarray,
		vel: np.ndarray,
		acc: np.ndarray,
		mass: np.ndarray,
		dt: float,
	) -> Phase:
		raise NotImplementedError(f"{type(self).__name__} does not implement advance()")

	def __repr__(self) -> str:
		return f"{type(self).__name__}(forces={self.forces!r})"
