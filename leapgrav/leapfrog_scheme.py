"""
This module implements the kick-drift-kick leapfrog scheme.

The LeapfrogScheme class extends IntegrationScheme with the second-order symplectic
leapfrog: a half kick with the stored acceleration, a full drift with the half-step
velocity, one force evaluation on the complete set of drifted positions, and a second
half kick with the new acceleration. The force evaluation sees only drifted positions,
never a mix of old and new ones. The method returns the new positions, velocities and
accelerations without writing them anywhere.
"""

from __future__ import annotations
import numpy as np
from .integration_scheme_base import IntegrationScheme, Phase



class LeapfrogScheme(IntegrationScheme):
	name = "leapfrog"

	def advance(self, pos: np.ndarray, vel: np.ndarray, acc: np.ndarray,
				mass: np.ndarray, dt: float) -> Phase:
		h2 = 0.5 * dt
		vel_half = self.kick(vel, acc, h2)
		pos_new = self.drift(pos, vel_half, dt)
		acc_new = np.asarray(self.forces(pos_new, mass), dtype=pos.dtype)
		vel_new = self.kick(vel_half, acc_new, h2)
		return pos_new, vel_new, acc_new
