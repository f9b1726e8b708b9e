"""
This module implements BodyView, a proxy class providing Body-like access to a single
body stored in the SimulationState arrays.

Properties map attribute access (mass, x, y, vx, vy, ax, ay) onto the matching array
cells, so a caller can read or patch one body without copying the arrays. Writes go
through the state's dtype, and a mass write is rejected unless it is positive and
finite. The view assumes the index stays within bounds, which holds because the body
count of a state never changes.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING
if TYPE_CHECKING:
	from .simulation_state import SimulationState
	from .body import Body




class BodyView:
	__slots__ = ("_state", "_i")

	def __init__(self, state: "SimulationState", idx: int) -> None:
		self._state = state
		self._i = int(idx)

	@property
	def index(self) -> int:
		return self._i

	@property
	def mass(self) -> float:
		return float(self._state._mass[self._i])
	@mass.setter
	def mass(self, v: float) -> None:
		v = float(v)
		if not (v > 0.0 and math.isfinite(v)):
			raise ValueError(f"body {self._i}: mass must be a positive finite number, got {v}")
		self._state._mass[self._i] = v

	@property
	def x(self) -> float:
		return float(self._state._pos[self._i, 0])
	@x.setter
	def x(self, v: float) -> None:
		self._state._pos[self._i, 0] = float(v)

	@property
	def y(self) -> float:
		return float(self._state._pos[self._i, 1])
	@y.setter
	def y(self, v: float) -> None:
		self._state._pos[self._i, 1] = float(v)

	@property
	def vx(self) -> float:
		return float(self._state._vel[self._i, 0])
	@vx.setter
	def vx(self, v: float) -> None:
		self._state._vel[self._i, 0] = float(v)

	@property
	def vy(self) -> float:
		return float(self._state._vel[self._i, 1])
	@vy.setter
	def vy(self, v: float) -> None:
		self._state._vel[self._i, 1] = float(v)

	@property
	def ax(self) -> float:
		return float(self._state._acc[self._i, 0])

	@property
	def ay(self) -> float:
		return float(self._state._acc[self._i, 1])

	def to_body(self) -> "Body":
		from .body import Body
		return Body(self.mass, self.x, self.y, self.vx, self.vy, self.ax, self.ay)

	def __repr__(self) -> str:
		return (f"Body(mass={self.mass}, x={self.x}, y={self.y}, "
				f"vx={self.vx}, vy={self.vy}, ax={self.ax}, ay={self.ay})")
