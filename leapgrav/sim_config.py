from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple
import math

from . import constants as C

"""
This central configuration module defines all simulation parameters through the SimConfig dataclass. Key parameters include the body count, gravitational constant, fixed time quantum, interaction cutoff distance, the uniform randomization bounds for mass, position and speed, the storage precision of the state arrays, an optional softening length (zero reproduces the unguarded Newtonian force law), and the number of worker threads used by the force evaluator. The class provides copy and replace helpers for configuration inheritance and a validate method that rejects malformed settings with ConfigError. It serves as the single source of truth for simulation behavior, with every component reading its parameters from here.

"""

Range = Tuple[float, float]


class ConfigError(ValueError):
	"""Raised when a simulation parameter is out of its defined domain."""


@dataclass
class SimConfig:
	n_bodies: int = C.NUM_BODIES
	G: float = C.G
	dt: float = C.D_TIME
	cutoff_distance: float = C.LIGHT_YEAR
	mass_range: Range = (C.MIN_MASS, C.MAX_MASS)
	x_range: Range = (C.MIN_X, C.MAX_X)
	y_range: Range = (C.MIN_Y, C.MAX_Y)
	speed_range: Range = (C.MIN_V, C.MAX_V)
	seed: Optional[int] = None
	dtype: str = "float32"
	softening: float = 0.0
	n_workers: int = 1
	record_history: bool = False

	@property
	def half_dt(self) -> float:
		return 0.5 * self.dt

	def copy(self) -> "SimConfig":
		new = object.__new__(SimConfig)
		new.__dict__ = dict(getattr(self, "__dict__", {}))
		return new

	def replace(self, **changes) -> "SimConfig":
		return replace(self, **changes)

	def validate(self) -> "SimConfig":
		if int(self.n_bodies) < 1:
			raise ConfigError(f"n_bodies must be at least 1, got {self.n_bodies}")

		for name in ("mass_range", "x_range", "y_range", "speed_range"):
			lo, hi = _as_range(name, getattr(self, name))
			if lo > hi:
				raise ConfigError(f"{name} has min > max: ({lo}, {hi})")

		if self.mass_range[0] <= 0.0:
			raise ConfigError(f"mass_range must be strictly positive, got {self.mass_range}")
		if self.speed_range[0] < 0.0:
			raise ConfigError(f"speed_range holds magnitudes and must be >= 0, got {self.speed_range}")

		if not (math.isfinite(self.dt) and self.dt > 0.0):
			raise ConfigError(f"dt must be a positive finite number, got {self.dt}")
		if not self.cutoff_distance > 0.0:
			raise ConfigError(f"cutoff_distance must be positive, got {self.cutoff_distance}")
		if not math.isfinite(self.G):
			raise ConfigError(f"G must be finite, got {self.G}")
		if self.softening < 0.0:
			raise ConfigError(f"softening must be >= 0, got {self.softening}")
		if self.dtype not in C.STATE_DTYPES:
			raise ConfigError(f"dtype must be one of {C.STATE_DTYPES}, got {self.dtype!r}")
		if int(self.n_workers) < 1:
			raise ConfigError(f"n_workers must be at least 1, got {self.n_workers}")
		return self


def _as_range(name: str, value) -> Range:
	try:
		lo, hi = value
		lo, hi = float(lo), float(hi)
	except (TypeError, ValueError):
		raise ConfigError(f"{name} must be a (min, max) pair, got {value!r}") from None
	if not (math.isfinite(lo) and math.isfinite(hi)):
		raise ConfigError(f"{name} bounds must be finite, got {value!r}")
	return lo, hi
