"""
This module centralizes the physical constants and randomization bounds used by the
simulation. All values are SI: meters, kilograms, seconds. The time quantum and the
interaction cutoff are fixed; the mass, position and speed bounds feed the default
SimConfig and therefore the initial condition generator.
"""

NUM_BODIES = 1000

G = 6.67e-11                 # m^3 kg^-1 s^-2
D_TIME = 2.0e7               # s per integration step
D_TIME_HALF = 0.5 * D_TIME
LIGHT_YEAR = 9.46e15         # m, interaction cutoff
SECONDS_PER_YEAR = 3.154e7

MIN_X = -5.0e14
MAX_X = 5.0e14
MIN_Y = -5.0e14
MAX_Y = 5.0e14

MIN_MASS = 1.0e15
MAX_MASS = 9.0e29

MIN_V = 1.0e3
MAX_V = 9.0e3

STATE_DTYPES = ("float32", "float64")


__all__ = [
	"NUM_BODIES",
	"G",
	"D_TIME",
	"D_TIME_HALF",
	"LIGHT_YEAR",
	"SECONDS_PER_YEAR",
	"MIN_X",
	"MAX_X",
	"MIN_Y",
	"MAX_Y",
	"MIN_MASS",
	"MAX_MASS",
	"MIN_V",
	"MAX_V",
	"STATE_DTYPES",
]
