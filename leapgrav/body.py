"""
This module defines the Body class, a simple data container for an individual point mass
in the simulation.

The class stores mass, position x/y, velocity vx/vy and acceleration ax/ay as
floating-point attributes and provides a clean string representation for debugging. It
serves as the basic building block for hand-written initial conditions before conversion
to the array format of SimulationState. Acceleration defaults to zero because it only
becomes meaningful after the first force evaluation.
"""
class Body:
	def __init__(self, mass: float, x: float, y: float, vx: float = 0.0, vy: float = 0.0,
				 ax: float = 0.0, ay: float = 0.0):
		self.mass = float(mass)
		self.x = float(x)
		self.y = float(y)
		self.vx = float(vx)
		self.vy = float(vy)
		self.ax = float(ax)
		self.ay = float(ay)

	def __repr__(self) -> str:
		return (f"Body(mass={self.mass}, x={self.x}, y={self.y}, vx={self.vx}, vy={self.vy}, "
				f"ax={self.ax}, ay={self.ay})")
