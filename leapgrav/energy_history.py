import numpy as np
import pandas as pd
from typing import Dict, List, Optional, TYPE_CHECKING

from .constants import SECONDS_PER_YEAR
from .diagnostics import energy_drift

if TYPE_CHECKING:
	from .simulation_state import SimulationState

"""
This module records the energy diagnostics of a run step by step. The EnergyHistory class appends one row per committed step with the step number, elapsed time in seconds and years, kinetic, potential and total energy, and the drift of the total energy relative to the first recorded row. Rows are kept as plain dicts and turned into a pandas DataFrame on demand; save_csv exports that frame. max_abs_drift summarises how well the integrator kept the total energy. The recorder never touches the state it reads from.


"""


COLUMNS = [
	"step",
	"elapsed_time",
	"elapsed_years",
	"kinetic_energy",
	"potential_energy",
	"total_energy",
	"relative_drift",
]


class EnergyHistory:
	def __init__(self) -> None:
		self.rows: List[Dict[str, float]] = []
		self._e0: Optional[float] = None

	def __len__(self) -> int:
		return len(self.rows)

	@property
	def reference_energy(self) -> Optional[float]:
		return self._e0

	def record(self, state: "SimulationState") -> Dict[str, float]:
		total = float(state.kinetic_energy) + float(state.potential_energy)
		if self._e0 is None:
			self._e0 = total
		row = {
			"step": int(state.step_count),
			"elapsed_time": float(state.elapsed_time),
			"elapsed_years": float(state.elapsed_time) / SECONDS_PER_YEAR,
			"kinetic_energy": float(state.kinetic_energy),
			"potential_energy": float(state.potential_energy),
			"total_energy": total,
			"relative_drift": energy_drift(self._e0, total),
		}
		self.rows.append(row)
		return row

	def to_dataframe(self) -> pd.DataFrame:
		return pd.DataFrame(self.rows, columns=COLUMNS)

	def save_csv(self, filename: str) -> int:
		df = self.to_dataframe()
		df.to_csv(filename, index=False)
		return len(df)

	def max_abs_drift(self) -> float:
		if not self.rows:
			return 0.0
		return float(np.max(np.abs(self.to_dataframe()["relative_drift"].to_numpy())))

	def reset(self) -> None:
		self.rows = []
		self._e0 = None
