from __future__ import annotations
from typing import List

from .constants import SECONDS_PER_YEAR
from .simulation_state import StateSnapshot

"""
Plain-text status lines for whatever draws the simulation: elapsed years and the two energy sums, in the same wording and two-digit scientific format the on-screen labels use.
"""


def elapsed_years(seconds: float) -> float:
    return float(seconds) / SECONDS_PER_YEAR


def _sci(value: float) -> str:
    return f"{value:.2E}"


def elapsed_line(snap: StateSnapshot) -> str:
    return f"elapsed_year:      {_sci(elapsed_years(snap.elapsed_time))} year"


def kinetic_line(snap: StateSnapshot) -> str:
    return f"sum of kinetic energy:      {_sci(snap.kinetic_energy)} J"


def potential_line(snap: StateSnapshot) -> str:
    return f"sum of potential energy:      {_sci(snap.potential_energy)} J"


def status_lines(snap: StateSnapshot) -> List[str]:
    return [elapsed_line(snap), kinetic_line(snap), potential_line(snap)]
