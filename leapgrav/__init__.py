"""
This initialization file serves as the main entry point for the leapgrav package,
exposing its public API through a single namespace.

It re-exports the configuration (SimConfig, ConfigError), the body state store (Body,
BodyView, SimulationState, StateSnapshot), the initial condition generator, the cutoff
force evaluator, the kick-drift-kick integrator and its schemes, the energy diagnostics,
the energy history recorder, the text reporters, the validator, and the NBodySimulation
facade that a host drives once per frame.
"""

from .sim_config import SimConfig, ConfigError
from .simulation_validator import SimulationValidator

from .body import Body
from .body_view import BodyView
from .simulation_state import SimulationState, StateSnapshot
from .initial_condition_generator import InitialConditionGenerator, initialize
from .geometry_cache import geometry_buffers
from .forces import (
    ForceEvaluator,
    cutoff_accelerations,
    pairwise_contribution,
    reference_accelerations,
)
from .integration_scheme_base import IntegrationScheme
from .leapfrog_scheme import LeapfrogScheme
from .integrator import Integrator
from .diagnostics import (
    Diagnostics,
    kinetic_energy_of,
    potential_energy_of,
    pair_terms,
    pair_count,
    energy_drift,
)
from .energy_history import EnergyHistory
from .reporters import status_lines, elapsed_years
from .simulation import NBodySimulation




__all__ = [
    "SimConfig",
    "ConfigError",
    "SimulationValidator",
    "Body",
    "BodyView",
    "SimulationState",
    "StateSnapshot",
    "InitialConditionGenerator",
    "initialize",
    "geometry_buffers",
    "ForceEvaluator",
    "cutoff_accelerations",
    "pairwise_contribution",
    "reference_accelerations",
    "IntegrationScheme",
    "LeapfrogScheme",
    "Integrator",
    "Diagnostics",
    "kinetic_energy_of",
    "potential_energy_of",
    "pair_terms",
    "pair_count",
    "energy_drift",
    "EnergyHistory",
    "status_lines",
    "elapsed_years",
    "NBodySimulation",
]
