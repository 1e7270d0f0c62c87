"""
Simulation Layer - quarterly business-state transition engine.

Provides:
- QuarterAdvancer: one full quarter transition
- resolve_decision / apply_catalog_decisions: the two decision conventions
- create_company: new business with competitors and first decisions
"""

from startup_sim.simulation_layer.company_setup import SetupResult, create_company
from startup_sim.simulation_layer.errors import (
    DecisionClosedError,
    DegenerateStateWarning,
    InvalidOptionError,
    SimulationError,
    UnknownDecisionTypeError,
)
from startup_sim.simulation_layer.impact_resolver import apply_catalog_decisions, resolve_decision
from startup_sim.simulation_layer.quarter_advancer import AdvanceResult, QuarterAdvancer
from startup_sim.simulation_layer.randomness import RandomSource, SeededRandom

__all__ = [
    # Engine
    "QuarterAdvancer",
    "AdvanceResult",
    "resolve_decision",
    "apply_catalog_decisions",
    "create_company",
    "SetupResult",
    # Randomness
    "RandomSource",
    "SeededRandom",
    # Errors
    "SimulationError",
    "InvalidOptionError",
    "UnknownDecisionTypeError",
    "DecisionClosedError",
    "DegenerateStateWarning",
]
