"""
Impact resolver: applies chosen decisions to the business state.

Two conventions live here and are kept apart:

* Consequence path (resolve_decision): effects computed at generation time.
  cash is a delta, productProgress is added, every other key is the new value.
* Catalog path (apply_catalog_decisions): quarterly bulk submissions from a
  fixed catalog. Costs are deducted first, impacts are fractional multipliers,
  valuation is recomputed and the quarter advances.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from startup_sim.simulation_layer.errors import (
    DecisionClosedError,
    InvalidOptionError,
    UnknownDecisionTypeError,
)
from startup_sim.simulation_layer.models import (
    BusinessState,
    CatalogDecision,
    Decision,
    DecisionType,
    Event,
    EventType,
    next_period,
)
from startup_sim.simulation_layer.stat_rules import clamp, market_share_cap, round_half_up

logger = logging.getLogger(__name__)

DECISION_ICONS: Dict[DecisionType, Tuple[str, str]] = {
    DecisionType.MARKETING: ("fa-solid fa-bullhorn", "warning"),
    DecisionType.PRODUCT: ("fa-solid fa-code", "primary"),
    DecisionType.HIRING: ("fa-solid fa-users", "success"),
    DecisionType.FINANCE: ("fa-solid fa-chart-line", "info"),
    DecisionType.OPERATIONS: ("fa-solid fa-cogs", "secondary"),
}

# type -> choice -> (cost, impact). Market share impacts are fractions of the pool.
CATALOG: Dict[DecisionType, Dict[str, Tuple[float, Dict[str, float]]]] = {
    DecisionType.MARKETING: {
        "content": (25000, {"revenue": 0.05, "marketShare": 0.002}),
        "paid": (40000, {"revenue": 0.08, "marketShare": 0.004}),
        "influencer": (35000, {"revenue": 0.10, "marketShare": 0.003}),
        "conference": (50000, {"revenue": 0.07, "marketShare": 0.005, "valuation": 0.03}),
    },
    DecisionType.HIRING: {
        "engineers": (220000, {"expenses": 0.15, "employees": 2, "valuation": 0.05}),
        "sales": (240000, {"expenses": 0.17, "employees": 3, "revenue": 0.10}),
        "support": (110000, {"expenses": 0.08, "employees": 2, "revenue": 0.03}),
        "none": (0, {"expenses": -0.02}),
    },
    DecisionType.PRODUCT: {
        "features": (80000, {"expenses": 0.05, "revenue": 0.08, "marketShare": 0.002}),
        "performance": (60000, {"expenses": 0.04, "revenue": 0.04}),
        "mobile": (100000, {"expenses": 0.08, "revenue": 0.12, "marketShare": 0.003}),
        "enterprise": (75000, {"expenses": 0.06, "revenue": 0.15, "marketShare": 0.001}),
    },
    DecisionType.FINANCE: {
        "series_a": (0, {"cash": 2000000, "equity": 0.15, "valuation": 0.2}),
        "loan": (0, {"cash": 500000, "expenses": 0.03}),
        "bootstrap": (0, {}),
        "partnership": (0, {"cash": 1000000, "equity": 0.1, "marketShare": 0.005, "valuation": 0.1}),
    },
}

NO_FUNDING_CHOICE = "bootstrap"


def decision_event(state: BusinessState, decision: Decision, effects: Dict[str, float],
                   description: str) -> Event:
    icon, color = DECISION_ICONS.get(decision.decision_type, ("fa-solid fa-check", "primary"))
    return Event(
        business_id=state.id,
        quarter=state.current_quarter,
        year=state.current_year,
        event_type=EventType.INTERNAL,
        title=f"Decision: {decision.title}",
        description=description,
        impact=dict(effects),
        icon=icon,
        icon_color=color,
    )


def apply_effects(state: BusinessState, effects: Dict[str, float]) -> BusinessState:
    """Consequence-convention effects onto a copy of state, in fixed field order."""
    updated = replace(state)

    if effects.get("cash") is not None:
        updated.cash = state.cash + effects["cash"]
    if effects.get("revenue") is not None:
        updated.revenue = effects["revenue"]
    if effects.get("expenses") is not None:
        updated.expenses = effects["expenses"]
    if effects.get("customers") is not None:
        updated.customers = max(0, round_half_up(effects["customers"]))
    if effects.get("employees") is not None:
        updated.employees = max(1, round_half_up(effects["employees"]))
    if effects.get("valuation") is not None:
        updated.valuation = effects["valuation"]
    if effects.get("productProgress") is not None:
        updated.product_progress = clamp(state.product_progress + effects["productProgress"], 0, 100)
    if effects.get("marketShare") is not None:
        updated.market_share = clamp(effects["marketShare"], 0.0, 1.0)

    return updated


def resolve_decision(state: BusinessState, decision: Decision,
                     option_id: int) -> Tuple[BusinessState, Decision, Event]:
    """
    Apply the consequence of option_id to state.

    Returns (updated state, completed decision, decision event). Raises before
    touching anything when the option is unknown or the decision is closed.
    """
    if decision.is_completed:
        raise DecisionClosedError(decision.id)

    consequence = decision.consequence_for(option_id)
    if decision.option(option_id) is None or consequence is None:
        raise InvalidOptionError(option_id, decision.title)

    updated = apply_effects(state, consequence.effects)
    completed = replace(decision, is_completed=True, selected_option_id=option_id)
    event = decision_event(updated, decision, consequence.effects, consequence.description)

    logger.info(
        "Resolved '%s' with option %s (cash %.0f -> %.0f)",
        decision.title, option_id, state.cash, updated.cash,
    )
    return updated, completed, event


def lookup_choice(decision_type, choice: str) -> Tuple[DecisionType, float, Dict[str, float]]:
    dtype = DecisionType.parse(decision_type)
    if dtype not in CATALOG:
        raise UnknownDecisionTypeError(decision_type)
    options = CATALOG[dtype]
    if choice not in options:
        raise InvalidOptionError(choice, dtype.value)
    cost, impact = options[choice]
    return dtype, cost, dict(impact)


def catalog_valuation(revenue: float, market_share: float) -> float:
    """Annualized monthly revenue, plus 10% for every percentage point of share."""
    share_pct = market_share * 100
    return revenue * 12 * (1 + share_pct / 10)


def apply_catalog_decisions(
    state: BusinessState,
    choices: Iterable[Tuple[str, str]],
    competitor_count: Optional[int] = None,
) -> Tuple[BusinessState, List[CatalogDecision]]:
    """
    Apply a quarter's bulk submission of (type, choice) pairs.

    Every pair is validated before any change. Returns the new state, already
    rolled to the next quarter, and the CatalogDecision records stamped with
    the submission quarter. With competitor_count, market share is capped
    so every competitor keeps its floor.
    """
    resolved = [lookup_choice(dtype, choice) + (choice,) for dtype, choice in choices]

    updated = replace(state)
    updated.cash = state.cash - sum(cost for _, cost, _, _ in resolved)

    records: List[CatalogDecision] = []
    for dtype, cost, impact, choice in resolved:
        if impact.get("revenue"):
            updated.revenue = updated.revenue * (1 + impact["revenue"])
        if impact.get("expenses"):
            updated.expenses = updated.expenses * (1 + impact["expenses"])
        if impact.get("marketShare"):
            updated.market_share = updated.market_share + impact["marketShare"]
        if impact.get("valuation"):
            updated.valuation = updated.valuation * (1 + impact["valuation"])
        if impact.get("employees"):
            updated.employees = updated.employees + int(impact["employees"])
        if dtype == DecisionType.FINANCE and choice != NO_FUNDING_CHOICE and impact.get("cash"):
            updated.cash = updated.cash + impact["cash"]

        records.append(CatalogDecision(
            business_id=state.id,
            quarter=state.current_quarter,
            year=state.current_year,
            decision_type=dtype,
            choice=choice,
            cost=cost,
            impact=impact,
        ))

    share_limit = 1.0 if competitor_count is None else market_share_cap(competitor_count)
    updated.market_share = clamp(updated.market_share, 0.0, share_limit)
    updated.valuation = catalog_valuation(updated.revenue, updated.market_share)
    updated.current_quarter, updated.current_year = next_period(state.current_quarter, state.current_year)

    logger.info(
        "Applied %d catalog decisions: cash %.0f -> %.0f, now Q%d Y%d",
        len(records), state.cash, updated.cash, updated.current_quarter, updated.current_year,
    )
    return updated, records
