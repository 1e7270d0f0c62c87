"""
Quarter advancer: one full business-state transition.

Order of a transition:
    pending decisions -> quarter roll -> stat rules -> competitor rebalance
    -> events -> financial record -> next decisions -> advice
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from startup_sim.simulation_layer.advisory_rules import AdvisoryRules
from startup_sim.simulation_layer.competitor_model import CompetitorModel
from startup_sim.simulation_layer.decision_catalog import DecisionCatalog
from startup_sim.simulation_layer.event_rules import EventRules
from startup_sim.simulation_layer.impact_resolver import resolve_decision
from startup_sim.simulation_layer.models import (
    AdviceItem,
    BusinessState,
    Competitor,
    Decision,
    Event,
    FinancialRecord,
    next_period,
)
from startup_sim.simulation_layer.randomness import RandomSource
from startup_sim.simulation_layer import stat_rules
from startup_sim.simulation_layer.stat_rules import round_half_up

logger = logging.getLogger(__name__)

# Display breakdown of quarterly expenses
EXPENSE_BREAKDOWN: Dict[str, float] = {
    "marketing_cost": 0.30,
    "development_cost": 0.40,
    "operations_cost": 0.10,
    "hr_cost": 0.15,
    "other_costs": 0.05,
}


@dataclass
class AdvanceResult:
    business: BusinessState
    financial_record: FinancialRecord
    events: List[Event] = field(default_factory=list)
    decisions: List[Decision] = field(default_factory=list)
    advice: List[AdviceItem] = field(default_factory=list)
    competitors: List[Competitor] = field(default_factory=list)
    resolved_decisions: List[Decision] = field(default_factory=list)


def build_financial_record(state: BusinessState) -> FinancialRecord:
    costs = {name: round_half_up(state.expenses * ratio) for name, ratio in EXPENSE_BREAKDOWN.items()}
    return FinancialRecord(
        business_id=state.id,
        quarter=state.current_quarter,
        year=state.current_year,
        revenue=state.revenue,
        expenses=state.expenses,
        profit=state.revenue - state.expenses,
        cash=state.cash,
        valuation=state.valuation,
        customers=state.customers,
        market_share=state.market_share,
        employees=state.employees,
        **costs,
    )


def simulate_stats(state: BusinessState, competitor_count: int) -> BusinessState:
    """Stat rules on an already-rolled state. Each step sees the previous steps' results."""
    s = replace(state)
    s.product_progress = stat_rules.next_product_progress(s)
    s.customers = stat_rules.customer_count(s)
    s.revenue = stat_rules.quarterly_revenue(s)
    s.expenses = stat_rules.quarterly_expenses(s)
    s.market_share = stat_rules.next_market_share(s, competitor_count)
    s.valuation = stat_rules.valuation(s)
    s.cash = stat_rules.cash_after_quarter(s)
    s.quarterly_burn_rate = s.expenses
    return s


class QuarterAdvancer:
    """Runs quarter transitions. Holds rule objects only, never business state."""

    def __init__(
        self,
        competitor_model: Optional[CompetitorModel] = None,
        event_rules: Optional[EventRules] = None,
        decision_catalog: Optional[DecisionCatalog] = None,
        advisory_rules: Optional[AdvisoryRules] = None,
    ):
        self.competitor_model = competitor_model or CompetitorModel()
        self.event_rules = event_rules or EventRules()
        self.decision_catalog = decision_catalog or DecisionCatalog()
        self.advisory_rules = advisory_rules or AdvisoryRules()

    @classmethod
    def from_settings(cls, settings) -> "QuarterAdvancer":
        sim = settings.simulation
        return cls(
            event_rules=EventRules(random_event_probability=sim.random_event_probability),
            decision_catalog=DecisionCatalog(crisis_probability=sim.crisis_decision_probability),
            advisory_rules=AdvisoryRules(min_items=sim.advice_min_items, max_items=sim.advice_max_items),
        )

    def advance(
        self,
        state: BusinessState,
        competitors: Sequence[Competitor],
        rng: RandomSource,
        pending: Sequence[Tuple[Decision, int]] = (),
    ) -> AdvanceResult:
        """
        Advance state by one quarter.

        pending holds (decision, option_id) pairs resolved before the roll.
        Nothing passed in is mutated; any error aborts the whole transition.
        """
        events: List[Event] = []
        resolved: List[Decision] = []

        current = state
        for decision, option_id in pending:
            current, completed, event = resolve_decision(current, decision, option_id)
            resolved.append(completed)
            events.append(event)

        before = current
        rolled = replace(current)
        rolled.current_quarter, rolled.current_year = next_period(current.current_quarter, current.current_year)

        after = simulate_stats(rolled, len(competitors))
        updated_competitors = self.competitor_model.rebalance(after.market_share, list(competitors))

        events.extend(self.event_rules.evaluate(before, after, rng))
        record = build_financial_record(after)
        decisions = self.decision_catalog.generate_quarterly(after, rng)
        advice = self.advisory_rules.quarterly_advice(after, record, rng, previous_customers=before.customers)

        logger.info(
            "Advanced '%s' to Q%d Y%d: revenue %.0f, expenses %.0f, cash %.0f, share %.4f",
            after.name, after.current_quarter, after.current_year,
            after.revenue, after.expenses, after.cash, after.market_share,
        )
        return AdvanceResult(
            business=after,
            financial_record=record,
            events=events,
            decisions=decisions,
            advice=advice,
            competitors=updated_competitors,
            resolved_decisions=resolved,
        )
