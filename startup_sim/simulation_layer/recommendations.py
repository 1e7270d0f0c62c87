"""
Rule-based recommended choice for each bulk catalog category.
"""

from startup_sim.simulation_layer.errors import UnknownDecisionTypeError
from startup_sim.simulation_layer.models import BusinessState, BusinessType, DecisionType


def recommend_choice(state: BusinessState, decision_type) -> str:
    dtype = DecisionType.parse(decision_type)

    if dtype == DecisionType.MARKETING:
        if state.market_share < 0.01:
            return "paid"
        if state.market_share < 0.05:
            return "influencer"
        return "conference"

    if dtype == DecisionType.HIRING:
        if state.revenue > state.expenses * 1.3:
            return "engineers"
        if state.revenue < state.expenses:
            return "none"
        return "sales"

    if dtype == DecisionType.PRODUCT:
        if state.business_type == BusinessType.TECH and state.current_year == 1:
            return "mobile"
        if state.revenue > 200000:
            return "enterprise"
        return "performance"

    if dtype == DecisionType.FINANCE:
        if state.cash < state.expenses * 3:
            return "series_a"
        if state.valuation > 5000000:
            return "partnership"
        return "bootstrap"

    raise UnknownDecisionTypeError(decision_type)
