"""
Stat update rules: next-quarter product, revenue, expense, customer,
market-share and valuation figures computed from the current business state.

All functions are pure and total over non-negative inputs.
"""

import math
from typing import Dict

from startup_sim.simulation_layer.models import BusinessState, BusinessType

BASE_PROGRESS_RATE = 10
BASE_REVENUE_PER_CUSTOMER = 100
EMPLOYEE_QUARTERLY_COST = 7000
BASE_FIXED_COSTS = 10000
COST_PER_CUSTOMER = 50
MOMENTUM_GROWTH = 1.05

REVENUE_PER_CUSTOMER_MULTIPLIER: Dict[BusinessType, float] = {
    BusinessType.TECH: 1.2,
    BusinessType.ECOMMERCE: 1.1,
    BusinessType.SERVICE: 0.9,
    BusinessType.MANUFACTURING: 1.0,
}

VALUATION_MULTIPLE: Dict[BusinessType, float] = {
    BusinessType.TECH: 8,
    BusinessType.ECOMMERCE: 3,
    BusinessType.SERVICE: 2,
    BusinessType.MANUFACTURING: 1.5,
}
DEFAULT_VALUATION_MULTIPLE = 4

# Every competitor keeps at least this share of the pool
COMPETITOR_SHARE_FLOOR = 0.01


def round_half_up(value: float) -> int:
    """Round halves toward +inf: 2.5 -> 3, -2.5 -> -2. Not banker's rounding."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def product_progress_delta(state: BusinessState) -> int:
    """Quarterly progress: more staff and a healthier cash position build faster."""
    employee_factor = math.sqrt(max(0, state.employees)) * 2
    cash_factor = clamp(safe_ratio(state.cash, state.initial_capital * 2), 0.5, 1.5)
    return round_half_up(BASE_PROGRESS_RATE * employee_factor * cash_factor)


def next_product_progress(state: BusinessState) -> float:
    return clamp(state.product_progress + product_progress_delta(state), 0, 100)


def revenue_per_customer(business_type: BusinessType) -> float:
    multiplier = REVENUE_PER_CUSTOMER_MULTIPLIER.get(business_type, 1.0)
    return BASE_REVENUE_PER_CUSTOMER * multiplier


def quarterly_revenue(state: BusinessState) -> int:
    base_revenue = state.customers * revenue_per_customer(state.business_type)
    product_factor = 0.5 + state.product_progress / 200  # 0.5 ~ 1.0
    growth_factor = MOMENTUM_GROWTH if state.revenue > 0 else 1.0
    return round_half_up(base_revenue * product_factor * growth_factor)


def quarterly_expenses(state: BusinessState) -> int:
    employee_cost = state.employees * EMPLOYEE_QUARTERLY_COST
    fixed_costs = BASE_FIXED_COSTS + state.initial_capital * 0.01
    variable_costs = state.customers * COST_PER_CUSTOMER
    scaling_factor = math.sqrt(max(0, state.employees)) * 0.2
    return round_half_up((employee_cost + fixed_costs + variable_costs) * (1 + scaling_factor))


def customer_count(state: BusinessState) -> int:
    """Retained customers plus new acquisitions driven by marketing spend (30% of expenses)."""
    product_readiness = min(1.0, state.product_progress / 75)
    marketing_reach = math.sqrt(max(0.0, state.expenses * 0.3 / 10000))
    new_customers = round_half_up(10 * product_readiness * marketing_reach)

    # 85% ~ 95%
    retention_rate = 0.85 + state.product_progress / 1000
    retained = round_half_up(state.customers * retention_rate)
    return max(0, retained + new_customers)


def market_share_cap(competitor_count: int) -> float:
    """Largest share the business can hold while every competitor keeps its floor."""
    return clamp(1 - COMPETITOR_SHARE_FLOOR * competitor_count, 0.0, 1.0)


def next_market_share(state: BusinessState, competitor_count: int) -> float:
    customer_factor = state.customers / 1000
    product_factor = state.product_progress / 100
    revenue_factor = state.revenue / 100000
    base_growth = 0.01 * (customer_factor + product_factor + revenue_factor) / 3

    new_share = min(market_share_cap(competitor_count), state.market_share + base_growth)
    return round(clamp(new_share, 0.0, 1.0), 4)


def valuation(state: BusinessState) -> int:
    annual_revenue = state.revenue * 4
    multiple = VALUATION_MULTIPLE.get(state.business_type, DEFAULT_VALUATION_MULTIPLE)
    value = annual_revenue * multiple

    # Early-stage floor
    if value < state.initial_capital * 2:
        value = state.initial_capital * 2
    return round_half_up(value)


def cash_after_quarter(state: BusinessState) -> float:
    """No floor: negative cash is a crisis signal for the advisory rules."""
    return state.cash + (state.revenue - state.expenses)
