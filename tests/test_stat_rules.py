import math

import pytest

from startup_sim.simulation_layer import stat_rules
from startup_sim.simulation_layer.models import BusinessType
from tests.conftest import make_state


def test_round_half_up_rounds_halves_upward():
    assert stat_rules.round_half_up(2.5) == 3
    assert stat_rules.round_half_up(0.5) == 1
    assert stat_rules.round_half_up(-0.5) == 0
    assert stat_rules.round_half_up(2.4999) == 2


def test_product_progress_delta_uses_cash_factor_floor():
    state = make_state(employees=8, cash=250000, initial_capital=250000)
    assert stat_rules.product_progress_delta(state) == 28


def test_product_progress_delta_with_zero_initial_capital():
    state = make_state(employees=4, cash=100000, initial_capital=0)
    # ratio counts as 0, clamped up to 0.5
    assert stat_rules.product_progress_delta(state) == 20


def test_next_product_progress_is_capped_at_100():
    state = make_state(employees=100, cash=1e9, initial_capital=1000, product_progress=95)
    assert stat_rules.next_product_progress(state) == 100


@pytest.mark.parametrize(
    "business_type, expected",
    [
        (BusinessType.TECH, 120),
        (BusinessType.ECOMMERCE, 110),
        (BusinessType.SERVICE, 90),
        (BusinessType.MANUFACTURING, 100),
    ],
)
def test_revenue_per_customer_by_type(business_type, expected):
    assert stat_rules.revenue_per_customer(business_type) == pytest.approx(expected)


def test_quarterly_revenue_momentum_only_with_prior_revenue():
    fresh = make_state(customers=10, product_progress=100, revenue=0)
    running = make_state(customers=10, product_progress=100, revenue=1)
    assert stat_rules.quarterly_revenue(fresh) == 1200
    assert stat_rules.quarterly_revenue(running) == 1260


def test_quarterly_expenses_formula():
    state = make_state(employees=4, initial_capital=0, customers=0)
    assert stat_rules.quarterly_expenses(state) == 53200


def test_customer_count_needs_product_readiness():
    assert stat_rules.customer_count(make_state(customers=0, product_progress=0)) == 0


def test_customer_count_retention_plus_acquisition():
    state = make_state(customers=100, product_progress=100, expenses=100000)
    # retained round(100 * 0.95) + new round(10 * 1 * sqrt(3))
    assert stat_rules.customer_count(state) == 95 + 17


def test_valuation_uses_type_multiple_and_capital_floor():
    assert stat_rules.valuation(make_state(revenue=100000)) == 3200000
    assert stat_rules.valuation(make_state(revenue=0)) == 500000
    assert stat_rules.valuation(make_state(revenue=10000, business_type=BusinessType.MANUFACTURING,
                                           initial_capital=0)) == 60000


def test_cash_after_quarter_can_go_negative():
    state = make_state(cash=1000, revenue=0, expenses=5000)
    assert stat_rules.cash_after_quarter(state) == -4000


def test_market_share_is_capped_so_competitors_keep_floor():
    assert stat_rules.market_share_cap(4) == pytest.approx(0.96)
    state = make_state(market_share=0.99, customers=5000, product_progress=100, revenue=1e6)
    assert stat_rules.next_market_share(state, 4) == pytest.approx(0.96)


def test_market_share_growth_formula():
    state = make_state(market_share=0.005, customers=5, product_progress=28, revenue=403)
    expected = 0.005 + 0.01 * (5 / 1000 + 28 / 100 + 403 / 100000) / 3
    assert stat_rules.next_market_share(state, 3) == pytest.approx(round(expected, 4))


def test_safe_ratio_zero_denominator():
    assert stat_rules.safe_ratio(5, 0) == 0.0
    assert not math.isnan(stat_rules.safe_ratio(0, 0))
