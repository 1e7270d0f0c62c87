from dataclasses import replace

import pytest

from startup_sim.simulation_layer import decision_catalog
from startup_sim.simulation_layer.errors import (
    DecisionClosedError,
    InvalidOptionError,
    UnknownDecisionTypeError,
)
from startup_sim.simulation_layer.impact_resolver import (
    apply_catalog_decisions,
    apply_effects,
    catalog_valuation,
    resolve_decision,
)
from startup_sim.simulation_layer.models import (
    Consequence,
    Decision,
    DecisionOption,
    DecisionType,
    EventType,
    OptionMetrics,
)
from tests.conftest import make_state


def build_decision(state, builder=decision_catalog.product_focus, decision_type=DecisionType.PRODUCT):
    template = builder(state)
    return Decision(
        business_id=state.id,
        quarter=state.current_quarter,
        year=state.current_year,
        decision_type=decision_type,
        title=template.title,
        description=template.description,
        options=template.options,
        consequences=template.consequences,
        deadline=2,
        id=7,
    )


def single_option_decision(effects):
    option = DecisionOption(1, "Only", "", OptionMetrics(0, "Immediate", "Low"))
    return Decision(
        business_id=1, quarter=1, year=1, decision_type=DecisionType.OPERATIONS,
        title="Custom", description="", options=[option],
        consequences=[Consequence(1, effects, "done")], deadline=2,
    )


def test_resolve_applies_delta_and_replacement_effects():
    state = make_state(cash=100000, expenses=65000, product_progress=10)
    decision = build_decision(state)

    updated, completed, event = resolve_decision(state, decision, 1)

    assert updated.cash == 82000
    assert updated.product_progress == 25
    assert updated.expenses == 71000
    assert completed.is_completed and completed.selected_option_id == 1
    assert not decision.is_completed
    assert event.title == "Decision: Product Development Focus"
    assert event.event_type == EventType.INTERNAL
    assert event.impact == decision.consequences[0].effects


def test_invalid_option_leaves_state_unchanged():
    state = make_state()
    snapshot = replace(state)
    decision = build_decision(state)

    with pytest.raises(InvalidOptionError):
        resolve_decision(state, decision, 9)

    assert state == snapshot
    assert not decision.is_completed


def test_option_without_consequence_is_invalid():
    state = make_state()
    decision = build_decision(state)
    decision = replace(decision, consequences=decision.consequences[:2])

    with pytest.raises(InvalidOptionError):
        resolve_decision(state, decision, 3)


def test_completed_decision_is_closed():
    state = make_state()
    decision = replace(build_decision(state), is_completed=True)

    with pytest.raises(DecisionClosedError):
        resolve_decision(state, decision, 1)


def test_progress_is_added_and_clamped():
    assert apply_effects(make_state(product_progress=2), {"productProgress": -5}).product_progress == 0
    assert apply_effects(make_state(product_progress=95), {"productProgress": 15}).product_progress == 100


def test_counts_and_share_are_bounded():
    updated = apply_effects(make_state(), {"customers": -3.2, "employees": 0, "marketShare": 1.5})
    assert updated.customers == 0
    assert updated.employees == 1
    assert updated.market_share == 1.0


def test_customers_are_rounded_half_up():
    updated = apply_effects(make_state(customers=0), {"customers": 2.5})
    assert updated.customers == 3


@pytest.mark.parametrize("employees, expected", [(2.5, 3), (3.2, 3), (0.4, 1), (-2, 1)])
def test_employee_effect_is_a_whole_headcount_of_at_least_one(employees, expected):
    assert apply_effects(make_state(), {"employees": employees}).employees == expected


def test_zero_valued_effect_still_applies():
    updated, _, _ = resolve_decision(make_state(revenue=5000), single_option_decision({"revenue": 0}), 1)
    assert updated.revenue == 0


def test_catalog_cost_is_deducted_exactly():
    state = make_state(cash=500000)
    updated, records = apply_catalog_decisions(state, [("marketing", "content")])

    assert updated.cash == 475000
    assert records[0].cost == 25000
    assert records[0].decision_type == DecisionType.MARKETING


def test_catalog_impacts_are_multiplicative():
    state = make_state(cash=500000, revenue=100000, expenses=80000, employees=8, market_share=0.01)

    updated, _ = apply_catalog_decisions(state, [("hiring", "sales"), ("product", "mobile")])

    assert updated.revenue == pytest.approx(100000 * 1.10 * 1.12)
    assert updated.expenses == pytest.approx(80000 * 1.17 * 1.08)
    assert updated.employees == 11
    assert updated.market_share == pytest.approx(0.013)
    assert updated.cash == 500000 - 240000 - 100000


def test_catalog_valuation_is_recomputed():
    state = make_state(revenue=100000, market_share=0.01, valuation=1)
    updated, _ = apply_catalog_decisions(state, [("marketing", "conference")])

    assert updated.valuation == pytest.approx(catalog_valuation(updated.revenue, updated.market_share))
    # 1.5 percentage points of share adds 15%
    assert updated.valuation == pytest.approx(107000 * 12 * 1.15)


def test_catalog_valuation_reads_share_in_percentage_points():
    updated, _ = apply_catalog_decisions(make_state(revenue=100000, market_share=0.005), [("funding", "bootstrap")])
    assert updated.valuation == pytest.approx(1260000)
    assert catalog_valuation(100000, 0.0) == pytest.approx(1200000)


def test_catalog_funding_adds_cash_except_bootstrap():
    state = make_state(cash=100000)

    funded, _ = apply_catalog_decisions(state, [("funding", "series_a")])
    bootstrapped, _ = apply_catalog_decisions(state, [("finance", "bootstrap")])

    assert funded.cash == 2100000
    assert bootstrapped.cash == 100000


def test_catalog_advances_the_quarter():
    updated, records = apply_catalog_decisions(make_state(current_quarter=4, current_year=2), [("hiring", "none")])
    assert (updated.current_quarter, updated.current_year) == (1, 3)
    assert (records[0].quarter, records[0].year) == (4, 2)


def test_catalog_market_share_is_clamped():
    updated, _ = apply_catalog_decisions(make_state(market_share=0.999), [("funding", "partnership")])
    assert updated.market_share == 1.0


def test_catalog_market_share_leaves_room_for_competitor_floor():
    state = make_state(market_share=0.985)
    updated, _ = apply_catalog_decisions(state, [("funding", "partnership")], competitor_count=3)
    assert updated.market_share == pytest.approx(0.97)


def test_catalog_rejects_before_any_change():
    state = make_state()
    snapshot = replace(state)

    with pytest.raises(InvalidOptionError):
        apply_catalog_decisions(state, [("marketing", "content"), ("marketing", "billboards")])
    with pytest.raises(UnknownDecisionTypeError):
        apply_catalog_decisions(state, [("marketing", "content"), ("legal", "lawyers")])
    with pytest.raises(UnknownDecisionTypeError):
        apply_catalog_decisions(state, [("operations", "office")])

    assert state == snapshot
