from dataclasses import replace

from startup_sim.simulation_layer.event_rules import (
    MARKET_SHOCKS,
    QUARTERLY_MARKET_EVENTS,
    EventRules,
    roll_market_shock,
)
from startup_sim.simulation_layer.models import EventType
from tests.conftest import SequenceRandom, make_state

NO_RANDOM_EVENT = SequenceRandom([0.99])


def titles(events):
    return [e.title for e in events]


def test_revenue_growth_event():
    before = make_state(revenue=100000)
    after = replace(before, revenue=130000)

    events = EventRules().revenue_events(before, after)

    assert titles(events) == ["Revenue Milestone Reached"]
    assert "30%" in events[0].description
    assert events[0].event_type == EventType.INTERNAL


def test_revenue_decline_event():
    before = make_state(revenue=100000)
    after = replace(before, revenue=70000)

    events = EventRules().revenue_events(before, after)

    assert titles(events) == ["Revenue Decline"]
    assert "30%" in events[0].description


def test_revenue_within_band_fires_nothing():
    before = make_state(revenue=100000)
    assert EventRules().revenue_events(before, replace(before, revenue=110000)) == []
    assert EventRules().revenue_events(before, replace(before, revenue=85000)) == []


def test_first_revenue_counts_as_growth():
    before = make_state(revenue=0)
    events = EventRules().revenue_events(before, replace(before, revenue=500))
    assert titles(events) == ["Revenue Milestone Reached"]


def test_each_product_threshold_fires_independently():
    before = make_state(product_progress=20)
    after = replace(before, product_progress=80)

    events = EventRules().milestone_events(before, after)

    descriptions = [e.description for e in events]
    assert len(events) == 3
    assert any("25%" in d for d in descriptions)
    assert any("50%" in d for d in descriptions)
    assert any("75%" in d for d in descriptions)


def test_product_launch_fires_at_100():
    before = make_state(product_progress=90)
    events = EventRules().milestone_events(before, replace(before, product_progress=100))
    assert titles(events) == ["Product Launch"]


def test_customer_and_market_share_crossings():
    before = make_state(customers=90, market_share=0.09)
    after = replace(before, customers=110, market_share=0.11)

    events = EventRules().milestone_events(before, after)

    assert set(titles(events)) == {"Customer Milestone Reached", "Market Share Milestone"}


def test_milestones_fire_only_on_upward_crossing():
    before = make_state(customers=120, market_share=0.2, product_progress=60)
    after = replace(before, customers=130, market_share=0.25, product_progress=70)
    assert EventRules().milestone_events(before, after) == []


def test_random_market_event_picks_template():
    state = make_state()
    event = EventRules().random_market_event(state, SequenceRandom([0.1, 0.0]))
    assert event.title == QUARTERLY_MARKET_EVENTS[0].title
    assert event.impact == {"marketGrowth": 0.15}


def test_random_market_event_respects_probability():
    state = make_state()
    assert EventRules().random_market_event(state, NO_RANDOM_EVENT) is None
    assert EventRules(random_event_probability=0.0).random_market_event(state, SequenceRandom([0.0])) is None


def test_evaluate_never_mutates_state():
    before = make_state(revenue=100000, customers=90)
    after = replace(before, revenue=200000, customers=150)
    snapshot = replace(after)

    EventRules().evaluate(before, after, SequenceRandom([0.0]))

    assert after == snapshot


def test_market_shock_roll():
    state = make_state()
    assert roll_market_shock(state, SequenceRandom([0.5]), probability=0.3) is None

    shock = roll_market_shock(state, SequenceRandom([0.1, 0.99]), probability=0.3)
    assert shock.title == MARKET_SHOCKS[-1].title
    assert shock.business_id == state.id
