import pytest

from startup_sim.simulation_layer.competitor_model import CompetitorModel, pool_total
from startup_sim.simulation_layer.errors import DegenerateStateWarning
from tests.conftest import make_competitors


def shares(competitors):
    return [c.market_share for c in competitors]


def test_proportional_loss_keeps_relative_weights():
    competitors = make_competitors([0.4, 0.24, 0.12, 0.04])

    result = CompetitorModel().rebalance(0.20, competitors)

    assert sum(shares(result)) == pytest.approx(0.80, abs=1e-9)
    weights = [s / sum(shares(result)) for s in shares(result)]
    assert weights == pytest.approx([0.5, 0.3, 0.15, 0.05])
    assert pool_total(0.20, result) == pytest.approx(1.0, abs=1e-6)


def test_small_business_share_only_renormalizes(tech_competitors):
    result = CompetitorModel().rebalance(0.006, tech_competitors)

    assert pool_total(0.006, result) == pytest.approx(1.0, abs=1e-6)
    assert result[0].market_share > result[1].market_share > result[2].market_share


def test_inputs_are_not_mutated(tech_competitors):
    before = shares(tech_competitors)
    CompetitorModel().rebalance(0.3, tech_competitors)
    assert shares(tech_competitors) == before


def test_extreme_growth_keeps_every_competitor_at_floor():
    competitors = make_competitors([0.02, 0.01, 0.01, 0.01])

    result = CompetitorModel().rebalance(0.95, competitors)

    assert all(s >= 0.01 - 1e-9 for s in shares(result))
    assert pool_total(0.95, result) == pytest.approx(1.0, abs=1e-6)


def test_renormalization_pins_competitors_that_would_drop_below_floor():
    competitors = make_competitors([0.95, 0.01, 0.01, 0.01])

    result = CompetitorModel().rebalance(0.5, competitors)

    assert shares(result) == pytest.approx([0.47, 0.01, 0.01, 0.01])
    assert pool_total(0.5, result) == pytest.approx(1.0, abs=1e-6)


def test_exhausted_pool_splits_evenly():
    competitors = make_competitors([0.0, 0.0, 0.0])

    result = CompetitorModel().rebalance(0.04, competitors)

    assert shares(result) == pytest.approx([0.32, 0.32, 0.32])


def test_pool_too_small_for_floor_warns_and_splits():
    competitors = make_competitors([0.005, 0.003, 0.002])

    with pytest.warns(DegenerateStateWarning):
        result = CompetitorModel().rebalance(0.99, competitors)

    assert shares(result) == pytest.approx([0.01 / 3] * 3)
    assert pool_total(0.99, result) == pytest.approx(1.0, abs=1e-6)


def test_no_competitors_warns_and_returns_empty():
    with pytest.warns(DegenerateStateWarning):
        assert CompetitorModel().rebalance(0.5, []) == []
