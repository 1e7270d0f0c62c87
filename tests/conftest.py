"""Pytest configuration for the startup simulator."""

from typing import List

import pytest

from startup_sim.simulation_layer.models import (
    BusinessState,
    BusinessType,
    Competitor,
    FundingType,
)


class SequenceRandom:
    """RandomSource that replays a fixed list of draws, cycling when exhausted."""

    def __init__(self, values: List[float]):
        self.values = list(values)
        self.calls = 0

    def next(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def make_state(**overrides) -> BusinessState:
    fields = dict(
        user_id=1,
        name="Acme",
        business_type=BusinessType.TECH,
        funding_type=FundingType.BOOTSTRAP,
        cash=250000,
        revenue=50000,
        expenses=65000,
        valuation=2000000,
        initial_capital=250000,
        quarterly_burn_rate=65000,
        employees=8,
        customers=0,
        product_progress=0,
        market_share=0.005,
        id=1,
    )
    fields.update(overrides)
    return BusinessState(**fields)


def make_competitors(shares: List[float], business_id: int = 1) -> List[Competitor]:
    return [
        Competitor(
            business_id=business_id,
            name=f"Rival{i}",
            business_type=BusinessType.TECH,
            market_share=share,
            strength=5,
            focus="product",
            id=100 + i,
        )
        for i, share in enumerate(shares)
    ]


@pytest.fixture
def tech_state() -> BusinessState:
    return make_state()


@pytest.fixture
def tech_competitors() -> List[Competitor]:
    # 0.995 of the pool, leaving 0.005 for the business
    return make_competitors([0.5, 0.3, 0.195])
