"""
Company setup: builds a new business with type baselines, its competitor
pool, the first-quarter decisions and advice, and an opening financial record.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from startup_sim.simulation_layer.advisory_rules import AdvisoryRules
from startup_sim.simulation_layer.decision_catalog import DecisionCatalog
from startup_sim.simulation_layer.event_rules import roll_market_shock
from startup_sim.simulation_layer.models import (
    AdviceItem,
    BusinessState,
    BusinessType,
    Competitor,
    Decision,
    Event,
    FinancialRecord,
    FundingType,
)
from startup_sim.simulation_layer.quarter_advancer import build_financial_record
from startup_sim.simulation_layer.randomness import RandomSource, pick, pick_index, shuffled, uniform

logger = logging.getLogger(__name__)

FUNDING_AMOUNTS: Dict[FundingType, float] = {
    FundingType.BOOTSTRAP: 250000,
    FundingType.SEED: 1000000,
    FundingType.SERIES_A: 2000000,
    FundingType.BANK_LOAN: 500000,
    FundingType.STRATEGIC_PARTNERSHIP: 750000,
}

# valuation, employees, market_share, revenue, expenses
TYPE_BASELINES: Dict[BusinessType, Dict[str, float]] = {
    BusinessType.TECH: {
        "valuation": 2000000, "employees": 8, "market_share": 0.005, "revenue": 50000, "expenses": 65000,
    },
    BusinessType.ECOMMERCE: {
        "valuation": 1500000, "employees": 6, "market_share": 0.003, "revenue": 75000, "expenses": 70000,
    },
    BusinessType.SERVICE: {
        "valuation": 1000000, "employees": 5, "market_share": 0.002, "revenue": 40000, "expenses": 35000,
    },
    BusinessType.MANUFACTURING: {
        "valuation": 3000000, "employees": 15, "market_share": 0.002, "revenue": 100000, "expenses": 120000,
    },
}

COMPETITOR_NAMES: Dict[BusinessType, List[str]] = {
    BusinessType.TECH: ["CloudWave", "Appsphere", "TechVision", "ByteWorks", "CodeNova"],
    BusinessType.ECOMMERCE: ["ShopElite", "CartKing", "MarketMaster", "BuyNow", "DigitalBazaar"],
    BusinessType.SERVICE: ["ServeRight", "ExpertEdge", "ProConsult", "SolutionsHub", "ServicePro"],
    BusinessType.MANUFACTURING: ["IndusTech", "FactoryFusion", "ManufactureMax", "ProducePro", "AssemblyTech"],
}

COMPETITOR_FOCUS = ["product", "marketing", "price"]
MIN_COMPETITORS = 3
MAX_COMPETITORS = 5


@dataclass
class SetupResult:
    business: BusinessState
    competitors: List[Competitor]
    decisions: List[Decision]
    advice: List[AdviceItem]
    financial_record: FinancialRecord
    events: List[Event] = field(default_factory=list)


def generate_competitors(business: BusinessState, rng: RandomSource) -> List[Competitor]:
    """3-5 distinct rivals whose shares fill the rest of the pool."""
    count = MIN_COMPETITORS + pick_index(rng, MAX_COMPETITORS - MIN_COMPETITORS + 1)
    names = shuffled(rng, COMPETITOR_NAMES[business.business_type])[:count]

    raw = [uniform(rng, 0.5, 10.0) for _ in names]
    pool = 1.0 - business.market_share
    total = sum(raw)

    competitors = []
    for name, weight in zip(names, raw):
        competitors.append(Competitor(
            business_id=business.id,
            name=name,
            business_type=business.business_type,
            market_share=weight / total * pool,
            strength=1 + pick_index(rng, 9),
            focus=pick(rng, COMPETITOR_FOCUS),
        ))
    return competitors


def initial_business(user_id: int, name: str, business_type, funding_type) -> BusinessState:
    btype = BusinessType(business_type)
    ftype = FundingType(funding_type)
    base = TYPE_BASELINES[btype]
    funding = FUNDING_AMOUNTS[ftype]

    return BusinessState(
        user_id=user_id,
        name=name,
        business_type=btype,
        funding_type=ftype,
        cash=funding,
        initial_capital=funding,
        revenue=base["revenue"],
        expenses=base["expenses"],
        valuation=base["valuation"],
        quarterly_burn_rate=base["expenses"],
        employees=int(base["employees"]),
        market_share=base["market_share"],
    )


def create_company(
    user_id: int,
    name: str,
    business_type,
    funding_type,
    rng: RandomSource,
    shock_probability: float = 0.3,
    business_id: Optional[int] = None,
    decision_catalog: Optional[DecisionCatalog] = None,
    advisory_rules: Optional[AdvisoryRules] = None,
) -> SetupResult:
    business = initial_business(user_id, name, business_type, funding_type)
    business.id = business_id

    competitors = generate_competitors(business, rng)
    decisions = (decision_catalog or DecisionCatalog()).generate_initial(business)
    advice = (advisory_rules or AdvisoryRules()).initial_advice(business)
    record = build_financial_record(business)

    events = []
    shock = roll_market_shock(business, rng, shock_probability)
    if shock is not None:
        events.append(shock)

    logger.info(
        "Created %s company '%s' with %s funding (cash %.0f, %d competitors)",
        business.business_type.value, name, business.funding_type.value, business.cash, len(competitors),
    )
    return SetupResult(
        business=business,
        competitors=competitors,
        decisions=decisions,
        advice=advice,
        financial_record=record,
        events=events,
    )
