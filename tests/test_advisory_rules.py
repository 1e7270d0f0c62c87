import pytest

from startup_sim.simulation_layer.advisory_rules import AdvisoryRules, runway_months
from startup_sim.simulation_layer.models import AdviceType, BusinessType, FundingType
from startup_sim.simulation_layer.quarter_advancer import build_financial_record
from tests.conftest import SequenceRandom, make_state


def titles(items):
    return [a.title for a in items]


def financial_titles(state, previous_customers=None):
    return titles(AdvisoryRules().financial_advice(state, build_financial_record(state), previous_customers))


@pytest.mark.parametrize(
    "cash, burn, expected",
    [(55000, 30000, 6), (50000, 30000, 5), (120000, 30000, 12), (1000, 0, 999)],
)
def test_runway_months(cash, burn, expected):
    assert runway_months(make_state(cash=cash, quarterly_burn_rate=burn)) == expected


def test_runway_bands():
    critical = make_state(cash=50000, quarterly_burn_rate=30000)
    attention = make_state(cash=55000, quarterly_burn_rate=30000)
    healthy = make_state(cash=500000, quarterly_burn_rate=30000)

    assert "Critical Cash Runway Warning" in financial_titles(critical)
    assert "Cash Runway Attention Required" in financial_titles(attention)
    assert not any("Runway" in t for t in financial_titles(healthy))


def test_profit_and_loss_rules():
    profitable = make_state(revenue=100000, expenses=50000, cash=1e7)
    losing = make_state(revenue=10000, expenses=50000, cash=1e7)
    thin = make_state(revenue=100000, expenses=95000, cash=1e7)

    assert "Profitability Achievement" in financial_titles(profitable)
    assert "Significant Losses Concern" in financial_titles(losing)
    assert not any("Profit" in t or "Losses" in t for t in financial_titles(thin))


def test_excellent_cac():
    state = make_state(customers=10, revenue=5000, expenses=10000, cash=1e7)
    assert "Excellent CAC to LTV Ratio" in financial_titles(state, previous_customers=0)


def test_unsustainable_cac():
    state = make_state(customers=10, revenue=500, expenses=100000, cash=1e7)
    assert "Unsustainable Customer Acquisition" in financial_titles(state, previous_customers=0)


def test_cac_skipped_without_new_customers():
    state = make_state(customers=10, revenue=5000, expenses=10000, cash=1e7)
    assert not any("CAC" in t or "Acquisition" in t for t in financial_titles(state, previous_customers=10))
    assert not any("CAC" in t for t in financial_titles(state))


@pytest.mark.parametrize(
    "progress, expected",
    [
        (10, "Early Product Development Focus"),
        (30, "MVP Refinement Strategy"),
        (60, "Product Expansion Considerations"),
        (90, "Product Launch Preparation"),
        (100, "Post-Launch Product Strategy"),
    ],
)
def test_product_bands(progress, expected):
    items = AdvisoryRules().product_advice(make_state(product_progress=progress, customers=500))
    assert titles(items) == [expected]


def test_product_market_fit_concern():
    items = AdvisoryRules().product_advice(make_state(product_progress=60, customers=20))
    assert "Product-Market Fit Concerns" in titles(items)
    assert all(a.advice_type == AdviceType.PRODUCT for a in items)


def test_marketing_and_hr_rules():
    rules = AdvisoryRules()
    leader = make_state(market_share=0.2, customers=150, revenue=10000, expenses=50000)

    marketing = titles(rules.marketing_advice(leader))
    assert marketing == [
        "Market Leadership Opportunity", "Customer Segmentation Opportunity", "High Marketing Spend Alert",
    ]

    hr = titles(rules.hr_advice(make_state(employees=12, current_year=2, revenue=1000, expenses=50000)))
    assert hr == ["Team Structure Evolution", "Team Productivity Concerns"]

    assert "First Hiring Decisions" in titles(rules.hr_advice(make_state(employees=1)))
    assert "Early Management Structures" in titles(rules.hr_advice(make_state(employees=6)))


def test_sample_size_follows_draw():
    state = make_state(cash=50000, quarterly_burn_rate=30000, revenue=10000, expenses=50000, customers=5)
    record = build_financial_record(state)
    rules = AdvisoryRules()
    assert len(rules.candidates(state, record)) > 3

    assert len(rules.quarterly_advice(state, record, SequenceRandom([0.0]))) == 2
    assert len(rules.quarterly_advice(state, record, SequenceRandom([0.99]))) == 3


def test_sample_returns_all_when_few_candidates():
    rules = AdvisoryRules(min_items=5, max_items=5)
    state = make_state()
    items = rules.product_advice(state)
    assert rules.sample(items, SequenceRandom([0.5])) == items


def test_quarterly_advice_is_stamped_with_state_period():
    state = make_state(current_quarter=3, current_year=2)
    advice = AdvisoryRules().quarterly_advice(state, build_financial_record(state), SequenceRandom([0.4]))
    assert all((a.quarter, a.year, a.business_id) == (3, 2, 1) for a in advice)


def test_initial_advice_tech_seed():
    state = make_state(business_type=BusinessType.TECH, funding_type=FundingType.SEED)
    items = AdvisoryRules().initial_advice(state)

    assert titles(items) == ["Welcome", "Tech Strategy", "Funding Strategy"]
    assert [a.related_to for a in items] == ["onboarding", "strategy", "funding"]


def test_initial_advice_service_bank_loan():
    state = make_state(business_type=BusinessType.SERVICE, funding_type=FundingType.BANK_LOAN)
    items = AdvisoryRules().initial_advice(state)

    assert titles(items) == ["Welcome", "Service Strategy"]
    assert items[1].advice_type == AdviceType.GENERAL
