"""
Advisory rules: threshold table over the business state and its latest
financial record, producing mentor advice candidates. A random subset is
returned each quarter.
"""

import logging
from typing import List, Optional

from startup_sim.simulation_layer.models import (
    AdviceItem,
    AdviceType,
    BusinessState,
    BusinessType,
    FinancialRecord,
    FundingType,
)
from startup_sim.simulation_layer.randomness import RandomSource, shuffled
from startup_sim.simulation_layer.stat_rules import round_half_up, safe_ratio

logger = logging.getLogger(__name__)

NO_BURN_RUNWAY = 999
LTV_QUARTERS = 4


def runway_months(state: BusinessState) -> int:
    monthly_burn = state.quarterly_burn_rate / 3
    if monthly_burn <= 0:
        return NO_BURN_RUNWAY
    return round_half_up(state.cash / monthly_burn)


class AdvisoryRules:
    """Mentor rule table. Candidate selection is deterministic, sampling uses rng."""

    def __init__(self, min_items: int = 2, max_items: int = 3):
        self.min_items = min_items
        self.max_items = max_items

    def _advice(self, state: BusinessState, advice_type: AdviceType, title: str,
                content: str, related_to: str) -> AdviceItem:
        return AdviceItem(
            business_id=state.id,
            advice_type=advice_type,
            title=title,
            content=content,
            related_to=related_to,
            quarter=state.current_quarter,
            year=state.current_year,
        )

    def candidates(self, state: BusinessState, record: FinancialRecord,
                   previous_customers: Optional[int] = None) -> List[AdviceItem]:
        items: List[AdviceItem] = []
        items.extend(self.financial_advice(state, record, previous_customers))
        items.extend(self.product_advice(state))
        items.extend(self.marketing_advice(state))
        items.extend(self.hr_advice(state))
        return items

    def sample(self, items: List[AdviceItem], rng: RandomSource) -> List[AdviceItem]:
        count = self.min_items + int(rng.next() * (self.max_items - self.min_items + 1))
        if len(items) <= count:
            return list(items)
        return shuffled(rng, items)[:count]

    def quarterly_advice(self, state: BusinessState, record: FinancialRecord, rng: RandomSource,
                         previous_customers: Optional[int] = None) -> List[AdviceItem]:
        items = self.candidates(state, record, previous_customers)
        selected = self.sample(items, rng)
        logger.debug("Advice: %d candidates, selected %s", len(items), [a.title for a in selected])
        return selected

    def financial_advice(self, state: BusinessState, record: FinancialRecord,
                         previous_customers: Optional[int] = None) -> List[AdviceItem]:
        items: List[AdviceItem] = []

        runway = runway_months(state)
        if runway < 6:
            items.append(self._advice(
                state, AdviceType.FINANCIAL, "Critical Cash Runway Warning",
                f"Your current runway is only {runway} months. Cut costs or accelerate fundraising now.",
                "burn_rate",
            ))
        elif runway < 12:
            items.append(self._advice(
                state, AdviceType.FINANCIAL, "Cash Runway Attention Required",
                f"With {runway} months of runway, start planning your next round or a path to profitability.",
                "burn_rate",
            ))

        if record.profit > 0 and record.profit > record.revenue * 0.15:
            items.append(self._advice(
                state, AdviceType.FINANCIAL, "Profitability Achievement",
                "You are solidly profitable. Reinvest in growth or build a cash reserve.",
                "profitability",
            ))
        elif record.profit <= 0 and abs(record.profit) > record.revenue * 0.5:
            items.append(self._advice(
                state, AdviceType.FINANCIAL, "Significant Losses Concern",
                "Losses exceed 50% of revenue. Review your cost structure.",
                "profitability",
            ))

        cac_item = self.cac_advice(state, record, previous_customers)
        if cac_item is not None:
            items.append(cac_item)
        return items

    def cac_advice(self, state: BusinessState, record: FinancialRecord,
                   previous_customers: Optional[int]) -> Optional[AdviceItem]:
        if previous_customers is None or record.customers <= 0:
            return None
        new_customers = max(0, record.customers - previous_customers)
        if new_customers == 0:
            return None

        cac = record.marketing_cost / new_customers
        ltv = safe_ratio(record.revenue, record.customers) * LTV_QUARTERS
        if cac <= 0:
            return None

        if cac > ltv:
            return self._advice(
                state, AdviceType.MARKETING, "Unsustainable Customer Acquisition",
                f"Your customer acquisition cost ({cac:.2f}) exceeds estimated lifetime value.",
                "cac",
            )
        if cac * 3 < ltv:
            return self._advice(
                state, AdviceType.MARKETING, "Excellent CAC to LTV Ratio",
                f"Your LTV to CAC ratio is {ltv / cac:.2f}:1. Consider scaling acquisition.",
                "cac",
            )
        return None

    def product_advice(self, state: BusinessState) -> List[AdviceItem]:
        items: List[AdviceItem] = []
        progress = state.product_progress

        if progress < 25:
            title, content = "Early Product Development Focus", "Validate core features with real users."
        elif progress < 50:
            title, content = "MVP Refinement Strategy", "Collect user feedback and iterate before adding features."
        elif progress < 75:
            title, content = "Product Expansion Considerations", "Prioritize new features by demand and strategic value."
        elif progress < 100:
            title, content = "Product Launch Preparation", "Polish the experience and plan the rollout."
        else:
            title, content = "Post-Launch Product Strategy", "Set up a feedback loop and usage analytics."
        items.append(self._advice(state, AdviceType.PRODUCT, title, content, "product_development"))

        if progress >= 50 and state.customers < 50:
            items.append(self._advice(
                state, AdviceType.PRODUCT, "Product-Market Fit Concerns",
                "The product is well developed but adoption lags. Talk to users.",
                "product_market_fit",
            ))
        return items

    def marketing_advice(self, state: BusinessState) -> List[AdviceItem]:
        items: List[AdviceItem] = []

        if state.market_share < 0.05:
            items.append(self._advice(
                state, AdviceType.MARKETING, "Market Penetration Strategy",
                "Your share is small. Win a niche before expanding.",
                "market_share",
            ))
        elif state.market_share >= 0.15:
            items.append(self._advice(
                state, AdviceType.MARKETING, "Market Leadership Opportunity",
                f"With {round_half_up(state.market_share * 100)}% market share, lean into thought leadership.",
                "market_share",
            ))

        if 0 < state.customers < 10:
            items.append(self._advice(
                state, AdviceType.MARKETING, "Early Customer Acquisition Focus",
                "Use personalized outreach; every early customer is a case study.",
                "customer_acquisition",
            ))
        elif state.customers >= 100:
            items.append(self._advice(
                state, AdviceType.MARKETING, "Customer Segmentation Opportunity",
                "You have enough customers to segment and target campaigns.",
                "customer_acquisition",
            ))

        if state.revenue > 0 and safe_ratio(state.expenses * 0.3, state.revenue) > 0.5:
            items.append(self._advice(
                state, AdviceType.MARKETING, "High Marketing Spend Alert",
                "Marketing spend exceeds 50% of revenue. Audit your channels.",
                "marketing_efficiency",
            ))
        return items

    def hr_advice(self, state: BusinessState) -> List[AdviceItem]:
        items: List[AdviceItem] = []
        employees = state.employees

        if employees <= 1:
            items.append(self._advice(
                state, AdviceType.HR, "First Hiring Decisions",
                "Your first hires are critical. Prioritize versatile candidates.",
                "team_building",
            ))
        elif 10 < employees <= 15:
            items.append(self._advice(
                state, AdviceType.HR, "Team Structure Evolution",
                "Past 10 people, add structure to decisions and documentation.",
                "team_building",
            ))
        elif employees > 20:
            items.append(self._advice(
                state, AdviceType.HR, "Organizational Culture Focus",
                "Codify your values and reflect them in hiring and reviews.",
                "team_building",
            ))

        revenue_per_employee = safe_ratio(state.revenue, employees)
        expense_per_employee = safe_ratio(state.expenses, employees)
        if state.revenue > 0 and revenue_per_employee < expense_per_employee:
            items.append(self._advice(
                state, AdviceType.HR, "Team Productivity Concerns",
                "Revenue per employee is below cost per employee.",
                "team_productivity",
            ))

        if 5 <= employees <= 10 and state.current_year == 1:
            items.append(self._advice(
                state, AdviceType.HR, "Early Management Structures",
                "Introduce basic management structures and reporting lines.",
                "management",
            ))
        return items

    def initial_advice(self, state: BusinessState) -> List[AdviceItem]:
        items = [self._advice(
            state, AdviceType.GENERAL, "Welcome",
            "Welcome to your new venture. I'll help you make strategic decisions.",
            "onboarding",
        )]

        if state.business_type == BusinessType.TECH:
            items.append(self._advice(
                state, AdviceType.PRODUCT, "Tech Strategy",
                "Invest in R&D and skilled developers. Tech moves fast.", "strategy",
            ))
        elif state.business_type == BusinessType.ECOMMERCE:
            items.append(self._advice(
                state, AdviceType.MARKETING, "E-commerce Strategy",
                "Focus on digital marketing and the acquisition funnel.", "strategy",
            ))
        elif state.business_type == BusinessType.SERVICE:
            items.append(self._advice(
                state, AdviceType.GENERAL, "Service Strategy",
                "Service quality and customer satisfaction come first.", "strategy",
            ))
        elif state.business_type == BusinessType.MANUFACTURING:
            items.append(self._advice(
                state, AdviceType.GENERAL, "Manufacturing Strategy",
                "Optimize production processes and quality control.", "strategy",
            ))

        if state.funding_type == FundingType.BOOTSTRAP:
            items.append(self._advice(
                state, AdviceType.FINANCIAL, "Bootstrap Strategy",
                "Every dollar counts. Focus on revenue and cost control.", "funding",
            ))
        elif state.funding_type in (FundingType.SEED, FundingType.SERIES_A):
            items.append(self._advice(
                state, AdviceType.FINANCIAL, "Funding Strategy",
                "Balance growth against runway and hit your milestones.", "funding",
            ))
        return items
