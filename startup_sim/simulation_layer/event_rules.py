"""
Event rules: threshold and random triggers evaluated once per quarter
transition by comparing the pre- and post-transition state.

Events are feed records only. Their impact maps are informational and are
never applied to the business state here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from startup_sim.simulation_layer.models import BusinessState, Event, EventType
from startup_sim.simulation_layer.randomness import RandomSource, pick
from startup_sim.simulation_layer.stat_rules import round_half_up, safe_ratio

logger = logging.getLogger(__name__)

REVENUE_GROWTH_RATIO = 1.2
REVENUE_DECLINE_RATIO = 0.8
CUSTOMER_MILESTONE = 100
MARKET_SHARE_MILESTONE = 0.10


@dataclass(frozen=True)
class EventTemplate:
    event_type: EventType
    title: str
    description: str
    impact: Dict[str, Any] = field(default_factory=dict)
    icon: str = ""
    icon_color: str = ""


# (threshold, title, description, icon, icon color)
PRODUCT_MILESTONES: List[Tuple[int, str, str, str, str]] = [
    (25, "Product Development Milestone",
     "Your product has reached 25% completion - MVP is taking shape", "fa-solid fa-code", "primary"),
    (50, "Product Development Milestone",
     "Your product has reached 50% completion - MVP is ready for testing", "fa-solid fa-code", "primary"),
    (75, "Product Development Milestone",
     "Your product has reached 75% completion - preparing for launch", "fa-solid fa-code", "primary"),
    (100, "Product Launch",
     "Your product is now complete and fully launched to the market", "fa-solid fa-rocket", "success"),
]

QUARTERLY_MARKET_EVENTS: List[EventTemplate] = [
    EventTemplate(
        EventType.MARKET, "Market Growth",
        "The overall market for your product has grown by 15%",
        {"marketGrowth": 0.15}, "fa-solid fa-arrow-trend-up", "success",
    ),
    EventTemplate(
        EventType.COMPETITOR, "Competitor Price Drop",
        "A major competitor has reduced their prices by 10%",
        {"competitorPriceDrop": 0.1}, "fa-solid fa-tag", "warning",
    ),
    EventTemplate(
        EventType.MARKET, "New Market Regulations",
        "New industry regulations have increased compliance costs",
        {"expenseIncrease": 0.05}, "fa-solid fa-scale-balanced", "warning",
    ),
    EventTemplate(
        EventType.CRISIS, "Supply Chain Disruption",
        "A supply chain disruption has affected your industry",
        {"expenseIncrease": 0.08}, "fa-solid fa-truck", "danger",
    ),
]

# Shocks rolled at company setup and after a bulk decision submission
MARKET_SHOCKS: List[EventTemplate] = [
    EventTemplate(
        EventType.COMPETITOR, "New Competitor",
        "A new competitor with significant funding has entered the market with a similar "
        "product at a lower price point.",
        {"marketShare": -0.2, "revenue": -0.05},
    ),
    EventTemplate(
        EventType.MARKET, "Market Growth",
        "Your industry is experiencing rapid growth due to increased demand.",
        {"marketShare": 0.1, "revenue": 0.1, "valuation": 0.05},
    ),
    EventTemplate(
        EventType.CRISIS, "Economic Downturn",
        "An economic recession is affecting consumer spending and investment.",
        {"revenue": -0.15, "valuation": -0.1, "marketShare": -0.05},
    ),
    EventTemplate(
        EventType.MARKET, "Technological Breakthrough",
        "A new technology has emerged that could disrupt your business model.",
        {"expenses": 0.1, "valuation": -0.05},
    ),
    EventTemplate(
        EventType.MARKET, "Regulatory Changes",
        "New regulations are affecting businesses in your industry.",
        {"expenses": 0.08, "revenue": -0.03},
    ),
]


def _crossed(before: float, after: float, threshold: float) -> bool:
    return before < threshold <= after


def _event(state: BusinessState, template: EventTemplate, impact: Optional[Dict[str, Any]] = None) -> Event:
    return Event(
        business_id=state.id,
        quarter=state.current_quarter,
        year=state.current_year,
        event_type=template.event_type,
        title=template.title,
        description=template.description,
        impact=dict(template.impact if impact is None else impact),
        icon=template.icon,
        icon_color=template.icon_color,
    )


class EventRules:
    """Decides which notable events fire for one quarter transition."""

    def __init__(self, random_event_probability: float = 0.2):
        self.random_event_probability = random_event_probability

    def evaluate(self, before: BusinessState, after: BusinessState, rng: RandomSource) -> List[Event]:
        events: List[Event] = []
        events.extend(self.revenue_events(before, after))
        events.extend(self.milestone_events(before, after))
        random_event = self.random_market_event(after, rng)
        if random_event is not None:
            events.append(random_event)

        logger.debug("Quarter Q%d Y%d fired %d events", after.current_quarter, after.current_year, len(events))
        return events

    def revenue_events(self, before: BusinessState, after: BusinessState) -> List[Event]:
        prev_revenue, revenue = before.revenue, after.revenue
        impact = {"revenue": revenue, "prevRevenue": prev_revenue}

        if revenue > prev_revenue * REVENUE_GROWTH_RATIO:
            if prev_revenue > 0:
                pct = round_half_up((safe_ratio(revenue, prev_revenue) - 1) * 100)
                description = f"Quarterly revenue increased by {pct}% this quarter"
            else:
                description = "Your business recorded its first quarterly revenue"
            template = EventTemplate(
                EventType.INTERNAL, "Revenue Milestone Reached",
                description,
                icon="fa-solid fa-chart-line", icon_color="success",
            )
            return [_event(after, template, impact)]

        if revenue < prev_revenue * REVENUE_DECLINE_RATIO:
            pct = round_half_up((1 - safe_ratio(revenue, prev_revenue)) * 100)
            template = EventTemplate(
                EventType.INTERNAL, "Revenue Decline",
                f"Quarterly revenue decreased by {pct}% this quarter",
                icon="fa-solid fa-chart-line-down", icon_color="danger",
            )
            return [_event(after, template, impact)]

        return []

    def milestone_events(self, before: BusinessState, after: BusinessState) -> List[Event]:
        events: List[Event] = []

        if _crossed(before.customers, after.customers, CUSTOMER_MILESTONE):
            template = EventTemplate(
                EventType.INTERNAL, "Customer Milestone Reached",
                "Your business has reached 100 customers!",
                icon="fa-solid fa-users", icon_color="success",
            )
            events.append(_event(after, template, {"customers": after.customers}))

        if _crossed(before.market_share, after.market_share, MARKET_SHARE_MILESTONE):
            template = EventTemplate(
                EventType.MARKET, "Market Share Milestone",
                "Your business now holds 10% of the market share",
                icon="fa-solid fa-chart-pie", icon_color="primary",
            )
            events.append(_event(after, template, {"marketShare": after.market_share}))

        # Each threshold is its own one-shot trigger
        for threshold, title, description, icon, color in PRODUCT_MILESTONES:
            if _crossed(before.product_progress, after.product_progress, threshold):
                template = EventTemplate(EventType.INTERNAL, title, description, icon=icon, icon_color=color)
                events.append(_event(after, template, {"productProgress": after.product_progress}))

        return events

    def random_market_event(self, state: BusinessState, rng: RandomSource) -> Optional[Event]:
        if rng.next() >= self.random_event_probability:
            return None
        return _event(state, pick(rng, QUARTERLY_MARKET_EVENTS))


def roll_market_shock(state: BusinessState, rng: RandomSource, probability: float = 0.3) -> Optional[Event]:
    """Market shock for setup and bulk submission; informational only."""
    if rng.next() >= probability:
        return None
    return _event(state, pick(rng, MARKET_SHOCKS))
