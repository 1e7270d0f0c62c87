"""
Decision catalog: named decision templates per category and the generators
that pick next quarter's decisions.

Consequence effects are evaluated against the business state at generation
time. The keys follow the consequence convention of impact_resolver:
cash is a delta, productProgress is added, everything else is a new value.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from startup_sim.simulation_layer.errors import UnknownDecisionTypeError
from startup_sim.simulation_layer.models import (
    BusinessState,
    Consequence,
    Decision,
    DecisionOption,
    DecisionType,
    OptionMetrics,
    Urgency,
    next_period,
)
from startup_sim.simulation_layer.randomness import RandomSource, pick, shuffled
from startup_sim.simulation_layer.stat_rules import round_half_up

logger = logging.getLogger(__name__)

URGENT_PROBABILITY = 0.3


@dataclass
class DecisionTemplate:
    title: str
    description: str
    options: List[DecisionOption]
    consequences: List[Consequence]


TemplateBuilder = Callable[[BusinessState], DecisionTemplate]


def _option(option_id: int, label: str, description: str, cost: float, timeframe: str,
            roi: str, cac: Optional[float] = None) -> DecisionOption:
    return DecisionOption(option_id, label, description, OptionMetrics(cost, timeframe, roi, cac))


def _consequence(option_id: int, effects: Dict[str, float], description: str) -> Consequence:
    return Consequence(option_id, effects, description)


# --- Marketing ---

def marketing_campaign(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Marketing Campaign Strategy",
        "Choose a marketing approach for the upcoming quarter",
        [
            _option(1, "Content Marketing Focus",
                    "Invest in blog content, SEO, and social media to build organic traffic.",
                    12000, "Slow (3+ months)", "Medium", 180),
            _option(2, "Paid Advertising Campaign",
                    "Invest in Google Ads and social media advertising for immediate results.",
                    20000, "Fast (1 month)", "High", 250),
            _option(3, "Partnership & Referral Program",
                    "Develop partnerships with complementary businesses and launch a customer referral program.",
                    8000, "Medium (2 months)", "Medium", 150),
        ],
        [
            _consequence(1, {"cash": -12000, "customers": round_half_up(12000 / 180),
                             "expenses": b.expenses + 4000},
                         "Organic traffic is building and leads are growing steadily."),
            _consequence(2, {"cash": -20000, "customers": round_half_up(20000 / 250),
                             "expenses": b.expenses + 6500},
                         "Paid campaigns drove immediate conversions at a higher cost per acquisition."),
            _consequence(3, {"cash": -8000, "customers": round_half_up(8000 / 150),
                             "expenses": b.expenses + 2500},
                         "Partnerships and referrals are bringing quality leads at a lower cost."),
        ],
    )


def brand_positioning(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Brand Positioning Update",
        "How should we position our brand in the market?",
        [
            _option(1, "Premium Value", "Position as a high-quality, premium solution with higher pricing",
                    10000, "Medium (2-3 months)", "High", 300),
            _option(2, "Affordable Solution", "Position as the best value for money with competitive pricing",
                    8000, "Quick (1-2 months)", "Medium", 200),
            _option(3, "Innovation Leader", "Position as the most innovative and cutting-edge solution",
                    15000, "Longer (3-4 months)", "Very High", 350),
        ],
        [
            _consequence(1, {"cash": -10000, "revenue": b.revenue * 1.15,
                             "customers": round_half_up(10000 / 300), "expenses": b.expenses + 3000},
                         "Premium positioning attracted higher-value customers, though acquisition is slower."),
            _consequence(2, {"cash": -8000, "revenue": b.revenue * 0.95,
                             "customers": round_half_up(8000 / 200), "expenses": b.expenses + 2500},
                         "Affordable positioning attracted more customers at a lower revenue per user."),
            _consequence(3, {"cash": -15000, "revenue": b.revenue * 1.25,
                             "customers": round_half_up(15000 / 350), "expenses": b.expenses + 5000},
                         "Innovation positioning attracted early adopters willing to pay premium prices."),
        ],
    )


# --- Product ---

def product_focus(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Product Development Focus",
        "Where should we focus our product development resources this quarter?",
        [
            _option(1, "New Features", "Develop new features to expand product capabilities",
                    18000, "Medium (2-3 months)", "Medium"),
            _option(2, "User Experience Improvements", "Enhance the UX/UI to improve user satisfaction and retention",
                    12000, "Medium (2 months)", "High"),
            _option(3, "Technical Debt & Performance", "Address technical debt and improve performance",
                    15000, "Medium (2 months)", "Low"),
        ],
        [
            _consequence(1, {"cash": -18000, "productProgress": 15, "expenses": b.expenses + 6000},
                         "New features expanded the product's capabilities and appeal."),
            _consequence(2, {"cash": -12000, "productProgress": 10, "expenses": b.expenses + 4000,
                             "customers": b.customers * 0.1},
                         "The improved user experience raised satisfaction and retention."),
            _consequence(3, {"cash": -15000, "productProgress": 5, "expenses": b.expenses * 0.95},
                         "Paying down technical debt improved stability and reduced maintenance costs."),
        ],
    )


def product_expansion(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Product Expansion Strategy",
        "How should we expand our product offerings?",
        [
            _option(1, "Enterprise Features", "Add features targeted at larger enterprise customers",
                    25000, "Longer (3-4 months)", "Very High"),
            _option(2, "Mobile Application", "Develop a mobile app version of our product",
                    20000, "Medium (2-3 months)", "High"),
            _option(3, "API & Integration Ecosystem", "Build APIs and integrations with popular tools",
                    15000, "Medium (2 months)", "Medium"),
        ],
        [
            _consequence(1, {"cash": -25000, "productProgress": 20, "expenses": b.expenses + 8000,
                             "valuation": b.valuation * 1.2},
                         "Enterprise features opened doors to larger clients with bigger budgets."),
            _consequence(2, {"cash": -20000, "productProgress": 15, "expenses": b.expenses + 6500,
                             "customers": b.customers * 0.15},
                         "The mobile app expanded your reach and engagement."),
            _consequence(3, {"cash": -15000, "productProgress": 10, "expenses": b.expenses + 5000,
                             "valuation": b.valuation * 1.1},
                         "Your API ecosystem made the product a platform others build on."),
        ],
    )


# --- Hiring ---

def team_expansion(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Team Expansion Strategy",
        "How should we grow our team this quarter?",
        [
            _option(1, "Hire Senior Developer", "Bring on an experienced developer to lead technical initiatives",
                    30000, "Immediate", "High"),
            _option(2, "Expand Marketing Team", "Hire additional marketing specialists to accelerate growth",
                    22000, "Immediate", "Medium"),
            _option(3, "Customer Support Staff", "Build a customer support team to improve service",
                    18000, "Immediate", "Medium"),
        ],
        [
            _consequence(1, {"cash": -30000, "employees": b.employees + 1, "expenses": b.expenses + 10000,
                             "productProgress": 10},
                         "The senior developer accelerated your product roadmap."),
            _consequence(2, {"cash": -22000, "employees": b.employees + 2, "expenses": b.expenses + 7500,
                             "customers": b.customers * 0.2},
                         "The expanded marketing team improved customer acquisition."),
            _consequence(3, {"cash": -18000, "employees": b.employees + 2, "expenses": b.expenses + 6000,
                             "customers": b.customers * 0.05},
                         "The support team improved satisfaction and reduced churn."),
        ],
    )


def compensation_strategy(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Employee Compensation Strategy",
        "How should we approach employee compensation to attract and retain talent?",
        [
            _option(1, "Competitive Salaries", "Offer above-market salaries to attract top talent",
                    b.employees * 5000, "Immediate", "Medium"),
            _option(2, "Equity-Based Compensation",
                    "Offer equity packages to align employee interests with company success",
                    b.employees * 2000, "Long-term", "High"),
            _option(3, "Balanced Approach", "Offer moderate salaries with good benefits and work-life balance",
                    b.employees * 3000, "Immediate", "Medium"),
        ],
        [
            _consequence(1, {"cash": -(b.employees * 5000), "expenses": b.expenses * 1.15, "productProgress": 5},
                         "Higher salaries attracted skilled people at a higher operating cost."),
            _consequence(2, {"cash": -(b.employees * 2000), "expenses": b.expenses * 1.05,
                             "valuation": b.valuation * 0.98},
                         "Equity packages aligned the team with long-term company success."),
            _consequence(3, {"cash": -(b.employees * 3000), "expenses": b.expenses * 1.1, "productProgress": 3},
                         "A balanced approach kept retention healthy with moderate productivity gains."),
        ],
    )


# --- Finance ---

def funding_strategy(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Funding Strategy",
        "How should we address our financial needs for growth?",
        [
            _option(1, "Seek Venture Capital", "Raise a significant round of funding from VCs",
                    10000, "Medium (3-4 months)", "Very High"),
            _option(2, "Bootstrap & Organic Growth",
                    "Focus on revenue growth and reinvestment without external funding",
                    0, "Slow (6+ months)", "Medium"),
            _option(3, "Strategic Partnership",
                    "Secure funding through a strategic partnership with an established company",
                    5000, "Medium (2-3 months)", "High"),
        ],
        [
            # 20% of valuation minus legal costs
            _consequence(1, {"cash": b.valuation * 0.2 - 10000, "valuation": b.valuation * 1.5},
                         "You raised a venture round and diluted your ownership."),
            _consequence(2, {"expenses": b.expenses * 0.9, "cash": -b.expenses * 0.1},
                         "Organic growth kept you in full control, though growth is slower."),
            _consequence(3, {"cash": b.valuation * 0.1 - 5000, "valuation": b.valuation * 1.2,
                             "customers": b.customers * 0.2},
                         "The partnership brought moderate funding and market access."),
        ],
    )


def pricing_strategy(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Pricing Strategy",
        "How should we adjust our pricing strategy?",
        [
            _option(1, "Premium Pricing", "Increase prices to emphasize quality and value",
                    5000, "Quick (1 month)", "High"),
            _option(2, "Competitive Pricing", "Reduce prices to gain market share from competitors",
                    5000, "Quick (1 month)", "Medium"),
            _option(3, "Tiered Pricing Model",
                    "Implement multiple pricing tiers to address different market segments",
                    8000, "Medium (2 months)", "Very High"),
        ],
        [
            _consequence(1, {"cash": -5000, "revenue": b.revenue * 1.2, "customers": b.customers * 0.9},
                         "Premium pricing raised revenue per customer but lost price-sensitive buyers."),
            _consequence(2, {"cash": -5000, "revenue": b.revenue * 0.85, "customers": b.customers * 1.3},
                         "Competitive pricing grew the customer base at lower revenue per customer."),
            _consequence(3, {"cash": -8000, "revenue": b.revenue * 1.15, "customers": b.customers * 1.1},
                         "Tiered pricing captured several segments at once."),
        ],
    )


# --- Operations ---

def office_space(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Office Space Decision",
        "How should we address our workspace needs as we grow?",
        [
            _option(1, "Upgrade Office Space", "Lease a larger, modern office space in a prime location",
                    20000, "Medium (2 months)", "Low"),
            _option(2, "Remote-First Approach", "Minimize office space and embrace remote work",
                    5000, "Quick (1 month)", "High"),
            _option(3, "Coworking Membership", "Use flexible coworking spaces for the team",
                    10000, "Quick (1 month)", "Medium"),
        ],
        [
            _consequence(1, {"cash": -20000, "expenses": b.expenses + 8000, "valuation": b.valuation * 1.05},
                         "The new office impressed clients at a higher monthly cost."),
            _consequence(2, {"cash": -5000, "expenses": b.expenses * 0.9, "productProgress": -3},
                         "Going remote cut overhead with some early coordination pains."),
            _consequence(3, {"cash": -10000, "expenses": b.expenses * 0.95, "productProgress": 0},
                         "Coworking gives flexibility at moderate cost."),
        ],
    )


def tech_infrastructure(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Technology Infrastructure",
        "How should we upgrade our technical infrastructure?",
        [
            _option(1, "Cloud Migration", "Move all systems to cloud-based infrastructure",
                    15000, "Medium (2-3 months)", "High"),
            _option(2, "Hybrid Approach",
                    "Maintain some on-premises systems while migrating others to the cloud",
                    10000, "Quick (1-2 months)", "Medium"),
            _option(3, "Security & Compliance Focus",
                    "Invest primarily in security upgrades and compliance certifications",
                    20000, "Longer (3-4 months)", "Medium"),
        ],
        [
            _consequence(1, {"cash": -15000, "expenses": b.expenses * 0.95, "productProgress": 5},
                         "The cloud migration improved scalability and lowered infrastructure costs."),
            _consequence(2, {"cash": -10000, "expenses": b.expenses, "productProgress": 2},
                         "The hybrid approach balanced cost and performance."),
            _consequence(3, {"cash": -20000, "expenses": b.expenses * 1.05, "valuation": b.valuation * 1.1},
                         "Security investments opened doors to regulated and enterprise clients."),
        ],
    )


# --- Crises and opportunities (always urgent) ---

def technical_issue(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Unexpected Technical Issue",
        "A critical bug has been discovered in your product. How will you address it?",
        [
            _option(1, "All Hands Response", "Redirect all development resources to fix the issue immediately",
                    5000, "Immediate", "Necessary"),
            _option(2, "Dedicated Team Response",
                    "Assign a specific team to address the issue while others continue regular work",
                    3000, "Quick (3-5 days)", "Medium"),
            _option(3, "Temporary Workaround", "Implement a temporary workaround while planning a more thorough fix",
                    1000, "Immediate", "Low"),
        ],
        [
            _consequence(1, {"cash": -5000, "productProgress": -5},
                         "The issue was fixed quickly but other development slipped."),
            _consequence(2, {"cash": -3000, "productProgress": -2},
                         "A dedicated team fixed the issue with little disruption."),
            _consequence(3, {"cash": -1000, "customers": b.customers * 0.95, "productProgress": -1},
                         "The workaround contained the damage but some customers were unhappy."),
        ],
    )


def price_war(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Competitor Price War",
        "Your main competitor has significantly dropped their prices. How will you respond?",
        [
            _option(1, "Match Price Drop", "Lower your prices to remain competitive", 0, "Immediate", "Necessary"),
            _option(2, "Value-Add Strategy", "Keep prices stable but add more value to your offering",
                    10000, "Medium (1 month)", "Medium"),
            _option(3, "Focus on Different Segment",
                    "Target a different market segment less affected by the price war",
                    15000, "Longer (2-3 months)", "High"),
        ],
        [
            _consequence(1, {"revenue": b.revenue * 0.8, "customers": b.customers * 1.1},
                         "Matching the price drop kept your share but cut margins."),
            _consequence(2, {"cash": -10000, "revenue": b.revenue * 0.95, "customers": b.customers * 0.98},
                         "Adding value retained most customers at healthier margins."),
            _consequence(3, {"cash": -15000, "revenue": b.revenue * 0.9, "customers": b.customers * 0.85,
                             "valuation": b.valuation * 1.05},
                         "The pivot hurt short term but moved you to a less price-sensitive market."),
        ],
    )


def partnership_opportunity(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Partnership Opportunity",
        "A larger company in your industry has proposed a partnership. How will you proceed?",
        [
            _option(1, "Full Strategic Partnership", "Enter a comprehensive partnership with deep integration",
                    10000, "Longer (3 months)", "Very High"),
            _option(2, "Limited Co-Marketing Deal", "Pursue a narrower partnership focused on co-marketing",
                    5000, "Medium (1-2 months)", "Medium"),
            _option(3, "Decline Partnership", "Maintain independence and focus on your own growth path",
                    0, "Immediate", "Low"),
        ],
        [
            _consequence(1, {"cash": -10000, "customers": b.customers * 1.3, "revenue": b.revenue * 1.2,
                             "valuation": b.valuation * 1.15},
                         "The partnership accelerated your market access."),
            _consequence(2, {"cash": -5000, "customers": b.customers * 1.15, "revenue": b.revenue * 1.05},
                         "Co-marketing brought new customers while keeping you independent."),
            _consequence(3, {"valuation": b.valuation * 1.02},
                         "Staying independent preserved your long-term options."),
        ],
    )


def acquisition_offer(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Acquisition Offer",
        "You've received an acquisition offer from a larger company. How will you respond?",
        [
            _option(1, "Accept the Offer", "Agree to be acquired at the proposed valuation",
                    0, "Medium (2-3 months to close)", "Immediate Exit"),
            _option(2, "Negotiate for Better Terms", "Counter with a higher valuation and better terms",
                    0, "Longer (3-4 months)", "Potentially Higher"),
            _option(3, "Decline the Offer", "Reject the acquisition and continue independent growth",
                    0, "Immediate", "Long-term Potential"),
        ],
        [
            _consequence(1, {"cash": b.valuation * 1.5}, "You've sold your company."),
            _consequence(2, {"valuation": b.valuation * 1.2},
                         "Negotiating raised your perceived value; the deal is still pending."),
            _consequence(3, {"valuation": b.valuation * 1.1},
                         "Declining reinforced your independence and raised your profile."),
        ],
    )


# --- First-quarter decisions ---

def initial_product_approach(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Product Development Approach",
        "How would you like to approach your initial product development?",
        [
            _option(1, "Minimum Viable Product (MVP)",
                    "Focus on building a basic version quickly to validate market fit",
                    10000, "Fast (1 quarter)", "Medium"),
            _option(2, "Full-Featured Product", "Develop a comprehensive product with all planned features",
                    25000, "Slow (2-3 quarters)", "High"),
            _option(3, "Outsource Development", "Hire external developers to build the product faster",
                    20000, "Medium (1-2 quarters)", "Low"),
        ],
        [
            _consequence(1, {"cash": -10000, "productProgress": 20, "expenses": b.expenses * 1.2},
                         "MVP development started: faster to market, more iterations later."),
            _consequence(2, {"cash": -25000, "productProgress": 15, "expenses": b.expenses * 1.5},
                         "Full-featured development started: slower but more polished."),
            _consequence(3, {"cash": -20000, "productProgress": 25, "expenses": b.expenses * 1.3},
                         "Development outsourced: faster and pricier, with less control."),
        ],
    )


def initial_marketing_strategy(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "Initial Marketing Strategy",
        "How will you approach customer acquisition for your startup?",
        [
            _option(1, "Content Marketing", "Create valuable content to attract and engage your target audience",
                    5000, "Slow (2+ quarters)", "High", 120),
            _option(2, "Paid Advertising", "Invest in paid ads on search engines and social media",
                    15000, "Fast (immediate)", "Medium", 250),
            _option(3, "Partnership & Referrals", "Build strategic partnerships and referral programs",
                    3000, "Medium (1-2 quarters)", "Medium", 80),
        ],
        [
            _consequence(1, {"cash": -5000, "customers": 10, "expenses": b.expenses + 2000},
                         "Content marketing launched; slow to build but cost-effective."),
            _consequence(2, {"cash": -15000, "customers": 35, "expenses": b.expenses + 5000},
                         "Paid campaigns launched; immediate traffic at a higher cost per customer."),
            _consequence(3, {"cash": -3000, "customers": 15, "expenses": b.expenses + 1000},
                         "Partnerships and referrals set up for relationship-driven growth."),
        ],
    )


def initial_first_hire(b: BusinessState) -> DecisionTemplate:
    return DecisionTemplate(
        "First Hiring Decision",
        "It's time to grow your team. What role should you prioritize first?",
        [
            _option(1, "Product Developer", "Hire a developer to accelerate product development",
                    15000, "Immediate", "Medium"),
            _option(2, "Marketing Specialist", "Hire a marketer to improve customer acquisition",
                    12000, "Immediate", "Medium"),
            _option(3, "Operations Manager", "Hire someone to handle daily operations and scaling",
                    14000, "Immediate", "Low"),
        ],
        [
            _consequence(1, {"cash": -15000, "employees": b.employees + 1, "productProgress": 5,
                             "expenses": b.expenses + 5000},
                         "A Product Developer joined; development speeds up."),
            _consequence(2, {"cash": -12000, "employees": b.employees + 1, "customers": 8,
                             "expenses": b.expenses + 4000},
                         "A Marketing Specialist joined; acquisition improves."),
            _consequence(3, {"cash": -14000, "employees": b.employees + 1, "expenses": b.expenses + 4500},
                         "An Operations Manager joined; operations scale more smoothly."),
        ],
    )


TEMPLATES: Dict[DecisionType, List[TemplateBuilder]] = {
    DecisionType.MARKETING: [marketing_campaign, brand_positioning],
    DecisionType.PRODUCT: [product_focus, product_expansion],
    DecisionType.HIRING: [team_expansion, compensation_strategy],
    DecisionType.FINANCE: [funding_strategy, pricing_strategy],
    DecisionType.OPERATIONS: [office_space, tech_infrastructure],
}

CRISIS_TEMPLATES: List[TemplateBuilder] = [technical_issue, price_war]
OPPORTUNITY_TEMPLATES: List[TemplateBuilder] = [partnership_opportunity, acquisition_offer]

# (type, builder, quarters until deadline, urgency)
INITIAL_DECISIONS = [
    (DecisionType.PRODUCT, initial_product_approach, 1, Urgency.NORMAL),
    (DecisionType.MARKETING, initial_marketing_strategy, 1, Urgency.NORMAL),
    (DecisionType.HIRING, initial_first_hire, 2, Urgency.LOW),
]

QUARTERLY_TYPE_ORDER = [
    DecisionType.MARKETING,
    DecisionType.PRODUCT,
    DecisionType.HIRING,
    DecisionType.FINANCE,
    DecisionType.OPERATIONS,
]


def deadline_after(quarter: int, quarters: int) -> int:
    """Quarter number `quarters` after `quarter`, wrapping 4 -> 1."""
    year = 0
    for _ in range(quarters):
        quarter, year = next_period(quarter, year)
    return quarter


class DecisionCatalog:
    """Builds initial and quarterly decisions from the template catalog."""

    def __init__(self, crisis_probability: float = 0.2):
        self.crisis_probability = crisis_probability

    def templates_for(self, decision_type) -> List[TemplateBuilder]:
        dtype = DecisionType.parse(decision_type)
        if dtype not in TEMPLATES:
            raise UnknownDecisionTypeError(decision_type)
        return TEMPLATES[dtype]

    def build(self, business: BusinessState, decision_type: DecisionType, builder: TemplateBuilder,
              urgency: Urgency, deadline: int) -> Decision:
        template = builder(business)
        return Decision(
            business_id=business.id,
            quarter=business.current_quarter,
            year=business.current_year,
            decision_type=decision_type,
            title=template.title,
            description=template.description,
            options=template.options,
            consequences=template.consequences,
            deadline=deadline,
            urgency=urgency,
        )

    def generate_initial(self, business: BusinessState) -> List[Decision]:
        return [
            self.build(business, dtype, builder, urgency, deadline_after(business.current_quarter, offset))
            for dtype, builder, offset, urgency in INITIAL_DECISIONS
        ]

    def generate_quarterly(self, business: BusinessState, rng: RandomSource) -> List[Decision]:
        """2-3 category decisions, plus an urgent crisis/opportunity at crisis_probability."""
        selected = shuffled(rng, QUARTERLY_TYPE_ORDER)[: 2 + int(rng.next() * 2)]

        decisions: List[Decision] = []
        for dtype in selected:
            decision = self.generate_for_type(business, dtype, rng)
            if decision is not None:
                decisions.append(decision)

        if rng.next() < self.crisis_probability:
            decisions.append(self.generate_crisis_or_opportunity(business, rng))

        logger.debug(
            "Generated %d decisions for Q%d Y%d: %s",
            len(decisions), business.current_quarter, business.current_year,
            [d.title for d in decisions],
        )
        return decisions

    def generate_for_type(self, business: BusinessState, decision_type, rng: RandomSource) -> Optional[Decision]:
        dtype = DecisionType.parse(decision_type)
        builders = self.templates_for(dtype)

        # Tiny teams only get a hiring decision half of the time
        if dtype == DecisionType.HIRING and business.employees < 2 and rng.next() > 0.5:
            return None

        urgency = Urgency.URGENT if rng.next() < URGENT_PROBABILITY else Urgency.NORMAL
        builder = pick(rng, builders)
        return self.build(business, dtype, builder, urgency, deadline_after(business.current_quarter, 1))

    def generate_crisis_or_opportunity(self, business: BusinessState, rng: RandomSource) -> Decision:
        is_crisis = rng.next() < 0.5
        builder = pick(rng, CRISIS_TEMPLATES if is_crisis else OPPORTUNITY_TEMPLATES)
        if is_crisis:
            dtype = DecisionType.OPERATIONS if rng.next() < 0.5 else DecisionType.FINANCE
        else:
            dtype = DecisionType.FINANCE if rng.next() < 0.5 else DecisionType.OPERATIONS
        return self.build(business, dtype, builder, Urgency.URGENT, business.current_quarter)
