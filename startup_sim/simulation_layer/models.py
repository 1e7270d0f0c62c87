"""
Shared data models for the simulation layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from startup_sim.simulation_layer.errors import UnknownDecisionTypeError


class BusinessType(str, Enum):
    TECH = "Tech"
    ECOMMERCE = "E-commerce"
    SERVICE = "Service"
    MANUFACTURING = "Manufacturing"


class FundingType(str, Enum):
    BOOTSTRAP = "Bootstrap"
    SEED = "Seed"
    SERIES_A = "Series A"
    BANK_LOAN = "Bank Loan"
    STRATEGIC_PARTNERSHIP = "Strategic Partnership"


class DecisionType(str, Enum):
    MARKETING = "marketing"
    HIRING = "hiring"
    PRODUCT = "product"
    FINANCE = "finance"
    OPERATIONS = "operations"

    @classmethod
    def parse(cls, value: Any) -> "DecisionType":
        """Resolve a wire value, accepting the 'hr' and 'funding' aliases."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = DECISION_TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownDecisionTypeError(value) from None


DECISION_TYPE_ALIASES: Dict[str, str] = {
    "hr": "hiring",
    "funding": "finance",
}


class Urgency(str, Enum):
    URGENT = "urgent"
    NORMAL = "normal"
    LOW = "low"


class EventType(str, Enum):
    MARKET = "market"
    INTERNAL = "internal"
    COMPETITOR = "competitor"
    CRISIS = "crisis"


class AdviceType(str, Enum):
    FINANCIAL = "financial"
    MARKETING = "marketing"
    PRODUCT = "product"
    HR = "hr"
    GENERAL = "general"


@dataclass
class BusinessState:
    """
    The player's startup. Advanced once per quarter.
    market_share is a normalized fraction (0.005 == 0.5%).
    """

    user_id: int
    name: str
    business_type: BusinessType
    funding_type: FundingType

    current_quarter: int = 1
    current_year: int = 1

    # Financials
    cash: float = 0.0
    revenue: float = 0.0
    expenses: float = 0.0
    valuation: float = 0.0
    initial_capital: float = 0.0
    quarterly_burn_rate: float = 0.0

    # Growth
    employees: int = 1
    customers: int = 0
    product_progress: float = 0.0  # 0~100
    market_share: float = 0.0  # 0~1

    id: Optional[int] = None

    @property
    def profit(self) -> float:
        return self.revenue - self.expenses


@dataclass
class Competitor:
    """A rival sharing the business's market-share pool."""

    business_id: Optional[int]
    name: str
    business_type: BusinessType
    market_share: float  # 0~1
    strength: int  # 1~10
    focus: str  # product, marketing, price
    id: Optional[int] = None


@dataclass
class OptionMetrics:
    cost: float
    timeframe: str
    roi: str
    cac: Optional[float] = None


@dataclass
class DecisionOption:
    id: int
    label: str
    description: str
    metrics: OptionMetrics


@dataclass
class Consequence:
    """Effects applied when an option is chosen (see impact_resolver)."""

    option_id: int
    effects: Dict[str, float]
    description: str


@dataclass
class Decision:
    """A pending strategic choice presented to the player."""

    business_id: Optional[int]
    quarter: int
    year: int
    decision_type: DecisionType
    title: str
    description: str
    options: List[DecisionOption]
    consequences: List[Consequence]
    deadline: int
    urgency: Urgency = Urgency.NORMAL
    is_completed: bool = False
    selected_option_id: Optional[int] = None
    id: Optional[int] = None

    def option(self, option_id: int) -> Optional[DecisionOption]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None

    def consequence_for(self, option_id: int) -> Optional[Consequence]:
        for consequence in self.consequences:
            if consequence.option_id == option_id:
                return consequence
        return None


@dataclass
class CatalogDecision:
    """A decision submitted through the quarterly bulk catalog."""

    business_id: Optional[int]
    quarter: int
    year: int
    decision_type: DecisionType
    choice: str
    cost: float
    impact: Dict[str, float] = field(default_factory=dict)
    id: Optional[int] = None


@dataclass(frozen=True)
class FinancialRecord:
    """Immutable end-of-quarter snapshot."""

    business_id: Optional[int]
    quarter: int
    year: int
    revenue: float
    expenses: float
    profit: float
    cash: float
    marketing_cost: float
    development_cost: float
    operations_cost: float
    hr_cost: float
    other_costs: float
    valuation: float
    customers: int
    market_share: float = 0.0
    employees: int = 0
    id: Optional[int] = None


@dataclass
class Event:
    """A notable happening recorded in the business feed."""

    business_id: Optional[int]
    quarter: int
    year: int
    event_type: EventType
    title: str
    description: str
    impact: Dict[str, Any] = field(default_factory=dict)
    resolved: bool = False
    icon: str = ""
    icon_color: str = ""
    id: Optional[int] = None


@dataclass
class AdviceItem:
    """Mentor advice tied to a business and quarter."""

    business_id: Optional[int]
    advice_type: AdviceType
    title: str
    content: str
    related_to: str
    quarter: int
    year: int
    id: Optional[int] = None


def next_period(quarter: int, year: int) -> tuple:
    """Quarter after (quarter, year); 4 wraps to 1 of the next year."""
    if quarter >= 4:
        return 1, year + 1
    return quarter + 1, year
