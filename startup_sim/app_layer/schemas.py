"""
Pydantic models for API request/response.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from startup_sim.simulation_layer.models import (
    AdviceType,
    BusinessType,
    DecisionType,
    EventType,
    FundingType,
    Urgency,
)


class RecordModel(BaseModel):
    """Response built from a simulation dataclass."""

    model_config = ConfigDict(from_attributes=True)


# --- Requests ---

class CompanyCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    business_type: BusinessType
    funding_type: FundingType
    user_id: int = 1


class AdvanceRequest(BaseModel):
    # decision_id -> option_id, resolved before the quarter rolls
    selections: Dict[int, int] = Field(default_factory=dict)


class CatalogChoice(BaseModel):
    type: str = Field(min_length=1)
    decision: str = Field(min_length=1)


class BulkDecisionRequest(BaseModel):
    decisions: List[CatalogChoice] = Field(min_length=1)


class ResolveDecisionRequest(BaseModel):
    option_id: int


# --- Records ---

class BusinessResponse(RecordModel):
    id: int
    user_id: int
    name: str
    business_type: BusinessType
    funding_type: FundingType
    current_quarter: int
    current_year: int
    cash: float
    revenue: float
    expenses: float
    profit: float
    valuation: float
    initial_capital: float
    quarterly_burn_rate: float
    employees: int
    customers: int
    product_progress: float
    market_share: float


class CompetitorResponse(RecordModel):
    id: int
    business_id: int
    name: str
    business_type: BusinessType
    market_share: float
    strength: int
    focus: str


class OptionMetricsResponse(RecordModel):
    cost: float
    timeframe: str
    roi: str
    cac: Optional[float] = None


class DecisionOptionResponse(RecordModel):
    id: int
    label: str
    description: str
    metrics: OptionMetricsResponse


class ConsequenceResponse(RecordModel):
    option_id: int
    effects: Dict[str, float]
    description: str


class DecisionResponse(RecordModel):
    id: int
    business_id: int
    quarter: int
    year: int
    decision_type: DecisionType
    title: str
    description: str
    options: List[DecisionOptionResponse]
    consequences: List[ConsequenceResponse]
    deadline: int
    urgency: Urgency
    is_completed: bool
    selected_option_id: Optional[int] = None


class CatalogDecisionResponse(RecordModel):
    id: int
    business_id: int
    quarter: int
    year: int
    decision_type: DecisionType
    choice: str
    cost: float
    impact: Dict[str, float]


class EventResponse(RecordModel):
    id: Optional[int] = None
    business_id: Optional[int] = None
    quarter: int
    year: int
    event_type: EventType
    title: str
    description: str
    impact: Dict[str, Any]
    resolved: bool
    icon: str
    icon_color: str


class AdviceResponse(RecordModel):
    id: Optional[int] = None
    business_id: Optional[int] = None
    advice_type: AdviceType
    title: str
    content: str
    related_to: str
    quarter: int
    year: int


class FinancialRecordResponse(RecordModel):
    business_id: Optional[int] = None
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
    market_share: float
    employees: int


# --- Composite responses ---

class CompanySetupResponse(BaseModel):
    business: BusinessResponse
    competitors: List[CompetitorResponse]
    decisions: List[DecisionResponse]
    advice: List[AdviceResponse]
    events: List[EventResponse]
    financial_record: FinancialRecordResponse


class AdvanceResponse(BaseModel):
    business: BusinessResponse
    financial_record: FinancialRecordResponse
    events: List[EventResponse]
    decisions: List[DecisionResponse]
    advice: List[AdviceResponse]
    competitors: List[CompetitorResponse]


class BulkDecisionResponse(BaseModel):
    company: BusinessResponse
    decisions: List[CatalogDecisionResponse]
    events: List[EventResponse]
    next_quarter: int
    next_year: int


class ResolveDecisionResponse(BaseModel):
    business: BusinessResponse
    decision: DecisionResponse
    event: EventResponse


class HistorySummaryResponse(BaseModel):
    quarters: int
    total_revenue: float
    total_expenses: float
    total_profit: float
    latest_cash: float
    runway_quarters: Optional[float] = None
    profitable_quarters: int


class LeaderboardEntry(BaseModel):
    rank: int
    id: int
    name: str
    business_type: str
    revenue: float
    expenses: float
    profit: float
    valuation: float
    market_share: float
    revenue_share: float
