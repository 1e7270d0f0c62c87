"""
Company API endpoints: setup, reads and quarter advance.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends

from startup_sim.analysis_layer.financial_analyzer import summarize_history
from startup_sim.app_layer.dependencies import get_game_service
from startup_sim.app_layer.game_service import GameService
from startup_sim.app_layer.schemas import (
    AdvanceRequest,
    AdvanceResponse,
    AdviceResponse,
    BusinessResponse,
    CompanyCreateRequest,
    CompanySetupResponse,
    CompetitorResponse,
    DecisionResponse,
    EventResponse,
    FinancialRecordResponse,
    HistorySummaryResponse,
)
from startup_sim.simulation_layer.impact_resolver import CATALOG
from startup_sim.simulation_layer.recommendations import recommend_choice

router = APIRouter()


@router.post("", response_model=CompanySetupResponse, status_code=201)
async def create_company(request: CompanyCreateRequest, service: GameService = Depends(get_game_service)):
    """Create a company with its competitors, first decisions and advice."""
    result = service.create_company(request.user_id, request.name, request.business_type, request.funding_type)
    return CompanySetupResponse(
        business=BusinessResponse.model_validate(result.business),
        competitors=[CompetitorResponse.model_validate(c) for c in result.competitors],
        decisions=[DecisionResponse.model_validate(d) for d in result.decisions],
        advice=[AdviceResponse.model_validate(a) for a in result.advice],
        events=[EventResponse.model_validate(e) for e in result.events],
        financial_record=FinancialRecordResponse.model_validate(result.financial_record),
    )


@router.get("/{business_id}", response_model=BusinessResponse)
async def get_company(business_id: int, service: GameService = Depends(get_game_service)):
    return BusinessResponse.model_validate(service.get_business(business_id))


@router.get("/{business_id}/financials", response_model=List[FinancialRecordResponse])
async def get_financials(business_id: int, service: GameService = Depends(get_game_service)):
    service.get_business(business_id)
    records = service.repository.get_financial_records(business_id)
    return [FinancialRecordResponse.model_validate(r) for r in records]


@router.get("/{business_id}/summary", response_model=HistorySummaryResponse)
async def get_summary(business_id: int, service: GameService = Depends(get_game_service)):
    service.get_business(business_id)
    return HistorySummaryResponse(**summarize_history(service.repository.get_financial_records(business_id)))


@router.get("/{business_id}/competitors", response_model=List[CompetitorResponse])
async def get_competitors(business_id: int, service: GameService = Depends(get_game_service)):
    service.get_business(business_id)
    return [CompetitorResponse.model_validate(c) for c in service.repository.get_competitors(business_id)]


@router.get("/{business_id}/events", response_model=List[EventResponse])
async def get_events(
    business_id: int,
    active_only: bool = False,
    service: GameService = Depends(get_game_service),
):
    service.get_business(business_id)
    events = service.repository.get_events(business_id, active_only=active_only)
    return [EventResponse.model_validate(e) for e in events]


@router.get("/{business_id}/decisions", response_model=List[DecisionResponse])
async def get_decisions(
    business_id: int,
    pending_only: bool = False,
    service: GameService = Depends(get_game_service),
):
    service.get_business(business_id)
    decisions = service.repository.get_decisions(business_id, pending_only=pending_only)
    return [DecisionResponse.model_validate(d) for d in decisions]


@router.get("/{business_id}/advice", response_model=List[AdviceResponse])
async def get_advice(business_id: int, service: GameService = Depends(get_game_service)):
    service.get_business(business_id)
    return [AdviceResponse.model_validate(a) for a in service.repository.get_advice(business_id)]


@router.get("/{business_id}/recommendations", response_model=Dict[str, str])
async def get_recommendations(business_id: int, service: GameService = Depends(get_game_service)):
    """Recommended catalog choice for each bulk decision category."""
    business = service.get_business(business_id)
    return {dtype.value: recommend_choice(business, dtype) for dtype in CATALOG}


@router.post("/{business_id}/advance", response_model=AdvanceResponse)
async def advance_quarter(
    business_id: int,
    request: Optional[AdvanceRequest] = None,
    service: GameService = Depends(get_game_service),
):
    """Advance the company by one quarter."""
    selections = request.selections if request is not None else {}
    result = service.advance(business_id, selections)
    return AdvanceResponse(
        business=BusinessResponse.model_validate(result.business),
        financial_record=FinancialRecordResponse.model_validate(result.financial_record),
        events=[EventResponse.model_validate(e) for e in result.events],
        decisions=[DecisionResponse.model_validate(d) for d in result.decisions],
        advice=[AdviceResponse.model_validate(a) for a in result.advice],
        competitors=[CompetitorResponse.model_validate(c) for c in result.competitors],
    )
