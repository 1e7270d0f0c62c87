"""
Decision API endpoints: bulk catalog submission and single-decision resolve.
"""

from fastapi import APIRouter, Depends

from startup_sim.app_layer.dependencies import get_game_service
from startup_sim.app_layer.game_service import GameService
from startup_sim.app_layer.schemas import (
    BulkDecisionRequest,
    BulkDecisionResponse,
    BusinessResponse,
    CatalogDecisionResponse,
    DecisionResponse,
    EventResponse,
    ResolveDecisionRequest,
    ResolveDecisionResponse,
)

router = APIRouter()


@router.post("/{business_id}/decisions", response_model=BulkDecisionResponse)
async def submit_decisions(
    business_id: int,
    request: BulkDecisionRequest,
    service: GameService = Depends(get_game_service),
):
    """Apply this quarter's catalog decisions and move to the next quarter."""
    choices = [(choice.type, choice.decision) for choice in request.decisions]
    business, records, events = service.submit_catalog_decisions(business_id, choices)
    return BulkDecisionResponse(
        company=BusinessResponse.model_validate(business),
        decisions=[CatalogDecisionResponse.model_validate(r) for r in records],
        events=[EventResponse.model_validate(e) for e in events],
        next_quarter=business.current_quarter,
        next_year=business.current_year,
    )


@router.post("/{business_id}/decisions/{decision_id}/resolve", response_model=ResolveDecisionResponse)
async def resolve_decision(
    business_id: int,
    decision_id: int,
    request: ResolveDecisionRequest,
    service: GameService = Depends(get_game_service),
):
    business, decision, event = service.resolve_decision(business_id, decision_id, request.option_id)
    return ResolveDecisionResponse(
        business=BusinessResponse.model_validate(business),
        decision=DecisionResponse.model_validate(decision),
        event=EventResponse.model_validate(event),
    )
