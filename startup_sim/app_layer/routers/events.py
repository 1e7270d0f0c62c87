"""
Event API endpoints.
"""

from fastapi import APIRouter, Depends

from startup_sim.app_layer.dependencies import get_game_service
from startup_sim.app_layer.game_service import GameService
from startup_sim.app_layer.schemas import EventResponse

router = APIRouter()


@router.post("/{event_id}/resolve", response_model=EventResponse)
async def resolve_event(event_id: int, service: GameService = Depends(get_game_service)):
    return EventResponse.model_validate(service.resolve_event(event_id))
