"""
Leaderboard API endpoint.
"""

from typing import List

from fastapi import APIRouter, Depends

from startup_sim.analysis_layer.financial_analyzer import leaderboard
from startup_sim.app_layer.dependencies import get_game_service
from startup_sim.app_layer.game_service import GameService
from startup_sim.app_layer.schemas import LeaderboardEntry

router = APIRouter()


@router.get("", response_model=List[LeaderboardEntry])
async def get_leaderboard(limit: int = 10, service: GameService = Depends(get_game_service)):
    """Companies ranked by quarterly profit."""
    df = leaderboard(service.repository.list_businesses()).head(limit)
    return [
        LeaderboardEntry(
            rank=int(row.rank),
            id=int(row.id),
            name=row.name,
            business_type=row.business_type,
            revenue=float(row.revenue),
            expenses=float(row.expenses),
            profit=float(row.profit),
            valuation=float(row.valuation),
            market_share=float(row.market_share),
            revenue_share=float(row.revenue_share),
        )
        for row in df.itertuples(index=False)
    ]
