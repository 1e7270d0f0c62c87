"""
FastAPI dependency injection providers.
"""

from functools import lru_cache

from config import Settings, get_settings
from startup_sim.app_layer.game_service import GameService
from startup_sim.data_layer.game_repository import GameRepository, InMemoryGameRepository


@lru_cache
def get_cached_settings() -> Settings:
    return get_settings()


@lru_cache
def get_repository() -> GameRepository:
    return InMemoryGameRepository()


@lru_cache
def get_game_service() -> GameService:
    return GameService(get_repository(), get_cached_settings())
