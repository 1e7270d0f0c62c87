"""
Data Layer - game state persistence.
"""

from startup_sim.data_layer.game_repository import (
    CommittedTransition,
    GameRepository,
    InMemoryGameRepository,
    RecordNotFoundError,
)

__all__ = [
    "GameRepository",
    "InMemoryGameRepository",
    "CommittedTransition",
    "RecordNotFoundError",
]
