from deckpractice.api.health import router as health_router
from deckpractice.api.practice import router as practice_router

__all__ = [
    "health_router",
    "practice_router",
]
