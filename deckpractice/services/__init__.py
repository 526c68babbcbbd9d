from deckpractice.services.practice_table import (
    PLAYER_OPPONENT,
    PLAYER_SELF,
    PLAYERS,
    CoinSide,
    PracticeTable,
    load_deck,
    open_table,
)
from deckpractice.services.table_registry import TableRegistry, get_registry

__all__ = [
    "CoinSide",
    "PLAYERS",
    "PLAYER_OPPONENT",
    "PLAYER_SELF",
    "PracticeTable",
    "TableRegistry",
    "get_registry",
    "load_deck",
    "open_table",
]
