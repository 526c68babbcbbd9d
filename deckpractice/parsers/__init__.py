from deckpractice.parsers.deck_code import (
    DEFAULT_DECK_CODE_CONFIG,
    CategoryType,
    DeckCodeConfig,
    DeckCodeResolver,
    collapse_deck,
    deck_size,
    expand_deck,
    resolve,
)

__all__ = [
    "CategoryType",
    "DEFAULT_DECK_CODE_CONFIG",
    "DeckCodeConfig",
    "DeckCodeResolver",
    "collapse_deck",
    "deck_size",
    "expand_deck",
    "resolve",
]
