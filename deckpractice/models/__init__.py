from deckpractice.models.card import (
    ITEM,
    POKEMON_TOOL,
    STADIUM,
    SUPPORTER,
    TECHNICAL_MACHINE,
    CanonicalCard,
    CardInstance,
    Supertype,
)
from deckpractice.models.card_stack import (
    CLEAR_DAMAGE,
    DAMAGE_COUNTERS,
    CardStack,
    adjust_damage,
    append_or_insert,
    can_stack,
    create_stack,
    find_top_pokemon,
    get_top_card,
    is_energy,
    is_pokemon,
    is_tool,
)
from deckpractice.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    DeckValidationError,
    FailureDetail,
    FailureKind,
    FetchError,
    InvalidDeckCodeError,
    KnownError,
    OutcomeType,
    ParseError,
    TableNotFoundError,
    create_known_failure,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)

__all__ = [
    "ApiResponse",
    "CLEAR_DAMAGE",
    "CanonicalCard",
    "CardInstance",
    "CardStack",
    "DAMAGE_COUNTERS",
    "DeckValidationError",
    "FailureDetail",
    "FailureKind",
    "FetchError",
    "ITEM",
    "InvalidDeckCodeError",
    "KnownError",
    "OutcomeType",
    "POKEMON_TOOL",
    "ParseError",
    "STADIUM",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SUPPORTER",
    "Supertype",
    "TECHNICAL_MACHINE",
    "TableNotFoundError",
    "adjust_damage",
    "append_or_insert",
    "can_stack",
    "create_known_failure",
    "create_stack",
    "create_unknown_failure",
    "finalize_response",
    "find_top_pokemon",
    "get_top_card",
    "is_energy",
    "is_finalized",
    "is_pokemon",
    "is_tool",
]
