import random
from pathlib import Path

import pytest

from deckpractice.models.card import (
    ITEM,
    POKEMON_TOOL,
    STADIUM,
    SUPPORTER,
    CanonicalCard,
    CardInstance,
    Supertype,
)

FIXTURES = Path(__file__).parent / "fixtures"

IMG = "https://www.pokemon-card.com/assets/images/card_images/large"


@pytest.fixture
def deck_html() -> str:
    """Deck confirmation page for a 60-card deck."""
    return (FIXTURES / "deck_confirm.html").read_text(encoding="utf-8")


@pytest.fixture
def not_found_html() -> str:
    """Page the site serves for an unknown deck code."""
    return (FIXTURES / "deck_not_found.html").read_text(encoding="utf-8")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def pikachu() -> CardInstance:
    return CardInstance("Pikachu ex", f"{IMG}/SV8/046.jpg", Supertype.POKEMON)


@pytest.fixture
def raichu() -> CardInstance:
    return CardInstance("Raichu", f"{IMG}/SV8/047.jpg", Supertype.POKEMON)


@pytest.fixture
def energy() -> CardInstance:
    return CardInstance("Basic Lightning Energy", f"{IMG}/SVE/004.jpg", Supertype.ENERGY)


@pytest.fixture
def tool() -> CardInstance:
    return CardInstance(
        "Bravery Charm", f"{IMG}/SV2/173.jpg", Supertype.TRAINER, frozenset({POKEMON_TOOL})
    )


@pytest.fixture
def item() -> CardInstance:
    return CardInstance("Ultra Ball", f"{IMG}/SV1/196.jpg", Supertype.TRAINER, frozenset({ITEM}))


@pytest.fixture
def supporter() -> CardInstance:
    return CardInstance("Iono", f"{IMG}/SV2/185.jpg", Supertype.TRAINER, frozenset({SUPPORTER}))


@pytest.fixture
def stadium_card() -> CardInstance:
    return CardInstance("Artazon", f"{IMG}/SV2/171.jpg", Supertype.TRAINER, frozenset({STADIUM}))


@pytest.fixture
def other_stadium_card() -> CardInstance:
    return CardInstance(
        "Town Store", f"{IMG}/SV3/196.jpg", Supertype.TRAINER, frozenset({STADIUM})
    )


@pytest.fixture
def sample_deck() -> list[CanonicalCard]:
    """A legal-size decoded deck (60 cards)."""
    return [
        CanonicalCard("Pikachu ex", f"{IMG}/SV8/046.jpg", 4, Supertype.POKEMON),
        CanonicalCard("Raichu", f"{IMG}/SV8/047.jpg", 4, Supertype.POKEMON),
        CanonicalCard("Pichu", f"{IMG}/SV8/045.jpg", 4, Supertype.POKEMON),
        CanonicalCard("Ultra Ball", f"{IMG}/SV1/196.jpg", 4, Supertype.TRAINER, frozenset({ITEM})),
        CanonicalCard("Nest Ball", f"{IMG}/SV1/181.jpg", 4, Supertype.TRAINER, frozenset({ITEM})),
        CanonicalCard(
            "Bravery Charm", f"{IMG}/SV2/173.jpg", 2, Supertype.TRAINER, frozenset({POKEMON_TOOL})
        ),
        CanonicalCard("Iono", f"{IMG}/SV2/185.jpg", 4, Supertype.TRAINER, frozenset({SUPPORTER})),
        CanonicalCard("Judge", f"{IMG}/SV1/176.jpg", 2, Supertype.TRAINER, frozenset({SUPPORTER})),
        CanonicalCard("Artazon", f"{IMG}/SV2/171.jpg", 2, Supertype.TRAINER, frozenset({STADIUM})),
        CanonicalCard("Basic Lightning Energy", f"{IMG}/SVE/004.jpg", 30, Supertype.ENERGY),
    ]


class UnshuffledRandom(random.Random):
    """Random source whose shuffle keeps the order, for hand-built deals."""

    def shuffle(self, x) -> None:  # type: ignore[override]
        return None


@pytest.fixture
def unshuffled() -> random.Random:
    return UnshuffledRandom(0)


@pytest.fixture
def ordered_deck(
    pikachu: CardInstance,
    raichu: CardInstance,
    energy: CardInstance,
    tool: CardInstance,
    item: CardInstance,
    stadium_card: CardInstance,
    supporter: CardInstance,
) -> list[CardInstance]:
    """
    60 cards in deal order for an unshuffled table.

    Prizes are six energy; the opening hand is, by index:
    0 Pikachu ex, 1 energy, 2 tool, 3 item, 4 Raichu, 5 stadium, 6 supporter.
    The library is energy.
    """
    prizes = [energy] * 6
    hand = [pikachu, energy, tool, item, raichu, stadium_card, supporter]
    return prizes + hand + [energy] * (60 - len(prizes) - len(hand))
