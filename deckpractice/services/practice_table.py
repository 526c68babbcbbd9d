"""
Practice table: up to two sessions side by side.

The two sides are independent apart from the shared stadium slot. The table
also carries the coin used for coin-flip effects.
"""

import logging
import random
import uuid
from collections.abc import Sequence
from enum import Enum

import httpx

from deckpractice.config import settings
from deckpractice.engine.session import PracticeSession
from deckpractice.engine.stadium import SharedStadium
from deckpractice.models.card import CanonicalCard
from deckpractice.parsers.deck_code import DEFAULT_CATEGORIES, DeckCodeConfig, DeckCodeResolver
from deckpractice.scrapers.pokemon_card import fetch_deck_page

logger = logging.getLogger(__name__)

PLAYER_SELF = "self"
PLAYER_OPPONENT = "opponent"
PLAYERS = (PLAYER_SELF, PLAYER_OPPONENT)


class CoinSide(str, Enum):
    HEADS = "heads"
    TAILS = "tails"


class PracticeTable:
    """Sessions for "self" and (optionally) "opponent" sharing one stadium."""

    def __init__(
        self,
        decks: Sequence[Sequence[CanonicalCard]],
        rng: random.Random | None = None,
        bench_capacity: int | None = None,
    ) -> None:
        """
        Deal a table.

        Args:
            decks: One decoded deck per side, "self" first (one or two decks)
            rng: Random source shared by the table (seeded in tests)
            bench_capacity: Usable bench slots at start

        Raises:
            ValueError: If not one or two decks are given
            DeckValidationError: If a deck is not exactly 60 cards
        """
        if not 1 <= len(decks) <= len(PLAYERS):
            raise ValueError(f"A table seats 1 or 2 decks, got {len(decks)}")

        self.table_id = uuid.uuid4().hex
        self._rng = rng or random.Random()
        self.stadium = SharedStadium()
        self.sessions: dict[str, PracticeSession] = {}

        for owner, deck in zip(PLAYERS, decks):
            self.sessions[owner] = PracticeSession.from_cards(
                deck,
                owner=owner,
                rng=random.Random(self._rng.random()),
                stadium=self.stadium,
                bench_capacity=bench_capacity,
            )

        self.last_coin: CoinSide | None = None

    def session(self, owner: str) -> PracticeSession | None:
        return self.sessions.get(owner)

    def flip_coin(self) -> CoinSide:
        self.last_coin = CoinSide.HEADS if self._rng.random() < 0.5 else CoinSide.TAILS
        return self.last_coin


def default_resolver() -> DeckCodeResolver:
    """Resolver whose image URLs follow the configured card site."""
    return DeckCodeResolver(
        DeckCodeConfig(
            image_base_url=settings.card_site_base_url,
            category_types=DEFAULT_CATEGORIES,
        )
    )


async def load_deck(
    deck_code: str,
    resolver: DeckCodeResolver | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[CanonicalCard]:
    """
    Fetch and decode one deck code.

    Raises:
        InvalidDeckCodeError: If the code is malformed
        FetchError: If the card site request fails
        ParseError: If the page carries no card catalog
    """
    html = await fetch_deck_page(deck_code, client=client)
    cards = (resolver or default_resolver()).resolve(html)
    logger.info("Loaded deck %s: %d card types", deck_code, len(cards))
    return cards


async def open_table(
    deck_codes: Sequence[str],
    resolver: DeckCodeResolver | None = None,
    client: httpx.AsyncClient | None = None,
    rng: random.Random | None = None,
    bench_capacity: int | None = None,
) -> PracticeTable:
    """
    Load one or two deck codes and deal a table.

    Decks are fetched one after another; the first failure aborts the table.
    """
    decks = [await load_deck(code, resolver=resolver, client=client) for code in deck_codes]
    table = PracticeTable(decks, rng=rng, bench_capacity=bench_capacity)
    logger.info("Opened table %s with %d player(s)", table.table_id, len(decks))
    return table
