"""
Practice table snapshot for one player.

INVARIANTS:
- Snapshots are frozen; transitions build new ones
- bench always has BENCH_SLOTS entries; slots >= bench_capacity stay empty
- After initialization, card_count() == DECK_SIZE for the rest of the session
"""

import random
from dataclasses import dataclass
from enum import Enum

from deckpractice.config import (
    BENCH_SLOTS,
    DECK_SIZE,
    MIN_BENCH_CAPACITY,
    OPENING_HAND_SIZE,
    PRIZE_COUNT,
    settings,
)
from deckpractice.models.card import CardInstance
from deckpractice.models.card_stack import CardStack
from deckpractice.models.failure import DeckValidationError


class Zone(str, Enum):
    """Card containers on one side of the table."""

    LIBRARY = "library"
    HAND = "hand"
    PRIZES = "prizes"
    TRASH = "trash"
    BATTLEFIELD = "battlefield"
    BENCH = "bench"
    STADIUM = "stadium"


@dataclass(frozen=True, slots=True)
class StadiumPlacement:
    """
    A card sitting in the shared stadium slot.

    Attributes:
        card: The stadium card
        owner: Session owner that played it (and will trash it)
        serial: Issued by the shared slot; distinguishes identical cards
    """

    card: CardInstance
    owner: str
    serial: int


@dataclass(frozen=True, slots=True)
class PracticeState:
    """
    Every zone of one player's side at one point in time.

    Attributes:
        owner: Name of this side ("self", "opponent")
        library: Draw pile, top card at index 0
        hand: Cards in hand, arrival order
        prizes: Face-down prize cards
        trash: Discard pile, arrival order
        battlefield: Active stack, or None
        bench: BENCH_SLOTS slots, each a stack or None
        bench_capacity: Number of usable bench slots
        stadium: Stadium placement this side is displaying as its own
    """

    owner: str
    library: tuple[CardInstance, ...] = ()
    hand: tuple[CardInstance, ...] = ()
    prizes: tuple[CardInstance, ...] = ()
    trash: tuple[CardInstance, ...] = ()
    battlefield: CardStack | None = None
    bench: tuple[CardStack | None, ...] = (None,) * BENCH_SLOTS
    bench_capacity: int = settings.default_bench_capacity
    stadium: StadiumPlacement | None = None

    def __post_init__(self) -> None:
        if len(self.bench) != BENCH_SLOTS:
            raise ValueError(f"bench must have {BENCH_SLOTS} slots, got {len(self.bench)}")
        if not MIN_BENCH_CAPACITY <= self.bench_capacity <= BENCH_SLOTS:
            raise ValueError(
                f"bench_capacity must be in {MIN_BENCH_CAPACITY}..{BENCH_SLOTS}, "
                f"got {self.bench_capacity}"
            )

    def bench_usable(self, slot: int) -> bool:
        """True if slot is within the usable part of the bench."""
        return 0 <= slot < self.bench_capacity

    def bench_stack(self, slot: int) -> CardStack | None:
        """Stack at a usable bench slot; None if empty or not usable."""
        if not self.bench_usable(slot):
            return None
        return self.bench[slot]

    def first_empty_bench_slot(self) -> int | None:
        for slot in range(self.bench_capacity):
            if self.bench[slot] is None:
                return slot
        return None

    def card_count(self) -> int:
        """
        Total cards this side accounts for.

        Includes the stadium card while this side is displaying it.
        """
        total = len(self.library) + len(self.hand) + len(self.prizes) + len(self.trash)
        if self.battlefield is not None:
            total += len(self.battlefield)
        total += sum(len(stack) for stack in self.bench if stack is not None)
        if self.stadium is not None:
            total += 1
        return total


def new_practice_state(
    cards: list[CardInstance],
    owner: str,
    rng: random.Random,
    bench_capacity: int | None = None,
) -> PracticeState:
    """
    Deal a fresh table from a full deck.

    Shuffles a copy of the deck, then carves prizes (6) and the opening
    hand (7) from the top; the rest is the library.

    Args:
        cards: One instance per physical card
        owner: Name of this side
        rng: Random source for the shuffle
        bench_capacity: Usable bench slots (defaults to settings)

    Returns:
        Initial snapshot

    Raises:
        DeckValidationError: If the deck is not exactly DECK_SIZE cards
    """
    if len(cards) != DECK_SIZE:
        raise DeckValidationError(required_size=DECK_SIZE, actual_size=len(cards))

    shuffled = list(cards)
    rng.shuffle(shuffled)

    hand_end = PRIZE_COUNT + OPENING_HAND_SIZE
    return PracticeState(
        owner=owner,
        prizes=tuple(shuffled[:PRIZE_COUNT]),
        hand=tuple(shuffled[PRIZE_COUNT:hand_end]),
        library=tuple(shuffled[hand_end:]),
        bench_capacity=(
            bench_capacity if bench_capacity is not None else settings.default_bench_capacity
        ),
    )
