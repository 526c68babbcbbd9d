"""
Practice session: one player's side of the table.

Holds the current snapshot and swaps in whatever the pure transitions
return. Callers compare `state` before and after a call to decide what to
redraw; an ignored move leaves `state` as the very same object.
"""

import logging
import random
from collections.abc import Iterable

from deckpractice.engine import transitions
from deckpractice.engine.commands import MoveCommand, dispatch
from deckpractice.engine.effects import apply_effect
from deckpractice.engine.stadium import SharedStadium
from deckpractice.engine.state import PracticeState, StadiumPlacement, Zone, new_practice_state
from deckpractice.models.card import CanonicalCard, CardInstance
from deckpractice.parsers.deck_code import expand_deck

logger = logging.getLogger(__name__)


class PracticeSession:
    """
    Stateful wrapper over the table transitions for one side.

    Resetting means discarding the session and building a new one; there is
    no in-place reset.
    """

    def __init__(
        self,
        cards: list[CardInstance],
        owner: str = "self",
        rng: random.Random | None = None,
        stadium: SharedStadium | None = None,
        bench_capacity: int | None = None,
    ) -> None:
        """
        Deal a new table.

        Args:
            cards: Exactly DECK_SIZE card instances
            owner: Name of this side
            rng: Random source (seed it for reproducible deals)
            stadium: Shared stadium slot; a private one is created if omitted
            bench_capacity: Usable bench slots at start

        Raises:
            DeckValidationError: If the deck size is wrong
        """
        self._rng = rng or random.Random()
        self._state = new_practice_state(cards, owner, self._rng, bench_capacity)
        self._stadium = stadium or SharedStadium()
        self._stadium.subscribe(self._on_stadium_changed)
        logger.info(
            "[%s] dealt %d prizes, %d in hand, %d in library",
            owner,
            len(self._state.prizes),
            len(self._state.hand),
            len(self._state.library),
        )

    @classmethod
    def from_cards(
        cls,
        cards: Iterable[CanonicalCard],
        owner: str = "self",
        rng: random.Random | None = None,
        stadium: SharedStadium | None = None,
        bench_capacity: int | None = None,
    ) -> "PracticeSession":
        """Build a session from decoded deck entries (quantities expanded)."""
        return cls(
            expand_deck(cards),
            owner=owner,
            rng=rng,
            stadium=stadium,
            bench_capacity=bench_capacity,
        )

    @property
    def state(self) -> PracticeState:
        return self._state

    @property
    def owner(self) -> str:
        return self._state.owner

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def stadium(self) -> SharedStadium:
        return self._stadium

    def _on_stadium_changed(self, placement: StadiumPlacement | None) -> None:
        self._state = transitions.observe_stadium(self._state, placement)

    # -------------------------------------------------------------------------
    # Library
    # -------------------------------------------------------------------------

    def draw(self, count: int = 1) -> PracticeState:
        self._state = transitions.draw(self._state, count)
        return self._state

    def shuffle_library(self) -> PracticeState:
        self._state = transitions.shuffle_library(self._state, self._rng)
        return self._state

    def mulligan(self) -> PracticeState:
        self._state = transitions.mulligan(self._state, self._rng)
        return self._state

    # -------------------------------------------------------------------------
    # Playing cards
    # -------------------------------------------------------------------------

    def play_to_battlefield(self, hand_index: int) -> PracticeState:
        self._state = transitions.play_to_battlefield(self._state, hand_index)
        return self._state

    def stack_on_battlefield(self, hand_index: int, insert_below: bool = False) -> PracticeState:
        self._state = transitions.stack_on_battlefield(self._state, hand_index, insert_below)
        return self._state

    def play_to_bench(self, hand_index: int, slot: int | None = None) -> PracticeState:
        self._state = transitions.play_to_bench(self._state, hand_index, slot)
        return self._state

    def stack_on_bench(
        self,
        hand_index: int,
        slot: int,
        insert_below: bool = False,
    ) -> PracticeState:
        self._state = transitions.stack_on_bench(self._state, hand_index, slot, insert_below)
        return self._state

    def move_to_stadium(self, hand_index: int) -> PracticeState:
        """
        Play a hand card into the shared stadium slot.

        Whichever side displayed the previous stadium trashes it when it
        observes the change.
        """
        state, card = transitions.take_for_stadium(self._state, hand_index)
        if card is None:
            return self._state

        self._state = state
        self._stadium.place(card, self.owner)
        return self._state

    def clear_stadium(self) -> PracticeState:
        """Discard the stadium in play, whoever owns it."""
        self._stadium.clear()
        return self._state

    # -------------------------------------------------------------------------
    # Prizes, trash, moves between slots
    # -------------------------------------------------------------------------

    def take_prize_card(self, index: int) -> PracticeState:
        self._state = transitions.take_prize_card(self._state, index)
        return self._state

    def to_trash(self, zone: Zone, index: int = 0) -> PracticeState:
        self._state = transitions.to_trash(self._state, zone, index)
        return self._state

    def recover_from_trash(self, index: int) -> PracticeState:
        self._state = transitions.recover_from_trash(self._state, index)
        return self._state

    def return_to_hand(self, zone: Zone, slot: int = 0) -> PracticeState:
        self._state = transitions.return_to_hand(self._state, zone, slot)
        return self._state

    def battlefield_to_bench(self, slot: int) -> PracticeState:
        self._state = transitions.battlefield_to_bench(self._state, slot)
        return self._state

    def bench_to_battlefield(self, slot: int) -> PracticeState:
        self._state = transitions.bench_to_battlefield(self._state, slot)
        return self._state

    def bench_swap(self, slot_a: int, slot_b: int) -> PracticeState:
        self._state = transitions.bench_swap(self._state, slot_a, slot_b)
        return self._state

    def increase_bench_capacity(self) -> PracticeState:
        self._state = transitions.increase_bench_capacity(self._state)
        return self._state

    def adjust_damage(self, zone: Zone, slot: int, delta: int | str) -> PracticeState:
        self._state = transitions.adjust_stack_damage(self._state, zone, slot, delta)
        return self._state

    # -------------------------------------------------------------------------
    # Effects and commands
    # -------------------------------------------------------------------------

    def use_effect(self, name: str) -> PracticeState:
        """
        Run a scripted supporter effect.

        Raises:
            KeyError: If the effect name is unknown
        """
        self._state = apply_effect(self._state, name, self._rng)
        return self._state

    def apply(self, command: MoveCommand) -> PracticeState:
        """Route a move command (from the gesture router) to its transition."""
        dispatch(self, command)
        return self._state
