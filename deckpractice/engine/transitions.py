"""
Table transitions.

Every function takes a PracticeState and returns the next one. A move whose
precondition does not hold returns the SAME state object: illegal moves are
ignored, never raised, so a stray gesture cannot crash the caller or leave
the table half-updated.

Randomness is always passed in as a random.Random.
"""

import logging
import random
from dataclasses import replace
from typing import TypeVar

from deckpractice.config import BENCH_SLOTS, OPENING_HAND_SIZE
from deckpractice.engine.state import PracticeState, StadiumPlacement, Zone
from deckpractice.models.card import CardInstance
from deckpractice.models.card_stack import (
    CLEAR_DAMAGE,
    DAMAGE_COUNTERS,
    CardStack,
    adjust_damage,
    append_or_insert,
    can_stack,
    create_stack,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _ignored(state: PracticeState, move: str, reason: str) -> PracticeState:
    logger.debug("[%s] ignored %s: %s", state.owner, move, reason)
    return state


def _take(items: tuple[T, ...], index: int) -> tuple[T, tuple[T, ...]]:
    """Remove items[index]; caller has checked the index."""
    return items[index], items[:index] + items[index + 1 :]


def _valid_index(items: tuple[object, ...], index: int) -> bool:
    return 0 <= index < len(items)


def _set_bench(
    state: PracticeState,
    slot: int,
    stack: CardStack | None,
) -> tuple[CardStack | None, ...]:
    bench = list(state.bench)
    bench[slot] = stack
    return tuple(bench)


# =============================================================================
# LIBRARY
# =============================================================================


def draw(state: PracticeState, count: int = 1) -> PracticeState:
    """Move the top `count` library cards to hand; no-op if not enough cards."""
    if count < 1:
        return _ignored(state, "draw", f"count {count}")
    if len(state.library) < count:
        return _ignored(state, "draw", f"{count} requested, {len(state.library)} in library")

    return replace(
        state,
        hand=state.hand + state.library[:count],
        library=state.library[count:],
    )


def shuffle_library(state: PracticeState, rng: random.Random) -> PracticeState:
    """Randomly permute the library; other zones are untouched."""
    library = list(state.library)
    rng.shuffle(library)
    return replace(state, library=tuple(library))


def mulligan(state: PracticeState, rng: random.Random) -> PracticeState:
    """
    Shuffle the hand back into the library and draw a new opening hand.

    The new hand has min(7, hand + library) cards.
    """
    merged = list(state.library + state.hand)
    rng.shuffle(merged)

    return replace(
        state,
        hand=tuple(merged[:OPENING_HAND_SIZE]),
        library=tuple(merged[OPENING_HAND_SIZE:]),
    )


def reshuffle_hand_and_draw(state: PracticeState, count: int, rng: random.Random) -> PracticeState:
    """
    Shuffle the whole hand into the library, then draw `count` cards.

    Draws whatever is available if the library runs short.
    """
    merged = list(state.library + state.hand)
    rng.shuffle(merged)
    count = max(0, min(count, len(merged)))

    return replace(
        state,
        hand=tuple(merged[:count]),
        library=tuple(merged[count:]),
    )


# =============================================================================
# HAND -> PLAY
# =============================================================================


def play_to_battlefield(state: PracticeState, hand_index: int) -> PracticeState:
    """
    Put a hand card into the active spot as a new stack.

    An occupied active spot is replaced, not stacked on: its whole stack
    goes to the trash first.
    """
    if not _valid_index(state.hand, hand_index):
        return _ignored(state, "play_to_battlefield", f"no hand card at {hand_index}")

    card, hand = _take(state.hand, hand_index)
    trash = state.trash
    if state.battlefield is not None:
        trash = trash + state.battlefield.cards

    return replace(state, hand=hand, trash=trash, battlefield=create_stack(card))


def stack_on_battlefield(
    state: PracticeState,
    hand_index: int,
    insert_below: bool = False,
) -> PracticeState:
    """Attach or evolve onto the active stack."""
    if not _valid_index(state.hand, hand_index):
        return _ignored(state, "stack_on_battlefield", f"no hand card at {hand_index}")
    if state.battlefield is None:
        return _ignored(state, "stack_on_battlefield", "battlefield empty")

    card = state.hand[hand_index]
    if not can_stack(card, state.battlefield):
        return _ignored(state, "stack_on_battlefield", f"cannot stack {card.name}")

    _, hand = _take(state.hand, hand_index)
    return replace(
        state,
        hand=hand,
        battlefield=append_or_insert(card, state.battlefield, insert_below),
    )


def play_to_bench(state: PracticeState, hand_index: int, slot: int | None = None) -> PracticeState:
    """
    Put a hand card on an empty bench slot as a new stack.

    Args:
        state: Current snapshot
        hand_index: Hand card to play
        slot: Target slot; None picks the first empty usable slot
    """
    if not _valid_index(state.hand, hand_index):
        return _ignored(state, "play_to_bench", f"no hand card at {hand_index}")

    if slot is None:
        slot = state.first_empty_bench_slot()
        if slot is None:
            return _ignored(state, "play_to_bench", "bench full")

    if not state.bench_usable(slot):
        return _ignored(state, "play_to_bench", f"slot {slot} not usable")
    if state.bench[slot] is not None:
        return _ignored(state, "play_to_bench", f"slot {slot} occupied")

    card, hand = _take(state.hand, hand_index)
    return replace(state, hand=hand, bench=_set_bench(state, slot, create_stack(card)))


def stack_on_bench(
    state: PracticeState,
    hand_index: int,
    slot: int,
    insert_below: bool = False,
) -> PracticeState:
    """Attach or evolve onto a bench stack."""
    if not _valid_index(state.hand, hand_index):
        return _ignored(state, "stack_on_bench", f"no hand card at {hand_index}")

    stack = state.bench_stack(slot)
    if stack is None:
        return _ignored(state, "stack_on_bench", f"slot {slot} empty or not usable")

    card = state.hand[hand_index]
    if not can_stack(card, stack):
        return _ignored(state, "stack_on_bench", f"cannot stack {card.name}")

    _, hand = _take(state.hand, hand_index)
    return replace(
        state,
        hand=hand,
        bench=_set_bench(state, slot, append_or_insert(card, stack, insert_below)),
    )


# =============================================================================
# STADIUM
# =============================================================================


def take_for_stadium(
    state: PracticeState,
    hand_index: int,
) -> tuple[PracticeState, CardInstance | None]:
    """
    Remove a hand card so it can be placed in the shared stadium slot.

    The card is only accounted for again once the side observes its own
    placement (observe_stadium), so callers do both in one step.

    Returns:
        (new state, card) or (same state, None) if there is no such card
    """
    if not _valid_index(state.hand, hand_index):
        return _ignored(state, "move_to_stadium", f"no hand card at {hand_index}"), None

    card, hand = _take(state.hand, hand_index)
    return replace(state, hand=hand), card


def observe_stadium(state: PracticeState, placement: StadiumPlacement | None) -> PracticeState:
    """
    React to the shared stadium slot changing.

    If this side was displaying its own stadium and the slot now holds
    something else (or nothing), that old card goes to this side's trash.
    The new placement is kept only if this side owns it. Observing the
    same placement again changes nothing.
    """
    if placement == state.stadium:
        return state

    trash = state.trash
    if state.stadium is not None:
        trash = trash + (state.stadium.card,)

    own = placement if placement is not None and placement.owner == state.owner else None
    if own is None and state.stadium is None:
        return state

    return replace(state, trash=trash, stadium=own)


# =============================================================================
# PRIZES / TRASH / HAND RETURNS
# =============================================================================


def take_prize_card(state: PracticeState, index: int) -> PracticeState:
    """Move one prize card to hand. Allowed at any time."""
    if not _valid_index(state.prizes, index):
        return _ignored(state, "take_prize_card", f"no prize at {index}")

    card, prizes = _take(state.prizes, index)
    return replace(state, prizes=prizes, hand=state.hand + (card,))


def to_trash(state: PracticeState, zone: Zone, index: int = 0) -> PracticeState:
    """
    Discard from hand (one card), the active spot or a bench slot (whole stack).

    Args:
        state: Current snapshot
        zone: HAND, BATTLEFIELD or BENCH
        index: Hand index or bench slot; ignored for BATTLEFIELD
    """
    if zone == Zone.HAND:
        if not _valid_index(state.hand, index):
            return _ignored(state, "to_trash", f"no hand card at {index}")
        card, hand = _take(state.hand, index)
        return replace(state, hand=hand, trash=state.trash + (card,))

    if zone == Zone.BATTLEFIELD:
        if state.battlefield is None:
            return _ignored(state, "to_trash", "battlefield empty")
        return replace(state, battlefield=None, trash=state.trash + state.battlefield.cards)

    if zone == Zone.BENCH:
        stack = state.bench_stack(index)
        if stack is None:
            return _ignored(state, "to_trash", f"bench slot {index} empty")
        return replace(
            state,
            bench=_set_bench(state, index, None),
            trash=state.trash + stack.cards,
        )

    return _ignored(state, "to_trash", f"zone {zone.value} is not a trash source")


def recover_from_trash(state: PracticeState, index: int) -> PracticeState:
    """Pick one card out of the trash back into hand."""
    if not _valid_index(state.trash, index):
        return _ignored(state, "recover_from_trash", f"no trash card at {index}")

    card, trash = _take(state.trash, index)
    return replace(state, trash=trash, hand=state.hand + (card,))


def return_to_hand(state: PracticeState, zone: Zone, slot: int = 0) -> PracticeState:
    """Pick up the whole active or bench stack back into hand."""
    if zone == Zone.BATTLEFIELD:
        if state.battlefield is None:
            return _ignored(state, "return_to_hand", "battlefield empty")
        return replace(state, battlefield=None, hand=state.hand + state.battlefield.cards)

    if zone == Zone.BENCH:
        stack = state.bench_stack(slot)
        if stack is None:
            return _ignored(state, "return_to_hand", f"bench slot {slot} empty")
        return replace(
            state,
            bench=_set_bench(state, slot, None),
            hand=state.hand + stack.cards,
        )

    return _ignored(state, "return_to_hand", f"zone {zone.value} holds no stack")


# =============================================================================
# BATTLEFIELD <-> BENCH
# =============================================================================


def battlefield_to_bench(state: PracticeState, slot: int) -> PracticeState:
    """
    Retreat the active stack to a bench slot.

    Whatever sat in the slot (possibly nothing) becomes the active stack.
    """
    if state.battlefield is None:
        return _ignored(state, "battlefield_to_bench", "battlefield empty")
    if not state.bench_usable(slot):
        return _ignored(state, "battlefield_to_bench", f"slot {slot} not usable")

    return replace(
        state,
        battlefield=state.bench[slot],
        bench=_set_bench(state, slot, state.battlefield),
    )


def bench_to_battlefield(state: PracticeState, slot: int) -> PracticeState:
    """Promote a bench stack; the previous active stack (if any) takes its slot."""
    stack = state.bench_stack(slot)
    if stack is None:
        return _ignored(state, "bench_to_battlefield", f"bench slot {slot} empty")

    return replace(
        state,
        battlefield=stack,
        bench=_set_bench(state, slot, state.battlefield),
    )


def bench_swap(state: PracticeState, slot_a: int, slot_b: int) -> PracticeState:
    """Exchange two bench slots (one of them may be empty)."""
    if slot_a == slot_b:
        return _ignored(state, "bench_swap", "same slot")
    if not (state.bench_usable(slot_a) and state.bench_usable(slot_b)):
        return _ignored(state, "bench_swap", f"slots {slot_a}/{slot_b} not usable")
    if state.bench[slot_a] is None and state.bench[slot_b] is None:
        return _ignored(state, "bench_swap", "both slots empty")

    bench = list(state.bench)
    bench[slot_a], bench[slot_b] = bench[slot_b], bench[slot_a]
    return replace(state, bench=tuple(bench))


def increase_bench_capacity(state: PracticeState) -> PracticeState:
    if state.bench_capacity >= BENCH_SLOTS:
        return _ignored(state, "increase_bench_capacity", "bench at maximum")
    return replace(state, bench_capacity=state.bench_capacity + 1)


# =============================================================================
# DAMAGE
# =============================================================================


def adjust_stack_damage(
    state: PracticeState,
    zone: Zone,
    slot: int,
    delta: int | str,
) -> PracticeState:
    """
    Put a damage counter (10/50/100) on a stack, or clear its damage.

    Args:
        state: Current snapshot
        zone: BATTLEFIELD or BENCH
        slot: Bench slot; ignored for BATTLEFIELD
        delta: One of DAMAGE_COUNTERS, or CLEAR_DAMAGE
    """
    if delta != CLEAR_DAMAGE and delta not in DAMAGE_COUNTERS:
        return _ignored(state, "adjust_damage", f"delta {delta!r}")

    if zone == Zone.BATTLEFIELD:
        if state.battlefield is None:
            return _ignored(state, "adjust_damage", "battlefield empty")
        return replace(state, battlefield=adjust_damage(state.battlefield, delta))

    if zone == Zone.BENCH:
        stack = state.bench_stack(slot)
        if stack is None:
            return _ignored(state, "adjust_damage", f"bench slot {slot} empty")
        return replace(state, bench=_set_bench(state, slot, adjust_damage(stack, delta)))

    return _ignored(state, "adjust_damage", f"zone {zone.value} holds no stack")
