"""
Scripted supporter effects.

Only the hand-refresh supporters are scripted; everything else a card does
is played out by hand on the table.
"""

import random
from collections.abc import Callable

from deckpractice.engine.state import PracticeState
from deckpractice.engine.transitions import reshuffle_hand_and_draw

JUDGE_DRAW_COUNT = 4

Effect = Callable[[PracticeState, random.Random], PracticeState]


def reshuffle_draw_prize_count(state: PracticeState, rng: random.Random) -> PracticeState:
    """
    Iono-style refresh: hand into library, draw one card per remaining prize.

    Draw size shrinks as prizes are taken; with no prizes left the hand
    ends up empty.
    """
    return reshuffle_hand_and_draw(state, len(state.prizes), rng)


def reshuffle_draw_four(state: PracticeState, rng: random.Random) -> PracticeState:
    """Judge-style refresh: hand into library, draw four."""
    return reshuffle_hand_and_draw(state, JUDGE_DRAW_COUNT, rng)


EFFECTS: dict[str, Effect] = {
    "reshuffle_draw_prize_count": reshuffle_draw_prize_count,
    "reshuffle_draw_four": reshuffle_draw_four,
}


def apply_effect(state: PracticeState, name: str, rng: random.Random) -> PracticeState:
    """
    Run a scripted effect by name.

    Raises:
        KeyError: If no effect is registered under that name
    """
    try:
        effect = EFFECTS[name]
    except KeyError:
        raise KeyError(f"Unknown effect: {name}. Known: {sorted(EFFECTS)}") from None
    return effect(state, rng)
