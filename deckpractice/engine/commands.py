"""
Move commands.

A closed set of drag results. The gesture router only ever produces one of
these; deciding whether the move is legal is left to the transitions.

Routing (source -> target):
    hand        -> battlefield   stack if legal, else replace
    hand        -> bench slot    play if empty, else stack if legal
    hand        -> trash / stadium
    battlefield -> bench slot    swap
    battlefield -> trash / hand
    bench       -> battlefield   swap
    bench       -> bench slot    swap
    bench       -> trash / hand
    stadium     -> trash         clear the stadium
    trash       -> hand          recover one card
Anything else is ignored.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from deckpractice.engine.state import Zone
from deckpractice.models.card_stack import can_stack

if TYPE_CHECKING:
    from deckpractice.engine.session import PracticeSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HandMove:
    """A hand card dropped somewhere."""

    source_index: int
    target_zone: Zone
    target_slot: int | None = None
    insert_below: bool = False
    kind: Literal["hand"] = "hand"


@dataclass(frozen=True, slots=True)
class BattlefieldMove:
    """The active stack dropped somewhere."""

    target_zone: Zone
    target_slot: int | None = None
    source_index: int = 0
    kind: Literal["battlefield"] = "battlefield"


@dataclass(frozen=True, slots=True)
class BenchMove:
    """A bench stack dropped somewhere."""

    source_index: int
    target_zone: Zone
    target_slot: int | None = None
    kind: Literal["bench"] = "bench"


@dataclass(frozen=True, slots=True)
class StadiumMove:
    """The stadium card dropped somewhere (only the trash is meaningful)."""

    target_zone: Zone = Zone.TRASH
    target_slot: int | None = None
    source_index: int = 0
    kind: Literal["stadium"] = "stadium"


@dataclass(frozen=True, slots=True)
class TrashMove:
    """A card picked out of the trash viewer."""

    source_index: int
    target_zone: Zone = Zone.HAND
    target_slot: int | None = None
    kind: Literal["trash"] = "trash"


MoveCommand = HandMove | BattlefieldMove | BenchMove | StadiumMove | TrashMove


def _ignore(session: "PracticeSession", command: MoveCommand) -> None:
    logger.debug("[%s] no route for %s", session.owner, command)


def _dispatch_hand(session: "PracticeSession", command: HandMove) -> None:
    index = command.source_index
    state = session.state

    if command.target_zone == Zone.BATTLEFIELD:
        if not 0 <= index < len(state.hand):
            _ignore(session, command)
            return
        if state.battlefield is not None and can_stack(state.hand[index], state.battlefield):
            session.stack_on_battlefield(index, command.insert_below)
        else:
            session.play_to_battlefield(index)
    elif command.target_zone == Zone.BENCH:
        if command.target_slot is None or state.bench_stack(command.target_slot) is None:
            session.play_to_bench(index, command.target_slot)
        else:
            session.stack_on_bench(index, command.target_slot, command.insert_below)
    elif command.target_zone == Zone.TRASH:
        session.to_trash(Zone.HAND, index)
    elif command.target_zone == Zone.STADIUM:
        session.move_to_stadium(index)
    else:
        _ignore(session, command)


def _dispatch_battlefield(session: "PracticeSession", command: BattlefieldMove) -> None:
    if command.target_zone == Zone.BENCH and command.target_slot is not None:
        session.battlefield_to_bench(command.target_slot)
    elif command.target_zone == Zone.TRASH:
        session.to_trash(Zone.BATTLEFIELD)
    elif command.target_zone == Zone.HAND:
        session.return_to_hand(Zone.BATTLEFIELD)
    else:
        _ignore(session, command)


def _dispatch_bench(session: "PracticeSession", command: BenchMove) -> None:
    slot = command.source_index

    if command.target_zone == Zone.BATTLEFIELD:
        session.bench_to_battlefield(slot)
    elif command.target_zone == Zone.BENCH and command.target_slot is not None:
        session.bench_swap(slot, command.target_slot)
    elif command.target_zone == Zone.TRASH:
        session.to_trash(Zone.BENCH, slot)
    elif command.target_zone == Zone.HAND:
        session.return_to_hand(Zone.BENCH, slot)
    else:
        _ignore(session, command)


def dispatch(session: "PracticeSession", command: MoveCommand) -> None:
    """
    Apply a move command to a session.

    Each command maps to at most one transition; commands without a route
    are logged and ignored.
    """
    if isinstance(command, HandMove):
        _dispatch_hand(session, command)
    elif isinstance(command, BattlefieldMove):
        _dispatch_battlefield(session, command)
    elif isinstance(command, BenchMove):
        _dispatch_bench(session, command)
    elif isinstance(command, StadiumMove):
        if command.target_zone == Zone.TRASH:
            session.clear_stadium()
        else:
            _ignore(session, command)
    elif isinstance(command, TrashMove):
        if command.target_zone == Zone.HAND:
            session.recover_from_trash(command.source_index)
        else:
            _ignore(session, command)
    else:
        _ignore(session, command)
