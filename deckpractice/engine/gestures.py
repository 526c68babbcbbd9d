"""
Gesture/Drop Router.

Turns raw pointer events into move commands. Time (milliseconds) and
position (pixels) are passed in by the caller, so the router owns no timers
and can be driven from any UI loop or from tests.

Touch input races a short timer against a movement threshold:

    press -> PENDING
      moved past drag_distance_px before drag_delay_ms  -> SCROLLING (no command)
      drag_delay_ms elapsed first                       -> DRAGGING
    DRAGGING + release inside a drop zone               -> command
    DRAGGING + release outside every drop zone          -> nothing

Mouse input has no timer: it starts dragging as soon as the pointer moves
past the threshold.

Drag time only chooses the default placement for hand cards. It counts from
the moment dragging starts (the delay firing for touch, the threshold move
for mouse); a drag lasting long_press_ms or more tucks the card under the
target stack (insert_below=True). Legality is still decided by the transitions.
"""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from deckpractice.engine.commands import (
    BattlefieldMove,
    BenchMove,
    HandMove,
    MoveCommand,
    StadiumMove,
    TrashMove,
)
from deckpractice.engine.state import Zone

logger = logging.getLogger(__name__)

SourceKind = Literal["hand", "battlefield", "bench", "stadium", "trash"]


class GesturePhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    DRAGGING = "dragging"
    SCROLLING = "scrolling"


class PointerKind(str, Enum):
    TOUCH = "touch"
    MOUSE = "mouse"


@dataclass(frozen=True, slots=True)
class GestureSettings:
    """
    Gesture thresholds.

    Attributes:
        drag_delay_ms: Touch hold time before a drag starts
        drag_distance_px: Movement that cancels a pending touch drag
            (or starts a mouse drag)
        long_press_ms: Time spent dragging that switches to insert-below
    """

    drag_delay_ms: int = 200
    drag_distance_px: float = 10.0
    long_press_ms: int = 500


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height


@dataclass(frozen=True, slots=True)
class DropZone:
    """
    A region of the screen that accepts drops.

    Attributes:
        zone: Table zone the region stands for
        rect: Screen bounds
        slot: Bench slot index, for bench regions
    """

    zone: Zone
    rect: Rect
    slot: int | None = None


@dataclass(frozen=True, slots=True)
class DragSource:
    """What is being dragged: a zone kind plus an index within it."""

    kind: SourceKind
    index: int = 0


def hit_test(drop_zones: Sequence[DropZone], x: float, y: float) -> DropZone | None:
    """First drop zone containing the point, or None."""
    for drop_zone in drop_zones:
        if drop_zone.rect.contains(x, y):
            return drop_zone
    return None


def build_command(source: DragSource, target: DropZone, insert_below: bool) -> MoveCommand:
    """Translate a finished drag into a move command."""
    if source.kind == "hand":
        return HandMove(
            source_index=source.index,
            target_zone=target.zone,
            target_slot=target.slot,
            insert_below=insert_below,
        )
    if source.kind == "battlefield":
        return BattlefieldMove(target_zone=target.zone, target_slot=target.slot)
    if source.kind == "bench":
        return BenchMove(
            source_index=source.index,
            target_zone=target.zone,
            target_slot=target.slot,
        )
    if source.kind == "stadium":
        return StadiumMove(target_zone=target.zone, target_slot=target.slot)
    return TrashMove(
        source_index=source.index,
        target_zone=target.zone,
        target_slot=target.slot,
    )


class GestureRouter:
    """Classifies one pointer gesture at a time and emits move commands."""

    def __init__(
        self,
        drop_zones: Sequence[DropZone] = (),
        settings: GestureSettings | None = None,
        on_command: Callable[[MoveCommand], object] | None = None,
    ) -> None:
        """
        Initialize router.

        Args:
            drop_zones: Current drop targets (replace with set_drop_zones on layout)
            settings: Thresholds; defaults to GestureSettings()
            on_command: Called with each command produced (e.g. session.apply)
        """
        self._drop_zones = tuple(drop_zones)
        self._settings = settings or GestureSettings()
        self._on_command = on_command
        self._reset()

    def _reset(self) -> None:
        self._phase = GesturePhase.IDLE
        self._source: DragSource | None = None
        self._pointer = PointerKind.TOUCH
        self._start = (0.0, 0.0)
        self._position = (0.0, 0.0)
        self._pressed_at = 0.0
        self._drag_started_at = 0.0

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def position(self) -> tuple[float, float]:
        """Last known pointer position."""
        return self._position

    def set_drop_zones(self, drop_zones: Sequence[DropZone]) -> None:
        self._drop_zones = tuple(drop_zones)

    def press(
        self,
        source: DragSource,
        x: float,
        y: float,
        t: float,
        pointer: PointerKind = PointerKind.TOUCH,
    ) -> None:
        """Pointer went down on a draggable card. Any gesture in progress is dropped."""
        self._reset()
        self._phase = GesturePhase.PENDING
        self._source = source
        self._pointer = pointer
        self._start = (x, y)
        self._position = (x, y)
        self._pressed_at = t

    def tick(self, t: float) -> GesturePhase:
        """Advance the clock; a pending touch becomes a drag once the delay elapses."""
        if (
            self._phase == GesturePhase.PENDING
            and self._pointer == PointerKind.TOUCH
            and t - self._pressed_at >= self._settings.drag_delay_ms
        ):
            self._phase = GesturePhase.DRAGGING
            self._drag_started_at = self._pressed_at + self._settings.drag_delay_ms
        return self._phase

    def move(self, x: float, y: float, t: float) -> GesturePhase:
        """Pointer moved."""
        self.tick(t)
        self._position = (x, y)

        if self._phase == GesturePhase.PENDING:
            distance = math.dist(self._start, (x, y))
            if distance > self._settings.drag_distance_px:
                if self._pointer == PointerKind.MOUSE:
                    self._phase = GesturePhase.DRAGGING
                    self._drag_started_at = t
                else:
                    logger.debug("Gesture classified as scroll after %.0fpx", distance)
                    self._phase = GesturePhase.SCROLLING

        return self._phase

    def release(self, x: float, y: float, t: float) -> MoveCommand | None:
        """
        Pointer went up.

        Returns:
            The move command for the drop, or None for taps, scrolls and
            drops outside every drop zone
        """
        self.tick(t)
        self._position = (x, y)
        phase, source, dragged_ms = self._phase, self._source, t - self._drag_started_at
        self._reset()

        if phase != GesturePhase.DRAGGING or source is None:
            return None

        target = hit_test(self._drop_zones, x, y)
        if target is None:
            logger.debug("Drop at (%.0f, %.0f) outside every drop zone", x, y)
            return None

        insert_below = source.kind == "hand" and dragged_ms >= self._settings.long_press_ms
        command = build_command(source, target, insert_below)
        if self._on_command is not None:
            self._on_command(command)
        return command

    def cancel(self) -> None:
        """Abandon the current gesture (pointer cancel, window blur)."""
        self._reset()
