from deckpractice.engine.commands import (
    BattlefieldMove,
    BenchMove,
    HandMove,
    MoveCommand,
    StadiumMove,
    TrashMove,
    dispatch,
)
from deckpractice.engine.effects import EFFECTS, apply_effect
from deckpractice.engine.gestures import (
    DragSource,
    DropZone,
    GesturePhase,
    GestureRouter,
    GestureSettings,
    PointerKind,
    Rect,
)
from deckpractice.engine.session import PracticeSession
from deckpractice.engine.stadium import SharedStadium
from deckpractice.engine.state import (
    PracticeState,
    StadiumPlacement,
    Zone,
    new_practice_state,
)

__all__ = [
    "BattlefieldMove",
    "BenchMove",
    "DragSource",
    "DropZone",
    "EFFECTS",
    "GesturePhase",
    "GestureRouter",
    "GestureSettings",
    "HandMove",
    "MoveCommand",
    "PointerKind",
    "PracticeSession",
    "PracticeState",
    "Rect",
    "SharedStadium",
    "StadiumMove",
    "StadiumPlacement",
    "TrashMove",
    "Zone",
    "apply_effect",
    "dispatch",
    "new_practice_state",
]
