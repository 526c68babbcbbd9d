"""
Practice table API endpoints.

Loads deck codes from the card site, deals tables, and applies moves. The
engine ignores illegal moves, so a move endpoint answers 200 with an
unchanged snapshot rather than an error.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel, Field

from deckpractice.engine.commands import (
    BattlefieldMove,
    BenchMove,
    HandMove,
    MoveCommand,
    StadiumMove,
    TrashMove,
)
from deckpractice.engine.effects import EFFECTS
from deckpractice.engine.session import PracticeSession
from deckpractice.engine.state import PracticeState, StadiumPlacement, Zone
from deckpractice.models.card import CardInstance
from deckpractice.models.card_stack import CLEAR_DAMAGE, CardStack
from deckpractice.models.failure import FailureKind, KnownError
from deckpractice.services.practice_table import PLAYERS, PracticeTable, open_table
from deckpractice.services.table_registry import TableRegistry, get_registry

router = APIRouter(prefix="/practice", tags=["practice"])

Player = Literal["self", "opponent"]


# =============================================================================
# RESPONSE MODELS
# =============================================================================


class CardResponse(BaseModel):
    """One card face."""

    name: str
    image_url: str
    supertype: str
    subtypes: list[str] = Field(default_factory=list)


class StackResponse(BaseModel):
    """One occupied battlefield/bench slot, cards bottom to top."""

    cards: list[CardResponse]
    energy_count: int
    tool_count: int
    damage: int


class StadiumResponse(BaseModel):
    card: CardResponse
    owner: str


class SideResponse(BaseModel):
    """One player's zones."""

    owner: str
    library_count: int
    library: list[CardResponse] = Field(
        default_factory=list,
        description="Draw pile, top first (for the deck viewer)",
    )
    hand: list[CardResponse]
    prize_count: int
    trash: list[CardResponse]
    battlefield: StackResponse | None = None
    bench: list[StackResponse | None]
    bench_capacity: int


class TableResponse(BaseModel):
    """Full table snapshot."""

    table_id: str
    players: dict[str, SideResponse]
    stadium: StadiumResponse | None = None
    coin: str | None = None


class CoinResponse(BaseModel):
    table_id: str
    result: str


def _card(card: CardInstance) -> CardResponse:
    return CardResponse(
        name=card.name,
        image_url=card.image_url,
        supertype=card.supertype.value,
        subtypes=sorted(card.subtypes),
    )


def _stack(stack: CardStack | None) -> StackResponse | None:
    if stack is None:
        return None
    return StackResponse(
        cards=[_card(c) for c in stack.cards],
        energy_count=stack.energy_count,
        tool_count=stack.tool_count,
        damage=stack.damage,
    )


def _side(state: PracticeState) -> SideResponse:
    return SideResponse(
        owner=state.owner,
        library_count=len(state.library),
        library=[_card(c) for c in state.library],
        hand=[_card(c) for c in state.hand],
        prize_count=len(state.prizes),
        trash=[_card(c) for c in state.trash],
        battlefield=_stack(state.battlefield),
        bench=[_stack(s) for s in state.bench],
        bench_capacity=state.bench_capacity,
    )


def _stadium(placement: StadiumPlacement | None) -> StadiumResponse | None:
    if placement is None:
        return None
    return StadiumResponse(card=_card(placement.card), owner=placement.owner)


def table_response(table: PracticeTable) -> TableResponse:
    return TableResponse(
        table_id=table.table_id,
        players={owner: _side(session.state) for owner, session in table.sessions.items()},
        stadium=_stadium(table.stadium.current),
        coin=table.last_coin.value if table.last_coin else None,
    )


# =============================================================================
# REQUEST MODELS
# =============================================================================


class OpenTableRequest(BaseModel):
    """Deck codes for "self" and, optionally, "opponent"."""

    deck_codes: list[str] = Field(
        ...,
        min_length=1,
        max_length=len(PLAYERS),
        examples=[["gnLgNL-xxxxxx-Lgngng"]],
    )


class HandMoveRequest(BaseModel):
    kind: Literal["hand"]
    source_index: int = Field(..., ge=0)
    target_zone: Zone
    target_slot: int | None = Field(default=None, ge=0)
    insert_below: bool = False

    def to_command(self) -> MoveCommand:
        return HandMove(
            source_index=self.source_index,
            target_zone=self.target_zone,
            target_slot=self.target_slot,
            insert_below=self.insert_below,
        )


class BattlefieldMoveRequest(BaseModel):
    kind: Literal["battlefield"]
    target_zone: Zone
    target_slot: int | None = Field(default=None, ge=0)

    def to_command(self) -> MoveCommand:
        return BattlefieldMove(target_zone=self.target_zone, target_slot=self.target_slot)


class BenchMoveRequest(BaseModel):
    kind: Literal["bench"]
    source_index: int = Field(..., ge=0)
    target_zone: Zone
    target_slot: int | None = Field(default=None, ge=0)

    def to_command(self) -> MoveCommand:
        return BenchMove(
            source_index=self.source_index,
            target_zone=self.target_zone,
            target_slot=self.target_slot,
        )


class StadiumMoveRequest(BaseModel):
    kind: Literal["stadium"]
    target_zone: Zone = Zone.TRASH

    def to_command(self) -> MoveCommand:
        return StadiumMove(target_zone=self.target_zone)


class TrashMoveRequest(BaseModel):
    kind: Literal["trash"]
    source_index: int = Field(..., ge=0)
    target_zone: Zone = Zone.HAND

    def to_command(self) -> MoveCommand:
        return TrashMove(source_index=self.source_index, target_zone=self.target_zone)


class MoveRequest(BaseModel):
    """A drag result, discriminated by `kind`."""

    command: Annotated[
        HandMoveRequest
        | BattlefieldMoveRequest
        | BenchMoveRequest
        | StadiumMoveRequest
        | TrashMoveRequest,
        Field(discriminator="kind"),
    ]


class ActionRequest(BaseModel):
    """A button action (not a drag)."""

    action: Literal[
        "draw",
        "shuffle",
        "mulligan",
        "take_prize",
        "increase_bench",
        "damage",
        "effect",
    ]
    count: int = Field(default=1, ge=1, description="Cards to draw")
    index: int = Field(default=0, ge=0, description="Prize index or bench slot")
    zone: Zone = Field(default=Zone.BATTLEFIELD, description="Damage target zone")
    delta: int | Literal["clear"] = Field(default=10, description="10, 50, 100 or 'clear'")
    effect: str | None = Field(default=None, description=f"One of {sorted(EFFECTS)}")


def _apply_action(session: PracticeSession, request: ActionRequest) -> None:
    if request.action == "draw":
        session.draw(request.count)
    elif request.action == "shuffle":
        session.shuffle_library()
    elif request.action == "mulligan":
        session.mulligan()
    elif request.action == "take_prize":
        session.take_prize_card(request.index)
    elif request.action == "increase_bench":
        session.increase_bench_capacity()
    elif request.action == "damage":
        delta = CLEAR_DAMAGE if request.delta == "clear" else request.delta
        session.adjust_damage(request.zone, request.index, delta)
    elif request.action == "effect":
        if request.effect not in EFFECTS:
            raise KnownError(
                kind=FailureKind.INVALID_INPUT,
                message="Unknown supporter effect.",
                detail=f"Effect: {request.effect!r}",
                suggestion=f"Use one of {sorted(EFFECTS)}",
                status_code=400,
            )
        session.use_effect(request.effect)


def _session(table: PracticeTable, player: str) -> PracticeSession:
    session = table.session(player)
    if session is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message="This table has no such player.",
            detail=f"Player: {player}",
            suggestion="Load a deck for this side first.",
            status_code=404,
        )
    return session


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.post("/tables", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(
    request: OpenTableRequest,
    registry: Annotated[TableRegistry, Depends(get_registry)],
) -> TableResponse:
    """
    Fetch the deck codes, decode them and deal a new table.

    Each deck must be exactly 60 cards.
    """
    table = await open_table(request.deck_codes)
    registry.add(table)
    return table_response(table)


@router.get("/tables/{table_id}", response_model=TableResponse)
async def get_table(
    table_id: str,
    registry: Annotated[TableRegistry, Depends(get_registry)],
) -> TableResponse:
    """Current snapshot of a table."""
    return table_response(registry.get(table_id))


@router.delete("/tables/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def reset_table(
    table_id: str,
    registry: Annotated[TableRegistry, Depends(get_registry)],
) -> None:
    """Discard a table. Load the decks again to start over."""
    registry.discard(table_id)


@router.post("/tables/{table_id}/players/{player}/moves", response_model=TableResponse)
async def apply_move(
    table_id: str,
    player: Annotated[Player, Path()],
    request: MoveRequest,
    registry: Annotated[TableRegistry, Depends(get_registry)],
) -> TableResponse:
    """Apply a drag result. Illegal moves leave the table unchanged."""
    table = registry.get(table_id)
    _session(table, player).apply(request.command.to_command())
    return table_response(table)


@router.post("/tables/{table_id}/players/{player}/actions", response_model=TableResponse)
async def apply_action(
    table_id: str,
    player: Annotated[Player, Path()],
    request: ActionRequest,
    registry: Annotated[TableRegistry, Depends(get_registry)],
) -> TableResponse:
    """Apply a button action (draw, shuffle, mulligan, prizes, bench, damage, effects)."""
    table = registry.get(table_id)
    _apply_action(_session(table, player), request)
    return table_response(table)


@router.post("/tables/{table_id}/coin", response_model=CoinResponse)
async def flip_coin(
    table_id: str,
    registry: Annotated[TableRegistry, Depends(get_registry)],
) -> CoinResponse:
    table = registry.get(table_id)
    return CoinResponse(table_id=table_id, result=table.flip_coin().value)
