"""
Card Stack Model.

A stack is the ordered pile occupying one battlefield or bench slot: a
Pokémon with its evolutions, attached energy and tools.

INVARIANTS:
- A stack is never empty
- cards are ordered bottom -> top
- energy_count / tool_count always equal the number of Energy / Pokémon Tool
  cards in the pile; only the functions here compute them
- damage is never negative and only changes through adjust_damage()
- All functions return new stacks; nothing is mutated
"""

from dataclasses import dataclass, replace

from deckpractice.models.card import POKEMON_TOOL, CardInstance, Supertype

# Damage counter denominations available on the table
DAMAGE_COUNTERS = (10, 50, 100)

# Sentinel delta for adjust_damage(): reset to zero
CLEAR_DAMAGE = "clear"


@dataclass(frozen=True, slots=True)
class CardStack:
    """
    One occupied battlefield/bench slot.

    Attributes:
        cards: Pile of cards, bottom to top
        energy_count: Number of Energy cards in the pile
        tool_count: Number of Pokémon Tool cards in the pile
        damage: Damage placed on the slot
    """

    cards: tuple[CardInstance, ...]
    energy_count: int = 0
    tool_count: int = 0
    damage: int = 0

    def __post_init__(self) -> None:
        if not self.cards:
            raise ValueError("A card stack cannot be empty")
        if self.damage < 0:
            raise ValueError(f"damage must be >= 0, got {self.damage}")

    def __len__(self) -> int:
        return len(self.cards)


def is_pokemon(card: CardInstance) -> bool:
    return card.supertype == Supertype.POKEMON


def is_energy(card: CardInstance) -> bool:
    return card.supertype == Supertype.ENERGY


def is_tool(card: CardInstance) -> bool:
    return POKEMON_TOOL in card.subtypes


def create_stack(card: CardInstance) -> CardStack:
    """Singleton stack with counters derived from the one card."""
    return CardStack(
        cards=(card,),
        energy_count=1 if is_energy(card) else 0,
        tool_count=1 if is_tool(card) else 0,
        damage=0,
    )


def get_top_card(stack: CardStack) -> CardInstance:
    """Card on top of the pile."""
    return stack.cards[-1]


def find_top_pokemon(stack: CardStack) -> CardInstance | None:
    """
    Top-most Pokémon anywhere in the pile.

    Tools and energy may sit above the Pokémon, so the literal top card is
    not enough.
    """
    for card in reversed(stack.cards):
        if is_pokemon(card):
            return card
    return None


def can_stack(card: CardInstance, stack: CardStack) -> bool:
    """
    Check whether a card may join an existing stack.

    Energy and tools attach to a Pokémon; a Pokémon on a Pokémon models
    evolution. Everything else, and anything onto a pile without a Pokémon,
    is refused. Evolution lines are not checked.
    """
    if find_top_pokemon(stack) is None:
        return False

    return is_energy(card) or is_tool(card) or is_pokemon(card)


def append_or_insert(card: CardInstance, stack: CardStack, insert_below: bool) -> CardStack:
    """
    Place a card on top of the pile or underneath it.

    Args:
        card: Card to add
        stack: Target stack
        insert_below: True puts the card at the bottom (attachment tucked
            under the active Pokémon), False puts it on top

    Returns:
        New stack with counters updated; damage carried over
    """
    cards = (card, *stack.cards) if insert_below else (*stack.cards, card)

    return replace(
        stack,
        cards=cards,
        energy_count=stack.energy_count + (1 if is_energy(card) else 0),
        tool_count=stack.tool_count + (1 if is_tool(card) else 0),
    )


def adjust_damage(stack: CardStack, delta: int | str) -> CardStack:
    """
    Add damage to a stack, or clear it.

    Args:
        stack: Target stack
        delta: Positive amount to add, or CLEAR_DAMAGE

    Returns:
        New stack with updated damage

    Raises:
        ValueError: If delta is neither positive nor CLEAR_DAMAGE
    """
    if delta == CLEAR_DAMAGE:
        return replace(stack, damage=0)

    if isinstance(delta, bool) or not isinstance(delta, int) or delta <= 0:
        raise ValueError(f"Damage delta must be positive or {CLEAR_DAMAGE!r}, got {delta!r}")

    return replace(stack, damage=stack.damage + delta)
