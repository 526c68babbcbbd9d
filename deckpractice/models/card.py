"""
Card models.

CanonicalCard is what the deck code resolver emits (one row per deck entry,
with a quantity). CardInstance is one physical copy used inside the table
zones. Both are frozen; zones hold them by value.
"""

from dataclasses import dataclass
from enum import Enum


class Supertype(str, Enum):
    """Coarse card category, drives stacking legality."""

    POKEMON = "Pokémon"
    TRAINER = "Trainer"
    ENERGY = "Energy"


# Subtype strings as printed by the card site
ITEM = "Item"
POKEMON_TOOL = "Pokémon Tool"
SUPPORTER = "Supporter"
STADIUM = "Stadium"
TECHNICAL_MACHINE = "Technical Machine"


@dataclass(frozen=True, slots=True)
class CardInstance:
    """
    One physical copy of a card on the table.

    Attributes:
        name: Display name (short/alternate name when the site provides one)
        image_url: Absolute URL of the card image
        supertype: Pokémon, Trainer or Energy
        subtypes: Fine-grained categories (e.g. "Item", "Pokémon Tool")
    """

    name: str
    image_url: str
    supertype: Supertype
    subtypes: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class CanonicalCard:
    """
    A decoded deck entry with its quantity.

    Attributes:
        name: Display name
        image_url: Absolute URL of the card image
        quantity: Number of copies in the deck (>= 1)
        supertype: Pokémon, Trainer or Energy
        subtypes: Fine-grained categories
    """

    name: str
    image_url: str
    quantity: int
    supertype: Supertype
    subtypes: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")

    def instance(self) -> CardInstance:
        """A single copy of this card, without quantity."""
        return CardInstance(
            name=self.name,
            image_url=self.image_url,
            supertype=self.supertype,
            subtypes=self.subtypes,
        )
