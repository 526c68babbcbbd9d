"""
Deck code resolver for the official card site's deck confirmation page.

The page is not an API. Card data sits in two places:

1. A script block filling the PCGDECK catalog, keyed by small integer ids:

    PCGDECK.searchItemName[42]='Pikachu ex';
    PCGDECK.searchItemCardPict[42]='/assets/images/card_images/large/SV8/046.jpg';
    PCGDECK.searchItemNameAlt[42]='Pikachu ex';

2. One hidden input per card category whose value lists the deck entries
   as dash-separated "catalogId_quantity_position" triples:

    <input type="hidden" name="deck_pke" id="deck_pke" value="42_4_1-57_2_2">

Note: Scraping is inherently fragile. If the catalog disappears entirely the
page format changed (or the code is unknown) and ParseError is raised.
Entries referencing catalog ids without an image are skipped, since the
site keeps references to retired cards.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from deckpractice.models.card import (
    ITEM,
    POKEMON_TOOL,
    STADIUM,
    SUPPORTER,
    TECHNICAL_MACHINE,
    CanonicalCard,
    CardInstance,
    Supertype,
)
from deckpractice.models.failure import ParseError

logger = logging.getLogger(__name__)

CARD_SITE_BASE = "https://www.pokemon-card.com"

# Pattern: PCGDECK.searchItemName[12345]='Card Name';
# Groups: (catalog_id, value)
CATALOG_NAME_PATTERN = re.compile(r"PCGDECK\.searchItemName\[(\d+)\]='([^']+)';")
CATALOG_PICT_PATTERN = re.compile(r"PCGDECK\.searchItemCardPict\[(\d+)\]='([^']+)';")
CATALOG_ALT_NAME_PATTERN = re.compile(r"PCGDECK\.searchItemNameAlt\[(\d+)\]='([^']+)';")

ENTRY_SEPARATOR = "-"
FIELD_SEPARATOR = "_"
# ASCII only: str.isdigit() also accepts superscripts that int() rejects
NUMBER_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class CategoryType:
    """
    Maps one category input field to the card types it holds.

    Attributes:
        field_id: id attribute of the hidden input (e.g. "deck_pke")
        supertype: Supertype of every card listed in the field
        subtypes: Subtypes of every card listed in the field
    """

    field_id: str
    supertype: Supertype
    subtypes: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class DeckCodeConfig:
    """
    Lookup tables for decoding, injected rather than read from module state.

    Attributes:
        image_base_url: Prefix for the catalog's relative image paths
        category_types: Category fields in output order
    """

    image_base_url: str
    category_types: tuple[CategoryType, ...]


DEFAULT_CATEGORIES: tuple[CategoryType, ...] = (
    CategoryType("deck_pke", Supertype.POKEMON),
    CategoryType("deck_gds", Supertype.TRAINER, frozenset({ITEM})),
    CategoryType("deck_tool", Supertype.TRAINER, frozenset({POKEMON_TOOL})),
    CategoryType("deck_sup", Supertype.TRAINER, frozenset({SUPPORTER})),
    CategoryType("deck_sta", Supertype.TRAINER, frozenset({STADIUM})),
    CategoryType("deck_ene", Supertype.ENERGY),
    CategoryType("deck_tech", Supertype.TRAINER, frozenset({TECHNICAL_MACHINE})),
    # ACE SPEC items get their own field but play as items
    CategoryType("deck_ajs", Supertype.TRAINER, frozenset({ITEM})),
)

DEFAULT_DECK_CODE_CONFIG = DeckCodeConfig(
    image_base_url=CARD_SITE_BASE,
    category_types=DEFAULT_CATEGORIES,
)


@dataclass(frozen=True, slots=True)
class CardCatalog:
    """The three PCGDECK lookup maps, keyed by catalog id string."""

    names: dict[str, str]
    image_paths: dict[str, str]
    alt_names: dict[str, str]

    def is_empty(self) -> bool:
        return not (self.names or self.image_paths or self.alt_names)

    def display_name(self, catalog_id: str) -> str:
        """Alternate name if present, else primary name."""
        return self.alt_names.get(catalog_id) or self.names.get(catalog_id) or "Unknown"


def parse_catalog(html: str) -> CardCatalog:
    """
    Collect every PCGDECK catalog assignment in the payload.

    Assignments are matched wherever they appear; order does not matter.
    """
    return CardCatalog(
        names=dict(CATALOG_NAME_PATTERN.findall(html)),
        image_paths=dict(CATALOG_PICT_PATTERN.findall(html)),
        alt_names=dict(CATALOG_ALT_NAME_PATTERN.findall(html)),
    )


def _category_field_patterns(field_id: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    """
    Build patterns for an <input> carrying id=field_id.

    The markup may put id before or after value, so both orders are needed.
    """
    id_attr = rf"(?<![\w-])id\s*=\s*[\"']{re.escape(field_id)}[\"']"
    value_attr = r"(?<![\w-])value\s*=\s*[\"']([^\"']*)[\"']"
    id_first = re.compile(rf"<input\b[^>]*{id_attr}[^>]*{value_attr}", re.IGNORECASE)
    value_first = re.compile(rf"<input\b[^>]*{value_attr}[^>]*{id_attr}", re.IGNORECASE)
    return id_first, value_first


def find_category_value(html: str, field_id: str) -> str | None:
    """
    Value attribute of the category input, or None if the field is absent.

    Args:
        html: Raw deck page HTML
        field_id: Category input id (e.g. "deck_pke")

    Returns:
        Raw field value ("42_4_1-57_2_2"), possibly empty
    """
    for pattern in _category_field_patterns(field_id):
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


def parse_category_entries(value: str) -> list[tuple[str, int]]:
    """
    Split a category field value into (catalog_id, quantity) pairs.

    The position index (third part) only reflects the site's display order
    and is ignored. Malformed entries are skipped silently.

    Example:
        "42_4_1-57_2_2" -> [("42", 4), ("57", 2)]
    """
    entries: list[tuple[str, int]] = []

    for raw_entry in value.split(ENTRY_SEPARATOR):
        parts = raw_entry.strip().split(FIELD_SEPARATOR)
        if len(parts) < 2:
            continue

        catalog_id, raw_quantity = parts[0], parts[1]
        if not NUMBER_PATTERN.fullmatch(catalog_id) or not NUMBER_PATTERN.fullmatch(raw_quantity):
            continue

        quantity = int(raw_quantity)
        if quantity < 1:
            continue

        entries.append((catalog_id, quantity))

    return entries


class DeckCodeResolver:
    """
    Decodes a deck confirmation page into canonical cards.

    Pure: no I/O. Fetching the page is the caller's job.
    """

    def __init__(self, config: DeckCodeConfig | None = None) -> None:
        """
        Initialize resolver.

        Args:
            config: Base URL and category table. Defaults to the card site's.
        """
        self._config = config or DEFAULT_DECK_CODE_CONFIG

    @property
    def config(self) -> DeckCodeConfig:
        return self._config

    def resolve(self, html: str) -> list[CanonicalCard]:
        """
        Decode a deck page.

        Args:
            html: Raw HTML of the deck confirmation page

        Returns:
            Cards in category order (Pokémon, Item, Tool, Supporter, Stadium,
            Energy, TM, ACE SPEC), entries in page order within a category

        Raises:
            ParseError: If the page carries no catalog entries at all
        """
        catalog = parse_catalog(html)
        if catalog.is_empty():
            logger.warning("Deck page has no PCGDECK catalog (%d bytes)", len(html))
            raise ParseError(detail="No PCGDECK catalog entries found in payload")

        cards: list[CanonicalCard] = []
        for category in self._config.category_types:
            cards.extend(self._resolve_category(html, category, catalog))

        logger.info(
            "Decoded %d card types, %d cards total",
            len(cards),
            deck_size(cards),
        )
        return cards

    def _resolve_category(
        self,
        html: str,
        category: CategoryType,
        catalog: CardCatalog,
    ) -> list[CanonicalCard]:
        value = find_category_value(html, category.field_id)
        if not value:
            return []

        cards: list[CanonicalCard] = []
        for catalog_id, quantity in parse_category_entries(value):
            image_path = catalog.image_paths.get(catalog_id)
            if image_path is None:
                logger.debug(
                    "Skipping %s entry %s: not in catalog",
                    category.field_id,
                    catalog_id,
                )
                continue

            cards.append(
                CanonicalCard(
                    name=catalog.display_name(catalog_id),
                    image_url=f"{self._config.image_base_url}{image_path}",
                    quantity=quantity,
                    supertype=category.supertype,
                    subtypes=category.subtypes,
                )
            )

        return cards


def resolve(html: str, config: DeckCodeConfig | None = None) -> list[CanonicalCard]:
    """
    Convenience function: decode a deck page with the given (or default) config.

    Raises:
        ParseError: If the page carries no catalog entries at all
    """
    return DeckCodeResolver(config).resolve(html)


def deck_size(cards: Iterable[CanonicalCard]) -> int:
    """Total number of cards (sum of quantities)."""
    return sum(card.quantity for card in cards)


def expand_deck(cards: Iterable[CanonicalCard]) -> list[CardInstance]:
    """
    Expand decoded entries into one CardInstance per physical copy.

    Order follows the input; copies of one entry are adjacent.
    """
    instances: list[CardInstance] = []
    for card in cards:
        instances.extend(card.instance() for _ in range(card.quantity))
    return instances


def collapse_deck(instances: Iterable[CardInstance]) -> list[CanonicalCard]:
    """
    Regroup individual copies into entries with quantities.

    Copies are grouped by identity (name, image, types); groups keep the order
    in which each card was first seen.
    """
    counts: dict[CardInstance, int] = {}
    for instance in instances:
        counts[instance] = counts.get(instance, 0) + 1

    return [
        CanonicalCard(
            name=instance.name,
            image_url=instance.image_url,
            quantity=quantity,
            supertype=instance.supertype,
            subtypes=instance.subtypes,
        )
        for instance, quantity in counts.items()
    ]
