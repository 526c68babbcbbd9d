import pytest

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
from deckpractice.models.failure import FailureKind, ParseError
from deckpractice.parsers.deck_code import (
    CARD_SITE_BASE,
    CategoryType,
    DeckCodeConfig,
    DeckCodeResolver,
    collapse_deck,
    deck_size,
    expand_deck,
    find_category_value,
    parse_catalog,
    parse_category_entries,
    resolve,
)


def _page(inputs: str, script: str) -> str:
    return f"<html><body><form>{inputs}</form><script>{script}</script></body></html>"


class TestParseCatalog:
    def test_collects_all_three_maps(self) -> None:
        """Name, picture and alternate name assignments are collected by id."""
        html = (
            "PCGDECK.searchItemName[5]='Pikachu';"
            "PCGDECK.searchItemCardPict[5]='/img/5.png';"
            "PCGDECK.searchItemNameAlt[5]='Pika';"
        )

        catalog = parse_catalog(html)

        assert catalog.names == {"5": "Pikachu"}
        assert catalog.image_paths == {"5": "/img/5.png"}
        assert catalog.alt_names == {"5": "Pika"}

    def test_empty_payload(self) -> None:
        """A page without assignments yields an empty catalog."""
        assert parse_catalog("<html></html>").is_empty()

    def test_display_name_prefers_alternate(self) -> None:
        """Alternate name wins, then primary name, then a placeholder."""
        catalog = parse_catalog(
            "PCGDECK.searchItemName[1]='Long Name';"
            "PCGDECK.searchItemNameAlt[1]='Short';"
            "PCGDECK.searchItemName[2]='Only Name';"
            "PCGDECK.searchItemCardPict[3]='/img/3.png';"
        )

        assert catalog.display_name("1") == "Short"
        assert catalog.display_name("2") == "Only Name"
        assert catalog.display_name("3") == "Unknown"


class TestCategoryFields:
    def test_id_before_value(self) -> None:
        """Finds the value when id comes first."""
        html = '<input type="hidden" id="deck_pke" value="5_4_1">'

        assert find_category_value(html, "deck_pke") == "5_4_1"

    def test_value_before_id(self) -> None:
        """Finds the value when value comes first."""
        html = '<input type="hidden" value="5_4_1" name="deck_pke" id="deck_pke">'

        assert find_category_value(html, "deck_pke") == "5_4_1"

    def test_missing_field(self) -> None:
        """Absent category input returns None."""
        assert find_category_value('<input id="deck_ene" value="1_1_1">', "deck_pke") is None

    def test_does_not_match_similar_ids(self) -> None:
        """deck_sta must not be read from a field named deck_stadium."""
        html = '<input id="deck_stadium" value="9_1_1"><input id="deck_sta" value="5_2_1">'

        assert find_category_value(html, "deck_sta") == "5_2_1"

    def test_does_not_confuse_data_attributes(self) -> None:
        """data-value is not the value attribute."""
        html = '<input data-value="9_9_9" id="deck_pke" value="5_4_1">'

        assert find_category_value(html, "deck_pke") == "5_4_1"

    def test_parses_entries(self) -> None:
        """Triples become (catalog_id, quantity) pairs; position is ignored."""
        assert parse_category_entries("42_4_1-57_2_2") == [("42", 4), ("57", 2)]

    def test_skips_malformed_entries(self) -> None:
        """Entries without an id/quantity pair, non-numeric parts or zero copies are dropped."""
        entries = parse_category_entries("42_4_1--x_2_1-57-58_0_3-59_a_1-60_1")

        assert entries == [("42", 4), ("60", 1)]

    def test_skips_non_ascii_digits(self) -> None:
        """Superscript digits count as digits to str.isdigit but are not quantities."""
        assert parse_category_entries("5_²_1-5_4_2-²_1_3") == [("5", 4)]


class TestDeckCodeResolver:
    def test_single_pokemon_entry(self) -> None:
        """One catalog card in the Pokémon field decodes to one entry."""
        html = _page(
            '<input type="hidden" id="deck_pke" value="5_4_1">',
            "PCGDECK.searchItemName[5]='Pikachu';PCGDECK.searchItemCardPict[5]='/img/5.png';",
        )

        cards = resolve(html)

        assert cards == [
            CanonicalCard(
                name="Pikachu",
                image_url=f"{CARD_SITE_BASE}/img/5.png",
                quantity=4,
                supertype=Supertype.POKEMON,
            )
        ]

    def test_fixture_is_full_deck(self, deck_html: str) -> None:
        """The sample deck page decodes to 60 cards."""
        cards = resolve(deck_html)

        assert deck_size(cards) == 60

    def test_category_order(self, deck_html: str) -> None:
        """Output follows category order, then page order within a category."""
        names = [card.name for card in resolve(deck_html)]

        assert names == [
            "Pikachu ex",
            "Raichu",
            "Pichu",
            "Ultra Ball",
            "Nest Ball",
            "Bravery Charm",
            "Iono",
            "Judge",
            "Artazon",
            "Basic Lightning Energy",
            "Technical Machine: Evolution",
            "Prime Catcher",
        ]

    def test_category_types(self, deck_html: str) -> None:
        """Each field assigns its supertype and subtypes."""
        cards = {card.name: card for card in resolve(deck_html)}

        assert cards["Raichu"].supertype == Supertype.POKEMON
        assert cards["Ultra Ball"].subtypes == frozenset({ITEM})
        assert cards["Bravery Charm"].subtypes == frozenset({POKEMON_TOOL})
        assert cards["Iono"].subtypes == frozenset({SUPPORTER})
        assert cards["Artazon"].subtypes == frozenset({STADIUM})
        assert cards["Basic Lightning Energy"].supertype == Supertype.ENERGY
        assert cards["Technical Machine: Evolution"].subtypes == frozenset({TECHNICAL_MACHINE})
        assert cards["Prime Catcher"].subtypes == frozenset({ITEM})

    def test_uses_alternate_name_and_absolute_image(self, deck_html: str) -> None:
        """Display name comes from the alternate name; image paths get the site prefix."""
        pikachu = resolve(deck_html)[0]

        assert pikachu.name == "Pikachu ex"
        assert pikachu.image_url == (
            "https://www.pokemon-card.com/assets/images/card_images/large/SV8/046.jpg"
        )

    def test_skips_entries_without_image(self, deck_html: str) -> None:
        """Retired catalog ids (name but no picture) are dropped."""
        names = [card.name for card in resolve(deck_html)]

        assert "Retired Card" not in names

    def test_skips_unknown_ids(self) -> None:
        """Ids absent from the catalog are dropped, the rest still decode."""
        html = _page(
            '<input id="deck_pke" value="5_4_1-6_2_2">',
            "PCGDECK.searchItemName[5]='Pikachu';PCGDECK.searchItemCardPict[5]='/img/5.png';",
        )

        cards = resolve(html)

        assert [card.name for card in cards] == ["Pikachu"]

    def test_empty_catalog_raises(self, not_found_html: str) -> None:
        """A page without any catalog entry is a parse failure."""
        with pytest.raises(ParseError) as exc_info:
            resolve(not_found_html)

        assert exc_info.value.kind == FailureKind.PARSE_FAILED
        assert exc_info.value.status_code == 422

    def test_odd_quantity_skipped_not_raised(self) -> None:
        """A quantity int() cannot read drops that entry only."""
        html = _page(
            '<input id="deck_pke" value="5_²_1-5_4_2">',
            "PCGDECK.searchItemName[5]='Pikachu';PCGDECK.searchItemCardPict[5]='/img/5.png';",
        )

        assert [card.quantity for card in resolve(html)] == [4]

    def test_catalog_without_fields_decodes_empty(self) -> None:
        """A catalog with no category inputs gives an empty deck, not an error."""
        html = _page("", "PCGDECK.searchItemName[5]='Pikachu';")

        assert resolve(html) == []

    def test_custom_config(self) -> None:
        """Base URL and category table are injected."""
        config = DeckCodeConfig(
            image_base_url="https://cdn.example.test",
            category_types=(CategoryType("deck_ene", Supertype.ENERGY),),
        )
        html = _page(
            '<input id="deck_pke" value="5_4_1"><input id="deck_ene" value="7_10_1">',
            "PCGDECK.searchItemName[5]='Pikachu';PCGDECK.searchItemCardPict[5]='/img/5.png';"
            "PCGDECK.searchItemName[7]='Fire Energy';PCGDECK.searchItemCardPict[7]='/img/7.png';",
        )

        cards = DeckCodeResolver(config).resolve(html)

        assert len(cards) == 1
        assert cards[0].name == "Fire Energy"
        assert cards[0].image_url == "https://cdn.example.test/img/7.png"


class TestExpandCollapse:
    def test_expand_one_instance_per_copy(self, deck_html: str) -> None:
        """Quantities expand to individual copies, adjacent per entry."""
        instances = expand_deck(resolve(deck_html))

        assert len(instances) == 60
        assert [i.name for i in instances[:4]] == ["Pikachu ex"] * 4
        assert instances[4].name == "Raichu"

    def test_collapse_restores_entries(self, deck_html: str) -> None:
        """Collapsing the expansion gives back the decoded entries."""
        cards = resolve(deck_html)

        assert collapse_deck(expand_deck(cards)) == cards

    def test_collapse_keeps_first_seen_order(
        self, pikachu: CardInstance, energy: CardInstance
    ) -> None:
        """Interleaved copies are grouped in order of first appearance."""
        collapsed = collapse_deck([energy, pikachu, energy])

        assert [(c.name, c.quantity) for c in collapsed] == [
            ("Basic Lightning Energy", 2),
            ("Pikachu ex", 1),
        ]

    def test_quantity_must_be_positive(self) -> None:
        """CanonicalCard rejects zero copies."""
        with pytest.raises(ValueError):
            CanonicalCard("Pikachu", "/img/5.png", 0, Supertype.POKEMON)
