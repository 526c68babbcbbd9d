import httpx
import pytest
import respx

from deckpractice.models.failure import FailureKind, FetchError, InvalidDeckCodeError
from deckpractice.scrapers.pokemon_card import deck_page_url, fetch_deck_page

DECK_CODE = "gnLgNL-abc123-Lgngng"
DECK_URL = f"https://www.pokemon-card.com/deck/confirm.html/deckID/{DECK_CODE}"


class TestDeckPageUrl:
    def test_builds_confirm_url(self) -> None:
        assert deck_page_url(DECK_CODE) == DECK_URL

    def test_strips_whitespace(self) -> None:
        assert deck_page_url(f"  {DECK_CODE}\n") == DECK_URL

    def test_custom_base(self) -> None:
        url = deck_page_url(DECK_CODE, base_url="http://mirror.test")

        assert url == f"http://mirror.test/deck/confirm.html/deckID/{DECK_CODE}"

    @pytest.mark.parametrize("code", ["", "   ", "abc/../def", "abc?x=1", "a" * 65])
    def test_rejects_bad_codes(self, code: str) -> None:
        """Codes that cannot be a site deck code never reach the network."""
        with pytest.raises(InvalidDeckCodeError) as exc_info:
            deck_page_url(code)

        assert exc_info.value.kind == FailureKind.INVALID_INPUT


class TestFetchDeckPage:
    @respx.mock
    async def test_returns_html(self, deck_html: str) -> None:
        """A 200 response body is returned as text."""
        route = respx.get(DECK_URL).mock(return_value=httpx.Response(200, text=deck_html))

        html = await fetch_deck_page(DECK_CODE)

        assert route.called
        assert "PCGDECK.searchItemName[101]" in html

    @respx.mock
    async def test_sends_user_agent(self, deck_html: str) -> None:
        route = respx.get(DECK_URL).mock(return_value=httpx.Response(200, text=deck_html))

        await fetch_deck_page(DECK_CODE)

        assert "Mozilla" in route.calls.last.request.headers["User-Agent"]

    @respx.mock
    async def test_uses_given_client(self, deck_html: str) -> None:
        respx.get(DECK_URL).mock(return_value=httpx.Response(200, text=deck_html))

        async with httpx.AsyncClient() as client:
            html = await fetch_deck_page(DECK_CODE, client=client)

        assert html == deck_html

    @respx.mock
    async def test_raises_on_404(self) -> None:
        """HTTP errors are wrapped in FetchError."""
        respx.get(DECK_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(FetchError) as exc_info:
            await fetch_deck_page(DECK_CODE)

        assert exc_info.value.detail == f"Failed to fetch deck {DECK_CODE}: HTTP 404"
        assert exc_info.value.status_code == 502

    @respx.mock
    async def test_raises_on_500(self) -> None:
        respx.get(DECK_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(FetchError) as exc_info:
            await fetch_deck_page(DECK_CODE)

        assert exc_info.value.kind == FailureKind.EXTERNAL_API_ERROR

    @respx.mock
    async def test_raises_on_transport_error(self) -> None:
        """Connection failures are wrapped too."""
        respx.get(DECK_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(FetchError) as exc_info:
            await fetch_deck_page(DECK_CODE)

        assert "connection refused" in (exc_info.value.detail or "")

    async def test_invalid_code_raises_before_request(self) -> None:
        with pytest.raises(InvalidDeckCodeError):
            await fetch_deck_page("not a code")
