"""
Deck page fetcher for the official card site.

This is host-side transport: the resolver never performs I/O. The page
for a deck code is fetched once and handed to the resolver as text.
Failures are wrapped in FetchError and never retried here.
"""

import logging
import re

import httpx

from deckpractice.config import settings
from deckpractice.models.failure import FetchError, InvalidDeckCodeError

logger = logging.getLogger(__name__)

# Deck codes look like "gnLgNL-xxxxxx-Lgngng"; only allow what can go in a URL path safely
DECK_CODE_PATTERN = re.compile(r"^[A-Za-z0-9-]{1,64}$")


def deck_page_url(deck_code: str, base_url: str | None = None) -> str:
    """
    URL of the deck confirmation page for a code.

    Raises:
        InvalidDeckCodeError: If the code is empty or has unexpected characters
    """
    code = deck_code.strip()
    if not DECK_CODE_PATTERN.match(code):
        raise InvalidDeckCodeError(deck_code)

    base = base_url or settings.card_site_base_url
    return f"{base}/deck/confirm.html/deckID/{code}"


async def fetch_deck_page(
    deck_code: str,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Fetch the deck confirmation page HTML.

    Args:
        deck_code: Deck code issued by the card site
        client: Optional httpx client for connection reuse

    Returns:
        Raw HTML content

    Raises:
        InvalidDeckCodeError: If the code is malformed
        FetchError: If the request fails or returns an error status
    """
    url = deck_page_url(deck_code)
    headers = {"User-Agent": settings.user_agent}

    try:
        if client:
            response = await client.get(url, headers=headers)
        else:
            async with httpx.AsyncClient(
                timeout=settings.fetch_timeout_seconds,
                follow_redirects=True,
            ) as owned_client:
                response = await owned_client.get(url, headers=headers)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error("Deck page %s returned HTTP %d", deck_code, e.response.status_code)
        raise FetchError(
            f"Failed to fetch deck {deck_code}: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        logger.error("Deck page %s request failed: %s", deck_code, e)
        raise FetchError(f"Failed to fetch deck {deck_code}: {e}") from e

    return response.text
