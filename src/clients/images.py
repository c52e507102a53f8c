"""Two-tier image URL provider.

Tier 1 (optional): Pexels stock-photo search, enabled when PEXELS_API_KEY is set.
Tier 2 (always available): deterministic loremflickr URL built from (query, seed).

Core Functions:
- build_image_query(): "<title> <descriptor> dish"
- pick_photo_src(): First usable src from a Pexels search body
- search_stock_photo(): Tier-1 lookup (async, raises ImageProviderError)
- build_fallback_url(): Tier-2 URL, byte-identical for identical inputs
- get_image_url(): Tier 1 with silent fallback to tier 2 (never raises)
"""

import asyncio
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from src.utils.config import config
from src.utils.errors import ImageProviderError, safe_execute_async
from src.utils.logger import logger

# Same unreserved set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "!*'()"

_SRC_PREFERENCE = ("medium", "large", "original")


def encode_uri_component(value: str) -> str:
    """Percent-encode a single URL component."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_image_query(title: str) -> str:
    """Image search phrase for a dish title."""
    return f"{title} {config.IMAGE_QUERY_DESCRIPTOR} dish"


def pick_photo_src(body: Any) -> str:
    """Return the first defined of photos[0].src.medium / large / original.

    Raises:
        ImageProviderError: If the body has no usable photo source.
    """
    photos = body.get("photos") if isinstance(body, dict) else None
    if not isinstance(photos, list) or not photos:
        raise ImageProviderError("Search returned no photos")
    src = photos[0].get("src") if isinstance(photos[0], dict) else None
    if not isinstance(src, dict):
        raise ImageProviderError("First photo has no src object")
    for size in _SRC_PREFERENCE:
        url = src.get(size)
        if isinstance(url, str) and url:
            return url
    raise ImageProviderError("First photo has no medium, large or original source")


async def _search(session: aiohttp.ClientSession, query: str) -> str:
    timeout = aiohttp.ClientTimeout(total=config.IMAGE_TIMEOUT_SECONDS)
    async with session.get(
        config.PEXELS_SEARCH_URL,
        params={"query": query, "per_page": "1"},
        headers={"Authorization": config.PEXELS_API_KEY},
        timeout=timeout,
    ) as response:
        if not 200 <= response.status < 300:
            raise ImageProviderError(f"Search returned status {response.status}")
        try:
            body = await response.json(content_type=None)
        except ValueError as e:
            raise ImageProviderError(f"Search returned a non-JSON body: {e}") from e
    return pick_photo_src(body)


async def search_stock_photo(query: str, session: Optional[aiohttp.ClientSession] = None) -> str:
    """Look up one stock photo for query (tier 1).

    Args:
        query: Free-text search phrase.
        session: Optional shared aiohttp session; a private one is opened otherwise.

    Returns:
        Absolute photo URL.

    Raises:
        ImageProviderError: On missing credential, network error, timeout,
            non-2xx status or malformed body.
    """
    if not config.PEXELS_API_KEY:
        raise ImageProviderError("PEXELS_API_KEY is not configured")
    try:
        if session is not None:
            return await _search(session, query)
        async with aiohttp.ClientSession() as own_session:
            return await _search(own_session, query)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise ImageProviderError(f"Search request failed: {e!r}") from e


def build_fallback_url(query: str, seed: str) -> str:
    """Deterministic tier-2 image URL.

    >>> build_fallback_url("paneer tikka", "paneer-tikka")
    'https://loremflickr.com/640/420/food%2Cpaneer%20tikka?lock=paneer-tikka'
    """
    tags = encode_uri_component(f"food,{query}")
    return (
        f"https://{config.FALLBACK_IMAGE_HOST}/{config.FALLBACK_IMAGE_WIDTH}/{config.FALLBACK_IMAGE_HEIGHT}/"
        f"{tags}?lock={encode_uri_component(seed)}"
    )


async def get_image_url(query: str, seed: str, session: Optional[aiohttp.ClientSession] = None) -> str:
    """Resolve an image URL for query, never failing.

    Tier-1 errors are logged and swallowed; the deterministic fallback is used instead.
    """
    if config.PEXELS_API_KEY:
        url = await safe_execute_async(
            search_stock_photo(query, session=session),
            f"Stock photo search for '{query}'",
            log_level="warning",
            default_return=None,
        )
        if url:
            logger.debug(f"Stock photo found for '{query}': {url}")
            return url

    fallback = build_fallback_url(query, seed)
    logger.debug(f"Using fallback image for '{query}': {fallback}")
    return fallback
