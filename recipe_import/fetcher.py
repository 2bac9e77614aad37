"""
Page fetcher - downloads recipe pages for the import pipeline.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

from config.settings import settings
from .exceptions import FetchError, InvalidURLError

logger = logging.getLogger(__name__)


def validate_url(url: str) -> str:
    """Return the stripped URL, or raise InvalidURLError when it has no scheme or host."""
    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if not parsed.scheme or not parsed.netloc:
        raise InvalidURLError(url)
    return candidate


async def fetch_html(url: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """
    Fetch HTML content from a URL.
    
    Args:
        url: Page to download
        client: Optional shared client; a short-lived one is created otherwise
        
    Returns:
        Decoded page body
        
    Raises:
        FetchError: on connection problems or a non-2xx status
    """
    headers = {"User-Agent": settings.user_agent}
    
    try:
        if client is not None:
            response = await client.get(url, headers=headers, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=settings.request_timeout) as own_client:
                response = await own_client.get(url, headers=headers, follow_redirects=True)
    except httpx.HTTPError as e:
        raise FetchError(url, str(e)) from e
    
    if not response.is_success:
        raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)
    
    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.text
