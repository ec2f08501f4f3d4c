"""HTTP fetcher used by the collector."""

from __future__ import annotations

from typing import Optional

import httpx

from vocab_crawler.config import settings
from vocab_crawler.scraper.models import RawPage


def fetch_url(
    url: str,
    *,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    The request identifies itself with a desktop browser user agent
    (``settings.user_agent`` unless overridden).  Redirects are followed.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.HTTPError: On any other transport failure.
    """
    headers = {"User-Agent": user_agent or settings.user_agent}

    with httpx.Client(
        headers=headers,
        timeout=timeout if timeout is not None else settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        html = response.text
        status_code = response.status_code

    return RawPage(url=url, html=html, status_code=status_code)
