"""Selector-callback collector: visit a page, fire callbacks per matched element.

A :class:`Collector` holds callbacks registered with :meth:`Collector.on_html`
and :meth:`Collector.on_error`.  :meth:`Collector.visit` fetches the page,
parses it once, and invokes every HTML callback once per element matching its
selector, in registration order and then document order.  The call returns
only after all callbacks have run.

Collectors keep per-instance callback state, so every concurrent task builds
its own instance.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from vocab_crawler.scraper.fetcher import fetch_url
from vocab_crawler.scraper.models import HTMLElement

HTMLCallback = Callable[[HTMLElement], None]
ErrorCallback = Callable[[str, Exception], None]


class VisitError(Exception):
    """Raised by :meth:`Collector.visit` when a page cannot be fetched."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"failed to visit {url}: {cause}")
        self.url = url
        self.cause = cause


class Collector:
    """Fetch pages and dispatch matching elements to registered callbacks."""

    def __init__(
        self,
        *,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self._html_callbacks: List[Tuple[str, HTMLCallback]] = []
        self._error_callbacks: List[ErrorCallback] = []

    def on_html(self, selector: str, callback: HTMLCallback) -> None:
        """Register *callback* for every element matching CSS *selector*."""
        self._html_callbacks.append((selector, callback))

    def on_error(self, callback: ErrorCallback) -> None:
        """Register *callback* to run (once per visit) on transport failure."""
        self._error_callbacks.append(callback)

    def visit(self, url: str) -> None:
        """Fetch *url* and run the registered callbacks against it.

        Raises:
            VisitError: If the page could not be fetched, including URLs that
                cannot be parsed.  Error callbacks have already been invoked
                when this is raised.
        """
        try:
            raw = fetch_url(url, user_agent=self.user_agent, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            for callback in self._error_callbacks:
                callback(url, exc)
            raise VisitError(url, exc) from exc

        self.dispatch(raw.html, url)

    def dispatch(self, html: str, request_url: str) -> None:
        """Run the registered HTML callbacks against an already fetched page."""
        soup = BeautifulSoup(html, "html.parser")
        for selector, callback in self._html_callbacks:
            for index, node in enumerate(soup.select(selector)):
                callback(
                    HTMLElement(
                        index=index,
                        text=node.get_text(),
                        request_url=request_url,
                        attrs=dict(node.attrs),
                    )
                )
