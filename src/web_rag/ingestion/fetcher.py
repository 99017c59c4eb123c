"""Page fetching: URL → title + cleaned body text."""

from __future__ import annotations

import logging
import re
import unicodedata
from abc import ABC, abstractmethod

import requests
from bs4 import BeautifulSoup

from web_rag.errors import FetchError
from web_rag.models import SourceDocument

logger = logging.getLogger(__name__)

BOILERPLATE_TAGS = ["script", "style", "nav", "footer", "header", "aside", "noscript", "iframe"]

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def normalise_text(text: str) -> str:
    """Unicode NFC, strip control chars, collapse all whitespace to single spaces."""
    text = unicodedata.normalize("NFC", text)
    text = _CONTROL_CHARS.sub("", text)
    return " ".join(text.split())


def _extract_title(soup: BeautifulSoup) -> str:
    """Best-effort title: ``<title>``, then first ``<h1>``, then head text."""
    if soup.title and soup.title.string:
        return normalise_text(soup.title.string)
    h1 = soup.find("h1")
    if h1:
        return normalise_text(h1.get_text(" "))
    if soup.head:
        return normalise_text(soup.head.get_text(" "))
    return ""


def _extract_links(soup: BeautifulSoup) -> tuple[list[str], list[str]]:
    """Split ``<a href>`` targets into (internal, external), first-seen order."""
    internal: dict[str, None] = {}
    external: dict[str, None] = {}
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href == "/":
            continue
        if href.startswith(("http://", "https://")):
            external[href] = None
        else:
            internal[href] = None
    return list(internal), list(external)


def parse_html(url: str, html: str | bytes) -> SourceDocument:
    """Turn raw HTML into a :class:`SourceDocument`.

    Pass bytes when the charset is unknown so BeautifulSoup can detect it
    from the markup.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = _extract_title(soup)
    internal, external = _extract_links(soup)

    for tag in soup(BOILERPLATE_TAGS):
        tag.decompose()

    root = soup.body or soup
    body_text = normalise_text(root.get_text(separator=" "))
    return SourceDocument(
        url=url,
        title=title,
        body_text=body_text,
        internal_links=internal,
        external_links=external,
    )


class PageFetcher(ABC):
    """Given a URL, return the page's title and cleaned body text."""

    @abstractmethod
    def fetch(self, url: str) -> SourceDocument:
        """Fetch *url*; raise :class:`~web_rag.errors.FetchError` on failure."""
        ...


class HttpPageFetcher(PageFetcher):
    """Static HTTP GET + BeautifulSoup fetcher.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds; expiry is a fetch failure.
    min_body_chars:
        Pages whose cleaned body is shorter than this are rejected.
    headers:
        Extra HTTP headers sent with every request.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        min_body_chars: int = 50,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self.min_body_chars = min_body_chars
        self.headers = dict(headers or {})

    def fetch(self, url: str) -> SourceDocument:
        try:
            resp = requests.get(url, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc

        document = parse_html(url, resp.content)
        if len(document.body_text) < self.min_body_chars:
            raise FetchError(
                url,
                f"body too short ({len(document.body_text)} < {self.min_body_chars} chars)",
            )
        logger.info("Fetched %s (%d words)", url, document.word_count)
        return document
