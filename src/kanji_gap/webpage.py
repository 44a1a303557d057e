"""Fetch reference kanji lists from Wikipedia.

Each group maps to a page URL and a CSS selector picking the elements that
hold the kanji. The selectors are tailored to the current layout of those
two articles: jouyou kanji sit in the second column of a table, jinmeiyou
kanji in Japanese-language spans.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import requests
from bs4 import BeautifulSoup

from .catalog import JINMEIYOU, JOUYOU
from .errors import SourceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "kanji-gap/0.1 (Anki kanji coverage report)"
DEFAULT_TIMEOUT = 20

DEFAULT_PAGES: Dict[str, Dict[str, str]] = {
    JOUYOU: {
        "url": "https://en.wikipedia.org/api/rest_v1/page/html/List_of_j%C5%8Dy%C5%8D_kanji",
        "selector": "tr > td:nth-of-type(2) > a",
    },
    JINMEIYOU: {
        "url": "https://en.wikipedia.org/api/rest_v1/page/html/Jinmeiy%C5%8D_kanji",
        "selector": 'span[lang="ja"]',
    },
}


class WikipediaPageSource:
    """Page source returning the inner HTML of candidate kanji elements."""

    def __init__(
        self,
        pages: Optional[Dict[str, Dict[str, str]]] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.pages = pages if pages is not None else DEFAULT_PAGES
        self.user_agent = user_agent
        self.timeout = timeout

    def fetch_markup(self, identifier: str) -> List[str]:
        page = self.pages.get(identifier)
        if not page:
            raise ValueError(f"No reference page configured for group: {identifier}")
        url = page["url"]
        logger.info("Fetching %s kanji from %s", identifier, url)
        try:
            r = requests.get(url, headers={"User-Agent": self.user_agent}, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise SourceUnavailable(f"Could not fetch {identifier} list from {url}: {e}") from e
        # Wikipedia serves UTF-8; don't let requests guess.
        r.encoding = "utf-8"
        return parse_markup(r.text, page["selector"])


def parse_markup(html: str, selector: str) -> List[str]:
    """Return the inner HTML of every element matching ``selector``."""
    soup = BeautifulSoup(html, "html.parser")
    return [node.decode_contents() for node in soup.select(selector)]
