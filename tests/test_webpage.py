"""Tests for the Wikipedia page source (network mocked)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from kanji_gap.catalog import JINMEIYOU, JOUYOU, load_group
from kanji_gap.errors import SourceUnavailable
from kanji_gap.webpage import DEFAULT_PAGES, WikipediaPageSource, parse_markup

JOUYOU_HTML = """
<html><body><table>
<tr><th>No.</th><th>New</th><th>Old</th></tr>
<tr><td>1</td><td><a href="/wiki/亜">亜</a></td><td>亞</td></tr>
<tr><td>2</td><td><a href="/wiki/哀">哀</a></td><td></td></tr>
<tr><td>3</td><td><a href="/wiki/愛">愛</a></td><td></td></tr>
</table></body></html>
"""

JINMEIYOU_HTML = """
<html><body>
<p>Jinmeiyō kanji (<span lang="ja">人名用漢字</span>)</p>
<p><span lang="ja">丑 丞</span> <span lang="en">ox</span></p>
</body></html>
"""


def _response(text, status=200):
    resp = MagicMock()
    resp.text = text
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


class TestParseMarkup:
    """Test selector-based extraction."""

    def test_jouyou_second_column_only(self):
        """Only links in the second column are picked up."""
        fragments = parse_markup(JOUYOU_HTML, DEFAULT_PAGES[JOUYOU]["selector"])
        assert fragments == ["亜", "哀", "愛"]

    def test_jinmeiyou_spans(self):
        """Japanese-language spans are picked up, English ones are not."""
        fragments = parse_markup(JINMEIYOU_HTML, DEFAULT_PAGES[JINMEIYOU]["selector"])
        assert fragments == ["人名用漢字", "丑 丞"]

    def test_no_matches(self):
        assert parse_markup("<p>nothing</p>", "span") == []


class TestWikipediaPageSource:
    """Test fetching with requests."""

    def test_fetch_sends_user_agent_and_timeout(self):
        source = WikipediaPageSource(user_agent="test-agent", timeout=5)
        with patch("kanji_gap.webpage.requests.get", return_value=_response(JOUYOU_HTML)) as get:
            fragments = source.fetch_markup(JOUYOU)
        get.assert_called_once_with(
            DEFAULT_PAGES[JOUYOU]["url"], headers={"User-Agent": "test-agent"}, timeout=5
        )
        assert fragments == ["亜", "哀", "愛"]

    def test_http_error_is_unavailable(self):
        source = WikipediaPageSource()
        with patch("kanji_gap.webpage.requests.get", return_value=_response("", status=503)):
            with pytest.raises(SourceUnavailable):
                source.fetch_markup(JOUYOU)

    def test_connection_error_is_unavailable(self):
        source = WikipediaPageSource()
        with patch("kanji_gap.webpage.requests.get", side_effect=requests.ConnectionError("offline")):
            with pytest.raises(SourceUnavailable, match="offline"):
                source.fetch_markup(JINMEIYOU)

    def test_unconfigured_group(self):
        source = WikipediaPageSource(pages={})
        with pytest.raises(ValueError):
            source.fetch_markup(JOUYOU)

    def test_load_group_through_page_source(self):
        """A fetched page feeds straight into group loading."""
        source = WikipediaPageSource()
        with patch("kanji_gap.webpage.requests.get", return_value=_response(JINMEIYOU_HTML)):
            chars = load_group(source, JINMEIYOU)
        assert chars == ["人", "名", "用", "漢", "字", "丑", "丞"]
