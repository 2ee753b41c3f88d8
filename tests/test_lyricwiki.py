from __future__ import annotations

import gzip
import json

import pytest

from plain_lyrics.sources.errors import FormatError, NetworkError, ParseError
from plain_lyrics.sources.lyricwiki import LyricWikiSource, song_url
from plain_lyrics.sources.types import TrackKey

API_URL = "https://lyrics.wikia.com/api.php"
PAGE_URL = "http://lyrics.wikia.com/wiki/The_Beatles:Girl"

PAGE = """
<html><body>
<div class="lyricbox">
<div class="rtMatcher"><a href="#">Did you mean Girl (remastered)?</a></div>
<script>evil()</script>Is there anybody going to listen to my story<br/>All about the girl who came to stay?<div class="lyricsbreak"></div>
</div>
</body></html>
"""


@pytest.fixture
def source():
    return LyricWikiSource()


class TestSongUrl:
    def test_page_found(self):
        assert song_url({"page_id": 12345, "url": PAGE_URL}) == PAGE_URL

    @pytest.mark.parametrize("page_id", ["", None])
    def test_page_not_created(self, page_id):
        assert song_url({"page_id": page_id, "url": "http://x"}) is None

    def test_zero_page_id_is_a_page(self):
        assert song_url({"page_id": 0, "url": PAGE_URL}) == PAGE_URL

    def test_page_id_missing(self):
        assert song_url({"url": "http://x"}) is None

    def test_url_not_inspected_without_page_id(self):
        # a broken url next to an empty page_id is still a plain "not found"
        assert song_url({"page_id": "", "url": 42}) is None

    @pytest.mark.parametrize("data", [[], "x", None, {"page_id": 1}, {"page_id": 1, "url": ""}])
    def test_unexpected_shapes(self, data):
        with pytest.raises(FormatError):
            song_url(data)


class TestLyricWikiSource:
    def test_resolves_lyrics(self, fake_http, source):
        fake_http.add(API_URL, {"artist": "The Beatles", "song": "Girl", "page_id": 34, "url": PAGE_URL})
        fake_http.add(PAGE_URL, PAGE)

        res = source.fetch(TrackKey(artist="The Beatles", title="Girl"))

        assert res.source == "lyricwiki"
        assert res.text == (
            "Is there anybody going to listen to my story\nAll about the girl who came to stay?"
        )

    def test_search_request(self, fake_http, source):
        fake_http.add(API_URL, {"page_id": "", "url": ""})
        source.fetch(TrackKey(artist="The Beatles", title="Girl"))

        call = fake_http.calls[0]
        assert call["params"] == {
            "func": "getSong",
            "fmt": "realjson",
            "artist": "The Beatles",
            "song": "Girl",
        }
        assert call["headers"]["Accept-Encoding"] == "gzip"

    def test_gzip_answer(self, fake_http, source):
        body = gzip.compress(json.dumps({"page_id": 34, "url": PAGE_URL}).encode("utf-8"))
        fake_http.add(API_URL, body, headers={"Content-Encoding": "gzip"})
        fake_http.add(PAGE_URL, PAGE)

        assert source.resolve("The Beatles", "Girl").startswith("Is there anybody")

    def test_empty_page_id_makes_no_page_call(self, fake_http, source):
        fake_http.add(API_URL, {"page_id": "", "url": "http://x"})

        res = source.fetch(TrackKey(artist="A", title="B"))

        assert res.text is None
        assert res.error is None
        assert fake_http.urls() == [API_URL]

    def test_api_error(self, fake_http, source):
        fake_http.add(API_URL, "", status=503)
        res = source.fetch(TrackKey(artist="A", title="B"))
        assert isinstance(res.error, NetworkError)

    def test_garbled_answer(self, fake_http, source):
        fake_http.add(API_URL, ["unexpected"])
        res = source.fetch(TrackKey(artist="A", title="B"))
        assert isinstance(res.error, FormatError)
        assert fake_http.urls() == [API_URL]

    def test_no_lyricbox(self, fake_http, source):
        fake_http.add(API_URL, {"page_id": 1, "url": PAGE_URL})
        fake_http.add(PAGE_URL, "<html><body>Page removed</body></html>")

        res = source.fetch(TrackKey(artist="A", title="B"))

        assert res.text is None
        assert isinstance(res.error, ParseError)

    def test_utf8_page(self, fake_http, source):
        fake_http.add(API_URL, {"page_id": 1, "url": PAGE_URL})
        fake_http.add(PAGE_URL, "<div class='lyricbox'>Пусть всегда<br/>будет солнце</div>")

        assert source.resolve("A", "B") == "Пусть всегда\nбудет солнце"

    def test_zero_page_id_fetches_page(self, fake_http, source):
        fake_http.add(API_URL, {"page_id": 0, "url": PAGE_URL})
        fake_http.add(PAGE_URL, PAGE)

        assert source.resolve("The Beatles", "Girl").startswith("Is there anybody")

    @pytest.mark.parametrize("url", ["not a url", "http://[bad", "wiki/Girl"])
    def test_bad_page_url(self, fake_http, source, url):
        fake_http.add(API_URL, {"page_id": 1, "url": url})

        res = source.fetch(TrackKey(artist="A", title="B"))

        assert res.text is None
        assert isinstance(res.error, FormatError)
        assert fake_http.urls() == [API_URL]
