"""
Tests pour les modules core.search.itunes et core.search.worldcat.
"""

from unittest.mock import patch

import pytest
import requests

from book_tracker.config import SearchConfig
from book_tracker.core.search.itunes import ItunesSource, _parse_itunes_item
from book_tracker.core.search.worldcat import (
    WorldCatSource,
    _entries_from_atom,
    _parse_worldcat_entry,
)

ATOM_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <entry>
    <title>Vidas Secas</title>
    <author><name>Graciliano Ramos</name></author>
    <summary>Fabiano e Sinha Vit\xc3\xb3ria.</summary>
    <dc:publisher>Record</dc:publisher>
    <dc:date>1938</dc:date>
  </entry>
  <entry>
    <title>Capit\xc3\xa3es da Areia</title>
  </entry>
</feed>
"""


class TestParseItunesItem:
    """Tests pour _parse_itunes_item."""

    def test_parse_with_full_data(self, itunes_item):
        book = _parse_itunes_item(itunes_item, SearchConfig())

        assert book.id == "itunes-555"
        assert book.title == "O Alienista"
        assert book.cover == "https://is1.mzstatic.com/image/300x300bb.jpg"
        assert book.description == "Simão Bacamarte funda a Casa Verde."
        assert book.published_date == "2019"
        assert book.publisher == "Unknown Publisher"
        assert book.page_count == 0
        assert book.categories == ("Ficção", "Livros", "Clássicos")

    def test_parse_with_minimal_data(self):
        book = _parse_itunes_item({}, SearchConfig(), 3)

        assert book.id == "itunes-3"
        assert book.title == "Unknown Title"
        assert book.published_date == "Unknown Date"


class TestItunesSource:
    """Tests pour ItunesSource.search."""

    @patch("book_tracker.core.search.itunes.http_get")
    def test_search(self, mock_http_get, mock_http_response, itunes_item):
        mock_http_get.return_value = mock_http_response({"results": [itunes_item]})

        books = ItunesSource().search("o alienista")

        assert len(books) == 1
        params = mock_http_get.call_args.kwargs["params"]
        assert params["term"] == "o alienista"
        assert params["country"] == "br"
        assert params["entity"] == "ebook"

    @patch("book_tracker.core.search.itunes.http_get")
    def test_http_error_returns_empty(self, mock_http_get):
        mock_http_get.side_effect = requests.HTTPError("503")

        assert ItunesSource().search("o alienista") == []

    def test_author_query_is_raw_name(self):
        assert ItunesSource().author_query("Machado de Assis") == "Machado de Assis"


class TestParseWorldCatEntry:
    """Tests pour _parse_worldcat_entry."""

    def test_parse_gdata_json(self):
        entry = {
            "title": {"$t": "Vidas Secas"},
            "author": [{"name": {"$t": "Graciliano Ramos"}}, {"name": {"$t": "Outro"}}],
            "summary": {"$t": "Retirantes."},
            "publisher": {"name": {"$t": "Record"}},
            "published": {"$t": "1938"},
        }

        book = _parse_worldcat_entry(entry, SearchConfig(), 4)

        assert book.id == "worldcat-4"
        assert book.author == "Graciliano Ramos, Outro"
        assert book.publisher == "Record"
        assert book.published_date == "1938"
        assert "text=Vidas+Secas" in book.cover

    def test_parse_single_author_object(self):
        entry = {"title": {"$t": "Vidas Secas"}, "author": {"name": {"$t": "Graciliano Ramos"}}}

        book = _parse_worldcat_entry(entry, SearchConfig())

        assert book.author == "Graciliano Ramos"
        assert book.description == "No description available"


class TestEntriesFromAtom:
    """Tests pour _entries_from_atom."""

    def test_atom_feed(self):
        entries = _entries_from_atom(ATOM_FEED)

        assert len(entries) == 2
        book = _parse_worldcat_entry(entries[0], SearchConfig())
        assert book.title == "Vidas Secas"
        assert book.author == "Graciliano Ramos"
        assert book.publisher == "Record"
        assert book.published_date == "1938"

    def test_invalid_markup_raises_value_error(self):
        with pytest.raises(ValueError):
            _entries_from_atom(b"<feed>")


class TestWorldCatSource:
    """Tests pour WorldCatSource.search."""

    @patch("book_tracker.core.search.worldcat.http_get")
    def test_search_json(self, mock_http_get, mock_http_response):
        data = {"entries": {"entry": {"title": {"$t": "Vidas Secas"}}}}
        mock_http_get.return_value = mock_http_response(data)

        books = WorldCatSource().search("vidas secas")

        assert [b.title for b in books] == ["Vidas Secas"]
        assert mock_http_get.call_args.kwargs["params"]["srwt"] == "vidas secas"

    @patch("book_tracker.core.search.worldcat.http_get")
    def test_search_atom(self, mock_http_get, mock_http_response):
        mock_http_get.return_value = mock_http_response(
            content=ATOM_FEED, headers={"Content-Type": "application/atom+xml"}
        )

        books = WorldCatSource().search("vidas secas")

        assert [b.title for b in books] == ["Vidas Secas", "Capitães da Areia"]

    @patch("book_tracker.core.search.worldcat.http_get")
    def test_unreadable_body_returns_empty(self, mock_http_get, mock_http_response):
        mock_http_get.return_value = mock_http_response(None)

        assert WorldCatSource().search("vidas secas") == []
