# book_tracker/src/book_tracker/core/search/itunes.py
"""
Client iTunes Search API (ebooks de la boutique, pays configurable).
"""

import logging
from typing import Dict, List, Optional

from ...config import ITUNES_MAX_RESULTS, SearchConfig
from ..models import NO_DESCRIPTION, UNKNOWN_AUTHOR, UNKNOWN_DATE, UNKNOWN_TITLE, Book, Source
from ..network_utils import http_get
from ..text_utils import clean_html_text, placeholder_cover
from .base import BookSearchSource

logger = logging.getLogger(__name__)

ITUNES_MAX_CATEGORIES = 3


def _artwork(item: Dict) -> Optional[str]:
    """Agrandit la vignette en 300x300 lorsqu'elle existe."""
    if item.get("artworkUrl100"):
        return item["artworkUrl100"].replace("100x100", "300x300")
    if item.get("artworkUrl60"):
        return item["artworkUrl60"].replace("60x60", "300x300")
    return None


def _release_year(release_date: Optional[str]) -> Optional[str]:
    # format ISO 8601: "2019-05-07T07:00:00Z"
    if release_date and len(release_date) >= 4 and release_date[:4].isdigit():
        return release_date[:4]
    return None


def _parse_itunes_item(item: Dict, config: SearchConfig, index: int = 0) -> Book:
    title = item.get("trackName")
    genres = [g for g in (item.get("genres") or []) if isinstance(g, str)]
    return Book(
        id=f"itunes-{item.get('trackId') or index}",
        source=Source.ITUNES,
        title=title or UNKNOWN_TITLE,
        author=item.get("artistName") or UNKNOWN_AUTHOR,
        cover=_artwork(item) or placeholder_cover(config.placeholder_cover_url, title),
        description=clean_html_text(item.get("description") or "") or NO_DESCRIPTION,
        published_date=_release_year(item.get("releaseDate")) or UNKNOWN_DATE,
        categories=tuple(genres[:ITUNES_MAX_CATEGORIES]),
    )


class ItunesSource(BookSearchSource):
    """Boutique iTunes; pas de syntaxe auteur, le nom est envoyé tel quel."""

    source = Source.ITUNES
    max_results = ITUNES_MAX_RESULTS

    def _search(self, query: str) -> List[Book]:
        params = {
            "term": query,
            "entity": "ebook",
            "limit": self.max_results,
            "country": self.config.country,
            "attribute": "allArtistTerm",
        }
        r = http_get(
            self.config.itunes_url,
            params=params,
            timeout=self.config.request_timeout,
            retries=self.config.max_retries,
        )
        return self._parse_items(r.json().get("results") or [], _parse_itunes_item, query)
