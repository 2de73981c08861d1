# book_tracker/src/book_tracker/core/search/google_books.py
"""
Client Google Books API.

Responsabilité unique: interroger l'API Google Books (catalogue général)
et convertir les volumes en Book.
"""

import logging
from typing import Dict, List, Optional

import requests

from ...config import GOOGLE_MAX_RESULTS, MAX_CATEGORIES, SearchConfig
from ..isbn import isbn_scoped_query
from ..models import (
    NO_DESCRIPTION,
    UNKNOWN_AUTHOR,
    UNKNOWN_DATE,
    UNKNOWN_PUBLISHER,
    UNKNOWN_TITLE,
    Book,
    Source,
)
from ..network_utils import FAILURE_PARSE, FAILURE_TRANSPORT, http_get, log_source_failure
from ..text_utils import as_page_count, clean_html_text, join_names, placeholder_cover
from .base import BookSearchSource

logger = logging.getLogger(__name__)


def _parse_google_book(item: Dict, config: SearchConfig, index: int = 0) -> Book:
    """
    Convertit un volume Google Books en Book.

    Args:
        item: Élément de la liste 'items' de l'API
        config: Configuration (URL de couverture générique)
        index: Position dans la réponse (non utilisée: l'API fournit un id)

    Returns:
        Book sans score de pertinence
    """
    info = item.get("volumeInfo") or {}
    images = info.get("imageLinks") or {}
    identifiers = info.get("industryIdentifiers") or []
    title = info.get("title")

    return Book(
        id=f"google-{item['id']}",
        source=Source.GOOGLE_BOOKS,
        title=title or UNKNOWN_TITLE,
        author=join_names(info.get("authors")) or UNKNOWN_AUTHOR,
        cover=(
            images.get("thumbnail")
            or images.get("smallThumbnail")
            or placeholder_cover(config.placeholder_cover_url, title)
        ),
        description=clean_html_text(info.get("description") or "") or NO_DESCRIPTION,
        publisher=info.get("publisher") or UNKNOWN_PUBLISHER,
        published_date=info.get("publishedDate") or UNKNOWN_DATE,
        page_count=as_page_count(info.get("pageCount")),
        categories=tuple((info.get("categories") or [])[:MAX_CATEGORIES]),
        isbn=(identifiers[0].get("identifier") or "") if identifiers else "",
    )


class GoogleBooksSource(BookSearchSource):
    """Catalogue général Google Books, avec préférence pour le portugais."""

    source = Source.GOOGLE_BOOKS
    max_results = GOOGLE_MAX_RESULTS

    def author_query(self, author: str) -> str:
        return f'inauthor:"{author}"'

    def _params(self, query: str) -> Dict[str, object]:
        params: Dict[str, object] = {
            "q": isbn_scoped_query(query),
            "maxResults": self.max_results,
            "printType": "books",
            "orderBy": "relevance",
            "langRestrict": self.config.language,
        }
        if self.config.google_api_key:
            params["key"] = self.config.google_api_key
        return params

    def _search(self, query: str) -> List[Book]:
        r = http_get(
            self.config.google_url,
            params=self._params(query),
            timeout=self.config.request_timeout,
            retries=self.config.max_retries,
        )
        items = r.json().get("items") or []
        return self._parse_items(items, _parse_google_book, query)

    def get_details(self, volume_id: str) -> Optional[Book]:
        """
        Récupère un volume précis par son identifiant Google Books.

        Returns:
            Book (sans score) ou None en cas d'échec
        """
        if not volume_id:
            return None

        params = {"key": self.config.google_api_key} if self.config.google_api_key else None
        try:
            r = http_get(
                f"{self.config.google_url}/{volume_id}",
                params=params,
                timeout=self.config.request_timeout,
                retries=self.config.max_retries,
            )
            return _parse_google_book(r.json(), self.config)
        except requests.RequestException as e:
            log_source_failure(self.name, volume_id, FAILURE_TRANSPORT, e)
        except (AttributeError, TypeError, KeyError, ValueError) as e:
            log_source_failure(self.name, volume_id, FAILURE_PARSE, e)
        return None
