# book_tracker/src/book_tracker/core/search/openlibrary.py
"""
Client OpenLibrary (catalogue de bibliothèque).

La recherche renvoie des résumés de documents; la description, l'éditeur
et le nombre de pages viennent d'un second appel par document (Work ou
Edition), lancés en parallèle et bornés à OPENLIB_MAX_DETAILS.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Dict, List, Optional

import requests

from ...config import (
    DETAIL_BUDGET_RATIO,
    MAX_CATEGORIES,
    OPENLIB_MAX_DETAILS,
    OPENLIB_MAX_RESULTS,
    SearchConfig,
)
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
from ..network_utils import FAILURE_DETAIL, FAILURE_PARSE, FAILURE_TIMEOUT, http_get, log_source_failure
from ..text_utils import as_page_count, first_text, join_names, placeholder_cover
from .base import BookSearchSource

logger = logging.getLogger(__name__)

SEARCH_FIELDS = "key,title,author_name,cover_i,first_publish_year,publisher,subject,isbn,edition_key"


def _detail_path(doc: Dict) -> Optional[str]:
    """Chemin du document de détail: la Work si disponible, sinon la première Edition."""
    key = doc.get("key") or ""
    if key.startswith("/works/"):
        return key
    editions = doc.get("edition_key") or []
    if editions:
        return f"/books/{editions[0]}"
    return key or None


def _parse_openlibrary_doc(
    doc: Dict, config: SearchConfig, index: int = 0, details: Optional[Dict] = None
) -> Book:
    """
    Convertit un document de recherche OpenLibrary (et ses détails) en Book.

    Args:
        doc: Élément de 'docs' de search.json
        config: Configuration (URLs de couverture)
        index: Position dans la réponse
        details: JSON de la Work/Edition, {} si indisponible
    """
    details = details or {}
    title = doc.get("title")
    cover_id = doc.get("cover_i")
    published = doc.get("first_publish_year") or details.get("publish_date")
    native_id = (doc.get("key") or f"doc{index}").lstrip("/")

    return Book(
        id=f"openlibrary-{native_id}",
        source=Source.OPEN_LIBRARY,
        title=title or UNKNOWN_TITLE,
        author=join_names(doc.get("author_name")) or UNKNOWN_AUTHOR,
        cover=(
            f"{config.openlibrary_covers_url}/{cover_id}-L.jpg"
            if cover_id
            else placeholder_cover(config.placeholder_cover_url, title)
        ),
        description=first_text(details.get("description")) or NO_DESCRIPTION,
        publisher=first_text(details.get("publishers")) or UNKNOWN_PUBLISHER,
        published_date=str(published) if published else UNKNOWN_DATE,
        page_count=as_page_count(details.get("number_of_pages")),
        categories=tuple((doc.get("subject") or [])[:MAX_CATEGORIES]),
        isbn=first_text(doc.get("isbn")) or "",
    )


class OpenLibrarySource(BookSearchSource):
    """Catalogue OpenLibrary, enrichi document par document."""

    source = Source.OPEN_LIBRARY
    max_results = OPENLIB_MAX_DETAILS

    def author_query(self, author: str) -> str:
        return f'author:"{author}"'

    def _search(self, query: str) -> List[Book]:
        # les détails doivent se terminer avant que l'agrégateur abandonne la source
        deadline = time.monotonic() + self.config.adapter_timeout * DETAIL_BUDGET_RATIO
        params = {
            "q": isbn_scoped_query(query),
            "limit": OPENLIB_MAX_RESULTS,
            "language": self.config.openlibrary_language,
            "fields": SEARCH_FIELDS,
        }
        r = http_get(
            f"{self.config.openlibrary_url}/search.json",
            params=params,
            timeout=self.config.request_timeout,
            retries=self.config.max_retries,
        )
        docs = [d for d in (r.json().get("docs") or [])[:OPENLIB_MAX_DETAILS] if isinstance(d, dict)]
        if not docs:
            return []

        details = self._fetch_all_details(docs, query, deadline)
        books = []
        for index, (doc, detail) in enumerate(zip(docs, details)):
            try:
                books.append(_parse_openlibrary_doc(doc, self.config, index, detail))
            except (AttributeError, TypeError, ValueError) as e:
                log_source_failure(self.name, query, FAILURE_PARSE, e)
        return books

    def _fetch_all_details(self, docs: List[Dict], query: str, deadline: float) -> List[Dict]:
        """
        Récupère les détails en parallèle; un échec donne {} pour ce document seul.

        L'attente s'arrête à `deadline` (horloge monotone): les détails encore
        en cours sont abandonnés et leurs documents gardent les valeurs par défaut.
        """
        pool = ThreadPoolExecutor(max_workers=min(len(docs), OPENLIB_MAX_DETAILS))
        try:
            futures = [pool.submit(self._fetch_details, doc) for doc in docs]
            done, _ = wait(futures, timeout=max(0.0, deadline - time.monotonic()))
            results = []
            for future in futures:
                if future not in done:
                    log_source_failure(self.name, query, FAILURE_TIMEOUT, "detail fetch timed out")
                    results.append({})
                    continue
                try:
                    results.append(future.result())
                except Exception as e:
                    log_source_failure(self.name, query, FAILURE_DETAIL, e)
                    results.append({})
            return results
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def _fetch_details(self, doc: Dict) -> Dict:
        path = _detail_path(doc)
        if not path:
            return {}
        try:
            r = http_get(
                f"{self.config.openlibrary_url}{path}.json",
                timeout=self.config.request_timeout,
                retries=self.config.max_retries,
            )
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            logger.debug("OL details unavailable for %s: %s", path, e)
            raise
        return data if isinstance(data, dict) else {}
