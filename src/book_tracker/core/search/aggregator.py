# book_tracker/src/book_tracker/core/search/aggregator.py
"""
Agrégateur de recherche multi-sources.

Responsabilité unique: interroger toutes les sources en parallèle, attendre
que chacune ait répondu ou échoué, puis fusionner, dédoublonner, filtrer et
classer les résultats.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Dict, Iterable, List, Optional, Sequence

from ...config import SearchConfig
from ..models import Book, SearchMode
from ..network_utils import FAILURE_TIMEOUT, FAILURE_TRANSPORT, log_source_failure
from .base import BookSearchSource
from .language import looks_like_portuguese

logger = logging.getLogger(__name__)


def deduplicate(books: Iterable[Book]) -> List[Book]:
    """Garde la première occurrence de chaque couple titre/auteur (insensible à la casse)."""
    seen = set()
    unique = []
    for book in books:
        key = book.dedup_key
        if key not in seen:
            seen.add(key)
            unique.append(book)
    return unique


def rank(books: Iterable[Book], limit: int) -> List[Book]:
    """Tri stable par score décroissant, tronqué à `limit`."""
    return sorted(books, key=lambda b: b.relevance_score, reverse=True)[:limit]


class SearchAggregator:
    """Orchestre les sources et produit la liste classée des résultats."""

    def __init__(self, sources: Sequence[BookSearchSource], config: Optional[SearchConfig] = None):
        self.sources = list(sources)
        self.config = config or SearchConfig()

    def build_queries(self, query: str, mode: SearchMode) -> Dict[BookSearchSource, str]:
        """Requête propre à chaque source selon le mode de recherche."""
        if mode == SearchMode.BY_AUTHOR:
            return {source: source.author_query(query) for source in self.sources}
        return {source: query for source in self.sources}

    def search_all(
        self,
        query: str,
        mode: SearchMode = SearchMode.GENERAL,
        portuguese_only: bool = True,
    ) -> List[Book]:
        """
        Interroge toutes les sources et retourne les résultats classés.

        Args:
            query: Texte saisi (titre, auteur, ISBN...)
            mode: Recherche générale ou par auteur
            portuguese_only: Ne garder que les livres qui semblent en portugais

        Returns:
            Au plus `config.max_results` livres, triés par pertinence.
            Liste vide si la requête est vide (aucune source n'est appelée).
        """
        if not query or not query.strip():
            return []

        text = query.strip()
        queries = self.build_queries(text, SearchMode(mode))
        logger.debug("Searching %d source(s) for %r (mode=%s)", len(queries), text, mode)

        all_books = self._gather(queries, text)
        unique = deduplicate(all_books)
        if portuguese_only:
            unique = [b for b in unique if looks_like_portuguese(b)]
        results = rank(unique, self.config.max_results)

        logger.info(
            "Search complete: query=%r, raw=%d, unique=%d, returned=%d",
            text,
            len(all_books),
            len(unique),
            len(results),
        )
        return results

    def _gather(self, queries: Dict[BookSearchSource, str], score_query: str) -> List[Book]:
        """Lance toutes les sources et attend qu'elles aient toutes terminé (ou expiré)."""
        if not queries:
            return []

        pool = ThreadPoolExecutor(max_workers=len(queries), thread_name_prefix="book-search")
        try:
            futures = [
                (source, source_query, pool.submit(source.search, source_query, score_query))
                for source, source_query in queries.items()
            ]
            done, _ = wait([f for _, _, f in futures], timeout=self.config.adapter_timeout)

            books: List[Book] = []
            for source, source_query, future in futures:
                if future not in done:
                    log_source_failure(source.name, source_query, FAILURE_TIMEOUT, "no response in time")
                    continue
                try:
                    books.extend(future.result())
                except Exception as e:
                    log_source_failure(source.name, source_query, FAILURE_TRANSPORT, e)
            return books
        finally:
            # une source bloquée ne doit pas retenir l'appelant
            pool.shutdown(wait=False, cancel_futures=True)
