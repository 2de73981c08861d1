# book_tracker/src/book_tracker/core/search_service.py
"""
Service de recherche de livres.

Point d'entrée unique pour l'interface (et le CLI): recherche générale ou
par auteur, avec filtre de langue optionnel, déléguée à l'agrégateur.
"""

import logging
from typing import List, Optional, Sequence

from ..config import SearchConfig
from .models import Book, SearchMode
from .search import (
    BookSearchSource,
    GoogleBooksSource,
    ItunesSource,
    OpenLibrarySource,
    SearchAggregator,
    WorldCatSource,
)

logger = logging.getLogger(__name__)


def default_sources(config: SearchConfig) -> List[BookSearchSource]:
    """Les quatre catalogues, dans l'ordre de priorité pour le dédoublonnage."""
    return [
        GoogleBooksSource(config),
        OpenLibrarySource(config),
        ItunesSource(config),
        WorldCatSource(config),
    ]


class SearchService:
    """
    Service de recherche de livres.

    Fournit les deux opérations exposées à l'interface:
    - search_general: titre, auteur ou ISBN libre
    - search_by_author: requêtes orientées vers les champs auteur
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        sources: Optional[Sequence[BookSearchSource]] = None,
    ):
        self.config = config or SearchConfig()
        if sources is None:
            sources = default_sources(self.config)
        self.aggregator = SearchAggregator(sources, self.config)
        logger.debug("SearchService initialized with %d source(s)", len(self.aggregator.sources))

    def search_general(self, text: str, portuguese_only: bool = True) -> List[Book]:
        """Recherche générale (l'ISBN est détecté par les sources qui le supportent)."""
        return self.aggregator.search_all(text, SearchMode.GENERAL, portuguese_only)

    def search_by_author(self, name: str, portuguese_only: bool = True) -> List[Book]:
        """Recherche par auteur (syntaxe auteur propre à chaque catalogue)."""
        return self.aggregator.search_all(name, SearchMode.BY_AUTHOR, portuguese_only)
