"""
Logique pour le mode ligne de commande.

Utilise SearchService pour réutiliser la logique de recherche.
"""

import logging
from typing import List

from .config import SearchConfig
from .core.models import Book
from .core.search_service import SearchService

logger = logging.getLogger(__name__)


def cli_search(query: str, by_author: bool = False, portuguese_only: bool = True) -> List[Book]:
    """
    Lance une recherche en mode CLI.

    Args:
        query: Titre, auteur ou ISBN
        by_author: Si True, recherche orientée auteur
        portuguese_only: Si False, garde les résultats de toutes les langues

    Returns:
        Liste des livres classés
    """
    logger.info("CLI mode - searching: %r (author=%s)", query, by_author)

    service = SearchService(SearchConfig.from_env())
    if by_author:
        books = service.search_by_author(query, portuguese_only=portuguese_only)
    else:
        books = service.search_general(query, portuguese_only=portuguese_only)

    logger.info("CLI mode - %d result(s)", len(books))
    return books


def print_search_summary(books: List[Book]):
    """Affiche un résumé des résultats de recherche."""
    print("\n=== Résultats de la recherche ===")
    print(f"Livres trouvés: {len(books)}")

    for position, book in enumerate(books, start=1):
        print(f"\n{position}. {book.title} [{book.relevance_score}]")
        print(f"  Auteur: {book.author}")
        print(f"  Éditeur: {book.publisher} ({book.published_date})")
        if book.isbn:
            print(f"  ISBN: {book.isbn}")
        if book.page_count:
            print(f"  Pages: {book.page_count}")
        if book.categories:
            print(f"  Catégories: {', '.join(book.categories)}")
        print(f"  Source: {book.source.value}")
