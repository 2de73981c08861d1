# book_tracker/src/book_tracker/core/search/scoring.py
"""
Score de pertinence d'un résultat par rapport à la requête saisie.
"""

from ..models import Book
from .language import looks_like_portuguese

EXACT_TITLE_SCORE = 100
PARTIAL_TITLE_SCORE = 50
EXACT_AUTHOR_SCORE = 80
PARTIAL_AUTHOR_SCORE = 40
LANGUAGE_BONUS = 20


def score(book: Book, query: str) -> int:
    """
    Calcule le score de pertinence (insensible à la casse, additif).

    Args:
        book: Résultat normalisé
        query: Requête d'origine

    Returns:
        Score >= 0
    """
    query_lower = query.lower()
    title = book.title.lower()
    author = book.author.lower()
    total = 0

    if title == query_lower:
        total += EXACT_TITLE_SCORE
    elif query_lower in title:
        total += PARTIAL_TITLE_SCORE

    if author == query_lower:
        total += EXACT_AUTHOR_SCORE
    elif query_lower in author:
        total += PARTIAL_AUTHOR_SCORE

    if looks_like_portuguese(book):
        total += LANGUAGE_BONUS

    return total
