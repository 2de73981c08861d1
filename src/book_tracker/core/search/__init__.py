# book_tracker/src/book_tracker/core/search/__init__.py
"""
Module Search - Recherche multi-sources de livres.

Ce module interroge en parallèle différents catalogues externes (Google
Books, OpenLibrary, iTunes, WorldCat), normalise leurs réponses en Book,
puis dédoublonne, score et classe les résultats.
"""

# Exports publics
from .aggregator import SearchAggregator, deduplicate, rank
from .base import BookSearchSource
from .google_books import GoogleBooksSource
from .itunes import ItunesSource
from .language import looks_like_portuguese
from .openlibrary import OpenLibrarySource
from .scoring import score
from .worldcat import WorldCatSource

__all__ = [
    "BookSearchSource",
    "GoogleBooksSource",
    "ItunesSource",
    "OpenLibrarySource",
    "SearchAggregator",
    "WorldCatSource",
    "deduplicate",
    "looks_like_portuguese",
    "rank",
    "score",
]
