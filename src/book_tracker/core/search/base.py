# book_tracker/src/book_tracker/core/search/base.py
"""
Classe de base des sources de recherche.

Chaque source interroge un catalogue externe et convertit la réponse en
objets Book. Une source ne lève jamais d'exception vers l'appelant: tout
échec réseau ou de format est journalisé et réduit à une liste vide.
"""

import dataclasses
import logging
from typing import Callable, Iterable, List, Optional

import requests

from ...config import SearchConfig
from ..models import Book, Source
from ..network_utils import FAILURE_PARSE, FAILURE_TRANSPORT, log_source_failure
from .scoring import score

logger = logging.getLogger(__name__)


class BookSearchSource:
    """Contrat commun: search(query) -> List[Book], sans exception."""

    source: Source
    max_results: int = 20

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()

    @property
    def name(self) -> str:
        return self.source.value

    def author_query(self, author: str) -> str:
        """Syntaxe de recherche par auteur propre au catalogue (par défaut: le nom brut)."""
        return author

    def search(self, query: str, score_query: Optional[str] = None) -> List[Book]:
        """
        Recherche des livres dans le catalogue.

        Args:
            query: Requête envoyée au catalogue (éventuellement réécrite)
            score_query: Texte utilisé pour le score de pertinence
                (par défaut la requête elle-même)

        Returns:
            Liste de Book scorés, vide en cas d'échec
        """
        if not query or not query.strip():
            return []

        try:
            books = self._search(query)
        except requests.RequestException as e:
            log_source_failure(self.name, query, FAILURE_TRANSPORT, e)
            return []
        except (AttributeError, TypeError, KeyError, ValueError) as e:
            # JSON ou XML illisible, ou réponse de forme inattendue
            log_source_failure(self.name, query, FAILURE_PARSE, e)
            return []

        reference = score_query if score_query is not None else query
        scored = [
            dataclasses.replace(book, relevance_score=score(book, reference))
            for book in books[: self.max_results]
        ]
        logger.info("%s: %d result(s) for %r", self.name, len(scored), query)
        return scored

    def _search(self, query: str) -> List[Book]:
        raise NotImplementedError

    def _parse_items(self, items: Iterable, parse: Callable[..., Book], query: str) -> List[Book]:
        """Convertit chaque élément brut; un élément malformé est ignoré seul."""
        books = []
        for index, item in enumerate(items):
            try:
                books.append(parse(item, self.config, index))
            except (AttributeError, TypeError, KeyError, ValueError) as e:
                log_source_failure(self.name, query, FAILURE_PARSE, e)
        return books
