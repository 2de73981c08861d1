# book_tracker/src/book_tracker/core/isbn.py
"""
Détection des requêtes en forme d'ISBN, partagée par les sources qui
supportent la recherche ciblée `isbn:`.
"""

from typing import Optional

from isbnlib import canonical

from ..config import ISBN_QUERY_RE


def extract_isbn(query: str) -> Optional[str]:
    """
    Retourne l'ISBN (forme canonique si possible) contenu dans la requête,
    ou None si la requête n'a pas la forme d'un ISBN.

    Args:
        query: Texte saisi (ex: "978-85-359-0277-5", "ISBN-10: 0451524934")
    """
    if not query:
        return None
    match = ISBN_QUERY_RE.match(query.strip())
    if not match:
        return None
    number = match.group("number")
    return canonical(number) or number


def looks_like_isbn(query: str) -> bool:
    return extract_isbn(query) is not None


def isbn_scoped_query(query: str) -> str:
    """Réécrit une requête ISBN en `isbn:<numéro>`; sinon la retourne inchangée."""
    isbn = extract_isbn(query)
    return f"isbn:{isbn}" if isbn else query
