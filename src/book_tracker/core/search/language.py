# book_tracker/src/book_tracker/core/search/language.py
"""
Heuristique de détection des livres en portugais.

Responsabilité unique: estimer, sans appel externe, si un résultat de
recherche est probablement publié en portugais. Faux positifs et faux
négatifs sont acceptés: le but est un filtrage directionnel.
"""

from ..models import Book

# Éditeurs et marques du marché éditorial lusophone
PORTUGUESE_PUBLISHER_KEYWORDS = (
    "editora",
    "companhia",
    "records",
    "martins",
    "fontes",
    "ática",
    "saraiva",
    "moderna",
    "ftd",
    "scipione",
    "cobogó",
    "intrínseca",
    "planet",
    "rocco",
    "zahar",
    "34",
    "leya",
    "quadrante",
    "biruta",
    "perspectiva",
)

# Articles et prépositions (l'espace final fait partie du motif)
PORTUGUESE_FUNCTION_WORDS = (
    "o ",
    "a ",
    "os ",
    "as ",
    "de ",
    "da ",
    "do ",
    "dos ",
    "das ",
    "em ",
    "para ",
    "com ",
    "sem ",
    "por ",
    "como ",
    "mais ",
    "muito ",
    "muita ",
)

PORTUGUESE_SURNAMES = (
    "silva",
    "santos",
    "souza",
    "costa",
    "ferreira",
    "alves",
    "pereira",
    "lima",
    "gomes",
    "ribeiro",
)


def looks_like_portuguese(book: Book) -> bool:
    """Retourne True si le titre, l'auteur ou l'éditeur suggèrent le portugais."""
    title = book.title.casefold()
    author = book.author.casefold()
    publisher = book.publisher.casefold()

    for keyword in PORTUGUESE_PUBLISHER_KEYWORDS:
        if keyword in title or keyword in author or keyword in publisher:
            return True

    for word in PORTUGUESE_FUNCTION_WORDS:
        # un titre réduit au mot seul ne compte pas
        if word in title and len(title) > len(word) + 2:
            return True

    return any(surname in author for surname in PORTUGUESE_SURNAMES)
