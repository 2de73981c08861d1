# book_tracker/src/book_tracker/core/models.py
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"
NO_DESCRIPTION = "No description available"
UNKNOWN_PUBLISHER = "Unknown Publisher"
UNKNOWN_DATE = "Unknown Date"


class Source(str, Enum):
    """Catalogue externe ayant produit un résultat."""

    GOOGLE_BOOKS = "Google Books"
    OPEN_LIBRARY = "Open Library"
    ITUNES = "iTunes"
    WORLDCAT = "WorldCat"


class SearchMode(str, Enum):
    GENERAL = "general"
    BY_AUTHOR = "by_author"


@dataclass(frozen=True)
class Book:
    """Résultat de recherche normalisé, commun à toutes les sources."""

    id: str
    source: Source
    cover: str
    title: str = UNKNOWN_TITLE
    author: str = UNKNOWN_AUTHOR
    description: str = NO_DESCRIPTION
    publisher: str = UNKNOWN_PUBLISHER
    published_date: str = UNKNOWN_DATE
    page_count: int = 0
    categories: Tuple[str, ...] = field(default_factory=tuple)
    isbn: str = ""
    relevance_score: int = 0

    @property
    def dedup_key(self) -> str:
        return f"{self.title.lower()}-{self.author.lower()}"

    def to_dict(self) -> Dict[str, Any]:
        """Représentation à plat (clés camelCase) pour la couche de persistance."""
        data = asdict(self)
        return {
            "id": data["id"],
            "title": data["title"],
            "author": data["author"],
            "cover": data["cover"],
            "description": data["description"],
            "publisher": data["publisher"],
            "publishedDate": data["published_date"],
            "pageCount": data["page_count"],
            "categories": list(data["categories"]),
            "isbn": data["isbn"],
            "source": self.source.value,
            "relevanceScore": data["relevance_score"],
        }
