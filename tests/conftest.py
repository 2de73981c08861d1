# tests/conftest.py
"""
Configuration globale pour pytest.

Fournit des fixtures réutilisables pour tous les tests.
"""

from typing import Dict

import pytest


@pytest.fixture
def make_book():
    """Fabrique de Book avec valeurs par défaut."""
    from book_tracker.core.models import Book, Source

    def _make(title="Test Book", author="Test Author", score=0, source=Source.GOOGLE_BOOKS, **kwargs):
        book_id = kwargs.pop("id", f"test-{title}-{author}")
        return Book(
            id=book_id,
            source=source,
            cover=kwargs.pop("cover", "https://example.org/cover.jpg"),
            title=title,
            author=author,
            relevance_score=score,
            **kwargs,
        )

    return _make


@pytest.fixture
def google_volume() -> Dict:
    """Retourne un volume Google Books complet."""
    return {
        "id": "abc123",
        "volumeInfo": {
            "title": "Dom Casmurro",
            "authors": ["Machado de Assis"],
            "publisher": "Companhia das Letras",
            "publishedDate": "2016",
            "description": "<p>Bentinho e Capitu.</p>",
            "pageCount": 256,
            "categories": ["Fiction"],
            "industryIdentifiers": [{"type": "ISBN_13", "identifier": "9788535902775"}],
            "imageLinks": {"thumbnail": "http://books.google.com/thumb.jpg"},
        },
    }


@pytest.fixture
def openlibrary_doc() -> Dict:
    """Retourne un document de recherche OpenLibrary."""
    return {
        "key": "/works/OL123W",
        "title": "Memórias Póstumas de Brás Cubas",
        "author_name": ["Machado de Assis"],
        "cover_i": 98765,
        "first_publish_year": 1881,
        "subject": ["Fiction", "Brazil", "Satire", "Classics", "Death", "Memory"],
        "isbn": ["9788508133656", "8508133651"],
        "edition_key": ["OL456M"],
    }


@pytest.fixture
def itunes_item() -> Dict:
    """Retourne un résultat iTunes (ebook)."""
    return {
        "trackId": 555,
        "trackName": "O Alienista",
        "artistName": "Machado de Assis",
        "artworkUrl100": "https://is1.mzstatic.com/image/100x100bb.jpg",
        "description": "Simão Bacamarte <b>funda</b> a Casa Verde.",
        "releaseDate": "2019-05-07T07:00:00Z",
        "genres": ["Ficção", "Livros", "Clássicos", "Contos"],
    }


@pytest.fixture
def mock_http_response():
    """Retourne un mock de réponse HTTP."""

    class MockResponse:
        def __init__(self, json_data=None, status_code=200, content=b"", headers=None):
            self.json_data = json_data
            self.status_code = status_code
            self.content = content
            self.headers = headers if headers is not None else {"Content-Type": "application/json"}
            self.text = str(json_data)

        def json(self):
            if self.json_data is None:
                raise ValueError("No JSON object could be decoded")
            return self.json_data

    return MockResponse
