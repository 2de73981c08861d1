# book_tracker/src/book_tracker/core/library.py
"""
Bibliothèque personnelle: livres suivis par un utilisateur.

Un résultat de recherche choisi devient un LibraryBook (statut de lecture,
progression, note, critique). Le stockage passe par un LibraryStore; une
implémentation en mémoire est fournie, le stockage hébergé reste externe.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol

from .models import Book

logger = logging.getLogger(__name__)

MAX_RATING = 5
MIN_USERNAME_LENGTH = 3
MAX_USER_RESULTS = 10


class ReadingStatus(str, Enum):
    UNREAD = "unread"
    READING = "reading"
    FINISHED = "finished"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def compute_progress(current_page: int, total_pages: int) -> int:
    """Pourcentage lu, arrondi; 0 si le nombre de pages est inconnu."""
    if total_pages <= 0:
        return 0
    return round(current_page / total_pages * 100)


def next_status(current: ReadingStatus, progress: int) -> ReadingStatus:
    """
    Statut après une mise à jour de progression.

    Un livre non lu passe en lecture dès la première mise à jour; sinon le
    statut suit la progression (100% = terminé).
    """
    if current == ReadingStatus.UNREAD:
        return ReadingStatus.READING
    if progress >= 100:
        return ReadingStatus.FINISHED
    if progress > 0:
        return ReadingStatus.READING
    return ReadingStatus.UNREAD


@dataclass
class LibraryBook:
    """Livre de la bibliothèque d'un utilisateur."""

    title: str
    author: str
    cover: str = ""
    description: str = ""
    publisher: str = ""
    published_date: str = ""
    page_count: int = 0
    isbn: str = ""
    tags: List[str] = field(default_factory=list)
    status: ReadingStatus = ReadingStatus.UNREAD
    current_page: int = 0
    progress: int = 0
    rating: int = 0
    review: str = ""
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_search_result(
        cls, book: Book, status: ReadingStatus = ReadingStatus.UNREAD
    ) -> "LibraryBook":
        """Prépare un résultat de recherche pour l'ajout à la bibliothèque."""
        return cls(
            title=book.title,
            author=book.author,
            cover=book.cover,
            description=book.description,
            publisher=book.publisher,
            published_date=book.published_date,
            page_count=book.page_count,
            isbn=book.isbn,
            tags=list(book.categories),
            status=status,
        )


@dataclass(frozen=True)
class UserProfile:
    """Profil public d'un utilisateur (nom d'utilisateur unique)."""

    id: str
    username: str
    email: str = ""
    created_at: Optional[str] = None


def rating_summary(books: List[LibraryBook]) -> Dict[str, float]:
    """Moyenne des notes (livres notés seulement, une décimale) et nombre de livres notés."""
    rated = [b.rating for b in books if b.rating > 0]
    average = round(sum(rated) / len(rated), 1) if rated else 0.0
    return {"avg_rating": average, "rated_books": len(rated)}


class LibraryStore(Protocol):
    """Couche de persistance de la bibliothèque d'un utilisateur."""

    def add(self, user_id: str, book: LibraryBook) -> LibraryBook: ...

    def update(self, user_id: str, book_id: str, patch: Dict) -> LibraryBook: ...

    def remove(self, user_id: str, book_id: str) -> None: ...

    def subscribe(
        self, user_id: str, callback: Callable[[List[LibraryBook]], None]
    ) -> Callable[[], None]: ...

    def register_user(self, user_id: str, username: str, email: str = "") -> UserProfile: ...

    def get_user(self, user_id: str) -> Optional[UserProfile]: ...

    def search_users(
        self, prefix: str, exclude_user_id: Optional[str] = None, limit: int = MAX_USER_RESULTS
    ) -> List[UserProfile]: ...

    def get_user_books(self, user_id: str) -> List[LibraryBook]: ...


class InMemoryLibraryStore:
    """LibraryStore en mémoire, avec notification des abonnés à chaque changement."""

    def __init__(self):
        self._books: Dict[str, Dict[str, LibraryBook]] = {}
        self._subscribers: Dict[str, List[Callable[[List[LibraryBook]], None]]] = {}
        self._users: Dict[str, UserProfile] = {}

    def list_books(self, user_id: str) -> List[LibraryBook]:
        return list(self._books.get(user_id, {}).values())

    def add(self, user_id: str, book: LibraryBook) -> LibraryBook:
        now = _now()
        stored = replace(book, id=uuid.uuid4().hex, created_at=now, updated_at=now)
        self._books.setdefault(user_id, {})[stored.id] = stored
        self._notify(user_id)
        return stored

    def update(self, user_id: str, book_id: str, patch: Dict) -> LibraryBook:
        books = self._books.get(user_id, {})
        if book_id not in books:
            raise KeyError(f"Book {book_id} not found for user {user_id}")
        updated = replace(books[book_id], **patch, updated_at=_now())
        books[book_id] = updated
        self._notify(user_id)
        return updated

    def remove(self, user_id: str, book_id: str) -> None:
        books = self._books.get(user_id, {})
        if books.pop(book_id, None) is None:
            raise KeyError(f"Book {book_id} not found for user {user_id}")
        self._notify(user_id)

    def subscribe(
        self, user_id: str, callback: Callable[[List[LibraryBook]], None]
    ) -> Callable[[], None]:
        """Abonne `callback` à la collection; il reçoit immédiatement l'état courant."""
        self._subscribers.setdefault(user_id, []).append(callback)
        callback(self.list_books(user_id))

        def unsubscribe():
            subscribers = self._subscribers.get(user_id, [])
            if callback in subscribers:
                subscribers.remove(callback)

        return unsubscribe

    def _notify(self, user_id: str) -> None:
        books = self.list_books(user_id)
        for callback in list(self._subscribers.get(user_id, [])):
            callback(books)

    # ---------- Utilisateurs ----------

    def register_user(self, user_id: str, username: str, email: str = "") -> UserProfile:
        """
        Enregistre le profil public d'un utilisateur.

        Raises:
            ValueError: nom trop court ou déjà pris par un autre utilisateur
        """
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValueError(f"Username must have at least {MIN_USERNAME_LENGTH} characters")
        if any(u.username == username and u.id != user_id for u in self._users.values()):
            raise ValueError(f"Username {username!r} is already taken")
        profile = UserProfile(id=user_id, username=username, email=email, created_at=_now())
        self._users[user_id] = profile
        return profile

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        if not user_id:
            return None
        return self._users.get(user_id)

    def search_users(
        self, prefix: str, exclude_user_id: Optional[str] = None, limit: int = MAX_USER_RESULTS
    ) -> List[UserProfile]:
        """Utilisateurs dont le nom commence par `prefix` (sensible à la casse), triés par nom."""
        if not prefix or not prefix.strip():
            return []
        matches = sorted(
            (u for u in self._users.values() if u.username.startswith(prefix)),
            key=lambda u: u.username,
        )[:limit]
        # limite appliquée avant l'exclusion de l'utilisateur courant
        return [u for u in matches if u.id != exclude_user_id]

    def get_user_books(self, user_id: str) -> List[LibraryBook]:
        """Livres d'un utilisateur, les plus récemment modifiés d'abord."""
        if not user_id:
            return []
        return sorted(self.list_books(user_id), key=lambda b: b.updated_at or "", reverse=True)


class Library:
    """Opérations de bibliothèque pour l'utilisateur courant."""

    def __init__(self, store: LibraryStore, user_id: str):
        if not user_id:
            raise ValueError("An authenticated user is required")
        self.store = store
        self.user_id = user_id
        self.books: List[LibraryBook] = []
        self._unsubscribe = store.subscribe(user_id, self._on_change)

    def _on_change(self, books: List[LibraryBook]) -> None:
        self.books = books

    def close(self) -> None:
        self._unsubscribe()

    def _find(self, book_id: str) -> Optional[LibraryBook]:
        return next((b for b in self.books if b.id == book_id), None)

    def add_book(self, book: LibraryBook) -> LibraryBook:
        book = replace(book, progress=compute_progress(book.current_page, book.page_count))
        stored = self.store.add(self.user_id, book)
        logger.info("Added %r to library of %s", stored.title, self.user_id)
        return stored

    def update_progress(self, book_id: str, current_page: int, total_pages: int) -> LibraryBook:
        current = self._find(book_id)
        current_status = current.status if current else ReadingStatus.UNREAD
        progress = compute_progress(current_page, total_pages)
        return self.store.update(
            self.user_id,
            book_id,
            {
                "current_page": current_page,
                "page_count": total_pages,
                "progress": progress,
                "status": next_status(current_status, progress),
            },
        )

    def update_rating(self, book_id: str, rating: int) -> LibraryBook:
        if not 0 <= rating <= MAX_RATING:
            raise ValueError(f"Rating must be between 0 and {MAX_RATING}")
        return self.store.update(self.user_id, book_id, {"rating": rating})

    def update_review(self, book_id: str, review: str) -> LibraryBook:
        return self.store.update(self.user_id, book_id, {"review": review})

    def delete_book(self, book_id: str) -> None:
        self.store.remove(self.user_id, book_id)

    def books_by_status(self, status: ReadingStatus) -> List[LibraryBook]:
        return [b for b in self.books if b.status == status]

    def stats(self) -> Dict[str, int]:
        return {
            "total": len(self.books),
            "unread": len(self.books_by_status(ReadingStatus.UNREAD)),
            "reading": len(self.books_by_status(ReadingStatus.READING)),
            "finished": len(self.books_by_status(ReadingStatus.FINISHED)),
        }

    # ---------- Découverte ----------

    def search_users(self, prefix: str) -> List[UserProfile]:
        """Recherche d'autres lecteurs par début de nom d'utilisateur."""
        return self.store.search_users(prefix, exclude_user_id=self.user_id)

    def user_books(self, user_id: str) -> List[LibraryBook]:
        return self.store.get_user_books(user_id)

    def user_stats(self, user_id: str) -> Dict[str, float]:
        """Totaux par statut, moyenne des notes et nombre de livres notés d'un autre utilisateur."""
        books = self.store.get_user_books(user_id)
        stats = {
            "total": len(books),
            "unread": sum(1 for b in books if b.status == ReadingStatus.UNREAD),
            "reading": sum(1 for b in books if b.status == ReadingStatus.READING),
            "finished": sum(1 for b in books if b.status == ReadingStatus.FINISHED),
        }
        stats.update(rating_summary(books))
        return stats
