# book_tracker/src/book_tracker/config.py
"""
Configuration et constantes pour Book Tracker
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

# ---------- Configuration réseau ----------
API_TIMEOUT = 5
ADAPTER_TIMEOUT = 8.0
# part du budget d'une source accordée aux appels de détail OpenLibrary
DETAIL_BUDGET_RATIO = 0.8
GOOGLE_BOOKS_API = "https://www.googleapis.com/books/v1/volumes"
OPENLIB_BASE = "https://openlibrary.org"
OPENLIB_SEARCH = "https://openlibrary.org/search.json"
OPENLIB_COVERS = "https://covers.openlibrary.org/b/id"
ITUNES_SEARCH = "https://itunes.apple.com/search"
WORLDCAT_SEARCH = "https://www.worldcat.org/webservices/catalog/search/worldcat/opensearch"
PLACEHOLDER_COVER = "https://via.placeholder.com/150x220/4A5568/FFFFFF"

# ---------- Limites de résultats ----------
MAX_RESULTS = 30
GOOGLE_MAX_RESULTS = 20
OPENLIB_MAX_RESULTS = 20
OPENLIB_MAX_DETAILS = 10
ITUNES_MAX_RESULTS = 20
WORLDCAT_MAX_RESULTS = 20
MAX_CATEGORIES = 5

# ---------- Préférences de langue ----------
DEFAULT_LANGUAGE = "pt"
DEFAULT_OPENLIB_LANGUAGE = "por"
DEFAULT_COUNTRY = "br"

# ---------- Expressions régulières ----------
# ISBN-10/13 avec tirets ou espaces optionnels, préfixe ISBN:/ISBN-10:/ISBN-13: optionnel
ISBN_QUERY_RE = re.compile(
    r"^(?:ISBN(?:-1[03])?:? )?"
    r"(?P<number>"
    r"(?=[0-9X]{10}$|(?=(?:[0-9]+[- ]){3})[- 0-9X]{13}$|97[89][0-9]{10}$|(?=(?:[0-9]+[- ]){4})[- 0-9]{17}$)"
    r"(?:97[89][- ]?)?[0-9]{1,5}[- ]?[0-9]+[- ]?[0-9]+[- ]?[0-9X]"
    r")$"
)

# ---------- Configuration retry/backoff ----------
MAX_RETRIES = 1
INITIAL_BACKOFF = 1.0  # seconds
MAX_BACKOFF = 30.0
JITTER = 0.3  # fraction for jitter

# ---------- Configuration logging ----------
LOG_DIR = "logs"
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"

# ---------- Variables d'environnement ----------
API_KEY_ENV_VAR = "GOOGLE_BOOKS_API_KEY"
TIMEOUT_ENV_VAR = "BOOK_TRACKER_TIMEOUT"
COUNTRY_ENV_VAR = "BOOK_TRACKER_COUNTRY"
LANGUAGE_ENV_VAR = "BOOK_TRACKER_LANGUAGE"


@dataclass(frozen=True)
class SearchConfig:
    """Paramètres injectés dans chaque source de recherche."""

    google_api_key: Optional[str] = None
    google_url: str = GOOGLE_BOOKS_API
    openlibrary_url: str = OPENLIB_BASE
    openlibrary_covers_url: str = OPENLIB_COVERS
    itunes_url: str = ITUNES_SEARCH
    worldcat_url: str = WORLDCAT_SEARCH
    placeholder_cover_url: str = PLACEHOLDER_COVER
    language: str = DEFAULT_LANGUAGE
    openlibrary_language: str = DEFAULT_OPENLIB_LANGUAGE
    country: str = DEFAULT_COUNTRY
    request_timeout: float = API_TIMEOUT
    adapter_timeout: float = ADAPTER_TIMEOUT
    max_retries: int = MAX_RETRIES
    max_results: int = MAX_RESULTS

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Construit la configuration à partir des variables d'environnement."""
        timeout = os.getenv(TIMEOUT_ENV_VAR)
        return cls(
            google_api_key=os.getenv(API_KEY_ENV_VAR) or None,
            country=os.getenv(COUNTRY_ENV_VAR, DEFAULT_COUNTRY),
            language=os.getenv(LANGUAGE_ENV_VAR, DEFAULT_LANGUAGE),
            request_timeout=min(API_TIMEOUT, float(timeout)) if timeout else API_TIMEOUT,
            adapter_timeout=float(timeout) if timeout else ADAPTER_TIMEOUT,
        )


# ---------- Initialisation des dossiers ----------
def ensure_directories():
    """Crée les dossiers nécessaires s'ils n'existent pas."""
    os.makedirs(LOG_DIR, exist_ok=True)
