"""
Point d'entrée principal pour Book Tracker
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from .config import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_MAX_BYTES,
    ensure_directories,
)

USAGE = """Usage: python -m book_tracker <query> [--author] [--all]
  query: Titre, auteur ou ISBN à rechercher
  --author: Recherche par auteur
  --all: Garde les résultats de toutes les langues (par défaut: portugais)"""


def setup_logging():
    """Configure le système de logging (une seule fois par processus)."""
    logger = logging.getLogger("book_tracker")
    if logger.handlers:
        return logger
    ensure_directories()
    logger.setLevel(logging.DEBUG)

    # Handler pour fichier avec rotation
    logfile = os.path.join(LOG_DIR, "book_tracker.log")
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding=LOG_ENCODING
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Handler pour console
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    return logger


def run_cli(argv: List[str]) -> int:
    """Lance une recherche en ligne de commande."""
    logger = logging.getLogger("book_tracker")

    words = [a for a in argv if not a.startswith("--")]
    if not words:
        print(USAGE)
        return 1

    query = " ".join(words)
    by_author = "--author" in argv
    portuguese_only = "--all" not in argv

    try:
        from .cli import cli_search, print_search_summary

        books = cli_search(query, by_author=by_author, portuguese_only=portuguese_only)
        print_search_summary(books)
        return 0
    except Exception as e:
        logger.exception("Error in CLI mode")
        print(f"Error: {e}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Point d'entrée principal."""
    setup_logging()
    return run_cli(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    raise SystemExit(main())
