# book_tracker/src/book_tracker/core/network_utils.py
"""
Utilitaires réseau génériques (retry backoff, requêtes HTTP, événements d'échec).
"""

import logging
import random
import time
from functools import wraps
from typing import Callable, Dict, Optional

import requests

from ..config import (
    API_TIMEOUT,
    INITIAL_BACKOFF,
    JITTER,
    MAX_BACKOFF,
    MAX_RETRIES,
)

logger = logging.getLogger(__name__)

# Types d'échec rapportés par les sources
FAILURE_TRANSPORT = "transport"
FAILURE_PARSE = "parse"
FAILURE_DETAIL = "detail"
FAILURE_TIMEOUT = "timeout"


def retry_backoff(
    max_retries: int = MAX_RETRIES,
    initial_backoff: float = INITIAL_BACKOFF,
    max_backoff: float = MAX_BACKOFF,
    jitter: float = JITTER,
    allowed_exceptions: tuple = (requests.RequestException,),
):
    """Decorator for retrying functions with exponential backoff + jitter.

    The wrapped function accepts an extra ``retries`` keyword overriding
    ``max_retries`` for a single call.
    """

    def deco(func: Callable):
        @wraps(func)
        def wrapper(*args, retries: Optional[int] = None, **kwargs):
            attempts = max(1, retries if retries is not None else max_retries)
            backoff = initial_backoff
            for attempt in range(1, attempts + 1):
                try:
                    logger.debug("Attempt %d for %s", attempt, func.__name__)
                    return func(*args, **kwargs)
                except allowed_exceptions as e:
                    if attempt == attempts:
                        raise
                    sleep_time = backoff * (1 + random.uniform(-jitter, jitter))
                    sleep_time = max(0.0, min(max_backoff, sleep_time))
                    logger.warning(
                        "Error on attempt %d for %s: %s -- backing off %.2fs",
                        attempt,
                        func.__name__,
                        e,
                        sleep_time,
                    )
                    time.sleep(sleep_time)
                    backoff = min(max_backoff, backoff * 2)

        return wrapper

    return deco


@retry_backoff()
def http_get(
    url: str,
    params: Optional[Dict[str, object]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = API_TIMEOUT,
) -> requests.Response:
    """Effectue une requête HTTP GET; lève une exception si le statut n'est pas 2xx."""
    logger.debug("HTTP GET %s params=%s", url, params)
    r = requests.get(url, params=params, headers=headers, timeout=timeout)
    r.raise_for_status()
    return r


def log_source_failure(source: str, query: str, kind: str, error: object = None) -> None:
    """
    Journalise un échec de source sous forme d'événement structuré.

    Les champs ``source``, ``query`` et ``failure_kind`` sont attachés à
    l'enregistrement via ``extra`` pour que les handlers puissent les exploiter.
    """
    logger.warning(
        "Source %s failed (%s) for query %r: %s",
        source,
        kind,
        query,
        error,
        extra={"source": source, "query": query, "failure_kind": kind},
    )
