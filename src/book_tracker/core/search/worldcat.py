# book_tracker/src/book_tracker/core/search/worldcat.py
"""
Client WorldCat OpenSearch (catalogue collectif).

Le service répond en JSON de style GData (valeurs sous la clé '$t') ou,
selon les comptes, en flux Atom. Les deux formes sont acceptées.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from ...config import WORLDCAT_MAX_RESULTS, SearchConfig
from ..models import (
    NO_DESCRIPTION,
    UNKNOWN_AUTHOR,
    UNKNOWN_DATE,
    UNKNOWN_PUBLISHER,
    UNKNOWN_TITLE,
    Book,
    Source,
)
from ..network_utils import http_get
from ..text_utils import clean_html_text, join_names, placeholder_cover
from .base import BookSearchSource

logger = logging.getLogger(__name__)

ATOM_NS = {
    "atom": "http://www.w3.org/2005/Atom",
    "dc": "http://purl.org/dc/elements/1.1/",
}


def _text(node: Any) -> Optional[str]:
    """Valeur d'un nœud GData: {'$t': '...'} ou chaîne brute."""
    if isinstance(node, dict):
        node = node.get("$t")
    if node is None:
        return None
    return str(node).strip() or None


def _names(node: Any) -> List[str]:
    """Noms d'un champ auteur/éditeur, seul ou en liste."""
    nodes = node if isinstance(node, list) else [node]
    names = []
    for n in nodes:
        if isinstance(n, dict):
            value = _text(n.get("name")) if "name" in n else _text(n)
            if value:
                names.append(value)
    return names


def _parse_worldcat_entry(entry: Dict, config: SearchConfig, index: int = 0) -> Book:
    title = _text(entry.get("title"))
    publishers = _names(entry.get("publisher"))
    return Book(
        id=f"worldcat-{index}",
        source=Source.WORLDCAT,
        title=title or UNKNOWN_TITLE,
        author=join_names(_names(entry.get("author"))) or UNKNOWN_AUTHOR,
        cover=placeholder_cover(config.placeholder_cover_url, title),
        description=clean_html_text(_text(entry.get("summary")) or "") or NO_DESCRIPTION,
        publisher=publishers[0] if publishers else UNKNOWN_PUBLISHER,
        published_date=_text(entry.get("published")) or UNKNOWN_DATE,
    )


def _entries_from_json(data: Dict) -> List[Dict]:
    entries = (data.get("entries") or {}).get("entry") or []
    return entries if isinstance(entries, list) else [entries]


def _entries_from_atom(content: bytes) -> List[Dict]:
    """Convertit un flux Atom en entrées de même forme que la variante JSON."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ValueError(f"invalid Atom feed: {e}") from e
    entries = []
    for node in root.findall("atom:entry", ATOM_NS):
        entry: Dict[str, Any] = {}
        title = node.findtext("atom:title", namespaces=ATOM_NS)
        if title:
            entry["title"] = {"$t": title}
        authors = [
            {"name": {"$t": name}}
            for name in (a.findtext("atom:name", namespaces=ATOM_NS) for a in node.findall("atom:author", ATOM_NS))
            if name
        ]
        if authors:
            entry["author"] = authors
        summary = node.findtext("atom:summary", namespaces=ATOM_NS)
        if summary:
            entry["summary"] = {"$t": summary}
        publisher = node.findtext("dc:publisher", namespaces=ATOM_NS)
        if publisher:
            entry["publisher"] = {"name": {"$t": publisher}}
        published = node.findtext("dc:date", namespaces=ATOM_NS) or node.findtext(
            "atom:published", namespaces=ATOM_NS
        )
        if published:
            entry["published"] = {"$t": published}
        entries.append(entry)
    return entries


class WorldCatSource(BookSearchSource):
    """Catalogue WorldCat; pas de syntaxe auteur dédiée."""

    source = Source.WORLDCAT
    max_results = WORLDCAT_MAX_RESULTS

    def _search(self, query: str) -> List[Book]:
        params = {"srwt": query, "format": "json", "count": self.max_results}
        r = http_get(
            self.config.worldcat_url,
            params=params,
            timeout=self.config.request_timeout,
            retries=self.config.max_retries,
        )
        content_type = r.headers.get("Content-Type") or ""
        if "xml" in content_type:
            entries = _entries_from_atom(r.content)
        else:
            entries = _entries_from_json(r.json() or {})
        return self._parse_items(entries, _parse_worldcat_entry, query)
