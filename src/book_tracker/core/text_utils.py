# book_tracker/src/book_tracker/core/text_utils.py
"""
Utilitaires pour le nettoyage de chaînes de caractères.
"""

import re
from typing import Any, Optional
from urllib.parse import quote_plus


def clean_html_text(html_content: str) -> str:
    """Nettoie le HTML pour extraire le texte."""
    if not html_content:
        return ""
    # Supprimer les balises HTML
    text = re.sub(r"<[^>]+>", " ", html_content)
    # Supprimer les espaces multiples
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def first_text(value: Any) -> Optional[str]:
    """
    Retourne le premier élément textuel d'une valeur (str, liste ou dict OpenLibrary).

    OpenLibrary renvoie parfois {'type': '/type/text', 'value': '...'}.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("value")
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def join_names(names: Any, separator: str = ", ") -> Optional[str]:
    """Joint une liste de noms; accepte aussi une chaîne seule."""
    if isinstance(names, str):
        return names.strip() or None
    if not names:
        return None
    parts = [str(n).strip() for n in names if n and str(n).strip()]
    return separator.join(parts) or None


def placeholder_cover(base_url: str, title: Optional[str]) -> str:
    """Construit l'URL d'une couverture générique avec un fragment du titre."""
    fragment = quote_plus(title[:15]) if title else "No+Title"
    return f"{base_url}?text={fragment}"


def as_page_count(value: Any) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)
