"""
Normalización de texto para el matching.

Dos niveles:
- Básica: minúsculas y sin acentos. Para marcas y palabras clave.
- Loose: básica y además sin espacios, guiones, guiones bajos ni barras.
  "T-Cross", "t cross" y "T CROSS" quedan todos como "tcross".
"""

import re
import unicodedata
from typing import Optional

from autocrm.models import SearchCriteria

_SEPARATORS_RE = re.compile(r"[\s\-_/]+")
_WHITESPACE_RE = re.compile(r"\s+")

MIN_KEYWORD_LENGTH = 2

# Palabras de relleno frecuentes en los pedidos de clientes
STOP_WORDS: frozenset[str] = frozenset(
    {
        "busca",
        "buscar",
        "cliente",
        "para",
        "tipo",
        "como",
        "un",
        "una",
        "auto",
        "autos",
        "chico",
        "chica",
        "grande",
    }
)


def normalize_basic(value: Optional[str]) -> str:
    """Minúsculas + descomposición NFD sin marcas combinantes."""
    decomposed = unicodedata.normalize("NFD", (value or "").lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_loose(value: Optional[str]) -> str:
    return _SEPARATORS_RE.sub("", normalize_basic(value))


def normalize_brand(value: Optional[str]) -> str:
    """Las marcas se comparan ignorando espacios y guiones."""
    return normalize_loose(value)


def extract_search_keywords(search: Optional[SearchCriteria]) -> list[str]:
    """
    Infiere palabras clave de modelo desde título y descripción de la búsqueda.

    Ej: "SUV tipo Fox Yaris C3" -> ["suv", "fox", "yaris", "c3"]

    Returns:
        Palabras únicas en orden de aparición (sin stop words ni tokens de 1 letra)
    """
    if search is None:
        return []

    base = " ".join(part for part in (search.title, search.description) if part)
    cleaned = normalize_basic(base)

    keywords: list[str] = []
    seen: set[str] = set()
    for word in _WHITESPACE_RE.split(cleaned):
        if len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS or word in seen:
            continue
        seen.add(word)
        keywords.append(word)

    return keywords
