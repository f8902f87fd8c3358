"""
Slug derivation for blog titles.

    "Hello World"        → "hello-world"
    "  C'est l'été!  "   → "c-est-l-ete"
    "Python 3.12: news"  → "python-3-12-news"
"""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lowercase ASCII words of `title` joined by '-'. May return ''."""
    normalized = unicodedata.normalize("NFKD", title)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_text.lower()).strip("-")
