from __future__ import annotations

import html as _html
import re
import unicodedata
from typing import Iterable

from bs4 import BeautifulSoup


_BOILERPLATE_PATTERNS: Iterable[re.Pattern] = [
    re.compile(r"^\s*read more\s*$", re.I),
    re.compile(r"^\s*continue reading\s*$", re.I),
    re.compile(r"^\s*(leer|seguir leyendo|lea) más\s*$", re.I),
    re.compile(r"^\s*the post .* appeared first on .*", re.I),
]


def normalize_text(text: str) -> str:
    if not text:
        return ""
    text = _html.unescape(text)
    text = unicodedata.normalize("NFKC", text)
    text = text.replace("\x00", "").replace("\r", " ").replace("\n", " ")
    text = " ".join(text.split())
    return text.strip()


def clean_html(html: str) -> str:
    if not html:
        return ""
    if "<" not in html:
        return normalize_text(html)
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    for el in list(soup.find_all(string=True)):
        txt = normalize_text(str(el))
        if any(p.search(txt) for p in _BOILERPLATE_PATTERNS):
            el.extract()
    text = soup.get_text(" ")
    return normalize_text(text)


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` characters, appending ``...`` when cut."""
    if max_chars < 0:
        raise ValueError("max_chars must be non-negative")
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."
