import re
import unicodedata
from datetime import date
from typing import Any, Optional

from .values import PLACEHOLDER, parse_date

# Typographic characters outside Latin-1 and their core-font stand-ins
_LATIN1_FALLBACKS = {
    "–": "-",
    "—": "-",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "•": "-",
    "…": "...",
    "→": "->",
    "✓": "v",
    "✗": "x",
}


def to_latin1(text: str) -> str:
    """Map text onto Latin-1 for the PDF core fonts, dropping what can't map."""
    for src, dst in _LATIN1_FALLBACKS.items():
        if src in text:
            text = text.replace(src, dst)
    return text.encode("latin-1", errors="ignore").decode("latin-1")


def sanitize_text(text: Any, max_length: int = 500) -> str:
    """
    Clean a free-text value for single-line display.

    HTML-like characters are removed, whitespace collapsed, and the result
    truncated with "..." past ``max_length``. Empty input gives "-".
    """
    if not isinstance(text, str):
        return PLACEHOLDER
    cleaned = re.sub(r"[<>\"'&]", "", text)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if not cleaned:
        return PLACEHOLDER
    return truncate(cleaned, max_length)


def truncate(text: str, max_length: int) -> str:
    if max_length <= 3 or len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def humanize_key(key: str) -> str:
    """Convert a camelCase / snake_case key into readable text."""
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", key)
    s = s.replace("_", " ")
    s = re.sub(r"\s+", " ", s).strip()
    return s[:1].upper() + s[1:]


def _filename_part(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    ascii_only = "".join(c for c in decomposed if not unicodedata.combining(c))
    cleaned = re.sub(r"[^a-zA-Z0-9\s]", "", ascii_only).strip()
    return re.sub(r"\s+", "_", cleaned)


def report_filename(
    form_title: str,
    property_name: Optional[str] = None,
    report_date: Any = None,
    property_fallback: str = "Propriedade",
    today: Optional[date] = None,
) -> str:
    """``Report_<title>_<property>_<yyyy-mm-dd>.pdf``."""
    title = _filename_part(form_title or "") or "Formulario"
    prop = _filename_part(property_name or "") or property_fallback
    day = parse_date(report_date) or today or date.today()
    return f"Report_{title}_{prop}_{day.isoformat()}.pdf"
