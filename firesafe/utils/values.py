import json
import math
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

PLACEHOLDER = "-"

_CHECKED_STRINGS = frozenset({"true", "1", "sim"})

# Equivalent spellings of the tri-state answers
_ANSWER_EQUIVALENTS = {
    "não": "nao",
    "n/a": "na",
    "n.a.": "na",
}


def resolve_path(data: Any, key: Optional[str]) -> Any:
    """
    Walk a dotted key ("pumps.0.model") through nested mappings/sequences.

    Sequences are indexed by numeric segments; anything that cannot be
    followed yields None.
    """
    if not key:
        return None
    node = data
    for segment in key.split("."):
        if node is None:
            return None
        if isinstance(node, Mapping):
            node = node.get(segment)
        elif isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
            if not segment.isdigit():
                return None
            index = int(segment)
            if index >= len(node):
                return None
            node = node[index]
        else:
            return None
    return node


def resolve_field_value(field: Any, data: Any) -> Any:
    """Resolve a schema field's value; ``data_key`` falls back to ``id``."""
    key = getattr(field, "data_key", None) or getattr(field, "id", None)
    return resolve_path(data, key)


def normalize_value(value: Any) -> Any:
    """Unwrap ``{"value": ..., "label": ...}`` option objects."""
    if isinstance(value, Mapping) and ("value" in value or "label" in value):
        inner = value.get("value")
        if inner is None:
            return value.get("label")
        return inner
    return value


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple, dict)) and not value:
        return True
    return False


def is_checked(value: Any) -> bool:
    value = normalize_value(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _CHECKED_STRINGS
    return False


def normalize_answer(value: Any) -> str:
    """Lowercase tri-state answer with "não"/"n/a" folded to "nao"/"na"."""
    value = normalize_value(value)
    if value is None:
        return ""
    text = str(value).strip().lower()
    return _ANSWER_EQUIVALENTS.get(text, text)


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or text in ("null", "undefined"):
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in ("%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_date(value: Any, language: str = "pt") -> str:
    """Localized short date; "-" when the value is empty or unparseable."""
    parsed = parse_date(normalize_value(value))
    if parsed is None:
        return PLACEHOLDER
    if language == "en":
        return parsed.strftime("%m/%d/%Y")
    return parsed.strftime("%d/%m/%Y")


def format_number(value: Any, unit: Optional[str] = None, language: str = "pt") -> str:
    """Localized number with up to two decimals; "-" when not numeric."""
    value = normalize_value(value)
    if value is None or isinstance(value, bool):
        return PLACEHOLDER
    if isinstance(value, str):
        value = value.strip()
        # "12,5" typed in a pt-BR form
        if "," in value and "." not in value:
            value = value.replace(",", ".")
    try:
        num = float(value)
    except (TypeError, ValueError):
        return PLACEHOLDER
    if not math.isfinite(num):
        return PLACEHOLDER

    text = f"{num:,.2f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    if language == "pt":
        text = text.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    return f"{text} {unit}" if unit else text


def stringify(value: Any) -> str:
    """
    Defensive text for any value shape.

    Lists join with ", ", option objects unwrap, other mappings fall back to
    JSON, and missing values become the placeholder.
    """
    value = normalize_value(value)
    if is_missing(value):
        return PLACEHOLDER
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        parts = [stringify(v) for v in value]
        return ", ".join(p for p in parts if p != PLACEHOLDER) or PLACEHOLDER
    if isinstance(value, Mapping):
        try:
            return json.dumps(value, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(value)
    return str(value)
