from .values import (
    PLACEHOLDER, resolve_path, resolve_field_value, normalize_value,
    normalize_answer, is_missing, is_checked, parse_date,
    format_date, format_number, stringify
)
from .placeholders import COMPANY_TOKENS, fill_company_placeholders
from .text import to_latin1, sanitize_text, truncate, humanize_key, report_filename

__all__ = [
    "PLACEHOLDER", "resolve_path", "resolve_field_value", "normalize_value",
    "normalize_answer", "is_missing", "is_checked", "parse_date",
    "format_date", "format_number", "stringify",
    "COMPANY_TOKENS", "fill_company_placeholders",
    "to_latin1", "sanitize_text", "truncate", "humanize_key", "report_filename",
]
