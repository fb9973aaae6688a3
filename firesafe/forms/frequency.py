"""Inspection cadence tags.

One vocabulary serves both the schema path (``Section.required_frequencies``
against ``formData.frequency``) and the legacy path (section inferred from a
flat form key).
"""

from __future__ import annotations

import enum
import unicodedata
from typing import Any, Iterable, Optional

from firesafe.utils.values import normalize_value


class Frequency(str, enum.Enum):
    DAILY = "diaria"
    WEEKLY = "semanal"
    MONTHLY = "mensal"
    QUARTERLY = "trimestral"
    SEMIANNUAL = "semestral"
    ANNUAL = "anual"
    FIVE_YEARS = "5anos"
    TESTS = "testes"


# English section ids used by legacy forms and display labels ("5 Anos")
_ALIASES: dict[str, Frequency] = {
    "daily": Frequency.DAILY,
    "weekly": Frequency.WEEKLY,
    "monthly": Frequency.MONTHLY,
    "quarterly": Frequency.QUARTERLY,
    "semiannual": Frequency.SEMIANNUAL,
    "annual": Frequency.ANNUAL,
    "yearly": Frequency.ANNUAL,
    "fiveyears": Frequency.FIVE_YEARS,
    "5years": Frequency.FIVE_YEARS,
    "5-anos": Frequency.FIVE_YEARS,
    "5_anos": Frequency.FIVE_YEARS,
    "tests": Frequency.TESTS,
    "test": Frequency.TESTS,
}


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.strip().lower().replace(" ", "")


def canonical_frequency(value: Any) -> Optional[str]:
    """
    Map a frequency value to its canonical tag.

    Accepts tags ("mensal"), labels ("Mensal", "5 Anos"), English ids
    ("monthly") and option objects. Unknown values come back folded
    (lowercase, no accents/spaces) so they can still be compared.
    """
    value = normalize_value(value)
    if value is None or value == "":
        return None
    folded = _fold(str(value))
    if not folded:
        return None
    if folded in Frequency._value2member_map_:
        return folded
    alias = _ALIASES.get(folded)
    return alias.value if alias else folded


def section_visible(
    conditional_display: bool,
    required_frequencies: Iterable[str],
    selected: Any,
) -> bool:
    """
    Decide whether a conditionally displayed section applies.

    Non-conditional sections always show. With no frequency selected the
    section shows as well (fail open).
    """
    if not conditional_display:
        return True
    current = canonical_frequency(selected)
    if current is None:
        return True
    required = {canonical_frequency(f) for f in required_frequencies}
    return current in required
