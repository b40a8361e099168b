"""Weekday enum and normalization of free-form capacity labels."""

from __future__ import annotations

import enum
import re


class Weekday(str, enum.Enum):
    """Canonical weekday values, Sunday first as in the source schedules."""

    SUNDAY = "domingo"
    MONDAY = "segunda"
    TUESDAY = "terca"
    WEDNESDAY = "quarta"
    THURSDAY = "quinta"
    FRIDAY = "sexta"
    SATURDAY = "sabado"

    @property
    def short_label(self) -> str:
        return _SHORT_LABELS[self]

    @property
    def is_business_day(self) -> bool:
        return self not in (Weekday.SATURDAY, Weekday.SUNDAY)

    @classmethod
    def from_iso_weekday(cls, value: int) -> Weekday:
        """Map ``date.isoweekday()`` (1=Monday .. 7=Sunday) to the enum."""

        return _ISO_ORDER[value - 1]


_ISO_ORDER: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)

_SHORT_LABELS: dict[Weekday, str] = {
    Weekday.SUNDAY: "Dom",
    Weekday.MONDAY: "Seg",
    Weekday.TUESDAY: "Ter",
    Weekday.WEDNESDAY: "Qua",
    Weekday.THURSDAY: "Qui",
    Weekday.FRIDAY: "Sex",
    Weekday.SATURDAY: "Sab",
}

ACCENT_TABLE = str.maketrans(
    {
        "ç": "c",
        "á": "a",
        "à": "a",
        "ã": "a",
        "â": "a",
        "é": "e",
        "ê": "e",
        "í": "i",
        "ó": "o",
        "ô": "o",
        "õ": "o",
        "ú": "u",
        "ü": "u",
    }
)

# Applied after accent stripping, so "manhã" arrives here as "manha".
SHIFT_SUFFIX_PATTERN = re.compile(r"[\s\-_/]+(manha|tarde)$")

SYNONYMS: dict[str, Weekday] = {
    "domingo": Weekday.SUNDAY,
    "dom": Weekday.SUNDAY,
    "segunda": Weekday.MONDAY,
    "segunda-feira": Weekday.MONDAY,
    "segunda feira": Weekday.MONDAY,
    "seg": Weekday.MONDAY,
    "terca": Weekday.TUESDAY,
    "terca-feira": Weekday.TUESDAY,
    "terca feira": Weekday.TUESDAY,
    "ter": Weekday.TUESDAY,
    "quarta": Weekday.WEDNESDAY,
    "quarta-feira": Weekday.WEDNESDAY,
    "quarta feira": Weekday.WEDNESDAY,
    "qua": Weekday.WEDNESDAY,
    "quinta": Weekday.THURSDAY,
    "quinta-feira": Weekday.THURSDAY,
    "quinta feira": Weekday.THURSDAY,
    "qui": Weekday.THURSDAY,
    "sexta": Weekday.FRIDAY,
    "sexta-feira": Weekday.FRIDAY,
    "sexta feira": Weekday.FRIDAY,
    "sex": Weekday.FRIDAY,
    "sabado": Weekday.SATURDAY,
    "sab": Weekday.SATURDAY,
}


def strip_accents(value: str) -> str:
    return value.translate(ACCENT_TABLE)


def normalize_weekday_label(label: str) -> Weekday | str:
    """Resolve a capacity label such as ``"Segunda-feira-manhã"`` to a ``Weekday``.

    The label is lower-cased, stripped of diacritics using a fixed table and of a
    trailing ``manha``/``tarde`` shift marker, then looked up in ``SYNONYMS``.
    Labels that still do not match are returned as the cleaned string; callers
    treat them as capacity that falls on no calendar day.
    """

    if isinstance(label, Weekday):
        return label

    cleaned = strip_accents(label.strip().lower())
    cleaned = SHIFT_SUFFIX_PATTERN.sub("", cleaned).strip()
    cleaned = re.sub(r"\s+", " ", cleaned)
    return SYNONYMS.get(cleaned, cleaned)
