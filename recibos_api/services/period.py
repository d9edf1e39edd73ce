from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date

from .receipt_common import sanitize_token, strip_accents

MONTHS_BY_NAME = {
    "janeiro": 1, "fevereiro": 2, "marco": 3, "abril": 4, "maio": 5, "junho": 6,
    "julho": 7, "agosto": 8, "setembro": 9, "outubro": 10, "novembro": 11, "dezembro": 12,
}
MONTHS_BY_ABBR = {
    "jan": 1, "fev": 2, "mar": 3, "abr": 4, "mai": 5, "jun": 6,
    "jul": 7, "ago": 8, "set": 9, "out": 10, "nov": 11, "dez": 12,
}

_SEPARATORS = re.compile(r"[/\-\s]+")
_MONTH_DIGITS = re.compile(r"[0-9]{1,2}")
_YEAR4 = re.compile(r"[0-9]{4}")
_YEAR2 = re.compile(r"[0-9]{2}")


@dataclass(frozen=True)
class Period:
    month: int | None
    year: int | None
    display: str
    token: str

    @property
    def resolved(self) -> bool:
        return self.month is not None and self.year is not None

    @property
    def start(self) -> date | None:
        if not self.resolved:
            return None
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date | None:
        if not self.resolved:
            return None
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])


def _month_from(candidate: str) -> int | None:
    if _MONTH_DIGITS.fullmatch(candidate):
        return int(candidate)
    name = strip_accents(candidate).lower()
    if name in MONTHS_BY_NAME:
        return MONTHS_BY_NAME[name]
    return MONTHS_BY_ABBR.get(name[:3])


def _year_from(candidate: str) -> int | None:
    if _YEAR4.fullmatch(candidate):
        return int(candidate)
    if _YEAR2.fullmatch(candidate):
        return 2000 + int(candidate)
    return None


def interpret_period(raw) -> Period:
    """
    Parse a free-form pay period ("setembro/2025", "09/2025", "set-25", ...).

    When month and year resolve, ``display`` reads "09/2025 (01/09 a 30/09)"
    and ``token`` is "09-2025". Otherwise the trimmed input is kept as the
    display text and the token is a sanitized copy of it. Never raises.
    """
    if not raw or not isinstance(raw, str):
        return Period(month=None, year=None, display=raw, token=sanitize_token(raw))

    text = raw.strip()
    parts = [p for p in _SEPARATORS.split(text) if p]

    month = year = None
    if len(parts) >= 2:
        month = _month_from(parts[0])
        year = _year_from(parts[1])

    # year 0000 is not a calendar year
    if month is not None and 1 <= month <= 12 and year:
        last_day = calendar.monthrange(year, month)[1]
        mm = f"{month:02d}"
        display = f"{mm}/{year} (01/{mm} a {last_day:02d}/{mm})"
        return Period(month=month, year=year, display=display, token=f"{mm}-{year}")

    return Period(month=None, year=None, display=text, token=sanitize_token(text))
