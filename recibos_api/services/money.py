from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation

from num2words import num2words

from .receipt_common import MONTH_NAMES

log = logging.getLogger(__name__)


def to_decimal(value) -> Decimal:
    """Accepts Decimal/int/float or text like '1200.50' / '1200,50'."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"not a decimal amount: {value!r}")


def format_brl(value) -> str:
    """1234.5 -> 'R$ 1.234,50'"""
    amount = to_decimal(value).quantize(Decimal("0.01"))
    sign = "-" if amount < 0 else ""
    # en-US grouping first, then swap separators to pt-BR
    us = f"{abs(amount):,.2f}"
    br = us.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {br}"


def amount_in_words(value, owner: str | None = None) -> str:
    """
    Spell the amount out in Brazilian Portuguese, upper-cased
    ("MIL E DUZENTOS REAIS"). Best effort: returns "" if the
    conversion fails so a receipt can still be produced.
    """
    try:
        amount = to_decimal(value).quantize(Decimal("0.01"))
        return num2words(amount, lang="pt_BR", to="currency").upper()
    except Exception as e:
        log.warning("amount-in-words conversion failed for %r (%s): %s", value, owner or "?", e)
        return ""


def format_long_date(day: date) -> str:
    """date(2025, 9, 5) -> '05 de setembro de 2025'"""
    return f"{day.day:02d} de {MONTH_NAMES[day.month]} de {day.year}"
