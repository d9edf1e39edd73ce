from datetime import date
from decimal import Decimal

import pytest

from recibos_api.services import money
from recibos_api.services.money import amount_in_words, format_brl, format_long_date, to_decimal


@pytest.mark.parametrize("value,expected", [
    (Decimal("1234.5"), "R$ 1.234,50"),
    (0, "R$ 0,00"),
    ("1200,5", "R$ 1.200,50"),
    (1234567.891, "R$ 1.234.567,89"),
    (Decimal("999.999"), "R$ 1.000,00"),
])
def test_format_brl(value, expected):
    assert format_brl(value) == expected


def test_to_decimal_rejects_garbage():
    with pytest.raises(ValueError):
        to_decimal("doze reais")


def test_amount_in_words_is_upper_case_portuguese():
    words = amount_in_words(Decimal("1200.00"))
    assert "REAIS" in words
    assert words == words.upper()


def test_amount_in_words_falls_back_to_empty(monkeypatch, caplog):
    def boom(*a, **kw):
        raise NotImplementedError("no pt_BR")

    monkeypatch.setattr(money, "num2words", boom)
    with caplog.at_level("WARNING", logger="recibos_api.services.money"):
        assert amount_in_words(1500, owner="João da Silva") == ""
    assert "João da Silva" in caplog.text


def test_format_long_date():
    assert format_long_date(date(2025, 9, 5)) == "05 de setembro de 2025"
    assert format_long_date(date(2024, 3, 31)) == "31 de março de 2024"
