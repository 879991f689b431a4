"""Tests for the chart palette and display formatting."""

from decimal import Decimal

from ledger.reports import (
    CATEGORY_COLORS,
    TYPE_COLORS,
    color_for,
    fallback_color,
    format_currency,
    format_share,
)
from ledger.models import CHART_OF_ACCOUNTS


class TestPalette:
    """Tests for fixed and fallback colors."""

    def test_every_category_has_a_color(self):
        for categories in CHART_OF_ACCOUNTS.values():
            for category in categories:
                assert category in CATEGORY_COLORS

    def test_type_colors(self):
        assert TYPE_COLORS == {"Income": "#10B981", "Expense": "#EF4444"}

    def test_known_name(self):
        color = color_for("Custos Diretos")
        assert color.color == CATEGORY_COLORS["Custos Diretos"]
        assert not color.is_fallback

    def test_fallback_is_deterministic(self):
        assert fallback_color("Brindes") == fallback_color("Brindes")
        assert fallback_color("Brindes") != fallback_color("Brinde")

    def test_fallback_shape(self):
        color = color_for("Brindes")
        assert color.is_fallback
        assert color.color.startswith("#")
        assert len(color.color) == 7


class TestFormatting:
    """Tests for pt-BR currency and percentage rendering."""

    def test_thousands_and_decimals(self):
        assert format_currency(Decimal("1234.5"), symbol="R$") == "R$ 1.234,50"

    def test_millions(self):
        assert format_currency(Decimal("1234567.891"), symbol="R$") == "R$ 1.234.567,89"

    def test_negative(self):
        assert format_currency(-700, symbol="R$") == "-R$ 700,00"

    def test_rounds_half_up(self):
        assert format_currency(Decimal("0.125"), symbol="R$") == "R$ 0,13"

    def test_symbol_from_settings(self, monkeypatch):
        monkeypatch.setenv("CURRENCY_SYMBOL", "BRL")
        assert format_currency(Decimal("5")) == "BRL 5,00"

    def test_share(self):
        assert format_share(0.25) == "25%"
        assert format_share(5000 / 5700, decimals=1) == "87.7%"
