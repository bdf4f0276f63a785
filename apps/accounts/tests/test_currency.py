from decimal import Decimal

import pytest
from apps.accounts.currency import (
    currency_token,
    format_currency,
    get_currency_symbol,
    render_currency_tokens,
)


class TestFormatCurrency:

    @pytest.mark.parametrize('value, currency, expected', [
        (1234.5, 'USD', '$1,234.50'),
        (1234567, 'USD', '$1,234,567.00'),
        (1234567, 'INR', '₹12,34,567.00'),
        (12345678.9, 'NPR', 'रू1,23,45,678.90'),
        (999, 'INR', '₹999.00'),
        (0, 'USD', '$0.00'),
    ])
    def test_grouping(self, value, currency, expected):
        assert format_currency(value, currency) == expected

    def test_decimal_input(self):
        assert format_currency(Decimal('150000.00'), 'USD') == '$150,000.00'

    def test_negative(self):
        assert format_currency(-5, 'USD') == '-$5.00'

    def test_non_numeric_is_zero(self):
        assert format_currency('abc', 'USD') == '$0.00'
        assert format_currency(None, 'USD') == '$0.00'

    def test_default_currency_from_settings(self, settings):
        settings.DEFAULT_CURRENCY = 'INR'
        assert format_currency(10) == '₹10.00'

    def test_unknown_currency_uses_dollar(self):
        assert get_currency_symbol('EUR') == '$'

    @pytest.mark.parametrize('value, expected', [
        (950, '$950.0'),
        (150000, '$150.0K'),
        (2500000, '$2.5M'),
        (999960, '$1.0M'),
        (3200000000, '$3.2B'),
        (1500000000000, '$1.5T'),
    ])
    def test_compact(self, value, expected):
        assert format_currency(value, 'USD', compact=True) == expected

    def test_compact_ignores_indian_grouping(self):
        assert format_currency(2500000, 'NPR', compact=True) == 'रू2.5M'

    def test_fraction_digit_overrides(self):
        assert format_currency(1234.5, 'USD', maximum_fraction_digits=0) == '$1,235'
        assert format_currency(
            150000, 'USD', compact=True, minimum_fraction_digits=0
        ) == '$150K'


class TestCurrencyTokens:

    def test_render_in_reader_currency(self):
        text = f'Logged an expense of {currency_token(Decimal("8000.00"))} for helmets.'

        assert render_currency_tokens(text, 'USD') == 'Logged an expense of $8,000.00 for helmets.'
        assert render_currency_tokens(text, 'INR') == 'Logged an expense of ₹8,000.00 for helmets.'

    def test_text_without_tokens_unchanged(self):
        assert render_currency_tokens('Uploaded drawing.', 'USD') == 'Uploaded drawing.'
