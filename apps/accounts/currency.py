"""
Currency formatting helpers.

Amounts are shown with the symbol of the user's preferred currency. USD
uses Western digit grouping (1,234,567.00); INR and NPR use the Indian
lakh/crore grouping (12,34,567.00). Compact mode abbreviates large values
with K/M/B/T suffixes, the same for every currency.

Activity log entries store amounts as ``CURRENCY[<amount>]`` tokens so
they can be rendered in whichever currency the reader prefers.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings


CURRENCY_SYMBOLS = {
    'USD': '$',
    'INR': '₹',
    'NPR': 'रू',
}

INDIAN_GROUPING = {'INR', 'NPR'}

COMPACT_SUFFIXES = [
    (Decimal('1000'), 'K'),
    (Decimal('1000000'), 'M'),
    (Decimal('1000000000'), 'B'),
    (Decimal('1000000000000'), 'T'),
]

CURRENCY_TOKEN = re.compile(r'CURRENCY\[(-?\d+(?:\.\d+)?)\]')


def _to_decimal(value):
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        return Decimal('0')
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal('0')


def _round(value, digits):
    return value.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def _group_indian(integer):
    if len(integer) <= 3:
        return integer
    head, tail = integer[:-3], integer[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups + [tail])


def _format_number(value, min_digits, max_digits, indian=False):
    integer, _, fraction = f'{_round(value, max_digits):f}'.partition('.')
    fraction = fraction.rstrip('0').ljust(min_digits, '0')
    grouped = _group_indian(integer) if indian else f'{int(integer):,}'
    return f'{grouped}.{fraction}' if fraction else grouped


def get_currency_symbol(currency):
    return CURRENCY_SYMBOLS.get(currency, CURRENCY_SYMBOLS['USD'])


def format_currency(
    value,
    currency=None,
    *,
    compact=False,
    minimum_fraction_digits=None,
    maximum_fraction_digits=None,
):
    """
    Format a monetary amount for display.

    Args:
        value: Amount (Decimal, int, float or numeric string). Anything
            non-numeric is treated as zero.
        currency: 'USD', 'NPR' or 'INR'. Defaults to settings.DEFAULT_CURRENCY.
        compact: Abbreviate with K/M/B/T suffixes.
        minimum_fraction_digits: Fraction digits always shown.
        maximum_fraction_digits: Fraction digits shown at most.

    Returns:
        Formatted string, e.g. '$1,234.50', '₹12,34,567.00', '$150.0K'.
    """
    currency = currency or settings.DEFAULT_CURRENCY
    symbol = get_currency_symbol(currency)
    amount = _to_decimal(value)
    magnitude = abs(amount)

    if compact:
        max_digits = 1 if maximum_fraction_digits is None else maximum_fraction_digits
        min_digits = (
            min(1, max_digits) if minimum_fraction_digits is None
            else minimum_fraction_digits
        )

        # Step up while the rounded value would still show 1000 or more,
        # so 999,960 reads 1.0M rather than 1000.0K
        scaled, suffix = magnitude, ''
        for threshold, label in COMPACT_SUFFIXES:
            if _round(scaled, max_digits) < 1000:
                break
            scaled, suffix = magnitude / threshold, label

        number = f'{_format_number(scaled, min_digits, max_digits)}{suffix}'
        negative = amount < 0 and _round(scaled, max_digits) != 0
    else:
        max_digits = 2 if maximum_fraction_digits is None else maximum_fraction_digits
        min_digits = (
            min(2, max_digits) if minimum_fraction_digits is None
            else minimum_fraction_digits
        )
        number = _format_number(
            magnitude,
            min_digits,
            max_digits,
            indian=currency in INDIAN_GROUPING,
        )
        negative = amount < 0 and _round(magnitude, max_digits) != 0

    sign = '-' if negative else ''
    return f'{sign}{symbol}{number}'


def currency_token(amount):
    """Embed an amount in stored text for later rendering."""
    return f'CURRENCY[{amount}]'


def render_currency_tokens(text, currency=None):
    """Replace every CURRENCY[<amount>] token with a formatted amount."""
    return CURRENCY_TOKEN.sub(
        lambda match: format_currency(match.group(1), currency),
        text or '',
    )
