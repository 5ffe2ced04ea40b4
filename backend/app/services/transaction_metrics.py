"""
Derived metrics over normalized transactions.

Used when the gateway omits aggregate fields and when rendering amounts.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional, Union

from babel import Locale
from babel.numbers import (
    format_currency,
    format_decimal,
    get_currency_precision,
    get_currency_symbol,
    validate_currency,
)

from ..models.transaction import NormalizedTransaction

Number = Union[int, float]

# CLDR placeholder symbol for currencies without a displayable sign (e.g. XXX)
_GENERIC_CURRENCY_SIGN = "¤"

MAX_FRACTION_DIGITS = 2


def sum_amounts(transactions: Iterable[NormalizedTransaction]) -> Optional[Number]:
    """
    Sum transaction amounts (minor units).

    A sum of zero is reported as ``None``: zero volume is treated the same
    as missing volume data.
    """
    total = sum((txn.amount or 0) for txn in transactions)
    return total if total > 0 else None


def infer_currency(transactions: Iterable[NormalizedTransaction]) -> Optional[str]:
    """Currency of the first transaction that carries one."""
    for txn in transactions:
        if txn.currency:
            return txn.currency
    return None


def format_currency_amount(
    value: Number,
    currency: Optional[str] = None,
    locale: str = "en_US",
) -> str:
    """
    Format an amount already converted to major units.

    Uses locale-aware currency formatting when a currency code is given and
    decimal formatting otherwise. Never raises: an unknown code or locale
    falls back to ``"<CODE> <number>"``.
    """
    try:
        if not math.isfinite(value):
            raise ValueError(f"Cannot format non-finite amount {value}")
        if currency:
            code = currency.strip().upper()
            validate_currency(code)
            if get_currency_symbol(code, locale=locale) == _GENERIC_CURRENCY_SIGN:
                raise ValueError(f"No display symbol for currency {code}")
            return format_currency(
                value,
                code,
                format=_currency_pattern(code, locale),
                locale=locale,
                currency_digits=False,
            )

        return format_decimal(value, format="#,##0.##", locale=locale)
    except Exception:
        plain = _plain_number(value)
        return f"{currency} {plain}" if currency else plain


def _currency_pattern(code: str, locale: str) -> str:
    """Locale currency pattern with at most two fraction digits."""
    pattern = Locale.parse(locale).currency_formats["standard"].pattern
    min_digits = min(get_currency_precision(code), MAX_FRACTION_DIGITS)
    fraction = "0" * min_digits + "#" * (MAX_FRACTION_DIGITS - min_digits)
    return re.sub(r"0\.0+", f"0.{fraction}", pattern)


def _plain_number(value: Number) -> str:
    try:
        text = f"{value:,.3f}"
    except (TypeError, ValueError):
        return str(value)
    return text.rstrip("0").rstrip(".") if "." in text else text
