"""Centralized locale service for currency and date formatting.

Single source of truth for all locale-related operations.
Uses babel library.

Configuration:
    LOCALE env var (default: es_CO) - determines currency, number/date formatting

Amounts are whole units of the local currency (no fractional cents), so
currency output never carries fraction digits.

Example:
    >>> from lotdues.services.locale_service import format_amount
    >>> format_amount(1500000)
    '$1.500.000'
"""

import logging
import os
from datetime import date

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import (
    format_currency as babel_format_currency,
)
from babel.numbers import (
    format_decimal as babel_format_decimal,
)
from babel.numbers import (
    get_territory_currencies,
)

logger = logging.getLogger(__name__)

# Default locale if LOCALE env var is invalid or missing
DEFAULT_LOCALE = "es_CO"
DEFAULT_CURRENCY = "COP"

# Whole-unit pattern: currency sign, grouped integer part
AMOUNT_PATTERN = "¤#,##0"


def _get_locale() -> str:
    """Get locale from environment with validation and fallback.

    Returns:
        Valid locale string (e.g., 'es_CO')
    """
    locale_str = os.getenv("LOCALE", DEFAULT_LOCALE)
    try:
        Locale.parse(locale_str)
        return locale_str
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(f"Invalid LOCALE '{locale_str}': {e}. Falling back to '{DEFAULT_LOCALE}'")
        return DEFAULT_LOCALE


def _get_currency_from_locale(locale_str: str) -> str:
    """Derive currency code from locale territory.

    Args:
        locale_str: Locale string (e.g., 'es_CO')

    Returns:
        Currency code (e.g., 'COP')
    """
    try:
        locale = Locale.parse(locale_str)
        territory = locale.territory
        if territory:
            currencies = get_territory_currencies(territory)
            if currencies:
                return currencies[0]
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(f"Could not derive currency from locale '{locale_str}': {e}")

    return DEFAULT_CURRENCY


# Module-level constants (computed once at import)
LOCALE = _get_locale()
CURRENCY = _get_currency_from_locale(LOCALE)


def get_currency_code() -> str:
    """Get currency code derived from locale.

    Returns:
        ISO 4217 currency code (e.g., 'COP')
    """
    return CURRENCY


def format_amount(amount: int, include_symbol: bool = True) -> str:
    """Format monetary amount according to locale, without fraction digits.

    Args:
        amount: Amount in whole currency units
        include_symbol: Whether to include currency symbol (default True)

    Returns:
        Formatted currency string (e.g., '$1.500.000')
    """
    if include_symbol:
        return babel_format_currency(
            amount,
            CURRENCY,
            format=AMOUNT_PATTERN,
            locale=LOCALE,
            currency_digits=False,
        )
    return babel_format_decimal(amount, format="#,##0", locale=LOCALE)


def format_local_date(value: date, format: str = "short") -> str:
    """Format a date according to locale.

    Args:
        value: Date to format
        format: One of 'full', 'long', 'medium', 'short' or custom pattern

    Returns:
        Formatted date string (e.g., '5/01/24' for es_CO short)
    """
    return babel_format_date(value, format=format, locale=LOCALE)


__all__ = [
    "LOCALE",
    "CURRENCY",
    "get_currency_code",
    "format_amount",
    "format_local_date",
]
