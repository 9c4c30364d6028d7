"""Monetary value types.

This package contains `Currency`, a validated view of a row in the currency
metadata table, and `Money`, an integer amount of minor units in a currency,
with parsing, comparison and formatting.
"""

__version__ = "0.1.0"

from monetary.currency import Currency, InvalidCurrencyError
from monetary.currency_table import CurrencyMetadata, CurrencyTableError
from monetary.money import Money, MoneyError, MoneyParseError, MoneyRepresentation

__all__ = [
    "Currency",
    "CurrencyMetadata",
    "CurrencyTableError",
    "InvalidCurrencyError",
    "Money",
    "MoneyError",
    "MoneyParseError",
    "MoneyRepresentation",
]
