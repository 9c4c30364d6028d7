from __future__ import annotations

import math
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_EVEN
from fractions import Fraction
from typing import TypedDict

from monetary.currency import Currency
from monetary.currency_table import MAX_EXPONENT

# Largest integers exactly representable by an IEEE-754 double
MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -(2**53 - 1)

UNSAFE_AMOUNT_MESSAGE = "Unsafe integer amount!"
DIFFERENT_CURRENCIES_MESSAGE = "Impossible to compare monetary values with different currencies."

# Private context, so formatting does not depend on (or change) the thread's decimal context.
# Holds every integer digit of a safe amount plus MAX_EXPONENT fractional digits.
_DECIMAL_CONTEXT = Context(prec=len(str(MAX_SAFE_INTEGER)) + MAX_EXPONENT + 1, rounding=ROUND_HALF_EVEN)


class MoneyRepresentation(TypedDict):
    amount: int
    currency: str
    precision: int
    raw: str


class MoneyError(ValueError):
    """Raised for an out-of-range amount or a comparison across different currencies."""

    def __init__(self, msg: str = "MoneyError"):
        super().__init__(msg)


class MoneyParseError(ValueError):
    """Raised when the amount part of a money string is not a number.

    Attributes:
        text: The complete input text that failed to parse.
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Impossible to parse money: {text}")


class Money:
    """Represents a monetary amount as an integer number of minor units in a currency.

    The amount is kept in minor units (e.g. cents), so `Money(1034, EUR)` is 10.34 EUR.
    Supported amounts lie between `MIN_SAFE_INTEGER` and `MAX_SAFE_INTEGER` (inclusive).
    Instances are immutable; comparing amounts requires the same currency.
    """

    __slots__ = ("_amount", "_currency")

    def __init__(self, amount: int, currency: Currency):
        """Initialize Money with an amount in minor units and a currency.

        Args:
            amount (int): Amount in minor units of $currency.
            currency (Currency): Currency of the amount.

        Raises:
            TypeError: If $amount is not an int or $currency is not a Currency instance.
            MoneyError: If $amount is outside the safe integer range.
        """
        # Raise: currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")

        # Raise: amount must be an integer number of minor units
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"$amount must be an int (minor units), but provided value is: {amount!r}")

        # Raise: amount must be within the safe integer range
        if amount > MAX_SAFE_INTEGER or amount < MIN_SAFE_INTEGER:
            raise MoneyError(UNSAFE_AMOUNT_MESSAGE)

        self._amount = amount
        self._currency = currency

    @property
    def amount(self) -> int:
        """Get the amount in minor units."""
        return self._amount

    @property
    def currency(self) -> Currency:
        """Get the currency."""
        return self._currency

    # region Comparison

    def has_same_currency(self, other: Money) -> bool:
        """Check if $other is expressed in the same currency as this instance."""
        return self.currency.equals(other.currency)

    def compare_to(self, other: Money) -> int:
        """Compare this instance with $other.

        Args:
            other (Money): Money in the same currency.

        Returns:
            int: Difference of the amounts in minor units. Positive if this amount is greater,
            negative if it is less, zero if both are equal.

        Raises:
            MoneyError: If the currencies differ.
        """
        if not self.has_same_currency(other):
            raise MoneyError(DIFFERENT_CURRENCIES_MESSAGE)

        return self.amount - other.amount

    def is_greater_than(self, other: Money) -> bool:
        return self.compare_to(other) > 0

    def is_less_than(self, other: Money) -> bool:
        return self.compare_to(other) < 0

    def equals(self, other: Money) -> bool:
        """Check if this instance equals $other.

        Unlike `==`, this raises MoneyError when the currencies differ.
        """
        return self.compare_to(other) == 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return False
        if not self.has_same_currency(other):
            return False
        return self.amount == other.amount

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __hash__(self) -> int:
        return hash((self.amount, self.currency.code))

    # endregion

    # region Representation

    def to_json(self) -> MoneyRepresentation:
        """Convert to a JSON-compatible record.

        Example:
            >>> Money(1034, Currency.parse("EUR")).to_json()
            {'amount': 1034, 'currency': 'EUR', 'precision': 2, 'raw': '10.34 EUR'}
        """
        return {
            "amount": self.amount,
            "currency": self.currency.code,
            "precision": self.currency.exponent,
            "raw": self.to_string(),
        }

    def to_string(self) -> str:
        """Return the amount in major units with exactly $exponent decimals, followed by the code.

        Example:
            >>> Money(1034, Currency.parse("EUR")).to_string()
            '10.34 EUR'
        """
        amount_in_decimal = self._convert_amount_to_decimal()
        quantum = Decimal(1).scaleb(-self.currency.exponent)
        amount_with_decimal_places = amount_in_decimal.quantize(quantum, context=_DECIMAL_CONTEXT)

        return f"{amount_with_decimal_places:f} {self.currency.code}"

    def _convert_amount_to_decimal(self) -> Decimal:
        # e.g. 1090 minor units of EUR -> Decimal("10.9")
        return _DECIMAL_CONTEXT.divide(Decimal(self.amount), Decimal(self.currency.minor_unit_factor))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        """Return string like 'Money(1034, EUR)'."""
        return f"{self.__class__.__name__}({self.amount}, {self.currency.code})"

    # endregion

    @classmethod
    def parse(cls, text: str) -> Money:
        """Parse Money from a string like '13.99 EUR'.

        The text is split on its first space. The currency is resolved first, then the
        amount is read as a decimal number, converted to minor units and truncated toward zero.

        Args:
            text (str): Text in the form '<number> <CODE>'.

        Returns:
            Money: Parsed money.

        Raises:
            InvalidCurrencyError: If the currency code is not known.
            MoneyParseError: If the amount is not a number.
            MoneyError: If the amount is outside the safe integer range.
        """
        amount_part, _, currency_part = text.partition(" ")

        currency = Currency.parse(currency_part)

        # Raise: digit-group underscores and surrounding whitespace are not part of the amount format
        if "_" in amount_part or amount_part != amount_part.strip():
            raise MoneyParseError(text)

        try:
            amount_value = Decimal(amount_part)
        except (InvalidOperation, ValueError) as e:
            raise MoneyParseError(text) from e

        # Raise: NaN is not a number (returned instead of raised when the InvalidOperation trap is off)
        if amount_value.is_nan():
            raise MoneyParseError(text)

        # Raise: every minor-unit factor is >= 1, so the major amount already has to fit
        if amount_value.is_infinite() or amount_value.copy_abs() > MAX_SAFE_INTEGER:
            raise MoneyError(UNSAFE_AMOUNT_MESSAGE)

        # |amount| < 10 ** (adjusted + 1) and factor < 10 ** len(str(factor)), so the product truncates to 0
        factor = currency.minor_unit_factor
        if amount_value.is_zero() or amount_value.adjusted() < -len(str(factor)):
            minor_units = 0
        else:
            minor_units = math.trunc(Fraction(amount_value) * factor)

        return cls(minor_units, currency)
