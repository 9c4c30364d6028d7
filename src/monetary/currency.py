from __future__ import annotations

from monetary.currency_table import CurrencyMetadata, get_currency_table

# Only `Currency.parse` holds this token, so a `Currency` always comes from a successful lookup
_LOOKUP_TOKEN = object()


class InvalidCurrencyError(ValueError):
    """Raised when a currency code is not present in the currency table.

    Attributes:
        code: The offending currency code, exactly as it was given.
    """

    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Invalid currency: '{code}'")


class Currency:
    """Immutable currency value with code, exponent and base.

    Instances are created only by `Currency.parse`. Two currencies are equal
    when their codes are equal.

    Attributes:
        code (str): Currency code (e.g. "EUR").
        exponent (int): Number of minor-unit decimal digits (e.g. 2).
        base (int): Radix between major and minor units (usually 10).
    """

    __slots__ = ("_metadata",)

    def __init__(self, metadata: CurrencyMetadata, *, _token: object = None):
        # Raise: direct instantiation is not allowed
        if _token is not _LOOKUP_TOKEN:
            raise TypeError("Cannot create `Currency` directly, use `Currency.parse(code)` instead")

        self._metadata = metadata

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._metadata.code

    @property
    def exponent(self) -> int:
        """Get the number of minor-unit decimal digits."""
        return self._metadata.exponent

    @property
    def base(self) -> int:
        """Get the radix between major and minor units."""
        return self._metadata.base

    @property
    def minor_unit_factor(self) -> int:
        """Get the number of minor units in one major unit ($base ** $exponent)."""
        return self.base**self.exponent

    @classmethod
    def parse(cls, code: str) -> Currency:
        """Look up a currency by its code.

        The lookup is an exact, case-sensitive match; the code is neither trimmed nor upper-cased.

        Args:
            code (str): Currency code to look up (e.g. "EUR").

        Returns:
            Currency: The matching currency.

        Raises:
            InvalidCurrencyError: If $code is not a string or is not in the currency table.
        """
        if not isinstance(code, str):
            raise InvalidCurrencyError(code)

        metadata = get_currency_table().get(code)
        if metadata is None:
            raise InvalidCurrencyError(code)

        return cls(metadata, _token=_LOOKUP_TOKEN)

    @classmethod
    def available_codes(cls) -> list[str]:
        """List all currency codes accepted by `Currency.parse`, sorted."""
        return sorted(get_currency_table())

    def equals(self, other: Currency) -> bool:
        """Check if $other has the same code as this currency."""
        return self.code == other.code

    def to_string(self) -> str:
        return self.code

    def __eq__(self, other) -> bool:
        if not isinstance(other, Currency):
            return False
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.code}', exponent={self.exponent}, base={self.base})"
