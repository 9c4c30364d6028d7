from __future__ import annotations

# Currency metadata provider: maps a currency code to its minor-unit exponent and base.
# The table is loaded once per process and exposed as a read-only mapping.

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import IO, Mapping

import pandas as pd

from monetary.config import load_settings

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("code", "exponent", "base")
BUNDLED_TABLE = "iso4217.csv"

# Upper bound for $exponent, so formatting a safe amount stays exact
MAX_EXPONENT = 18


class CurrencyTableError(ValueError):
    """Raised when the currency metadata table cannot be loaded or is invalid."""


@dataclass(frozen=True)
class CurrencyMetadata:
    """One row of the currency metadata table.

    Attributes:
        code (str): Currency code exactly as stored in the table (e.g. "EUR").
        exponent (int): Number of minor-unit decimal digits (e.g. 2 for cents).
        base (int): Radix used to convert between major and minor units (almost always 10).
    """

    code: str
    exponent: int
    base: int


def read_currency_table(source: str | Path | IO[str]) -> Mapping[str, CurrencyMetadata]:
    """Read and validate a currency metadata table from CSV.

    Args:
        source: Path to the CSV file or an open text stream. Required columns are
            `code`, `exponent` and `base`; other columns are ignored.

    Returns:
        Mapping[str, CurrencyMetadata]: Read-only mapping keyed by currency code.

    Raises:
        CurrencyTableError: If the file is missing, or the table violates any rule
            (missing columns, empty or duplicated codes, non-integer or out-of-range
            exponent/base).
    """
    try:
        # NA detection is disabled so that codes like "NAD" are kept literally
        df = pd.read_csv(source, dtype={"code": str}, keep_default_na=False)
    except FileNotFoundError as e:
        raise CurrencyTableError(f"Currency table file was not found: {source}") from e
    except pd.errors.EmptyDataError as e:
        raise CurrencyTableError(f"Currency table is empty: {source}") from e

    # Check: required columns present
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        missing_cols = ", ".join(missing)
        raise CurrencyTableError(f"Currency table is missing required columns: {missing_cols}. Expected columns: {', '.join(REQUIRED_COLUMNS)}")

    # Check: codes are non-empty and unique
    empty_codes = df["code"].str.len() == 0
    if empty_codes.any():
        rows = [int(i) + 2 for i in df.index[empty_codes]]
        raise CurrencyTableError(f"Currency table contains empty codes on lines: {rows}")

    duplicated = df["code"][df["code"].duplicated()]
    if not duplicated.empty:
        raise CurrencyTableError(f"Currency table contains duplicated codes: {sorted(set(duplicated))}")

    # Check: exponent and base are integer columns within range
    for col in ("exponent", "base"):
        if not pd.api.types.is_integer_dtype(df[col]):
            raise CurrencyTableError(f"Currency table column '{col}' must contain integers only")

    negative_exponent = df["code"][df["exponent"] < 0]
    if not negative_exponent.empty:
        raise CurrencyTableError(f"Currency table $exponent must be >= 0, but it is negative for: {list(negative_exponent)}")

    too_large_exponent = df["code"][df["exponent"] > MAX_EXPONENT]
    if not too_large_exponent.empty:
        raise CurrencyTableError(f"Currency table $exponent must be <= {MAX_EXPONENT}, but it is larger for: {list(too_large_exponent)}")

    invalid_base = df["code"][df["base"] < 1]
    if not invalid_base.empty:
        raise CurrencyTableError(f"Currency table $base must be >= 1, but it is not for: {list(invalid_base)}")

    table = {
        row.code: CurrencyMetadata(code=row.code, exponent=int(row.exponent), base=int(row.base))
        for row in df[list(REQUIRED_COLUMNS)].itertuples(index=False)
    }
    logger.debug(f"Loaded {len(table)} currencies from {getattr(source, 'name', source)}")

    return MappingProxyType(table)


@lru_cache(maxsize=1)
def get_currency_table() -> Mapping[str, CurrencyMetadata]:
    """Return the process-wide currency metadata table.

    The table configured via `MONETARY_CURRENCY_TABLE` is used when set, otherwise
    the bundled ISO-4217 table. Call `get_currency_table.cache_clear()` to reload.

    Returns:
        Mapping[str, CurrencyMetadata]: Read-only mapping keyed by currency code.
    """
    settings = load_settings()

    if settings.currency_table_path is not None:
        logger.info(f"Using currency table from {settings.currency_table_path}")
        return read_currency_table(settings.currency_table_path)

    bundled = resources.files("monetary") / "data" / BUNDLED_TABLE
    with bundled.open("r", encoding="utf-8") as f:
        return read_currency_table(f)
