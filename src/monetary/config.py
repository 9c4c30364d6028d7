from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

# Path to a CSV file (columns: code, exponent, base) replacing the bundled currency table
ENV_CURRENCY_TABLE = "MONETARY_CURRENCY_TABLE"


@dataclass(frozen=True)
class MonetarySettings:
    """Runtime settings of the `monetary` package.

    Attributes:
        currency_table_path (Path | None): Currency table to use instead of the bundled one.
            None means the bundled ISO-4217 table is used.
    """

    currency_table_path: Path | None = None


def load_settings() -> MonetarySettings:
    """Load settings from the environment, falling back to a `.env` file.

    A variable set in the environment wins over the `.env` file found from the current
    working directory upward. The `.env` file is only read; `os.environ` is never modified.

    Returns:
        MonetarySettings: Settings resolved from the environment.
    """
    raw_path = os.environ.get(ENV_CURRENCY_TABLE)
    if raw_path is None:
        dotenv_path = find_dotenv(usecwd=True)
        dotenv_settings = dotenv_values(dotenv_path) if dotenv_path else {}
        raw_path = dotenv_settings.get(ENV_CURRENCY_TABLE)

    raw_path = (raw_path or "").strip()
    currency_table_path = Path(raw_path).expanduser() if raw_path else None

    return MonetarySettings(currency_table_path=currency_table_path)
