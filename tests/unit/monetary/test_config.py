import os
from pathlib import Path

from monetary.config import ENV_CURRENCY_TABLE, MonetarySettings, load_settings


def test_load_settings_without_override(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(ENV_CURRENCY_TABLE, "   ")

    assert load_settings() == MonetarySettings(currency_table_path=None)


def test_load_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(ENV_CURRENCY_TABLE, "/data/currencies.csv")

    assert load_settings().currency_table_path == Path("/data/currencies.csv")


def test_load_settings_from_dotenv_file(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text(f"{ENV_CURRENCY_TABLE}=/from/dotenv.csv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ENV_CURRENCY_TABLE, raising=False)

    assert load_settings().currency_table_path == Path("/from/dotenv.csv")


def test_load_settings_does_not_modify_environment(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text(f"{ENV_CURRENCY_TABLE}=/from/dotenv.csv\nMONETARY_UNRELATED_SETTING=1\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ENV_CURRENCY_TABLE, raising=False)
    monkeypatch.delenv("MONETARY_UNRELATED_SETTING", raising=False)

    load_settings()

    # The .env file is read, never exported into the process environment
    assert "MONETARY_UNRELATED_SETTING" not in os.environ
    assert ENV_CURRENCY_TABLE not in os.environ


def test_environment_wins_over_dotenv_file(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text(f"{ENV_CURRENCY_TABLE}=/from/dotenv.csv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(ENV_CURRENCY_TABLE, "/from/environment.csv")

    assert load_settings().currency_table_path == Path("/from/environment.csv")
