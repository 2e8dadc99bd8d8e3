from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from ethicalcrawler.config_manager import ConfigError, load_config, main
from config import settings
from config.settings import build_logging_config
from ethicalcrawler.config_schema import DEFAULT_CONFIG, iter_field_docs


def _flatten(mapping: dict[str, object], prefix: str = "") -> set[str]:
    keys: set[str] = set()
    for name, value in mapping.items():
        path = f"{prefix}.{name}" if prefix else name
        if isinstance(value, dict):
            keys.add(path)
            keys.update(_flatten(value, path))
        else:
            keys.add(path)
    return keys


def test_precedence_env_overrides(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[collection]\nrequest_timeout_seconds = 15\n", encoding="utf-8")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "ETHICALCRAWLER__COLLECTION__REQUEST_TIMEOUT_SECONDS=20\n", encoding="utf-8"
    )
    environ = {"ETHICALCRAWLER__COLLECTION__REQUEST_TIMEOUT_SECONDS": "25"}
    config = load_config(config_file, environ=environ)
    assert config.collection.request_timeout_seconds == 25
    provenance = config._metadata.provenance["collection.request_timeout_seconds"]
    assert provenance.layer == "env"
    assert provenance.env_var == "ETHICALCRAWLER__COLLECTION__REQUEST_TIMEOUT_SECONDS"


def test_source_sections_load_from_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        "[query]\n"
        "phrase = \"UdeA\"\n"
        "[guardian]\n"
        "from_date = 2022-01-01\n"
        "to_date = 2022-06-30\n"
        "[rss]\n"
        "feeds = [\"https://solo.example/rss\"]\n",
        encoding="utf-8",
    )
    (tmp_path / ".env").touch()
    config = load_config(config_file, environ={})
    assert config.query.phrase == "UdeA"
    assert config.guardian.from_date == date(2022, 1, 1)
    assert config.guardian.to_date == date(2022, 6, 30)
    assert config.rss.feeds == ["https://solo.example/rss"]


def test_numeric_looking_credentials_stay_strings(tmp_path: Path) -> None:
    (tmp_path / ".env").touch()
    config = load_config(
        tmp_path / "config.toml",
        environ={"ETHICALCRAWLER__NEWSAPI__API_KEY": "0123456789"},
    )
    assert config.newsapi.api_key == "0123456789"


def test_text_fields_keep_env_values_verbatim(tmp_path: Path) -> None:
    (tmp_path / ".env").touch()
    config = load_config(
        tmp_path / "config.toml",
        environ={
            "ETHICALCRAWLER__QUERY__PHRASE": "2024",
            "ETHICALCRAWLER__X__QUERY_SUFFIX": "true",
            "ETHICALCRAWLER__GDELT__MAX_RECORDS": "100",
        },
    )
    assert config.query.phrase == "2024"
    assert config.x.query_suffix == "true"
    assert config.gdelt.max_records == 100


def test_logging_config_carries_app_debug(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        "[app]\ndebug = true\n\n[logging]\nlevel = \"WARNING\"\n", encoding="utf-8"
    )
    (tmp_path / ".env").touch()
    logging_config = build_logging_config(load_config(config_file, environ={}))
    assert logging_config["debug"] is True
    assert logging_config["level"] == "WARNING"


def test_get_config_loads_on_first_use_only(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def fake_load_config():
        calls.append(1)
        return DEFAULT_CONFIG

    monkeypatch.setattr(settings, "_CONFIG", None)
    monkeypatch.setattr(settings, "load_config", fake_load_config)

    assert settings.get_config() is settings.get_config()
    assert calls == [1]


def test_blank_credentials_are_unset(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[x]\nbearer_token = \"\"\n", encoding="utf-8")
    (tmp_path / ".env").touch()
    config = load_config(config_file, environ={})
    assert config.x.bearer_token is None


def test_validation_errors_report_source(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[collection]\nrequest_timeout_seconds = 'abc'\n", encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        load_config(config_file)
    assert "collection.request_timeout_seconds" in str(excinfo.value)
    assert "file" in str(excinfo.value)


def test_inverted_guardian_range_is_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        "[guardian]\nfrom_date = 2024-01-01\nto_date = 2023-01-01\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError) as excinfo:
        load_config(config_file, environ={})
    assert "from_date" in str(excinfo.value)


def test_x_lookback_cannot_exceed_recent_search(tmp_path: Path) -> None:
    (tmp_path / ".env").touch()
    with pytest.raises(ConfigError) as excinfo:
        load_config(
            tmp_path / "config.toml",
            environ={"ETHICALCRAWLER__X__LOOKBACK_DAYS": "8"},
        )
    assert "x.lookback_days" in str(excinfo.value)
    assert "ETHICALCRAWLER__X__LOOKBACK_DAYS" in str(excinfo.value)


def test_secret_values_are_not_echoed_in_errors(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[guardian]\napi_key = 12345\n", encoding="utf-8")
    (tmp_path / ".env").touch()
    with pytest.raises(ConfigError) as excinfo:
        load_config(config_file, environ={})
    assert "guardian.api_key" in str(excinfo.value)
    assert "12345" not in str(excinfo.value)


def test_explain_masks_secrets(tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[newsapi]\napi_key = \"super-secret\"\n", encoding="utf-8")
    (tmp_path / ".env").touch()
    monkeypatch.delenv("ETHICALCRAWLER__NEWSAPI__API_KEY", raising=False)

    exit_code = main(["--config", str(config_file), "--explain", "newsapi.api_key"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "***masked***" in output
    assert "super-secret" not in output


def test_dump_defaults_is_valid_toml(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--dump-defaults"]) == 0
    output = capsys.readouterr().out
    assert "[newsapi]" in output
    assert "[rss]" in output
    assert 'user_agent = "EthicalCrawler/1.0 (StudentResearch)"' in output


def test_schema_keys_cover_defaults() -> None:
    schema_keys = {
        entry["name"]
        for entry in iter_field_docs(DEFAULT_CONFIG)
        if not entry.get("is_nested")
    }
    default_keys = _flatten(DEFAULT_CONFIG.model_dump(mode="python"))
    assert schema_keys.issubset(default_keys)


@pytest.mark.parametrize(
    "path",
    [
        "collection.request_timeout_seconds",
        "collection.user_agent",
        "query.phrase",
        "newsapi.api_key",
        "guardian.from_date",
        "gdelt.languages",
        "x.query_suffix",
        "rss.feeds",
        "logging.level",
    ],
)
def test_implicit_keys_are_defined(path: str) -> None:
    schema_keys = {
        entry["name"]
        for entry in iter_field_docs(DEFAULT_CONFIG)
        if not entry.get("is_nested")
    }
    assert path in schema_keys
