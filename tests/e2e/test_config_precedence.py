"""End-to-end tests verifying configuration precedence layers."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Mapping, cast

import pytest

from ethicalcrawler.config_manager import Config, load_config

CONFIG_TOML = textwrap.dedent(
    """
    [app]
    environment = "staging"

    [query]
    phrase = "UdeA"

    [gdelt]
    max_records = 100
    """
).strip()

ENV_FILE = textwrap.dedent(
    """
    ETHICALCRAWLER__APP__ENVIRONMENT=production
    ETHICALCRAWLER__QUERY__PHRASE="Universidad de Antioquia"
    ETHICALCRAWLER__GDELT__MAX_RECORDS=150
    """
).strip()


def _load(
    config_path: Path,
    *,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Helper to load configuration within the temporary test workspace."""

    return load_config(path=config_path, environ=environ or {})


@pytest.mark.parametrize(
    (
        "with_config",
        "with_env_file",
        "process_env",
        "expected_environment",
        "expected_phrase",
        "expected_records",
    ),
    (
        (False, False, {}, "development", '"Universidad de Antioquia" OR UdeA', 250),
        (True, False, {}, "staging", "UdeA", 100),
        (True, True, {}, "production", "Universidad de Antioquia", 150),
        (
            True,
            True,
            {"ETHICALCRAWLER__APP__ENVIRONMENT": "test"},
            "test",
            "Universidad de Antioquia",
            150,
        ),
    ),
)
def test_config_precedence_matrix(
    tmp_path: Path,
    with_config: bool,
    with_env_file: bool,
    process_env: Mapping[str, str],
    expected_environment: str,
    expected_phrase: str,
    expected_records: int,
) -> None:
    """Validate precedence order defaults → config → .env → process env."""

    config_path = tmp_path / "config.toml"
    env_path = tmp_path / ".env"

    if with_config:
        config_path.write_text(CONFIG_TOML, encoding="utf-8")
    if with_env_file:
        env_path.write_text(ENV_FILE, encoding="utf-8")
    else:
        env_path.touch()

    config = _load(config_path, environ=process_env)

    assert config.app.environment == expected_environment
    assert config.query.phrase == expected_phrase
    assert config.gdelt.max_records == expected_records


def test_config_precedence_metadata_tracks_layers(tmp_path: Path) -> None:
    """The metadata should expose the precedence order for observability."""

    config_path = tmp_path / "config.toml"
    config_path.write_text(CONFIG_TOML, encoding="utf-8")
    env_path = tmp_path / ".env"
    env_path.write_text(ENV_FILE, encoding="utf-8")

    config = load_config(
        path=config_path,
        environ={"ETHICALCRAWLER__APP__ENVIRONMENT": "test"},
    )

    metadata = cast(Any, config)._metadata
    assert metadata.load_order == ("defaults", "file", "env-file", "env")
    assert metadata.provenance["app.environment"].layer == "env"
    assert metadata.provenance["query.phrase"].layer == "env-file"
    assert metadata.provenance["gdelt.max_records"].layer == "env-file"
    assert metadata.provenance["gdelt.timeout_seconds"].layer == "defaults"
