"""Tests configuration : environnement, fichier TOML, fabrique de client."""

from __future__ import annotations

import asyncio

import pytest

from legitmark.config import (
    ClientConfig,
    config_from_env,
    create_client,
    create_client_from_env,
    load_config_file,
    validate_environment,
)
from legitmark.errors import ConfigurationError, ErrorCode


def test_validate_environment_missing_key() -> None:
    result = validate_environment({})

    assert result.valid is False
    assert result.errors == ["LEGITMARK_API_KEY is not set"]
    assert result.suggestions


def test_validate_environment_warns_on_unexpected_prefix() -> None:
    result = validate_environment({"LEGITMARK_API_KEY": "sk_live_123"})

    assert result.valid is True
    assert result.errors == []
    assert any("leo_" in s for s in result.suggestions)


def test_validate_environment_ok() -> None:
    result = validate_environment({"LEGITMARK_API_KEY": "leo_abc"})

    assert result.valid is True
    assert result.suggestions == []


def test_config_from_env_reads_all_variables() -> None:
    config = config_from_env(
        {
            "LEGITMARK_API_KEY": " leo_abc ",
            "LEGITMARK_DEBUG": "TRUE",
            "LEGITMARK_BASE_URL": "https://staging.legitmark.test",
            "LEGITMARK_TIMEOUT_S": "12.5",
        }
    )

    assert config == ClientConfig(
        api_key="leo_abc",
        timeout_s=12.5,
        debug=True,
        base_url="https://staging.legitmark.test",
    )


def test_config_from_env_defaults() -> None:
    config = config_from_env({"LEGITMARK_API_KEY": "leo_abc", "LEGITMARK_DEBUG": "1"})

    assert config.timeout_s == 30.0
    assert config.debug is False
    assert config.base_url is None


def test_config_from_env_missing_key_raises() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        config_from_env({"LEGITMARK_DEBUG": "true"})

    assert excinfo.value.code is ErrorCode.CONFIGURATION_ERROR
    assert "LEGITMARK_API_KEY" in str(excinfo.value)


def test_config_from_env_invalid_timeout_raises() -> None:
    with pytest.raises(ConfigurationError, match="Invalid timeout"):
        config_from_env({"LEGITMARK_API_KEY": "leo_abc", "LEGITMARK_TIMEOUT_S": "soon"})


def test_load_config_file_reads_legitmark_table(tmp_path) -> None:
    path = tmp_path / "legitmark.toml"
    path.write_text(
        '[legitmark]\napi_key = "leo_from_file"\ntimeout_s = 45\ndebug = true\n'
        'base_url = "https://staging.legitmark.test"\n',
        encoding="utf-8",
    )

    config = load_config_file(path)

    assert config.api_key == "leo_from_file"
    assert config.timeout_s == 45.0
    assert config.debug is True
    assert config.base_url == "https://staging.legitmark.test"


def test_load_config_file_top_level_keys(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('api_key = "leo_top"\n', encoding="utf-8")

    config = load_config_file(path)

    assert config == ClientConfig(api_key="leo_top")


def test_load_config_file_missing_key_raises(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[legitmark]\ndebug = true\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="api_key is missing"):
        load_config_file(path)


def test_load_config_file_invalid_toml_raises(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[legitmark\napi_key = ", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Cannot read config file"):
        load_config_file(path)


def test_load_config_file_missing_file_raises(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_config_file(tmp_path / "absent.toml")


def test_create_client_applies_config() -> None:
    async def run():
        client = create_client(
            ClientConfig(api_key="leo_abc", timeout_s=10, base_url="https://staging.legitmark.test/")
        )
        await client.aclose()
        return client

    client = asyncio.run(run())

    assert client.api_key == "leo_abc"
    assert client.timeout_s == 10.0
    assert client.base_url == "https://staging.legitmark.test"


def test_create_client_from_env_forwards_options() -> None:
    async def run():
        client = create_client_from_env({"LEGITMARK_API_KEY": "leo_abc"}, retries=3)
        await client.aclose()
        return client

    client = asyncio.run(run())

    assert client.retries == 3
