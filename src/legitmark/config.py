"""Configuration du client : variables d'environnement ou fichier TOML."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from legitmark.client import API_KEY_PREFIX, DEFAULT_TIMEOUT_S, PartnerClient
from legitmark.errors import ConfigurationError

ENV_API_KEY = "LEGITMARK_API_KEY"
ENV_DEBUG = "LEGITMARK_DEBUG"
ENV_BASE_URL = "LEGITMARK_BASE_URL"
ENV_TIMEOUT_S = "LEGITMARK_TIMEOUT_S"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration d'un PartnerClient."""

    api_key: str
    """Clé API partenaire (préfixe leo_)."""
    timeout_s: float = DEFAULT_TIMEOUT_S
    """Timeout par requête (secondes)."""
    debug: bool = False
    """Traces HTTP en DEBUG."""
    base_url: str | None = None
    """URL de l'API (défaut : production)."""


@dataclass(frozen=True)
class EnvironmentValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def validate_environment(environ: Mapping[str, str] | None = None) -> EnvironmentValidation:
    """Vérifie l'environnement avant create_client_from_env() (messages explicites)."""
    env = os.environ if environ is None else environ
    errors: list[str] = []
    suggestions: list[str] = []
    api_key = (env.get(ENV_API_KEY) or "").strip()
    if not api_key:
        errors.append(f"{ENV_API_KEY} is not set")
        suggestions.append("Copy .env.example to .env and add your API key")
        suggestions.append("Get your API key from the Legitmark Partner Dashboard")
    elif not api_key.startswith(API_KEY_PREFIX):
        suggestions.append(
            f"Note: API key doesn't start with '{API_KEY_PREFIX}' (expected for Partner keys)"
        )
    return EnvironmentValidation(valid=not errors, errors=errors, suggestions=suggestions)


def _parse_timeout(raw: Any, source: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid timeout in {source}: {raw!r}",
            ["Use a number of seconds, e.g. 30"],
        ) from exc
    if value <= 0:
        raise ConfigurationError(f"Timeout must be positive in {source}: {raw!r}")
    return value


def config_from_env(environ: Mapping[str, str] | None = None) -> ClientConfig:
    """Lit LEGITMARK_API_KEY, LEGITMARK_DEBUG, LEGITMARK_BASE_URL, LEGITMARK_TIMEOUT_S."""
    env = os.environ if environ is None else environ
    validation = validate_environment(env)
    if not validation.valid:
        raise ConfigurationError("; ".join(validation.errors), validation.suggestions)
    raw_timeout = (env.get(ENV_TIMEOUT_S) or "").strip()
    return ClientConfig(
        api_key=env[ENV_API_KEY].strip(),
        timeout_s=_parse_timeout(raw_timeout, ENV_TIMEOUT_S) if raw_timeout else DEFAULT_TIMEOUT_S,
        debug=(env.get(ENV_DEBUG) or "").strip().lower() == "true",
        base_url=(env.get(ENV_BASE_URL) or "").strip() or None,
    )


def read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as file_obj:
        return tomllib.load(file_obj)


def load_config_file(path: Path | str) -> ClientConfig:
    """
    Charge la configuration depuis un fichier TOML.

    Les clés sont lues dans la table [legitmark] si elle existe, sinon au premier niveau :
    api_key, timeout_s, debug, base_url.
    """
    path = Path(path)
    try:
        data = read_toml(path)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(
            f"Cannot read config file {path}: {exc}",
            ["Check that the file exists and is valid TOML"],
        ) from exc
    section = data.get("legitmark") if isinstance(data.get("legitmark"), dict) else data
    api_key = str(section.get("api_key") or "").strip()
    if not api_key:
        raise ConfigurationError(
            f"api_key is missing in {path}",
            ['Add api_key = "leo_..." under [legitmark]'],
        )
    timeout = section.get("timeout_s")
    base_url = section.get("base_url")
    return ClientConfig(
        api_key=api_key,
        timeout_s=_parse_timeout(timeout, str(path)) if timeout is not None else DEFAULT_TIMEOUT_S,
        debug=bool(section.get("debug", False)),
        base_url=str(base_url) if base_url else None,
    )


def create_client(config: ClientConfig, **options: Any) -> PartnerClient:
    return PartnerClient(
        config.api_key,
        timeout_s=config.timeout_s,
        debug=config.debug,
        base_url=config.base_url,
        **options,
    )


def create_client_from_env(environ: Mapping[str, str] | None = None, **options: Any) -> PartnerClient:
    """PartnerClient configuré depuis l'environnement ; ConfigurationError si invalide."""
    return create_client(config_from_env(environ), **options)
