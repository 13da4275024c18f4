from __future__ import annotations

import os
import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from .config_types import Credentials, Options, Tokens
from .file_system import ensure_directory, get_user_home, read_file, write_file
from .logging_ import get_logger

APP_NAME = "cloco"
CONFIG_FILENAME = "config.toml"
LEGACY_DIRNAME = ".cloco"
DEFAULT_URL = "https://api.cloco.io"

ENV_OVERRIDES = {
    "url": "CLOCO_URL",
    "subscription": "CLOCO_SUBSCRIPTION",
    "application": "CLOCO_APPLICATION",
    "environment": "CLOCO_ENVIRONMENT",
}

log = get_logger(__name__)


def config_path() -> str:
    path = f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"
    if not os.path.exists(path):
        legacy = legacy_config_path()
        if os.path.exists(legacy):
            log.debug("using legacy config file %s", legacy)
            return legacy
    return path


def legacy_config_path() -> str:
    return str(Path(get_user_home()) / LEGACY_DIRNAME / CONFIG_FILENAME)


def default_options() -> Options:
    return Options(url=DEFAULT_URL)


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"
    return f"{scheme}{value}"


def to_toml(options: Options) -> dict[str, Any]:
    data: dict[str, Any] = {
        "url": options.url,
        "subscription": options.subscription,
        "application": options.application,
        "environment": options.environment,
        "credentials": None,
        "tokens": None,
    }
    if options.credentials is not None:
        data["credentials"] = {
            "key": options.credentials.key,
            "secret": options.credentials.secret,
        }
    if options.tokens is not None:
        data["tokens"] = {
            "access_token": options.tokens.access_token,
            "refresh_token": options.tokens.refresh_token,
        }
    return _prune_none(data)


def _prune_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune_none(item) for item in value if item is not None]
    return value


def from_toml(data: dict[str, Any]) -> Options:
    url = normalize_base_url(str(data.get("url") or "")) or DEFAULT_URL

    credentials = None
    creds_raw = data.get("credentials")
    if isinstance(creds_raw, dict):
        credentials = Credentials(
            key=str(creds_raw.get("key") or ""),
            secret=str(creds_raw.get("secret") or ""),
        )

    tokens = None
    tokens_raw = data.get("tokens")
    if isinstance(tokens_raw, dict):
        tokens = Tokens(
            access_token=str(tokens_raw.get("access_token") or ""),
            refresh_token=str(tokens_raw.get("refresh_token") or ""),
        )

    return Options(
        url=url,
        subscription=str(data.get("subscription") or ""),
        application=str(data.get("application") or ""),
        environment=str(data.get("environment") or ""),
        credentials=credentials,
        tokens=tokens,
    )


def apply_env_overrides(options: Options) -> Options:
    changes: dict[str, str] = {}
    for field_name, env_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name, "").strip()
        if value:
            changes[field_name] = normalize_base_url(value) if field_name == "url" else value
    if not changes:
        return options
    log.debug("config overridden from environment: %s", ", ".join(sorted(changes)))
    return replace(options, **changes)


def load_options() -> Options:
    path = config_path()
    try:
        data = tomllib.loads(read_file(path))
    except FileNotFoundError:
        log.debug("no config file at %s, using defaults", path)
        return apply_env_overrides(default_options())
    return apply_env_overrides(from_toml(data))


def save_options(options: Options) -> str:
    path = config_path()
    ensure_directory(os.path.dirname(path))
    write_file(path, tomli_w.dumps(to_toml(options)), mode=0o600)
    return path
