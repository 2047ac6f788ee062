"""
Runtime settings.

Settings are resolved in three layers, later layers winning:

1. defaults declared on `Settings`
2. an optional YAML file whose path is in KVFACADE_CONFIG
   (see `configs/kv_facade.example.yaml`)
3. environment variables (see `ENV_VARS`)

The store connection string is read from KVSTORE_URL. When it is not set
but the KVSTORE_PG* variables are, a postgresql:// URL is built from them.
Without either, the in-memory store is used.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Literal, Mapping, Optional
from urllib.parse import quote

import yaml
from pydantic import BaseModel, Field

DEFAULT_FETCH_URL = "https://deepseek-author-production.up.railway.app/"

# Settings field -> environment variable
ENV_VARS: Dict[str, str] = {
    "store_url": "KVSTORE_URL",
    "store_table": "KVSTORE_TABLE",
    "host": "HOST",
    "port": "PORT",
    "variant": "KVFACADE_VARIANT",
    "fetch_url": "KVFACADE_FETCH_URL",
    "key_prefix": "KVFACADE_KEY_PREFIX",
    "fetch_timeout": "KVFACADE_FETCH_TIMEOUT",
    "fail_fast": "KVFACADE_FAIL_FAST",
    "log_level": "KVFACADE_LOG_LEVEL",
}


class Settings(BaseModel):
    store_url: str = "memory://"
    store_table: str = "kv_store"
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    # "viewer": key listing page + fetch-and-save; "plain": welcome text + set/get
    variant: Literal["viewer", "plain"] = "viewer"
    fetch_url: str = DEFAULT_FETCH_URL
    key_prefix: str = Field(default="content", min_length=1)
    fetch_timeout: float = Field(default=10.0, gt=0)
    fail_fast: bool = True
    log_level: str = "INFO"


def _postgres_url_from_env(environ: Mapping[str, str]) -> Optional[str]:
    host = environ.get("KVSTORE_PGHOST")
    if not host:
        return None
    port = environ.get("KVSTORE_PGPORT", "5432")
    user = environ.get("KVSTORE_PGUSER", "")
    password = environ.get("KVSTORE_PGPASSWORD", "")
    dbname = environ.get("KVSTORE_PGDATABASE", "")

    auth = ""
    if user:
        auth = quote(user, safe="")
        if password:
            auth += ":" + quote(password, safe="")
        auth += "@"
    return f"postgresql://{auth}{host}:{port}/{quote(dbname, safe='')}"


def load_config_file(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file '{path}' must contain a YAML mapping")
    return raw


def load_settings(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> Settings:
    """
    Build `Settings` from file, environment and explicit overrides.

    `overrides` with a value of None are ignored so CLI arguments that were
    not given fall through to the lower layers.
    """
    if environ is None:
        environ = os.environ

    values: Dict[str, Any] = {}

    path = path or environ.get("KVFACADE_CONFIG")
    if path:
        values.update(load_config_file(path))

    pg_url = _postgres_url_from_env(environ)
    if pg_url:
        values["store_url"] = pg_url
    for field_name, env_name in ENV_VARS.items():
        if env_name in environ:
            values[field_name] = environ[env_name]

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.model_validate(values)
