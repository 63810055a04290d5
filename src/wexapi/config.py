"""Load client configuration from TOML and the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli
from pydantic import BaseModel

from wexapi.nonce import MAX_NONCE
from wexapi.signer import Credentials

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"

PUBLIC_API_ENDPOINT = "https://wex.nz/api/3"
TRADE_API_ENDPOINT = "https://wex.nz/tapi"
DEFAULT_TIMEOUT = 10.0

_ENV_OVERRIDES = {
    "WEX_PUBLIC_ENDPOINT": "public_endpoint",
    "WEX_TRADE_ENDPOINT": "trade_endpoint",
    "WEX_TIMEOUT": "timeout",
}


class ClientConfig(BaseModel):
    public_endpoint: str = PUBLIC_API_ENDPOINT
    trade_endpoint: str = TRADE_API_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    nonce_max: int = MAX_NONCE


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomli.load(f)


def load_config(path: Path | None = None, env: dict[str, str] | None = None) -> ClientConfig:
    p = path or CONFIG_DIR / "default.toml"
    e = os.environ if env is None else env
    raw: dict[str, Any] = {}

    if p.exists():
        raw.update(_load_toml(p).get("client", {}))

    for var, name in _ENV_OVERRIDES.items():
        if e.get(var):
            raw[name] = e[var]

    return ClientConfig(**raw)


def load_credentials(env: dict[str, str] | None = None) -> Credentials:
    e = os.environ if env is None else env
    return Credentials(key=e.get("WEX_API_KEY", ""), secret=e.get("WEX_API_SECRET", ""))
