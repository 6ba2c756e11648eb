# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

from myorder.errors import ConfigError

REQUIRED_DB_VARS = ("DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME")
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
SHUTDOWN_TIMEOUT_SECONDS = 10


def _required(env: Mapping[str, str], key: str) -> str:
    value = env.get(key, "")
    if not value:
        raise ConfigError(f"Required environment variable {key} is not set")
    return value


def _port(raw: str, key: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    db_host: str
    db_port: int
    db_user: str
    db_password: str
    db_name: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    shutdown_timeout: int = SHUTDOWN_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        values = {key: _required(env, key) for key in REQUIRED_DB_VARS}
        return cls(
            db_host=values["DB_HOST"],
            db_port=_port(values["DB_PORT"], "DB_PORT"),
            db_user=values["DB_USER"],
            db_password=values["DB_PASSWORD"],
            db_name=values["DB_NAME"],
            host=env.get("APP_HOST") or DEFAULT_HOST,
            port=_port(env.get("APP_PORT") or str(DEFAULT_PORT), "APP_PORT"),
        )

    @property
    def database_url(self) -> URL:
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query={"sslmode": "disable"},
        )


def load_settings() -> Settings:
    # A missing .env is fine; the variables may come from the real environment.
    load_dotenv()
    return Settings.from_env()
