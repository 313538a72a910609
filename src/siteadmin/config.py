# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Runtime settings.

Read once from the environment at startup and passed explicitly to the app
factory; nothing else in the package looks at ``os.environ``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from siteadmin.core.utils import is_truthy

DEFAULT_DATABASE_URL = "sqlite:///data/site.db"
DEFAULT_ADMINS_PATH = "data/admins.yml"


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(p.strip() for p in (raw or "").split(",") if p.strip())


@dataclass(frozen=True)
class BasicAuthCredentials:
    username: str
    password: str


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    cors_origins: Tuple[str, ...] = ("*",)
    basic_auth: Optional[BasicAuthCredentials] = None
    admins_path: Path = field(default_factory=lambda: Path(DEFAULT_ADMINS_PATH))
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env

        basic_auth = None
        user = env.get("SITE_BASIC_AUTH_USER", "")
        password = env.get("SITE_BASIC_AUTH_PASSWORD", "")
        if user and password:
            basic_auth = BasicAuthCredentials(username=user, password=password)

        log_dir = env.get("SITE_LOG_DIR", "").strip()
        return cls(
            database_url=env.get("SITE_DATABASE_URL", DEFAULT_DATABASE_URL),
            cors_origins=_split_csv(env.get("SITE_CORS_ORIGINS", "*")) or ("*",),
            basic_auth=basic_auth,
            admins_path=Path(env.get("SITE_ADMINS_PATH", DEFAULT_ADMINS_PATH)),
            log_level=env.get("SITE_LOG_LEVEL", "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
            host=env.get("SITE_HOST", "0.0.0.0"),
            port=int(env.get("SITE_PORT", "8000")),
            reload=is_truthy(env.get("SITE_RELOAD", "false")),
        )
