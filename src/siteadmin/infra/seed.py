# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Seed admin accounts from a YAML file.

Format::

    admins:
      admin@example.com:
        name: Site Admin
        role: admin
        password_hash: "<salt>:<digest>"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import yaml
from sqlalchemy.orm import Session

from siteadmin.core.utils import canon_email
from siteadmin.infra.accounts_repo import upsert_account

log = logging.getLogger("siteadmin.seed")


@dataclass(frozen=True)
class SeedAccount:
    email: str
    name: str
    role: str
    password_hash: str


def load_seed_accounts(path: Path) -> List[SeedAccount]:
    if not path.exists():
        return []
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    admins = (raw.get("admins") or {}) if isinstance(raw, dict) else {}
    out: List[SeedAccount] = []
    for email, data in admins.items():
        if not isinstance(data, dict):
            continue
        e = canon_email(str(email))
        ph = str(data.get("password_hash") or "").strip()
        if not e or not ph:
            log.warning("Skipping seed entry without email or password_hash")
            continue
        out.append(
            SeedAccount(
                email=e,
                name=str(data.get("name") or "").strip(),
                role=str(data.get("role") or "admin").strip().lower(),
                password_hash=ph,
            )
        )
    return out


def seed_accounts(db: Session, path: Path) -> int:
    accounts = load_seed_accounts(path)
    for a in accounts:
        upsert_account(db, email=a.email, name=a.name, role=a.role, password_hash=a.password_hash)
    if accounts:
        log.info("Seeded %d admin account(s) from %s", len(accounts), path)
    return len(accounts)
