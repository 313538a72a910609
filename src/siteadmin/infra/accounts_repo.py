# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from siteadmin.core.records import Account
from siteadmin.core.utils import canon_email
from siteadmin.models import AdminUser


def get_account(db: Session, account_id: int) -> Optional[Account]:
    row = db.get(AdminUser, account_id)
    return Account.from_row(row) if row is not None else None


def get_account_by_email(db: Session, email: str) -> Optional[Account]:
    e = canon_email(email)
    if not e:
        return None
    row = db.query(AdminUser).filter(AdminUser.email == e).first()
    return Account.from_row(row) if row is not None else None


def touch_last_login(db: Session, account_id: int, when: datetime) -> None:
    db.query(AdminUser).filter(AdminUser.id == account_id).update({AdminUser.last_login: when})
    db.commit()


def set_password_hash(db: Session, account_id: int, stored: str) -> None:
    db.query(AdminUser).filter(AdminUser.id == account_id).update({AdminUser.password_hash: stored})
    db.commit()


def upsert_account(db: Session, *, email: str, name: str, role: str, password_hash: str) -> Account:
    """Insert an account or refresh name/role/hash of the existing one."""
    e = canon_email(email)
    if not e:
        raise ValueError("Empty email")
    if not password_hash:
        raise ValueError("Empty password hash")
    row = db.query(AdminUser).filter(AdminUser.email == e).first()
    if row is None:
        row = AdminUser(email=e)
        db.add(row)
    row.name = name or ""
    row.role = (role or "admin").strip().lower()
    row.password_hash = password_hash
    db.commit()
    db.refresh(row)
    return Account.from_row(row)
