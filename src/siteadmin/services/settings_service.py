# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from sqlalchemy.orm import Session

from siteadmin.core.utils import utcnow
from siteadmin.models import Setting

ANALYTICS_KEY = "ga_snippet"


def get_setting(db: Session, key: str) -> str:
    row = db.get(Setting, key)
    return row.value if row is not None and row.value is not None else ""


def put_setting(db: Session, key: str, value: str) -> None:
    row = db.get(Setting, key)
    if row is None:
        row = Setting(key=key)
        db.add(row)
    row.value = value if value is not None else ""
    row.updated_at = utcnow()
    db.commit()
