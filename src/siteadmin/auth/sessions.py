# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Server-side admin sessions.

A session row is valid while it exists and ``now < expires_at``. Lifetimes are
fixed from creation (no sliding renewal) and expired rows are left in place;
they simply stop validating.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Tuple

from sqlalchemy.orm import Session

from siteadmin.core.records import SessionRecord
from siteadmin.core.utils import utcnow
from siteadmin.models import AdminSession

COOKIE_NAME = "session"
SESSION_TTL = timedelta(days=7)
SESSION_MAX_AGE_SECONDS = int(SESSION_TTL.total_seconds())  # 604800
SESSION_ID_BYTES = 32


class DenyReason(str, Enum):
    NO_SESSION = "no_session"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Verdict:
    authenticated: bool
    account_id: Optional[int] = None
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls, account_id: int) -> "Verdict":
        return cls(authenticated=True, account_id=account_id)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Verdict":
        return cls(authenticated=False, reason=reason)

    def __bool__(self) -> bool:
        return self.authenticated


def new_session_id() -> str:
    return secrets.token_urlsafe(SESSION_ID_BYTES)


class SessionManager:
    """Creates, validates and destroys session rows."""

    def __init__(self, db: Session, *, clock: Callable[[], datetime] = utcnow, ttl: timedelta = SESSION_TTL):
        self.db = db
        self.clock = clock
        self.ttl = ttl

    def create(self, account_id: int) -> Tuple[str, datetime]:
        session_id = new_session_id()
        expires_at = self.clock() + self.ttl
        self.db.add(AdminSession(id=session_id, user_id=account_id, expires_at=expires_at))
        self.db.commit()
        return session_id, expires_at

    def get(self, session_id: str) -> Optional[SessionRecord]:
        if not session_id:
            return None
        row = self.db.get(AdminSession, session_id)
        return SessionRecord.from_row(row) if row is not None else None

    def validate(self, session_id: str) -> Verdict:
        record = self.get(session_id)
        if record is None:
            return Verdict.deny(DenyReason.NOT_FOUND)
        if self.clock() >= record.expires_at:
            return Verdict.deny(DenyReason.EXPIRED)
        return Verdict.allow(record.account_id)

    def destroy(self, session_id: str) -> None:
        if not session_id:
            return
        self.db.query(AdminSession).filter(AdminSession.id == session_id).delete()
        self.db.commit()
