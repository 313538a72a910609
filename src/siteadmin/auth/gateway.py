# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from siteadmin.auth.sessions import COOKIE_NAME, DenyReason, SessionManager, Verdict
from siteadmin.db import get_db

PROTECTED_PREFIXES = (
    "/api/admin/messages",
    "/api/admin/settings",
    "/api/admin/change-password",
)


def parse_cookie_header(raw: Optional[str]) -> Dict[str, str]:
    """Split a ``Cookie`` header into a dict.

    Pairs are separated by ``;`` and only the first ``=`` of each pair splits
    key from value, so base64 values keep their padding.
    """
    cookies: Dict[str, str] = {}
    for chunk in (raw or "").split(";"):
        key, _, value = chunk.strip().partition("=")
        key = key.strip()
        if key:
            cookies[key] = value.strip()
    return cookies


def session_id_from_header(raw: Optional[str]) -> str:
    return parse_cookie_header(raw).get(COOKIE_NAME, "")


def authorize(raw_cookie_header: Optional[str], db: Session) -> Verdict:
    session_id = session_id_from_header(raw_cookie_header)
    if not session_id:
        return Verdict.deny(DenyReason.NO_SESSION)
    return SessionManager(db).validate(session_id)


def is_protected(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in PROTECTED_PREFIXES)


@dataclass(frozen=True)
class AdminIdentity:
    account_id: int


def require_admin(request: Request, db: Session = Depends(get_db)) -> AdminIdentity:
    verdict = getattr(request.state, "verdict", None)
    if verdict is None:
        verdict = authorize(request.headers.get("cookie"), db)
    if not verdict:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return AdminIdentity(account_id=verdict.account_id)
