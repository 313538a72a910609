# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from siteadmin.auth.gateway import AdminIdentity, authorize, require_admin, session_id_from_header
from siteadmin.auth.passwords import make_password_hash, verify_password
from siteadmin.auth.sessions import COOKIE_NAME, SESSION_MAX_AGE_SECONDS, DenyReason, SessionManager
from siteadmin.core.utils import canon_email, utcnow
from siteadmin.db import get_db
from siteadmin.infra.accounts_repo import (
    get_account,
    get_account_by_email,
    set_password_hash,
    touch_last_login,
)
from siteadmin.schemas import ChangePasswordRequest, LoginRequest

log = logging.getLogger("siteadmin.auth")

router = APIRouter(prefix="/api/admin")

INVALID_CREDENTIALS = {"error": "Invalid credentials"}

COOKIE_ATTRS = {"path": "/", "httponly": True, "secure": True, "samesite": "strict"}

_VERIFY_ERRORS = {
    DenyReason.NO_SESSION: "No session",
    DenyReason.NOT_FOUND: "Invalid or expired session",
    DenyReason.EXPIRED: "Invalid or expired session",
}


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    email = canon_email(body.email or "")
    if not email or not body.password:
        return JSONResponse({"error": "Email and password are required"}, status_code=400)

    account = get_account_by_email(db, email)
    if account is None or not verify_password(body.password, account.password_hash):
        log.info("Login rejected")
        return JSONResponse(INVALID_CREDENTIALS, status_code=401)

    session_id, _ = SessionManager(db).create(account.id)
    touch_last_login(db, account.id, utcnow())
    log.info("Admin %s logged in", account.id)

    resp = JSONResponse({"success": True, "user": account.public()})
    resp.set_cookie(COOKIE_NAME, session_id, max_age=SESSION_MAX_AGE_SECONDS, **COOKIE_ATTRS)
    return resp


@router.post("/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    session_id = session_id_from_header(request.headers.get("cookie"))
    if session_id:
        SessionManager(db).destroy(session_id)
        log.info("Session destroyed on logout")
    resp = JSONResponse({"success": True, "message": "Logged out successfully"})
    resp.delete_cookie(COOKIE_NAME, **COOKIE_ATTRS)
    return resp


@router.get("/verify")
def verify(request: Request, db: Session = Depends(get_db)):
    try:
        verdict = authorize(request.headers.get("cookie"), db)
        account = get_account(db, verdict.account_id) if verdict else None
    except SQLAlchemyError:
        log.exception("Session verify error")
        return JSONResponse({"authenticated": False, "error": "Server error"}, status_code=500)

    if account is None:
        reason = verdict.reason or DenyReason.NOT_FOUND
        return JSONResponse({"authenticated": False, "error": _VERIFY_ERRORS[reason]}, status_code=401)
    return JSONResponse({"authenticated": True, "user": account.public()})


@router.post("/change-password")
def change_password(
    body: ChangePasswordRequest,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not body.currentPassword or not body.newPassword:
        return JSONResponse(
            {"error": "Current and new password are required", "fields": ["currentPassword", "newPassword"]},
            status_code=400,
        )

    account = get_account(db, admin.account_id)
    if account is None or not verify_password(body.currentPassword, account.password_hash):
        log.info("Password change rejected for admin %s", admin.account_id)
        return JSONResponse(INVALID_CREDENTIALS, status_code=401)

    set_password_hash(db, account.id, make_password_hash(body.newPassword))
    log.info("Password changed for admin %s", account.id)
    return {"success": True}
