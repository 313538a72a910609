# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from siteadmin.auth.gateway import AdminIdentity, require_admin
from siteadmin.db import get_db
from siteadmin.schemas import SettingWrite
from siteadmin.services.settings_service import ANALYTICS_KEY, get_setting, put_setting

router = APIRouter()


@router.get("/api/admin/settings")
def settings_read(
    key: Optional[str] = None,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not key:
        raise HTTPException(status_code=400, detail="Key required")
    return {"value": get_setting(db, key)}


@router.post("/api/admin/settings")
def settings_write(
    body: SettingWrite,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not body.key:
        raise HTTPException(status_code=400, detail="Key required")
    put_setting(db, body.key, body.value or "")
    return {"success": True}


@router.get("/api/settings/analytics")
def analytics_snippet(db: Session = Depends(get_db)):
    return JSONResponse(
        {"snippet": get_setting(db, ANALYTICS_KEY)},
        headers={"Cache-Control": "public, max-age=300"},
    )
