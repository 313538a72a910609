# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from siteadmin.auth.gateway import AdminIdentity, require_admin
from siteadmin.core.errors import NotFound, ValidationFailed
from siteadmin.db import get_db
from siteadmin.schemas import MessageUpdate
from siteadmin.services.message_service import DEFAULT_LIMIT, list_messages, open_message, update_status

router = APIRouter(prefix="/api/admin/messages")


@router.get("")
def messages_list(
    status: Optional[str] = None,
    limit: int = Query(DEFAULT_LIMIT),
    offset: int = Query(0),
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return list_messages(db, status=status, limit=limit, offset=offset)


@router.get("/{message_id}")
def message_detail(
    message_id: int,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return {"message": open_message(db, message_id)}
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{message_id}")
def message_update(
    message_id: int,
    body: MessageUpdate,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        message = update_status(db, message_id, body.status)
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": message}
