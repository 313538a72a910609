# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from siteadmin.core.errors import NotFound, ValidationFailed
from siteadmin.core.utils import utcnow
from siteadmin.models import ContactMessage

VALID_STATUSES = ("unread", "read", "archived")
DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def _iso(v: Optional[datetime]) -> Optional[str]:
    return v.isoformat() if v is not None else None


def message_to_dict(m: ContactMessage) -> Dict[str, Any]:
    meta = None
    if m.meta:
        try:
            meta = json.loads(m.meta)
        except ValueError:
            meta = None
    return {
        "id": m.id,
        "first_name": m.first_name,
        "last_name": m.last_name,
        "email": m.email,
        "phone": m.phone,
        "company": m.company,
        "inquiry_type": m.inquiry_type,
        "message": m.message,
        "metadata": meta,
        "status": m.status,
        "read_at": _iso(m.read_at),
        "created_at": _iso(m.created_at),
    }


def list_messages(db: Session, *, status: Optional[str] = None, limit: int = DEFAULT_LIMIT, offset: int = 0) -> Dict[str, Any]:
    """Page through messages newest first, with totals for the admin inbox."""
    limit = max(1, min(int(limit), MAX_LIMIT))
    offset = max(0, int(offset))

    q = db.query(ContactMessage)
    if status:
        q = q.filter(ContactMessage.status == status)
    total = q.count()
    rows = (
        q.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    unread = db.query(ContactMessage).filter(ContactMessage.status == "unread").count()

    return {
        "messages": [message_to_dict(r) for r in rows],
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "hasMore": offset + limit < total,
        },
        "stats": {"unread": unread},
    }


def _get_row(db: Session, message_id: int) -> ContactMessage:
    row = db.get(ContactMessage, message_id)
    if row is None:
        raise NotFound("Message not found")
    return row


def open_message(db: Session, message_id: int) -> Dict[str, Any]:
    """Fetch one message; an unread message becomes read on first view."""
    row = _get_row(db, message_id)
    if row.status == "unread":
        row.status = "read"
        row.read_at = utcnow()
        db.commit()
    return message_to_dict(row)


def update_status(db: Session, message_id: int, status: Optional[str]) -> Dict[str, Any]:
    if status and status not in VALID_STATUSES:
        raise ValidationFailed("Invalid status. Must be: unread, read, or archived", ["status"])
    row = _get_row(db, message_id)
    if status:
        row.status = status
        if status == "read":
            row.read_at = utcnow()
        db.commit()
    return message_to_dict(row)
