# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Contact form intake: validate, normalise, store."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session

from siteadmin.core.errors import ValidationFailed
from siteadmin.models import ContactMessage

REQUIRED_FIELDS = ["first_name", "last_name", "email", "inquiry_type", "message"]
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    v = (v or "").strip()
    return v or None


def request_metadata(headers: Mapping[str, str], data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "ip": headers.get("cf-connecting-ip") or headers.get("x-forwarded-for"),
        "user_agent": headers.get("user-agent"),
        "referrer": headers.get("referer"),
        "page_url": data.get("page_url") or None,
        "utm": data.get("utm") or None,
        "submitted_at_local": data.get("submitted_at_local") or None,
    }


def submit_contact(db: Session, data: Dict[str, Any], metadata: Dict[str, Any]) -> int:
    missing = [f for f in REQUIRED_FIELDS if not str(data.get(f) or "").strip()]
    if missing:
        raise ValidationFailed("Missing required fields", REQUIRED_FIELDS)

    email = str(data["email"]).strip()
    if not EMAIL_RE.match(email):
        raise ValidationFailed("Invalid email address", ["email"])

    row = ContactMessage(
        first_name=str(data["first_name"]).strip(),
        last_name=str(data["last_name"]).strip(),
        email=email.lower(),
        phone=_blank_to_none(data.get("phone")),
        company=_blank_to_none(data.get("company")),
        inquiry_type=str(data["inquiry_type"]).strip(),
        message=str(data["message"]).strip(),
        meta=json.dumps(metadata),
    )
    db.add(row)
    db.commit()
    return int(row.id)
