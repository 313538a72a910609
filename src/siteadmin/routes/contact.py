# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from siteadmin.core.errors import ValidationFailed
from siteadmin.db import get_db
from siteadmin.schemas import ContactForm
from siteadmin.services.contact_service import request_metadata, submit_contact

log = logging.getLogger("siteadmin.contact")

router = APIRouter()


@router.post("/api/contact")
def contact_submit(request: Request, body: ContactForm, db: Session = Depends(get_db)):
    data = body.model_dump()
    try:
        message_id = submit_contact(db, data, request_metadata(request.headers, data))
    except ValidationFailed as e:
        return JSONResponse({"error": e.message, "fields": e.fields}, status_code=400)

    log.info("Contact message %s stored", message_id)
    return {
        "success": True,
        "message": "Thank you! Your message has been received.",
        "id": message_id,
    }
