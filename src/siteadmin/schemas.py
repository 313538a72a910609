# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request bodies.

Fields are optional on purpose: missing values are reported by the handlers
with the service's own 400 envelope rather than FastAPI's 422.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None


class MessageUpdate(BaseModel):
    status: Optional[str] = None


class SettingWrite(BaseModel):
    key: Optional[str] = None
    value: Optional[str] = None


class ContactForm(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    inquiry_type: Optional[str] = None
    message: Optional[str] = None
    page_url: Optional[str] = None
    submitted_at_local: Optional[str] = None
    utm: Optional[Dict[str, Any]] = None
