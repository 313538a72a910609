# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed records handed out by the store layer.

ORM rows never leave the repositories; callers get these frozen shapes instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Account:
    id: int
    email: str
    name: str
    role: str
    password_hash: str
    last_login: Optional[datetime] = None

    @classmethod
    def from_row(cls, row) -> "Account":
        return cls(
            id=int(row.id),
            email=str(row.email),
            name=str(row.name or ""),
            role=str(row.role or "admin"),
            password_hash=str(row.password_hash or ""),
            last_login=row.last_login,
        )

    def public(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role}


@dataclass(frozen=True)
class SessionRecord:
    id: str
    account_id: int
    expires_at: datetime

    @classmethod
    def from_row(cls, row) -> "SessionRecord":
        return cls(id=str(row.id), account_id=int(row.user_id), expires_at=row.expires_at)
