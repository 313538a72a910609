# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from datetime import datetime, timezone

TRUTHY = {"1", "true", "yes", "y"}


def utcnow() -> datetime:
    """Naive UTC timestamp; the store keeps every datetime in naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def canon_email(s: str) -> str:
    """Canonicalise an email for lookups (trim + lower)."""
    return (s or "").strip().lower()


def is_truthy(s: str) -> bool:
    return (s or "").strip().lower() in TRUTHY
