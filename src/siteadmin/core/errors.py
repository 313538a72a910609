# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import List, Optional


class ValidationFailed(ValueError):
    """Input rejected by a service; `fields` names the offending keys."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class NotFound(LookupError):
    pass
