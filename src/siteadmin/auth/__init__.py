# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Admin authentication.

This package provides:
- Salted SHA-256 password hashing/verification (``salt:digest`` strings)
- Server-side sessions with a fixed 7 day lifetime
- The cookie guard shared by every protected endpoint
"""
