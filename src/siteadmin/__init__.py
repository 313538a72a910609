# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Backend for the marketing site: contact form, admin sessions, moderation."""

__version__ = "0.1.0"
