#!/usr/bin/env python3
"""Print a salted SHA-256 ``salt:digest`` for the admin_users table.

Usage: python scripts/hash_password.py [password]
"""
from __future__ import annotations

import sys
from getpass import getpass

from siteadmin.auth.passwords import make_password_hash


def main() -> None:
    password = sys.argv[1] if len(sys.argv) > 1 else getpass("Password: ")
    if not password:
        raise SystemExit("Usage: python scripts/hash_password.py <password>")

    stored = make_password_hash(password)
    email = input("Admin email [admin@example.com]: ").strip() or "admin@example.com"

    print("\n=== Password Hash Generated ===\n")
    print(f"Hash: {stored}")
    print("\n=== SQL Update Statement ===\n")
    print(f"UPDATE admin_users SET password_hash = '{stored}' WHERE email = '{email.lower()}';\n")


if __name__ == "__main__":
    main()
