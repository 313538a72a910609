#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from siteadmin.auth.passwords import make_password_hash
from siteadmin.config import Settings
from siteadmin.db import init_db, make_engine, make_session_factory
from siteadmin.infra.accounts_repo import upsert_account


def main() -> None:
    settings = Settings.from_env()
    engine = make_engine(settings.database_url)
    init_db(engine)

    email = input("Email: ").strip()
    name = input("Name: ").strip()
    role = (input("Role [admin]: ").strip().lower() or "admin")

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    with make_session_factory(engine)() as db:
        account = upsert_account(db, email=email, name=name, role=role, password_hash=make_password_hash(pw1))
    print(f"OK -> {account.email} (id {account.id}) in {settings.database_url}")


if __name__ == "__main__":
    main()
