import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from siteadmin.app import create_app
from siteadmin.auth.passwords import make_password_hash
from siteadmin.auth.sessions import SessionManager
from siteadmin.config import Settings
from siteadmin.infra.accounts_repo import upsert_account


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file and seed path."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'site.db'}",
        admins_path=tmp_path / "admins.yml",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db(app):
    s = app.state.session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def admin(db):
    return upsert_account(
        db,
        email="a@x.com",
        name="Ada Admin",
        role="admin",
        password_hash=make_password_hash("secret1"),
    )


@pytest.fixture()
def auth_headers(db, admin) -> dict:
    session_id, _ = SessionManager(db).create(admin.id)
    return {"Cookie": f"session={session_id}"}
