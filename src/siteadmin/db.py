# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Engine/session construction and the request-scoped ``get_db`` dependency."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from siteadmin.models import Base

log = logging.getLogger("siteadmin.db")


def make_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    kwargs = {"pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        # handlers run on the FastAPI threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # one shared connection, otherwise each thread sees its own empty database
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)
    log.info("Database tables ready (%s)", engine.url.get_backend_name())


def get_db(request: Request):
    """FastAPI dependency yielding a session bound to the app's engine."""
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
