# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import base64
import binascii
import hmac
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from siteadmin.auth.gateway import authorize, is_protected
from siteadmin.auth.sessions import Verdict
from siteadmin.config import BasicAuthCredentials, Settings
from siteadmin.db import init_db, make_engine, make_session_factory
from siteadmin.infra.seed import seed_accounts
from siteadmin.logging_config import setup_logging
from siteadmin.routes import auth as auth_routes
from siteadmin.routes import contact as contact_routes
from siteadmin.routes import messages as messages_routes
from siteadmin.routes import settings as settings_routes

log = logging.getLogger("siteadmin.app")

BASIC_REALM = {"WWW-Authenticate": 'Basic realm="Protected Area"'}


def _basic_auth_ok(header: Optional[str], expected: BasicAuthCredentials) -> Optional[bool]:
    """True/False for a well-formed header, None when it cannot be decoded."""
    scheme, _, encoded = (header or "").partition(" ")
    if scheme != "Basic":
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, _, password = decoded.partition(":")
    user_ok = hmac.compare_digest(username.encode("utf-8"), expected.username.encode("utf-8"))
    pass_ok = hmac.compare_digest(password.encode("utf-8"), expected.password.encode("utf-8"))
    return user_ok and pass_ok


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        fields = []
        in_body = False
        for err in exc.errors():
            if tuple(err.get("loc", ()))[:1] == ("body",):
                in_body = True
            loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
            if loc and loc[0] not in fields:
                fields.append(loc[0])
        message = "Invalid request body" if in_body else "Invalid request"
        return JSONResponse({"error": message, "fields": fields}, status_code=400)

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(request: Request, exc: SQLAlchemyError):
        log.exception("Store error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Server error"}, status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_dir)

    engine = make_engine(settings.database_url)
    init_db(engine)
    session_factory = make_session_factory(engine)

    with session_factory() as db:
        seed_accounts(db, settings.admins_path)

    app = FastAPI(title="siteadmin")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    _install_error_handlers(app)

    def _authorize_with_store(cookie_header: Optional[str]) -> Verdict:
        with session_factory() as db:
            return authorize(cookie_header, db)

    @app.middleware("http")
    async def _auth_middleware(request: Request, call_next):
        # runs before routing, so no body is read for rejected requests
        if is_protected(request.url.path):
            try:
                verdict = await run_in_threadpool(_authorize_with_store, request.headers.get("cookie"))
            except SQLAlchemyError:
                log.exception("Session lookup failed")
                return JSONResponse({"error": "Server error"}, status_code=500)
            if not verdict:
                return JSONResponse({"error": "Unauthorized"}, status_code=401)
            request.state.verdict = verdict
        return await call_next(request)

    if settings.basic_auth is not None:
        credentials = settings.basic_auth

        @app.middleware("http")
        async def _basic_auth_middleware(request: Request, call_next):
            header = request.headers.get("authorization")
            if not header:
                return PlainTextResponse("Authentication required", status_code=401, headers=BASIC_REALM)
            ok = _basic_auth_ok(header, credentials)
            if ok is None:
                return PlainTextResponse("Invalid authorization header", status_code=401)
            if not ok:
                log.warning("Basic auth rejected for %s", request.url.path)
                return PlainTextResponse("Invalid credentials", status_code=401, headers=BASIC_REALM)
            return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(auth_routes.router)
    app.include_router(messages_routes.router)
    app.include_router(settings_routes.router)
    app.include_router(contact_routes.router)

    log.info("siteadmin ready")
    return app
