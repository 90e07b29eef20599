# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Cookie transport for server-held sessions.

The cookie only carries the opaque token; everything else lives in the
session store. Views read the current record through :func:`current_session`
and report changes with :func:`adopt_session` / :func:`drop_session`; the
cookie is rewritten once, after the view has run.
"""

from __future__ import annotations

from datetime import UTC, datetime

from flask import Flask, g, request

from sessionauth.domain.users.entities import SessionRecord
from sessionauth.domain.users.repositories import SessionStore
from sessionauth.shared.config import SecurityConfig
from sessionauth.shared.logging import logger


def current_session() -> SessionRecord | None:
    return g.get("auth_session")


def is_authenticated() -> bool:
    session = current_session()
    return session is not None and session.is_authenticated


def adopt_session(record: SessionRecord) -> None:
    g.auth_session = record
    g.account_id = record.account_id
    g.session_changed = True


def drop_session() -> None:
    g.auth_session = None
    g.account_id = None
    g.session_changed = True


def _max_age(record: SessionRecord) -> int | None:
    if record.expires_at is None:
        return None
    remaining = (record.expires_at - datetime.now(UTC)).total_seconds()
    return max(int(remaining), 0)


def configure_sessions(app: Flask, store: SessionStore, security: SecurityConfig) -> None:
    cookie_name = security.cookie_name

    @app.before_request
    def _load_session() -> None:
        token = request.cookies.get(cookie_name, "")
        record = store.get(token) if token else None
        g.auth_session = record
        g.account_id = record.account_id if record else None
        # An unknown or expired token gets its cookie cleared
        g.session_changed = bool(token) and record is None
        if g.session_changed:
            logger.debug(f"session: stale cookie on {request.method} {request.path}")

    @app.after_request
    def _persist_session(response):
        if not g.get("session_changed"):
            return response

        record = current_session()
        if record is None:
            response.delete_cookie(
                cookie_name,
                path="/",
                secure=security.cookie_secure,
                httponly=True,
                samesite=security.cookie_samesite,
            )
            return response

        response.set_cookie(
            cookie_name,
            record.token,
            max_age=_max_age(record),
            path="/",
            httponly=True,
            secure=security.cookie_secure,
            samesite=security.cookie_samesite,
        )
        return response


__all__ = [
    "adopt_session",
    "configure_sessions",
    "current_session",
    "drop_session",
    "is_authenticated",
]
