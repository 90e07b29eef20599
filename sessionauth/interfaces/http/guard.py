# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps
from http import HTTPStatus

from flask import Response, redirect, request

from sessionauth.application.services.access_guard import AccessGuard, RequestKind
from sessionauth.domain.users.exceptions import RedirectRequiredError
from sessionauth.interfaces.http.session_middleware import current_session
from sessionauth.shared.config import load_config
from sessionauth.shared.logging import logger


def ensure_authenticated(redirect_to: str | None = None):
    """Gate a view on an authenticated session.

    Anonymous GET/HEAD requests are redirected to ``redirect_to`` (the sign-in
    page by default); every other anonymous request gets an empty 403.
    """

    def decorator(view):
        @wraps(view)
        def inner(*args, **kwargs):
            guard = AccessGuard(fallback=redirect_to or load_config().auth.signin_path)
            decision = guard.check(current_session(), RequestKind.from_method(request.method))
            if decision.allowed:
                return view(*args, **kwargs)

            if isinstance(decision.denial, RedirectRequiredError):
                logger.info(
                    f"guard: anonymous {request.method} {request.path} -> {decision.denial.location}"
                )
                return redirect(decision.denial.location)

            logger.warning(f"guard: forbidden {request.method} {request.path}")
            return Response(status=HTTPStatus.FORBIDDEN)

        return inner

    return decorator


__all__ = ["ensure_authenticated"]
