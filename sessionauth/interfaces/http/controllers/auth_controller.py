# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, redirect, render_template, request
from pydantic import ValidationError

from sessionauth.application.use_cases.users.current_account import CurrentAccountUseCase
from sessionauth.application.use_cases.users.session_promotion import AuthResult
from sessionauth.application.use_cases.users.sign_in import SignInUseCase
from sessionauth.application.use_cases.users.sign_out import SignOutUseCase
from sessionauth.application.use_cases.users.sign_up import SignUpCommand, SignUpUseCase
from sessionauth.domain.users.exceptions import AuthError, InvalidCredentialsError
from sessionauth.infrastructure.observability import record_auth_event
from sessionauth.interfaces.http.dto.auth import SignInForm, SignUpForm
from sessionauth.interfaces.http.guard import ensure_authenticated
from sessionauth.interfaces.http.session_middleware import (
    adopt_session,
    current_session,
    drop_session,
    is_authenticated,
)
from sessionauth.shared.errors.validation import first_error_message, format_pydantic_errors
from sessionauth.shared.logging import logger

# Carries the authenticated account id back to the caller
USER_HEADER = "user"


def _form_error(template: str, message: str, **context) -> tuple[str, int]:
    return render_template(template, error=message, **context), HTTPStatus.BAD_REQUEST


def _signup_echo(form) -> dict[str, str]:
    return {
        "username": form.get("username", ""),
        "firstname": form.get("firstname", ""),
        "lastname": form.get("lastname", ""),
    }


class AuthController:
    def __init__(
        self,
        *,
        sign_in_use_case: SignInUseCase,
        sign_up_use_case: SignUpUseCase,
        sign_out_use_case: SignOutUseCase,
        current_account_use_case: CurrentAccountUseCase,
        landing_path: str = "/user/authenticated",
    ) -> None:
        self._sign_in_use_case = sign_in_use_case
        self._sign_up_use_case = sign_up_use_case
        self._sign_out_use_case = sign_out_use_case
        self._current_account_use_case = current_account_use_case
        self._landing_path = landing_path

    def _signed_in_response(self, result: AuthResult) -> Response:
        adopt_session(result.session)
        response = redirect(self._landing_path)
        response.headers[USER_HEADER] = str(result.account.id)
        return response

    def signin(self):
        try:
            dto = SignInForm.model_validate(request.form.to_dict())
        except ValidationError as exc:
            # Malformed submissions get the same answer as bad credentials
            logger.debug(f"auth.signin: invalid form fields={format_pydantic_errors(exc)['fields']}")
            error = InvalidCredentialsError()
            record_auth_event("signin", error.code)
            return _form_error(
                "user/signin.html", error.user_message(), username=request.form.get("username", "")
            )

        try:
            result = self._sign_in_use_case.execute(
                dto.username,
                dto.password,
                remember_me=dto.remember_me,
                current_session=current_session(),
            )
        except AuthError as exc:
            record_auth_event("signin", exc.code)
            return _form_error("user/signin.html", exc.user_message(), username=dto.username)

        record_auth_event("signin", "ok")
        return self._signed_in_response(result)

    def signup(self):
        try:
            dto = SignUpForm.model_validate(request.form.to_dict())
        except ValidationError as exc:
            logger.debug(f"auth.signup: invalid form fields={format_pydantic_errors(exc)['fields']}")
            record_auth_event("signup", "invalid_form")
            return _form_error(
                "user/signup.html", first_error_message(exc), **_signup_echo(request.form)
            )

        command = SignUpCommand(
            username=dto.username,
            first_name=dto.first_name,
            last_name=dto.last_name,
            password=dto.password,
            password_confirmation=dto.password_confirmation,
            avatar=dto.avatar,
            accepted_terms=dto.accepted_terms,
        )
        try:
            result = self._sign_up_use_case.execute(command, current_session=current_session())
        except AuthError as exc:
            record_auth_event("signup", exc.code)
            return _form_error(
                "user/signup.html", exc.user_message(), **_signup_echo(request.form)
            )

        record_auth_event("signup", "ok")
        return self._signed_in_response(result)

    @ensure_authenticated("/")
    def signout(self):
        session = current_session()
        self._sign_out_use_case.execute(session.token if session else "")
        drop_session()
        record_auth_event("signout", "ok")
        return redirect("/")

    def signup_form(self):
        if is_authenticated():
            return redirect("/")
        return render_template("user/signup.html")

    def signin_form(self):
        if is_authenticated():
            return redirect(self._landing_path)
        return render_template("user/signin.html")

    @ensure_authenticated("/")
    def authenticated(self):
        account = self._current_account_use_case.execute(current_session())
        return render_template("user/authenticated.html", account=account)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/user")
        bp.add_url_rule("/signin", "signin", view_func=self.signin, methods=["POST"])
        bp.add_url_rule("/signup", "signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/signout", "signout", view_func=self.signout, methods=["GET"])
        bp.add_url_rule("/signup", "signup_form", view_func=self.signup_form, methods=["GET"])
        bp.add_url_rule("/signin", "signin_form", view_func=self.signin_form, methods=["GET"])
        bp.add_url_rule(
            "/authenticated", "authenticated", view_func=self.authenticated, methods=["GET"]
        )
        return bp
