# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sessionauth.application.services.password_hashing import BcryptPasswordHasher
from sessionauth.application.use_cases.users.current_account import CurrentAccountUseCase
from sessionauth.application.use_cases.users.sign_in import SignInUseCase
from sessionauth.application.use_cases.users.sign_out import SignOutUseCase
from sessionauth.application.use_cases.users.sign_up import SignUpUseCase
from sessionauth.infrastructure.db import SessionLocal
from sessionauth.infrastructure.repositories.users.sqlalchemy_account_repository import (
    SqlAlchemyAccountRepository,
)
from sessionauth.infrastructure.repositories.users.sqlalchemy_session_store import (
    SqlAlchemySessionStore,
)
from sessionauth.interfaces.http.controllers.auth_controller import AuthController
from sessionauth.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.auth.bcrypt_rounds)

    @cached_property
    def account_repository(self) -> SqlAlchemyAccountRepository:
        return SqlAlchemyAccountRepository(SessionLocal)

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore(
            SessionLocal,
            browser_session_ttl=self.config.auth.browser_session_lifetime,
        )

    @cached_property
    def sign_in_use_case(self) -> SignInUseCase:
        return SignInUseCase(
            accounts=self.account_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
            remember_me_lifetime=self.config.auth.remember_me_lifetime,
        )

    @cached_property
    def sign_up_use_case(self) -> SignUpUseCase:
        return SignUpUseCase(
            accounts=self.account_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def sign_out_use_case(self) -> SignOutUseCase:
        return SignOutUseCase(sessions=self.session_store)

    @cached_property
    def current_account_use_case(self) -> CurrentAccountUseCase:
        return CurrentAccountUseCase(accounts=self.account_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            sign_in_use_case=self.sign_in_use_case,
            sign_up_use_case=self.sign_up_use_case,
            sign_out_use_case=self.sign_out_use_case,
            current_account_use_case=self.current_account_use_case,
            landing_path=self.config.auth.landing_path,
        )


container = Container()
