# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///sessionauth.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class ObservabilityConfig(BaseSettings):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")
    service_name: str = Field("sessionauth", alias="SERVICE_NAME")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class SecurityConfig(BaseSettings):
    # Session cookie
    cookie_name: str = Field("sid", alias="SESSION_COOKIE_NAME")
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


class AuthConfig(BaseSettings):
    # bcrypt work factor; every +1 doubles hashing time
    bcrypt_rounds: int = Field(10, ge=4, le=31, alias="AUTH_BCRYPT_ROUNDS")
    remember_me_days: int = Field(14, ge=1, alias="AUTH_REMEMBER_ME_DAYS")
    # Server-side ceiling for sessions that end when the browser closes
    browser_session_ttl: int = Field(86400, ge=60, alias="SESSION_BROWSER_TTL")
    landing_path: str = Field("/user/authenticated", alias="AUTH_LANDING_PATH")
    signin_path: str = Field("/user/signin", alias="AUTH_SIGNIN_PATH")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def remember_me_lifetime(self) -> timedelta:
        return timedelta(days=self.remember_me_days)

    @property
    def browser_session_lifetime(self) -> timedelta:
        return timedelta(seconds=self.browser_session_ttl)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")
        if self.auth.bcrypt_rounds < 10:
            warnings.append(f"⚠️  AUTH_BCRYPT_ROUNDS={self.auth.bcrypt_rounds} is below 10")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "AuthConfig", "SecurityConfig", "load_config"]
