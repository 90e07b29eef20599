from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from sessionauth.application.services.password_hashing import MAX_PASSWORD_BYTES


class SignInForm(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)  # No length policy on sign-in
    remember_me: bool = Field(False, alias="rememberMe")

    model_config = ConfigDict(validate_by_name=True)


class SignUpForm(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    first_name: str = Field(min_length=1, max_length=128, alias="firstname")
    last_name: str = Field(min_length=1, max_length=128, alias="lastname")
    password: str = Field(min_length=1)
    password_confirmation: str = Field(alias="password2")
    avatar: str | None = Field(None, max_length=512)
    # Checkbox: "on" when ticked, absent otherwise
    accepted_terms: bool = Field(False, alias="acceptTos")

    model_config = ConfigDict(validate_by_name=True)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if value != value.strip():
            raise PydanticCustomError(
                "username_whitespace",
                "Username must not start or end with whitespace",
                {},
            )
        return value

    @field_validator("password")
    @classmethod
    def validate_password_size(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                "Password must be at most {max_bytes} bytes",
                {"max_bytes": MAX_PASSWORD_BYTES},
            )
        return value

    @field_validator("avatar", mode="before")
    @classmethod
    def _blank_avatar(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value
