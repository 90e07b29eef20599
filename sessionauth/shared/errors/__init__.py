from .base import AppError, DomainError
from .http import handle_app_error, register_error_handler
from .validation import GENERIC_FORM_ERROR, first_error_message, format_pydantic_errors

__all__ = [
    "AppError",
    "DomainError",
    "GENERIC_FORM_ERROR",
    "first_error_message",
    "format_pydantic_errors",
    "handle_app_error",
    "register_error_handler",
]
