# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

GENERIC_FORM_ERROR = "Invalid form submission"


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors(include_input=False, include_url=False):
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
                "message": error.get("msg", GENERIC_FORM_ERROR),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def first_error_message(exc: PydanticValidationError) -> str:
    """Single human-readable line for re-rendering a form."""
    errors = format_pydantic_errors(exc)["errors"]
    if not errors:
        return GENERIC_FORM_ERROR
    first = errors[0]
    if first["field"] == "unknown":
        return first["message"]
    return f"{first['field']}: {first['message']}"


__all__ = [
    "GENERIC_FORM_ERROR",
    "first_error_message",
    "format_pydantic_errors",
]
