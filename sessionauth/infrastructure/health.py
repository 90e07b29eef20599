# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import inspect, text

from sessionauth.infrastructure.db import ENGINE

REQUIRED_TABLES = ("accounts", "auth_sessions")


def check_database() -> dict[str, str]:
    """Ping the database and confirm the auth tables exist."""
    with ENGINE.connect() as connection:
        connection.execute(text("SELECT 1"))
        present = set(inspect(connection).get_table_names())
    missing = [table for table in REQUIRED_TABLES if table not in present]
    if missing:
        return {"database": "ok", "schema": f"missing: {', '.join(missing)}"}
    return {"database": "ok", "schema": "ok"}


__all__ = ["check_database"]
