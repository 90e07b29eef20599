# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, render_template

from sessionauth.infrastructure.health import check_database
from sessionauth.infrastructure.observability import render_metrics
from sessionauth.interfaces.http.session_middleware import is_authenticated


class MiscController:
    def __init__(self, *, metrics_enabled: bool = True) -> None:
        self._metrics_enabled = metrics_enabled

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        if self._metrics_enabled:
            bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def index(self):
        return render_template("index.html", authenticated=is_authenticated())

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            checks = check_database()
            status.update(checks)
            status["ok"] = checks["schema"] == "ok"
        except Exception as exc:  # pragma: no cover
            status["ok"] = False
            status["database"] = f"error: {exc}"
        return jsonify(status)

    def metrics(self):
        payload, content_type = render_metrics()
        return Response(payload, content_type=content_type)
