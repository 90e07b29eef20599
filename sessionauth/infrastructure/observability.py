# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from sessionauth.shared.config import load_config

_config = load_config()

REQUEST_LATENCY = Histogram(
    "sessionauth_request_latency_seconds",
    "Request latency",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "sessionauth_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
AUTH_EVENTS = Counter(
    "sessionauth_auth_events_total",
    "Authentication outcomes",
    labelnames=("action", "outcome"),
)


def observe_request(endpoint: str, status: int, duration: float) -> None:
    if not _config.observability.metrics_enabled:
        return
    REQUEST_LATENCY.observe(duration)
    REQUEST_COUNTER.labels(endpoint=endpoint, status=str(status)).inc()


def record_auth_event(action: str, outcome: str) -> None:
    if not _config.observability.metrics_enabled:
        return
    AUTH_EVENTS.labels(action=action, outcome=outcome).inc()


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "AUTH_EVENTS",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "observe_request",
    "record_auth_event",
    "render_metrics",
]
