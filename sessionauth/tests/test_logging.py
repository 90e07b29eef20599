from __future__ import annotations

from loguru import logger as _logger

from sessionauth.shared.logging import logger, sanitize_message, set_correlation_id, setup_logging


def test_records_carry_service_and_correlation_id() -> None:
    setup_logging(service_name="auth-test")
    captured: list[dict] = []
    sink_id = _logger.add(lambda message: captured.append(message.record["extra"]))
    try:
        set_correlation_id("req-1")
        logger.info("auth.signin: ok account=1")
    finally:
        set_correlation_id(None)
        _logger.remove(sink_id)

    assert captured == [{"correlation_id": "req-1", "service": "auth-test"}]


def test_sanitize_message_hides_secrets() -> None:
    line = "password=hunter2 sid=" + "a" * 32 + " hash=$2b$10$" + "x" * 53

    cleaned = sanitize_message(line)

    assert "hunter2" not in cleaned
    assert "a" * 32 not in cleaned
    assert "***BCRYPT***" in cleaned
