import json
import logging

from app.logging import JsonFormatter, MaskingFilter, RequestContextFilter, log_security_event


def test_request_id_header_and_propagation(client):
    resp = client.get("/__ok", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_generated_request_id_when_absent(client):
    resp = client.get("/__ok")
    assert len(resp.headers["X-Request-ID"]) == 32


def test_logs_include_request_id_attribute(client, caplog):
    caplog.set_level("INFO")
    caplog.handler.addFilter(RequestContextFilter())
    resp = client.get("/__log", headers={"X-Request-ID": "rid-abc"})
    assert resp.status_code == 200
    assert any(getattr(r, "request_id", "") == "rid-abc" for r in caplog.records)


def test_sensitive_fields_masked_in_info(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "testing")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    logger.info({"email": "user@example.com", "password": "hunter22", "order": 7})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert record.msg == {"email": "[REDACTED]", "password": "[REDACTED]", "order": 7}


def test_sensitive_fields_visible_in_debug(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "development")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    logger.debug({"password": "secret"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert record.msg["password"] == "secret"


def test_security_event_is_structured(caplog):
    caplog.set_level("WARNING")
    log_security_event("failed login", ip="127.0.0.1")
    record = next(r for r in caplog.records if r.name == "storefront.security")
    assert record.msg == {"event": "security", "detail": "failed login", "ip": "127.0.0.1"}


def test_json_formatter_output():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    line = json.loads(JsonFormatter().format(record))
    assert line["message"] == "hello world"
    assert line["level"] == "INFO"
    assert line["request_id"] == "n/a"
