"""JSON log lines with request, user and trace correlation.

Dict messages are merged into the JSON object, so structured events such as
``logger.info({"message": "user logged in", "user": 7})`` stay queryable.
"""
import json
import logging
import os
from typing import Any
from flask import g, has_app_context
from opentelemetry.trace import get_current_span

SENSITIVE_KEYS = frozenset({"password", "password_hash", "token", "access", "refresh", "email", "phone"})
REDACTED = "[REDACTED]"

security_logger = logging.getLogger("storefront.security")


class RequestContextFilter(logging.Filter):
    """Stamp ``request_id`` and ``user_id`` on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id, user_id = "n/a", "anonymous"
        if has_app_context():
            request_id = g.get("request_id") or request_id
            user = g.get("user")
            if user is not None:
                user_id = str(user.id)
        record.request_id = request_id
        record.user_id = user_id
        return True


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_current_span().get_span_context()
        if ctx.is_valid:
            record.trace_id = format(ctx.trace_id, "032x")
            record.span_id = format(ctx.span_id, "016x")
        else:
            record.trace_id = record.span_id = "n/a"
        return True


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: (REDACTED if k in SENSITIVE_KEYS else _redact(v)) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact(v) for v in value]
    return value


class MaskingFilter(logging.Filter):
    """Redact sensitive keys in dict payloads; DEBUG records outside production are left alone."""

    def filter(self, record: logging.LogRecord) -> bool:
        in_production = os.getenv("APP_ENV", "development").lower() == "production"
        if record.levelno == logging.DEBUG and not in_production:
            return True
        if isinstance(record.msg, dict):
            record.msg = _redact(record.msg)
        if isinstance(record.args, dict):
            record.args = _redact(record.args)
        return True


class JsonFormatter(logging.Formatter):
    CONTEXT_FIELDS = (
        ("request_id", "n/a"),
        ("user_id", "anonymous"),
        ("trace_id", "n/a"),
        ("span_id", "n/a"),
    )

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
        }
        for field, default in self.CONTEXT_FIELDS:
            line[field] = getattr(record, field, default)
        if isinstance(record.msg, dict):
            line.update(record.msg)
        else:
            line["message"] = record.getMessage()
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


def log_security_event(event: str, **fields) -> None:
    """Failed logins, forbidden access and similar go to ``storefront.security``."""
    security_logger.warning(dict({"event": "security", "detail": event}, **fields))


def _level_for(app) -> int:
    name = os.getenv("LOG_LEVEL")
    if name:
        return getattr(logging, name.upper(), logging.INFO)
    return logging.DEBUG if app.config.get("DEBUG") else logging.INFO


def configure_logging(app) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z"))
    for log_filter in (RequestContextFilter(), TraceIdFilter(), MaskingFilter()):
        handler.addFilter(log_filter)
    level = _level_for(app)

    app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(level)

    root = logging.getLogger()
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(handler)
    root.setLevel(level)

    werkzeug_logger = logging.getLogger("werkzeug")
    werkzeug_logger.handlers.clear()
    werkzeug_logger.addHandler(handler)
    werkzeug_logger.setLevel(level)
