import time
from flask import request
from prometheus_client import Counter, Histogram
from sqlalchemy import event

from models import db

DB_QUERY_DURATION = Histogram(
    "storefront_db_query_duration_seconds",
    "Time spent executing SQL statements",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

HTTP_ERRORS = Counter(
    "storefront_http_errors_total",
    "API responses with status >= 400",
    ["endpoint", "method", "code"],
)

ORDERS_PLACED = Counter(
    "storefront_orders_placed_total",
    "Orders committed by the checkout transaction",
)

STOCK_REJECTIONS = Counter(
    "storefront_stock_rejections_total",
    "Checkouts rejected because a cart line exceeded available stock",
)

_TIMER_KEY = "storefront_query_started"


def _query_started(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault(_TIMER_KEY, []).append(time.perf_counter())


def _query_finished(conn, cursor, statement, parameters, context, executemany):
    started = conn.info.get(_TIMER_KEY)
    if started:
        DB_QUERY_DURATION.observe(time.perf_counter() - started.pop())


def _count_errors(resp):
    if resp.status_code >= 400:
        HTTP_ERRORS.labels(request.endpoint or "unknown", request.method, resp.status_code).inc()
    return resp


def init_app(app):
    """Time SQL on this app's engine and count error responses."""
    with app.app_context():
        engine = db.engine
    event.listen(engine, "before_cursor_execute", _query_started)
    event.listen(engine, "after_cursor_execute", _query_finished)
    app.after_request(_count_errors)
