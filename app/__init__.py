import os
import uuid
from flask import Flask, request, g
from dotenv import load_dotenv
from werkzeug.middleware.proxy_fix import ProxyFix
from flasgger import Swagger
from flask_cors import CORS
from flask_migrate import Migrate
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics

import extensions
from app import metrics as app_metrics
from app.api import register_api_v1
from app.cli import register_cli
from app.config import get_config_class
from app.errors import errors_bp
from app.logging import configure_logging
from app.ratelimit import init_rate_limiting
from app.telemetry import init_tracing
from app.version import API_PREFIX
from models import db

EXPOSED_HEADERS = ("X-Request-ID", "traceparent")

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec",
            "route": "/apispec.json",
            "rule_filter": lambda rule: rule.rule.startswith(f"{API_PREFIX}/"),
            "model_filter": lambda tag: True,
        }
    ],
    "swagger_ui": True,
    "specs_route": "/docs/",
}

SWAGGER_TEMPLATE = {
    "info": {"title": "Jewelry Storefront API", "version": "1.0.0"},
    "tags": [
        {"name": "Catalog", "description": "Products and reviews"},
        {"name": "Account", "description": "Cart, wishlist, addresses and orders"},
        {"name": "Admin", "description": "Product management"},
    ],
}


def _cors_origins(app):
    allowed = app.config.get("CORS_ALLOWED_ORIGINS", "*")
    if not isinstance(allowed, str):
        return allowed or "*"
    allowed = allowed.strip()
    if allowed == "*":
        return "*"
    return [o.strip() for o in allowed.split(",") if o.strip()]


def _init_metrics(app):
    # A private registry per test app avoids duplicate-collector errors
    registry = CollectorRegistry() if app.config.get("TESTING") else None
    metrics = PrometheusMetrics(app, path="/metrics", registry=registry)
    if not app.config.get("TESTING") and not os.environ.get("METRICS_APP_INFO_SET"):
        metrics.info("app_info", "Application info", version="1.0.0")
        os.environ["METRICS_APP_INFO_SET"] = "1"
    return metrics


def _register_request_hooks(app):
    propagator = TraceContextTextMapPropagator()

    @app.before_request
    def _set_request_id():
        # g outlives the request when an app context was already pushed
        g.pop("user", None)
        g.pop("role", None)
        g.request_id = (request.headers.get("X-Request-ID") or uuid.uuid4().hex)[:100]
        app.logger.info(f"request start {request.method} {request.path}")

    @app.after_request
    def _decorate_response(resp):
        rid = g.get("request_id")
        if rid:
            resp.headers["X-Request-ID"] = rid

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        exposed = [h.strip() for h in resp.headers.get("Access-Control-Expose-Headers", "").split(",") if h.strip()]
        exposed += [h for h in EXPOSED_HEADERS if h not in exposed]
        resp.headers["Access-Control-Expose-Headers"] = ",".join(exposed)

        carrier = {}
        propagator.inject(carrier)
        if carrier.get("traceparent"):
            resp.headers["traceparent"] = carrier["traceparent"]
        return resp


def create_app(config_object=None, rate_limiter=None):
    """Application factory.

    ``rate_limiter`` replaces the default per-client API limiter; anything
    with an ``allow(key) -> bool`` method works.
    """
    load_dotenv()
    app = Flask(__name__)
    app.config.from_object(config_object if config_object is not None else get_config_class())
    hops = app.config.get("TRUSTED_PROXY_HOPS", 0)
    if hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)

    configure_logging(app)
    register_cli(app)

    extensions.limiter.init_app(app)
    app.limiter = extensions.limiter
    init_rate_limiting(app, rate_limiter)

    Migrate(app, db, compare_type=True, render_as_batch=True)
    Swagger(app, config=SWAGGER_CONFIG, template=SWAGGER_TEMPLATE)
    _init_metrics(app)
    CORS(app, origins=_cors_origins(app), supports_credentials=True, expose_headers=list(EXPOSED_HEADERS))

    app.register_blueprint(errors_bp)
    if app.config.get("TESTING"):
        from app.test_support import test_support_bp
        app.register_blueprint(test_support_bp)

    register_api_v1(app)
    _register_request_hooks(app)

    db.init_app(app)
    app_metrics.init_app(app)
    init_tracing(app)
    if app.config.get("DEBUG") or app.config.get("TESTING"):
        with app.app_context():
            db.create_all()
            app.logger.info("Tables created")

    @app.route("/health")
    def health():
        return {"status": "ok"}, 200

    return app
