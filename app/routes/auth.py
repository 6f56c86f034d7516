from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from models import db
from models.user import User
from app.version import API_PREFIX
from app.logging import log_security_event
from app.schemas.auth import RegisterRequest, LoginRequest, RefreshRequest
from app.services.errors import EmailTaken
from app.utils import (
    ok,
    error,
    auth_required,
    transactional,
    validate_schema,
    internal_error_response,
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)

auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")


def _session_payload(user):
    return {
        "user": user.to_dict(),
        "access": create_access_token(user.id, user.email, user.role),
        "refresh": create_refresh_token(user.id),
    }


def _with_auth_cookie(response, token):
    cfg = current_app.config
    response.set_cookie(
        cfg["AUTH_COOKIE_NAME"],
        token,
        max_age=cfg["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
        httponly=True,
        samesite="Strict",
        secure=cfg.get("AUTH_COOKIE_SECURE", False),
        path="/",
    )
    return response


@auth_bp.route("/register", methods=["POST"])
@validate_schema(RegisterRequest)
def register():
    data: RegisterRequest = request.validated_data
    email = data.email.lower()
    if User.query.filter_by(email=email).first():
        raise EmailTaken()
    user = User(email=email, name=data.name, phone=data.phone, role="customer")
    user.set_password(data.password)
    try:
        with transactional("Failed to register user"):
            db.session.add(user)
    except Exception:
        return internal_error_response("Failed to register")
    payload = _session_payload(user)
    resp, status = ok(payload, message="Registration successful", status=201)
    return _with_auth_cookie(resp, payload["access"]), status


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many login attempts from this IP",
)
@validate_schema(LoginRequest)
def login():
    data: LoginRequest = request.validated_data
    ip = get_remote_address()
    user = User.query.filter_by(email=data.email.lower()).first()
    if not user or not user.check_password(data.password):
        log_security_event("failed login", email=data.email, ip=ip)
        return error("Invalid email or password", status=401, code="INVALID_CREDENTIALS")
    current_app.logger.info({"message": "user logged in", "user": user.id, "ip": ip})
    payload = _session_payload(user)
    resp, status = ok(payload, message="Login successful")
    return _with_auth_cookie(resp, payload["access"]), status


@auth_bp.route("/logout", methods=["POST"])
def logout():
    resp, status = ok(message="Logged out")
    resp.delete_cookie(current_app.config["AUTH_COOKIE_NAME"], path="/")
    return resp, status


@auth_bp.route("/me", methods=["GET"])
@auth_required
def me():
    return ok(request.user.to_dict())


@auth_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refresh_token, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401, code="NOT_AUTHENTICATED")

    user = db.session.get(User, int(payload["sub"]))
    if not user:
        return error("Not authenticated", status=401, code="NOT_AUTHENTICATED")
    tokens = _session_payload(user)
    resp, status = ok({
        "access": tokens["access"],
        "refresh": tokens["refresh"],
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    })
    return _with_auth_cookie(resp, tokens["access"]), status
