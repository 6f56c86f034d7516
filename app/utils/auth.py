from functools import wraps
from flask import request, g, current_app
from .responses import error
from app.auth.permissions import role_has_scope
from app.logging import log_security_event
from .jwt import decode_token, TokenError
from models import db
from models.user import User


def _token_from_request():
    auth = request.headers.get("Authorization", "")
    if auth:
        return auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth
    return request.cookies.get(current_app.config["AUTH_COOKIE_NAME"])


def current_user():
    """Return the authenticated user for this request, or None."""
    if "user" in g:
        return g.user
    token = _token_from_request()
    user = None
    if token:
        try:
            payload = decode_token(token, expected_type="access")
            user = db.session.get(User, int(payload["sub"]))
        except (TokenError, KeyError, ValueError):
            user = None
    g.user = user
    return user


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        token = _token_from_request()
        if not token:
            return error("Not authenticated", status=401, code="NOT_AUTHENTICATED")
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401, code="NOT_AUTHENTICATED")

        user = db.session.get(User, int(payload["sub"]))
        if user is None:
            return error("Not authenticated", status=401, code="NOT_AUTHENTICATED")
        g.user = user
        g.role = user.role
        request.user = user
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def role_required(required):
    """Authorize based on user role or scoped action."""
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            role = getattr(g, "role", None)
            if not role:
                return error("Role missing", status=403, code="FORBIDDEN")
            for entry in required_set:
                if ":" in entry:
                    r, action = entry.split(":", 1)
                    if role == r and role_has_scope(role, action):
                        break
                else:
                    if role == entry:
                        break
            else:
                log_security_event("forbidden", path=request.path, role=role)
                if "admin" in required_set:
                    return error("Admin access required", status=403, code="NOT_ADMIN")
                return error("Forbidden", status=403, code="FORBIDDEN")
            return fn(*args, **kwargs)

        return wrapper

    return decorator
