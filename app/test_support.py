from flask import Blueprint, request
from app.utils.responses import ok
import logging
from app.utils.jwt import create_access_token, create_refresh_token
from models import db
from models.user import User


test_support_bp = Blueprint("test_support_bp", __name__)


@test_support_bp.route("/__ok", methods=["GET"])
def __ok():
    return ok({"ping": "pong"})


@test_support_bp.route("/__boom", methods=["GET"])
def __boom():
    raise RuntimeError("boom")


@test_support_bp.route("/__log", methods=["GET"])
def __log():
    logging.getLogger(__name__).info("test log line")
    return ok({"logged": True})


@test_support_bp.route("/__auth/login_stub", methods=["POST"])
def __login_stub():
    """Create (or reuse) a user by email and hand back tokens without a password."""
    j = request.get_json() or {}
    email = j.get("email", "test@example.com").lower()
    role = j.get("role", "customer")
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User(email=email, name=j.get("name", "Test User"), role=role)
        user.set_password(j.get("password", "password123"))
        db.session.add(user)
        db.session.commit()
    return ok({
        "user_id": user.id,
        "access": create_access_token(user.id, user.email, user.role),
        "refresh": create_refresh_token(user.id),
    })
