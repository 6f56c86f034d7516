from flask import request
from app.schemas.auth import UpdateProfileRequest
from app.services.addresses import list_addresses
from app.utils import ok, transactional, validate_schema, internal_error_response
from . import account_bp


@account_bp.route("/users/me", methods=["GET"])
def get_profile():
    user = request.user
    data = user.to_dict()
    data["created_at"] = user.created_at.isoformat() if user.created_at else None
    data["addresses"] = [a.to_dict() for a in list_addresses(user)]
    return ok(data)


@account_bp.route("/users/me", methods=["PUT"])
@validate_schema(UpdateProfileRequest)
def update_profile():
    user = request.user
    changes = request.validated_data.model_dump(exclude_unset=True)
    try:
        with transactional("Failed to update profile"):
            for key, value in changes.items():
                setattr(user, key, value)
    except Exception:
        return internal_error_response("Failed to update profile")
    return ok(user.to_dict(), message="Profile updated successfully")
