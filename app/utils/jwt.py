"""Signed, time-limited session tokens (HS256).

Access tokens carry the user's email and role so the API can authorize
without a lookup for logging; the user row is still loaded per request.
"""
import datetime as dt
from typing import Dict
import jwt
from flask import current_app

ALGORITHM = "HS256"


class TokenError(Exception):
    pass


def _sign(claims: Dict, lifetime: dt.timedelta) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    payload = dict(claims, iat=now, exp=now + lifetime)
    return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm=ALGORITHM)


def create_access_token(user_id, email: str, role: str) -> str:
    minutes = current_app.config["ACCESS_TOKEN_LIFETIME_MIN"]
    claims = {"sub": str(user_id), "email": email, "role": role, "type": "access"}
    return _sign(claims, dt.timedelta(minutes=minutes))


def create_refresh_token(user_id) -> str:
    days = current_app.config["REFRESH_TOKEN_LIFETIME_DAYS"]
    return _sign({"sub": str(user_id), "type": "refresh"}, dt.timedelta(days=days))


def decode_token(token: str, expected_type: str = "access") -> Dict:
    """Verify signature and expiry; raise ``TokenError`` on any problem."""
    try:
        claims = jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("token expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("invalid token") from e

    if claims.get("type") != expected_type:
        raise TokenError(f"expected {expected_type} token")
    return claims
