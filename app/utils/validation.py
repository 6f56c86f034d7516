from functools import wraps
from flask import request
from pydantic import ValidationError
from .responses import validation_error_response


def _raw_payload(source):
    if source == "args":
        return request.args.to_dict(flat=True)
    body = request.get_json(silent=True)
    return body if body is not None else {}


def validate_schema(schema, source="json"):
    """Validate the JSON body (or query string with ``source="args"``).

    The parsed model lands on ``request.validated_data``; the first pydantic
    error becomes a 400 ``VALIDATION_ERROR``.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                request.validated_data = schema.model_validate(_raw_payload(source))
            except ValidationError as ve:
                return validation_error_response(ve.errors())
            return fn(*args, **kwargs)
        return wrapper

    return decorator
