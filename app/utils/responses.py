from flask import jsonify

STATUS_CODES = {
    400: "VALIDATION_ERROR",
    401: "NOT_AUTHENTICATED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    429: "RATE_LIMITED",
    500: "INTERNAL_ERROR",
}


def code_for_status(status):
    return STATUS_CODES.get(status, "ERROR")


def ok(data=None, message=None, status=200, **extra):
    payload = {"success": True}
    if data is not None:
        payload["data"] = data
    if message:
        payload["message"] = message
    payload.update(extra)
    return jsonify(payload), status


def error(message, status=400, code=None):
    return jsonify({
        "success": False,
        "error": message,
        "code": code or code_for_status(status),
    }), status


def validation_error_response(errors):
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "Invalid request")
    return error(f"{field}: {msg}" if field else msg, status=400, code="VALIDATION_ERROR")


def internal_error_response(message="An unexpected error occurred, please try again later"):
    return error(message, status=500, code="INTERNAL_ERROR")
