import logging
from flask import Blueprint, request
from werkzeug.exceptions import HTTPException
from app.services.errors import CommerceError
from app.utils.responses import error, code_for_status

errors_bp = Blueprint("errors_bp", __name__)
logger = logging.getLogger(__name__)


@errors_bp.app_errorhandler(CommerceError)
def handle_commerce_error(e):
    return error(e.message, status=e.status, code=e.code)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=code_for_status(e.code))


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    # Details stay in the log; the client only sees a generic message
    logger.exception("Unhandled exception on %s %s", request.method, request.path)
    return error("An unexpected error occurred. Please try again later.", status=500)
