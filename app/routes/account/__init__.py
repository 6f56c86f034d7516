from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required

account_bp = Blueprint("account", __name__, url_prefix=API_PREFIX)


@account_bp.before_request
@auth_required
def _enforce_authenticated():
    """Every account route needs a signed-in user."""
    return None

from . import profile  # noqa: E402,F401
from . import cart  # noqa: E402,F401
from . import wishlist  # noqa: E402,F401
from . import addresses  # noqa: E402,F401
from . import orders  # noqa: E402,F401
from . import reviews  # noqa: E402,F401
