import logging
from flask import request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.schemas.order import PlaceOrderRequest
from app.services.errors import CommerceError
from app.services.orders import place_order, list_orders, get_order
from app.utils import ok, error, role_required, validate_schema
from . import account_bp


@account_bp.route("/orders", methods=["GET"])
def get_orders():
    orders = list_orders(request.user)
    return ok([o.to_dict() for o in orders], count=len(orders))


@account_bp.route("/orders/<int:order_id>", methods=["GET"])
def get_order_detail(order_id):
    return ok(get_order(request.user, order_id).to_dict())


@account_bp.route("/orders", methods=["POST"])
@account_bp.route("/checkout", methods=["POST"], endpoint="checkout")
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@role_required(["customer:place_order", "admin"])
@validate_schema(PlaceOrderRequest)
def create_order():
    data: PlaceOrderRequest = request.validated_data
    try:
        order = place_order(
            request.user,
            data.address_id,
            data.payment_method,
            payment_id=data.payment_id,
            notes=data.notes,
        )
    except CommerceError as e:
        return error(e.message, status=e.status, code=e.code)
    except Exception:
        logging.exception("Order placement failed for user %s", request.user.id)
        return error("Failed to place order", status=500, code="INTERNAL_ERROR")
    return ok(order.to_dict(), message="Order placed successfully", status=201)
