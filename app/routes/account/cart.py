from flask import request
from models import db
from models.cart import CartItem
from models.product import Product
from app.schemas.cart import AddToCartRequest, UpdateCartItemRequest
from app.services.errors import NotFound, OutOfStock
from app.utils import ok, transactional, validate_schema, internal_error_response
from . import account_bp


def _owned_cart_item(item_id):
    cart_item = CartItem.query.filter_by(id=item_id, user_id=request.user.id).first()
    if not cart_item:
        raise NotFound("Cart item not found")
    return cart_item


@account_bp.route("/cart", methods=["GET"])
def view_cart():
    items = (
        CartItem.query.filter_by(user_id=request.user.id)
        .order_by(CartItem.created_at.desc(), CartItem.id.desc())
        .all()
    )
    total = sum(ci.product.price * ci.quantity for ci in items)
    item_count = sum(ci.quantity for ci in items)
    return ok({
        "items": [ci.to_dict() for ci in items],
        "total": total,
        "item_count": item_count,
    })


@account_bp.route("/cart", methods=["POST"])
@validate_schema(AddToCartRequest)
def add_to_cart():
    data: AddToCartRequest = request.validated_data
    product = db.session.get(Product, data.product_id)
    if not product:
        raise NotFound("Product not found")
    if not product.in_stock:
        raise OutOfStock()

    cart_item = CartItem.query.filter_by(user_id=request.user.id, product_id=product.id).first()
    try:
        with transactional("Failed to add to cart"):
            if cart_item:
                cart_item.quantity = cart_item.quantity + data.quantity
            else:
                cart_item = CartItem(user_id=request.user.id, product_id=product.id, quantity=data.quantity)
                db.session.add(cart_item)
    except Exception:
        return internal_error_response("Failed to add item to cart")
    return ok(cart_item.to_dict(), message="Item added to cart")


@account_bp.route("/cart/<int:item_id>", methods=["PUT"])
@validate_schema(UpdateCartItemRequest)
def update_cart_item(item_id):
    cart_item = _owned_cart_item(item_id)
    cart_item.quantity = request.validated_data.quantity
    try:
        with transactional("Failed to update cart quantity"):
            pass
    except Exception:
        return internal_error_response("Failed to update cart item")
    return ok(cart_item.to_dict(), message="Cart item updated")


@account_bp.route("/cart/<int:item_id>", methods=["DELETE"])
def remove_cart_item(item_id):
    cart_item = _owned_cart_item(item_id)
    db.session.delete(cart_item)
    try:
        with transactional("Failed to remove cart item"):
            pass
    except Exception:
        return internal_error_response("Failed to remove item from cart")
    return ok(message="Item removed from cart")


@account_bp.route("/cart", methods=["DELETE"])
def clear_cart():
    CartItem.query.filter_by(user_id=request.user.id).delete()
    try:
        with transactional("Failed to clear cart"):
            pass
    except Exception:
        return internal_error_response("Failed to clear cart")
    return ok(message="Cart cleared")
