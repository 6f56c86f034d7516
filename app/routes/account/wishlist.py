from flask import request
from models import db
from models.cart import WishlistItem
from models.product import Product
from app.schemas.cart import WishlistAddRequest
from app.services.errors import NotFound, AlreadyInWishlist
from app.utils import ok, error, transactional, validate_schema, internal_error_response
from . import account_bp


@account_bp.route("/wishlist", methods=["GET"])
def view_wishlist():
    items = (
        WishlistItem.query.filter_by(user_id=request.user.id)
        .order_by(WishlistItem.created_at.desc(), WishlistItem.id.desc())
        .all()
    )
    return ok([w.to_dict() for w in items], count=len(items))


@account_bp.route("/wishlist", methods=["POST"])
@validate_schema(WishlistAddRequest)
def add_to_wishlist():
    product_id = request.validated_data.product_id
    if not db.session.get(Product, product_id):
        raise NotFound("Product not found")
    if WishlistItem.query.filter_by(user_id=request.user.id, product_id=product_id).first():
        raise AlreadyInWishlist()
    item = WishlistItem(user_id=request.user.id, product_id=product_id)
    try:
        with transactional("Failed to add to wishlist"):
            db.session.add(item)
    except Exception:
        return internal_error_response("Failed to add item to wishlist")
    return ok(item.to_dict(), message="Item added to wishlist")


def _delete(item):
    db.session.delete(item)
    try:
        with transactional("Failed to remove wishlist item"):
            pass
    except Exception:
        return internal_error_response("Failed to remove item from wishlist")
    return ok(message="Item removed from wishlist")


@account_bp.route("/wishlist", methods=["DELETE"])
def remove_from_wishlist_by_product():
    product_id = request.args.get("product_id", type=int)
    if not product_id:
        return error("Product ID is required", status=400)
    item = WishlistItem.query.filter_by(user_id=request.user.id, product_id=product_id).first()
    if not item:
        raise NotFound("Item not in wishlist")
    return _delete(item)


@account_bp.route("/wishlist/<int:item_id>", methods=["DELETE"])
def remove_wishlist_item(item_id):
    item = WishlistItem.query.filter_by(id=item_id, user_id=request.user.id).first()
    if not item:
        raise NotFound("Item not in wishlist")
    return _delete(item)
