import logging
from sqlalchemy import update
from models import db
from models.address import Address
from models.cart import CartItem
from models.order import Order, OrderItem
from models.product import Product
from app.metrics import ORDERS_PLACED, STOCK_REJECTIONS
from app.services.errors import (
    NotAuthenticated,
    EmptyCart,
    InsufficientStock,
    AddressNotFound,
    NotFound,
)
from app.services.pricing import compute_totals
from app.utils.db import transactional

logger = logging.getLogger(__name__)


def _load_cart(user_id):
    return (
        CartItem.query.filter_by(user_id=user_id)
        .order_by(CartItem.id.asc())
        .all()
    )


def _check_stock(cart_items):
    for ci in cart_items:
        product = ci.product
        if not product.in_stock or product.stock_quantity < ci.quantity:
            STOCK_REJECTIONS.inc()
            raise InsufficientStock(product.name)


def _decrement_stock(product_id, quantity):
    # Lock the row, decrement relative to the stored value, then derive
    # in_stock from what the database now holds.
    Product.query.filter_by(id=product_id).with_for_update().one()
    db.session.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(stock_quantity=Product.stock_quantity - quantity)
    )
    remaining = db.session.execute(
        db.select(Product.stock_quantity).where(Product.id == product_id)
    ).scalar_one()
    db.session.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(in_stock=remaining > 0)
    )


def _clear_cart(user_id):
    CartItem.query.filter_by(user_id=user_id).delete()


def place_order(user, address_id, payment_method, payment_id=None, notes=None) -> Order:
    """Turn the user's cart into an order.

    Validation runs first and touches nothing. The order rows, the stock
    decrement and the cart clear then commit together or not at all.
    """
    if user is None:
        raise NotAuthenticated()

    cart_items = _load_cart(user.id)
    if not cart_items:
        raise EmptyCart()

    _check_stock(cart_items)

    totals = compute_totals((ci.product.price, ci.quantity) for ci in cart_items)

    address = Address.query.filter_by(id=address_id, user_id=user.id).first()
    if not address:
        raise AddressNotFound()

    with transactional("Order placement failed"):
        order = Order(
            user_id=user.id,
            address_id=address.id,
            payment_method=payment_method,
            payment_id=payment_id,
            notes=notes,
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            tax=totals.tax,
            total=totals.total,
            status="PENDING",
            ship_full_name=address.full_name,
            ship_phone=address.phone,
            ship_address_line1=address.address_line1,
            ship_address_line2=address.address_line2,
            ship_city=address.city,
            ship_state=address.state,
            ship_postal_code=address.postal_code,
            ship_country=address.country,
        )
        for ci in cart_items:
            order.items.append(
                OrderItem(
                    product_id=ci.product_id,
                    product_name=ci.product.name,
                    quantity=ci.quantity,
                    price=ci.product.price,
                )
            )
        db.session.add(order)
        db.session.flush()

        for ci in cart_items:
            _decrement_stock(ci.product_id, ci.quantity)

        _clear_cart(user.id)

    ORDERS_PLACED.inc()
    logger.info("order %s placed by user %s total=%s", order.id, user.id, totals.total)
    return order


def list_orders(user):
    return (
        Order.query.filter_by(user_id=user.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_order(user, order_id) -> Order:
    order = Order.query.filter_by(id=order_id, user_id=user.id).first()
    if not order:
        raise NotFound("Order not found")
    return order


__all__ = [
    "place_order",
    "list_orders",
    "get_order",
]
