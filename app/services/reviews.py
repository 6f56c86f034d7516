from markupsafe import escape
from sqlalchemy import func
from models import db
from models.order import Order, OrderItem
from models.product import Product, Review
from app.services.errors import NotFound
from app.utils.db import transactional


def reviews_for_product(product_id):
    reviews = (
        Review.query.filter_by(product_id=product_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    average = sum(r.rating for r in reviews) / len(reviews) if reviews else 0
    return reviews, round(average, 1)


def _has_delivered_order(user_id, product_id) -> bool:
    row = (
        db.session.query(OrderItem.id)
        .join(Order, Order.id == OrderItem.order_id)
        .filter(
            Order.user_id == user_id,
            Order.status == "DELIVERED",
            OrderItem.product_id == product_id,
        )
        .first()
    )
    return row is not None


def submit_review(user, product_id, rating, comment=None) -> Review:
    """Create or replace the user's review and refresh the product's rating."""
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFound("Product not found")
    if comment:
        comment = str(escape(comment))

    with transactional("Failed to submit review"):
        review = Review.query.filter_by(user_id=user.id, product_id=product_id).first()
        if review:
            review.rating = rating
            review.comment = comment
        else:
            review = Review(
                user_id=user.id,
                product_id=product_id,
                rating=rating,
                comment=comment,
                verified=_has_delivered_order(user.id, product_id),
            )
            db.session.add(review)
        db.session.flush()

        avg, count = db.session.query(
            func.avg(Review.rating), func.count(Review.id)
        ).filter(Review.product_id == product_id).one()
        product.rating = round(float(avg or 0), 1)
        product.review_count = count
    return review
