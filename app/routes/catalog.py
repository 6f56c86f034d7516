from flask import Blueprint, request
from sqlalchemy import or_
from models import db
from models.cart import WishlistItem
from models.product import Product, Review
from app.version import API_PREFIX
from app.schemas.catalog import ProductQuery
from app.services.errors import NotFound
from app.services.reviews import reviews_for_product
from app.utils import ok, error, current_user, validate_schema

catalog_bp = Blueprint("catalog", __name__, url_prefix=API_PREFIX)

SORT_COLUMNS = {
    "price": Product.price,
    "rating": Product.rating,
    "name": Product.name,
    "created_at": Product.created_at,
}


@catalog_bp.route("/products", methods=["GET"])
@validate_schema(ProductQuery, source="args")
def list_products():
    q: ProductQuery = request.validated_data
    query = Product.query
    if q.category:
        query = query.filter(Product.category == q.category)
    if q.min_price is not None:
        query = query.filter(Product.price >= q.min_price)
    if q.max_price is not None:
        query = query.filter(Product.price <= q.max_price)
    if q.search:
        pattern = f"%{q.search}%"
        query = query.filter(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))

    total = query.count()
    column = SORT_COLUMNS[q.sort_by]
    order = column.asc() if q.sort_order == "asc" else column.desc()
    products = (
        query.order_by(order, Product.id.desc())
        .offset((q.page - 1) * q.limit)
        .limit(q.limit)
        .all()
    )
    resp, status = ok(
        [p.to_dict() for p in products],
        pagination={
            "page": q.page,
            "limit": q.limit,
            "total": total,
            "total_pages": (total + q.limit - 1) // q.limit,
        },
    )
    resp.headers["Cache-Control"] = "public, s-maxage=60, stale-while-revalidate=120"
    return resp, status


@catalog_bp.route("/products/<int:product_id>", methods=["GET"])
def get_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFound("Product not found")
    recent = (
        Review.query.filter_by(product_id=product_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(10)
        .all()
    )
    data = product.to_dict()
    data["reviews"] = [r.to_dict() for r in recent]
    return ok(data)


@catalog_bp.route("/reviews", methods=["GET"])
def list_reviews():
    product_id = request.args.get("product_id", type=int)
    if not product_id:
        return error("Product ID is required", status=400)
    reviews, average = reviews_for_product(product_id)
    return ok({
        "reviews": [r.to_dict() for r in reviews],
        "average_rating": average,
        "count": len(reviews),
    })


@catalog_bp.route("/wishlist/check", methods=["GET"])
def check_wishlist():
    user = current_user()
    if user is None:
        return ok({"is_in_wishlist": False})
    product_id = request.args.get("product_id", type=int)
    if not product_id:
        return error("Product ID is required", status=400)
    exists = WishlistItem.query.filter_by(user_id=user.id, product_id=product_id).first() is not None
    return ok({"is_in_wishlist": exists})
